from __future__ import annotations

from typing import Optional

from .buffer import Color
from .errors import InvalidArgumentError


def is_color_within_range(first: Optional[Color], second: Optional[Color], threshold: int) -> bool:
    """Return True when every RGB channel differs by at most ``threshold``.

    Alpha is not compared. Absent colors never match.
    """
    if first is None or second is None:
        return False
    if threshold < 0 or threshold > 255:
        raise InvalidArgumentError(f"Threshold: {threshold} - out of range.")
    return (
        abs(first.red - second.red) <= threshold
        and abs(first.green - second.green) <= threshold
        and abs(first.blue - second.blue) <= threshold
    )


def inverted(color: Optional[Color]) -> Optional[Color]:
    if color is None:
        return None
    return Color(255 - color.red, 255 - color.green, 255 - color.blue, color.alpha)


def grayscale(color: Optional[Color]) -> Optional[Color]:
    if color is None:
        return None
    mean = (color.red + color.green + color.blue) // 3
    return Color(mean, mean, mean, color.alpha)


def semi_transparent(color: Optional[Color], alpha: int) -> Optional[Color]:
    if color is None:
        return None
    if alpha < 0 or alpha > 255:
        raise InvalidArgumentError(f"Alpha value: {alpha} - out of range.")
    return Color(color.red, color.green, color.blue, alpha)
