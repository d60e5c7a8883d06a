from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from PIL import Image

from .buffer import Color, PixelBuffer, deep_copy, for_each_pixel
from .colors import grayscale, inverted, is_color_within_range, semi_transparent
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class ResizeQuality(Enum):
    FAST = "fast"
    HIGH_QUALITY = "high"


def resize(
    buffer: PixelBuffer,
    target_width: int,
    target_height: int,
    quality: ResizeQuality = ResizeQuality.FAST,
) -> PixelBuffer:
    """Resize ``buffer`` to ``target_width`` x ``target_height``.

    A zero target dimension is derived from the other one so the original
    proportions are kept. When the target equals the current size the input
    buffer itself is returned.
    """
    if target_width < 0 or target_height < 0:
        raise InvalidArgumentError(
            f"Target width and target height must not be negative: {target_width}, {target_height}"
        )
    if target_width == 0 and target_height == 0:
        raise InvalidArgumentError("Target width and target height cannot both be zero.")

    width, height = buffer.size
    if width == 0 or height == 0:
        raise InvalidArgumentError(f"Cannot resize an empty {width}x{height} buffer.")

    if target_width == 0:
        target_width = int(width * (target_height / height))
    elif target_height == 0:
        target_height = int(height * (target_width / width))
    if target_width == 0 or target_height == 0:
        raise InvalidArgumentError(
            f"Derived target size {target_width}x{target_height} is empty for a {width}x{height} buffer."
        )

    if (target_width, target_height) == (width, height):
        return buffer

    if quality is ResizeQuality.FAST:
        return instant_resize(buffer, target_width, target_height)
    return progressive_resize(buffer, target_width, target_height)


def instant_resize(buffer: PixelBuffer, target_width: int, target_height: int) -> PixelBuffer:
    """Single nearest-neighbour pass. Fast, blocky when enlarging."""
    _check_target(buffer, target_width, target_height)
    working = _working_image(buffer)
    resized = working.resize((target_width, target_height), Image.Resampling.NEAREST)
    return _to_buffer(resized)


def progressive_resize(buffer: PixelBuffer, target_width: int, target_height: int) -> PixelBuffer:
    """Bilinear resize that halves or doubles each axis per step until the target is reached."""
    _check_target(buffer, target_width, target_height)
    working = _working_image(buffer)
    width, height = working.size
    steps = 0

    while True:
        width = _next_step(width, target_width)
        height = _next_step(height, target_height)
        working = working.resize((width, height), Image.Resampling.BILINEAR)
        steps += 1
        logger.debug("progressive resize step %d: %dx%d", steps, width, height)
        if width == target_width and height == target_height:
            break

    return _to_buffer(working)


def _check_target(buffer: PixelBuffer, target_width: int, target_height: int) -> None:
    if target_width <= 0 or target_height <= 0:
        raise InvalidArgumentError(
            f"Target width and target height must be positive: {target_width}, {target_height}"
        )
    if buffer.width == 0 or buffer.height == 0:
        raise InvalidArgumentError(f"Cannot resize an empty {buffer.width}x{buffer.height} buffer.")


def _next_step(current: int, target: int) -> int:
    if current > target:
        current //= 2
        if current < target:
            current = target
    if current < target:
        current *= 2
        if current > target:
            current = target
    return current


def _working_image(buffer: PixelBuffer) -> Image.Image:
    # Opaque sources are resampled without an alpha band.
    image = buffer.to_image()
    if buffer.is_opaque:
        return image.convert("RGB")
    return image


def _to_buffer(image: Image.Image) -> PixelBuffer:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return PixelBuffer(image)


def flip(buffer: PixelBuffer, horizontal: bool, vertical: bool) -> PixelBuffer:
    if not horizontal and not vertical:
        return buffer

    width, height = buffer.size

    def source(x: int, y: int) -> Color:
        src_x = width - 1 - x if horizontal else x
        src_y = height - 1 - y if vertical else y
        return buffer.get_pixel(src_x, src_y)

    return for_each_pixel(PixelBuffer.new(width, height), source)


def flip_horizontally(buffer: PixelBuffer) -> PixelBuffer:
    return flip(buffer, True, False)


def flip_vertically(buffer: PixelBuffer) -> PixelBuffer:
    return flip(buffer, False, True)


def rotate_by_90_degrees(buffer: PixelBuffer) -> PixelBuffer:
    """Rotate clockwise by a quarter turn; width and height are swapped."""
    src_width, src_height = buffer.size
    rotated = PixelBuffer.new(src_height, src_width)
    return for_each_pixel(rotated, lambda x, y: buffer.get_pixel(y, src_height - 1 - x))


def rotate_by_180_degrees(buffer: PixelBuffer) -> PixelBuffer:
    return flip(buffer, True, True)


def rotate_by_270_degrees(buffer: PixelBuffer) -> PixelBuffer:
    src_width, src_height = buffer.size
    rotated = PixelBuffer.new(src_height, src_width)
    return for_each_pixel(rotated, lambda x, y: buffer.get_pixel(src_width - 1 - y, x))


def crop(buffer: PixelBuffer, top: int, right: int, bottom: int, left: int) -> PixelBuffer:
    """Cut ``top``/``right``/``bottom``/``left`` pixels from the matching edges."""
    width, height = buffer.size

    if top < 0 or right < 0 or bottom < 0 or left < 0:
        raise InvalidArgumentError(
            f"Cropping parameters cannot be less than 0: {top}, {right}, {bottom}, {left}"
        )
    if top + bottom > height:
        raise InvalidArgumentError(
            "Cannot crop image by more than its total height - "
            f"invalid top and bottom parameters: {top}, {bottom}"
        )
    if right + left > width:
        raise InvalidArgumentError(
            "Cannot crop image by more than its total width - "
            f"invalid right and left parameters: {right}, {left}"
        )

    cropped = PixelBuffer.new(width - left - right, height - top - bottom)
    return for_each_pixel(cropped, lambda x, y: buffer.get_pixel(x + left, y + top))


def crop_by_percentage(buffer: PixelBuffer, top: int, right: int, bottom: int, left: int) -> PixelBuffer:
    """Like :func:`crop`, with each margin given as a percentage (0-100) of its dimension."""
    for value in (top, right, bottom, left):
        if value < 0 or value > 100:
            raise InvalidArgumentError(
                f"Cropping parameters must be between 0 and 100: {top}, {right}, {bottom}, {left}"
            )
    if top + bottom > 100:
        raise InvalidArgumentError(
            f"Cannot crop image by more than 100% - invalid top and bottom parameters: {top}, {bottom}"
        )
    if right + left > 100:
        raise InvalidArgumentError(
            f"Cannot crop image by more than 100% - invalid right and left parameters: {right}, {left}"
        )

    width, height = buffer.size
    margins = (
        _percent_of(height, top),
        _percent_of(width, right),
        _percent_of(height, bottom),
        _percent_of(width, left),
    )
    logger.debug("crop by percentage %s -> pixels %s", (top, right, bottom, left), margins)
    return crop(buffer, *margins)


def _percent_of(dimension: int, percent: int) -> int:
    # round half away from zero; both operands are non-negative
    return (dimension * percent * 2 + 100) // 200


def invert_colors(buffer: PixelBuffer) -> PixelBuffer:
    working = deep_copy(buffer)
    return for_each_pixel(working, lambda x, y: inverted(working.get_pixel(x, y)))


def convert_to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    working = deep_copy(buffer)
    return for_each_pixel(working, lambda x, y: grayscale(working.get_pixel(x, y)))


def replace_color(
    buffer: PixelBuffer,
    original: Optional[Color],
    replacement: Color,
    threshold: int = 0,
) -> PixelBuffer:
    """Swap pixels close to ``original`` for ``replacement``.

    A pixel matches when each RGB channel is within ``threshold`` of
    ``original``. Matched pixels keep their own alpha.
    """
    if threshold < 0 or threshold > 255:
        raise InvalidArgumentError(f"Threshold: {threshold} - out of range.")
    if replacement is None:
        raise InvalidArgumentError("Replacement color is required.")
    replacement = Color(*replacement)

    working = deep_copy(buffer)

    def repaint(x: int, y: int) -> Color:
        pixel = working.get_pixel(x, y)
        if is_color_within_range(pixel, original, threshold):
            return semi_transparent(replacement, pixel.alpha)
        return pixel

    return for_each_pixel(working, repaint)

