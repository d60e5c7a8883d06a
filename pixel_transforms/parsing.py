from __future__ import annotations

import re
from typing import Tuple

from .buffer import Color

SIZE_RE = re.compile(r"^(\d+)x(\d+)$")
MARGINS_RE = re.compile(r"^(\d+),(\d+),(\d+),(\d+)$")


def parse_size(size: str) -> Tuple[int, int]:
    match = SIZE_RE.match(size.strip().lower())
    if not match:
        raise ValueError(f"Invalid size: {size}")
    width, height = (int(value) for value in match.groups())
    return width, height


def parse_margins(margins: str) -> Tuple[int, int, int, int]:
    match = MARGINS_RE.match(margins.replace(" ", ""))
    if not match:
        raise ValueError(f"Invalid margins (expected top,right,bottom,left): {margins}")
    top, right, bottom, left = (int(value) for value in match.groups())
    return top, right, bottom, left


def parse_color(text: str) -> Color:
    return Color.from_hex(text)
