from __future__ import annotations

from typing import Callable, List, NamedTuple, Sequence, Tuple

from PIL import Image

from .errors import InvalidArgumentError


class _Channels(NamedTuple):
    red: int
    green: int
    blue: int
    alpha: int = 255


class Color(_Channels):
    __slots__ = ()

    def __new__(cls, red: int, green: int, blue: int, alpha: int = 255) -> "Color":
        for name, value in zip(_Channels._fields, (red, green, blue, alpha)):
            if not 0 <= value <= 255:
                raise InvalidArgumentError(f"Color {name} value: {value} - out of range.")
        return super().__new__(cls, red, green, blue, alpha)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Parse ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA`` (the ``#`` is optional)."""
        value = text.strip()
        if value.startswith("#"):
            value = value[1:]
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        if len(value) not in (6, 8):
            raise InvalidArgumentError(f"Invalid hex color: {text!r}")
        try:
            channels = [int(value[idx : idx + 2], 16) for idx in range(0, len(value), 2)]
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid hex color: {text!r}") from exc
        return cls(*channels)

    def to_hex(self) -> str:
        if self.alpha == 255:
            return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}{self.alpha:02x}"


PixelFunction = Callable[[int, int], Color]


class PixelBuffer:
    """Owned width x height grid of 8-bit RGBA pixels.

    Pixels live in a Pillow ``RGBA`` image, stored row-major. Transforms never
    hand out the wrapped image; ``to_image`` returns a copy.
    """

    def __init__(self, image: Image.Image) -> None:
        if image.mode != "RGBA":
            raise InvalidArgumentError(f"PixelBuffer requires an RGBA image, got mode {image.mode!r}")
        self._image = image
        self._access = image.load()

    @classmethod
    def new(cls, width: int, height: int, fill: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> "PixelBuffer":
        if width < 0 or height < 0:
            raise InvalidArgumentError(f"Buffer dimensions must not be negative: {width}x{height}")
        return cls(Image.new("RGBA", (width, height), tuple(fill)))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        if image.mode == "RGBA":
            return cls(image.copy())
        return cls(image.convert("RGBA"))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, ...]]]) -> "PixelBuffer":
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise InvalidArgumentError("All rows must have the same length.")
        buffer = cls.new(width, height)
        return for_each_pixel(buffer, lambda x, y: Color(*rows[y][x]))

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def is_opaque(self) -> bool:
        if self.width == 0 or self.height == 0:
            return True
        return self._image.getchannel("A").getextrema() == (255, 255)

    def get_pixel(self, x: int, y: int) -> Color:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        return Color(*self._access[x, y])

    def pixels(self) -> List[Color]:
        return [self.get_pixel(x, y) for y in range(self.height) for x in range(self.width)]

    def to_image(self) -> Image.Image:
        return self._image.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and self._image.tobytes() == other._image.tobytes()

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}, opaque={self.is_opaque})"


def deep_copy(buffer: PixelBuffer) -> PixelBuffer:
    return PixelBuffer(buffer._image.copy())


def for_each_pixel(buffer: PixelBuffer, func: PixelFunction) -> PixelBuffer:
    """Repaint ``buffer`` with ``func(x, y)`` for every coordinate.

    ``buffer`` must be a working buffer owned by the caller; it is written in
    place and returned.
    """
    data = [tuple(func(x, y)) for y in range(buffer.height) for x in range(buffer.width)]
    if data:
        buffer._image.putdata(data)
    return buffer
