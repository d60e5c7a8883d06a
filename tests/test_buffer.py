import pytest
from PIL import Image

from pixel_transforms.buffer import Color, PixelBuffer, deep_copy, for_each_pixel
from pixel_transforms.errors import InvalidArgumentError


def test_from_image_converts_to_rgba():
    img = Image.new("RGB", (3, 2), (10, 20, 30))
    buffer = PixelBuffer.from_image(img)

    assert buffer.size == (3, 2)
    assert buffer.get_pixel(2, 1) == Color(10, 20, 30, 255)
    assert buffer.is_opaque
    assert buffer.to_image().mode == "RGBA"


def test_from_image_copies_rgba_source():
    img = Image.new("RGBA", (2, 2), (1, 2, 3, 4))
    buffer = PixelBuffer.from_image(img)
    img.putpixel((0, 0), (9, 9, 9, 9))

    assert buffer.get_pixel(0, 0) == Color(1, 2, 3, 4)
    assert not buffer.is_opaque


def test_constructor_requires_rgba():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer(Image.new("L", (2, 2)))


def test_new_rejects_negative_size():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.new(-1, 3)


def test_from_rows_is_row_major():
    buffer = PixelBuffer.from_rows([[(1, 0, 0, 255), (2, 0, 0, 255)], [(3, 0, 0, 255), (4, 0, 0, 255)]])
    assert [pixel.red for pixel in buffer.pixels()] == [1, 2, 3, 4]
    assert buffer.get_pixel(1, 0) == Color(2, 0, 0)


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.from_rows([[(0, 0, 0, 255)], []])


def test_get_pixel_out_of_bounds():
    buffer = PixelBuffer.new(2, 2)
    with pytest.raises(IndexError):
        buffer.get_pixel(2, 0)
    with pytest.raises(IndexError):
        buffer.get_pixel(0, -1)


def test_deep_copy_shares_no_storage():
    buffer = PixelBuffer.new(3, 3, (5, 5, 5, 255))
    copy = deep_copy(buffer)
    assert copy == buffer

    for_each_pixel(copy, lambda x, y: Color(0, 0, 0, 0))

    assert copy != buffer
    assert set(buffer.pixels()) == {Color(5, 5, 5, 255)}


def test_for_each_pixel_visits_every_coordinate():
    buffer = for_each_pixel(PixelBuffer.new(4, 3), lambda x, y: Color(x, y, x * y, 255))
    for y in range(3):
        for x in range(4):
            assert buffer.get_pixel(x, y) == Color(x, y, x * y, 255)


def test_empty_buffer_is_opaque():
    buffer = PixelBuffer.new(0, 4)
    assert buffer.is_opaque
    assert buffer.pixels() == []
    assert for_each_pixel(buffer, lambda x, y: Color(0, 0, 0)) is buffer


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#ff0000", Color(255, 0, 0, 255)),
        ("00ff0080", Color(0, 255, 0, 128)),
        ("#abc", Color(0xAA, 0xBB, 0xCC, 255)),
        (" #0A0B0C ", Color(10, 11, 12, 255)),
    ],
)
def test_color_from_hex(text, expected):
    assert Color.from_hex(text) == expected


@pytest.mark.parametrize("text", ["", "#12345", "zzzzzz", "#1234567"])
def test_color_from_hex_invalid(text):
    with pytest.raises(ValueError):
        Color.from_hex(text)


def test_color_to_hex():
    assert Color(255, 0, 16).to_hex() == "#ff0010"
    assert Color(1, 2, 3, 4).to_hex() == "#01020304"


@pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 0, 999)])
def test_color_rejects_out_of_range_channel(channels):
    with pytest.raises(InvalidArgumentError, match="out of range"):
        Color(*channels)


def test_from_rows_rejects_out_of_range_channel():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.from_rows([[(300, 0, 0, 255)]])
