import pytest

from pixel_transforms.buffer import Color
from pixel_transforms.parsing import parse_color, parse_margins, parse_size


def test_parse_size():
    assert parse_size("800x600") == (800, 600)
    assert parse_size("0X50") == (0, 50)


@pytest.mark.parametrize("text", ["800", "800x", "-1x5", "axb"])
def test_parse_size_invalid(text):
    with pytest.raises(ValueError):
        parse_size(text)


def test_parse_margins():
    assert parse_margins("1,2,3,4") == (1, 2, 3, 4)
    assert parse_margins("10, 0, 10, 0") == (10, 0, 10, 0)


def test_parse_margins_invalid():
    with pytest.raises(ValueError):
        parse_margins("1,2,3")


def test_parse_color():
    assert parse_color("#00ff00") == Color(0, 255, 0)
    with pytest.raises(ValueError):
        parse_color("green")
