from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict

from pixel_transforms.buffer import Color, PixelBuffer
from pixel_transforms.core import (
    ResizeQuality,
    convert_to_grayscale,
    crop_by_percentage,
    flip_horizontally,
    flip_vertically,
    invert_colors,
    replace_color,
    resize,
    rotate_by_90_degrees,
    rotate_by_180_degrees,
    rotate_by_270_degrees,
)
from pixel_transforms.io import load_buffer, save_buffer
from pixel_transforms.parsing import parse_color


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render every transform of one image into a directory.")
    parser.add_argument("image", help="Input image.")
    parser.add_argument("--out-dir", default="gallery", help="Output directory.")
    parser.add_argument("--width", type=int, default=256, help="Width of the resized variants.")
    parser.add_argument("--replace", type=parse_color, default=Color(255, 255, 255), help="Color to replace.")
    parser.add_argument("--threshold", type=int, default=32, help="Tolerance for the replaced color.")
    return parser.parse_args()


def _variants(args: argparse.Namespace) -> Dict[str, Callable[[PixelBuffer], PixelBuffer]]:
    return {
        "resize-fast": lambda b: resize(b, args.width, 0, ResizeQuality.FAST),
        "resize-high": lambda b: resize(b, args.width, 0, ResizeQuality.HIGH_QUALITY),
        "flip-horizontal": flip_horizontally,
        "flip-vertical": flip_vertically,
        "rotate-90": rotate_by_90_degrees,
        "rotate-180": rotate_by_180_degrees,
        "rotate-270": rotate_by_270_degrees,
        "crop-center": lambda b: crop_by_percentage(b, 25, 25, 25, 25),
        "inverted": invert_colors,
        "grayscale": convert_to_grayscale,
        "replaced": lambda b: replace_color(b, args.replace, Color(255, 0, 255), args.threshold),
    }


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)-8s %(message)s")

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        source = load_buffer(args.image)
    except (OSError, ValueError) as exc:
        print(f"Cannot load {args.image}: {exc}", file=sys.stderr)
        return 1

    for name, transform in _variants(args).items():
        out_path = out_dir / f"{name}.png"
        save_buffer(transform(source), out_path)
        logging.info("wrote %s", out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
