from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .buffer import PixelBuffer
from .core import (
    ResizeQuality,
    convert_to_grayscale,
    crop,
    crop_by_percentage,
    flip,
    invert_colors,
    replace_color,
    resize,
    rotate_by_90_degrees,
    rotate_by_180_degrees,
    rotate_by_270_degrees,
)
from .io import load_buffer, save_buffer
from .parsing import parse_color, parse_margins, parse_size

logger = logging.getLogger(__name__)

ROTATIONS = {
    90: rotate_by_90_degrees,
    180: rotate_by_180_degrees,
    270: rotate_by_270_degrees,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-transforms",
        description="Resize, flip, rotate, crop and recolor an image.",
    )
    parser.add_argument("input", help="Input image")
    parser.add_argument("output", help="Output image (format from extension)")
    parser.add_argument("--crop", type=parse_margins, metavar="T,R,B,L", help="Crop pixels from each edge.")
    parser.add_argument(
        "--crop-percent",
        type=parse_margins,
        metavar="T,R,B,L",
        help="Crop a percentage (0-100) of the height/width from each edge.",
    )
    parser.add_argument(
        "--resize",
        type=parse_size,
        metavar="WxH",
        help="Target size; 0 for one side keeps the aspect ratio.",
    )
    parser.add_argument(
        "--quality",
        choices=[quality.value for quality in ResizeQuality],
        default=ResizeQuality.FAST.value,
        help="Resize algorithm: nearest neighbour (fast) or progressive bilinear (high).",
    )
    parser.add_argument("--flip-horizontal", action="store_true", help="Mirror left to right.")
    parser.add_argument("--flip-vertical", action="store_true", help="Mirror top to bottom.")
    parser.add_argument("--rotate", type=int, choices=sorted(ROTATIONS), help="Clockwise rotation in degrees.")
    parser.add_argument(
        "--replace-color",
        nargs=2,
        type=parse_color,
        metavar=("FROM", "TO"),
        help="Replace FROM with TO (hex colors), keeping each pixel's alpha.",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=0,
        help="Per-channel tolerance for --replace-color (0-255, default exact match).",
    )
    parser.add_argument("--invert", action="store_true", help="Invert RGB channels.")
    parser.add_argument("--grayscale", action="store_true", help="Convert to grayscale.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each pipeline stage.")
    return parser


def apply_pipeline(buffer: PixelBuffer, args: argparse.Namespace) -> PixelBuffer:
    """Run the requested operations in a fixed order and return the result."""
    if args.crop:
        logger.debug("crop %s", args.crop)
        buffer = crop(buffer, *args.crop)
    if args.crop_percent:
        logger.debug("crop by percentage %s", args.crop_percent)
        buffer = crop_by_percentage(buffer, *args.crop_percent)
    if args.resize:
        width, height = args.resize
        logger.debug("resize to %dx%d (%s)", width, height, args.quality)
        buffer = resize(buffer, width, height, ResizeQuality(args.quality))
    if args.flip_horizontal or args.flip_vertical:
        logger.debug("flip horizontal=%s vertical=%s", args.flip_horizontal, args.flip_vertical)
        buffer = flip(buffer, args.flip_horizontal, args.flip_vertical)
    if args.rotate:
        logger.debug("rotate %d", args.rotate)
        buffer = ROTATIONS[args.rotate](buffer)
    if args.replace_color:
        original, replacement = args.replace_color
        logger.debug("replace %s with %s (threshold %d)", original.to_hex(), replacement.to_hex(), args.threshold)
        buffer = replace_color(buffer, original, replacement, args.threshold)
    if args.invert:
        logger.debug("invert colors")
        buffer = invert_colors(buffer)
    if args.grayscale:
        logger.debug("convert to grayscale")
        buffer = convert_to_grayscale(buffer)
    return buffer


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    try:
        buffer = load_buffer(args.input)
        result = apply_pipeline(buffer, args)
        save_buffer(result, args.output)
    except (OSError, ValueError) as exc:
        logger.debug("pipeline failed", exc_info=True)
        print(f"pixel-transforms: error: {exc}", file=sys.stderr)
        return 1

    logger.info("wrote %s (%dx%d)", args.output, result.width, result.height)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
