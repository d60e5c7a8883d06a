from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Formats Pillow cannot write with an alpha band.
_OPAQUE_ONLY_FORMATS = {"JPEG", "BMP"}


def load_buffer(path: PathLike) -> PixelBuffer:
    """Decode an image file into an RGBA :class:`PixelBuffer`.

    Raises:
        FileNotFoundError: if ``path`` does not point to a file.
        ValueError: if Pillow cannot identify the file as an image.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        image = Image.open(path)
    except UnidentifiedImageError as exc:
        raise ValueError(f"Not an image file: {path}") from exc

    with image:
        if getattr(image, "n_frames", 1) > 1:
            logger.debug("%s has %d frames, using the first", path, image.n_frames)
        buffer = PixelBuffer.from_image(image)
    logger.debug("loaded %s as %r", path, buffer)
    return buffer


def save_buffer(buffer: PixelBuffer, path: PathLike, **save_kwargs) -> None:
    path = Path(path)
    image = buffer.to_image()
    image_format = save_kwargs.get("format") or Image.registered_extensions().get(path.suffix.lower())

    if image_format in _OPAQUE_ONLY_FORMATS:
        if not buffer.is_opaque:
            raise ValueError(f"Cannot save a translucent image as {image_format}: {path}")
        image = image.convert("RGB")

    image.save(path, **save_kwargs)
    logger.debug("saved %r to %s", buffer, path)
