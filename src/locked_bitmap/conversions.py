"""
Conversions between Pillow images and pixel buffers.

Pillow is the collaborator that reads and writes image files; these helpers
move pixels between its images and PixelBuffers.

Example:
    >>> from locked_bitmap.conversions import load_buffer, save_buffer
    >>>
    >>> buffer = load_buffer("screen.png")
    >>> save_buffer(transforms.grey_scale(buffer), "screen_grey.png")
"""

from __future__ import annotations

from pathlib import Path

import structlog
from PIL import Image

from locked_bitmap.buffer import PixelBuffer
from locked_bitmap.native.pillow import SUPPORTED_MODES, PillowImage, mode_for_bit_depth

logger = structlog.get_logger(__name__)


def pillow_to_buffer(image: Image.Image, *, convert: bool = False) -> PixelBuffer:
    """Lock a Pillow image into a PixelBuffer.

    Args:
        image: Source image; unlocking the buffer writes back into it
        convert: Convert modes other than L, RGB and RGBA to RGBA first,
            which means the buffer writes back into the converted copy

    Raises:
        UnsupportedFormatError: If the mode is unsupported and not converted
    """
    if convert and image.mode not in SUPPORTED_MODES:
        logger.debug("image_converted", mode=image.mode, target="RGBA")
        image = image.convert("RGBA")
    return PixelBuffer(PillowImage(image), locked=True)


def buffer_to_pillow(buffer: PixelBuffer) -> Image.Image:
    """Copy a locked buffer into a new Pillow image of matching depth.

    The buffer is left locked and unchanged.
    """
    image = Image.new(mode_for_bit_depth(buffer.bit_depth), buffer.size)
    with PixelBuffer(PillowImage(image)) as target:
        for x, y, color in buffer.pixels():
            target.set_pixel(x, y, color)
    return image


def load_buffer(path: str | Path) -> PixelBuffer:
    """Open an image file with Pillow and lock it.

    Modes other than L, RGB and RGBA are converted to RGBA.
    """
    with Image.open(path) as opened:
        opened.load()
        image = opened.copy()
    logger.debug("image_loaded", path=str(path), mode=image.mode, size=image.size)
    return pillow_to_buffer(image, convert=True)


def save_buffer(buffer: PixelBuffer, path: str | Path) -> Path:
    """Write a locked buffer to an image file; the format follows the suffix."""
    path = Path(path)
    buffer_to_pillow(buffer).save(path)
    logger.debug("image_saved", path=str(path), size=buffer.size)
    return path


__all__ = [
    "buffer_to_pillow",
    "load_buffer",
    "pillow_to_buffer",
    "save_buffer",
]
