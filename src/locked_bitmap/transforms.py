"""
Image transforms for locked_bitmap.

Every transform reads a locked source buffer and returns a brand-new locked
buffer backed by a MemoryImage (32 bpp unless ``bit_depth`` says otherwise).
The source is never modified and stays locked; the caller owns both.

Transforms:
- crop(): Copy a rectangular region
- resize(): Nearest-neighbour resampling, no interpolation
- grey_scale(): R = G = B = luma, alpha preserved
- to_binary_image(): Two-color threshold on luma

Example:
    >>> from locked_bitmap import transforms
    >>>
    >>> thumb = transforms.resize(source, 32, 32)
    >>> grey = transforms.grey_scale(thumb)
    >>> mask = transforms.to_binary_image(grey, 128, WHITE, BLACK)
"""

from __future__ import annotations

import structlog

from locked_bitmap.buffer import PixelBuffer
from locked_bitmap.color import Color, luma
from locked_bitmap.errors import DisposedError, InvalidArgumentError, InvalidStateError

logger = structlog.get_logger(__name__)

DEFAULT_BIT_DEPTH = 32


def _require_locked(source: PixelBuffer) -> None:
    if source.is_disposed:
        raise DisposedError(type(source).__name__)
    if not source.is_locked:
        raise InvalidStateError("The source buffer must be locked.")


def crop(
    source: PixelBuffer,
    x_offset: int,
    y_offset: int,
    width: int,
    height: int,
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> PixelBuffer:
    """Copy the ``width`` x ``height`` region whose top-left is (x_offset, y_offset).

    Raises:
        InvalidArgumentError: If the region leaves the source or is empty
    """
    _require_locked(source)
    if width < 1 or height < 1:
        raise InvalidArgumentError(
            f"The cropped image needs to be at least one pixel wide/high, got {width}x{height}"
        )
    if x_offset < 0 or y_offset < 0:
        raise InvalidArgumentError(f"Crop offsets must not be negative, got ({x_offset}, {y_offset})")
    if x_offset + width > source.width or y_offset + height > source.height:
        raise InvalidArgumentError("The specified sector exceeds the range of the source.")

    result = PixelBuffer.new(width, height, bit_depth)
    for x in range(width):
        for y in range(height):
            result.set_pixel(x, y, source.get_pixel(x + x_offset, y + y_offset))

    logger.debug("transform_applied", transform="crop", source=source.size, result=result.size)
    return result


def resize(
    source: PixelBuffer,
    width: int,
    height: int,
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> PixelBuffer:
    """Nearest-neighbour resample to ``width`` x ``height``.

    Result pixel (x, y) is the source pixel at
    ``(floor(x * source.width / width), floor(y * source.height / height))``,
    computed in integers so exact ratios never round down a pixel.

    Raises:
        InvalidArgumentError: If width or height is below one
    """
    _require_locked(source)
    if width < 1 or height < 1:
        raise InvalidArgumentError("The re-sized image needs to be at least one pixel wide/high")

    result = PixelBuffer.new(width, height, bit_depth)
    for x in range(width):
        sx = x * source.width // width
        for y in range(height):
            result.set_pixel(x, y, source.get_pixel(sx, y * source.height // height))

    logger.debug("transform_applied", transform="resize", source=source.size, result=result.size)
    return result


def grey_scale(source: PixelBuffer, *, bit_depth: int = DEFAULT_BIT_DEPTH) -> PixelBuffer:
    """Replace every pixel by its luma, keeping alpha."""
    _require_locked(source)
    result = PixelBuffer.new(source.width, source.height, bit_depth)

    for x in range(source.width):
        for y in range(source.height):
            color = source.get_pixel(x, y)
            result.set_pixel(x, y, Color.grey(luma(color), color.a))

    logger.debug("transform_applied", transform="grey_scale", source=source.size)
    return result


def to_binary_image(
    source: PixelBuffer,
    threshold: int,
    brighter: Color,
    darker: Color,
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> PixelBuffer:
    """Map pixels brighter than ``threshold`` to ``brighter``, the rest to ``darker``.

    Args:
        source: Locked buffer to binarize
        threshold: Luma a pixel must exceed to count as brighter
        brighter: Color for pixels with luma above the threshold
        darker: Color for every other pixel
    """
    _require_locked(source)
    result = PixelBuffer.new(source.width, source.height, bit_depth)

    for y in range(source.height):
        for x in range(source.width):
            result.set_pixel(x, y, brighter if luma(source.get_pixel(x, y)) > threshold else darker)

    logger.debug(
        "transform_applied",
        transform="to_binary_image",
        source=source.size,
        threshold=threshold,
    )
    return result


__all__ = [
    "DEFAULT_BIT_DEPTH",
    "crop",
    "grey_scale",
    "resize",
    "to_binary_image",
]
