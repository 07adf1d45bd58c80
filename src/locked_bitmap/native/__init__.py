"""
Native image implementations for locked_bitmap.

This module provides the images a PixelBuffer can lock, all implementing
the NativeImage protocol:

- MemoryImage: In-memory bitmap with padded, optionally bottom-up rows
- PillowImage: Wraps a PIL.Image.Image in mode L, RGB or RGBA

Example:
    >>> from locked_bitmap.native import MemoryImage, PillowImage
    >>>
    >>> image = MemoryImage.blank(64, 32, bit_depth=24, bottom_up=True)
    >>> image.stride
    -192

To implement a custom image, see `native/protocol.py` for the interface.
"""

from locked_bitmap.native.memory import MemoryImage, aligned_stride
from locked_bitmap.native.pillow import PillowImage, mode_for_bit_depth
from locked_bitmap.native.protocol import (
    NativeImage,
    ScanlineData,
    get_image_class,
    list_images,
    register_image,
)

__all__ = [
    "MemoryImage",
    "NativeImage",
    "PillowImage",
    "ScanlineData",
    "aligned_stride",
    "get_image_class",
    "list_images",
    "mode_for_bit_depth",
    "register_image",
]
