"""
Error taxonomy for locked_bitmap.

Every error derives from LockedBitmapError and from the builtin exception
that best describes it, so callers can catch either.

Example:
    >>> from locked_bitmap.errors import IndexOutOfRangeError
    >>>
    >>> try:
    ...     buffer.set_pixel(buffer.width, 0, WHITE)
    ... except IndexOutOfRangeError:
    ...     print("outside the canvas")
"""

from __future__ import annotations


class LockedBitmapError(Exception):
    """Base class for all locked_bitmap errors."""


class UnsupportedFormatError(LockedBitmapError, ValueError):
    """Raised when an image's pixel format cannot be addressed.

    Either the bit depth is not 8, 24 or 32, or the depth fits but the layout
    (named by ``mode``, such as a Pillow palette image) does not.
    """

    def __init__(self, bit_depth: int, mode: str | None = None):
        self.bit_depth = bit_depth
        self.mode = mode
        if mode is None:
            message = f"Only 8, 24 and 32 bpp images are supported, got {bit_depth} bpp"
        else:
            message = f"Image mode {mode!r} is not supported; convert it to L, RGB or RGBA"
        super().__init__(message)


class InvalidStateError(LockedBitmapError, RuntimeError):
    """Raised when an operation does not fit the buffer's lock state."""


class DisposedError(InvalidStateError):
    """Raised on any operation against a disposed buffer."""

    def __init__(self, name: str = "PixelBuffer"):
        super().__init__(f"Cannot access a disposed {name}")


class IndexOutOfRangeError(LockedBitmapError, IndexError):
    """Raised when a write addresses a pixel outside the backing storage."""


class InvalidArgumentError(LockedBitmapError, ValueError):
    """Raised for transform parameters that exceed the source or are not positive."""


__all__ = [
    "DisposedError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidStateError",
    "LockedBitmapError",
    "UnsupportedFormatError",
]
