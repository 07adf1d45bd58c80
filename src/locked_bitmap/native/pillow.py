"""
Pillow-backed native image.

PillowImage exposes a PIL.Image.Image in mode L, RGB or RGBA through the
NativeImage protocol. Locking converts Pillow's RGB channel order into
blue-first scanlines padded to 4-byte rows; unlocking writes the pixels back
into the same Pillow image.

Example:
    >>> from PIL import Image
    >>> from locked_bitmap import PixelBuffer
    >>> from locked_bitmap.native import PillowImage
    >>>
    >>> image = Image.open("screenshot.png").convert("RGBA")
    >>> with PixelBuffer(PillowImage(image)) as buffer:
    ...     buffer.set_pixel(0, 0, Color(255, 0, 0))
    >>> image.getpixel((0, 0))
    (255, 0, 0, 255)
"""

from __future__ import annotations

from typing import Any

import numpy as np
from PIL import Image

from locked_bitmap.errors import InvalidStateError, UnsupportedFormatError
from locked_bitmap.native.memory import aligned_stride
from locked_bitmap.native.protocol import ScanlineData, register_image

# Bit depth of common Pillow modes
MODE_BITS: dict[str, int] = {
    "1": 1,
    "L": 8,
    "P": 8,
    "LA": 16,
    "PA": 16,
    "I;16": 16,
    "RGB": 24,
    "YCbCr": 24,
    "LAB": 24,
    "HSV": 24,
    "RGBA": 32,
    "RGBX": 32,
    "CMYK": 32,
    "I": 32,
    "F": 32,
}

# Modes with a direct scanline layout, mapped to their bit depth
SUPPORTED_MODES: dict[str, int] = {"L": 8, "RGB": 24, "RGBA": 32}

# Pillow channel index for each blue-first scanline position
_TO_SCANLINE: dict[str, list[int]] = {"RGB": [2, 1, 0], "RGBA": [2, 1, 0, 3]}

ROW_ALIGNMENT = 4


def mode_for_bit_depth(bit_depth: int) -> str:
    """Pillow mode used to store a buffer of the given bit depth."""
    for mode, bits in SUPPORTED_MODES.items():
        if bits == bit_depth:
            return mode
    raise UnsupportedFormatError(bit_depth)


@register_image("pillow")
class PillowImage:
    """Native image over a PIL.Image.Image.

    Attributes:
        image: The wrapped Pillow image (mutated in place on unlock)
    """

    def __init__(self, image: Image.Image):
        """Wrap a Pillow image.

        Args:
            image: Image to expose; any mode is accepted but only L, RGB and
                RGBA can be locked
        """
        self.image = image
        self._lock: ScanlineData | None = None

    @classmethod
    def blank(cls, width: int, height: int, bit_depth: int = 32) -> PillowImage:
        """Create a new zero-filled Pillow image of the given depth."""
        return cls(Image.new(mode_for_bit_depth(bit_depth), (width, height)))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def bits_per_pixel(self) -> int:
        mode = self.image.mode
        if mode in MODE_BITS:
            return MODE_BITS[mode]
        return len(self.image.getbands()) * 8

    @property
    def stride(self) -> int:
        return aligned_stride(self.width, self.bits_per_pixel, ROW_ALIGNMENT)

    @property
    def is_locked(self) -> bool:
        return self._lock is not None

    def lock_bits(self) -> ScanlineData:
        """Copy the Pillow pixels into blue-first padded scanlines.

        Raises:
            InvalidStateError: If already locked
            UnsupportedFormatError: If the mode is not L, RGB or RGBA
        """
        if self._lock is not None:
            raise InvalidStateError("Image is already locked")
        if self.image.mode not in SUPPORTED_MODES:
            raise UnsupportedFormatError(self.bits_per_pixel, mode=self.image.mode)

        pixels = np.asarray(self.image, dtype=np.uint8)
        order = _TO_SCANLINE.get(self.image.mode)
        if order is not None:
            pixels = pixels[..., order]

        rows = pixels.reshape(self.height, -1)
        block = np.zeros((self.height, self.stride), dtype=np.uint8)
        block[:, : rows.shape[1]] = rows

        self._lock = ScanlineData(bytearray(block.tobytes()), scan0=0, stride=self.stride)
        return self._lock

    def unlock_bits(self, data: ScanlineData) -> None:
        """Write the scanlines back into the Pillow image and release the lock.

        Raises:
            InvalidStateError: If ``data`` is not the active lock
        """
        if self._lock is None or data is not self._lock:
            raise InvalidStateError("Image is not locked by this descriptor")

        bands = self.bits_per_pixel // 8
        block = np.frombuffer(bytes(data.memory), dtype=np.uint8)
        block = block.reshape(self.height, self.stride)
        rows = block[:, : self.width * bands]

        order = _TO_SCANLINE.get(self.image.mode)
        if order is None:
            pixels: Any = rows
        else:
            # The permutation is its own inverse for both RGB and RGBA
            pixels = rows.reshape(self.height, self.width, bands)[..., order]

        self.image.frombytes(np.ascontiguousarray(pixels).tobytes())
        self._lock = None

    def __repr__(self) -> str:
        """String representation."""
        return f"PillowImage(mode={self.image.mode!r}, size={self.image.size})"
