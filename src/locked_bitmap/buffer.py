"""
Pixel buffer for locked_bitmap.

PixelBuffer copies the scanlines of a native image into an owned bytearray
while the image is locked, gives random read/write access to individual
pixels, and copies the bytes back when unlocked.

Bit depths:
- 8 bpp: one byte per pixel, read as grey (R = G = B), always opaque
- 24 bpp: B, G, R per pixel, always opaque
- 32 bpp: B, G, R, A per pixel

Out-of-range reads return opaque black; out-of-range writes raise
IndexOutOfRangeError.

Example:
    >>> from locked_bitmap import Color, PixelBuffer
    >>> from locked_bitmap.native import MemoryImage
    >>>
    >>> image = MemoryImage.blank(4, 4, bit_depth=24)
    >>> with PixelBuffer(image) as buffer:
    ...     buffer.set_pixel(1, 2, Color(10, 20, 30))
    ...     buffer.get_pixel(1, 2)
    Color(r=10, g=20, b=30, a=255)

Transform and search results:
    >>> buffer = PixelBuffer.new(16, 16)  # locked, 32 bpp, in memory
    >>> native = buffer.to_native()       # unlock and hand the image back
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import structlog

from locked_bitmap.color import BLACK, Color
from locked_bitmap.errors import (
    DisposedError,
    IndexOutOfRangeError,
    InvalidStateError,
    UnsupportedFormatError,
)
from locked_bitmap.native.memory import MemoryImage
from locked_bitmap.native.protocol import NativeImage, ScanlineData

logger = structlog.get_logger(__name__)

SUPPORTED_BIT_DEPTHS = (8, 24, 32)


class PixelBuffer:
    """Random access to the pixels of a locked native image.

    A buffer is not thread-safe and locking is not reentrant: locking a
    locked buffer or unlocking an unlocked one raises InvalidStateError.

    Attributes:
        source: Native image the buffer reads from and writes back to
        width: Width in pixels (set when locked)
        height: Height in pixels (set when locked)
        bit_depth: Bits per pixel (set when locked)
        row_stride: Bytes per row including padding (set when locked)
    """

    def __init__(self, source: NativeImage | None = None, *, locked: bool = False):
        """Initialize a buffer over a native image.

        Args:
            source: Native image to lock
            locked: Lock immediately
        """
        self.source = source
        self.width = 0
        self.height = 0
        self.bit_depth = 0
        self.row_stride = 0

        self._pixels: bytearray | None = None
        self._scanlines: ScanlineData | None = None
        self._disposed = False

        if locked:
            self.lock_bits()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        bit_depth: int = 32,
        *,
        row_alignment: int = 4,
    ) -> PixelBuffer:
        """Create a locked buffer over a fresh, zero-filled MemoryImage.

        Args:
            width: Width in pixels
            height: Height in pixels
            bit_depth: 8, 24 or 32
            row_alignment: Row padding boundary of the backing image

        Returns:
            Locked PixelBuffer
        """
        image = MemoryImage.blank(width, height, bit_depth, row_alignment=row_alignment)
        return cls(image, locked=True)

    @classmethod
    def from_native(cls, image: NativeImage) -> PixelBuffer:
        """Wrap and lock a native image."""
        return cls(image, locked=True)

    def to_native(self) -> NativeImage:
        """Unlock (writing pixels back), dispose, and return the native image.

        Raises:
            InvalidStateError: If the buffer is not locked
        """
        try:
            self.unlock_bits()
            source = self.source
            assert source is not None
            return source
        finally:
            self.dispose()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def bytes_per_pixel(self) -> int:
        return self.bit_depth // 8

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_locked(self) -> bool:
        return self._pixels is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def _check_disposed(self) -> None:
        if self._disposed:
            raise DisposedError(type(self).__name__)

    def _require_pixels(self) -> bytearray:
        self._check_disposed()
        if self._pixels is None:
            raise InvalidStateError("Image is not locked.")
        return self._pixels

    # ------------------------------------------------------------------
    # Lock lifecycle
    # ------------------------------------------------------------------

    def lock_bits(self) -> None:
        """Copy the native image's scanlines into the buffer.

        On any failure the native lock is released and the buffer is left
        unlocked.

        Raises:
            DisposedError: If the buffer was disposed
            InvalidStateError: If already locked or there is no source
            UnsupportedFormatError: If the bit depth is not 8, 24 or 32
        """
        self._check_disposed()
        if self._pixels is not None:
            raise InvalidStateError("Image is already locked.")
        if self.source is None:
            raise InvalidStateError("No source image to lock.")

        source = self.source
        width = source.width
        height = source.height
        depth = source.bits_per_pixel

        if depth not in SUPPORTED_BIT_DEPTHS:
            raise UnsupportedFormatError(depth)

        scanlines = source.lock_bits()
        try:
            row_stride = abs(scanlines.stride)
            if row_stride < width * (depth // 8):
                raise InvalidStateError(
                    f"Stride {row_stride} is too small for {width} pixels at {depth} bpp"
                )

            # Row by row, since a negative stride walks backwards through memory
            pixels = bytearray(height * row_stride)
            memory = scanlines.memory
            for y in range(height):
                start = scanlines.row_offset(y)
                row = memory[start : start + row_stride]
                if start < 0 or len(row) != row_stride:
                    raise InvalidStateError(f"Scanline {y} lies outside the locked memory")
                pixels[y * row_stride : (y + 1) * row_stride] = row
        except Exception:
            source.unlock_bits(scanlines)
            raise

        self.width = width
        self.height = height
        self.bit_depth = depth
        self.row_stride = row_stride
        self._scanlines = scanlines
        self._pixels = pixels

        logger.debug(
            "buffer_locked",
            width=width,
            height=height,
            bit_depth=depth,
            row_stride=row_stride,
            bottom_up=scanlines.stride < 0,
        )

    def unlock_bits(self) -> None:
        """Copy the buffer back into the native image and release the lock.

        Raises:
            DisposedError: If the buffer was disposed
            InvalidStateError: If the buffer is not locked
        """
        pixels = self._require_pixels()
        scanlines = self._scanlines
        source = self.source
        assert scanlines is not None and source is not None

        row_stride = self.row_stride
        memory = scanlines.memory
        for y in range(self.height):
            start = scanlines.row_offset(y)
            memory[start : start + row_stride] = pixels[y * row_stride : (y + 1) * row_stride]

        source.unlock_bits(scanlines)
        self._scanlines = None
        self._pixels = None

        logger.debug("buffer_unlocked", width=self.width, height=self.height)

    def dispose(self) -> None:
        """Release any native lock without writing back and retire the buffer.

        Failures while releasing the native lock are swallowed. Safe to call
        multiple times.
        """
        if self._disposed:
            return

        if self._scanlines is not None and self.source is not None:
            try:
                self.source.unlock_bits(self._scanlines)
            except Exception as e:
                logger.debug("dispose_release_failed", error=str(e))

        self._scanlines = None
        self._pixels = None
        self.source = None
        self._disposed = True

    def __enter__(self) -> PixelBuffer:
        """Lock on entry unless already locked."""
        self._check_disposed()
        if not self.is_locked:
            self.lock_bits()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Write back on a clean exit, then dispose."""
        try:
            if exc_type is None and self.is_locked and not self._disposed:
                self.unlock_bits()
        finally:
            self.dispose()

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    def _offset(self, x: int, y: int, length: int) -> int | None:
        """Byte offset of (x, y), or None when it lies outside the canvas."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return None
        i = y * self.row_stride + x * self.bytes_per_pixel
        if i > length - self.bytes_per_pixel:
            return None
        return i

    def get_pixel(self, x: int, y: int) -> Color:
        """Read the color at (x, y).

        Coordinates outside the canvas read as opaque black.

        Raises:
            DisposedError: If the buffer was disposed
            InvalidStateError: If the buffer is not locked
        """
        pixels = self._require_pixels()
        i = self._offset(x, y, len(pixels))
        if i is None:
            return BLACK

        depth = self.bit_depth
        if depth == 32:
            return Color(pixels[i + 2], pixels[i + 1], pixels[i], pixels[i + 3])
        if depth == 24:
            return Color(pixels[i + 2], pixels[i + 1], pixels[i])
        c = pixels[i]
        return Color(c, c, c)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        """Write the color at (x, y).

        8 bpp buffers store the blue channel; 8 and 24 bpp drop alpha.

        Raises:
            DisposedError: If the buffer was disposed
            InvalidStateError: If the buffer is not locked
            IndexOutOfRangeError: If (x, y) is outside the canvas
        """
        pixels = self._require_pixels()
        i = self._offset(x, y, len(pixels))
        if i is None:
            raise IndexOutOfRangeError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} buffer"
            )

        r, g, b, a = color
        depth = self.bit_depth
        if depth == 32:
            pixels[i : i + 4] = bytes((b, g, r, a))
        elif depth == 24:
            pixels[i : i + 3] = bytes((b, g, r))
        else:
            pixels[i] = b

    def pixels(self) -> Iterator[tuple[int, int, Color]]:
        """Yield (x, y, color) for every pixel, row by row."""
        self._require_pixels()
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.get_pixel(x, y)

    def copy(self, bit_depth: int | None = None) -> PixelBuffer:
        """Create a locked in-memory copy, optionally at another bit depth."""
        self._require_pixels()
        result = PixelBuffer.new(self.width, self.height, bit_depth or self.bit_depth)
        for x, y, color in self.pixels():
            result.set_pixel(x, y, color)
        return result

    def __repr__(self) -> str:
        """String representation."""
        if self._disposed:
            return "PixelBuffer(disposed)"
        return (
            f"PixelBuffer(width={self.width}, height={self.height}, "
            f"bit_depth={self.bit_depth}, locked={self.is_locked})"
        )


__all__ = ["SUPPORTED_BIT_DEPTHS", "PixelBuffer"]
