"""
In-memory native image.

MemoryImage keeps its scanlines in a bytearray with rows padded to a
configurable alignment, optionally stored bottom-up. It is what new buffers
produced by transforms are backed by.

Example:
    >>> from locked_bitmap.native import MemoryImage
    >>>
    >>> image = MemoryImage.blank(3, 2, bit_depth=24)
    >>> image.stride  # 9 bytes of pixels padded to 12
    12
    >>> MemoryImage.blank(3, 2, bit_depth=24, bottom_up=True).stride
    -12
"""

from __future__ import annotations

from locked_bitmap.errors import InvalidArgumentError, InvalidStateError
from locked_bitmap.native.protocol import ScanlineData, register_image


def aligned_stride(width: int, bits_per_pixel: int, alignment: int = 4) -> int:
    """Bytes per row, rounded up to a multiple of ``alignment``."""
    row_bytes = (width * bits_per_pixel + 7) // 8
    if alignment <= 1:
        return row_bytes
    return (row_bytes + alignment - 1) // alignment * alignment


@register_image("memory")
class MemoryImage:
    """Bitmap stored in a bytearray.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        bits_per_pixel: Bit depth
        row_alignment: Row padding boundary in bytes
        bottom_up: Whether rows are stored last-to-first
    """

    def __init__(
        self,
        width: int,
        height: int,
        bits_per_pixel: int = 32,
        *,
        row_alignment: int = 4,
        bottom_up: bool = False,
        data: bytes | bytearray | None = None,
    ):
        """Initialize an in-memory image.

        Args:
            width: Width in pixels
            height: Height in pixels
            bits_per_pixel: Bit depth of the pixel format
            row_alignment: Row padding boundary in bytes
            bottom_up: Store rows last-to-first (negative stride)
            data: Initial memory block (zero-filled when omitted)

        Raises:
            InvalidArgumentError: If the size is not positive or data has the
                wrong length
        """
        if width < 1 or height < 1:
            raise InvalidArgumentError(f"Image size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.row_alignment = row_alignment
        self.bottom_up = bottom_up

        size = abs(self.stride) * height
        if data is None:
            self._memory = bytearray(size)
        else:
            if len(data) != size:
                raise InvalidArgumentError(f"Expected {size} bytes of image data, got {len(data)}")
            self._memory = bytearray(data)

        self._lock: ScanlineData | None = None

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        bit_depth: int = 32,
        *,
        row_alignment: int = 4,
        bottom_up: bool = False,
    ) -> MemoryImage:
        """Create a zero-filled image."""
        return cls(
            width,
            height,
            bit_depth,
            row_alignment=row_alignment,
            bottom_up=bottom_up,
        )

    @property
    def stride(self) -> int:
        """Signed bytes per row; negative when stored bottom-up."""
        stride = aligned_stride(self.width, self.bits_per_pixel, self.row_alignment)
        return -stride if self.bottom_up else stride

    @property
    def is_locked(self) -> bool:
        return self._lock is not None

    def lock_bits(self) -> ScanlineData:
        """Lock the whole image.

        Raises:
            InvalidStateError: If already locked
        """
        if self._lock is not None:
            raise InvalidStateError("Image is already locked")

        stride = self.stride
        scan0 = (self.height - 1) * -stride if stride < 0 else 0
        self._lock = ScanlineData(self._memory, scan0=scan0, stride=stride)
        return self._lock

    def unlock_bits(self, data: ScanlineData) -> None:
        """Release the lock.

        Raises:
            InvalidStateError: If ``data`` is not the active lock
        """
        if self._lock is None or data is not self._lock:
            raise InvalidStateError("Image is not locked by this descriptor")
        self._lock = None

    def tobytes(self) -> bytes:
        """Copy of the raw memory block, padding included."""
        return bytes(self._memory)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"MemoryImage(width={self.width}, height={self.height}, "
            f"bits_per_pixel={self.bits_per_pixel}, bottom_up={self.bottom_up})"
        )
