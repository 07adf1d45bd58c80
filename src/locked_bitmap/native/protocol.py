"""
Native image protocol for locked_bitmap.

A native image is whatever owns the real pixel memory: an in-memory bitmap,
a Pillow image, or any custom surface. PixelBuffer only needs its size, its
bit depth and a way to lock the whole-image rectangle for read-write access.

Example - Implementing a custom native image:
    >>> from locked_bitmap.native import ScanlineData, register_image
    >>>
    >>> @register_image("framebuffer")
    >>> class FramebufferImage:
    ...     '''Expose a device framebuffer as a native image.'''
    ...
    ...     def __init__(self, device):
    ...         self.device = device
    ...         self.width, self.height = device.resolution
    ...         self.bits_per_pixel = 32
    ...
    ...     def lock_bits(self) -> ScanlineData:
    ...         return ScanlineData(self.device.map(), scan0=0, stride=self.device.pitch)
    ...
    ...     def unlock_bits(self, data: ScanlineData) -> None:
    ...         self.device.unmap()

Using registered images:
    >>> from locked_bitmap.native import get_image_class
    >>> image = get_image_class("memory").blank(64, 64)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# Registry of available native image types
_IMAGE_REGISTRY: dict[str, type] = {}


@dataclass
class ScanlineData:
    """Descriptor returned by a native lock.

    Row ``y`` starts at ``scan0 + y * stride`` inside ``memory``. A negative
    stride marks bottom-up storage: ``scan0`` then points at the top row,
    which sits at the end of the block.

    Attributes:
        memory: Mutable block holding the scanlines
        scan0: Offset of the top row within memory
        stride: Signed bytes per row
    """

    memory: bytearray | memoryview
    scan0: int
    stride: int

    def row_offset(self, y: int) -> int:
        """Offset of row ``y`` within memory."""
        return self.scan0 + y * self.stride


@runtime_checkable
class NativeImage(Protocol):
    """Interface for images a PixelBuffer can lock.

    Implementations:
    - MemoryImage: In-memory bitmap with padded rows (default for new images)
    - PillowImage: Wraps a PIL.Image.Image in mode L, RGB or RGBA

    All native images must provide:
    - width, height: Image dimensions in pixels
    - bits_per_pixel: Bit depth of the pixel format
    - lock_bits(): Grant exclusive read-write access to the scanlines
    - unlock_bits(): Release the lock and commit the scanlines

    Scanlines store channels blue first: B, G, R for 24 bpp and B, G, R, A
    for 32 bpp.
    """

    @property
    def width(self) -> int:
        """Image width in pixels."""
        ...

    @property
    def height(self) -> int:
        """Image height in pixels."""
        ...

    @property
    def bits_per_pixel(self) -> int:
        """Bits used to encode one pixel."""
        ...

    def lock_bits(self) -> ScanlineData:
        """Lock the whole image for read-write access.

        Returns:
            Descriptor of the locked scanlines

        Raises:
            InvalidStateError: If the image is already locked
        """
        ...

    def unlock_bits(self, data: ScanlineData) -> None:
        """Release a lock obtained from lock_bits().

        Whatever was written into ``data.memory`` becomes the image content.

        Raises:
            InvalidStateError: If ``data`` does not belong to the current lock
        """
        ...


def register_image(name: str):
    """Decorator to register a native image implementation.

    Args:
        name: Unique name for the image type

    Returns:
        Decorator function
    """

    def decorator(cls: type) -> type:
        if name in _IMAGE_REGISTRY:
            raise ValueError(f"Native image '{name}' is already registered")
        _IMAGE_REGISTRY[name] = cls
        return cls

    return decorator


def get_image_class(name: str) -> type:
    """Get a registered native image class by name.

    Raises:
        KeyError: If the name is not registered
    """
    if name not in _IMAGE_REGISTRY:
        available = ", ".join(_IMAGE_REGISTRY.keys())
        raise KeyError(f"Native image '{name}' not found. Available: {available}")
    return _IMAGE_REGISTRY[name]


def list_images() -> list[str]:
    """List all registered native image names."""
    return list(_IMAGE_REGISTRY.keys())
