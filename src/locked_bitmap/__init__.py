"""
locked_bitmap

Random read/write access to the pixels of a raster image, plus template
search and simple transforms built on that access.

Features:
- PixelBuffer with bit-depth-aware addressing of padded scanlines (8/24/32 bpp)
- Lock/unlock lifecycle against in-memory or Pillow-backed native images
- Brute-force sub-image search with pluggable color comparators
- Crop, nearest-neighbour resize, grey scale and threshold binarization

Example:
    >>> from locked_bitmap import PixelBuffer, find_first
    >>> from locked_bitmap.conversions import load_buffer
    >>>
    >>> screen = load_buffer("screen.png")
    >>> button = load_buffer("button.png")
    >>> find_first(screen, button)
    Point(x=412, y=96)

For more information, run:
    $ locked-bitmap --help
"""

__version__ = "1.0.0"

from locked_bitmap.buffer import PixelBuffer
from locked_bitmap.color import BLACK, TRANSPARENT, WHITE, Color, luma
from locked_bitmap.comparators import (
    ColorComparator,
    ExactColorComparator,
    RgbColorComparator,
    ToleranceColorComparator,
)
from locked_bitmap.config import Settings, get_settings
from locked_bitmap.errors import (
    DisposedError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidStateError,
    LockedBitmapError,
    UnsupportedFormatError,
)
from locked_bitmap.native import MemoryImage, NativeImage, PillowImage, ScanlineData
from locked_bitmap.search import Locator, Point, SearchRectangle, contains, find_all, find_first
from locked_bitmap.transforms import crop, grey_scale, resize, to_binary_image

__all__ = [
    "BLACK",
    "TRANSPARENT",
    "WHITE",
    "Color",
    "ColorComparator",
    "DisposedError",
    "ExactColorComparator",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidStateError",
    "Locator",
    "LockedBitmapError",
    "MemoryImage",
    "NativeImage",
    "PillowImage",
    "PixelBuffer",
    "Point",
    "RgbColorComparator",
    "ScanlineData",
    "SearchRectangle",
    "Settings",
    "ToleranceColorComparator",
    "UnsupportedFormatError",
    "__version__",
    "contains",
    "crop",
    "find_all",
    "find_first",
    "get_settings",
    "grey_scale",
    "luma",
    "resize",
    "to_binary_image",
]
