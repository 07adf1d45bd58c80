"""
Color comparators for locked_bitmap.

Comparators implement the ColorComparator protocol and plug into the
Locator to decide when two pixels match:

- ExactColorComparator: R, G, B and A all equal (default)
- RgbColorComparator: R, G, B equal, alpha ignored
- ToleranceColorComparator: each channel within a tolerance

Example:
    >>> from locked_bitmap.comparators import RgbColorComparator
    >>> from locked_bitmap.search import find_first
    >>>
    >>> find_first(haystack, needle, comparator=RgbColorComparator())
    Point(x=12, y=40)

To implement a custom comparator, see `comparators/protocol.py`.
"""

from locked_bitmap.comparators.builtin import (
    ExactColorComparator,
    RgbColorComparator,
    ToleranceColorComparator,
)
from locked_bitmap.comparators.protocol import (
    ColorComparator,
    get_comparator,
    is_comparator_registered,
    list_comparators,
    register_comparator,
)

__all__ = [
    "ColorComparator",
    "ExactColorComparator",
    "RgbColorComparator",
    "ToleranceColorComparator",
    "get_comparator",
    "is_comparator_registered",
    "list_comparators",
    "register_comparator",
]
