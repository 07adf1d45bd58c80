"""
Template search for locked_bitmap.

Locate a needle buffer inside a haystack buffer:

- Locator: Reusable searcher configured with a comparator and rectangle
- find_first(): First match in column-major order, or None
- find_all(): Lazy, restartable sequence of every match
- contains(): Whether any match exists

Example:
    >>> from locked_bitmap.search import find_all, find_first
    >>>
    >>> point = find_first(haystack, needle)
    >>> if point is not None:
    ...     print(f"Found at {point.x}, {point.y}")
    >>>
    >>> for point in find_all(haystack, needle):
    ...     print(point)
"""

from locked_bitmap.search.locator import (
    Locator,
    Occurrences,
    Point,
    SearchRectangle,
    contains,
    find_all,
    find_first,
)

__all__ = [
    "Locator",
    "Occurrences",
    "Point",
    "SearchRectangle",
    "contains",
    "find_all",
    "find_first",
]
