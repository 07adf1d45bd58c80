"""
Sub-image search.

Brute-force template search: every candidate top-left position in the
haystack is tested by comparing each needle pixel through a ColorComparator.

Candidates are scanned column-major (x outer, y inner), which fixes which
match is "first". Needle pixels are compared column-major too, stopping at
the first mismatch. A needle that would run past the right or bottom edge of
the haystack never matches.

Example:
    >>> from locked_bitmap.search import Locator, SearchRectangle
    >>>
    >>> locator = Locator()
    >>> locator.find_first(haystack, needle)
    Point(x=1, y=1)
    >>>
    >>> # Only consider top-left corners inside a region
    >>> region = SearchRectangle(left=0, top=0, right=10, bottom=10)
    >>> list(Locator(rectangle=region).find_all(haystack, needle))
    [Point(x=1, y=1)]
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

import structlog

from locked_bitmap.buffer import PixelBuffer
from locked_bitmap.comparators import ColorComparator, ExactColorComparator
from locked_bitmap.errors import DisposedError, InvalidArgumentError, InvalidStateError

logger = structlog.get_logger(__name__)


class Point(NamedTuple):
    """Top-left position of a match in the haystack."""

    x: int
    y: int


@dataclass(frozen=True)
class SearchRectangle:
    """Inclusive bounds on candidate top-left positions.

    Attributes:
        left: Smallest candidate x
        top: Smallest candidate y
        right: Largest candidate x
        bottom: Largest candidate y
    """

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if self.left > self.right or self.top > self.bottom:
            raise InvalidArgumentError(
                f"Rectangle bounds are inverted: left={self.left}, top={self.top}, "
                f"right={self.right}, bottom={self.bottom}"
            )

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> SearchRectangle:
        """Rectangle covering ``width`` x ``height`` positions starting at (x, y)."""
        return cls(left=x, top=y, right=x + width - 1, bottom=y + height - 1)

    def clip(self, width: int, height: int) -> tuple[range, range]:
        """Candidate x and y ranges intersected with ``[0, width) x [0, height)``."""
        xs = range(max(self.left, 0), min(self.right, width - 1) + 1)
        ys = range(max(self.top, 0), min(self.bottom, height - 1) + 1)
        return xs, ys


class Occurrences:
    """Lazy, restartable sequence of match positions.

    Each iteration rescans the haystack, so the sequence can be consumed
    partially or walked again. Neither buffer is modified.
    """

    def __init__(self, locator: Locator, haystack: PixelBuffer, needle: PixelBuffer):
        self._locator = locator
        self._haystack = haystack
        self._needle = needle

    def __iter__(self) -> Iterator[Point]:
        return self._locator._scan(self._haystack, self._needle)

    def first(self) -> Point | None:
        """First match in scan order, or None."""
        return next(iter(self), None)

    def __repr__(self) -> str:
        """String representation."""
        return f"Occurrences(haystack={self._haystack!r}, needle={self._needle!r})"


class Locator:
    """Finds one locked buffer inside another.

    Attributes:
        comparator: Pixel equality strategy (exact RGBA by default)
        rectangle: Optional bounds on candidate top-left positions
    """

    def __init__(
        self,
        comparator: ColorComparator | None = None,
        rectangle: SearchRectangle | None = None,
    ):
        self.comparator = comparator if comparator is not None else ExactColorComparator()
        self.rectangle = rectangle

    def _candidates(self, haystack: PixelBuffer) -> tuple[range, range]:
        if self.rectangle is None:
            return range(haystack.width), range(haystack.height)
        return self.rectangle.clip(haystack.width, haystack.height)

    def _matches_at(self, haystack: PixelBuffer, needle: PixelBuffer, hx: int, hy: int) -> bool:
        """Compare the needle against the haystack with its top-left at (hx, hy)."""
        if hx + needle.width > haystack.width or hy + needle.height > haystack.height:
            return False

        is_same = self.comparator.is_same
        hay_pixel = haystack.get_pixel
        needle_pixel = needle.get_pixel
        for nx in range(needle.width):
            for ny in range(needle.height):
                if not is_same(hay_pixel(hx + nx, hy + ny), needle_pixel(nx, ny)):
                    return False
        return True

    def _scan(self, haystack: PixelBuffer, needle: PixelBuffer) -> Iterator[Point]:
        _require_locked(haystack, "haystack")
        _require_locked(needle, "needle")

        xs, ys = self._candidates(haystack)
        for hx in xs:
            for hy in ys:
                if self._matches_at(haystack, needle, hx, hy):
                    yield Point(hx, hy)

    def find_first(self, haystack: PixelBuffer, needle: PixelBuffer) -> Point | None:
        """First match in column-major scan order.

        Returns:
            Top-left position of the match, or None if not found

        Raises:
            InvalidStateError: If either buffer is not locked
        """
        point = next(self._scan(haystack, needle), None)
        logger.debug(
            "search_completed",
            mode="first",
            haystack=haystack.size,
            needle=needle.size,
            found=point is not None,
        )
        return point

    def find_all(self, haystack: PixelBuffer, needle: PixelBuffer) -> Occurrences:
        """All matches in column-major scan order, computed lazily.

        Buffers are checked for a lock when iteration starts.
        """
        return Occurrences(self, haystack, needle)

    def contains(self, haystack: PixelBuffer, needle: PixelBuffer) -> bool:
        """Whether the needle occurs anywhere in the haystack."""
        return self.find_first(haystack, needle) is not None

    def count(self, haystack: PixelBuffer, needle: PixelBuffer) -> int:
        """Number of match positions."""
        return sum(1 for _ in self._scan(haystack, needle))

    def __repr__(self) -> str:
        """String representation."""
        return f"Locator(comparator={self.comparator!r}, rectangle={self.rectangle!r})"


def _require_locked(buffer: PixelBuffer, role: str) -> None:
    if buffer.is_disposed:
        raise DisposedError(type(buffer).__name__)
    if not buffer.is_locked:
        raise InvalidStateError(f"The {role} buffer must be locked before searching.")


def find_first(
    haystack: PixelBuffer,
    needle: PixelBuffer,
    *,
    comparator: ColorComparator | None = None,
    rectangle: SearchRectangle | None = None,
) -> Point | None:
    """First position of ``needle`` in ``haystack``, or None.

    Example:
        >>> find_first(haystack, needle, comparator=RgbColorComparator())
        Point(x=3, y=0)
    """
    return Locator(comparator, rectangle).find_first(haystack, needle)


def find_all(
    haystack: PixelBuffer,
    needle: PixelBuffer,
    *,
    comparator: ColorComparator | None = None,
    rectangle: SearchRectangle | None = None,
) -> Occurrences:
    """Lazy sequence of every position of ``needle`` in ``haystack``."""
    return Locator(comparator, rectangle).find_all(haystack, needle)


def contains(
    haystack: PixelBuffer,
    needle: PixelBuffer,
    *,
    comparator: ColorComparator | None = None,
    rectangle: SearchRectangle | None = None,
) -> bool:
    """Whether ``needle`` occurs in ``haystack``."""
    return Locator(comparator, rectangle).contains(haystack, needle)
