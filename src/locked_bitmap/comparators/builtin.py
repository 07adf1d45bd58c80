"""
Built-in color comparators.
"""

from __future__ import annotations

from locked_bitmap.color import Color
from locked_bitmap.comparators.protocol import register_comparator
from locked_bitmap.errors import InvalidArgumentError


@register_comparator("exact")
class ExactColorComparator:
    """All four channels must match."""

    def is_same(self, left: Color, right: Color) -> bool:
        return (
            left.r == right.r
            and left.g == right.g
            and left.b == right.b
            and left.a == right.a
        )

    def __repr__(self) -> str:
        return "ExactColorComparator()"


@register_comparator("rgb")
class RgbColorComparator:
    """Red, green and blue must match; alpha is ignored.

    Useful when haystack and needle disagree on transparency.
    """

    def is_same(self, left: Color, right: Color) -> bool:
        return left.r == right.r and left.g == right.g and left.b == right.b

    def __repr__(self) -> str:
        return "RgbColorComparator()"


@register_comparator("tolerance")
class ToleranceColorComparator:
    """Every channel may differ by at most ``tolerance``.

    Attributes:
        tolerance: Largest accepted per-channel difference (0-255)
        include_alpha: Whether alpha is compared as well
    """

    def __init__(self, tolerance: int = 0, *, include_alpha: bool = False):
        if not 0 <= tolerance <= 255:
            raise InvalidArgumentError(f"tolerance must be within 0-255, got {tolerance}")
        self.tolerance = tolerance
        self.include_alpha = include_alpha

    def is_same(self, left: Color, right: Color) -> bool:
        t = self.tolerance
        if abs(left.r - right.r) > t or abs(left.g - right.g) > t or abs(left.b - right.b) > t:
            return False
        return not self.include_alpha or abs(left.a - right.a) <= t

    def __repr__(self) -> str:
        return (
            f"ToleranceColorComparator(tolerance={self.tolerance}, "
            f"include_alpha={self.include_alpha})"
        )
