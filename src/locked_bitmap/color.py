"""
Color values for locked_bitmap.

A Color is an immutable (r, g, b, a) tuple of 8-bit channel values. Alpha
defaults to fully opaque.

Example:
    >>> from locked_bitmap.color import Color, luma
    >>>
    >>> red = Color(255, 0, 0)
    >>> red.a
    255
    >>> luma(red)
    76
    >>> Color.from_hex("#00FF0080")
    Color(r=0, g=255, b=0, a=128)
"""

from __future__ import annotations

from typing import NamedTuple

# Luma weights shared by grey scale and binarization
RED_WEIGHT = 0.3
GREEN_WEIGHT = 0.59
BLUE_WEIGHT = 0.11


class Color(NamedTuple):
    """RGBA color with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def grey(cls, value: int, alpha: int = 255) -> Color:
        """Create a grey color with R = G = B = value."""
        return cls(value, value, value, alpha)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA`` (leading ``#`` optional).

        Raises:
            ValueError: If the string is not a 6 or 8 digit hex color
        """
        digits = value.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Expected #RRGGBB or #RRGGBBAA, got {value!r}")
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as e:
            raise ValueError(f"Invalid hex color {value!r}") from e
        return cls(*channels)

    def to_hex(self) -> str:
        """Format as ``#RRGGBBAA``."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    def with_alpha(self, alpha: int) -> Color:
        return self._replace(a=alpha)


BLACK = Color(0, 0, 0, 255)
WHITE = Color(255, 255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)


def luma(color: Color) -> int:
    """Weighted brightness ``0.3R + 0.59G + 0.11B``, truncated to int."""
    return int(color.r * RED_WEIGHT + color.g * GREEN_WEIGHT + color.b * BLUE_WEIGHT)


__all__ = [
    "BLACK",
    "TRANSPARENT",
    "WHITE",
    "Color",
    "luma",
]
