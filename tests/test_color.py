"""
Tests for color values and the error taxonomy.
"""

from __future__ import annotations

import pytest

from locked_bitmap.color import BLACK, TRANSPARENT, WHITE, Color, luma
from locked_bitmap.errors import (
    DisposedError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidStateError,
    LockedBitmapError,
    UnsupportedFormatError,
)


class TestColor:
    """Tests for the Color tuple."""

    def test_alpha_defaults_to_opaque(self):
        """Test that alpha defaults to 255."""
        assert Color(1, 2, 3).a == 255

    def test_constants(self):
        """Test the named colors."""
        assert BLACK == Color(0, 0, 0, 255)
        assert WHITE == Color(255, 255, 255, 255)
        assert TRANSPARENT.a == 0

    def test_grey(self):
        """Test building a grey with alpha."""
        assert Color.grey(40, 7) == Color(40, 40, 40, 7)

    def test_with_alpha(self):
        """Test replacing alpha only."""
        assert Color(1, 2, 3).with_alpha(9) == Color(1, 2, 3, 9)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("#FF0000", Color(255, 0, 0, 255)),
            ("00ff0080", Color(0, 255, 0, 128)),
            ("  #0A0B0C  ", Color(10, 11, 12, 255)),
        ],
    )
    def test_from_hex(self, text, expected):
        """Test parsing hex colors."""
        assert Color.from_hex(text) == expected

    @pytest.mark.parametrize("text", ["#FFF", "#GGGGGG", "", "#1234567"])
    def test_from_hex_invalid(self, text):
        """Test that malformed hex colors are rejected."""
        with pytest.raises(ValueError):
            Color.from_hex(text)

    def test_to_hex(self):
        """Test hex formatting includes alpha."""
        assert Color(255, 0, 16, 128).to_hex() == "#FF001080"


class TestLuma:
    """Tests for the luma function."""

    def test_black(self):
        assert luma(BLACK) == 0

    def test_pure_channels(self):
        """Test the channel weights."""
        assert luma(Color(255, 0, 0)) == 76
        assert luma(Color(0, 255, 0)) == 150
        assert luma(Color(0, 0, 255)) == 28

    def test_ignores_alpha(self):
        assert luma(Color(0, 255, 0, 0)) == luma(Color(0, 255, 0, 255))

    def test_result_is_int(self):
        assert isinstance(luma(Color(13, 77, 201)), int)


class TestErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.parametrize(
        "error,builtin",
        [
            (UnsupportedFormatError(16), ValueError),
            (InvalidStateError("x"), RuntimeError),
            (IndexOutOfRangeError("x"), IndexError),
            (InvalidArgumentError("x"), ValueError),
        ],
    )
    def test_builtin_bases(self, error, builtin):
        """Test that every error is also a builtin exception."""
        assert isinstance(error, LockedBitmapError)
        assert isinstance(error, builtin)

    def test_disposed_is_invalid_state(self):
        """Test that DisposedError is an InvalidStateError."""
        error = DisposedError()
        assert isinstance(error, InvalidStateError)
        assert "disposed PixelBuffer" in str(error)

    def test_unsupported_format_keeps_depth(self):
        error = UnsupportedFormatError(16)
        assert error.bit_depth == 16
        assert "16 bpp" in str(error)
