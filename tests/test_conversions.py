"""
Tests for Pillow conversions and image files.
"""

from __future__ import annotations

import pytest
from PIL import Image

from locked_bitmap import Color, PixelBuffer
from locked_bitmap.conversions import buffer_to_pillow, load_buffer, pillow_to_buffer, save_buffer
from locked_bitmap.errors import UnsupportedFormatError
from locked_bitmap.native import PillowImage
from tests.fixtures.factories import RED, BufferFactory


class TestPillowToBuffer:
    """Tests for pillow_to_buffer()."""

    def test_rgb(self):
        image = Image.new("RGB", (3, 2), (10, 20, 30))

        buffer = pillow_to_buffer(image)

        assert buffer.is_locked
        assert buffer.bit_depth == 24
        assert buffer.get_pixel(2, 1) == Color(10, 20, 30)

    def test_writes_back_into_image(self):
        image = Image.new("RGBA", (2, 2))
        buffer = pillow_to_buffer(image)
        buffer.set_pixel(1, 0, Color(5, 6, 7, 8))
        buffer.unlock_bits()

        assert image.getpixel((1, 0)) == (5, 6, 7, 8)

    def test_palette_rejected(self):
        with pytest.raises(UnsupportedFormatError):
            pillow_to_buffer(Image.new("P", (2, 2)))

    def test_palette_converted(self):
        image = Image.new("RGB", (2, 2), (255, 0, 0)).convert("P")

        buffer = pillow_to_buffer(image, convert=True)

        assert buffer.bit_depth == 32
        assert buffer.get_pixel(0, 0) == RED


class TestBufferToPillow:
    """Tests for buffer_to_pillow()."""

    @pytest.mark.parametrize("bit_depth,mode", [(8, "L"), (24, "RGB"), (32, "RGBA")])
    def test_mode_follows_depth(self, bit_depth, mode):
        buffer = BufferFactory.filled(3, 2, bit_depth=bit_depth)
        image = buffer_to_pillow(buffer)
        assert image.mode == mode
        assert image.size == (3, 2)

    def test_pixels_copied(self):
        buffer = BufferFactory.gradient(4, 3)

        image = buffer_to_pillow(buffer)

        for x, y, color in buffer.pixels():
            assert image.getpixel((x, y)) == tuple(color)

    def test_buffer_left_locked(self):
        buffer = BufferFactory.gradient(2, 2)
        buffer_to_pillow(buffer)
        assert buffer.is_locked


class TestFiles:
    """Tests for load_buffer() and save_buffer()."""

    def test_round_trip(self, tmp_path):
        buffer = BufferFactory.gradient(5, 4, bit_depth=24)
        path = save_buffer(buffer, tmp_path / "gradient.png")

        loaded = load_buffer(path)

        assert loaded.size == (5, 4)
        assert list(loaded.pixels()) == list(buffer.pixels())

    def test_accepts_str_path(self, tmp_path):
        path = save_buffer(BufferFactory.filled(1, 1, RED), str(tmp_path / "red.png"))
        assert path.exists()
        assert load_buffer(str(path)).get_pixel(0, 0) == RED

    def test_load_converts_palette(self, tmp_path):
        path = tmp_path / "palette.png"
        Image.new("RGB", (2, 2), (255, 0, 0)).convert("P").save(path)

        buffer = load_buffer(path)

        assert buffer.bit_depth == 32
        assert buffer.get_pixel(1, 1) == RED

    def test_loaded_buffer_is_pillow_backed(self, haystack_png):
        buffer = load_buffer(haystack_png)
        assert isinstance(buffer.source, PillowImage)
        assert isinstance(buffer, PixelBuffer)
