"""
Pytest configuration and shared fixtures for locked-bitmap.

This module provides:
- Buffer factories for building locked test images
- The canonical 4x4 haystack with a red 2x2 block
- PNG files on disk for conversion and CLI tests
- Settings cache isolation

Example usage in tests:
    def test_something(haystack, red_block):
        assert find_first(haystack, red_block) == Point(1, 1)
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from PIL import Image

from locked_bitmap import PixelBuffer
from locked_bitmap.config import get_settings
from tests.fixtures.factories import RED, BufferFactory


# ============================================================================
# FACTORY FIXTURES
# ============================================================================


@pytest.fixture
def buffer_factory() -> type[BufferFactory]:
    """Provide the BufferFactory class."""
    return BufferFactory


@pytest.fixture
def haystack() -> Iterator[PixelBuffer]:
    """4x4 black 32 bpp buffer with a red 2x2 block at (1, 1).

    Yields:
        Locked PixelBuffer (disposed afterwards)
    """
    buffer = BufferFactory.filled(4, 4)
    BufferFactory.paint(buffer, 1, 1, 2, 2, RED)
    yield buffer
    buffer.dispose()


@pytest.fixture
def red_block() -> Iterator[PixelBuffer]:
    """2x2 red 32 bpp buffer.

    Yields:
        Locked PixelBuffer (disposed afterwards)
    """
    buffer = BufferFactory.filled(2, 2, RED)
    yield buffer
    buffer.dispose()


# ============================================================================
# FILE FIXTURES
# ============================================================================


@pytest.fixture
def haystack_png(tmp_path: Path) -> Path:
    """6x5 RGB PNG, white with a red 2x2 block at (3, 2)."""
    image = Image.new("RGB", (6, 5), (255, 255, 255))
    for x in (3, 4):
        for y in (2, 3):
            image.putpixel((x, y), (255, 0, 0))
    path = tmp_path / "haystack.png"
    image.save(path)
    return path


@pytest.fixture
def needle_png(tmp_path: Path) -> Path:
    """2x2 red RGB PNG."""
    path = tmp_path / "needle.png"
    Image.new("RGB", (2, 2), (255, 0, 0)).save(path)
    return path


@pytest.fixture
def missing_needle_png(tmp_path: Path) -> Path:
    """2x2 green RGB PNG that does not occur in haystack_png."""
    path = tmp_path / "green.png"
    Image.new("RGB", (2, 2), (0, 255, 0)).save(path)
    return path


# ============================================================================
# SETTINGS ISOLATION
# ============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run every test without config files or LOCKED_BITMAP_* variables."""
    for key in list(os.environ):
        if key.startswith("LOCKED_BITMAP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
