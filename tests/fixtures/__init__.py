"""
Test fixtures for locked-bitmap.

This module provides:
- BufferFactory: Build locked buffers from color grids
- Named test colors
"""

from tests.fixtures.factories import BLUE, GREEN, RED, BufferFactory

__all__ = [
    "BLUE",
    "GREEN",
    "RED",
    "BufferFactory",
]
