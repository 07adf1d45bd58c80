"""
locked-bitmap - Test Suite

Unit and integration tests for pixel buffers, search and transforms.

Test Organization:
- test_color.py: Color values, hex parsing and luma
- test_native.py: MemoryImage, PillowImage and the native image registry
- test_buffer.py: PixelBuffer addressing and lock lifecycle
- test_comparators.py: Color comparator strategies and registry
- test_locator.py: Sub-image search
- test_transforms.py: Crop, resize, grey scale and binarization
- test_conversions.py: Pillow image and file round trips
- test_config.py: Settings loading and overrides
- test_cli.py: Command-line interface

Fixtures are in tests/fixtures/:
- factories.py: BufferFactory for building locked buffers from color grids

Run tests:
    $ pdm run pytest tests/ -v
"""
