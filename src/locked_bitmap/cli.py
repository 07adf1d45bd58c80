"""
Command-line interface for locked_bitmap.

This module provides the CLI entry point using Click. Image files are read
and written through Pillow.

Commands:
- info: Show size, bit depth and row stride of an image
- find: Locate a needle image inside a haystack image
- crop: Cut a region out of an image
- resize: Nearest-neighbour resize
- greyscale: Convert to grey scale
- binarize: Two-color threshold on brightness

Example:
    $ locked-bitmap --help
    $ locked-bitmap find screen.png button.png --all
    $ locked-bitmap --config config/local.toml binarize scan.png mask.png --threshold 100
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from locked_bitmap import __version__, transforms
from locked_bitmap.buffer import PixelBuffer
from locked_bitmap.color import Color
from locked_bitmap.comparators import ColorComparator, get_comparator
from locked_bitmap.config import Settings, get_settings, load_settings
from locked_bitmap.conversions import load_buffer, save_buffer
from locked_bitmap.errors import LockedBitmapError
from locked_bitmap.search import Locator, SearchRectangle
from locked_bitmap.utils.logging import bind_context, clear_context, get_logger, setup_logging

console = Console()

IMAGE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)
OUTPUT_PATH = click.Path(dir_okay=False, writable=True, path_type=Path)


def _load(path: Path) -> PixelBuffer:
    try:
        return load_buffer(path)
    except LockedBitmapError as e:
        raise click.ClickException(f"{path}: {e}") from e
    except OSError as e:
        raise click.ClickException(f"Cannot read image {path}: {e}") from e


def _save(buffer: PixelBuffer, path: Path) -> None:
    try:
        save_buffer(buffer, path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot write image {path}: {e}") from e
    console.print(f"[green]✓[/green] Wrote {path} ({buffer.width}x{buffer.height})")


def _parse_color(ctx: click.Context, param: click.Parameter, value: str | None) -> Color | None:
    if value is None:
        return None
    try:
        return Color.from_hex(value)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _build_comparator(name: str, tolerance: int) -> ColorComparator:
    try:
        if name == "tolerance":
            return get_comparator(name, tolerance)
        return get_comparator(name)
    except (KeyError, ValueError) as e:
        raise click.BadParameter(str(e).strip("'\""), param_hint="--comparator") from e


@click.group()
@click.version_option(version=__version__, prog_name="locked-bitmap")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """Pixel-level image search and transforms.

    Find one image inside another, or derive new images by cropping,
    resizing, grey scaling and binarizing.
    """
    ctx.ensure_object(dict)

    if config:
        settings = load_settings(config)
    else:
        settings = get_settings()

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose

    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(
        level=log_level,
        format=settings.logging.format,
        include_timestamp=settings.logging.include_timestamp,
        include_location=settings.logging.include_location,
    )
    clear_context()
    bind_context(command=ctx.invoked_subcommand)


@main.command("info")
@click.argument("image", type=IMAGE_PATH)
def info(image: Path) -> None:
    """Show size, bit depth and row stride of IMAGE."""
    buffer = _load(image)

    table = Table(title=str(image))
    table.add_column("Property", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Width", str(buffer.width))
    table.add_row("Height", str(buffer.height))
    table.add_row("Bit depth", f"{buffer.bit_depth} bpp")
    table.add_row("Row stride", f"{buffer.row_stride} bytes")

    console.print(table)
    buffer.dispose()


@main.command("find")
@click.argument("haystack", type=IMAGE_PATH)
@click.argument("needle", type=IMAGE_PATH)
@click.option("--all", "find_every", is_flag=True, help="Report every match, not just the first")
@click.option("--comparator", type=str, default=None, help="Comparator name (exact, rgb, tolerance)")
@click.option("--tolerance", type=click.IntRange(0, 255), default=None, help="Per-channel tolerance")
@click.option(
    "--rect",
    type=int,
    nargs=4,
    default=None,
    metavar="LEFT TOP RIGHT BOTTOM",
    help="Only consider top-left positions inside this inclusive rectangle",
)
@click.pass_context
def find(
    ctx: click.Context,
    haystack: Path,
    needle: Path,
    find_every: bool,
    comparator: str | None,
    tolerance: int | None,
    rect: tuple[int, int, int, int] | None,
) -> None:
    """Locate NEEDLE inside HAYSTACK.

    Exits with status 1 when the needle is not found.
    """
    settings: Settings = ctx.obj["settings"]
    logger = get_logger(__name__)

    name = comparator or settings.search.comparator
    strategy = _build_comparator(
        name, tolerance if tolerance is not None else settings.search.tolerance
    )

    rectangle = None
    if rect:
        try:
            rectangle = SearchRectangle(*rect)
        except LockedBitmapError as e:
            raise click.BadParameter(str(e), param_hint="--rect") from e

    hay = _load(haystack)
    pin = _load(needle)
    locator = Locator(strategy, rectangle)

    if find_every:
        points = list(locator.find_all(hay, pin))
    else:
        first = locator.find_first(hay, pin)
        points = [first] if first is not None else []

    logger.info("search_finished", haystack=str(haystack), needle=str(needle), matches=len(points))

    hay.dispose()
    pin.dispose()

    if not points:
        console.print(f"[yellow]No match for[/yellow] {needle} in {haystack}")
        ctx.exit(1)

    console.print(f"{len(points)} match(es) with the {name} comparator")
    table = Table(title="Matches")
    table.add_column("#", justify="right", style="dim")
    table.add_column("X", justify="right", style="cyan")
    table.add_column("Y", justify="right", style="cyan")
    for index, point in enumerate(points, start=1):
        table.add_row(str(index), str(point.x), str(point.y))
    console.print(table)


@main.command("crop")
@click.argument("image", type=IMAGE_PATH)
@click.argument("output", type=OUTPUT_PATH)
@click.option("--x", "x_offset", type=int, default=0, show_default=True, help="Left edge")
@click.option("--y", "y_offset", type=int, default=0, show_default=True, help="Top edge")
@click.option("--width", type=int, required=True, help="Width of the region")
@click.option("--height", type=int, required=True, help="Height of the region")
@click.pass_context
def crop(
    ctx: click.Context,
    image: Path,
    output: Path,
    x_offset: int,
    y_offset: int,
    width: int,
    height: int,
) -> None:
    """Cut a WIDTH x HEIGHT region out of IMAGE into OUTPUT."""
    settings: Settings = ctx.obj["settings"]
    source = _load(image)
    try:
        result = transforms.crop(
            source, x_offset, y_offset, width, height, bit_depth=settings.transforms.bit_depth
        )
    except LockedBitmapError as e:
        raise click.ClickException(str(e)) from e
    finally:
        source.dispose()
    _save(result, output)


@main.command("resize")
@click.argument("image", type=IMAGE_PATH)
@click.argument("output", type=OUTPUT_PATH)
@click.option("--width", type=int, required=True, help="New width")
@click.option("--height", type=int, required=True, help="New height")
@click.pass_context
def resize(ctx: click.Context, image: Path, output: Path, width: int, height: int) -> None:
    """Nearest-neighbour resize IMAGE into OUTPUT."""
    settings: Settings = ctx.obj["settings"]
    source = _load(image)
    try:
        result = transforms.resize(source, width, height, bit_depth=settings.transforms.bit_depth)
    except LockedBitmapError as e:
        raise click.ClickException(str(e)) from e
    finally:
        source.dispose()
    _save(result, output)


@main.command("greyscale")
@click.argument("image", type=IMAGE_PATH)
@click.argument("output", type=OUTPUT_PATH)
@click.pass_context
def greyscale(ctx: click.Context, image: Path, output: Path) -> None:
    """Convert IMAGE to grey scale, keeping alpha."""
    settings: Settings = ctx.obj["settings"]
    source = _load(image)
    result = transforms.grey_scale(source, bit_depth=settings.transforms.bit_depth)
    source.dispose()
    _save(result, output)


@main.command("binarize")
@click.argument("image", type=IMAGE_PATH)
@click.argument("output", type=OUTPUT_PATH)
@click.option("--threshold", type=click.IntRange(0, 255), default=None, help="Luma threshold")
@click.option("--brighter", callback=_parse_color, default=None, help="Hex color above the threshold")
@click.option("--darker", callback=_parse_color, default=None, help="Hex color at or below the threshold")
@click.pass_context
def binarize(
    ctx: click.Context,
    image: Path,
    output: Path,
    threshold: int | None,
    brighter: Color | None,
    darker: Color | None,
) -> None:
    """Map IMAGE to two colors by brightness."""
    settings: Settings = ctx.obj["settings"]
    defaults = settings.transforms

    source = _load(image)
    result = transforms.to_binary_image(
        source,
        threshold if threshold is not None else defaults.binary_threshold,
        brighter or defaults.brighter_color,
        darker or defaults.darker_color,
        bit_depth=defaults.bit_depth,
    )
    source.dispose()
    _save(result, output)


if __name__ == "__main__":
    main()
