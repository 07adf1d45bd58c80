"""
Tests for the command-line interface.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from PIL import Image

from locked_bitmap import __version__
from locked_bitmap.cli import main


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click test runner."""
    return CliRunner()


class TestMain:
    """Tests for the command group."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("info", "find", "crop", "resize", "greyscale", "binarize"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestInfo:
    """Tests for the info command."""

    def test_info(self, runner, haystack_png):
        result = runner.invoke(main, ["info", str(haystack_png)])

        assert result.exit_code == 0
        assert "24 bpp" in result.output
        assert "20 bytes" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["info", str(tmp_path / "nope.png")])
        assert result.exit_code == 2

    def test_not_an_image(self, runner, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("not an image")

        result = runner.invoke(main, ["info", str(path)])

        assert result.exit_code == 1
        assert "Cannot read image" in result.output


class TestFind:
    """Tests for the find command."""

    def test_found(self, runner, haystack_png, needle_png):
        result = runner.invoke(main, ["find", str(haystack_png), str(needle_png)])

        assert result.exit_code == 0
        assert "1 match(es) with the exact comparator" in result.output
        assert "│ 1 │ 3 │ 2 │" in result.output

    def test_find_all(self, runner, haystack_png, needle_png):
        result = runner.invoke(
            main, ["find", str(haystack_png), str(needle_png), "--all", "--comparator", "rgb"]
        )

        assert result.exit_code == 0
        assert "1 match(es) with the rgb comparator" in result.output

    def test_not_found(self, runner, haystack_png, missing_needle_png):
        result = runner.invoke(main, ["find", str(haystack_png), str(missing_needle_png)])

        assert result.exit_code == 1
        assert "No match" in result.output

    def test_tolerance(self, runner, tmp_path, haystack_png):
        needle = tmp_path / "near_red.png"
        Image.new("RGB", (2, 2), (250, 4, 0)).save(needle)

        strict = runner.invoke(main, ["find", str(haystack_png), str(needle)])
        loose = runner.invoke(
            main,
            ["find", str(haystack_png), str(needle), "--comparator", "tolerance", "--tolerance", "5"],
        )

        assert strict.exit_code == 1
        assert loose.exit_code == 0

    def test_rect_excludes_match(self, runner, haystack_png, needle_png):
        result = runner.invoke(
            main, ["find", str(haystack_png), str(needle_png), "--rect", "0", "0", "2", "4"]
        )
        assert result.exit_code == 1

    def test_rect_includes_match(self, runner, haystack_png, needle_png):
        result = runner.invoke(
            main, ["find", str(haystack_png), str(needle_png), "--rect", "3", "2", "3", "2"]
        )
        assert result.exit_code == 0

    def test_inverted_rect(self, runner, haystack_png, needle_png):
        result = runner.invoke(
            main, ["find", str(haystack_png), str(needle_png), "--rect", "5", "5", "0", "0"]
        )
        assert result.exit_code == 2

    def test_unknown_comparator(self, runner, haystack_png, needle_png):
        result = runner.invoke(
            main, ["find", str(haystack_png), str(needle_png), "--comparator", "fuzzy"]
        )
        assert result.exit_code == 2
        assert "fuzzy" in result.output

    def test_comparator_from_config(self, runner, tmp_path, haystack_png):
        config = tmp_path / "search.toml"
        config.write_text('[search]\ncomparator = "tolerance"\ntolerance = 10\n')
        needle = tmp_path / "near_red.png"
        Image.new("RGB", (2, 2), (250, 4, 0)).save(needle)

        result = runner.invoke(
            main, ["--config", str(config), "find", str(haystack_png), str(needle)]
        )

        assert result.exit_code == 0
        assert "with the tolerance comparator" in result.output
        assert "│ 1 │ 3 │ 2 │" in result.output


class TestTransformCommands:
    """Tests for crop, resize, greyscale and binarize."""

    def test_crop(self, runner, tmp_path, haystack_png):
        output = tmp_path / "crop.png"

        result = runner.invoke(
            main,
            [
                "crop",
                str(haystack_png),
                str(output),
                "--x",
                "3",
                "--y",
                "2",
                "--width",
                "2",
                "--height",
                "2",
            ],
        )

        assert result.exit_code == 0
        assert "Wrote" in result.output
        with Image.open(output) as image:
            assert image.size == (2, 2)
            assert image.mode == "RGBA"
            assert image.getpixel((1, 1)) == (255, 0, 0, 255)

    def test_crop_out_of_range(self, runner, tmp_path, haystack_png):
        result = runner.invoke(
            main,
            [
                "crop",
                str(haystack_png),
                str(tmp_path / "crop.png"),
                "--x",
                "5",
                "--width",
                "2",
                "--height",
                "1",
            ],
        )

        assert result.exit_code == 1
        assert "exceeds" in result.output
        assert not (tmp_path / "crop.png").exists()

    def test_resize(self, runner, tmp_path, haystack_png):
        output = tmp_path / "big.png"

        result = runner.invoke(
            main, ["resize", str(haystack_png), str(output), "--width", "12", "--height", "10"]
        )

        assert result.exit_code == 0
        with Image.open(output) as image:
            assert image.size == (12, 10)
            assert image.getpixel((6, 4)) == (255, 0, 0, 255)
            assert image.getpixel((0, 0)) == (255, 255, 255, 255)

    def test_resize_invalid(self, runner, tmp_path, haystack_png):
        result = runner.invoke(
            main,
            ["resize", str(haystack_png), str(tmp_path / "x.png"), "--width", "0", "--height", "1"],
        )
        assert result.exit_code == 1

    def test_greyscale(self, runner, tmp_path, haystack_png):
        output = tmp_path / "grey.png"

        result = runner.invoke(main, ["greyscale", str(haystack_png), str(output)])

        assert result.exit_code == 0
        with Image.open(output) as image:
            assert image.getpixel((3, 2)) == (76, 76, 76, 255)

    def test_greyscale_with_config_depth(self, runner, tmp_path, haystack_png):
        config = tmp_path / "depth.toml"
        config.write_text("[transforms]\nbit_depth = 24\n")
        output = tmp_path / "grey.png"

        result = runner.invoke(
            main, ["--config", str(config), "greyscale", str(haystack_png), str(output)]
        )

        assert result.exit_code == 0
        with Image.open(output) as image:
            assert image.mode == "RGB"

    def test_binarize(self, runner, tmp_path, haystack_png):
        output = tmp_path / "mask.png"

        result = runner.invoke(
            main,
            [
                "binarize",
                str(haystack_png),
                str(output),
                "--threshold",
                "100",
                "--brighter",
                "#00FF00",
            ],
        )

        assert result.exit_code == 0
        with Image.open(output) as image:
            assert image.getpixel((0, 0)) == (0, 255, 0, 255)
            assert image.getpixel((3, 2)) == (0, 0, 0, 255)

    def test_binarize_bad_color(self, runner, tmp_path, haystack_png):
        result = runner.invoke(
            main,
            ["binarize", str(haystack_png), str(tmp_path / "m.png"), "--darker", "#12"],
        )
        assert result.exit_code == 2
