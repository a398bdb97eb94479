# this_file: tests/test_cli.py

"""Tests for the rasterize-text command."""

import logging
import sys

import pytest
from click.testing import CliRunner
from PIL import Image

from rasterize_text import EN_FONT, FontFileReadError, __version__
from rasterize_text.cli import cli, format_error, main


@pytest.fixture
def runner():
    return CliRunner()


class TestRender:
    """Test rendering through the command."""

    def test_renders_png(self, runner, tmp_path):
        """Text is written as an RGBA PNG of the planned size."""
        output = tmp_path / "out.png"
        result = runner.invoke(
            cli,
            ["-t", "This is a test, we love Unicode ÅΩ!", "-o", str(output), "-c", "255 0 0 255"],
        )
        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.mode == "RGBA"
            assert image.size == (740, 45)

    def test_long_options(self, runner, tmp_path):
        """Long option names work the same as short ones."""
        output = tmp_path / "long.png"
        result = runner.invoke(
            cli,
            [
                "--text", "This is a test!",
                "--output", str(output),
                "--color", "0 0 0 255",
                "--size", "50",
                "--verbosity", "error",
                "--height-mode", "metrics",
            ],
        )
        assert result.exit_code == 0, result.output
        with Image.open(output) as image:
            assert image.size == (284, 51)

    def test_font_file(self, runner, tmp_path):
        """A font file given with -f is used."""
        font_path = tmp_path / "font.ttf"
        font_path.write_bytes(EN_FONT)
        output = tmp_path / "font.png"
        result = runner.invoke(cli, ["-t", "abc", "-o", str(output), "-f", str(font_path), "-s", "20"])
        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_bold(self, runner, tmp_path):
        """--bold switches to the bundled bold face."""
        regular = tmp_path / "regular.png"
        bold = tmp_path / "bold.png"
        assert runner.invoke(cli, ["-t", "Bold", "-o", str(regular)]).exit_code == 0
        assert runner.invoke(cli, ["-t", "Bold", "-o", str(bold), "-b"]).exit_code == 0
        with Image.open(regular) as r, Image.open(bold) as b:
            assert b.size[0] > r.size[0]


class TestErrors:
    """Test how failures are reported."""

    def test_text_and_output_required(self, runner, tmp_path):
        """Missing required options are usage errors."""
        assert runner.invoke(cli, ["-o", str(tmp_path / "x.png")]).exit_code == 2
        assert runner.invoke(cli, ["-t", "hello"]).exit_code == 2

    @pytest.mark.parametrize("color", ["12 34 56", "12 34 56 300", "red"])
    def test_bad_color(self, runner, tmp_path, color):
        """Unparseable colors are usage errors naming the problem."""
        result = runner.invoke(cli, ["-t", "a", "-o", str(tmp_path / "x.png"), "-c", color])
        assert result.exit_code == 2
        assert "RGBA" in result.output

    def test_bad_verbosity(self, runner, tmp_path):
        """Only the five verbosity names are accepted."""
        result = runner.invoke(cli, ["-t", "a", "-o", str(tmp_path / "x.png"), "-v", "loud"])
        assert result.exit_code == 2

    @pytest.mark.parametrize("size", ["0", "inf", "nan"])
    def test_bad_size(self, runner, tmp_path, size):
        """Size must be a positive, finite number."""
        result = runner.invoke(cli, ["-t", "a", "-o", str(tmp_path / "x.png"), "-s", size])
        assert result.exit_code == 2

    def test_missing_font_file(self, runner, tmp_path):
        """A missing font file fails with the read error."""
        result = runner.invoke(
            cli, ["-t", "a", "-o", str(tmp_path / "x.png"), "-f", str(tmp_path / "nope.ttf")]
        )
        assert result.exit_code == 1
        assert isinstance(result.exception, FontFileReadError)

    def test_main_prints_error_chain(self, monkeypatch, capsys, tmp_path):
        """main reports the error and its cause on stderr and exits 1."""
        missing = tmp_path / "nope.ttf"
        monkeypatch.setattr(
            sys, "argv", ["rasterize-text", "-t", "a", "-o", str(tmp_path / "x.png"), "-f", str(missing)]
        )
        with pytest.raises(SystemExit) as info:
            main()
        assert info.value.code == 1
        err = capsys.readouterr().err
        assert "Error: Failed to read the font file" in err
        assert "Caused by:" in err

    def test_main_empty_text(self, monkeypatch, capsys, tmp_path):
        """Text without ink cannot be written as a PNG."""
        monkeypatch.setattr(sys, "argv", ["rasterize-text", "-t", "   ", "-o", str(tmp_path / "x.png")])
        with pytest.raises(SystemExit) as info:
            main()
        assert info.value.code == 1
        assert "Cannot write an empty" in capsys.readouterr().err

    def test_main_usage_error(self, monkeypatch, capsys, tmp_path):
        """Usage errors exit 2 through main."""
        monkeypatch.setattr(sys, "argv", ["rasterize-text", "-t", "a"])
        with pytest.raises(SystemExit) as info:
            main()
        assert info.value.code == 2

    def test_format_error(self):
        """Causes are listed outermost first."""
        try:
            try:
                raise OSError("disk on fire")
            except OSError as exc:
                raise RuntimeError("could not save") from exc
        except RuntimeError as exc:
            text = format_error(exc)
        assert text == "Error: could not save\nCaused by: disk on fire"


class TestInfo:
    """Test version and help output."""

    def test_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner):
        """-h lists the options."""
        result = runner.invoke(cli, ["-h"])
        assert result.exit_code == 0
        for option in ("--text", "--output", "--color", "--size", "--font", "--verbosity"):
            assert option in result.output

    def test_debug_logging(self, runner, tmp_path):
        """-v debug lowers the root logger to DEBUG."""
        result = runner.invoke(cli, ["-t", "Hi", "-o", str(tmp_path / "x.png"), "-v", "debug"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG
