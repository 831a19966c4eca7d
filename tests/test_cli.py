"""Tests for glyphterm.cli module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from glyphterm.cli import main
from glyphterm.cursor import ScreenExtent
from glyphterm.errors import ClockError
from glyphterm.glyphs import DrawResult


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


class TestMainGroup:
    """Tests for main CLI group."""

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "glyphterm" in result.output
        assert "0.1.0" in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "bitmap glyph drawing" in result.output

    def test_no_subcommand_shows_help(self, cli_runner: CliRunner, temp_project: Path) -> None:
        result = cli_runner.invoke(main, [])
        assert result.exit_code == 0
        assert "draw" in result.output
        assert "animate" in result.output


class TestExtentCommand:
    """Tests for extent command."""

    def test_not_a_terminal_is_fatal(self, cli_runner: CliRunner, temp_project: Path) -> None:
        """CliRunner output is not a terminal, so the query fails explicitly."""
        result = cli_runner.invoke(main, ["extent"])
        assert result.exit_code == 1
        assert "ERROR: In terminal:" in result.output
        assert "not attached to a terminal" in result.output

    def test_prints_columns_by_rows(self, cli_runner: CliRunner, temp_project: Path) -> None:
        with patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(120, 40)):
            result = cli_runner.invoke(main, ["extent"])
        assert result.exit_code == 0
        assert "120 x 40" in result.output


class TestDrawCommand:
    """Tests for draw command."""

    def test_draws_at_origin(self, cli_runner: CliRunner, temp_project: Path) -> None:
        with (
            patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(80, 24)),
            patch(
                "glyphterm.glyphs.GlyphRenderer.draw_string", return_value=DrawResult(height=5)
            ) as draw_string,
        ):
            result = cli_runner.invoke(main, ["draw", "HI", "-c", "3", "-r", "2"])

        assert result.exit_code == 0
        text, origin, bounds = draw_string.call_args.args
        assert text == "HI"
        assert tuple(origin) == (3, 2)
        assert bounds == ScreenExtent(80, 24)

    def test_missing_glyph_is_fatal(self, cli_runner: CliRunner, temp_project: Path) -> None:
        with patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(80, 24)):
            result = cli_runner.invoke(main, ["draw", "Q"])
        assert result.exit_code == 1
        assert "ERROR: In draw:" in result.output
        assert "art/Q.txt" in result.output

    def test_skip_from_config(self, cli_runner: CliRunner, temp_project: Path) -> None:
        config_dir = temp_project / ".glyphterm"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"glyphs": {"on_missing": "skip"}}))

        with patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(80, 24)):
            result = cli_runner.invoke(main, ["draw", "Q"])

        assert result.exit_code == 0
        assert "Skipped (no glyph)" in result.output

    def test_draws_real_glyphs(
        self, cli_runner: CliRunner, art_dir: Path, temp_project: Path
    ) -> None:
        with patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(80, 24)):
            result = cli_runner.invoke(main, ["draw", "AB1"])
        assert result.exit_code == 0

    def test_undecodable_glyph_bytes_draw(
        self, cli_runner: CliRunner, art_dir: Path, temp_project: Path
    ) -> None:
        (art_dir / "A.txt").write_bytes(b"1\xff1\n")
        with patch("glyphterm.cli.Cursor.query_extent", return_value=ScreenExtent(80, 24)):
            result = cli_runner.invoke(main, ["draw", "A"])
        assert result.exit_code == 0
        assert result.exception is None


class TestAnimateCommand:
    """Tests for animate command."""

    def test_writes_frames_to_output(self, cli_runner: CliRunner, temp_project: Path) -> None:
        result = cli_runner.invoke(main, ["animate", "-n", "3", "--fps", "1000", "-o", "frames.log"])

        assert result.exit_code == 0
        lines = (temp_project / "frames.log").read_text().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("Frame number 1 at ")
        assert "Please review file: frames.log" in result.output

    def test_prompts_for_filename(self, cli_runner: CliRunner, temp_project: Path) -> None:
        with patch("glyphterm.keyboard.prompt_line", return_value="typed.log") as prompt:
            result = cli_runner.invoke(main, ["animate", "-n", "1", "--fps", "1000"])

        assert result.exit_code == 0
        assert prompt.call_args.args[1] == "Write a name for the file: "
        assert (temp_project / "typed.log").exists()

    def test_unwritable_output_is_fatal(self, cli_runner: CliRunner, temp_project: Path) -> None:
        result = cli_runner.invoke(main, ["animate", "-n", "1", "-o", "missing/dir/out.log"])
        assert result.exit_code == 1
        assert "ERROR: In animate:" in result.output
        assert "missing/dir/out.log" in result.output

    def test_clock_failure_is_fatal(self, cli_runner: CliRunner, temp_project: Path) -> None:
        with patch("glyphterm.timer.FrameTimer.start", side_effect=ClockError("clock unavailable")):
            result = cli_runner.invoke(main, ["animate", "-n", "1", "-o", "out.log"])
        assert result.exit_code == 1
        assert "ERROR: In timer: clock unavailable" in result.output
