"""CLI interface for glyphterm."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from glyphterm import __version__
from glyphterm.config import CONFIG_FILE, GlyphtermConfig
from glyphterm.cursor import Cursor, Position
from glyphterm.errors import GlyphtermError, ResourceError
from glyphterm.timer import FrameTimer, timestamp

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr through Rich."""
    logger = logging.getLogger("glyphterm")
    logger.handlers = [RichHandler(console=err_console, show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def report_fatal(operation: str, error: BaseException) -> None:
    """Print the single fatal error line for a failed operation."""
    err_console.print(
        f"[ {timestamp()} ] ERROR: In {operation}: {error}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _run_or_exit(ctx: click.Context, operation: Callable[[], None]) -> None:
    try:
        operation()
    except GlyphtermError as e:
        report_fatal(e.operation, e)
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="glyphterm")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """glyphterm - bitmap glyph drawing for terminal animations.

    \b
    Examples:
      glyphterm draw HELLO             # Draw HELLO at the top left
      glyphterm draw 42 -c 10 -r 5     # Draw 42 at column 10, row 5
      glyphterm animate --fps 30       # Write frames to a file at 30 fps
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = GlyphtermConfig.load(config_path)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("text")
@click.option("--column", "-c", type=click.IntRange(min=1), default=1, help="Origin column")
@click.option("--row", "-r", type=click.IntRange(min=1), default=1, help="Origin row")
@click.option("--clear", is_flag=True, help="Clear the screen before drawing")
@click.pass_context
def draw(ctx: click.Context, text: str, column: int, row: int, clear: bool) -> None:
    """Draw TEXT using glyph bitmap files."""
    from glyphterm.glyphs import GlyphRenderer

    config: GlyphtermConfig = ctx.obj["config"]

    def _draw() -> None:
        cursor = Cursor(console)
        bounds = cursor.query_extent()
        if clear:
            cursor.clear_screen()
        renderer = GlyphRenderer(cursor, config.glyphs)
        result = renderer.draw_string(text, Position(column, row), bounds)
        cursor.move_to(1, min(bounds.rows, row + result.height))
        if result.skipped:
            err_console.print(
                f"[yellow]Skipped (no glyph):[/yellow] {escape(' '.join(result.skipped))}", soft_wrap=True
            )

    _run_or_exit(ctx, _draw)


@main.command()
@click.pass_context
def extent(ctx: click.Context) -> None:
    """Print the terminal size as COLUMNS x ROWS."""

    def _extent() -> None:
        size = Cursor(console).query_extent()
        console.print(f"{size.columns} x {size.rows}")

    _run_or_exit(ctx, _extent)


@main.command()
def clear() -> None:
    """Clear the screen and home the cursor."""
    Cursor(console).clear_screen()


@main.command()
@click.option("--frames", "-n", type=click.IntRange(min=1), default=None, help="Frames to run")
@click.option("--fps", type=click.IntRange(min=1), default=None, help="Frames per second")
@click.option("--output", "-o", default=None, help="Output file (prompted for if omitted)")
@click.option("--draw/--no-draw", "draw_frames", default=None, help="Draw frame numbers with glyphs")
@click.pass_context
def animate(
    ctx: click.Context,
    frames: int | None,
    fps: int | None,
    output: str | None,
    draw_frames: bool | None,
) -> None:
    """Write one timestamped line per frame to a file.

    \b
    Examples:
      glyphterm animate                # 5 frames at 60 fps, prompts for a file
      glyphterm animate -n 10 -o log   # 10 frames into ./log
    """
    from glyphterm.animation import AnimationLoop
    from glyphterm.glyphs import GlyphRenderer
    from glyphterm.keyboard import prompt_line
    from glyphterm.strbuf import format_string

    config: GlyphtermConfig = ctx.obj["config"]
    if frames is not None:
        config.animation.max_frames = frames
    if fps is not None:
        config.timing.frames_per_second = fps
    if draw_frames is not None:
        config.animation.draw_frames = draw_frames

    def _animate() -> None:
        cursor = Cursor(console)
        name = output if output is not None else prompt_line(cursor, "Write a name for the file: ")
        filename = format_string("%s", name)

        on_frame: Callable[[int], None] | None = None
        if config.animation.draw_frames:
            renderer = GlyphRenderer(cursor, config.glyphs)
            bounds = cursor.query_extent()

            def _draw_frame(frame: int) -> None:
                cursor.clear_screen()
                renderer.draw_string(str(frame), Position(1, 1), bounds)
                cursor.move_to(1, bounds.rows)

            on_frame = _draw_frame

        with filename:
            try:
                with open(str(filename), "w") as stream:
                    AnimationLoop(
                        FrameTimer(),
                        config.timing.nanos_per_frame,
                        config.animation.max_frames,
                        console=console,
                        on_frame=on_frame,
                    ).run(stream)
            except OSError as e:
                raise ResourceError("animate", e) from e

            console.print(f"Please review file: {filename}", highlight=False)

    _run_or_exit(ctx, _animate)
