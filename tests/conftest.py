"""Shared fixtures for glyphterm tests."""

from __future__ import annotations

import io
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from rich.console import Console

from glyphterm.cursor import Cursor


class FakeClock:
    """A nanosecond clock that only moves when told to."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int) -> None:
        self.now += nanos


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def fake_clock() -> FakeClock:
    """A controllable clock starting at t=1s."""
    return FakeClock(now=1_000_000_000)


@pytest.fixture
def terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make Rich treat the test console as a capable colour terminal."""
    monkeypatch.setenv("TERM", "xterm-256color")
    for name in ("NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def term_console(terminal_env: None) -> Console:
    """A 40x12 terminal console writing into a string buffer."""
    return Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="standard",
        width=40,
        height=12,
    )


@pytest.fixture
def cursor(term_console: Console) -> Cursor:
    """A Cursor bound to the test terminal console."""
    return Cursor(term_console)


@pytest.fixture
def art_dir(temp_project: Path) -> Path:
    """Create ./art with glyphs for 'A', 'B' and '1'."""
    art = temp_project / "art"
    art.mkdir()
    (art / "A.txt").write_text("010\n101\n111\n101\n")
    (art / "B.txt").write_text("110\n101\n110\n")
    (art / "1.txt").write_text("01\n11\n01\n")
    return art
