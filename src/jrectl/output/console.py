"""Rich Console factory and theme for jrectl output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` step. Rich drops color codes automatically when
the real stdout is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

JRE_THEME = Theme(
    {
        "jre.ok": "bold green",
        "jre.error": "bold red",
        "jre.warning": "bold yellow",
        "jre.op": "bold cyan",
        "jre.key": "dim",
        "jre.path": "dim",
        "jre.module": "blue",
        "jre.state.image_built": "bold green",
        "jre.state.skipped": "bold yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=JRE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    return f"jre.state.{state}" if state in ("image_built", "skipped") else "jre.op"
