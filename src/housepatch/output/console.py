"""Rich Console factory and theme for housepatch output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. Rich drops color codes when it does
not detect a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HOUSE_THEME = Theme(
    {
        "hp.ok": "bold green",
        "hp.error": "bold red",
        "hp.warning": "bold yellow",
        "hp.op": "bold cyan",
        "hp.key": "dim",
        "hp.id": "bold blue",
        "hp.name": "bold",
        "hp.kind": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HOUSE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
