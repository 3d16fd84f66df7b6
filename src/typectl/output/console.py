"""Rich Console factory and theme for typectl output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract.  In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TYPECTL_THEME = Theme(
    {
        "tc.ok": "bold green",
        "tc.error": "bold red",
        "tc.warning": "bold yellow",
        "tc.op": "bold cyan",
        "tc.key": "dim",
        "tc.id": "bold blue",
        "tc.alias": "bold",
        "tc.group": "magenta",
        "tc.standard": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TYPECTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
