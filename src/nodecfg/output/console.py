"""Rich Console factory and theme for nodecfg output.

Consoles render into a StringIO buffer so every renderer returns a
plain ``str``. Rich drops color codes by itself when the output is not
a terminal (CliRunner, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NODECFG_THEME = Theme(
    {
        "nodecfg.ok": "bold green",
        "nodecfg.error": "bold red",
        "nodecfg.warning": "bold yellow",
        "nodecfg.op": "bold cyan",
        "nodecfg.key": "dim",
        "nodecfg.path": "dim",
        "nodecfg.section": "bold blue",
        "nodecfg.explicit": "bold",
        "nodecfg.default": "dim",
        "nodecfg.dir": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width for stable test output.
    """
    return Console(
        file=StringIO(),
        theme=NODECFG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_entry(explicit: bool) -> str:
    """Style for a resolved value: bold when set, dim when defaulted."""
    return "nodecfg.explicit" if explicit else "nodecfg.default"
