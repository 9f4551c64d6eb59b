"""Rich Console factory and theme for postctl output.

Consoles render into a StringIO buffer so ``format_result() -> str``
holds. In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

POSTCTL_THEME = Theme(
    {
        "post.ok": "bold green",
        "post.error": "bold red",
        "post.warning": "bold yellow",
        "post.op": "bold cyan",
        "post.key": "dim",
        "post.id": "bold blue",
        "post.path": "dim",
        "post.title": "bold",
        "post.date": "magenta",
        "post.draft": "italic yellow",
    }
)

SEVERITY_STYLES: dict[str, str] = {
    "error": "post.error",
    "warning": "post.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=POSTCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    """Return the Rich style name for an issue severity."""
    return SEVERITY_STYLES.get(severity, "")
