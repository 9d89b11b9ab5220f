"""Rich Console factory and theme for ddnsctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DDNS_THEME = Theme(
    {
        "ddns.ok": "bold green",
        "ddns.error": "bold red",
        "ddns.warning": "bold yellow",
        "ddns.op": "bold cyan",
        "ddns.key": "dim",
        "ddns.domain": "bold",
        "ddns.wildcard": "magenta",
        "ddns.address": "bold blue",
        "ddns.true": "green",
        "ddns.false": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DDNS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_domain(name: str) -> str:
    """Return the Rich style name for a domain."""
    return "ddns.wildcard" if name.startswith("*.") else "ddns.domain"


def style_for_bool(value: bool) -> str:
    return "ddns.true" if value else "ddns.false"
