"""Shared Rich console for CLI output."""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console


def safe_print(message: str, style: str | None = None) -> None:
    """Print a line through the shared console; style is a Rich style string."""
    get_console().print(message, style=style)
