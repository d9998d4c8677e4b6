"""Rich console output helpers for nas-tools."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# Module-level verbosity flags (set by cli.py after argument parsing)
_verbose_enabled: bool = False
_debug_enabled: bool = False
_quiet_enabled: bool = False

# Custom theme for nas-tools
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "file": "magenta",
        "music": "blue",
        "progress": "cyan",
    }
)

# Global console instances
console = Console(theme=THEME, stderr=False)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Configure module-level verbosity flags.

    Called from the CLI entry point after argument parsing.
    """
    global _verbose_enabled, _debug_enabled, _quiet_enabled
    _verbose_enabled = verbose or debug  # debug implies verbose
    _debug_enabled = debug
    _quiet_enabled = quiet and not _verbose_enabled


def set_color(enabled: bool) -> None:
    """Enable or disable color on both console instances."""
    console.no_color = not enabled
    error_console.no_color = not enabled


def setup_logging() -> None:
    """Route library log records to stderr through rich.

    Level follows the verbosity flags: WARNING by default, INFO with
    --verbose and DEBUG with --debug.
    """
    if _debug_enabled:
        level = logging.DEBUG
    elif _verbose_enabled:
        level = logging.INFO
    else:
        level = logging.WARNING

    root = logging.getLogger("nas_tools")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            console=error_console,
            show_time=False,
            show_path=_debug_enabled,
            markup=False,
        )
        root.addHandler(handler)
    root.propagate = False


def info(message: str) -> None:
    """Print an info message."""
    if _quiet_enabled:
        return
    console.print(f"[info]{escape(message)}[/info]")


def warning(message: str) -> None:
    """Print a warning message to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error message to stderr.

    Args:
        message: The error message.
        hint: Optional hint for resolution.
    """
    error_console.print(f"[error]Error:[/error] {escape(message)}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {escape(hint)}")


def success(message: str) -> None:
    """Print a success message."""
    if _quiet_enabled:
        return
    console.print(f"[success]{escape(message)}[/success]")


def progress(message: str) -> None:
    """Print a step-in-progress message."""
    if _quiet_enabled:
        return
    console.print(f"[progress]>[/progress] {escape(message)}")


def create_table(title: str | None = None, **kwargs: Any) -> Table:
    """Create a styled table.

    Args:
        title: Optional table title.
        **kwargs: Additional Table arguments.

    Returns:
        Rich Table instance.
    """
    return Table(title=title, **kwargs)


def print_path(path: str, prefix: str = "") -> None:
    """Print a path with styling.

    Args:
        path: File or directory path.
        prefix: Optional prefix.
    """
    if _quiet_enabled:
        return
    if prefix:
        console.print(f"{escape(prefix)} [path]{escape(path)}[/path]")
    else:
        console.print(f"[path]{escape(path)}[/path]")


def print_file(name: str, *, indent: int = 2, style: str = "file") -> None:
    """Print a file name, indented, without markup interpretation of the name."""
    if _quiet_enabled:
        return
    console.print(" " * indent, end="")
    console.print(name, style=style, markup=False, highlight=False)
