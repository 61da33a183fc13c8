"""
Console output utilities for relver using Rich.

This module provides user-facing output helpers for CLI commands.
For diagnostic or debug output, use :mod:`relver.utils.logger`.

Guidelines:
- print_* functions: user-facing status messages (stderr)
- print_table: structured human-readable output (stdout)
- Machine-readable output (properties, JSON) bypasses Rich entirely
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

RELVER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_err_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _build_console(*, stderr: bool) -> Console:
    use_color = _should_use_color()
    return Console(
        theme=RELVER_THEME,
        no_color=not use_color,
        highlight=use_color,
        stderr=stderr,
    )


def _get_console() -> Console:
    """Return the singleton stdout Console."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = _build_console(stderr=False)
    return _console


def _get_err_console() -> Console:
    """Return the singleton stderr Console used for status messages."""
    global _err_console

    if _err_console is None:
        with _console_lock:
            if _err_console is None:
                _err_console = _build_console(stderr=True)
    return _err_console


def reconfigure_console() -> None:
    """Reset the global console instances.

    Useful if environment variables (e.g. NO_COLOR) change at runtime.
    """
    global _console, _err_console
    with _console_lock:
        _console = None
        _err_console = None


# ---------------------------------------------------------------------------
# Status message helpers
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    """Print a success message."""
    _get_err_console().print(f"{prefix} {message}", style="success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    _get_err_console().print(f"{prefix} {message}", style="error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    _get_err_console().print(f"{prefix} {message}", style="warning")


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        column_styles: Per-column style configuration.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)
