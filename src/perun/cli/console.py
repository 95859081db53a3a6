"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from perun.core.models import Verbosity
from perun.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


class ConsoleLogger:
    """Levelled logger on top of :data:`console`.

    Messages below the configured :class:`Verbosity` are dropped;
    ``quiet`` drops everything.  :meth:`always` ignores the level.

    Parameters
    ----------
    verbosity:
        Level name from ``--verbosity``; empty means ``INFO``.
    quiet:
        Value of ``--quiet``.
    """

    def __init__(self, verbosity: str = "", *, quiet: bool = False) -> None:
        self.level: Verbosity = Verbosity(verbosity) if verbosity else Verbosity.INFO
        self.quiet = quiet

    def enabled(self, level: Verbosity) -> bool:
        return not self.quiet and level.rank >= self.level.rank

    def always(self, message: str) -> None:
        if not self.quiet:
            console.print(message)

    def error(self, message: str) -> None:
        if self.enabled(Verbosity.ERROR):
            console.print(f"[bold red]Error:[/bold red] {message}")

    def warning(self, message: str) -> None:
        if self.enabled(Verbosity.INFO):
            console.print(f"[yellow]Warning:[/yellow] {message}")

    def info(self, message: str) -> None:
        if self.enabled(Verbosity.INFO):
            console.print(message)

    def debug(self, message: str) -> None:
        if self.enabled(Verbosity.DEBUG):
            console.print(f"[dim]DEBUG:[/dim] {message}")

    def trace(self, message: str) -> None:
        if self.enabled(Verbosity.TRACE):
            console.print(f"[dim]TRACE:[/dim] {message}")
