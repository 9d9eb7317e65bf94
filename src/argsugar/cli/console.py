"""CLI console helpers with optional Rich support.

Module-level imports of optional UI dependencies are avoided so that
bootstrap paths (usage, ``-version``) keep working when Rich is not
installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from argsugar.exceptions import ArgSugarError, DependencyError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``DependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance, targeting stderr by default."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain print.

        Pass ``markup=False`` for user-supplied text that may contain
        square brackets.
        """
        stream = sys.stderr if self._stderr else sys.stdout
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except DependencyError:
            print(*objects, file=stream)
            return
        rich_console.print(*objects, markup=markup, highlight=markup)


console = _ConsoleProxy(stderr=True)
"""Diagnostics, errors and prompts."""

output = _ConsoleProxy(stderr=False)
"""Command results meant to be piped."""


def print_error(exc: ArgSugarError) -> None:
    """Render an :class:`ArgSugarError` and its hint on the console."""
    console.print(f"[bold red]Error:[/bold red] {exc}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def configure_logging(level: int | str) -> None:
    """Route log records to stderr, through Rich when it is installed."""
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        logging.basicConfig(
            level=level,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
            force=True,
        )
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=get_rich_console(), show_path=False)],
        force=True,
    )
