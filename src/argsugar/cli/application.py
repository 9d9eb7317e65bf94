"""Base class for console programs built on :class:`Parameters`.

Subclasses implement :meth:`ConsoleApplication.main`; :meth:`run` takes
care of building :attr:`arguments` from the process argument vector,
validating them and, when a debugger is attached, keeping the console
window open until a key is pressed.
"""

from __future__ import annotations

import abc
import inspect
import logging
import sys
from collections.abc import Sequence
from typing import Any, ClassVar

from argsugar.cli import exit_codes
from argsugar.cli.console import console
from argsugar.core.parameters import Parameters
from argsugar.core.tokenizer import parse, parse_tokens
from argsugar.exceptions import DependencyError

logger = logging.getLogger(__name__)

_DEBUGGER_MODULES: tuple[str, ...] = ("pydevd", "debugpy")
_PAUSE_MESSAGE: str = "Press any key to exit..."


def debugger_attached() -> bool:
    """Return whether an IDE debugger has been loaded into this process."""
    return any(name in sys.modules for name in _DEBUGGER_MODULES)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def wait_for_key(message: str = _PAUSE_MESSAGE) -> None:
    """Block until the user presses a key (Enter without questionary)."""
    try:
        questionary = _import_questionary()
    except DependencyError:
        input(message)
        return
    questionary.press_any_key_to_continue(message).ask()


class ConsoleApplication(abc.ABC):
    """Skeleton of a console program.

    Attributes
    ----------
    switches:
        Switch prefixes used to parse the argument vector.  ``None``
        selects the defaults (``-``, ``--``, ``/``).
    arguments:
        The parsed command line, set by :meth:`run` or
        :meth:`set_arguments`.
    """

    switches: ClassVar[Sequence[str] | None] = None

    def __init__(self) -> None:
        self.arguments: Parameters = Parameters((), self.switches)

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse *argv* (``sys.argv[1:]`` by default), validate and run :meth:`main`."""
        if argv is None:
            argv = sys.argv[1:]
        self.arguments = parse_tokens(argv, self.switches)
        logger.debug("Arguments: %r", self.arguments)

        try:
            if not self.validate():
                return self.usage()
            return self.main()
        finally:
            if debugger_attached():
                console.print()
                wait_for_key()

    def set_arguments(self, command_line: str, switches: Sequence[str] = ()) -> None:
        """Replace :attr:`arguments` with a tokenized *command_line*.

        The switch set defaults to empty: every token is then looked up
        bare and values run to the end of the line.
        """
        self.arguments = parse(command_line, switches)

    def validate(self) -> bool:
        """Return whether :attr:`arguments` are acceptable.  Always true here."""
        return True

    def usage(self) -> int:
        """Print usage help and return the exit code for invalid input."""
        doc = inspect.getdoc(self)
        if doc:
            console.print(doc, markup=False)
        return exit_codes.GENERAL_ERROR

    @abc.abstractmethod
    def main(self) -> int:
        """Program logic.  Return a process exit code."""
