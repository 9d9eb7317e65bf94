"""The ``argsugar`` executable: inspect and query command lines.

This module is the **sole error boundary** of the executable.  It
catches :class:`~argsugar.exceptions.ArgSugarError`, ``KeyboardInterrupt``
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Its own arguments use ``--`` as the only switch, so a command line
handed over with ``--line`` may start with ``-`` or ``/``::

    argsugar --inspect --line '-name "John Smith" --verbose'
    echo '-x 1 2 -y 3' | argsugar --query x

The switch set of the *inspected* line comes from ``ARGSUGAR_SWITCHES``
(see :mod:`argsugar.cli.settings`).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from argsugar.cli import exit_codes
from argsugar.cli.application import ConsoleApplication
from argsugar.cli.command import BoundCommand
from argsugar.cli.console import configure_logging, console, output, print_error
from argsugar.cli.dispatcher import CommandDispatcher
from argsugar.cli.settings import Settings, load_settings
from argsugar.cli.token_table import render_tokens
from argsugar.core.binder import option
from argsugar.core.parameters import Parameters
from argsugar.core.tokenizer import parse
from argsugar.exceptions import ArgSugarError, MissingInputError
from argsugar.version import __version__

USAGE: str = """\
usage: argsugar --inspect [--line LINE] [--verbose]
       argsugar --query NAME [--line LINE] [--verbose]
       argsugar --version

Tokenize LINE (or stdin) and show its tokens, or print the values of NAME.
Switches of LINE: ARGSUGAR_SWITCHES (default "- -- /").\
"""


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass
class VersionOptions:
    version: bool = option(required=True)


@dataclass
class InspectOptions:
    inspect: bool = option(required=True)
    line: str | None = None


@dataclass
class QueryOptions:
    query: str = option(required=True)
    line: str | None = None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _read_line(line: str | None, settings: Settings) -> Parameters:
    """Tokenize *line*, or stdin when no line was given."""
    if line is None:
        stdin = sys.stdin
        if stdin is None or stdin.isatty():
            raise MissingInputError(
                "No command line to work on.",
                hint="Pass --line LINE or pipe a command line on stdin.",
            )
        line = stdin.read()
    return parse(line, list(settings.switches))


class VersionCommand(BoundCommand[VersionOptions]):
    options_type = VersionOptions

    def run(self, options: VersionOptions) -> int:
        output.print(f"argsugar {__version__}", markup=False)
        return self.success()


class InspectCommand(BoundCommand[InspectOptions]):
    """Show every token of a command line with its role."""

    options_type = InspectOptions

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    def run(self, options: InspectOptions) -> int:
        parameters = _read_line(options.line, self._settings)
        render_tokens(parameters)
        return self.success()


class QueryCommand(BoundCommand[QueryOptions]):
    """Print the values of one parameter, one per line."""

    options_type = QueryOptions

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    def run(self, options: QueryOptions) -> int:
        parameters = _read_line(options.line, self._settings)
        if not parameters.has_value(options.query):
            console.print(f"[yellow]{options.query!r} has no value.[/yellow]")
            return self.fail()
        for value in parameters.as_strings(options.query):
            output.print(value, markup=False)
        return self.success()


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

class ArgSugarApplication(ConsoleApplication):
    """Route ``argsugar`` invocations to their command."""

    switches = ("--",)

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.settings = settings

    def usage(self) -> int:
        console.print(USAGE, markup=False)
        return exit_codes.SUCCESS if not self.arguments else exit_codes.GENERAL_ERROR

    def validate(self) -> bool:
        return len(self.arguments) > 0

    def main(self) -> int:
        verbose = self.arguments.contains("verbose")
        configure_logging(logging.DEBUG if verbose else self.settings.log_level)

        dispatcher = CommandDispatcher(
            [
                VersionCommand(),
                InspectCommand(self.settings),
                QueryCommand(self.settings),
            ],
            fallback=lambda _parameters: self.usage(),
        )
        return dispatcher.dispatch(self.arguments)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the argsugar CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    environ:
        Environment for :func:`~argsugar.cli.settings.load_settings`.
        ``None`` reads ``os.environ``.

    Returns
    -------
    int
        OS process exit code.
    """
    settings = load_settings(environ)
    return ArgSugarApplication(settings).run(argv)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ArgSugarError as exc:
        print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
