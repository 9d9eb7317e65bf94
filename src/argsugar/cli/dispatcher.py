"""Route a parameter store to the first command that accepts it."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from argsugar.cli import exit_codes
from argsugar.cli.console import print_error
from argsugar.core.parameters import Parameters
from argsugar.core.protocols import Command
from argsugar.exceptions import ArgSugarError

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Try each command in order and execute the first bindable one.

    Parameters
    ----------
    commands:
        Candidates, asked in order.  Put the most specific first.
    fallback:
        Called with the parameters when no command matches; its return
        value is the exit code.  Without one, :data:`exit_codes.GENERAL_ERROR`
        is returned.
    """

    def __init__(
        self,
        commands: Sequence[Command],
        fallback: Callable[[Parameters], int] | None = None,
    ) -> None:
        self._commands: tuple[Command, ...] = tuple(commands)
        self._fallback = fallback

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    def find(self, parameters: Parameters) -> Command | None:
        """Return the first command whose ``can_execute`` is true."""
        for command in self._commands:
            if command.can_execute(parameters):
                return command
        return None

    def dispatch(self, parameters: Parameters) -> int:
        """Execute the matching command and return its exit code.

        :class:`~argsugar.exceptions.ArgSugarError` raised by the command
        is shown on the console and mapped to ``GENERAL_ERROR``; any other
        exception propagates to the caller's error boundary.
        """
        command = self.find(parameters)
        if command is None:
            logger.debug("No command accepted %r", parameters)
            if self._fallback is not None:
                return self._fallback(parameters)
            return exit_codes.GENERAL_ERROR

        try:
            return command.execute(parameters)
        except ArgSugarError as exc:
            print_error(exc)
            return exit_codes.GENERAL_ERROR
