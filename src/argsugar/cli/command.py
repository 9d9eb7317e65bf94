"""Commands bound to a typed options object.

A :class:`BoundCommand` declares the options type it understands.  The
dispatcher asks it whether it can handle a parameter store
(:meth:`~BoundCommand.can_execute`, which binds the options) and then
runs it (:meth:`~BoundCommand.execute`)::

    @dataclass
    class GreetOptions:
        name: str = option(required=True)

    class Greet(BoundCommand[GreetOptions]):
        options_type = GreetOptions

        def run(self, options: GreetOptions) -> int:
            console.print(f"Hello {options.name}")
            return self.success()

Lifecycle per dispatch cycle::

    UNBOUND --can_execute--> BOUND | REJECTED --execute--> COMPLETED
"""

from __future__ import annotations

import abc
import logging
from typing import ClassVar, Generic, TypeVar

from argsugar.cli import exit_codes
from argsugar.core.binder import ParameterBinder
from argsugar.core.models import CommandState
from argsugar.core.parameters import Parameters
from argsugar.exceptions import CommandNotBoundError

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT")


class BoundCommand(abc.ABC, Generic[OptionsT]):
    """Base class for commands driven by a bound options object."""

    options_type: ClassVar[type]
    """The options class bound on every :meth:`can_execute`."""

    binder: ClassVar[ParameterBinder] = ParameterBinder()

    def __init__(self) -> None:
        self.options: OptionsT | None = None
        self.state: CommandState = CommandState.UNBOUND
        self.exit_code: int | None = None

    # ------------------------------------------------------------------
    # Exit code helpers
    # ------------------------------------------------------------------

    @staticmethod
    def success() -> int:
        """Return the success exit code (0)."""
        return exit_codes.SUCCESS

    @staticmethod
    def fail() -> int:
        """Return the default failure exit code (-1)."""
        return exit_codes.GENERAL_ERROR

    # ------------------------------------------------------------------
    # Command protocol
    # ------------------------------------------------------------------

    def can_execute(self, parameters: Parameters) -> bool:
        """Bind *parameters* onto :attr:`options_type` and report success.

        The previously bound options are always overwritten.
        """
        self.options = self.binder.bind(self.options_type, parameters)
        self.exit_code = None
        if self.options is None:
            self.state = CommandState.REJECTED
            return False
        self.state = CommandState.BOUND
        return True

    def execute(self, parameters: Parameters) -> int:
        """Run the command with the options bound by :meth:`can_execute`.

        Raises
        ------
        CommandNotBoundError
            If :meth:`can_execute` has not returned ``True`` first.
        """
        if self.state is not CommandState.BOUND or self.options is None:
            raise CommandNotBoundError(
                f"{type(self).__name__} has no bound options (state: {self.state.value}).",
                hint="Call can_execute() and check its result before execute().",
            )

        logger.debug("Executing %s with %r", type(self).__name__, self.options)
        self.exit_code = self.run(self.options)
        self.state = CommandState.COMPLETED
        return self.exit_code

    @abc.abstractmethod
    def run(self, options: OptionsT) -> int:
        """Application logic.  Return a process exit code."""
