"""Protocols (interfaces) consumed across layers.

The dispatcher depends only on :class:`Command`; any object with the
two methods below can be dispatched, whether or not it derives from
:class:`~argsugar.cli.command.BoundCommand`.
"""

from __future__ import annotations

from typing import Protocol

from argsugar.core.parameters import Parameters


class Command(Protocol):
    """Contract for an executable command.

    ``can_execute`` must be called, and must return ``True``, before
    ``execute`` is called with the same parameters.
    """

    def can_execute(self, parameters: Parameters) -> bool:
        """Return whether this command accepts *parameters*."""
        ...  # pragma: no cover

    def execute(self, parameters: Parameters) -> int:
        """Run the command and return a process exit code (0 = success)."""
        ...  # pragma: no cover
