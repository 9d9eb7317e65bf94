"""CLI layer: commands, dispatch, console I/O and the error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, but ``core`` never imports from ``cli``.
"""

from argsugar.cli.application import ConsoleApplication
from argsugar.cli.command import BoundCommand
from argsugar.cli.dispatcher import CommandDispatcher

__all__: list[str] = [
    "BoundCommand",
    "CommandDispatcher",
    "ConsoleApplication",
]
