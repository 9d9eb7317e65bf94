"""Custom exception hierarchy for argsugar.

All exceptions that cross layer boundaries inherit from
:class:`ArgSugarError`.  Expected negative paths (unparseable values,
unbindable options) are NOT exceptions: typed accessors fall back to
defaults and the binder returns ``None``.  The classes below cover the
remaining, genuinely exceptional conditions.

Hierarchy
---------
ArgSugarError
├── ConversionError
├── OptionsTypeError
├── CommandNotBoundError
├── MissingInputError
└── DependencyError
"""

from __future__ import annotations


class ArgSugarError(Exception):
    """Base exception for all argsugar errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Values ----------------------------------------------------------------

class ConversionError(ArgSugarError):
    """Raised when a parameter value cannot be coerced to a target type."""

    def __init__(
        self,
        value: str,
        target: object,
        *,
        hint: str | None = None,
    ) -> None:
        name = getattr(target, "__name__", repr(target))
        super().__init__(f"Cannot convert {value!r} to {name}.", hint=hint)
        self.value: str = value
        self.target: object = target


# --- Binding ---------------------------------------------------------------

class OptionsTypeError(ArgSugarError, TypeError):
    """Raised when an options type cannot be instantiated by the binder."""


# --- Commands --------------------------------------------------------------

class CommandNotBoundError(ArgSugarError):
    """Raised when ``execute`` is called without a successful ``can_execute``."""


class MissingInputError(ArgSugarError):
    """Raised when a command has no command line to operate on."""


# --- Environment -----------------------------------------------------------

class DependencyError(ArgSugarError):
    """Raised when an optional runtime dependency is not installed."""
