"""Domain models for argsugar.

Value objects with no behaviour beyond data access.  They carry zero
I/O and no dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from argsugar.core.parameters import Parameters


DEFAULT_SWITCHES: tuple[str, ...] = ("-", "--", "/")
"""Prefixes recognised as parameter names when none are configured."""


# ---------------------------------------------------------------------------
# Process command line
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProgramArguments:
    """A full process command line split into program and parameters."""

    program: str
    """Executable path exactly as it appeared on the command line."""

    directory: Path
    """Directory holding the executable (working directory if unknown)."""

    parameters: Parameters
    """Every token after the executable."""


# ---------------------------------------------------------------------------
# Command lifecycle
# ---------------------------------------------------------------------------

class CommandState(enum.Enum):
    """Lifecycle of a bound command within one dispatch cycle."""

    UNBOUND = "unbound"
    BOUND = "bound"
    REJECTED = "rejected"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Binding metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BindingField:
    """One settable member of an options type, resolved for binding."""

    attribute: str
    """Python attribute name on the options object."""

    names: tuple[str, ...]
    """Parameter names looked up in the store, first present wins."""

    annotation: Any
    """Declared type of the member."""

    required: bool
    """Binding fails when this member cannot be resolved."""

    converter: Callable[[str], Any] | None = None
    """Explicit per-value converter overriding the type-based rules."""

    init: bool = True
    """Whether the member is passed to the constructor (dataclasses)."""
