"""Core layer: tokenizer, parameter store, conversion and binder.

Rules
-----
* No ``print()`` calls.
* No filesystem, console or network I/O.
* No imports from ``cli``.
* No process-wide state: callers pass parameters explicitly.
"""

from argsugar.core.binder import Option, ParameterBinder, bind, option
from argsugar.core.models import DEFAULT_SWITCHES, BindingField, CommandState, ProgramArguments
from argsugar.core.parameters import Parameters
from argsugar.core.protocols import Command
from argsugar.core.tokenizer import parse, parse_command_line, parse_tokens, tokenize

__all__: list[str] = [
    "DEFAULT_SWITCHES",
    "BindingField",
    "Command",
    "CommandState",
    "Option",
    "ParameterBinder",
    "Parameters",
    "ProgramArguments",
    "bind",
    "option",
    "parse",
    "parse_command_line",
    "parse_tokens",
    "tokenize",
]
