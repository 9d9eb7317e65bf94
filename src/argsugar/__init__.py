"""argsugar: switch-aware command-line parameters bound onto typed options.

Tokenize a raw command line, query and mutate it through a
:class:`~argsugar.core.parameters.Parameters` store, and bind it onto a
dataclass consumed by a :class:`~argsugar.cli.command.BoundCommand`.
"""

from argsugar.core.binder import Option, ParameterBinder, bind, option
from argsugar.core.parameters import Parameters
from argsugar.core.tokenizer import parse, parse_command_line, parse_tokens, tokenize
from argsugar.version import __version__

__all__: list[str] = [
    "Option",
    "ParameterBinder",
    "Parameters",
    "__version__",
    "bind",
    "option",
    "parse",
    "parse_command_line",
    "parse_tokens",
    "tokenize",
]
