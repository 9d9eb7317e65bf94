"""Command-line tokenizer.

Splits a raw command-line string into tokens the way a console host
hands them to a program:

* Whitespace separates tokens.
* Whitespace between a pair of double quotes belongs to the token; the
  quote characters themselves are dropped.
* An unbalanced quote swallows the rest of the line into the current
  token.  Parsing never raises.
* No escape sequences, variable expansion or globbing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from argsugar.core.models import ProgramArguments
from argsugar.core.parameters import Parameters

logger = logging.getLogger(__name__)

QUOTE: str = '"'


def tokenize(raw: str | None) -> list[str]:
    """Split *raw* into an ordered list of tokens.

    ``None`` and the empty string both produce ``[]``.
    """
    tokens: list[str] = []
    if not raw:
        return tokens

    current: list[str] = []
    in_token = False
    quoted = False

    for char in raw:
        if char == QUOTE:
            quoted = not quoted
            in_token = True
        elif char.isspace() and not quoted:
            if in_token:
                tokens.append("".join(current))
                current.clear()
                in_token = False
        else:
            current.append(char)
            in_token = True

    if in_token:
        tokens.append("".join(current))

    if quoted:
        logger.debug("Unbalanced quote in command line; kept trailing text: %r", raw)

    return tokens


def parse(raw: str | None, switches: Sequence[str] | None = None) -> Parameters:
    """Tokenize *raw* into a :class:`Parameters` store.

    Parameters
    ----------
    raw:
        The command line, without the program name.
    switches:
        Recognised name prefixes.  ``None`` selects the defaults
        (``-``, ``--``, ``/``); an empty sequence disables switch
        detection altogether.
    """
    return Parameters(tokenize(raw), switches)


def parse_tokens(
    tokens: Iterable[str],
    switches: Sequence[str] | None = None,
) -> Parameters:
    """Wrap an already split argument vector (e.g. ``sys.argv[1:]``)."""
    return Parameters(tokens, switches)


def parse_command_line(
    raw: str | None,
    switches: Sequence[str] | None = None,
) -> ProgramArguments:
    """Split a full process command line into program and parameters.

    The first token is the executable.  Its directory is reported as an
    absolute path; when the executable has no directory part the
    current working directory is used instead.
    """
    tokens = tokenize(raw)
    program = tokens[0] if tokens else ""

    parent = Path(program).parent
    directory = Path.cwd() if parent == Path(".") else parent.absolute()

    return ProgramArguments(
        program=program,
        directory=directory,
        parameters=Parameters(tokens[1:], switches),
    )
