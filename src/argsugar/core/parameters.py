"""Switch-aware parameter store.

:class:`Parameters` owns an ordered list of command-line tokens and the
set of switch prefixes that mark a token as a parameter *name*.  Values
of a name are the tokens that follow it up to the next switch token::

    >>> params = Parameters(["-x", "1", "2", "-y", "3"])
    >>> params.as_strings("x")
    ['1', '2']
    >>> params.replace("x", "9")
    >>> str(params)
    '-x 9 -y 3'

Rules
-----
* Names match case-sensitively against ``prefix + name``, trying the
  prefixes in switch order; the first match wins.
* With an empty switch set names are looked up bare, every token counts
  as a boundary, and value collection runs to the end of the sequence.
  That last behaviour is kept for compatibility and is suspect.
* Typed accessors never raise on bad input; they fall back to the
  caller-supplied default.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime, time
from typing import Any

from argsugar.core import conversion
from argsugar.core.models import DEFAULT_SWITCHES

logger = logging.getLogger(__name__)


class Parameters:
    """Ordered, mutable command-line tokens with switch semantics.

    Parameters
    ----------
    tokens:
        Initial tokens, copied.
    switches:
        Name prefixes.  ``None`` selects ``-``, ``--`` and ``/``.  A list
        is kept by reference so that clones share their configuration.
    """

    def __init__(
        self,
        tokens: Iterable[str] = (),
        switches: Sequence[str] | None = None,
    ) -> None:
        self._tokens: list[str] = list(tokens)
        if switches is None:
            self._switches: list[str] = list(DEFAULT_SWITCHES)
        elif isinstance(switches, list):
            self._switches = switches
        else:
            self._switches = list(switches)

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------

    @property
    def switches(self) -> list[str]:
        """The configured switch prefixes, in lookup order."""
        return self._switches

    @property
    def tokens(self) -> tuple[str, ...]:
        """Snapshot of the current tokens."""
        return tuple(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __getitem__(self, index: int) -> str:
        return self._tokens[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return self._tokens == other._tokens and self._switches == other._switches

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Parameters({self._tokens!r}, switches={self._switches!r})"

    def append(self, token: str) -> None:
        """Append a raw token."""
        self._tokens.append(token)

    def extend(self, tokens: Iterable[str]) -> None:
        """Append several raw tokens."""
        self._tokens.extend(tokens)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def is_flag(self, token: str) -> bool:
        """Return whether *token* marks a parameter name (a value boundary)."""
        return not self._switches or any(token.startswith(s) for s in self._switches)

    def index_of(self, name: str) -> int:
        """Return the index of the token naming *name*, or ``-1``."""
        for prefix in self._switches or ("",):
            candidate = prefix + name
            if candidate in self._tokens:
                return self._tokens.index(candidate)
        return -1

    def contains(self, name: str) -> bool:
        """Return whether *name* is present."""
        return self.index_of(name) > -1

    def contains_any(self, *names: str) -> bool:
        """Return whether **every** one of *names* is present.

        The name is historical; callers rely on the all-of semantics.
        """
        return all(self.index_of(name) != -1 for name in names)

    def has_value(self, name: str) -> bool:
        """Return whether *name* is followed by at least one value."""
        return len(self.as_strings(name)) > 0

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def as_strings(self, name: str, *defaults: str) -> list[str]:
        """Return the values following *name*, or *defaults* if there are none."""
        result: list[str] = []
        index = self.index_of(name)

        while index > -1 and len(self._tokens) > index + 1:
            token = self._tokens[index + 1]
            if self._switches and self.is_flag(token):
                break
            result.append(token)
            index += 1

        if not result:
            result.extend(defaults)
        return result

    def as_string(self, name: str, default: str = "") -> str:
        """Return the first value of *name*, or *default*."""
        return self.as_strings(name, default)[0]

    def as_integer(self, name: str, default: int = 0) -> int:
        """Return the first value of *name* as an ``int``, or *default*."""
        result = conversion.parse_int(self.as_string(name))
        return default if result is None else result

    def as_bool(self, name: str, default: bool = False) -> bool:
        """Return the first value of *name* as a ``bool``, or *default*.

        Only ``true`` and ``false`` (any case) are recognised.  A name
        present without a value yields *default*.
        """
        result = conversion.parse_bool(self.as_string(name, str(default)))
        return default if result is None else result

    def as_datetime(self, name: str, default: datetime | None = None) -> datetime:
        """Return the first value of *name* as a ``datetime``.

        Falls back to *default*, or to today at midnight when no default
        is given.
        """
        result = conversion.parse_datetime(self.as_string(name))
        if result is not None:
            return result
        if default is None:
            return datetime.combine(date.today(), time())
        return default

    def as_custom_type(self, name: str, type_: Any) -> Any:
        """Convert the first value of *name* to *type_*.

        Returns ``None`` when *name* is absent.  ``Optional[X]`` targets
        convert leniently and yield ``None`` on failure; any other target
        raises :class:`~argsugar.exceptions.ConversionError`.
        """
        if not self.contains(name):
            return None

        value = self.as_string(name)
        inner, optional = conversion.unwrap_optional(type_)
        if optional:
            return conversion.try_convert(value, inner)
        return conversion.convert(value, type_)

    def as_custom_type_at(self, index: int, type_: Any) -> Any:
        """Convert the token at position *index* to *type_*, or ``None`` past the end."""
        if index < 0 or index >= len(self._tokens):
            return None
        return conversion.convert(self._tokens[index], type_)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def remove(self, name: str) -> None:
        """Delete *name* and its values in place.  No-op if absent."""
        index = self.index_of(name)
        if index <= -1:
            return

        length = len(self.as_strings(name)) + 1
        del self._tokens[index:index + length]
        logger.debug("Removed %d token(s) for %r", length, name)

    def replace(self, name: str, *values: str) -> None:
        """Replace the values of *name* with *values*, keeping its position.

        Without switches there is no value span to speak of: the name
        token itself is replaced by *values*.  No-op if *name* is absent.
        """
        index = self.index_of(name)
        if index <= -1:
            return

        if self._switches:
            length = len(self.as_strings(name))
            del self._tokens[index + 1:index + 1 + length]
            self._tokens[index + 1:index + 1] = values
        else:
            self._tokens[index:index + 1] = values
        logger.debug("Replaced values of %r with %r", name, values)

    # ------------------------------------------------------------------
    # Copy / serialisation
    # ------------------------------------------------------------------

    def clone(self) -> Parameters:
        """Return a store with a copied token list and the same switch list."""
        return Parameters(self._tokens, self._switches)

    __copy__ = clone

    def __str__(self) -> str:
        return " ".join(_quote(token) for token in self._tokens)


def _quote(token: str) -> str:
    """Wrap *token* in double quotes when it would not survive re-tokenizing."""
    if not token or any(char.isspace() for char in token):
        return f'"{token}"'
    return token
