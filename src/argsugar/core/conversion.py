"""Pure string-to-value coercion rules.

Shared by the typed accessors of
:class:`~argsugar.core.parameters.Parameters` and by the binder so a
member bound onto an options object is converted exactly like a value
read through ``as_integer`` / ``as_bool`` / ``as_datetime``.

Two flavours exist for every rule:

* ``parse_*`` helpers return ``None`` on failure and never raise.
* :func:`convert` raises :class:`~argsugar.exceptions.ConversionError`.
"""

from __future__ import annotations

import collections.abc
import enum
import re
import types
import typing
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from argsugar.exceptions import ConversionError

_INTEGER_PATTERN = re.compile(r"\s*[+-]?\d+\s*")

_DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%B %d %Y",
)

_COLLECTION_ORIGINS: dict[Any, type] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Iterable: list,
    collections.abc.Collection: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}


# ---------------------------------------------------------------------------
# Lenient parsers
# ---------------------------------------------------------------------------

def parse_int(text: str | None) -> int | None:
    """Parse an optionally signed decimal integer, or return ``None``.

    Surrounding whitespace is allowed; underscores, decimals and
    exponents are not.
    """
    if text is None or not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def parse_bool(text: str | None) -> bool | None:
    """Parse ``true`` / ``false`` (any case), or return ``None``."""
    if text is None:
        return None
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_datetime(text: str | None) -> datetime | None:
    """Parse an ISO-8601 or common calendar date/time, or return ``None``."""
    if text is None:
        return None
    stripped = text.strip()
    if not stripped:
        return None
    try:
        return datetime.fromisoformat(stripped)
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(stripped, fmt)
        except ValueError:
            continue
    return None


# ---------------------------------------------------------------------------
# Type introspection
# ---------------------------------------------------------------------------

def unwrap_optional(target: Any) -> tuple[Any, bool]:
    """Return ``(inner, True)`` for ``Optional[inner]``, else ``(target, False)``.

    Unions with more than one non-``None`` member are returned unchanged
    and flagged as optional when ``None`` is one of their members.
    """
    origin = typing.get_origin(target)
    if origin is typing.Union or origin is types.UnionType:
        args = typing.get_args(target)
        members = tuple(arg for arg in args if arg is not type(None))
        optional = len(members) != len(args)
        if len(members) == 1:
            return members[0], optional
        return target, optional
    return target, False


def strip_annotated(target: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *extras]`` into ``(T, extras)``."""
    if typing.get_origin(target) is typing.Annotated:
        base, *extras = typing.get_args(target)
        return base, tuple(extras)
    return target, ()


def collection_type(target: Any) -> tuple[type, Any] | None:
    """Return ``(container, item_type)`` for list-like annotations.

    ``list[int]`` → ``(list, int)``; bare ``list`` → ``(list, str)``.
    Returns ``None`` for scalar annotations (including ``str``).
    """
    if target in (list, tuple, set, frozenset):
        return target, str
    origin = typing.get_origin(target)
    container = _COLLECTION_ORIGINS.get(origin)
    if container is None:
        return None
    args = tuple(arg for arg in typing.get_args(target) if arg is not Ellipsis)
    item = args[0] if args else str
    return container, item


# ---------------------------------------------------------------------------
# Strict conversion
# ---------------------------------------------------------------------------

def _convert_enum(text: str, target: type[enum.Enum]) -> enum.Enum:
    member = target.__members__.get(text.strip())
    if member is not None:
        return member
    for candidate in target:
        if str(candidate.value) == text.strip():
            return candidate
    raise ConversionError(
        text,
        target,
        hint="Expected one of: " + ", ".join(target.__members__),
    )


def convert(text: str, target: Any) -> Any:
    """Convert *text* to *target* or raise :class:`ConversionError`.

    ``Optional[X]`` converts to ``X``; an empty string converts to
    ``None`` for optional targets.
    """
    target, _ = strip_annotated(target)
    inner, optional = unwrap_optional(target)
    if optional:
        if not text.strip():
            return None
        target = inner

    if target is Any or target is str or target is object:
        return text
    if target is bool:
        result = parse_bool(text)
        if result is None:
            raise ConversionError(text, bool, hint="Use true or false.")
        return result
    if target is int:
        number = parse_int(text)
        if number is None:
            raise ConversionError(text, int)
        return number
    if target is datetime:
        moment = parse_datetime(text)
        if moment is None:
            raise ConversionError(text, datetime, hint="Use YYYY-MM-DD[ HH:MM[:SS]].")
        return moment
    if target is date:
        moment = parse_datetime(text)
        if moment is None:
            raise ConversionError(text, date, hint="Use YYYY-MM-DD.")
        return moment.date()
    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _convert_enum(text, target)
    if target is Decimal:
        try:
            return Decimal(text.strip())
        except InvalidOperation as exc:
            raise ConversionError(text, Decimal) from exc
    if target is Path:
        return Path(text)
    if not callable(target):
        raise ConversionError(text, target, hint="Target type is not callable.")
    try:
        return target(text)
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise ConversionError(text, target) from exc


def try_convert(text: str, target: Any, default: Any = None) -> Any:
    """Like :func:`convert` but return *default* instead of raising."""
    try:
        return convert(text, target)
    except ConversionError:
        return default
