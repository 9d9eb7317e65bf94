"""Bind a :class:`~argsugar.core.parameters.Parameters` store onto an options type.

The options type is either a dataclass or a plain class that can be
built without arguments.  Its public members are discovered by
reflection:

* dataclass fields, in declaration order, except ``init=False`` fields
  of frozen dataclasses, which cannot be set;
* for plain classes, public class annotations (``ClassVar`` excluded).

Per-member behaviour is declared explicitly::

    @dataclass
    class CopyOptions:
        source: str = option("src", "source", required=True)
        retries: int = 3
        verbose: bool = False

or, on plain classes, with ``Annotated[int, Option("n", required=True)]``.

Binding never raises on expected negative paths.  A required member
that is absent, has no value, or fails coercion makes :func:`bind`
return ``None``; any other member falls back to its default.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
import typing
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from argsugar.core import conversion
from argsugar.core.models import BindingField
from argsugar.core.parameters import Parameters
from argsugar.exceptions import ConversionError, OptionsTypeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

OPTION_METADATA_KEY: str = "argsugar.option"
"""Key under which :func:`option` stores its :class:`Option` in field metadata."""

_CONVERSION_ERRORS: tuple[type[BaseException], ...] = (
    ConversionError,
    TypeError,
    ValueError,
    ArithmeticError,
)


class _Outcome:
    """Sentinel for a member that produced no usable value."""

    def __init__(self, label: str) -> None:
        self._label = label

    def __repr__(self) -> str:
        return self._label


_ABSENT = _Outcome("<absent>")
_INVALID = _Outcome("<invalid>")


# ---------------------------------------------------------------------------
# Member declaration
# ---------------------------------------------------------------------------

class Option:
    """Binding metadata for one options member.

    Parameters
    ----------
    *names:
        Parameter names to look up, first present wins.  Defaults to
        the member name.
    required:
        Binding fails when the member cannot be resolved.
    converter:
        Callable turning one string value into the member's value,
        used instead of the type-based rules.
    """

    __slots__ = ("names", "required", "converter")

    def __init__(
        self,
        *names: str,
        required: bool = False,
        converter: Callable[[str], Any] | None = None,
    ) -> None:
        self.names: tuple[str, ...] = names
        self.required: bool = required
        self.converter: Callable[[str], Any] | None = converter

    def __repr__(self) -> str:
        return (
            f"Option(names={self.names!r}, required={self.required!r}, "
            f"converter={self.converter!r})"
        )


def option(
    *names: str,
    required: bool = False,
    converter: Callable[[str], Any] | None = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **field_kwargs: Any,
) -> Any:
    """Declare a dataclass field with binding metadata.

    A thin wrapper around :func:`dataclasses.field`; extra keyword
    arguments are forwarded to it.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[OPTION_METADATA_KEY] = Option(*names, required=required, converter=converter)
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=metadata,
        **field_kwargs,
    )


# ---------------------------------------------------------------------------
# Reflection
# ---------------------------------------------------------------------------

def _find_option(*candidates: Any) -> Option:
    for candidate in candidates:
        if isinstance(candidate, Option):
            return candidate
    return Option()


def _make_field(attribute: str, annotation: Any, declared: Option, *, init: bool = True) -> BindingField:
    return BindingField(
        attribute=attribute,
        names=declared.names or (attribute,),
        annotation=annotation,
        required=declared.required,
        converter=declared.converter,
        init=init,
    )


@functools.lru_cache(maxsize=None)
def binding_fields(options_type: type) -> tuple[BindingField, ...]:
    """Return the bindable members of *options_type*, in declaration order."""
    return collect_fields(options_type)


def collect_fields(
    options_type: type,
    localns: Mapping[str, Any] | None = None,
) -> tuple[BindingField, ...]:
    """Uncached :func:`binding_fields` resolving annotations with *localns*.

    *localns* supplies names that are not visible from the module of
    *options_type*, such as types defined inside a function.
    """
    try:
        hints = typing.get_type_hints(
            options_type,
            localns=dict(localns) if localns is not None else None,
            include_extras=True,
        )
    except (NameError, TypeError) as exc:
        raise OptionsTypeError(
            f"Cannot resolve annotations of {options_type.__name__}: {exc}",
            hint="Define referenced types at module level, or pass localns to ParameterBinder.",
        ) from exc

    result: list[BindingField] = []

    if dataclasses.is_dataclass(options_type):
        frozen = options_type.__dataclass_params__.frozen
        for field in dataclasses.fields(options_type):
            if field.name.startswith("_"):
                continue
            # Set after construction, which a frozen instance refuses.
            if frozen and not field.init:
                continue
            annotation = hints.get(field.name, Any)
            base, extras = conversion.strip_annotated(annotation)
            declared = _find_option(field.metadata.get(OPTION_METADATA_KEY), *extras)
            result.append(_make_field(field.name, base, declared, init=field.init))
        return tuple(result)

    for attribute, annotation in hints.items():
        if attribute.startswith("_"):
            continue
        base, extras = conversion.strip_annotated(annotation)
        if typing.get_origin(base) is typing.ClassVar or base is typing.ClassVar:
            continue
        result.append(_make_field(attribute, base, _find_option(*extras)))
    return tuple(result)


def zero_value(annotation: Any) -> Any:
    """Return the default value of a member type without a declared default."""
    target, optional = conversion.unwrap_optional(annotation)
    if optional:
        return None
    collection = conversion.collection_type(target)
    if collection is not None:
        return collection[0]()
    if target in (str, int, float, bool):
        return target()
    return None


# ---------------------------------------------------------------------------
# Binder
# ---------------------------------------------------------------------------

class ParameterBinder:
    """Populate options objects from parameter stores.

    One instance can bind any number of types.

    Parameters
    ----------
    localns:
        Extra names for resolving member annotations, for options types
        that refer to types defined inside a function.
    """

    def __init__(self, localns: Mapping[str, Any] | None = None) -> None:
        self._localns = localns

    def fields(self, options_type: type) -> tuple[BindingField, ...]:
        """Return the bindable members of *options_type*."""
        if self._localns is None:
            return binding_fields(options_type)
        return collect_fields(options_type, self._localns)

    def bind(self, options_type: type[T], parameters: Parameters) -> T | None:
        """Return a populated *options_type*, or ``None`` if it is not bindable.

        Raises
        ------
        OptionsTypeError
            If *options_type* cannot be constructed at all.
        """
        fields = self.fields(options_type)
        values: dict[str, Any] = {}

        for field in fields:
            outcome = self._resolve(field, parameters)
            if outcome is _ABSENT or outcome is _INVALID:
                if field.required:
                    logger.debug(
                        "Cannot bind %s: required member %r is %r",
                        options_type.__name__,
                        field.attribute,
                        outcome,
                    )
                    return None
                if outcome is _INVALID:
                    logger.debug(
                        "Member %s.%s kept its default: value did not convert",
                        options_type.__name__,
                        field.attribute,
                    )
                continue
            values[field.attribute] = outcome

        return self._instantiate(options_type, fields, values)

    # ------------------------------------------------------------------
    # Member resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _lookup_name(field: BindingField, parameters: Parameters) -> str | None:
        for name in field.names:
            if parameters.contains(name):
                return name
        return None

    def _resolve(self, field: BindingField, parameters: Parameters) -> Any:
        name = self._lookup_name(field, parameters)
        if name is None:
            return _ABSENT

        target, _ = conversion.unwrap_optional(field.annotation)
        raw = parameters.as_strings(name)
        convert_one: Callable[[str], Any]

        collection = conversion.collection_type(target)
        if collection is not None:
            container, item_type = collection
            convert_one = field.converter or functools.partial(conversion.convert, target=item_type)
            try:
                return container(convert_one(value) for value in raw)
            except _CONVERSION_ERRORS:
                return _INVALID

        if target is bool and not raw:
            return True
        if not raw:
            return _INVALID

        convert_one = field.converter or functools.partial(conversion.convert, target=field.annotation)
        try:
            return convert_one(raw[0])
        except _CONVERSION_ERRORS:
            return _INVALID

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def _instantiate(
        options_type: type[T],
        fields: tuple[BindingField, ...],
        values: dict[str, Any],
    ) -> T | None:
        if dataclasses.is_dataclass(options_type):
            annotations = {f.attribute: f.annotation for f in fields}
            kwargs: dict[str, Any] = {}
            late: dict[str, Any] = {}
            for field in dataclasses.fields(options_type):
                if field.name in values:
                    if field.init:
                        kwargs[field.name] = values[field.name]
                    else:
                        late[field.name] = values[field.name]
                elif (
                    field.init
                    and field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    kwargs[field.name] = zero_value(annotations.get(field.name, Any))
            try:
                instance = options_type(**kwargs)
            except TypeError as exc:
                raise OptionsTypeError(
                    f"Cannot construct {options_type.__name__}: {exc}",
                ) from exc
            except ValueError as exc:
                logger.debug("Cannot bind %s: %s", options_type.__name__, exc)
                return None
            for attribute, value in late.items():
                setattr(instance, attribute, value)
            return instance

        try:
            instance = options_type()
        except TypeError as exc:
            raise OptionsTypeError(
                f"{options_type.__name__} must be constructible without arguments.",
                hint="Give every constructor parameter a default, or use a dataclass.",
            ) from exc
        for field in fields:
            if field.attribute in values:
                setattr(instance, field.attribute, values[field.attribute])
            elif not hasattr(instance, field.attribute):
                setattr(instance, field.attribute, zero_value(field.annotation))
        return instance


_default_binder = ParameterBinder()


def bind(options_type: type[T], parameters: Parameters) -> T | None:
    """Bind *parameters* onto a new *options_type* with the default binder."""
    return _default_binder.bind(options_type, parameters)
