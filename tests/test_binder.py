"""Tests for the reflection-driven binder (core/binder.py).

Coverage:

* Dataclass and plain-class options types
* Explicit names, required members and custom converters
* Defaults on absent / unconvertible optional members
* Binding failure (``None``) on unresolvable required members
* Programming errors surfacing as ``OptionsTypeError``
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, make_dataclass
from datetime import datetime
from typing import Annotated, ClassVar

import pytest

from argsugar.core.binder import (
    OPTION_METADATA_KEY,
    Option,
    ParameterBinder,
    bind,
    binding_fields,
    option,
    zero_value,
)
from argsugar.core.tokenizer import parse
from argsugar.exceptions import OptionsTypeError


# ---------------------------------------------------------------------------
# Options types
# ---------------------------------------------------------------------------

class Mode(enum.Enum):
    FAST = "fast"
    SAFE = "safe"


@dataclass
class CopyOptions:
    source: str = option("src", "source", required=True)
    target: str = "out"
    retries: int = 3
    verbose: bool = False
    tags: list[str] = field(default_factory=list)
    when: datetime | None = None
    mode: Mode = Mode.SAFE


@dataclass
class PortOptions:
    port: int = option("p", required=True)


@dataclass
class NumbersOptions:
    values: list[int] = option(required=True)


@dataclass
class ConverterOptions:
    level: int = option(converter=len, default=0)


@dataclass
class BareOptions:
    count: int
    name: str
    labels: tuple[str, ...]
    note: str | None


@dataclass
class RangedOptions:
    size: int = 1

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("size must be positive")


@dataclass(frozen=True)
class FrozenOptions:
    name: str = "x"


@dataclass
class LateOptions:
    name: str = "x"
    computed: str = field(init=False, default="")


@dataclass(frozen=True)
class FrozenLateOptions:
    name: str = "x"
    computed: str = field(init=False, default="")


class PlainOptions:
    name: str = "anon"
    count: Annotated[int, Option("n", required=True)] = 0
    _hidden: int = 0
    kind: ClassVar[str] = "plain"


class PlainNoDefaults:
    name: Annotated[str, Option(required=True)]
    count: int
    verbose: bool
    tags: list[str]
    note: str | None


class NeedsArgument:
    name: str

    def __init__(self, name: str) -> None:
        self.name = name


# ---------------------------------------------------------------------------
# Declaration helpers
# ---------------------------------------------------------------------------

class TestOptionDeclaration:
    def test_option_stores_metadata(self) -> None:
        declared = option("a", "b", required=True)
        meta = declared.metadata[OPTION_METADATA_KEY]
        assert isinstance(meta, Option)
        assert meta.names == ("a", "b")
        assert meta.required is True

    def test_option_keeps_user_metadata(self) -> None:
        declared = option(metadata={"help": "text"}, default=1)
        assert declared.metadata["help"] == "text"
        assert declared.default == 1

    def test_binding_fields_of_dataclass(self) -> None:
        fields = binding_fields(CopyOptions)
        assert [f.attribute for f in fields] == [
            "source", "target", "retries", "verbose", "tags", "when", "mode",
        ]
        assert fields[0].names == ("src", "source")
        assert fields[0].required is True
        assert fields[1].names == ("target",)
        assert fields[1].required is False

    def test_binding_fields_of_plain_class(self) -> None:
        fields = binding_fields(PlainOptions)
        assert [f.attribute for f in fields] == ["name", "count"]
        assert fields[1].names == ("n",)
        assert fields[1].annotation is int

    @pytest.mark.parametrize(
        "annotation,expected",
        [(int, 0), (str, ""), (bool, False), (list[int], []), (int | None, None), (datetime, None)],
    )
    def test_zero_value(self, annotation: object, expected: object) -> None:
        assert zero_value(annotation) == expected


# ---------------------------------------------------------------------------
# Successful binding
# ---------------------------------------------------------------------------

class TestBindDataclass:
    def test_populates_members(self) -> None:
        options = bind(CopyOptions, parse("-src a.txt -retries 5 -verbose -tags x y"))
        assert options == CopyOptions(
            source="a.txt",
            retries=5,
            verbose=True,
            tags=["x", "y"],
        )

    def test_unset_members_keep_defaults(self) -> None:
        options = bind(CopyOptions, parse("-src a.txt"))
        assert options is not None
        assert options.target == "out"
        assert options.retries == 3
        assert options.verbose is False
        assert options.tags == []
        assert options.when is None
        assert options.mode is Mode.SAFE

    def test_second_name_is_used(self) -> None:
        options = bind(CopyOptions, parse("--source b.txt"))
        assert options is not None
        assert options.source == "b.txt"

    def test_bool_with_explicit_value(self) -> None:
        options = bind(CopyOptions, parse("-src a -verbose false"))
        assert options is not None
        assert options.verbose is False

    def test_optional_datetime_and_enum(self) -> None:
        options = bind(CopyOptions, parse("-src a -when 2024-01-02 -mode FAST"))
        assert options is not None
        assert options.when == datetime(2024, 1, 2)
        assert options.mode is Mode.FAST

    def test_list_items_are_converted(self) -> None:
        options = bind(NumbersOptions, parse("-values 1 2 3"))
        assert options == NumbersOptions(values=[1, 2, 3])

    def test_present_collection_without_values_is_empty(self) -> None:
        assert bind(NumbersOptions, parse("-values")) == NumbersOptions(values=[])

    def test_custom_converter(self) -> None:
        options = bind(ConverterOptions, parse("-level abc"))
        assert options == ConverterOptions(level=3)

    def test_members_without_default_get_zero_values(self) -> None:
        options = bind(BareOptions, parse(""))
        assert options == BareOptions(count=0, name="", labels=(), note=None)

    def test_frozen_dataclass(self) -> None:
        assert bind(FrozenOptions, parse("-name y")) == FrozenOptions(name="y")

    def test_frozen_dataclass_skips_non_init_field(self) -> None:
        assert [f.attribute for f in binding_fields(FrozenLateOptions)] == ["name"]
        options = bind(FrozenLateOptions, parse("-name y -computed z"))
        assert options == FrozenLateOptions(name="y")
        assert options is not None
        assert options.computed == ""

    def test_non_init_field_is_set_after_construction(self) -> None:
        options = bind(LateOptions, parse("-computed z"))
        assert options is not None
        assert options.computed == "z"

    def test_empty_switch_set(self) -> None:
        options = bind(CopyOptions, parse("src a.txt", []))
        assert options is not None
        assert options.source == "a.txt"

    def test_binder_instance(self) -> None:
        options = ParameterBinder().bind(PortOptions, parse("-p 8080"))
        assert options == PortOptions(port=8080)


class TestBindPlainClass:
    def test_populates_annotated_members(self) -> None:
        options = bind(PlainOptions, parse("-name bob -n 4"))
        assert isinstance(options, PlainOptions)
        assert options.name == "bob"
        assert options.count == 4

    def test_class_defaults_remain(self) -> None:
        options = bind(PlainOptions, parse("-n 1"))
        assert options is not None
        assert options.name == "anon"

    def test_private_and_classvar_members_are_ignored(self) -> None:
        options = bind(PlainOptions, parse("-n 1 -_hidden 5 -kind other"))
        assert options is not None
        assert options._hidden == 0
        assert options.kind == "plain"

    def test_members_without_class_default_get_zero_values(self) -> None:
        options = bind(PlainNoDefaults, parse("-name bob"))
        assert options is not None
        assert options.name == "bob"
        assert options.count == 0
        assert options.verbose is False
        assert options.tags == []
        assert options.note is None

    def test_zero_values_are_not_shared(self) -> None:
        first = bind(PlainNoDefaults, parse("-name a"))
        second = bind(PlainNoDefaults, parse("-name b"))
        assert first is not None and second is not None
        first.tags.append("x")
        assert second.tags == []


# ---------------------------------------------------------------------------
# Types defined inside functions
# ---------------------------------------------------------------------------

class TestLocalTypes:
    def test_unresolvable_annotation_is_options_type_error(self) -> None:
        class Colour(enum.Enum):
            RED = "red"
            BLUE = "blue"

        @dataclass
        class LocalOptions:
            colour: Colour = Colour.RED

        with pytest.raises(OptionsTypeError) as exc_info:
            bind(LocalOptions, parse("-colour BLUE"))
        assert "Colour" in str(exc_info.value)
        assert exc_info.value.hint is not None

    def test_localns_resolves_local_types(self) -> None:
        class Colour(enum.Enum):
            RED = "red"
            BLUE = "blue"

        @dataclass
        class LocalOptions:
            colour: Colour = Colour.RED
            count: int = 1

        binder = ParameterBinder(localns={"Colour": Colour})
        options = binder.bind(LocalOptions, parse("-colour BLUE -count 2"))
        assert options == LocalOptions(colour=Colour.BLUE, count=2)

    def test_non_string_annotations_need_no_namespace(self) -> None:
        class Colour(enum.Enum):
            RED = "red"
            BLUE = "blue"

        LocalOptions = make_dataclass("LocalOptions", [("colour", Colour, Colour.RED)])

        options = bind(LocalOptions, parse("-colour blue"))
        assert options is not None
        assert options.colour is Colour.BLUE


# ---------------------------------------------------------------------------
# Defaulting and failure
# ---------------------------------------------------------------------------

class TestBindFailures:
    def test_missing_required_member(self) -> None:
        assert bind(CopyOptions, parse("-retries 2")) is None

    def test_required_member_without_value(self) -> None:
        assert bind(CopyOptions, parse("-src -verbose")) is None

    def test_required_member_fails_conversion(self) -> None:
        assert bind(PortOptions, parse("-p abc")) is None

    def test_required_list_item_fails_conversion(self) -> None:
        assert bind(NumbersOptions, parse("-values 1 x")) is None

    def test_plain_class_missing_required(self) -> None:
        assert bind(PlainOptions, parse("-name bob")) is None

    def test_optional_member_conversion_falls_back(self) -> None:
        options = bind(CopyOptions, parse("-src a -retries many -verbose maybe -mode LOUD"))
        assert options is not None
        assert options.retries == 3
        assert options.verbose is False
        assert options.mode is Mode.SAFE

    def test_optional_member_without_value_falls_back(self) -> None:
        options = bind(CopyOptions, parse("-src a -retries"))
        assert options is not None
        assert options.retries == 3

    def test_validation_in_post_init_rejects(self) -> None:
        assert bind(RangedOptions, parse("-size 0")) is None
        assert bind(RangedOptions, parse("-size 2")) == RangedOptions(size=2)

    def test_type_without_default_constructor(self) -> None:
        with pytest.raises(OptionsTypeError):
            bind(NeedsArgument, parse("-name x"))

    def test_options_type_error_is_a_type_error(self) -> None:
        assert issubclass(OptionsTypeError, TypeError)
