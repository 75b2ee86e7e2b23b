# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Type description and value coercion utilities for Optline argument binding.

`describe_type` turns a parameter annotation into a `TypeDescriptor` that tells
the binder whether the argument is a flag, a collection, or an optional
wrapper, and what each value must be converted to. `coerce_value` converts one
command-line string to a target type, including `Enum`, `bool`, `datetime`,
`Literal`, and union types.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum instance.
- coerce_value: General-purpose coercion to a target type.
- describe_type: Build a `TypeDescriptor` from an annotation.
- type_name: Human-readable label for a type.
"""
from __future__ import annotations

import collections.abc
import types
from dataclasses import dataclass
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

from optline.exceptions import CommandDefinitionError

COLLECTION_ORIGINS: dict[Any, type] = {
    list: list,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 't', 'yes', 'y', '1', 'on' and 'false', 'f', 'no', 'n', '0',
    'off', ignoring case.

    Raises:
        ValueError: If the value is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    lowered = value.strip().lower()
    if lowered in {"true", "t", "yes", "y", "1", "on"}:
        return True
    if lowered in {"false", "f", "no", "n", "0", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, then by value, then by the members' base value type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        names = [member.name for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(names)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert a string to the given target type.

    Handles Union, Literal, Enum, bool, and datetime; any other target is called
    with the string.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        for literal in args:
            if value == str(literal):
                return literal
        raise ValueError(f"'{value}' is not one of {{{', '.join(map(str, args))}}}")

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is type(None):
                continue
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"'{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"'{value}' could not be parsed as a datetime") from error

    if target_type is Any or target_type is str:
        return value

    return target_type(value)


def type_name(target_type: Any) -> str:
    """Return a short human-readable label for a type."""
    origin = get_origin(target_type)
    if origin is Literal:
        literal_types = {type(arg) for arg in get_args(target_type)}
        return literal_types.pop().__name__ if len(literal_types) == 1 else "Literal"
    if isinstance(target_type, types.UnionType) or origin is Union:
        return " | ".join(type_name(arg) for arg in get_args(target_type))
    if origin is not None:
        return getattr(origin, "__name__", str(target_type))
    if target_type is Any:
        return "str"
    return getattr(target_type, "__name__", str(target_type))


def choices_for(target_type: Any) -> list[str]:
    """Return the allowed string values of an Enum or Literal type, else []."""
    if isinstance(target_type, EnumMeta):
        return [member.name for member in target_type]
    if get_origin(target_type) is Literal:
        return [str(arg) for arg in get_args(target_type)]
    return []


@dataclass(frozen=True)
class TypeDescriptor:
    """
    What the binder needs to know about a parameter's type.

    Attributes:
        annotation (Any): The annotation as declared (without `Annotated` extras).
        value_type (Any): The type each command-line value is converted to.
        is_optional (bool): True if the annotation allows None.
        collection_type (type | None): The container to build, for collection arguments.
    """

    annotation: Any
    value_type: Any
    is_optional: bool = False
    collection_type: type | None = None

    @property
    def is_collection(self) -> bool:
        return self.collection_type is not None

    @property
    def is_flag(self) -> bool:
        return not self.is_collection and self.value_type is bool

    @property
    def name(self) -> str:
        return type_name(self.value_type)

    @property
    def choices(self) -> list[str]:
        return choices_for(self.value_type)

    def build_collection(self, items: list[Any]) -> Any:
        assert self.collection_type is not None
        return self.collection_type(items)


def _strip_optional(annotation: Any) -> tuple[Any, bool]:
    origin = get_origin(annotation)
    if isinstance(annotation, types.UnionType) or origin is Union:
        args = get_args(annotation)
        if type(None) in args:
            remaining = tuple(arg for arg in args if arg is not type(None))
            if len(remaining) == 1:
                return remaining[0], True
            return Union[remaining], True
    return annotation, False


def describe_type(annotation: Any) -> TypeDescriptor:
    """
    Build a `TypeDescriptor` for a parameter annotation.

    Raises:
        CommandDefinitionError: For tuple annotations that are not `tuple[X, ...]`,
            or nested collections.
    """
    inner, is_optional = _strip_optional(annotation)
    if inner is Any:
        inner = str

    origin = get_origin(inner)
    collection_type = COLLECTION_ORIGINS.get(origin) or COLLECTION_ORIGINS.get(inner)
    if collection_type is None:
        return TypeDescriptor(annotation, inner, is_optional=is_optional)

    args = get_args(inner)
    if collection_type is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
        raise CommandDefinitionError(
            f"Tuple arguments must be declared as tuple[X, ...], got {annotation}"
        )
    value_type = args[0] if args else str
    value_type, _ = _strip_optional(value_type)
    if get_origin(value_type) in COLLECTION_ORIGINS:
        raise CommandDefinitionError(f"Nested collections are not supported: {annotation}")
    return TypeDescriptor(
        annotation,
        str if value_type is Any else value_type,
        is_optional=is_optional,
        collection_type=collection_type,
    )
