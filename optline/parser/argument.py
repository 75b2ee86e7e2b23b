# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Argument` dataclass: one declared command parameter together with
its command-line names, arity, default, and the value bound to it.

Arguments are created by `optline.parser.signature.build_argument_lookup()` from
a command's constructor signature. After creation only two things change: the
bound `value`, and `is_set_by_user`, which `set_argument()` flips exactly once.

Key Attributes:
- `name`: The constructor parameter name, used as the keyword when building.
- `long_name` / `short_name`: The names accepted on the command line.
- `type_descriptor`: What each value converts to and whether it is a flag or collection.
- `min_elements` / `max_elements`: Collection arity (`max_elements=None` is unbounded).
- `mutually_exclusive`: Parameter names that may not be supplied together with this one.
- `optional`: Whether the command line may omit this argument.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from optline.exceptions import (
    ArgumentCountError,
    BadArgumentValueError,
    MissingArgumentError,
    TooManyValuesError,
)
from optline.parser.utils import TypeDescriptor, coerce_value

SENSITIVE_MASK = "***********"


def format_value(value: Any) -> str:
    """Render a bound value the way it would be typed on the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    return str(value)


def chained_error_message(error: BaseException | None) -> str:
    """Join the messages of an exception and its causes, one per line."""
    messages = []
    while error is not None:
        messages.append(f"\n\t...{error}")
        error = error.__cause__ or error.__context__
    return "".join(messages)


@dataclass(eq=False)
class Argument:
    """
    Represents one command-line argument of a command.

    Attributes:
        name (str): Constructor parameter name.
        index (int): Declaration position among the command's arguments.
        type_descriptor (TypeDescriptor): Parsed annotation of the parameter.
        long_name (str): Long option name, without dashes.
        short_name (str | None): Single-character option name, without the dash.
        has_default (bool): True if the parameter declares a default.
        default (Any): The declared default, when `has_default` is True.
        doc (str): Markdown documentation.
        min_elements (int | None): Minimum values for collections, None for scalars.
        max_elements (int | None): Maximum values for collections, None if unbounded.
        mutually_exclusive (set[str]): Names of parameters excluded by this one.
        sensitive (bool): Mask the value when echoing the command line.
        special (bool): Engine-level argument such as help or version.
        hidden (bool): Not exposed on the command line.
        group (str | None): Usage heading.
        converter (Callable | None): Per-value conversion override.
        declaring_class (type | None): The class whose constructor declares the parameter.
    """

    name: str
    index: int
    type_descriptor: TypeDescriptor
    long_name: str
    short_name: str | None = None
    has_default: bool = False
    default: Any = None
    doc: str = ""
    min_elements: int | None = None
    max_elements: int | None = None
    mutually_exclusive: set[str] = field(default_factory=set)
    sensitive: bool = False
    special: bool = False
    hidden: bool = False
    group: str | None = None
    converter: Callable[[str], Any] | None = None
    declaring_class: type | None = None
    value: Any = field(init=False, default=None)
    is_set_by_user: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        if self.has_default:
            self.value = deepcopy(self.default)

    @property
    def is_flag(self) -> bool:
        return self.type_descriptor.is_flag

    @property
    def is_collection(self) -> bool:
        return self.type_descriptor.is_collection

    @property
    def type_name(self) -> str:
        return self.type_descriptor.name

    @property
    def optional(self) -> bool:
        """True if the argument may be omitted from the command line."""
        return (
            self.hidden
            or self.special
            or self.has_default
            or self.type_descriptor.is_optional
            or (self.is_collection and self.min_elements == 0)
        )

    @property
    def has_value(self) -> bool:
        return self.value is not None

    @property
    def names(self) -> list[str]:
        """The names accepted on the command line, short name first."""
        names = []
        if self.short_name:
            names.append(self.short_name)
        if self.long_name:
            names.append(self.long_name)
        return names

    def default_values(self) -> list[str]:
        """Return the default as a list of strings, empty if there is none."""
        if not self.has_default or self.default is None:
            return []
        if self.is_collection:
            return [format_value(item) for item in self.default]
        return [format_value(self.default)]

    def empty_value(self) -> Any:
        """The value an omitted or cleared argument is constructed with."""
        if self.is_collection and not self.type_descriptor.is_optional:
            return self.type_descriptor.build_collection([])
        return None

    def bound_value(self) -> Any:
        """The value passed to the constructor for this argument."""
        if self.value is None and not self.has_default:
            return self.empty_value()
        return self.value

    def _convert(self, raw: str) -> Any:
        if self.converter is not None:
            return self.converter(raw)
        return coerce_value(raw, self.type_descriptor.value_type)

    def set_argument(self, *values: str, none_token: str = ":none:") -> None:
        """
        Set the value from the strings given on the command line. May only be
        called once.

        Raises:
            RuntimeError: If the argument has already been set.
            TooManyValuesError: If a scalar argument is given several values.
            BadArgumentValueError: If a value cannot be converted, or the clearing
                token is misused.
        """
        if self.is_set_by_user:
            raise RuntimeError(f"Argument '{self.name}' has already been set")
        if not self.is_collection and len(values) > 1:
            raise TooManyValuesError(
                f"Argument '{self.long_name}' cannot be specified more than once."
            )

        is_none = [value.lower() == none_token.lower() for value in values]
        if self.is_flag and not values:
            self.value = True
        elif any(is_none):
            if len(values) > 1:
                raise BadArgumentValueError(
                    f"Argument '{self.long_name}': '{none_token}' must be the only value "
                    "given."
                )
            if not self.optional:
                raise BadArgumentValueError(
                    f"Argument '{self.long_name}' is required and cannot be cleared with "
                    f"'{none_token}'."
                )
            self.value = self.empty_value()
        else:
            try:
                converted = [self._convert(value) for value in values]
            except Exception as error:
                raise BadArgumentValueError(
                    f"Argument '{self.long_name}' could not be constructed from string"
                    + chained_error_message(error)
                ) from error
            if self.is_collection:
                self.value = self.type_descriptor.build_collection(converted)
            else:
                self.value = converted[0]

        self.is_set_by_user = True

    def validate_collection(self) -> None:
        """
        Check the number of values of a collection argument.

        Raises:
            MissingArgumentError: If the collection is empty.
            ArgumentCountError: If the count is outside `[min_elements, max_elements]`.
        """
        count = len(self.value) if self.value is not None else 0
        if count == 0:
            raise MissingArgumentError(
                f"Argument '{self.long_name}' must be specified at least once."
            )
        self.validate_count()

    def validate_count(self) -> None:
        """Check a non-empty collection's count against its bounds."""
        count = len(self.value) if self.value is not None else 0
        minimum = self.min_elements or 0
        if count < minimum:
            raise ArgumentCountError(
                f"Argument '{self.long_name}' was specified too few times "
                f"({count} < {minimum})"
            )
        if self.max_elements is not None and count > self.max_elements:
            raise ArgumentCountError(
                f"Argument '{self.long_name}' was specified too many times "
                f"({count} > {self.max_elements})"
            )

    def to_command_line_string(self, none_token: str = ":none:") -> str:
        """Render this argument and its value as it could be typed back in."""
        value = self.value
        if value is None or (self.is_collection and not value):
            return f"--{self.long_name} {none_token}"
        if self.sensitive:
            return f"--{self.long_name} {SENSITIVE_MASK}"
        if self.is_collection:
            return f"--{self.long_name} " + " ".join(format_value(item) for item in value)
        return f"--{self.long_name} {format_value(value)}"

    def __str__(self) -> str:
        names = ", ".join(
            f"-{name}" if len(name) == 1 else f"--{name}" for name in self.names
        )
        return f"Argument({self.name}: {self.type_name}, names=[{names}])"
