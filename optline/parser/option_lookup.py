# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
String-level bookkeeping of registered options and the values given to them.

`OptionLookup` maps every registered name (short and long aliases alike) to a
shared `OptionAndValues`. Names resolve exactly first, then by unambiguous
prefix, so `--inp` finds `--input` as long as no other option starts with
`inp`. Values are accumulated according to the option's `OptionType`; nothing
here knows about target types or defaults.
"""
from __future__ import annotations

from difflib import get_close_matches

from optline.exceptions import (
    DuplicateOptionNameError,
    IllegalFlagValueError,
    IllegalOptionNameError,
    OptionSpecifiedMultipleTimesError,
    TooFewValuesError,
    TooManyValuesError,
)
from optline.logger import logger
from optline.parser.option_type import OptionType
from optline.parser.tokens import add_back_dashes

TRUE_VALUES = frozenset({"true", "t", "yes", "y"})
FALSE_VALUES = frozenset({"false", "f", "no", "n"})


def convert_flag_value(value: str) -> str:
    """
    Normalise a flag value to "true" or "false".

    Accepts T|True|Yes|Y and F|False|No|N, ignoring case.

    Raises:
        IllegalFlagValueError: If the value is not one of the accepted spellings.
    """
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return "true"
    if lowered in FALSE_VALUES:
        return "false"
    raise IllegalFlagValueError(
        f"'{value}' does not match one of T|True|F|False|Yes|Y|No|N"
    )


class OptionAndValues:
    """The names of one registered option and the values accumulated for it."""

    def __init__(self, option_type: OptionType, option_names: tuple[str, ...]) -> None:
        self.option_type: OptionType = option_type
        self.option_names: tuple[str, ...] = option_names
        self._values: list[str] = []

    @property
    def values(self) -> list[str]:
        return list(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __repr__(self) -> str:
        return (
            f"OptionAndValues(type={self.option_type}, names={self.option_names}, "
            f"values={self._values})"
        )

    def add(self, option_name: str, *values: str) -> None:
        """
        Add the values from one occurrence of this option.

        Raises:
            IllegalFlagValueError: A flag value is not a recognised boolean.
            TooFewValuesError: A value-bearing option was given no value.
            TooManyValuesError: A flag or single-value option was given several values.
            OptionSpecifiedMultipleTimesError: A flag or single-value option occurred twice.
        """
        display = add_back_dashes(option_name)
        if self.option_type == OptionType.FLAG:
            if len(values) > 1:
                raise TooManyValuesError(
                    f"Trying to add more than one value for the flag option: '{display}'"
                )
            converted = convert_flag_value(values[0]) if values else "true"
            self._add_single(display, converted)
        elif self.option_type == OptionType.SINGLE_VALUE:
            if not values:
                raise TooFewValuesError(
                    f"No values given for the single-value option: '{display}'"
                )
            if len(values) > 1:
                raise TooManyValuesError(
                    f"Trying to add more than one value for the single-value option: "
                    f"'{display}'"
                )
            self._add_single(display, values[0])
        else:
            if not values:
                raise TooFewValuesError(
                    f"No values given for the multi-value option: '{display}'"
                )
            self._values.extend(values)

    def _add_single(self, display: str, value: str) -> None:
        if self._values:
            raise OptionSpecifiedMultipleTimesError(f"'{display}' specified more than once.")
        self._values.append(value)


class OptionLookup:
    """Registry from option names and aliases to their accumulated values."""

    def __init__(self) -> None:
        self.option_map: dict[str, OptionAndValues] = {}

    @property
    def option_names(self) -> list[str]:
        return list(self.option_map)

    def options(self) -> list[OptionAndValues]:
        """Return each registered option once, in registration order."""
        unique: dict[int, OptionAndValues] = {}
        for option in self.option_map.values():
            unique.setdefault(id(option), option)
        return list(unique.values())

    def accept_flag(self, *option_names: str) -> OptionLookup:
        return self.accept(OptionType.FLAG, *option_names)

    def accept_single_value(self, *option_names: str) -> OptionLookup:
        return self.accept(OptionType.SINGLE_VALUE, *option_names)

    def accept_multiple_values(self, *option_names: str) -> OptionLookup:
        return self.accept(OptionType.MULTI_VALUE, *option_names)

    def accept(self, option_type: OptionType | str, *option_names: str) -> OptionLookup:
        """
        Register one option under all of the given names.

        Raises:
            DuplicateOptionNameError: If any name is already registered or repeated.
        """
        option_type = OptionType(option_type)
        if not option_names:
            raise ValueError("At least one option name is required")
        seen: set[str] = set()
        for name in option_names:
            if name in self.option_map or name in seen:
                raise DuplicateOptionNameError(
                    f"Option name '{name}' specified more than once"
                )
            seen.add(name)
        option = OptionAndValues(option_type, tuple(option_names))
        for name in option_names:
            self.option_map[name] = option
        logger.debug("Registered %s option %s.", option_type, list(option_names))
        return self

    def _names_with_prefix(self, prefix: str) -> list[str]:
        return sorted(name for name in self.option_map if name.startswith(prefix))

    def find_exact_or_prefix(self, option_name: str) -> list[OptionAndValues]:
        """Return the option named exactly, else every distinct option with the prefix."""
        if option_name in self.option_map:
            return [self.option_map[option_name]]
        if not option_name:
            return []
        matches: dict[int, OptionAndValues] = {}
        for name in self._names_with_prefix(option_name):
            option = self.option_map[name]
            matches.setdefault(id(option), option)
        return list(matches.values())

    def resolve(self, option_name: str) -> OptionAndValues:
        """
        Resolve a name or unambiguous prefix to its option.

        Raises:
            IllegalOptionNameError: If no option matches.
            DuplicateOptionNameError: If the prefix matches several options.
        """
        matches = self.find_exact_or_prefix(option_name)
        if not matches:
            raise IllegalOptionNameError(self._unknown_message(option_name))
        if len(matches) > 1:
            raise DuplicateOptionNameError(
                f"Multiple options found for name '{option_name}': "
                + ", ".join(self._names_with_prefix(option_name))
            )
        return matches[0]

    def has_option_name(self, option_name: str) -> bool:
        """True if exactly one option has this name or prefix."""
        return len(self.find_exact_or_prefix(option_name)) == 1

    def has_option_values(self, option_name: str) -> bool:
        """True if the option resolves and has at least one value."""
        if not self.has_option_name(option_name):
            return False
        return bool(self.resolve(option_name))

    def single_value(self, option_name: str) -> str:
        """Return the one value given for the option."""
        values = self.option_values(option_name)
        if not values:
            raise IllegalOptionNameError(f"No values found for option '{option_name}'")
        if len(values) > 1:
            raise IllegalOptionNameError(
                f"Multiple values found for option '{option_name}': " + ", ".join(values)
            )
        return values[0]

    def option_values(self, option_name: str) -> list[str]:
        """Return every value accumulated for the option."""
        return self.resolve(option_name).values

    def add_option_values(self, option_name: str, *values: str) -> list[str]:
        """Resolve the option, add one occurrence's values, and return all its values."""
        option = self.resolve(option_name)
        option.add(option_name, *values)
        return option.values

    def _unknown_message(self, option_name: str) -> str:
        message = f"No option found with name '{option_name}'."
        suggestions = get_close_matches(option_name, self.option_names, n=5, cutoff=0.6)
        if suggestions:
            message += " Did you mean: " + ", ".join(
                add_back_dashes(name) for name in suggestions
            ) + "?"
        return message
