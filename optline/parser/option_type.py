# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionType`, the arity class an option is registered with.

The option type is fixed at registration and decides how many values one
occurrence of the option may carry and how many times it may occur:

- FLAG: zero or one boolean value; at most one occurrence.
- SINGLE_VALUE: exactly one value; at most one occurrence.
- MULTI_VALUE: one or more values per occurrence; any number of occurrences.

Example:
    OptionType("flag")   → OptionType.FLAG
    OptionType("single") → OptionType.SINGLE_VALUE (via alias)
"""
from __future__ import annotations

from enum import Enum


class OptionType(Enum):
    """Arity class of a registered option."""

    FLAG = "flag"
    SINGLE_VALUE = "single_value"
    MULTI_VALUE = "multi_value"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "single": "single_value",
            "multi": "multi_value",
            "multiple": "multi_value",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> OptionType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        alias = cls._get_alias(value.strip().lower().replace("-", "_"))
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value
