# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token and record types shared by the tokenizer, the collator, and the option parser.

- `OptionName`: a bare option such as `--input` or `-i`.
- `OptionNameWithValue`: an option carrying an inline value (`--input=a`, `-ia`).
- `BareValue`: any raw argument that is not an option.
- `ArgOptionAndValues`: an option name together with every value attributed to it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class OptionName:
    name: str


@dataclass(frozen=True)
class OptionNameWithValue:
    name: str
    value: str


@dataclass(frozen=True)
class BareValue:
    value: str


Token = Union[OptionName, OptionNameWithValue, BareValue]


@dataclass(frozen=True)
class ArgOptionAndValues:
    """An option name and the values collated under it, in command-line order."""

    name: str
    values: tuple[str, ...] = field(default_factory=tuple)


def add_back_dashes(name: str) -> str:
    """Return the option name with the dashes it would have on the command line."""
    return f"-{name}" if len(name) == 1 else f"--{name}"
