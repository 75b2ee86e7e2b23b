# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Terminal states of a parse attempt.

`CommandArgumentParser.parse_and_build()` returns exactly one of:
- `ParseSuccess`: the command was built.
- `ParseFailure`: the command line was rejected; carries the error and the
  verbatim unparsed tail.
- `ParseHelp`: `--help` was given.
- `ParseVersion`: `--version` was given.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from optline.exceptions import CommandLineError


@dataclass(frozen=True)
class ParseSuccess:
    """The command was built from the command line."""

    instance: Any


@dataclass(frozen=True)
class ParseFailure:
    """
    The command line was rejected.

    Attributes:
        error (CommandLineError): The first error encountered.
        remaining (list[str]): Raw arguments that were not consumed.
        usage (str): Rendered usage of the command, if a renderer was available.
    """

    error: CommandLineError
    remaining: list[str] = field(default_factory=list)
    usage: str = ""

    @property
    def message(self) -> str:
        message = str(self.error)
        if self.remaining:
            message += "\nUnparsed arguments: " + " ".join(self.remaining)
        return message


@dataclass(frozen=True)
class ParseHelp:
    """`--help` was given."""

    usage: str = ""


@dataclass(frozen=True)
class ParseVersion:
    """`--version` was given."""

    version: str


ParseResult = Union[ParseSuccess, ParseFailure, ParseHelp, ParseVersion]
