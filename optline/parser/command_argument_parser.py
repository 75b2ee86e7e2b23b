# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CommandArgumentParser`, which binds a command line onto
the constructor of a command class.

A parse attempt runs to exactly one terminal state:

1. Every visible argument is registered with an `OptionParser` as a flag,
   single-value, or multi-value option.
2. The raw arguments are tokenized, collated, and accumulated. Any failure here
   ends the attempt with a `ParseFailure` carrying the unparsed tail.
3. Each option's accumulated values are converted and bound to its `Argument`.
4. `--version`, then `--help`, short-circuit to `ParseVersion` / `ParseHelp`.
5. Mutual exclusion, collection counts, and required arguments are validated.
6. The command is constructed. Exceptions raised by its constructor become a
   `ParseFailure` rather than escaping.

Example Usage:
    @dataclass
    class Greet:
        name: str
        count: int = 3

    parser = CommandArgumentParser(Greet)
    result = parser.parse_and_build(["--nam", "x", "--count", "5"])
    # result == ParseSuccess(instance=Greet(name='x', count=5))
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, packages_distributions, version
from typing import Any, Sequence

from optline.config import DEFAULT_SETTINGS, ParserSettings
from optline.declarations import CommandInfo, get_command_info
from optline.exceptions import (
    CommandLineError,
    MutuallyExclusiveArgumentError,
    OptionParsingError,
    RequiredArgumentError,
    ValidationError,
)
from optline.logger import logger
from optline.parser.argument import Argument
from optline.parser.argument_lookup import ArgumentLookup
from optline.parser.option_parser import OptionParser
from optline.parser.option_type import OptionType
from optline.parser.parser_types import (
    ParseFailure,
    ParseHelp,
    ParseResult,
    ParseSuccess,
    ParseVersion,
)
from optline.parser.signature import build_argument_lookup
from optline.parser.special_arguments import HELP, VERSION, add_special_arguments


def option_type_for(argument: Argument) -> OptionType:
    """The registry kind used for an argument."""
    if argument.is_flag:
        return OptionType.FLAG
    if argument.is_collection:
        return OptionType.MULTI_VALUE
    return OptionType.SINGLE_VALUE


class CommandArgumentParser:
    """
    Parses command lines into instances of one command class.

    Attributes:
        target (type): The command class.
        settings (ParserSettings): Engine options.
        include_special_args (bool): Whether `--help` and `--version` are accepted.
        info (CommandInfo): Metadata from `@command`, or defaults.
        program_name (str): Name shown in usage and `command_line()`.
        arguments (ArgumentLookup): The argument model of the current attempt.
        special_arguments (list[Argument]): The help and version arguments.
        instance (Any): The command built by the last successful parse.
        remaining (list[str]): The unparsed tail of the last failed parse.
    """

    def __init__(
        self,
        target: type,
        settings: ParserSettings | None = None,
        include_special_args: bool | None = None,
        program_name: str | None = None,
    ) -> None:
        self.target = target
        self.settings: ParserSettings = settings or DEFAULT_SETTINGS
        self.include_special_args: bool = (
            self.settings.include_special_args
            if include_special_args is None
            else include_special_args
        )
        self.info: CommandInfo = get_command_info(target) or CommandInfo()
        self.program_name: str = program_name or self.info.name or target.__name__
        self.special_arguments: list[Argument] = []
        self.arguments: ArgumentLookup = self._build_arguments()
        self.instance: Any = None
        self.remaining: list[str] = []

    def _build_arguments(self) -> ArgumentLookup:
        lookup = build_argument_lookup(self.target)
        self.special_arguments = (
            add_special_arguments(lookup) if self.include_special_args else []
        )
        return lookup

    @property
    def version(self) -> str:
        """The command's version, its distribution's version, or "unknown"."""
        if self.info.version:
            return self.info.version
        top_level = self.target.__module__.split(".")[0]
        for distribution in packages_distributions().get(top_level, [top_level]):
            try:
                return version(distribution)
            except PackageNotFoundError:
                continue
        return "unknown"

    def render_usage(self) -> str:
        from optline.usage import render_usage

        return render_usage(self)

    def _failure(self, error: CommandLineError, remaining: Sequence[str] = ()) -> ParseFailure:
        self.remaining = list(remaining)
        logger.debug("[%s] Parse failed: %s", self.program_name, error)
        return ParseFailure(error, list(remaining), self.render_usage())

    def _special_requested(self, name: str) -> bool:
        return any(
            argument.name == name and argument.value is True
            for argument in self.special_arguments
        )

    def parse_and_build(self, args: Sequence[str]) -> ParseResult:
        """
        Parse `args` and build the command.

        Args:
            args (Sequence[str]): Raw command-line arguments, without the program name.

        Returns:
            ParseResult: `ParseSuccess`, `ParseFailure`, `ParseHelp`, or `ParseVersion`.
        """
        args = list(args)
        self.instance = None
        self.remaining = []
        self.arguments = self._build_arguments()

        option_parser = OptionParser(
            arg_file_prefix=self.settings.arg_file_prefix,
            comment_prefix=self.settings.comment_prefix,
            max_arg_file_depth=self.settings.max_arg_file_depth,
        )
        for argument in self.arguments.visible():
            option_parser.accept(option_type_for(argument), *argument.names)

        try:
            option_parser.parse(args)
        except OptionParsingError as error:
            return self._failure(error, option_parser.remaining)

        for name, values in option_parser:
            argument = self.arguments.by_name(name)
            assert argument is not None
            try:
                argument.set_argument(*values, none_token=self.settings.none_token)
            except CommandLineError as error:
                return self._failure(error)

        if self._special_requested(VERSION):
            logger.debug("[%s] Version requested.", self.program_name)
            return ParseVersion(self.version)
        if self._special_requested(HELP):
            logger.debug("[%s] Help requested.", self.program_name)
            return ParseHelp(self.render_usage())

        try:
            self.validate()
        except CommandLineError as error:
            return self._failure(error)

        return self._build()

    def validate(self) -> None:
        """
        Check mutual exclusion, collection counts, and required arguments.

        Raises:
            MutuallyExclusiveArgumentError: If excluded arguments were given together.
            MissingArgumentError: If a required collection is empty.
            ArgumentCountError: If a collection has too few or too many values.
            RequiredArgumentError: If a required scalar argument has no value.
        """
        for argument in self.arguments.non_special():
            partners = self.arguments.ordered(argument.mutually_exclusive)
            partners_set = [partner for partner in partners if partner.is_set_by_user]

            if argument.is_set_by_user and partners_set:
                raise MutuallyExclusiveArgumentError(
                    f"Argument '{argument.long_name}' cannot be used in conjunction with "
                    "argument(s): " + ", ".join(partner.long_name for partner in partners_set)
                )

            if argument.is_collection:
                if not argument.optional and not partners_set:
                    argument.validate_collection()
                elif argument.is_set_by_user and argument.value:
                    argument.validate_count()
            elif not argument.optional and not argument.has_value and not partners_set:
                if partners:
                    raise RequiredArgumentError(
                        f"Argument '{argument.long_name}' is required unless any of "
                        f"[{', '.join(partner.long_name for partner in partners)}] "
                        "are specified."
                    )
                raise RequiredArgumentError(f"Argument '{argument.long_name}' is required.")

    def _build(self) -> ParseResult:
        special = {id(argument) for argument in self.special_arguments}
        kwargs = {
            argument.name: argument.bound_value()
            for argument in self.arguments
            if id(argument) not in special
        }
        try:
            self.instance = self.target(**kwargs)
        except CommandLineError as error:
            return self._failure(error)
        except Exception as error:
            wrapped = ValidationError(str(error) or type(error).__name__)
            wrapped.__cause__ = error
            return self._failure(wrapped)
        logger.debug("[%s] Built %s.", self.program_name, self.target.__name__)
        return ParseSuccess(self.instance)

    def command_line(self) -> str:
        """
        Render the bound values as a command line that reproduces them.

        Sensitive values are masked and empty values render as the clearing token.
        """
        parts = [self.program_name]
        for argument in self.arguments.visible():
            if argument.special:
                continue
            parts.append(argument.to_command_line_string(self.settings.none_token))
        return " ".join(parts)

    def __str__(self) -> str:
        names = [argument.long_name for argument in self.arguments.visible()]
        return f"CommandArgumentParser(program={self.program_name!r}, args={names})"
