from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import pytest

from optline import (
    CommandArgumentParser,
    ParseFailure,
    ParseHelp,
    ParserSettings,
    ParseSuccess,
    ParseVersion,
    arg,
    command,
)
from optline.exceptions import (
    ArgumentCountError,
    ArgumentFileError,
    BadArgumentValueError,
    CommandDefinitionError,
    DuplicateOptionNameError,
    IllegalOptionNameError,
    MissingArgumentError,
    MutuallyExclusiveArgumentError,
    RequiredArgumentError,
    TooManyValuesError,
    ValidationError,
)


@dataclass
class Greet:
    name: str
    count: int = 3


class Level(Enum):
    LOW = 1
    HIGH = 2


@command(description="Process some *files*.", version="1.2.3")
@dataclass
class Process:
    inputs: Annotated[list[Path], arg(flag="i", doc="Input files.", max_elements=3)]
    output: Annotated[Optional[Path], arg(flag="o", mutex="dry_run")] = None
    dry_run: Annotated[bool, arg(flag="n")] = False
    level: Level = Level.LOW
    tags: Annotated[set[str], arg(min_elements=0)] = field(default_factory=lambda: {"a"})
    password: Annotated[str, arg(sensitive=True)] = "secret"


def parse(target, *args, **kwargs):
    return CommandArgumentParser(target, **kwargs).parse_and_build(list(args))


def test_end_to_end_defaults():
    result = parse(Greet, "--name", "x")
    assert isinstance(result, ParseSuccess)
    assert result.instance == Greet(name="x", count=3)


def test_end_to_end_prefix():
    result = parse(Greet, "--nam", "x", "--count", "5")
    assert isinstance(result, ParseSuccess)
    assert result.instance == Greet(name="x", count=5)


def test_end_to_end_missing_required():
    result = parse(Greet, "--count", "5")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, RequiredArgumentError)
    assert str(result.error) == "Argument 'name' is required."
    assert result.remaining == []
    assert "Usage: Greet [arguments]" in result.usage


def test_inline_and_short_forms():
    result = parse(Process, "-ia.txt", "-i=b.txt", "--inputs", "c.txt", "-o", "out", "--level=HIGH")
    assert isinstance(result, ParseSuccess)
    assert result.instance.inputs == [Path("a.txt"), Path("b.txt"), Path("c.txt")]
    assert result.instance.output == Path("out")
    assert result.instance.level is Level.HIGH
    assert result.instance.tags == {"a"}


def test_defaults_are_not_shared_between_parses():
    parser = CommandArgumentParser(Process)
    first = parser.parse_and_build(["-i", "a"]).instance
    first.tags.add("mutated")
    second = parser.parse_and_build(["-i", "b"]).instance
    assert second.tags == {"a"}


def test_tokenizer_failure_reports_remaining():
    result = parse(Greet, "--name", "x", "--", "--count", "2")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, IllegalOptionNameError)
    assert result.remaining == ["--", "--count", "2"]
    assert result.message.endswith("Unparsed arguments: -- --count 2")


def test_unknown_option_reports_remaining():
    result = parse(Greet, "--name", "x", "--colour", "red", "--count", "2")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, IllegalOptionNameError)
    assert result.remaining == ["--colour", "red", "--count", "2"]


def test_scalar_given_twice():
    result = parse(Greet, "--name", "x", "--name", "y")
    assert isinstance(result, ParseFailure)
    assert result.remaining == ["--name", "y"]


def test_scalar_given_two_values():
    result = parse(Greet, "--name", "x", "y")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, TooManyValuesError)


def test_ambiguous_prefix():
    @dataclass
    class Command:
        verbose: bool = False

    result = parse(Command, "--ver")
    assert isinstance(result.error, DuplicateOptionNameError)
    assert str(result.error) == "Multiple options found for name 'ver': verbose, version"


def test_bad_value():
    result = parse(Greet, "--name", "x", "--count", "many")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, BadArgumentValueError)
    assert "Argument 'count' could not be constructed from string" in str(result.error)


def test_enum_value_error_lists_options():
    result = parse(Process, "-i", "a", "--level", "MEDIUM")
    assert isinstance(result.error, BadArgumentValueError)
    assert "LOW, HIGH" in str(result.error)


def test_collection_arity():
    result = parse(Process)
    assert isinstance(result.error, MissingArgumentError)
    assert "must be specified at least once" in str(result.error)

    result = parse(Process, "-i", "1", "2", "3", "4", "5")
    assert isinstance(result.error, ArgumentCountError)
    assert "too many times (5 > 3)" in str(result.error)

    assert isinstance(parse(Process, "-i", "1", "2"), ParseSuccess)


def test_flag_forms():
    assert parse(Process, "-i", "a", "-n").instance.dry_run is True
    assert parse(Process, "-i", "a", "--dry-run", "no").instance.dry_run is False
    assert parse(Process, "-i", "a", "-nY").instance.dry_run is True
    assert parse(Process, "-i", "a").instance.dry_run is False


def test_clearing_sentinel():
    result = parse(Process, "-i", "a", "--tags", ":none:")
    assert result.instance.tags == set()

    result = parse(Process, "-i", "a", "--tags", ":None:", "b")
    assert isinstance(result.error, BadArgumentValueError)

    result = parse(Process, "-i", ":none:")
    assert isinstance(result.error, BadArgumentValueError)

    result = parse(Process, "-i", "a", "--output", ":none:")
    assert result.instance.output is None


def test_custom_clearing_sentinel():
    settings = ParserSettings(none_token="NULL")
    result = parse(Process, "-i", "a", "--tags", "null", settings=settings)
    assert result.instance.tags == set()


def test_mutually_exclusive():
    result = parse(Process, "-i", "a", "-o", "out", "-n")
    assert isinstance(result.error, MutuallyExclusiveArgumentError)
    assert str(result.error) == (
        "Argument 'output' cannot be used in conjunction with argument(s): dry-run"
    )
    assert isinstance(parse(Process, "-i", "a", "-o", "out"), ParseSuccess)


def test_mutex_partner_satisfies_required_argument():
    @dataclass
    class Command:
        name: Annotated[str, arg(mutex="alias")]
        alias: Optional[str] = None

    result = parse(Command)
    assert isinstance(result.error, RequiredArgumentError)
    assert str(result.error) == "Argument 'name' is required unless any of [alias] are specified."

    result = parse(Command, "--alias", "x")
    assert isinstance(result, ParseSuccess)
    assert result.instance.name is None


def test_mutex_partner_satisfies_required_collection():
    @dataclass
    class Command:
        names: Annotated[list[str], arg(mutex="all")]
        all: bool = False

    assert isinstance(parse(Command).error, MissingArgumentError)
    result = parse(Command, "--all")
    assert isinstance(result, ParseSuccess)
    assert result.instance.names == []


def test_help_and_version():
    assert isinstance(parse(Process, "--help"), ParseHelp)
    assert isinstance(parse(Process, "-h"), ParseHelp)
    result = parse(Process, "--version")
    assert isinstance(result, ParseVersion)
    assert result.version == "1.2.3"
    assert isinstance(parse(Process, "--help", "--version"), ParseVersion)
    assert "Usage: Process [arguments]" in parse(Process, "-h").usage


def test_help_skips_validation():
    assert isinstance(parse(Greet, "--help"), ParseHelp)


def test_special_args_can_be_disabled():
    result = parse(Greet, "--help", include_special_args=False)
    assert isinstance(result.error, IllegalOptionNameError)
    settings = ParserSettings(include_special_args=False)
    assert isinstance(parse(Greet, "--version", settings=settings), ParseFailure)


def test_command_may_use_h():
    @dataclass
    class Command:
        host: Annotated[str, arg(flag="h")] = "localhost"

    parser = CommandArgumentParser(Command)
    assert parser.parse_and_build(["-h", "example.org"]).instance.host == "example.org"
    assert isinstance(parser.parse_and_build(["--help"]), ParseHelp)


def test_version_fallback():
    assert CommandArgumentParser(Greet).version == "unknown"


def test_constructor_errors_become_failures():
    @dataclass
    class Command:
        count: int = 1

        def __post_init__(self):
            if self.count < 0:
                raise ValueError("count must not be negative")

    result = parse(Command, "--count", "-1")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, ValidationError)
    assert str(result.error) == "count must not be negative"
    assert result.remaining == []


def test_validation_error_passes_through():
    @dataclass
    class Command:
        name: str

        def __post_init__(self):
            if not self.name.isidentifier():
                raise ValidationError(f"'{self.name}' is not an identifier")

    result = parse(Command, "--name", "1abc")
    assert str(result.error) == "'1abc' is not an identifier"


def test_arg_file(tmp_path):
    arg_file = tmp_path / "args.txt"
    arg_file.write_text("--name\nvalue with spaces\n")
    result = parse(Greet, f"@{arg_file}", "--count", "1")
    assert result.instance == Greet(name="value with spaces", count=1)


def test_arg_file_failure(tmp_path):
    arg_file = tmp_path / "loop.txt"
    arg_file.write_text(f"@{arg_file}\n")
    result = parse(Greet, "--name", "x", f"@{arg_file}")
    assert isinstance(result.error, ArgumentFileError)


def test_undecodable_arg_file_is_a_failure(tmp_path):
    arg_file = tmp_path / "binary.txt"
    arg_file.write_bytes(b"--name\n\xff\xfe bad\n")
    result = parse(Greet, f"@{arg_file}", "--count", "1")
    assert isinstance(result, ParseFailure)
    assert isinstance(result.error, ArgumentFileError)
    assert result.remaining == [f"@{arg_file}", "--count", "1"]


def test_command_line():
    parser = CommandArgumentParser(Process)
    parser.parse_and_build(["-i", "a", "b", "--tags", ":none:"])
    assert parser.command_line() == (
        "Process --inputs a b --output :none: --dry-run false --level LOW "
        "--tags :none: --password ***********"
    )


def test_invalid_declaration_fails_fast():
    @dataclass
    class Command:
        value: Annotated[int, arg(mutex="nothing")] = 1

    with pytest.raises(CommandDefinitionError):
        CommandArgumentParser(Command)
