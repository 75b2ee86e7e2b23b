# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Optline.

There are two families. User-input errors derive from `CommandLineError`: they
describe a bad command line and are always caught by `CommandArgumentParser` and
turned into a `ParseFailure`. Configuration errors derive from
`CommandDefinitionError`: they describe a mistake in how a command declares its
arguments and are raised straight to the caller while the argument model is built.

Exception Hierarchy:
- OptlineError
    ├── CommandDefinitionError
    └── CommandLineError
        ├── OptionParsingError
        │   ├── OptionNameError
        │   │   ├── IllegalOptionNameError
        │   │   └── DuplicateOptionNameError
        │   ├── OptionSpecifiedMultipleTimesError
        │   ├── TooFewValuesError
        │   ├── TooManyValuesError
        │   ├── IllegalFlagValueError
        │   └── ArgumentFileError
        ├── MissingArgumentError
        ├── RequiredArgumentError
        ├── ArgumentCountError
        ├── MutuallyExclusiveArgumentError
        ├── BadArgumentValueError
        └── ValidationError
"""


class OptlineError(Exception):
    """Base exception for every error raised by Optline."""


class CommandDefinitionError(OptlineError):
    """Raised when a command declares its arguments inconsistently."""


class CommandLineError(OptlineError):
    """Base exception for errors caused by the user's command line."""


class OptionParsingError(CommandLineError):
    """Raised while tokenizing, collating, or accumulating option values."""


class OptionNameError(OptionParsingError):
    """Raised when a token cannot be attributed to an option name."""


class IllegalOptionNameError(OptionNameError):
    """Raised for malformed option tokens and for unknown option names."""


class DuplicateOptionNameError(OptionNameError):
    """Raised when an option name is registered twice or a prefix is ambiguous."""


class OptionSpecifiedMultipleTimesError(OptionParsingError):
    """Raised when a flag or single-value option is given more than once."""


class TooFewValuesError(OptionParsingError):
    """Raised when an option that needs a value is given none."""


class TooManyValuesError(OptionParsingError):
    """Raised when an option is given more values than it accepts at once."""


class IllegalFlagValueError(OptionParsingError):
    """Raised when a flag is given a value that is not a recognised boolean."""


class ArgumentFileError(OptionParsingError):
    """Raised when an argument file cannot be read or includes itself."""


class MissingArgumentError(CommandLineError):
    """Raised when a required collection argument received no values."""


class RequiredArgumentError(CommandLineError):
    """Raised when a required scalar argument received no value."""


class ArgumentCountError(CommandLineError):
    """Raised when a collection argument has too few or too many values."""


class MutuallyExclusiveArgumentError(CommandLineError):
    """Raised when mutually exclusive arguments are supplied together."""


class BadArgumentValueError(CommandLineError):
    """Raised when a value cannot be converted to the argument's type."""


class ValidationError(CommandLineError):
    """Raised by command constructors to reject otherwise well-formed values."""
