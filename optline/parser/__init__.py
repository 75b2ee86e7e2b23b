"""
Optline Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument
from .argument_lookup import ArgumentLookup
from .command_argument_parser import CommandArgumentParser
from .option_lookup import OptionLookup
from .option_parser import OptionParser
from .option_type import OptionType
from .parser_types import ParseFailure, ParseHelp, ParseResult, ParseSuccess, ParseVersion
from .signature import build_argument_lookup

__all__ = [
    "Argument",
    "ArgumentLookup",
    "CommandArgumentParser",
    "OptionLookup",
    "OptionParser",
    "OptionType",
    "ParseFailure",
    "ParseHelp",
    "ParseResult",
    "ParseSuccess",
    "ParseVersion",
    "build_argument_lookup",
]
