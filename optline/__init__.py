"""
Optline Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .config import ParserSettings, load_settings
from .declarations import Group, arg, command
from .metadata import ArgMetadata, CommandMetadata, inspect, usage_sections
from .parser import (
    CommandArgumentParser,
    ParseFailure,
    ParseHelp,
    ParseResult,
    ParseSuccess,
    ParseVersion,
)
from .usage import print_usage, render_failure, render_usage
from .version import __version__

logger = logging.getLogger("optline")


__all__ = [
    "ArgMetadata",
    "CommandArgumentParser",
    "CommandMetadata",
    "Group",
    "ParseFailure",
    "ParseHelp",
    "ParseResult",
    "ParseSuccess",
    "ParseVersion",
    "ParserSettings",
    "__version__",
    "arg",
    "command",
    "inspect",
    "load_settings",
    "print_usage",
    "render_failure",
    "render_usage",
    "usage_sections",
]
