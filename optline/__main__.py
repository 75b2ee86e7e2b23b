"""
Optline Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import json
import sys
from dataclasses import dataclass
from importlib import import_module
from typing import Annotated, Any, Literal, Sequence

import toml
import yaml

from optline.config import DEFAULT_SETTINGS, find_settings_file, load_settings
from optline.console import console
from optline.declarations import arg, command
from optline.exceptions import CommandDefinitionError
from optline.logger import logger
from optline.metadata import inspect
from optline.parser import CommandArgumentParser, ParseFailure, ParseHelp, ParseVersion
from optline.usage import print_usage, render_failure
from optline.utils import setup_logging
from optline.version import __version__


@command(
    description="""
        Print the metadata of an Optline command class.

        The command's name, group, description, and arguments are written in a
        machine-readable format for documentation generators.
    """,
    name="optline",
    version=__version__,
)
@dataclass
class Describe:
    target: Annotated[
        str, arg(doc="The command class, as `package.module:ClassName`.")
    ]
    format: Annotated[
        Literal["json", "yaml", "toml"], arg(flag="f", doc="The output format.")
    ] = "json"
    include_hidden: Annotated[
        bool, arg(doc="Include arguments that are hidden from the command line.")
    ] = False


def load_target(target: str) -> type:
    """Import `package.module:ClassName`."""
    module_name, separator, class_name = target.partition(":")
    if not separator or not module_name or not class_name:
        raise CommandDefinitionError(
            f"'{target}' must be given as package.module:ClassName"
        )
    try:
        module = import_module(module_name)
    except ImportError as error:
        raise CommandDefinitionError(f"Could not import '{module_name}': {error}") from error
    cls = getattr(module, class_name, None)
    if not isinstance(cls, type):
        raise CommandDefinitionError(f"'{class_name}' is not a class in '{module_name}'")
    return cls


def dump(data: dict[str, Any], output_format: str) -> str:
    if output_format == "yaml":
        return yaml.dump(data, sort_keys=False)
    if output_format == "toml":
        return toml.dumps(data)
    return json.dumps(data, indent=4)


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    settings_path = find_settings_file()
    settings = load_settings(settings_path) if settings_path else DEFAULT_SETTINGS
    parser = CommandArgumentParser(Describe, settings=settings)

    result = parser.parse_and_build(sys.argv[1:] if argv is None else argv)
    if isinstance(result, ParseHelp):
        print_usage(parser)
        return 0
    if isinstance(result, ParseVersion):
        console.print(result.version, highlight=False)
        return 0
    if isinstance(result, ParseFailure):
        console.print(render_failure(result), markup=False, highlight=False, soft_wrap=True)
        return 1

    describe: Describe = result.instance
    try:
        metadata = inspect(load_target(describe.target), include_hidden=describe.include_hidden)
    except CommandDefinitionError as error:
        logger.error("%s", error)
        return 1
    console.print(
        dump(metadata.to_dict(), describe.format),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
