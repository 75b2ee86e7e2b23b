# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Engine-level arguments every command accepts: `-h/--help` and `--version`.

They are flags marked `special`, so the binder resolves them before any other
validation and never passes them to the command's constructor. A special
argument, or `-h`, is left out when the command already declares that name.
"""
from __future__ import annotations

from optline.logger import logger
from optline.parser.argument import Argument
from optline.parser.argument_lookup import ArgumentLookup
from optline.parser.utils import describe_type

HELP = "help"
VERSION = "version"
SPECIAL_GROUP = "Special"


def _special_flag(name: str, index: int, short_name: str | None, doc: str) -> Argument:
    return Argument(
        name=name,
        index=index,
        type_descriptor=describe_type(bool),
        long_name=name,
        short_name=short_name,
        has_default=True,
        default=False,
        doc=doc,
        special=True,
        group=SPECIAL_GROUP,
    )


def add_special_arguments(lookup: ArgumentLookup) -> list[Argument]:
    """Append the help and version arguments to `lookup` and return them."""
    candidates = [
        (HELP, "h", "Display the help message."),
        (VERSION, None, "Display the version number."),
    ]
    specials = []
    for name, short_name, doc in candidates:
        if name in lookup or lookup.by_name(name):
            logger.debug("Special argument '%s' is shadowed by the command.", name)
            continue
        if short_name and lookup.by_name(short_name):
            short_name = None
        argument = _special_flag(name, len(lookup), short_name, doc)
        lookup.add(argument)
        specials.append(argument)
    return specials
