# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Read-only view of a command's declaration for documentation and help output.

`inspect()` projects the argument model of a command class into frozen pydantic
models that can be compared, serialised (`to_dict()`), or rendered. Free-text
descriptions stay Markdown; `description_as_text()` and `description_as_html()`
delegate to a `MarkdownRenderer`.

`usage_sections()` groups a command's arguments the way a usage screen lists
them: by group in order of first appearance, each split into required and
optional arguments in declaration order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from optline.markdown import DEFAULT_RENDERER, MarkdownRenderer
from optline.parser.argument import Argument
from optline.parser.command_argument_parser import CommandArgumentParser


class MarkdownDescription(BaseModel):
    """Base for models carrying a Markdown `description`."""

    model_config = ConfigDict(frozen=True)

    description: str = ""
    _renderer: MarkdownRenderer = PrivateAttr(default=DEFAULT_RENDERER)

    def description_as_text(self) -> str:
        return self._renderer.to_text(self.description)

    def description_as_html(self) -> str:
        return self._renderer.to_html(self.description)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class GroupMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    rank: int = 1024


class ArgMetadata(MarkdownDescription):
    """
    One argument as presented on the command line.

    Attributes:
        name (str): Long name.
        flag (str | None): Short name.
        kind (str): Type label; for collections, the element type.
        min_values (int): Minimum number of values.
        max_values (int | None): Maximum number of values, None if unbounded.
        default_values (list[str]): Defaults rendered as strings.
        sensitive (bool): Values should not be displayed.
        group (str | None): Usage heading.
        mutex (list[str]): Long names of mutually exclusive arguments.
        choices (list[str]): Allowed values of Enum and Literal arguments.
    """

    name: str
    flag: str | None = None
    kind: str
    min_values: int
    max_values: int | None
    default_values: list[str] = []
    sensitive: bool = False
    group: str | None = None
    mutex: list[str] = []
    choices: list[str] = []


class CommandMetadata(MarkdownDescription):
    """A command's name, grouping, description, and ordered arguments."""

    name: str
    group: GroupMetadata
    hidden: bool = False
    args: list[ArgMetadata] = []


def _arg_metadata(parser: CommandArgumentParser, argument: Argument) -> ArgMetadata:
    if argument.is_collection:
        min_values = argument.min_elements or 0
        max_values = argument.max_elements
    else:
        min_values = 0 if argument.optional else 1
        max_values = 1
    return ArgMetadata(
        name=argument.long_name,
        flag=argument.short_name,
        kind=argument.type_name,
        min_values=min_values,
        max_values=max_values,
        default_values=argument.default_values(),
        sensitive=argument.sensitive,
        description=argument.doc,
        group=argument.group,
        mutex=[
            partner.long_name
            for partner in parser.arguments.ordered(argument.mutually_exclusive)
        ],
        choices=argument.type_descriptor.choices,
    )


def inspect(
    cls: type,
    renderer: MarkdownRenderer | None = None,
    include_hidden: bool = True,
) -> CommandMetadata:
    """
    Describe a command class.

    Args:
        cls (type): The command class.
        renderer (MarkdownRenderer | None): Renderer used by the `description_as_*`
            methods of the result.
        include_hidden (bool): Include arguments that are hidden from the command line.

    Raises:
        CommandDefinitionError: If the command's declaration is inconsistent.
    """
    parser = CommandArgumentParser(cls, include_special_args=False)
    args = [
        _arg_metadata(parser, argument)
        for argument in parser.arguments
        if include_hidden or not argument.hidden
    ]
    group = parser.info.group
    metadata = CommandMetadata(
        name=parser.program_name,
        group=GroupMetadata(name=group.name, description=group.description, rank=group.rank),
        hidden=parser.info.hidden,
        description=parser.info.description,
        args=args,
    )
    if renderer is not None:
        metadata._renderer = renderer
        for arg_metadata in metadata.args:
            arg_metadata._renderer = renderer
    return metadata


@dataclass
class ArgumentSection:
    """The arguments listed under one usage heading."""

    group: str
    required: list[Argument] = field(default_factory=list)
    optional: list[Argument] = field(default_factory=list)


def usage_sections(
    source: type | CommandArgumentParser, with_special: bool = True
) -> list[ArgumentSection]:
    """
    Group the visible arguments of a command for a usage screen.

    Args:
        source: A command class, or a parser whose bound arguments should be used.
        with_special (bool): Include `--help` and `--version`.
    """
    if isinstance(source, CommandArgumentParser):
        parser = source
    else:
        parser = CommandArgumentParser(source)
    sections: dict[str, ArgumentSection] = {}
    for argument in parser.arguments.visible():
        if argument.special and not with_special:
            continue
        group = argument.group or ""
        group = group[:1].upper() + group[1:]
        section = sections.setdefault(group, ArgumentSection(group))
        if argument.optional:
            section.optional.append(argument)
        else:
            section.required.append(argument)
    return list(sections.values())
