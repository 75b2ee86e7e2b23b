# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Declarative metadata for commands and their arguments.

A command is any class whose constructor parameters describe its arguments.
`@command(...)` adds program-level metadata and `arg(...)` adds per-parameter
metadata through `typing.Annotated`:

    @command(description="Sort a **BAM** file.", group="Alignment")
    @dataclass
    class SortBam:
        input: Annotated[Path, arg(flag="i", doc="Input file.")]
        output: Annotated[Path, arg(flag="o", doc="Output file.")]
        threads: Annotated[int, arg(flag="t", doc="Worker threads.")] = 4
        tags: Annotated[list[str], arg(min_elements=0, mutex=["no_tags"])] = field(
            default_factory=list
        )

Parameters without `arg(...)` are ordinary arguments with default metadata.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from optline.utils import dedent_markdown

COMMAND_INFO_ATTRIBUTE = "__optline_command__"

T = TypeVar("T", bound=type)


@dataclass(frozen=True)
class ArgSpec:
    """
    Per-parameter metadata attached with `Annotated[T, arg(...)]`.

    Attributes:
        flag (str | None): Single-character short name, e.g. "i" for `-i`.
        name (str | None): Long name override; defaults to the hyphenated parameter name.
        doc (str): Markdown documentation.
        mutex (tuple[str, ...]): Parameter names this argument cannot be combined with.
        min_elements (int | None): Minimum number of values for collections (default 1).
        max_elements (int | None): Maximum number of values for collections (default unbounded).
        sensitive (bool): Mask the value when echoing the command line.
        special (bool): Reserved for engine-level arguments such as help and version.
        hidden (bool): Do not expose the argument on the command line.
        group (str | None): Heading under which the argument is listed in usage.
        converter (Callable | None): Converts one command-line string to a value.
    """

    flag: str | None = None
    name: str | None = None
    doc: str = ""
    mutex: tuple[str, ...] = ()
    min_elements: int | None = None
    max_elements: int | None = None
    sensitive: bool = False
    special: bool = False
    hidden: bool = False
    group: str | None = None
    converter: Callable[[str], Any] | None = None


def arg(
    flag: str | None = None,
    name: str | None = None,
    doc: str = "",
    mutex: str | Iterable[str] = (),
    min_elements: int | None = None,
    max_elements: int | None = None,
    sensitive: bool = False,
    special: bool = False,
    hidden: bool = False,
    group: str | None = None,
    converter: Callable[[str], Any] | None = None,
) -> ArgSpec:
    """Build the `ArgSpec` to place inside `Annotated[...]` for one parameter."""
    if isinstance(mutex, str):
        mutex = (mutex,)
    return ArgSpec(
        flag=flag,
        name=name,
        doc=dedent_markdown(doc),
        mutex=tuple(mutex),
        min_elements=min_elements,
        max_elements=max_elements,
        sensitive=sensitive,
        special=special,
        hidden=hidden,
        group=group,
        converter=converter,
    )


@dataclass(frozen=True)
class Group:
    """A named group of related commands."""

    name: str
    description: str = ""
    rank: int = 1024


DEFAULT_GROUP = Group(name="Other", description="Uncategorized commands.")


@dataclass(frozen=True)
class CommandInfo:
    """Program-level metadata attached to a command class by `@command`."""

    description: str = ""
    group: Group = field(default=DEFAULT_GROUP)
    hidden: bool = False
    name: str | None = None
    version: str | None = None


def command(
    description: str = "",
    group: Group | str | None = None,
    hidden: bool = False,
    name: str | None = None,
    version: str | None = None,
) -> Callable[[T], T]:
    """Class decorator that records `CommandInfo` on a command class."""
    if isinstance(group, str):
        group = Group(name=group)

    def decorator(cls: T) -> T:
        info = CommandInfo(
            description=dedent_markdown(description),
            group=group or DEFAULT_GROUP,
            hidden=hidden,
            name=name,
            version=version,
        )
        setattr(cls, COMMAND_INFO_ATTRIBUTE, info)
        return cls

    return decorator


def get_command_info(cls: type) -> CommandInfo | None:
    """Return the `CommandInfo` declared directly on `cls`, if any."""
    return cls.__dict__.get(COMMAND_INFO_ATTRIBUTE)
