# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders usage and error screens for a `CommandArgumentParser` with rich.

The screen is built as rich markup using the style names of
`optline.themes.get_usage_theme()`, then either printed to the shared console or
captured as a string (plain, or with ANSI colours when `color=True`):

    Usage: SortBam [arguments]
    Version: 1.2.0
    ------------------------------------------------------------------------
    Sort a BAM file.

    SortBam Required Arguments:
    ------------------------------------------------------------------------
    -i Path, --input=Path         Input file.
    ...
"""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from optline.console import console as default_console
from optline.markdown import MarkdownRenderer
from optline.metadata import usage_sections
from optline.parser.argument import Argument
from optline.parser.argument_lookup import ArgumentLookup
from optline.parser.command_argument_parser import CommandArgumentParser
from optline.parser.parser_types import ParseFailure
from optline.themes import get_usage_theme

USAGE_PREFIX = "Usage:"
REQUIRED_ARGUMENTS = "Required Arguments:"
OPTIONAL_ARGUMENTS = "Optional Arguments:"
ENUM_OPTION_PREFIX = "Options: "
MUTEX_HEADER = "Cannot be used in conjunction with argument(s): "


def collection_arity(argument: Argument) -> str:
    """`*`, `+`, or `{min..max}` for collections; empty for scalars."""
    if not argument.is_collection:
        return ""
    minimum = argument.min_elements or 0
    maximum = argument.max_elements
    if maximum is None:
        if minimum == 0:
            return "*"
        if minimum == 1:
            return "+"
        return f"{{{minimum}..}}"
    return f"{{{minimum}..{maximum}}}"


def argument_label(argument: Argument) -> str:
    """`-s TYPE, --long=TYPE`, or `-s [true|false], --long[=true|false]` for flags."""
    arity = collection_arity(argument)
    if argument.is_flag:
        short_type, long_type = "[true|false]", "[=true|false]"
    else:
        short_type, long_type = argument.type_name, f"={argument.type_name}"
    label = ""
    if argument.short_name:
        label += f"-{argument.short_name} {short_type}{arity}, "
    return label + f"--{argument.long_name}{long_type}{arity}"


def default_value_string(argument: Argument) -> str:
    values = argument.default_values()
    return f"[Default: {', '.join(values)}]." if values else ""


def argument_description(argument: Argument, lookup: ArgumentLookup) -> str:
    """Doc, default values, enum options, and mutex note for one argument."""
    parts = []
    if argument.doc:
        parts.append(argument.doc)
    if argument.optional and not argument.sensitive:
        parts.append(default_value_string(argument))
    choices = argument.type_descriptor.choices
    if choices:
        parts.append(ENUM_OPTION_PREFIX + ", ".join(choices) + ".")
    partners = lookup.ordered(argument.mutually_exclusive)
    if partners:
        parts.append(
            MUTEX_HEADER
            + ", ".join(
                partner.long_name + (f" ({partner.short_name})" if partner.short_name else "")
                for partner in partners
            )
        )
    return "  ".join(part for part in parts if part)


class UsageFormatter:
    """Builds the usage screen of one parser as rich markup."""

    def __init__(self, parser: CommandArgumentParser) -> None:
        self.parser = parser
        self.width = parser.settings.terminal_width
        self.column = parser.settings.argument_column_width
        self.description_renderer = MarkdownRenderer(width=self.width - self.column)
        self.text_renderer = MarkdownRenderer(width=self.width)

    def rule(self) -> str:
        return f"[rule]{'-' * self.width}[/rule]"

    def preamble(self, with_version: bool) -> list[str]:
        program = escape(self.parser.program_name)
        lines = [
            f"[preamble]{USAGE_PREFIX}[/preamble] [program]{program}[/program]"
            f"[preamble]{escape(' [arguments]')}[/preamble]"
        ]
        if with_version:
            lines.append(f"[version]Version: {escape(self.parser.version)}[/version]")
        lines.append(self.rule())
        description = self.text_renderer.to_text(self.parser.info.description)
        if description:
            lines.append(f"[doc]{escape(description)}[/doc]")
        return lines

    def section_header(self, group: str, suffix: str) -> list[str]:
        prefix = f"({group}) " if group else ""
        program = escape(self.parser.program_name)
        return [
            "",
            f"[program]{program}[/program] [section]{escape(prefix + suffix)}[/section]",
            self.rule(),
        ]

    def argument_lines(self, argument: Argument) -> list[str]:
        label = argument_label(argument)
        description = argument_description(argument, self.parser.arguments)
        text_lines = self.description_renderer.to_lines(description) or [""]
        padding = " " * self.column

        lines = []
        if len(label) > self.column:
            lines.append(f"[option]{escape(label)}[/option]")
            first = padding
        else:
            first = f"[option]{escape(label)}[/option]" + " " * (self.column - len(label))
        lines.append(first + f"[doc]{escape(text_lines[0])}[/doc]")
        lines.extend(f"{padding}[doc]{escape(line)}[/doc]" for line in text_lines[1:])
        return lines

    def markup(self, with_version: bool = True, with_special: bool = True) -> str:
        lines = self.preamble(with_version)
        for section in usage_sections(self.parser, with_special=with_special):
            for suffix, arguments in (
                (REQUIRED_ARGUMENTS, section.required),
                (OPTIONAL_ARGUMENTS, section.optional),
            ):
                if not arguments:
                    continue
                lines.extend(self.section_header(section.group, suffix))
                for argument in arguments:
                    lines.extend(self.argument_lines(argument))
        return "\n".join(lines)


def _capture(markup: str, width: int, color: bool) -> str:
    console = Console(
        width=width,
        theme=get_usage_theme(),
        color_system="truecolor" if color else None,
        force_terminal=color,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(markup)
    return capture.get().rstrip("\n")


def render_usage(
    parser: CommandArgumentParser,
    color: bool = False,
    with_version: bool = True,
    with_special: bool = True,
) -> str:
    """Return the usage screen of `parser` as a string."""
    markup = UsageFormatter(parser).markup(with_version, with_special)
    return _capture(markup, parser.settings.terminal_width, color)


def print_usage(
    parser: CommandArgumentParser,
    console: Console | None = None,
    with_version: bool = True,
    with_special: bool = True,
) -> None:
    """Print the usage screen of `parser` to `console` (the shared console by default)."""
    console = console or default_console
    with console.use_theme(get_usage_theme()):
        console.print(
            UsageFormatter(parser).markup(with_version, with_special),
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )


def failure_markup(result: ParseFailure) -> str:
    lines = [f"[error]Error: {escape(str(result.error))}[/error]"]
    if result.remaining:
        lines.append(
            f"[remaining]Unparsed arguments: {escape(' '.join(result.remaining))}[/remaining]"
        )
    return "\n".join(lines)


def render_failure(result: ParseFailure, color: bool = False, width: int = 120) -> str:
    """Return the usage carried by `result` followed by its error message."""
    body = _capture(failure_markup(result), width, color)
    return f"{result.usage}\n\n{body}" if result.usage else body
