from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

from optline import Group, arg, command, inspect, usage_sections
from optline.markdown import MarkdownRenderer
from optline.parser import CommandArgumentParser


class Level(Enum):
    LOW = 1
    HIGH = 2


@command(
    description="Process some **files**.",
    group=Group(name="IO", description="Input and output.", rank=3),
)
@dataclass
class Process:
    inputs: Annotated[list[Path], arg(flag="i", doc="Input *files*.", max_elements=3)]
    output: Annotated[Optional[Path], arg(flag="o", mutex="dry_run")] = None
    dry_run: Annotated[bool, arg(flag="n")] = False
    level: Level = Level.LOW
    tags: Annotated[set[str], arg(min_elements=0, group="filters")] = field(
        default_factory=lambda: {"a"}
    )
    token: Annotated[str, arg(hidden=True, sensitive=True)] = "t0ken"


def by_name(metadata, name):
    return next(argument for argument in metadata.args if argument.name == name)


def test_inspect_command():
    metadata = inspect(Process)
    assert metadata.name == "Process"
    assert metadata.group.name == "IO"
    assert metadata.group.rank == 3
    assert not metadata.hidden
    assert [argument.name for argument in metadata.args] == [
        "inputs",
        "output",
        "dry-run",
        "level",
        "tags",
        "token",
    ]


def test_inspect_arguments():
    metadata = inspect(Process)

    inputs = by_name(metadata, "inputs")
    assert inputs.flag == "i"
    assert inputs.kind == "Path"
    assert (inputs.min_values, inputs.max_values) == (1, 3)
    assert inputs.default_values == []

    output = by_name(metadata, "output")
    assert (output.min_values, output.max_values) == (0, 1)
    assert output.mutex == ["dry-run"]

    dry_run = by_name(metadata, "dry-run")
    assert dry_run.kind == "bool"
    assert dry_run.default_values == ["false"]
    assert dry_run.mutex == ["output"]

    level = by_name(metadata, "level")
    assert level.choices == ["LOW", "HIGH"]
    assert level.default_values == ["LOW"]

    tags = by_name(metadata, "tags")
    assert (tags.min_values, tags.max_values) == (0, None)
    assert tags.group == "filters"

    assert by_name(metadata, "token").sensitive


def test_inspect_excludes_hidden_on_request():
    metadata = inspect(Process, include_hidden=False)
    assert "token" not in [argument.name for argument in metadata.args]


def test_inspect_does_not_list_special_arguments():
    names = [argument.name for argument in inspect(Process).args]
    assert "help" not in names
    assert "version" not in names


def test_inspect_is_repeatable():
    assert inspect(Process) == inspect(Process)


def test_inspect_plain_class():
    @dataclass
    class Greet:
        name: str

    metadata = inspect(Greet)
    assert metadata.group.name == "Other"
    assert metadata.description == ""
    assert by_name(metadata, "name").min_values == 1


def test_to_dict():
    data = inspect(Process).to_dict()
    assert data["name"] == "Process"
    assert data["description"] == "Process some **files**."
    assert data["group"] == {"name": "IO", "description": "Input and output.", "rank": 3}
    assert data["args"][0]["name"] == "inputs"
    assert data["args"][0]["max_values"] == 3


def test_description_rendering():
    metadata = inspect(Process)
    assert metadata.description_as_text() == "Process some files."
    assert metadata.description_as_html() == "<p>Process some <strong>files</strong>.</p>"
    inputs = by_name(metadata, "inputs")
    assert inputs.description_as_html() == "<p>Input <em>files</em>.</p>"


def test_custom_renderer_wraps_text():
    @command(description="one two three four five six seven eight nine ten")
    @dataclass
    class Wordy:
        name: str = ""

    metadata = inspect(Wordy, renderer=MarkdownRenderer(width=20))
    lines = metadata.description_as_text().splitlines()
    assert len(lines) > 1
    assert all(len(line) <= 20 for line in lines)


def test_usage_sections():
    sections = usage_sections(Process)
    assert [section.group for section in sections] == ["", "Filters", "Special"]
    assert [argument.name for argument in sections[0].required] == ["inputs"]
    assert [argument.name for argument in sections[0].optional] == [
        "output",
        "dry_run",
        "level",
    ]
    assert [argument.name for argument in sections[2].optional] == ["help", "version"]


def test_usage_sections_without_special_arguments():
    parser = CommandArgumentParser(Process)
    sections = usage_sections(parser, with_special=False)
    assert [section.group for section in sections] == ["", "Filters"]
