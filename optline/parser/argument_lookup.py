# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Ordered container of a command's `Argument` records.

Arguments are kept in declaration order and indexed two ways: by every
command-line name (short and long) and by constructor parameter name. Mutex
partners refer to each other by parameter name through this container rather
than holding references to one another.
"""
from __future__ import annotations

from typing import Iterator

from optline.exceptions import CommandDefinitionError
from optline.parser.argument import Argument


class ArgumentLookup:
    """Arguments of one command, in declaration order."""

    def __init__(self) -> None:
        self._arguments: list[Argument] = []
        self._by_name: dict[str, Argument] = {}
        self._by_field: dict[str, Argument] = {}

    def add(self, argument: Argument) -> None:
        """
        Add an argument.

        Raises:
            CommandDefinitionError: If its parameter name or any command-line name
                is already taken.
        """
        if argument.name in self._by_field:
            raise CommandDefinitionError(
                f"Argument '{argument.name}' is declared more than once"
            )
        for name in argument.names:
            existing = self._by_name.get(name)
            if existing is not None:
                raise CommandDefinitionError(
                    f"The argument name '{name}' is used by both '{existing.name}' "
                    f"and '{argument.name}'"
                )
        self._arguments.append(argument)
        self._by_field[argument.name] = argument
        for name in argument.names:
            self._by_name[name] = argument

    def by_name(self, name: str) -> Argument | None:
        """Find the argument registered under a short or long name."""
        return self._by_name.get(name)

    def for_field(self, field_name: str) -> Argument | None:
        """Find the argument bound to a constructor parameter."""
        return self._by_field.get(field_name)

    def ordered(self, names: set[str] | list[str]) -> list[Argument]:
        """Return the arguments for the given parameter names in declaration order."""
        wanted = set(names)
        return [argument for argument in self._arguments if argument.name in wanted]

    @property
    def arguments(self) -> list[Argument]:
        return list(self._arguments)

    def visible(self) -> list[Argument]:
        """Arguments that are exposed on the command line."""
        return [argument for argument in self._arguments if not argument.hidden]

    def special(self) -> list[Argument]:
        return [argument for argument in self._arguments if argument.special]

    def non_special(self) -> list[Argument]:
        return [argument for argument in self._arguments if not argument.special]

    def __iter__(self) -> Iterator[Argument]:
        return iter(self._arguments)

    def __len__(self) -> int:
        return len(self._arguments)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._by_field
