# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Collates tokens into `ArgOptionAndValues` records so that no value is left
without an owning option name.

A record starts at a token carrying a name (`--input` or `--input=a`) and
greedily absorbs every following bare value, and every following inline value
for the same name, so `--input a b` and `--input=a --input=b` both produce
`ArgOptionAndValues("input", ("a", "b"))`. A bare value with no preceding name
is an `OptionNameError`.
"""
from __future__ import annotations

from typing import Iterator

from optline.exceptions import OptionNameError, OptionParsingError
from optline.logger import logger
from optline.parser.tokenizer import ArgTokenizer
from optline.parser.tokens import (
    ArgOptionAndValues,
    BareValue,
    OptionNameWithValue,
    add_back_dashes,
)


class ArgTokenCollator(Iterator[ArgOptionAndValues]):
    """
    Pull-based iterator of `ArgOptionAndValues` over an `ArgTokenizer`.

    The next record is always computed one step ahead, which is what allows
    `take_remaining()` to reconstruct the not-yet-returned input. Iteration
    raises the first `OptionParsingError` encountered and then stops.
    """

    def __init__(self, tokenizer: ArgTokenizer) -> None:
        self.tokenizer = tokenizer
        self._pending: ArgOptionAndValues | OptionParsingError | None = None
        self._advance()

    def __iter__(self) -> ArgTokenCollator:
        return self

    def __next__(self) -> ArgOptionAndValues:
        pending = self._pending
        if pending is None:
            raise StopIteration
        if isinstance(pending, OptionParsingError):
            self._pending = None
            raise pending
        self._advance()
        return pending

    def has_next(self) -> bool:
        return self._pending is not None

    def _next_name(self, values: list[str]) -> str:
        """Consume the next named token, adding its inline value to `values`."""
        try:
            token = self.tokenizer.peek()
        except OptionParsingError:
            token = None
        if token is None:
            # consumes and raises the pending failure
            next(self.tokenizer)
            raise AssertionError("tokenizer failure was not raised")
        if isinstance(token, BareValue):
            # left unconsumed so take_remaining() still reports it
            raise OptionNameError(f"Illegal option: '{token.value}'")
        next(self.tokenizer)
        if isinstance(token, OptionNameWithValue):
            values.append(token.value)
        return token.name

    def _add_values_with_same_name(self, name: str, values: list[str]) -> None:
        while self.tokenizer.has_next():
            try:
                token = self.tokenizer.peek()
            except OptionParsingError:
                return
            if isinstance(token, BareValue):
                values.append(token.value)
            elif isinstance(token, OptionNameWithValue) and token.name == name:
                values.append(token.value)
            else:
                return
            next(self.tokenizer)

    def _advance(self) -> None:
        if not self.tokenizer.has_next():
            self._pending = None
            return
        values: list[str] = []
        try:
            name = self._next_name(values)
        except OptionParsingError as error:
            self._pending = error
            return
        self._add_values_with_same_name(name, values)
        self._pending = ArgOptionAndValues(name=name, values=tuple(values))
        logger.debug("Collated option '%s' with values %s.", name, values)

    def take_remaining(self) -> list[str]:
        """
        Return the raw arguments not yet returned by this collator: the pending
        record (with its dashes restored) followed by the tokenizer's remainder.
        """
        remaining: list[str] = []
        if isinstance(self._pending, ArgOptionAndValues):
            remaining.append(add_back_dashes(self._pending.name))
            remaining.extend(self._pending.values)
        self._pending = None
        return remaining + self.tokenizer.take_remaining()
