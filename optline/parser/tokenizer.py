# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lexes raw command-line strings into `Token`s, one token per raw argument.

`ArgTokenizer` is a single-pass cursor: tokens are produced lazily, argument files
(`@file` by default) are expanded in place as they are reached, and the first
failure ends tokenization. After a failure, `take_remaining()` returns every raw
string that was not turned into a token, starting with the one that failed, so
callers can show the user the untouched tail of their command line.

Grammar:
    --name            OptionName("name")
    --name=value      OptionNameWithValue("name", "value")
    -n                OptionName("n")
    -n=value, -nvalue OptionNameWithValue("n", "value")
    -5, -3.14         BareValue (negative numbers are values)
    anything else     BareValue
    "", -, --, -=x, --=x, ---x, --name=   are errors
"""
from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from optline.exceptions import (
    ArgumentFileError,
    IllegalOptionNameError,
    OptionNameError,
    OptionParsingError,
)
from optline.logger import logger
from optline.parser.tokens import BareValue, OptionName, OptionNameWithValue, Token

LONG_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")
SHORT_NAME_PATTERN = re.compile(r"[A-Za-z0-9]")
NEGATIVE_NUMBER_PATTERN = re.compile(r"-(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def is_valid_long_name(name: str) -> bool:
    return LONG_NAME_PATTERN.fullmatch(name) is not None


def is_valid_short_name(name: str) -> bool:
    return SHORT_NAME_PATTERN.fullmatch(name) is not None


def tokenize(raw: str) -> Token:
    """
    Convert a single raw argument into a `Token`.

    Raises:
        OptionNameError: If the argument is empty.
        IllegalOptionNameError: If the argument looks like an option but is malformed.
    """
    if raw == "":
        raise OptionNameError("Empty argument found on the command line.")
    if NEGATIVE_NUMBER_PATTERN.fullmatch(raw):
        return BareValue(raw)

    if raw.startswith("--"):
        name, separator, value = raw[2:].partition("=")
        if not is_valid_long_name(name):
            raise IllegalOptionNameError(f"Illegal option name: '{raw}'")
        if not separator:
            return OptionName(name)
        if not value:
            raise IllegalOptionNameError(f"No value found after '=' in option: '{raw}'")
        return OptionNameWithValue(name, value)

    if raw.startswith("-"):
        body = raw[1:]
        if not body or not is_valid_short_name(body[0]):
            raise IllegalOptionNameError(f"Illegal option name: '{raw}'")
        name, rest = body[0], body[1:]
        if not rest:
            return OptionName(name)
        if rest.startswith("="):
            if len(rest) == 1:
                raise IllegalOptionNameError(
                    f"No value found after '=' in option: '{raw}'"
                )
            return OptionNameWithValue(name, rest[1:])
        return OptionNameWithValue(name, rest)

    return BareValue(raw)


@dataclass
class _ArgSource:
    """Raw arguments still to be read from the command line or one argument file."""

    args: deque[str]
    path: Path | None = None
    resolved: Path | None = None


@dataclass
class _Head:
    raw: str
    token: Token | None = None
    error: OptionParsingError | None = None


@dataclass
class ArgTokenizer(Iterator[Token]):
    """
    Lazily converts raw arguments into tokens, expanding argument files.

    Use `has_next()`/`peek()` to look at the next token without consuming it and
    `next()` to consume it. Both `peek()` and `next()` raise the pending
    `OptionParsingError` if the next raw argument could not be tokenized; only
    `next()` consumes it, after which the tokenizer is exhausted.
    """

    args: Iterable[str]
    arg_file_prefix: str | None = "@"
    comment_prefix: str | None = "#"
    max_arg_file_depth: int = 16
    _sources: list[_ArgSource] = field(init=False, default_factory=list)
    _head: _Head | None = field(init=False, default=None)
    _failed_raw: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._sources.append(_ArgSource(args=deque(self.args)))

    def __iter__(self) -> ArgTokenizer:
        return self

    def __next__(self) -> Token:
        self._fill_head()
        if self._head is None:
            raise StopIteration
        head, self._head = self._head, None
        if head.error is not None:
            self._failed_raw = head.raw
            raise head.error
        assert head.token is not None
        return head.token

    def has_next(self) -> bool:
        """True if another token, or a pending failure, remains."""
        self._fill_head()
        return self._head is not None

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        self._fill_head()
        if self._head is None:
            raise IndexError("peek() called on an exhausted tokenizer")
        if self._head.error is not None:
            raise self._head.error
        assert self._head.token is not None
        return self._head.token

    def take_remaining(self) -> list[str]:
        """
        Return every raw argument not yet turned into a consumed token and exhaust
        the tokenizer. A failed argument, if any, comes first.
        """
        remaining: list[str] = []
        if self._failed_raw is not None:
            remaining.append(self._failed_raw)
            self._failed_raw = None
        if self._head is not None:
            remaining.append(self._head.raw)
            self._head = None
        for source in reversed(self._sources):
            remaining.extend(source.args)
        self._sources.clear()
        return remaining

    def _is_arg_file(self, raw: str) -> bool:
        return (
            self.arg_file_prefix is not None
            and raw.startswith(self.arg_file_prefix)
            and len(raw) > len(self.arg_file_prefix)
        )

    def _next_raw(self) -> str | None:
        while self._sources:
            source = self._sources[-1]
            if source.args:
                return source.args.popleft()
            self._sources.pop()
        return None

    def _fill_head(self) -> None:
        while self._head is None and self._failed_raw is None:
            raw = self._next_raw()
            if raw is None:
                return
            if self._is_arg_file(raw):
                try:
                    self._push_arg_file(raw)
                except ArgumentFileError as error:
                    self._head = _Head(raw=raw, error=error)
                continue
            try:
                self._head = _Head(raw=raw, token=tokenize(raw))
            except OptionParsingError as error:
                self._head = _Head(raw=raw, error=error)

    def _push_arg_file(self, raw: str) -> None:
        assert self.arg_file_prefix is not None
        path = Path(raw[len(self.arg_file_prefix) :])
        resolved = path.resolve()
        open_files = [source for source in self._sources if source.path is not None]
        if any(source.resolved == resolved for source in open_files):
            chain = " -> ".join(str(source.path) for source in open_files)
            raise ArgumentFileError(
                f"Argument file '{path}' includes itself: {chain} -> {path}"
            )
        if len(open_files) >= self.max_arg_file_depth:
            raise ArgumentFileError(
                f"Argument file '{path}' is nested more than "
                f"{self.max_arg_file_depth} files deep"
            )
        try:
            text = path.read_text(encoding="UTF-8")
        except OSError as error:
            raise ArgumentFileError(
                f"Couldn't load arguments file '{path}': {error.strerror or error}"
            ) from error
        except UnicodeDecodeError as error:
            raise ArgumentFileError(
                f"Couldn't load arguments file '{path}': not valid UTF-8 ({error.reason})"
            ) from error

        lines = [line.strip() for line in text.splitlines()]
        args = [
            line
            for line in lines
            if line
            and not (self.comment_prefix and line.startswith(self.comment_prefix))
        ]
        logger.debug("Expanded argument file '%s' into %d arguments.", path, len(args))
        if not args:
            logger.warning("Argument file '%s' contains no arguments.", path)
            return
        self._sources.append(_ArgSource(args=deque(args), path=path, resolved=resolved))
