# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Drives raw arguments through `ArgTokenizer` → `ArgTokenCollator` → `OptionLookup`.

`OptionParser` is an `OptionLookup` that can also consume a command line. After
a failed `parse()`, `remaining` holds the verbatim unparsed tail: the record that
was being added when the failure happened (if any), then whatever the collator
and tokenizer had not yet consumed.

Example:
    parser = OptionParser().accept_flag("f").accept_multiple_values("m", "multi")
    parser.parse(["-f", "--multi", "a", "b"])
    dict(parser)  # {'f': ['true'], 'm': ['a', 'b']}
"""
from __future__ import annotations

from typing import Iterator, Sequence

from optline.exceptions import OptionParsingError
from optline.logger import logger
from optline.parser.collator import ArgTokenCollator
from optline.parser.option_lookup import OptionLookup
from optline.parser.tokenizer import ArgTokenizer
from optline.parser.tokens import add_back_dashes


class OptionParser(OptionLookup):
    """Parses a command line into the values of registered options."""

    def __init__(
        self,
        arg_file_prefix: str | None = "@",
        comment_prefix: str | None = "#",
        max_arg_file_depth: int = 16,
    ) -> None:
        super().__init__()
        self.arg_file_prefix = arg_file_prefix
        self.comment_prefix = comment_prefix
        self.max_arg_file_depth = max_arg_file_depth
        self.remaining: list[str] = []

    def parse(self, args: Sequence[str]) -> OptionParser:
        """
        Accumulate the values of every option found in `args`.

        Raises:
            OptionParsingError: On the first tokenizing, collating, or accumulation
                failure. `remaining` is set before raising.
        """
        self.remaining = []
        tokenizer = ArgTokenizer(
            args,
            arg_file_prefix=self.arg_file_prefix,
            comment_prefix=self.comment_prefix,
            max_arg_file_depth=self.max_arg_file_depth,
        )
        collator = ArgTokenCollator(tokenizer)
        while True:
            try:
                record = next(collator)
            except StopIteration:
                break
            except OptionParsingError:
                self.remaining = collator.take_remaining()
                raise
            try:
                self.add_option_values(record.name, *record.values)
            except OptionParsingError:
                self.remaining = [add_back_dashes(record.name), *record.values]
                self.remaining.extend(collator.take_remaining())
                raise
        logger.debug("Parsed %d raw arguments.", len(args))
        return self

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        """Yield `(first name, values)` for every option that received values."""
        for option in self.options():
            if option:
                yield option.option_names[0], option.values

    def __len__(self) -> int:
        return sum(1 for option in self.options() if option)
