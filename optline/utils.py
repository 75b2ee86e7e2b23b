# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
General-purpose utilities for Optline.

Functions:
- to_kebab_case: Translate a Python identifier into a hyphenated option name.
- dedent_markdown: Normalise indentation of free-text documentation.
- setup_logging: Configure CLI-friendly or structured JSON logging.
"""
from __future__ import annotations

import logging
import os
import re
import textwrap

import pythonjsonlogger.json
from rich.logging import RichHandler

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_kebab_case(identifier: str) -> str:
    """
    Translate a snake_case or camelCase identifier into hyphenated lower-case words.

    Examples:
        to_kebab_case("input_path") -> "input-path"
        to_kebab_case("inputPath") -> "input-path"
        to_kebab_case("HTTPServer") -> "http-server"
    """
    words = []
    for chunk in identifier.strip("_").split("_"):
        if chunk:
            words.extend(_CAMEL_BOUNDARY.split(chunk))
    return "-".join(word.lower() for word in words if word)


def dedent_markdown(text: str) -> str:
    """Remove common indentation and surrounding blank lines from a doc string."""
    return textwrap.dedent(text).strip("\n").rstrip()


JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
LOG_MODES = ("cli", "json")


def _console_handler(mode: str, json_formatter: logging.Formatter) -> logging.Handler:
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(json_formatter)
        return handler
    return RichHandler(
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Route Optline's log records to the console and, optionally, a log file.

    Meant for command-line tools built on Optline; the library never calls it.
    Existing root handlers are replaced.

    Args:
        mode: "cli" for rich console output or "json" for one JSON object per
            record. Defaults to `$OPTLINE_LOG_MODE`, then "cli".
        log_filename: Attach a file handler writing to this path.
        json_log_to_file: Write JSON instead of plain text to the log file.
        file_log_level: Threshold of the file handler.
        console_log_level: Threshold of the console handler.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or os.getenv("OPTLINE_LOG_MODE") or "cli"
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")

    json_formatter = pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)
    handlers = [_console_handler(mode, json_formatter)]
    handlers[0].setLevel(console_log_level)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(
            json_formatter
            if json_log_to_file
            else logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers[:] = handlers
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
    logging.getLogger("optline").debug("Logging initialized in '%s' mode.", mode)
