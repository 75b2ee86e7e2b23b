# Optline Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Engine settings for Optline parsers and the YAML/TOML loader for them."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from optline.exceptions import CommandDefinitionError
from optline.logger import logger


class ParserSettings(BaseModel):
    """Options that control how a command line is tokenized and bound."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    arg_file_prefix: str | None = "@"
    none_token: str = ":none:"
    max_arg_file_depth: int = Field(default=16, ge=1)
    comment_prefix: str | None = "#"
    include_special_args: bool = True
    terminal_width: int = Field(default=120, ge=20)
    argument_column_width: int = Field(default=30, ge=1)

    @field_validator("arg_file_prefix", "none_token")
    @classmethod
    def validate_marker(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not value or any(char.isspace() for char in value):
            raise ValueError("must be non-empty and contain no whitespace")
        return value

    @model_validator(mode="after")
    def validate_columns(self) -> ParserSettings:
        if self.argument_column_width >= self.terminal_width:
            raise ValueError("argument_column_width must be less than terminal_width")
        return self


DEFAULT_SETTINGS = ParserSettings()


def find_settings_file() -> Path | None:
    """Return the first Optline settings file found, or None."""
    candidates = [
        Path.cwd() / "optline.yaml",
        Path.cwd() / "optline.toml",
        Path.cwd() / ".optline.yaml",
        Path.cwd() / ".optline.toml",
    ]
    if os.environ.get("OPTLINE_CONFIG"):
        candidates.append(Path(os.environ["OPTLINE_CONFIG"]))
    return next((path for path in candidates if path.is_file()), None)


def load_settings(file_path: str | Path) -> ParserSettings:
    """
    Load `ParserSettings` from a YAML or TOML file.

    The settings may sit at the top level of the file or under an `optline` key.

    Raises:
        CommandDefinitionError: If the file type is unsupported or the content is invalid.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()
    with path.open("r", encoding="UTF-8") as settings_file:
        if suffix in (".yaml", ".yml"):
            raw_settings = yaml.safe_load(settings_file)
        elif suffix == ".toml":
            raw_settings = toml.load(settings_file)
        else:
            raise CommandDefinitionError(f"Unsupported settings file type: {suffix}")

    raw_settings = raw_settings or {}
    if not isinstance(raw_settings, dict):
        raise CommandDefinitionError(f"Settings in '{path}' must be a mapping")
    section: Any = raw_settings.get("optline", raw_settings)

    try:
        settings = ParserSettings.model_validate(section)
    except ValidationError as error:
        raise CommandDefinitionError(f"Invalid settings in '{path}': {error}") from error
    logger.debug("Loaded parser settings from '%s'.", path)
    return settings
