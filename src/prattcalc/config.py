"""
Calculator configuration models.

Configuration is loaded from the [prattcalc] section of prattcalc.toml.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from prattcalc.core.errors import ConfigError, ExpressionError
from prattcalc.core.tokenizer import TokenKind, tokenize

DEFAULT_CONFIG_FILE = "prattcalc.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CalculatorConfig(BaseModel):
    """Settings for the command-line calculator."""

    prompt: str = "> "
    log_level: str = "WARNING"
    show_tokens: bool = False
    variables: dict[str, int | float] = Field(
        default_factory=dict, description="Variables preloaded into each session"
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("variables")
    @classmethod
    def _identifier_names(cls, value: dict[str, int | float]) -> dict[str, int | float]:
        for name in value:
            if not _is_identifier(name):
                raise ValueError(f"variable name {name!r} is not an identifier")
        return value

    @property
    def logging_level(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def _is_identifier(name: str) -> bool:
    """True if ``name`` tokenizes back to exactly one identifier."""
    try:
        tokens = tokenize(name)
    except ExpressionError:
        return False
    return len(tokens) == 1 and tokens[0].kind == TokenKind.IDENTIFIER


def load_config(toml_path: Path | None = None) -> CalculatorConfig:
    """
    Load calculator configuration from a TOML file.

    Args:
        toml_path: Path to the config file. Defaults to prattcalc.toml in
            the working directory.

    Returns:
        CalculatorConfig with values from the file, or defaults if the file
        or its [prattcalc] section is missing.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid values.
    """
    path = toml_path or Path(DEFAULT_CONFIG_FILE)
    if not path.exists():
        return CalculatorConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section: dict[str, Any] = data.get("prattcalc", {})
    try:
        return CalculatorConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e
