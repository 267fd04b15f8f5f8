"""Settings for Elm Exposure.

Values come from, highest priority first:

1. A TOML file: `elmexpose.toml`, or the `[tool.elmexpose]` table of a
   `pyproject.toml`
2. `ELMX_*` environment variables, e.g. `ELMX_CHECKER_MAX_CONCURRENT=4`
3. Defaults
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "elmexpose.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = "elmexpose"


class ConfigError(Exception):
    """A configuration file exists but cannot be used."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid configuration in {path}: {reason}")


class CheckerSettings(BaseSettings):
    """Which files are checked and how many at once."""

    model_config = SettingsConfigDict(env_prefix="ELMX_CHECKER_")

    file_extensions: list[str] = Field(
        default=[".elm"],
        description="Extensions of Elm module files",
    )
    skip_paths: list[str] = Field(
        default=["elm-stuff", "node_modules", ".git"],
        description="Directory names that are never walked into",
    )
    max_file_size_kb: int = Field(default=1024, ge=1, description="Larger modules are skipped")
    max_concurrent: int = Field(default=8, ge=1, description="Modules checked at once")


class LoggingSettings(BaseSettings):
    """Log level for diagnostics on stderr."""

    model_config = SettingsConfigDict(env_prefix="ELMX_LOGGING_")

    level: str = Field(default="WARNING", description="Standard logging level name")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level


class OutputSettings(BaseSettings):
    """How results are reported."""

    model_config = SettingsConfigDict(env_prefix="ELMX_OUTPUT_")

    format: str = Field(default="table", description="'table' or 'json'")
    show_passed: bool = Field(default=False, description="Also list modules that pass")


class Settings(BaseSettings):
    """All settings, grouped by concern."""

    model_config = SettingsConfigDict(
        env_prefix="ELMX_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    checker: CheckerSettings = Field(default_factory=CheckerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def find_config_file(directory: Path) -> Path | None:
    """Look for a configuration file in a directory.

    `elmexpose.toml` wins over `pyproject.toml`; the latter only counts
    when it has a `[tool.elmexpose]` table.

    Raises:
        ConfigError: If `pyproject.toml` is not valid TOML.
    """
    candidate = directory / CONFIG_FILENAME
    if candidate.is_file():
        return candidate

    pyproject = directory / PYPROJECT_FILENAME
    if pyproject.is_file() and _read_table(pyproject):
        return pyproject

    return None


def _read_table(path: Path) -> dict[str, Any]:
    """Read the settings table from a TOML file."""
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, str(e)) from e
    except OSError as e:
        raise ConfigError(path, e.strerror or str(e)) from e

    if path.name == PYPROJECT_FILENAME:
        return data.get("tool", {}).get(PYPROJECT_TABLE, {})
    return data


def load_config(config_path: Path | None = None) -> Settings:
    """Load settings from a TOML file, the environment and defaults.

    Args:
        config_path: TOML file to read. A path that does not exist is
            ignored with a warning.

    Returns:
        Loaded Settings instance.

    Raises:
        ConfigError: If the file is not valid TOML or holds invalid settings.
    """
    if config_path is None:
        return Settings()

    if not config_path.is_file():
        logger.warning("Config file %s not found, using defaults", config_path)
        return Settings()

    logger.debug("Loading settings from %s", config_path)
    table = _read_table(config_path)
    try:
        return Settings(**table)
    except ValidationError as e:
        raise ConfigError(config_path, str(e)) from e
