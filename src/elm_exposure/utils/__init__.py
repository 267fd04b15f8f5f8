"""Utility functions and helpers."""

from elm_exposure.utils.config import (
    ConfigError,
    Settings,
    find_config_file,
    load_config,
)

__all__ = [
    "ConfigError",
    "Settings",
    "find_config_file",
    "load_config",
]
