# rxpipe/config/loader.py
"""
Layered configuration loading.

Merge strategy:
    1. Package defaults (rxpipe/config/default.yaml) - always loaded
    2. User config file (optional) - overrides defaults

Usage:
    from rxpipe.config.loader import load_config

    config = load_config()                 # defaults only
    config = load_config("rxpipe.yaml")    # defaults + overrides
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from rxpipe.config.schema import PipeConfig
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


# =============================================================================
# Errors
# =============================================================================


class ConfigError(Exception):
    """Base error for configuration issues."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when a config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when YAML parsing fails."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config doesn't match the schema."""

    pass


# =============================================================================
# Loading
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries; values from ``override`` win.

    Nested dicts are merged recursively, everything else is replaced.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"c": 3}})
        {'a': 1, 'b': {'c': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file as a dictionary.

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        ConfigParseError: If the YAML is invalid or not a mapping
    """
    p = Path(path)

    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"{CONFIG} Loaded config from {p}")
    return data


def load_config(path: Optional[Union[str, Path]] = None) -> PipeConfig:
    """
    Load and validate the pipe configuration.

    Args:
        path: Optional user config file. Keys override the package defaults.

    Raises:
        ConfigNotFoundError: If ``path`` doesn't exist
        ConfigParseError: If a file is not valid YAML
        ConfigValidationError: If the merged config doesn't match PipeConfig
    """
    data = load_yaml(DEFAULT_CONFIG_PATH)

    source = DEFAULT_CONFIG_PATH
    if path is not None:
        source = Path(path)
        data = deep_merge(data, load_yaml(source))
        logger.debug(f"{CONFIG} Merged {source} over package defaults")

    try:
        return PipeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Config validation failed: {e}", path=source) from e


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "deep_merge",
    "load_yaml",
    "load_config",
]
