"""
Configuration management for rxpipe.

Usage:
    from rxpipe.config import load_config

    config = load_config("rxpipe.yaml")
    config.read_size
"""

from rxpipe.config.loader import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    load_config,
)
from rxpipe.config.schema import PipeConfig

__all__ = [
    "PipeConfig",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "load_config",
]
