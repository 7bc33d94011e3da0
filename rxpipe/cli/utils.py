# rxpipe/cli/utils.py
"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Any, Callable, Coroutine, Optional

import typer

from rxpipe.config.loader import ConfigError, load_config
from rxpipe.config.schema import PipeConfig
from rxpipe.core.pattern import Delimiters, SearchPattern, compile_search
from rxpipe.exceptions import PipeError
from rxpipe.logging.logger import configure_logging, get_logger
from rxpipe.logging.tags import CLI

logger = get_logger(__name__)

STDIO = "-"


def setup(verbose: bool, config: Optional[Path]) -> PipeConfig:
    """Configure logging and load the config, exiting on config errors."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        return load_config(config)
    except ConfigError as e:
        fail(e)


def fail(error: Any) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def endpoint(value: str, *, reading: bool) -> Any:
    """
    Map "-" to the binary stdin/stdout buffers; anything else is a path.

    The binary buffers let the pipe decode and encode with the configured
    encoding instead of the locale one.
    """
    if value != STDIO:
        return value
    stream = sys.stdin if reading else sys.stdout
    return getattr(stream, "buffer", stream)


def build_pattern(pattern: str, *, global_search: bool, ignore_case: bool) -> SearchPattern:
    try:
        return compile_search(pattern, re.IGNORECASE if ignore_case else 0, global_search=global_search)
    except re.error as e:
        raise typer.BadParameter(f"Invalid pattern {pattern!r}: {e}", param_hint="PATTERN")


def build_delimiter(line_by_line: bool, delimiter: Optional[str]) -> Optional[re.Pattern]:
    if line_by_line and delimiter is not None:
        raise typer.BadParameter("Use either --line-by-line or --delimiter, not both.")
    if line_by_line:
        return Delimiters.LINE_BY_LINE.value
    if delimiter is None:
        return None
    try:
        return re.compile(delimiter)
    except re.error as e:
        raise typer.BadParameter(f"Invalid delimiter {delimiter!r}: {e}", param_hint="--delimiter")


def run(operation: Callable[[], Coroutine[Any, Any, None]]) -> None:
    """Run an async pipe operation, turning failures into exit code 1."""
    try:
        asyncio.run(operation())
    except (PipeError, OSError, UnicodeError) as e:
        logger.debug(f"{CLI} Operation failed", exc_info=True)
        fail(e)
