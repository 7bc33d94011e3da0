# rxpipe/logging/logger.py
"""
Logging setup for rxpipe.

Every module uses:
    from rxpipe.logging.logger import get_logger
    from rxpipe.logging.tags import RUNNER

    logger = get_logger(__name__)
    logger.debug(f"{RUNNER} Started")

Library code never configures handlers. Only the CLI entry point calls
configure_logging(), with --verbose selecting DEBUG and the timestamped
format.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "[%(levelname)s] %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

HANDLER_NAME = "rxpipe"


def _own_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            return handler
    return None


def configure_logging(
    level: int = logging.INFO,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Configure rxpipe's logging handler on the root logger.

    Args:
        level: Root level. DEBUG switches the default format to VERBOSE_FORMAT.
        fmt: Explicit format string.
        stream: Target stream. Defaults to the current sys.stderr so piped
            output on stdout stays clean.
        logger: Logger to configure. Defaults to the root logger.

    Safe to call multiple times: rxpipe's handler is installed once and
    re-formatted on later calls. Nothing is installed when the host
    application already configured the logger.
    """
    if fmt is None:
        fmt = VERBOSE_FORMAT if level <= logging.DEBUG else DEFAULT_FORMAT

    target = logger or logging.getLogger()
    handler = _own_handler(target)

    if handler is None and not target.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(HANDLER_NAME)
        target.addHandler(handler)

    if handler is not None:
        handler.setFormatter(logging.Formatter(fmt))

    target.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here.
    """
    return logging.getLogger(name)
