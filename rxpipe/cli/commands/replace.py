# rxpipe/cli/commands/replace.py
"""
Replace command: substitute matches chunk by chunk.

Usage:
    rxpipe replace in.txt out.txt '(\\w+)=(\\d+)' '$2=$1' --line-by-line
    cat in.txt | rxpipe replace - - 'foo' 'bar' -g
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rxpipe.cli import utils
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import CLI

logger = get_logger(__name__)


def command(
    input: str,
    output: str,
    pattern: str,
    replacement: str,
    global_search: bool = False,
    ignore_case: bool = False,
    line_by_line: bool = False,
    delimiter: Optional[str] = None,
    config: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    from rxpipe.pipe import Pipe

    cfg = utils.setup(verbose, config)
    regex = utils.build_pattern(pattern, global_search=global_search, ignore_case=ignore_case)
    split_on = utils.build_delimiter(line_by_line, delimiter)

    pipe = Pipe(
        utils.endpoint(input, reading=True),
        utils.endpoint(output, reading=False),
        config=cfg,
    )
    logger.debug(f"{CLI} replace {regex.pattern!r} -> {replacement!r}")

    utils.run(lambda: pipe.replace(regex, replacement, delimiter=split_on))
