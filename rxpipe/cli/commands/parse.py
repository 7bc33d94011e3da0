# rxpipe/cli/commands/parse.py
"""
Parse command: render every match through a template.

Each chunk must match PATTERN. Matches are rendered with TEMPLATE using the
same $-references as replace, and written with no separator, so add "\\n"
to the template yourself when one output line per match is wanted.

Usage:
    rxpipe parse log.txt ids.txt 'id=(\\d+)' '$1,' -g --line-by-line
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
    template: str,
    global_search: bool = False,
    ignore_case: bool = False,
    line_by_line: bool = False,
    delimiter: Optional[str] = None,
    config: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    from rxpipe.core.replacement import compile_template
    from rxpipe.pipe import Pipe

    cfg = utils.setup(verbose, config)
    regex = utils.build_pattern(pattern, global_search=global_search, ignore_case=ignore_case)
    split_on = utils.build_delimiter(line_by_line, delimiter)
    render = compile_template(template, regex.regex)

    pipe = Pipe(
        utils.endpoint(input, reading=True),
        utils.endpoint(output, reading=False),
        config=cfg,
    )
    logger.debug(f"{CLI} parse {regex.pattern!r} -> {template!r}")

    utils.run(lambda: pipe.parse(regex, render, delimiter=split_on))
