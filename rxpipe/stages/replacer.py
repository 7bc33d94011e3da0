# rxpipe/stages/replacer.py
"""
Chunk replacer.

Performs one substitution pass per chunk. The pattern's global flag decides
between replacing every occurrence and only the first one. A chunk without
a match passes through unchanged; Delimiter items always do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from rxpipe.core.pattern import SearchPattern
from rxpipe.core.replacement import compile_template
from rxpipe.core.types import Chunk, Delimiter, Segment
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import REPLACER

logger = get_logger(__name__)


@dataclass
class ChunkReplacer:
    """
    Applies ``replacement`` to each chunk.

    Example:
        >>> replacer = ChunkReplacer(compile_search(r"(\\w+)=(\\d+)"), "$2=$1")
        >>> replacer.feed(Chunk(0, "foo=1"))
        ['1=foo']
    """

    pattern: SearchPattern
    replacement: str
    stage_name: str = field(default="replacer", repr=False)

    def __post_init__(self) -> None:
        self._render = compile_template(self.replacement, self.pattern.regex)
        self._count = 0 if self.pattern.global_search else 1

    def feed(self, segment: Segment) -> List[str]:
        if isinstance(segment, Delimiter):
            return [segment.text]
        if not isinstance(segment, Chunk):
            raise TypeError(f"ChunkReplacer expects Chunk or Delimiter items, got {type(segment).__name__}")

        output, replaced = self.pattern.regex.subn(self._render, segment.text, count=self._count)
        logger.debug(f"{REPLACER} chunk[{segment.index}]: {replaced} replacement(s)")
        return [output]

    def flush(self) -> List[str]:
        return []


__all__ = ["ChunkReplacer"]
