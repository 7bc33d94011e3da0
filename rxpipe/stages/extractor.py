# rxpipe/stages/extractor.py
"""
Match extractor.

Runs the match pattern against one chunk and emits the ordered list of
matches found in it. The search offset is local to the chunk: every chunk
starts at offset 0 and nothing carries over between chunks.

Policy:
- global pattern: search repeatedly from the end of the previous match
  until a search finds nothing
- non-global pattern: exactly one search
- no match at all: MatchFailureError for that chunk
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from rxpipe.core.pattern import SearchPattern
from rxpipe.core.types import Chunk, MatchList
from rxpipe.exceptions import MatchFailureError
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import EXTRACTOR

logger = get_logger(__name__)


def find_matches(pattern: SearchPattern, text: str) -> List[re.Match]:
    """
    Collect the matches of ``pattern`` in ``text``, left to right.

    An empty match moves the offset forward by one character so a global
    search always terminates.
    """
    regex = pattern.regex
    matches: List[re.Match] = []
    offset = 0

    while offset <= len(text):
        match = regex.search(text, offset)
        if match is None:
            break

        matches.append(match)
        if not pattern.global_search:
            break

        offset = match.end() if match.end() > match.start() else match.end() + 1

    return matches


@dataclass
class MatchExtractor:
    """
    Turns each Chunk into a MatchList.

    Raises:
        MatchFailureError: When a chunk yields no match.
        TypeError: When fed anything but a Chunk.
    """

    pattern: SearchPattern
    stage_name: str = field(default="extractor", repr=False)

    def feed(self, chunk: Chunk) -> List[MatchList]:
        if not isinstance(chunk, Chunk):
            raise TypeError(f"MatchExtractor expects Chunk items, got {type(chunk).__name__}")

        matches = find_matches(self.pattern, chunk.text)
        if not matches:
            logger.debug(f"{EXTRACTOR} No match in chunk[{chunk.index}]")
            raise MatchFailureError(chunk_index=chunk.index, chunk_text=chunk.text)

        logger.debug(f"{EXTRACTOR} Found {len(matches)} match(es) in chunk[{chunk.index}]")
        return [MatchList(chunk=chunk, matches=tuple(matches))]

    def flush(self) -> List[MatchList]:
        return []


__all__ = ["MatchExtractor", "find_matches"]
