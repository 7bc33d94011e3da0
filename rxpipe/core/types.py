# rxpipe/core/types.py
"""
Payloads passed between pipeline stages.

Each stage boundary carries exactly one of these types:

    source blocks (str) → ChunkSplitter → Segment
    Segment            → MatchExtractor → MatchList
    MatchList          → MatchRenderer  → str
    Segment            → ChunkReplacer  → str

A Segment is either a Chunk (content to match against) or a Delimiter
(boundary text, only kept when the output must be reconstructed).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Chunk:
    """One delimiter-bounded unit of input text."""

    index: int
    text: str


@dataclass(frozen=True)
class Delimiter:
    """Delimiter text found between two chunks."""

    text: str


Segment = Union[Chunk, Delimiter]


@dataclass(frozen=True)
class MatchList:
    """Ordered matches found in a single chunk."""

    chunk: Chunk
    matches: Tuple[re.Match, ...]

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self):
        return iter(self.matches)


__all__ = ["Chunk", "Delimiter", "Segment", "MatchList"]
