"""
Pipeline stages.

PARSE:   ChunkSplitter → MatchExtractor → MatchRenderer
REPLACE: ChunkSplitter → ChunkReplacer
"""

from .base import Stage
from .extractor import MatchExtractor, find_matches
from .renderer import MatchRenderer
from .replacer import ChunkReplacer
from .splitter import ChunkSplitter

__all__ = [
    "Stage",
    "ChunkSplitter",
    "MatchExtractor",
    "MatchRenderer",
    "ChunkReplacer",
    "find_matches",
]
