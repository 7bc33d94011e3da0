"""
rxpipe core - payload types, match patterns and replacement templates.
"""

from .pattern import (
    Delimiters,
    SearchPattern,
    as_delimiter,
    as_search_pattern,
    compile_search,
)
from .replacement import compile_template, expand_template
from .types import Chunk, Delimiter, MatchList, Segment

__all__ = [
    "Chunk",
    "Delimiter",
    "MatchList",
    "Segment",
    "Delimiters",
    "SearchPattern",
    "as_delimiter",
    "as_search_pattern",
    "compile_search",
    "compile_template",
    "expand_template",
]
