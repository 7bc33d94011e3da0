# rxpipe/core/pattern.py
"""
Match patterns and built-in delimiters.

Python regular expressions have no "global" flag. SearchPattern pairs a
compiled pattern with that flag so the stages can decide between one match
and all matches per chunk:

    >>> pattern = compile_search("[a-z]+", global_search=True)
    >>> pattern.global_search
    True

A bare re.Pattern is accepted anywhere a SearchPattern is and behaves as a
non-global pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class SearchPattern:
    """A compiled regex plus its global flag."""

    regex: re.Pattern[str]
    global_search: bool = False

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    @property
    def flags(self) -> int:
        return self.regex.flags


class Delimiters(Enum):
    """
    Built-in chunk delimiters.

    Pass a member as ``delimiter=`` to Pipe.parse / Pipe.replace.
    """

    LINE_BY_LINE = re.compile(r"\r?\n")


PatternLike = Union[SearchPattern, re.Pattern[str]]
DelimiterLike = Union[Delimiters, SearchPattern, re.Pattern[str], None]


def compile_search(
    source: Union[str, re.Pattern[str]],
    flags: int = 0,
    *,
    global_search: bool = False,
) -> SearchPattern:
    """Compile ``source`` into a SearchPattern."""
    if isinstance(source, re.Pattern):
        if flags:
            source = re.compile(source.pattern, source.flags | flags)
        return SearchPattern(regex=source, global_search=global_search)
    return SearchPattern(regex=re.compile(source, flags), global_search=global_search)


def as_search_pattern(value: object) -> SearchPattern:
    """
    Normalize a regex argument.

    Raises:
        TypeError: If value is neither a SearchPattern nor a compiled str pattern.
    """
    if isinstance(value, SearchPattern):
        return value
    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return SearchPattern(regex=value)
    raise TypeError('"regex" must be a regular expression object (re.Pattern or SearchPattern)')


def as_delimiter(value: object) -> Optional[re.Pattern[str]]:
    """
    Normalize a delimiter argument to a compiled pattern, or None.

    Raises:
        TypeError: If value is not a delimiter pattern.
    """
    if value is None:
        return None
    if isinstance(value, Delimiters):
        return value.value
    if isinstance(value, SearchPattern):
        return value.regex
    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return value
    raise TypeError('"delimiter" must be a regular expression object')


__all__ = [
    "SearchPattern",
    "Delimiters",
    "PatternLike",
    "DelimiterLike",
    "compile_search",
    "as_search_pattern",
    "as_delimiter",
]
