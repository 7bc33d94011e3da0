"""
rxpipe - chunked, regex-driven text transformation pipes.

Data flows from a source (file or stream) through backpressure-aware
stages into a sink (file or stream).

Quick Start:
    >>> import re
    >>> from rxpipe import Pipe
    >>> pipe = Pipe("input.txt", "output.txt")
    >>> await pipe.replace(re.compile(r"(\\w+)=(\\d+)"), "$2=$1",
    ...                    delimiter=Pipe.DELIMITERS.LINE_BY_LINE)

Public API:
    - Pipe: parse / replace between two endpoints
    - Delimiters: built-in chunk delimiters (LINE_BY_LINE)
    - SearchPattern, compile_search: patterns carrying a global flag
    - PipeConfig, load_config: runtime settings
    - Exceptions: PipeError, MatchFailureError, ChunkOverflowError, PipeStateError
"""

__version__ = "0.1.0"

from rxpipe.config import PipeConfig, load_config
from rxpipe.core import (
    Chunk,
    Delimiter,
    Delimiters,
    MatchList,
    SearchPattern,
    compile_search,
    expand_template,
)
from rxpipe.exceptions import (
    ChunkOverflowError,
    MatchFailureError,
    PipeError,
    PipeStateError,
)
from rxpipe.pipe import Pipe

__all__ = [
    "__version__",
    "Pipe",
    "Delimiters",
    "SearchPattern",
    "compile_search",
    "expand_template",
    "Chunk",
    "Delimiter",
    "MatchList",
    "PipeConfig",
    "load_config",
    "PipeError",
    "MatchFailureError",
    "ChunkOverflowError",
    "PipeStateError",
]
