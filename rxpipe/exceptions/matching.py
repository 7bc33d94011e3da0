# rxpipe/exceptions/matching.py
from __future__ import annotations

from .base import PipeError


class MatchFailureError(PipeError):
    """
    Raised when a chunk yields no match during a parse.

    Attributes:
        chunk_index: Zero-based sequence number of the failing chunk.
        chunk_text: Raw text of the failing chunk.
    """

    def __init__(self, chunk_index: int, chunk_text: str):
        self.chunk_index = chunk_index
        self.chunk_text = chunk_text
        super().__init__(f'The chunk[{chunk_index}] doesn\'t match the regex: "{chunk_text}"')
