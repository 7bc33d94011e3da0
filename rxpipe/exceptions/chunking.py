# rxpipe/exceptions/chunking.py
from __future__ import annotations

from .base import PipeError


class ChunkOverflowError(PipeError):
    """Raised when undelimited text grows past the configured chunk limit."""

    def __init__(self, limit: int, length: int):
        self.limit = limit
        self.length = length
        super().__init__(
            f"Maximum chunk length reached: {length} characters buffered "
            f"without a delimiter (limit {limit})"
        )
