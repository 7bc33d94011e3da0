"""
Unified import surface for all rxpipe exceptions.
"""

from .base import PipeError, PipeStateError
from .chunking import ChunkOverflowError
from .matching import MatchFailureError

__all__ = [
    "PipeError",
    "PipeStateError",
    "ChunkOverflowError",
    "MatchFailureError",
]
