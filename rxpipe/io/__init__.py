"""
Source and sink endpoints for pipes.
"""

from .endpoints import (
    HandleSink,
    HandleSource,
    PathSink,
    PathSource,
    Sink,
    Source,
    resolve_sink,
    resolve_source,
)

__all__ = [
    "HandleSink",
    "HandleSource",
    "PathSink",
    "PathSource",
    "Sink",
    "Source",
    "resolve_sink",
    "resolve_source",
]
