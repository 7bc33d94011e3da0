# rxpipe/stages/base.py
"""
Base protocol for pipeline stages.

Every stage consumes one unit at a time and produces zero or more units:

    feed(item)  -> list of outputs for that item
    flush()     -> list of outputs still held when the input ends

Stages are synchronous and hold at most one carried-over remainder.
Scheduling, backpressure and error propagation belong to the runner
(rxpipe.runtime.runner), not to the stages.
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class Stage(Protocol):
    """
    Protocol for pipeline stages.

    Contract:
    - stage_name: Identifies the stage in logs
    - feed: Consumes one unit, returns its outputs in order
    - flush: Called once at end of input
    """

    stage_name: str

    def feed(self, item: Any) -> List[Any]:
        ...

    def flush(self) -> List[Any]:
        ...


__all__ = ["Stage"]
