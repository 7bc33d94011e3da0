# rxpipe/exceptions/base.py
from __future__ import annotations


class PipeError(Exception):
    """Base class for all rxpipe errors."""

    pass


class PipeStateError(PipeError):
    """Raised when an operation is started on a pipe that already ran one."""

    pass
