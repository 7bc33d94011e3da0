"""
Runtime for driving stage chains.
"""

from .runner import StageRunner

__all__ = ["StageRunner"]
