"""
rxpipe command line interface.
"""

from rxpipe.cli.cli import app

__all__ = ["app"]
