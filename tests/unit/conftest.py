# tests/unit/conftest.py
"""
Shared fixtures for rxpipe unit tests.
"""

from __future__ import annotations

import re
from typing import List

import pytest

from rxpipe.core.pattern import Delimiters


class ListSink:
    """Async sink collecting everything written to it."""

    def __init__(self) -> None:
        self.items: List[str] = []

    async def __call__(self, text: str) -> None:
        self.items.append(text)

    @property
    def text(self) -> str:
        return "".join(self.items)


@pytest.fixture
def line_by_line() -> re.Pattern:
    return Delimiters.LINE_BY_LINE.value


@pytest.fixture
def list_sink() -> ListSink:
    return ListSink()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from inside tmp_path so relative paths land there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
