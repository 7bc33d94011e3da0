# rxpipe/stages/splitter.py
"""
Chunk splitter.

Divides a continuous text stream into chunks on a delimiter pattern.
Blocks arrive in whatever sizes the source reads them; text after the last
delimiter match is carried over until the next block or the end of input.

    "foo=1\\nbar=2\\n"  --LINE_BY_LINE-->  Chunk(0, "foo=1"), Chunk(1, "bar=2")

With keep_delimiters=True the delimiter text is emitted between chunks so
the original input can be rebuilt exactly:

    Chunk(0, "foo=1"), Delimiter("\\n"), Chunk(1, "bar=2"), Delimiter("\\n")

Without a delimiter the whole input is a single chunk.

Block boundaries never change the result:
- A delimiter match that ends at the end of the buffered text is held back,
  because the next block may extend it ("\\n" followed by "\\n" for r"\\n\\n+").
  It is settled by the next block or by flush().
- Carried-over text is kept as a list of parts. Each feed() only searches
  the new block plus the last LOOKBACK_CHARS characters of carried text
  (and any held-back delimiter), so long undelimited input costs linear
  time. A delimiter match may therefore begin at most LOOKBACK_CHARS
  characters before the end of the carried text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from rxpipe.core.types import Chunk, Delimiter, Segment
from rxpipe.exceptions import ChunkOverflowError
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import SPLITTER

logger = get_logger(__name__)

LOOKBACK_CHARS = 1024


@dataclass
class ChunkSplitter:
    """
    Delimiter-driven chunk splitter.

    Example:
        >>> splitter = ChunkSplitter(re.compile(r"\\r?\\n"))
        >>> splitter.feed("a\\nb")
        [Chunk(index=0, text='a')]
        >>> splitter.flush()
        [Chunk(index=1, text='b')]
    """

    delimiter: Optional[re.Pattern]
    keep_delimiters: bool = False
    max_chunk_length: Optional[int] = None
    stage_name: str = field(default="splitter", repr=False)

    _parts: List[str] = field(default_factory=list, init=False, repr=False)
    _carried: int = field(default=0, init=False, repr=False)
    _held: Optional[int] = field(default=None, init=False, repr=False)
    _next_index: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_chunk_length is not None and self.max_chunk_length < 1:
            raise ValueError(f"max_chunk_length must be >= 1, got {self.max_chunk_length}")

    def feed(self, block: str) -> List[Segment]:
        if not block:
            return []

        if self.delimiter is None:
            self._carry(block)
            self._check_length()
            return []

        scan_from = self._carried - LOOKBACK_CHARS
        if self._held is not None:
            scan_from = min(scan_from, self._held)
        window = self._pop_tail(self._carried - max(scan_from, 0)) + block

        segments: List[Segment] = []
        pos = 0
        held = None

        for match in self.delimiter.finditer(window):
            # An empty delimiter match would split between every character.
            if match.end() == match.start():
                continue
            if match.end() == len(window):
                held = match.start()
                break

            text = window[pos : match.start()]
            if not segments:
                text = self._drain() + text
            self._emit(segments, text, match)
            pos = match.end()

        self._held = None if held is None else self._carried + held - pos
        self._carry(window[pos:])
        self._check_length()
        return segments

    def flush(self) -> List[Segment]:
        text = self._drain()
        if not text:
            return []
        if self.delimiter is None:
            return [self._chunk(text)]

        segments: List[Segment] = []
        pos = 0
        for match in self.delimiter.finditer(text):
            if match.end() == match.start():
                continue
            self._emit(segments, text[pos : match.start()], match)
            pos = match.end()

        if pos < len(text):
            segments.append(self._chunk(text[pos:]))
        return segments

    # ------------------------------------------------------------------
    # Carried text
    # ------------------------------------------------------------------

    def _carry(self, text: str) -> None:
        if text:
            self._parts.append(text)
            self._carried += len(text)

    def _pop_tail(self, size: int) -> str:
        """Remove and return the last ``size`` carried characters."""
        pieces: List[str] = []
        while size > 0:
            part = self._parts.pop()
            if len(part) > size:
                self._parts.append(part[:-size])
                part = part[-size:]
            pieces.append(part)
            size -= len(part)
            self._carried -= len(part)
        return "".join(reversed(pieces))

    def _drain(self) -> str:
        text = "".join(self._parts)
        self._parts = []
        self._carried = 0
        self._held = None
        return text

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _emit(self, segments: List[Segment], text: str, match: re.Match) -> None:
        segments.append(self._chunk(text))
        if self.keep_delimiters:
            segments.append(Delimiter(match.group(0)))

    def _chunk(self, text: str) -> Chunk:
        chunk = Chunk(index=self._next_index, text=text)
        self._next_index += 1
        logger.debug(f"{SPLITTER} Emitting chunk[{chunk.index}] ({len(text)} chars)")
        return chunk

    def _check_length(self) -> None:
        if self.max_chunk_length is None:
            return
        # A held-back delimiter is not chunk text.
        pending = self._carried if self._held is None else self._held
        if pending > self.max_chunk_length:
            raise ChunkOverflowError(limit=self.max_chunk_length, length=pending)


__all__ = ["ChunkSplitter", "LOOKBACK_CHARS"]
