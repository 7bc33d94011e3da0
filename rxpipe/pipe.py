# rxpipe/pipe.py
"""
Pipe - pumps a source into a sink through a regex-driven stage chain.

Operations:
    parse:   split → extract matches → render each match → sink
    replace: split (keeping delimiters) → substitute per chunk → sink

A Pipe owns its source and sink for its whole life and runs exactly one
operation.

Usage:
    >>> pipe = Pipe("data.txt", "out.txt")
    >>> await pipe.replace(
    ...     re.compile(r"(\\w+)=(\\d+)"), "$2=$1", delimiter=Pipe.DELIMITERS.LINE_BY_LINE
    ... )
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from rxpipe.config.schema import PipeConfig
from rxpipe.core.pattern import Delimiters, DelimiterLike, PatternLike, as_delimiter, as_search_pattern
from rxpipe.exceptions import PipeStateError
from rxpipe.io.endpoints import Endpoint, Sink, Source, resolve_sink, resolve_source
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import PIPE
from rxpipe.runtime.runner import StageRunner
from rxpipe.stages import ChunkReplacer, ChunkSplitter, MatchExtractor, MatchRenderer
from rxpipe.stages.base import Stage
from rxpipe.stages.renderer import Transformation

logger = get_logger(__name__)


class Pipe:
    """
    A single-shot pipe between two streams or files.

    Args:
        input: Source stream object or file path (relative to the cwd).
        output: Sink stream object or file path (relative to the cwd).
        config: Runtime settings. Defaults to PipeConfig().

    Raises:
        TypeError: If input or output is neither a stream nor a path.
    """

    DELIMITERS = Delimiters

    def __init__(self, input: Endpoint, output: Endpoint, *, config: Optional[PipeConfig] = None) -> None:
        self._config = config or PipeConfig()
        self._source: Source = resolve_source(input, encoding=self._config.encoding)
        self._sink: Sink = resolve_sink(output, encoding=self._config.encoding)
        self._consumed = False

    def __repr__(self) -> str:
        return f"Pipe({self._source!r}, {self._sink!r})"

    @property
    def config(self) -> PipeConfig:
        return self._config

    @property
    def source(self) -> Source:
        return self._source

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def consumed(self) -> bool:
        return self._consumed

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def parse(
        self,
        regex: PatternLike,
        transformation: Transformation,
        *,
        delimiter: DelimiterLike = None,
    ) -> None:
        """
        Pump the input to the output through a parse operation.

        Every chunk must match ``regex`` at least once. Each match is passed
        to ``transformation`` and the returned strings are written in order.

        Args:
            regex: re.Pattern (first match only) or SearchPattern.
            transformation: Callable mapping an re.Match to a string.
            delimiter: Chunk delimiter. None means the whole input is one chunk.

        Raises:
            TypeError: On invalid arguments, before any input is read.
            MatchFailureError: When a chunk has no match.
            PipeStateError: If this pipe already ran an operation.
            Any exception raised by ``transformation`` or by the endpoints.
        """
        pattern = as_search_pattern(regex)
        if not callable(transformation):
            raise TypeError('"transformation" must be a callable')
        split_on = as_delimiter(delimiter)

        stages: List[Stage] = [
            self._splitter(split_on, keep_delimiters=False),
            MatchExtractor(pattern),
            MatchRenderer(transformation),
        ]
        await self._run("parse", stages)

    async def replace(
        self,
        regex: PatternLike,
        replacement: str,
        *,
        delimiter: DelimiterLike = None,
    ) -> None:
        """
        Pump the input to the output through a replacement operation.

        Args:
            regex: re.Pattern (first occurrence per chunk) or SearchPattern.
            replacement: Template with $-references ($1, $&, $<name>, ...).
            delimiter: Chunk delimiter. None means the whole input is one chunk.

        Raises:
            TypeError: On invalid arguments, before any input is read.
            PipeStateError: If this pipe already ran an operation.
            Any exception raised by the endpoints.
        """
        pattern = as_search_pattern(regex)
        if not isinstance(replacement, str):
            raise TypeError('"replacement" must be a string')
        split_on = as_delimiter(delimiter)

        stages: List[Stage] = [
            self._splitter(split_on, keep_delimiters=True),
            ChunkReplacer(pattern, replacement),
        ]
        await self._run("replace", stages)

    def parse_sync(self, regex: PatternLike, transformation: Transformation, **kwargs: Any) -> None:
        """Run parse() to completion in a new event loop."""
        asyncio.run(self.parse(regex, transformation, **kwargs))

    def replace_sync(self, regex: PatternLike, replacement: str, **kwargs: Any) -> None:
        """Run replace() to completion in a new event loop."""
        asyncio.run(self.replace(regex, replacement, **kwargs))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _splitter(self, delimiter, *, keep_delimiters: bool) -> ChunkSplitter:
        return ChunkSplitter(
            delimiter,
            keep_delimiters=keep_delimiters,
            max_chunk_length=self._config.max_chunk_length,
        )

    async def _run(self, operation: str, stages: List[Stage]) -> None:
        if self._consumed:
            raise PipeStateError(f"{self!r} already ran an operation; create a new Pipe")
        self._consumed = True

        runner = StageRunner(stages, high_water_mark=self._config.high_water_mark)
        logger.info(f"{PIPE} Starting {operation}: {self._source!r} → {self._sink!r}")

        await self._source.open()
        try:
            await self._sink.open()
            await runner.run(self._source.blocks(self._config.read_size), self._sink.write)
        except BaseException:
            await self._close_after_failure()
            raise

        try:
            await self._sink.close()
        finally:
            await self._source.close()
        logger.info(f"{PIPE} Finished {operation}: {runner.items_written} chunk(s) written")

    async def _close_after_failure(self) -> None:
        for endpoint in (self._sink, self._source):
            try:
                await endpoint.close()
            except Exception as e:
                logger.warning(f"{PIPE} Failed to close {endpoint!r} after error: {e}")


__all__ = ["Pipe"]
