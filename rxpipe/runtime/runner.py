# rxpipe/runtime/runner.py
"""
StageRunner - drives a list of stages between a source and a sink.

Layout for N stages:

    reader ─▶ q0 ─▶ stage[0] ─▶ q1 ─▶ ... ─▶ stage[N-1] ─▶ qN ─▶ writer

Every arrow is a bounded asyncio.Queue (maxsize=high_water_mark). A full
queue suspends its producer, which is the only backpressure mechanism:
no stage ever holds more than the item it is working on. Items keep their
source order because each stage is a single task reading one queue.

End of input travels downstream as a sentinel. A stage flushes when the
sentinel reaches it and forwards the sentinel after its flushed output.

Failure handling:
- The first exception raised by any task is recorded and re-raised from
  run() unchanged. Later exceptions are logged and dropped.
- Everything upstream of the failing task is cancelled, so no more input
  is read.
- Output already produced downstream of the failing stage is still
  written, in order, then the writer stops. Nothing produced after the
  failure point reaches the sink.
"""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Sequence

from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import RUNNER
from rxpipe.stages.base import Stage

logger = get_logger(__name__)

SinkWriter = Callable[[str], Awaitable[None]]

_END = object()
_ABORT = object()


class StageRunner:
    """
    Runs stages as a pipelined chain of asyncio tasks.

    Usage:
        runner = StageRunner([splitter, replacer], high_water_mark=16)
        await runner.run(source.blocks(65536), sink.write)
    """

    def __init__(self, stages: Sequence[Stage], *, high_water_mark: int = 16) -> None:
        if high_water_mark < 1:
            raise ValueError(f"high_water_mark must be >= 1, got {high_water_mark}")
        for stage in stages:
            if not isinstance(stage, Stage):
                raise TypeError(f"{stage!r} does not implement the Stage protocol")

        self._stages = list(stages)
        self._high_water_mark = high_water_mark
        self._tasks: List[asyncio.Task] = []
        self._failure: Optional[BaseException] = None
        self.items_written = 0

    @property
    def stages(self) -> List[Stage]:
        return list(self._stages)

    async def run(self, source: AsyncIterator[str], sink: SinkWriter) -> None:
        """
        Pump ``source`` through the stages into ``sink``.

        Raises:
            The first exception raised by the reader, a stage or the sink.
        """
        self._failure = None
        self.items_written = 0

        queues = [asyncio.Queue(maxsize=self._high_water_mark) for _ in range(len(self._stages) + 1)]

        coros = [self._read(source, queues[0])]
        for position, stage in enumerate(self._stages, start=1):
            coros.append(self._drive(position, stage, queues[position - 1], queues[position]))
        coros.append(self._write(len(self._stages) + 1, queues[-1], sink))

        self._tasks = [asyncio.ensure_future(coro) for coro in coros]
        names = " → ".join(stage.stage_name for stage in self._stages)
        logger.debug(f"{RUNNER} Started: reader → {names} → writer")

        try:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        finally:
            for task in self._tasks:
                if not task.done():
                    task.cancel()
            self._tasks = []

        if self._failure is not None:
            raise self._failure

        logger.debug(f"{RUNNER} Finished: {self.items_written} item(s) written")

    def _abort(self, position: int, exc: BaseException) -> None:
        if self._failure is None:
            self._failure = exc
            logger.error(f"{RUNNER} Aborting at task {position}: {type(exc).__name__}: {exc}")
        else:
            logger.debug(f"{RUNNER} Ignoring later failure at task {position}: {exc!r}")

        for task in self._tasks[:position]:
            if not task.done():
                task.cancel()

    async def _read(self, source: AsyncIterator[str], outbox: asyncio.Queue) -> None:
        try:
            async for block in source:
                await outbox.put(block)
        except Exception as exc:
            self._abort(0, exc)
            await outbox.put(_ABORT)
            return
        await outbox.put(_END)

    async def _drive(
        self,
        position: int,
        stage: Stage,
        inbox: asyncio.Queue,
        outbox: asyncio.Queue,
    ) -> None:
        try:
            while True:
                item: Any = await inbox.get()
                if item is _ABORT:
                    await outbox.put(_ABORT)
                    return
                if item is _END:
                    for out in stage.flush():
                        await outbox.put(out)
                    await outbox.put(_END)
                    return
                for out in stage.feed(item):
                    await outbox.put(out)
        except Exception as exc:
            self._abort(position, exc)
            await outbox.put(_ABORT)

    async def _write(self, position: int, inbox: asyncio.Queue, sink: SinkWriter) -> None:
        try:
            while True:
                item = await inbox.get()
                if item is _END or item is _ABORT:
                    return
                if item:
                    await sink(item)
                    self.items_written += 1
        except Exception as exc:
            self._abort(position, exc)


__all__ = ["StageRunner", "SinkWriter"]
