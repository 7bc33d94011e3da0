# rxpipe/io/endpoints.py
"""
Source and sink endpoints.

A pipe reads from exactly one source and writes to exactly one sink. Each
is given either as a file path or as an already-open stream object:

- str / os.PathLike: resolved against the current working directory when
  the pipe is built, opened with aiofiles when an operation starts and
  closed when it ends. Newlines are never translated.
- stream object: anything with a callable ``read`` (source) or ``write``
  (sink). Sync and async methods both work. Bytes are decoded/encoded with
  the configured encoding. The caller keeps ownership: handles are flushed,
  never closed.
"""

from __future__ import annotations

import asyncio
import codecs
import inspect
import io
import os
from pathlib import Path
from typing import Any, AsyncIterator, Optional, Union

import aiofiles

from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import IO

logger = get_logger(__name__)

Endpoint = Union[str, "os.PathLike[str]", Any]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _is_blocking(handle: Any) -> bool:
    """True for sync handles backed by an OS file descriptor (stdin, pipes, files)."""
    if inspect.iscoroutinefunction(handle.read):
        return False
    try:
        handle.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    return True


def _is_binary(handle: Any) -> bool:
    if isinstance(handle, (io.RawIOBase, io.BufferedIOBase, asyncio.StreamWriter)):
        return True
    return "b" in str(getattr(handle, "mode", ""))


# =============================================================================
# Sources
# =============================================================================


class PathSource:
    """Source backed by a file the pipe opens and closes itself."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding
        self._handle = None

    def __repr__(self) -> str:
        return f"PathSource({str(self.path)!r})"

    async def open(self) -> None:
        self._handle = await aiofiles.open(self.path, "r", encoding=self.encoding, newline="")
        logger.debug(f"{IO} Opened source {self.path}")

    async def blocks(self, read_size: int) -> AsyncIterator[str]:
        if self._handle is None:
            raise RuntimeError(f"{self!r} is not open")
        while True:
            block = await self._handle.read(read_size)
            if not block:
                return
            yield block

    async def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            await handle.close()
            logger.debug(f"{IO} Closed source {self.path}")


class HandleSource:
    """Source backed by a caller-owned readable object."""

    def __init__(self, handle: Any, encoding: str = "utf-8") -> None:
        self.handle = handle
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"HandleSource({self.handle!r})"

    async def open(self) -> None:
        return None

    async def blocks(self, read_size: int) -> AsyncIterator[str]:
        decoder: Optional[codecs.IncrementalDecoder] = None
        loop = asyncio.get_running_loop()
        blocking = _is_blocking(self.handle)

        while True:
            if blocking:
                # Descriptor reads block; run them in the default executor.
                data = await loop.run_in_executor(None, self.handle.read, read_size)
            else:
                data = await _maybe_await(self.handle.read(read_size))
            if not data:
                break
            if isinstance(data, (bytes, bytearray)):
                if decoder is None:
                    decoder = codecs.getincrementaldecoder(self.encoding)()
                # Multi-byte characters split across reads stay in the decoder.
                data = decoder.decode(data)
                if not data:
                    continue
            yield data

        if decoder is not None:
            tail = decoder.decode(b"", final=True)
            if tail:
                yield tail

    async def close(self) -> None:
        return None


# =============================================================================
# Sinks
# =============================================================================


class PathSink:
    """Sink backed by a file the pipe creates (or truncates) and closes."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding
        self._handle = None

    def __repr__(self) -> str:
        return f"PathSink({str(self.path)!r})"

    async def open(self) -> None:
        self._handle = await aiofiles.open(self.path, "w", encoding=self.encoding, newline="")
        logger.debug(f"{IO} Opened sink {self.path}")

    async def write(self, text: str) -> None:
        if self._handle is None:
            raise RuntimeError(f"{self!r} is not open")
        await self._handle.write(text)

    async def close(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            await handle.close()
            logger.debug(f"{IO} Closed sink {self.path}")


class HandleSink:
    """Sink backed by a caller-owned writable object."""

    def __init__(self, handle: Any, encoding: str = "utf-8") -> None:
        self.handle = handle
        self.encoding = encoding
        self._binary = _is_binary(handle)

    def __repr__(self) -> str:
        return f"HandleSink({self.handle!r})"

    async def open(self) -> None:
        return None

    async def write(self, text: str) -> None:
        data = text.encode(self.encoding) if self._binary else text
        await _maybe_await(self.handle.write(data))

        drain = getattr(self.handle, "drain", None)
        if callable(drain):
            await _maybe_await(drain())

    async def close(self) -> None:
        flush = getattr(self.handle, "flush", None)
        if callable(flush):
            await _maybe_await(flush())


Source = Union[PathSource, HandleSource]
Sink = Union[PathSink, HandleSink]


# =============================================================================
# Resolution
# =============================================================================


def _resolve_path(value: Union[str, "os.PathLike[str]"]) -> Path:
    return (Path.cwd() / Path(value)).resolve()


def resolve_source(value: Endpoint, encoding: str = "utf-8") -> Source:
    """
    Build the source endpoint for ``value``.

    Raises:
        TypeError: If value is neither a path nor a readable object.
    """
    if isinstance(value, (str, os.PathLike)):
        return PathSource(_resolve_path(value), encoding=encoding)
    if callable(getattr(value, "read", None)):
        return HandleSource(value, encoding=encoding)
    raise TypeError('"input" must be either a stream object or a file path')


def resolve_sink(value: Endpoint, encoding: str = "utf-8") -> Sink:
    """
    Build the sink endpoint for ``value``.

    Raises:
        TypeError: If value is neither a path nor a writable object.
    """
    if isinstance(value, (str, os.PathLike)):
        return PathSink(_resolve_path(value), encoding=encoding)
    if callable(getattr(value, "write", None)):
        return HandleSink(value, encoding=encoding)
    raise TypeError('"output" must be either a stream object or a file path')


__all__ = [
    "PathSource",
    "HandleSource",
    "PathSink",
    "HandleSink",
    "Source",
    "Sink",
    "resolve_source",
    "resolve_sink",
]
