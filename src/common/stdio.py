"""Event-loop driven stdin reader for the stdio transport.

Lines are read through ``loop.connect_read_pipe`` rather than a worker
thread, so a pending read is cancelled immediately when the server stops.
"""
from __future__ import annotations

import asyncio
import sys
from typing import Any, Optional

# JSON-RPC messages arrive one per line and may carry large manifests.
_LINE_LIMIT = 16 * 1024 * 1024


class StdinLines:
    """Async iterator of decoded lines from a readable pipe."""

    def __init__(self, reader: asyncio.StreamReader, transport: Optional[asyncio.BaseTransport] = None):
        self._reader = reader
        self._transport = transport

    @classmethod
    async def open(cls, pipe: Any = None) -> "StdinLines":
        """Attach to ``pipe`` (stdin by default).

        Raises:
            ValueError: ``pipe`` is not a pipe, socket or character device.
        """
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=_LINE_LIMIT)
        transport, _ = await loop.connect_read_pipe(
            lambda: asyncio.StreamReaderProtocol(reader), pipe or sys.stdin.buffer
        )
        return cls(reader, transport)

    def __aiter__(self) -> "StdinLines":
        return self

    async def __anext__(self) -> str:
        line = await self._reader.readline()
        if not line:
            raise StopAsyncIteration
        return line.decode("utf-8", errors="replace")

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None
