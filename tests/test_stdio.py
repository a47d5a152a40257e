"""Tests for the event-loop stdin reader used by the stdio transport."""
import asyncio
import os

import pytest

from common.stdio import StdinLines


def test_reads_lines_until_eof():
    async def scenario():
        read_fd, write_fd = os.pipe()
        os.write(write_fd, b'{"id": 1}\n{"id": 2}\n')
        os.close(write_fd)
        lines = await StdinLines.open(os.fdopen(read_fd, "rb"))
        try:
            return [line async for line in lines]
        finally:
            lines.close()

    assert asyncio.run(scenario()) == ['{"id": 1}\n', '{"id": 2}\n']


def test_pending_read_is_cancellable():
    async def scenario():
        read_fd, write_fd = os.pipe()
        lines = await StdinLines.open(os.fdopen(read_fd, "rb"))
        try:
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(lines.__anext__(), timeout=0.2)
        finally:
            lines.close()
            os.close(write_fd)

    asyncio.run(scenario())


def test_invalid_utf8_is_replaced():
    async def scenario():
        read_fd, write_fd = os.pipe()
        os.write(write_fd, b"caf\xff\n")
        os.close(write_fd)
        lines = await StdinLines.open(os.fdopen(read_fd, "rb"))
        try:
            return await lines.__anext__()
        finally:
            lines.close()

    assert asyncio.run(scenario()) == "caf\ufffd\n"
