import asyncio
import contextlib
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest_asyncio

from resplite.AsyncCore import CoreProcessor
from resplite.AsyncHandler import AsyncRequestHandler
from resplite.utils.channels import CommandChannel, ResponseRouter


def stream_reader(data: bytes, eof: bool = True) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return reader


def mock_writer() -> MagicMock:
    writer = MagicMock()
    writer.drain = AsyncMock()
    return writer


def written_bytes(writer: MagicMock) -> bytes:
    return b"".join(call.args[0] for call in writer.write.call_args_list)


@pytest_asyncio.fixture
async def running_core():
    commands = CommandChannel()
    router = ResponseRouter()
    core = CoreProcessor(commands, router)
    task = asyncio.create_task(core.run())
    yield core
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def run_handler(core: CoreProcessor, data: bytes, connection_id: int = 0) -> bytes:
    """Feed ``data`` to a worker wired to ``core`` and return everything it wrote."""
    writer = mock_writer()
    responses = core.router.register(connection_id)
    handler = AsyncRequestHandler(stream_reader(data), writer, connection_id, core.commands, responses)
    try:
        await asyncio.wait_for(handler.process_request(), timeout=5)
    finally:
        core.router.unregister(connection_id)
    return written_bytes(writer)


async def open_connection(port: int):
    return await asyncio.open_connection("127.0.0.1", port)


async def exchange(port: int, payload: bytes, expected_length: int) -> bytes:
    """Send raw bytes on a fresh connection and read back ``expected_length`` bytes."""
    reader, writer = await open_connection(port)
    try:
        writer.write(payload)
        await writer.drain()
        return await asyncio.wait_for(reader.readexactly(expected_length), timeout=5)
    finally:
        writer.close()
        await writer.wait_closed()


def command_bytes(*words: bytes) -> bytes:
    parts: List[bytes] = [b"*%d\r\n" % len(words)]
    for word in words:
        parts.append(b"$%d\r\n%s\r\n" % (len(word), word))
    return b"".join(parts)
