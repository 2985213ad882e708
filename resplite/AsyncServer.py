import asyncio
import contextlib
import logging
from typing import Optional, Set, Tuple

from resplite.AsyncCore import CoreProcessor
from resplite.AsyncHandler import AsyncRequestHandler
from resplite.utils.channels import CommandChannel, ConnectionIds, ResponseRouter
from resplite.utils.constants import DEFAULT_HOST, DEFAULT_PORT


class AsyncServer:
    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        self.host = host
        self.port = port
        self.connection_ids = ConnectionIds()
        self.commands = CommandChannel()
        self.router = ResponseRouter()
        self.core = CoreProcessor(self.commands, self.router)
        self.core_task: Optional[asyncio.Task] = None
        self.inner_server: Optional[asyncio.AbstractServer] = None
        self.writers: Set[asyncio.StreamWriter] = set()

    @classmethod
    async def create(cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> 'AsyncServer':
        instance = cls(host, port)
        await instance.start()
        await instance.serve_forever()
        return instance

    async def start(self) -> asyncio.AbstractServer:
        """Bind the listening socket and start the core. Raises OSError if the bind fails."""
        self.inner_server = await asyncio.start_server(
            self.accept_connections, self.host, self.port
        )
        addr = self.inner_server.sockets[0].getsockname()
        self.port = addr[1]
        self.core_task = asyncio.create_task(self.core.run())
        self.core_task.add_done_callback(self._core_done)
        logging.info(f"Server started at {addr[0]}:{addr[1]}")
        return self.inner_server

    async def serve_forever(self) -> None:
        try:
            await self.inner_server.serve_forever()
        finally:
            await self.stop()

    async def stop(self) -> None:
        if self.inner_server is not None:
            self.inner_server.close()
        for writer in list(self.writers):
            writer.close()
        if self.core_task is not None and not self.core_task.done():
            self.core_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.core_task
        if self.inner_server is not None:
            await self.inner_server.wait_closed()

    async def accept_connections(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        connection_id = self.connection_ids.next_id()
        addr = writer.get_extra_info("peername")
        logging.info(f"Connection {connection_id} from {addr}")

        # Registered before the worker exists, so the core never sees an
        # unroutable connection id.
        responses = self.router.register(connection_id)
        self.writers.add(writer)
        request_handler = AsyncRequestHandler(reader, writer, connection_id, self.commands, responses)
        try:
            await request_handler.process_request()
        finally:
            self.router.unregister(connection_id)
            self.writers.discard(writer)
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
            logging.info(f"Connection {connection_id} closed")

    def _core_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logging.error("Core processor failed", exc_info=exc)


def parse_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.rpartition(":")
    host = host.strip("[]")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid address {address!r}, expected host:port")
    return host, int(port)


async def start(address: str = f"{DEFAULT_HOST}:{DEFAULT_PORT}") -> None:
    """Serve on ``address`` (``host:port``) until cancelled."""
    host, port = parse_address(address)
    await AsyncServer.create(host, port)
