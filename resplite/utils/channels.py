import asyncio
import itertools
import logging
import threading
from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:
    from resplite.commands.commands import RedisCommand
    from resplite.commands.responses import CommandResponse

# Marker placed on a closed response channel to wake a waiting worker.
_DISCONNECTED = object()


class CoreDisconnected(Exception):
    """The core processor is gone; no response will ever arrive."""


class ConnectionIds:
    """Hands out connection identities: 0, 1, 2, ... never reused."""

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)


class CommandChannel:
    """Unbounded multi-producer, single-consumer queue of (connection id, command)."""

    def __init__(self):
        self._queue: 'asyncio.Queue[Tuple[int, RedisCommand]]' = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, connection_id: int, command: 'RedisCommand') -> None:
        if self._closed:
            raise CoreDisconnected("command channel is closed")
        self._queue.put_nowait((connection_id, command))

    async def receive(self) -> Tuple[int, 'RedisCommand']:
        return await self._queue.get()

    def close(self) -> None:
        self._closed = True


class ResponseChannel:
    """Single-producer, single-consumer queue of responses for one connection."""

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()

    def deliver(self, response: 'CommandResponse') -> None:
        self._queue.put_nowait(response)

    async def receive(self) -> 'CommandResponse':
        response = await self._queue.get()
        if response is _DISCONNECTED:
            # Leave the marker for any later receive() on this channel.
            self._queue.put_nowait(_DISCONNECTED)
            raise CoreDisconnected("response channel is closed")
        return response

    def close(self) -> None:
        self._queue.put_nowait(_DISCONNECTED)


class ResponseRouter:
    """
    Routing table from connection identity to that connection's response channel.

    The lock only ever guards dictionary operations. Delivery onto a channel
    happens after it is released.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._channels: Dict[int, ResponseChannel] = {}
        self._closed = False

    def register(self, connection_id: int) -> ResponseChannel:
        channel = ResponseChannel()
        with self._lock:
            if connection_id in self._channels:
                raise KeyError(f"connection {connection_id} is already registered")
            self._channels[connection_id] = channel
            closed = self._closed
        if closed:
            channel.close()
        return channel

    def unregister(self, connection_id: int) -> None:
        with self._lock:
            self._channels.pop(connection_id, None)

    def deliver(self, connection_id: int, response: 'CommandResponse') -> bool:
        with self._lock:
            channel = self._channels.get(connection_id)
        if channel is None:
            logging.warning(f"Dropping response for unknown connection {connection_id}")
            return False
        channel.deliver(response)
        return True

    def close(self) -> None:
        with self._lock:
            self._closed = True
            channels = list(self._channels.values())
        for channel in channels:
            channel.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)

    def __contains__(self, connection_id: int) -> bool:
        with self._lock:
            return connection_id in self._channels
