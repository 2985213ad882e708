import asyncio
import logging
from typing import Union

from resplite.commands.commands import CommandError, PingCommand, RawCommand, RedisCommand
from resplite.commands.parser import parse_command
from resplite.commands.responses import CommandResponse, parse_response
from resplite.commands.string_commands import GetCommand, SetCommand
from resplite.utils.constants import DEFAULT_HOST, DEFAULT_PORT
from resplite.utils.encoding_utils import Array, BulkString
import resplite.utils.encoding_utils as encoding_utils
from resplite.utils.redis_string import RedisString

Value = Union[bytes, str, RedisString]


class RespClient:
    """Client side of the protocol: encodes commands, decodes their responses."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self.reader = reader
        self.writer = writer

    @classmethod
    async def connect(cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> 'RespClient':
        reader, writer = await asyncio.open_connection(host, port)
        logging.info(f"Connected to {host}:{port}")
        return cls(reader, writer)

    async def close(self) -> None:
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            logging.debug(f"Error while closing connection: {e!r}")

    async def __aenter__(self) -> 'RespClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def send_command(self, command: RedisCommand) -> CommandResponse:
        await encoding_utils.write_message(self.writer, command.to_resp())
        message = await encoding_utils.read_message(self.reader)
        if message is None:
            raise ConnectionError("server closed the connection before replying")
        return parse_response(message)

    async def ping(self) -> CommandResponse:
        return await self.send_command(PingCommand())

    async def get(self, key: Value) -> CommandResponse:
        return await self.send_command(GetCommand(RedisString(key)))

    async def set(self, key: Value, value: Value) -> CommandResponse:
        return await self.send_command(SetCommand(RedisString(key), RedisString(value)))

    async def execute(self, *words: Value) -> CommandResponse:
        """Send an arbitrary command given as words, e.g. ``execute("SET", "k", "v")``."""
        message = Array([BulkString(word) for word in words])
        try:
            command = parse_command(message)
        except CommandError:
            # Let the server report the problem.
            command = RawCommand(message.items)
        return await self.send_command(command)
