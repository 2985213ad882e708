import asyncio
import logging

from resplite.commands.commands import CommandError
from resplite.commands.parser import parse_command
from resplite.commands.responses import CommandResponse, ErrorResponse
from resplite.utils.channels import CommandChannel, CoreDisconnected, ResponseChannel
from resplite.utils.constants import PROTOCOL_ERROR
import resplite.utils.encoding_utils as encoding_utils


class AsyncRequestHandler:
    """
    Worker for a single connection.

    Reads one request, waits for its response, writes it back, and only then
    reads the next request, so responses leave in the order requests arrived.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, connection_id: int,
                 commands: CommandChannel, responses: ResponseChannel):
        self.reader = reader
        self.writer = writer
        self.connection_id = connection_id
        self.commands = commands
        self.responses = responses

    async def process_request(self) -> None:
        try:
            while await self.handle_request():
                pass
        except CoreDisconnected:
            logging.warning(f"Connection {self.connection_id}: core is gone, closing")
        except OSError as e:
            logging.warning(f"Connection {self.connection_id}: I/O error: {e!r}")

    async def handle_request(self) -> bool:
        """Serve one request. Returns False once the connection should close."""
        try:
            message = await encoding_utils.read_message(self.reader)
        except encoding_utils.ProtocolError as e:
            logging.warning(f"Connection {self.connection_id}: protocol error: {e}")
            await self.send_response(ErrorResponse(PROTOCOL_ERROR.format(reason=_single_line(str(e)))))
            return False

        if message is None:
            logging.info(f"Connection {self.connection_id}: client closed the connection")
            return False
        logging.debug("Connection %d: request %r", self.connection_id, message)

        try:
            command = parse_command(message)
        except CommandError as e:
            response = ErrorResponse(str(e))
        else:
            self.commands.send(self.connection_id, command)
            response = await self.responses.receive()

        await self.send_response(response)
        return True

    async def send_response(self, response: CommandResponse) -> None:
        await encoding_utils.write_message(self.writer, response.to_resp())


def _single_line(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")
