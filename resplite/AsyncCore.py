import logging
from typing import Dict

from resplite.commands.commands import RedisCommand
from resplite.commands.responses import CommandResponse
from resplite.utils.channels import CommandChannel, ResponseRouter
from resplite.utils.redis_string import RedisString


class CoreProcessor:
    """
    Sole owner of the key/value store.

    Commands from every connection arrive on one channel and are applied one
    at a time, so all mutations happen in the order they are received.
    """

    def __init__(self, commands: CommandChannel, router: ResponseRouter):
        self.commands = commands
        self.router = router
        self.memory: Dict[RedisString, RedisString] = {}
        self.processed = 0

    def process_command(self, command: RedisCommand) -> CommandResponse:
        self.processed += 1
        return command.execute(self.memory)

    async def run(self) -> None:
        logging.info("Core processor started")
        try:
            while True:
                connection_id, command = await self.commands.receive()
                logging.debug("Core processing %r from connection %d", command, connection_id)
                response = self.process_command(command)
                self.router.deliver(connection_id, response)
        finally:
            self.commands.close()
            self.router.close()
            logging.info(f"Core processor stopped after {self.processed} commands")
