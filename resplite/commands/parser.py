from typing import Dict, Type

from resplite.commands.commands import CommandError, PingCommand, RawCommand, RedisCommand, command_name
from resplite.commands.string_commands import GetCommand, SetCommand
from resplite.utils.encoding_utils import Array, Message

COMMAND_MAP: Dict[bytes, Type[RedisCommand]] = {
    b"PING": PingCommand,
    b"GET": GetCommand,
    b"SET": SetCommand,
}


def parse_command(message: Message) -> RedisCommand:
    """
    Lift a RESP message into a typed command.

    Names are matched ASCII case-insensitively. Unknown names become a
    RawCommand carrying the whole array; anything else that is not a valid
    command raises CommandError.
    """
    if not isinstance(message, Array):
        raise CommandError(f"ERR invalid command: expected an array, got {type(message).__name__}")
    if not message.items:
        raise CommandError("ERR invalid command: empty array")

    name = command_name(message.items[0])
    if name is None:
        raise CommandError("ERR invalid command: name must be a simple string or non-null bulk string")

    command_class = COMMAND_MAP.get(name.as_bytes().upper())
    if command_class is None:
        return RawCommand.from_args(message.items)
    return command_class.from_args(message.items[1:])
