from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

from resplite.commands.responses import CommandResponse, ErrorResponse, PongResponse
from resplite.utils.constants import UNKNOWN_COMMAND_ERROR, WRONG_ARGUMENT_ERROR, WRONG_ARITY_ERROR
from resplite.utils.encoding_utils import Array, BulkString, Message, SimpleString
from resplite.utils.redis_string import RedisString

Store = Dict[RedisString, RedisString]


class CommandError(ValueError):
    """Well-formed RESP that is not a valid command (or response)."""


class RedisCommand(ABC):
    name: str = ""

    @classmethod
    @abstractmethod
    def from_args(cls, args: List[Message]) -> 'RedisCommand':
        """Build the command from the arguments following its name."""

    @abstractmethod
    def to_resp(self) -> Array:
        pass

    @abstractmethod
    def execute(self, memory: Store) -> CommandResponse:
        pass


def command_name(message: Message) -> Optional[RedisString]:
    if isinstance(message, SimpleString):
        return RedisString(message.value)
    if isinstance(message, BulkString) and not message.is_null:
        return RedisString(message.value)
    return None


def expect_arity(name: str, args: List[Message], count: int) -> None:
    if len(args) != count:
        raise CommandError(WRONG_ARITY_ERROR.format(name=name.lower()))


def bulk_argument(name: str, field: str, message: Message) -> RedisString:
    if isinstance(message, BulkString) and not message.is_null:
        return RedisString(message.value)
    raise CommandError(WRONG_ARGUMENT_ERROR.format(field=field, name=name.lower()))


@dataclass
class PingCommand(RedisCommand):
    name = "PING"

    @classmethod
    def from_args(cls, args: List[Message]) -> 'PingCommand':
        expect_arity(cls.name, args, 0)
        return cls()

    def to_resp(self) -> Array:
        return Array([BulkString(self.name)])

    def execute(self, memory: Store) -> CommandResponse:
        return PongResponse()


@dataclass
class RawCommand(RedisCommand):
    """A command this server does not implement, kept as the original array."""
    args: List[Message]

    @classmethod
    def from_args(cls, args: List[Message]) -> 'RawCommand':
        return cls(list(args))

    def to_resp(self) -> Array:
        return Array(list(self.args))

    def execute(self, memory: Store) -> CommandResponse:
        name = command_name(self.args[0]) if self.args else None
        return ErrorResponse(UNKNOWN_COMMAND_ERROR.format(name=repr(name) if name is not None else "''"))
