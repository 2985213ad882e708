from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from resplite.utils.constants import OK, PONG
from resplite.utils.encoding_utils import Array, BulkString, ErrorString, Message, SimpleString
from resplite.utils.redis_string import RedisString


class ResponseError(ValueError):
    """A RESP message that is not a valid command response."""


class CommandResponse(ABC):
    @abstractmethod
    def to_resp(self) -> Message:
        pass


@dataclass
class PongResponse(CommandResponse):
    def to_resp(self) -> Message:
        return SimpleString(PONG)


@dataclass
class OkResponse(CommandResponse):
    def to_resp(self) -> Message:
        return SimpleString(OK)


@dataclass
class ErrorResponse(CommandResponse):
    message: str

    def to_resp(self) -> Message:
        return ErrorString(self.message)


@dataclass
class BulkStringResponse(CommandResponse):
    value: Optional[RedisString]

    def __post_init__(self):
        if self.value is not None:
            self.value = RedisString(self.value)

    def to_resp(self) -> Message:
        return BulkString(None if self.value is None else self.value.as_bytes())


def parse_response(message: Message) -> CommandResponse:
    if isinstance(message, SimpleString):
        if message.value == PONG:
            return PongResponse()
        if message.value == OK:
            return OkResponse()
        raise ResponseError(f"unknown simple string response: {message.value!r}")
    if isinstance(message, ErrorString):
        return ErrorResponse(message.value)
    if isinstance(message, BulkString):
        return BulkStringResponse(message.value)
    if isinstance(message, Array):
        raise ResponseError("array responses are not supported")
    raise ResponseError(f"not a RESP message: {message!r}")
