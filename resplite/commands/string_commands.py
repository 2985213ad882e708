from dataclasses import dataclass
from typing import List

from resplite.commands.commands import RedisCommand, Store, bulk_argument, expect_arity
from resplite.commands.responses import BulkStringResponse, CommandResponse, OkResponse
from resplite.utils.encoding_utils import Array, BulkString, Message
from resplite.utils.redis_string import RedisString


@dataclass
class GetCommand(RedisCommand):
    key: RedisString
    name = "GET"

    def __post_init__(self):
        self.key = RedisString(self.key)

    @classmethod
    def from_args(cls, args: List[Message]) -> 'GetCommand':
        expect_arity(cls.name, args, 1)
        return cls(bulk_argument(cls.name, "key", args[0]))

    def to_resp(self) -> Array:
        return Array([BulkString(self.name), BulkString(self.key)])

    def execute(self, memory: Store) -> CommandResponse:
        return BulkStringResponse(memory.get(self.key))


@dataclass
class SetCommand(RedisCommand):
    key: RedisString
    value: RedisString
    name = "SET"

    def __post_init__(self):
        self.key = RedisString(self.key)
        self.value = RedisString(self.value)

    @classmethod
    def from_args(cls, args: List[Message]) -> 'SetCommand':
        expect_arity(cls.name, args, 2)
        return cls(bulk_argument(cls.name, "key", args[0]), bulk_argument(cls.name, "value", args[1]))

    def to_resp(self) -> Array:
        return Array([BulkString(self.name), BulkString(self.key), BulkString(self.value)])

    def execute(self, memory: Store) -> CommandResponse:
        memory[self.key] = self.value
        return OkResponse()
