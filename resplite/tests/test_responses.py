import pytest

from resplite.commands.responses import (
    BulkStringResponse,
    ErrorResponse,
    OkResponse,
    PongResponse,
    ResponseError,
    parse_response,
)
from resplite.utils.encoding_utils import Array, BulkString, ErrorString, SimpleString
from resplite.utils.redis_string import RedisString


def test_response_encoding():
    assert PongResponse().to_resp().encode() == b"+PONG\r\n"
    assert OkResponse().to_resp().encode() == b"+OK\r\n"
    assert ErrorResponse("ERR bad").to_resp().encode() == b"-ERR bad\r\n"
    assert BulkStringResponse(None).to_resp().encode() == b"$-1\r\n"
    assert BulkStringResponse(RedisString("hello")).to_resp().encode() == b"$5\r\nhello\r\n"
    assert BulkStringResponse(RedisString("")).to_resp().encode() == b"$0\r\n\r\n"


def test_parse_responses():
    assert parse_response(SimpleString("PONG")) == PongResponse()
    assert parse_response(SimpleString("OK")) == OkResponse()
    assert parse_response(ErrorString("ERR x")) == ErrorResponse("ERR x")
    assert parse_response(BulkString(None)) == BulkStringResponse(None)
    assert parse_response(BulkString(b"v")) == BulkStringResponse(RedisString(b"v"))


def test_unknown_simple_string_is_rejected():
    with pytest.raises(ResponseError, match="unknown simple string"):
        parse_response(SimpleString("QUEUED"))


def test_array_is_rejected():
    with pytest.raises(ResponseError, match="array"):
        parse_response(Array([SimpleString("OK")]))


@pytest.mark.parametrize("response", [
    PongResponse(),
    OkResponse(),
    ErrorResponse("ERR unknown command: 'x'"),
    ErrorResponse(""),
    BulkStringResponse(None),
    BulkStringResponse(RedisString(b"")),
    BulkStringResponse(RedisString(b"\x00\r\n\xff")),
])
def test_response_round_trip(response):
    assert parse_response(response.to_resp()) == response


def test_wire_round_trip():
    for message in [SimpleString("PONG"), SimpleString("OK"), ErrorString("e"), BulkString(None), BulkString(b"x")]:
        assert parse_response(message).to_resp() == message


def test_bulk_string_response_normalizes_bytes():
    assert BulkStringResponse(b"abc") == BulkStringResponse(RedisString("abc"))
