"""
RESP (REdis Serialization Protocol) codec.

Messages are one of four variants: SimpleString, ErrorString, BulkString
(possibly null) and Array. Decoding reads exactly one frame from an
asyncio.StreamReader; encoding always produces the canonical wire form.
"""
import asyncio
from dataclasses import dataclass
from typing import List, Optional, Union

from resplite.utils.constants import (
    ARRAY_PREFIX,
    BULK_STRING_PREFIX,
    CRLF,
    ERROR_PREFIX,
    MAX_ARRAY_DEPTH,
    MAX_BULK_LENGTH,
    MAX_LENGTH_DIGITS,
    NULL_BULK_STRING,
    SIMPLE_STRING_PREFIX,
)


class ProtocolError(ValueError):
    """Raised when the byte stream is not valid RESP."""


def _check_line_text(value: str, kind: str) -> None:
    if "\r" in value or "\n" in value:
        raise ValueError(f"{kind} must not contain CR or LF: {value!r}")


@dataclass
class SimpleString:
    value: str

    def __post_init__(self):
        _check_line_text(self.value, "simple string")

    def encode(self) -> bytes:
        return SIMPLE_STRING_PREFIX + self.value.encode("utf-8") + CRLF


@dataclass
class ErrorString:
    value: str

    def __post_init__(self):
        _check_line_text(self.value, "error string")

    def encode(self) -> bytes:
        return ERROR_PREFIX + self.value.encode("utf-8") + CRLF


@dataclass
class BulkString:
    """A length-prefixed binary-safe string. ``None`` is the null bulk string."""
    value: Optional[bytes]

    def __post_init__(self):
        if isinstance(self.value, str):
            self.value = self.value.encode("utf-8")
        elif self.value is not None and not isinstance(self.value, bytes):
            self.value = bytes(self.value)

    @property
    def is_null(self) -> bool:
        return self.value is None

    def encode(self) -> bytes:
        if self.value is None:
            return NULL_BULK_STRING
        return b"%s%d%s%s%s" % (BULK_STRING_PREFIX, len(self.value), CRLF, self.value, CRLF)


@dataclass
class Array:
    items: List["Message"]

    def encode(self) -> bytes:
        parts = [b"%s%d%s" % (ARRAY_PREFIX, len(self.items), CRLF)]
        parts.extend(item.encode() for item in self.items)
        return b"".join(parts)


Message = Union[SimpleString, ErrorString, BulkString, Array]


def encode(message: Message) -> bytes:
    return message.encode()


async def write_message(writer: asyncio.StreamWriter, message: Message) -> None:
    writer.write(message.encode())
    await writer.drain()


async def read_message(reader: asyncio.StreamReader) -> Optional[Message]:
    """
    Read one message from the stream.

    Returns None if the stream ended cleanly before the first byte of a new
    frame. A frame that starts but cannot be completed raises ProtocolError.
    """
    line = await _read_line(reader)
    if line is None:
        return None
    return await _parse_frame(reader, line, 0)


async def _read_line(reader: asyncio.StreamReader) -> Optional[bytes]:
    try:
        line = await reader.readuntil(b"\n")
    except asyncio.IncompleteReadError as e:
        if not e.partial:
            return None
        raise ProtocolError(f"unexpected end of stream in header {e.partial!r}") from e
    except asyncio.LimitOverrunError as e:
        raise ProtocolError("header line too long") from e

    if not line.endswith(CRLF):
        raise ProtocolError(f"header line must end with CRLF: {line!r}")
    body = line[:-2]
    if b"\r" in body:
        raise ProtocolError(f"unexpected CR in header line: {line!r}")
    return body


async def _parse_frame(reader: asyncio.StreamReader, line: bytes, depth: int) -> Message:
    prefix, payload = line[:1], line[1:]
    if prefix == SIMPLE_STRING_PREFIX:
        return SimpleString(_decode_text(payload))
    if prefix == ERROR_PREFIX:
        return ErrorString(_decode_text(payload))
    if prefix == BULK_STRING_PREFIX:
        return await _parse_bulk_string(reader, payload)
    if prefix == ARRAY_PREFIX:
        return await _parse_array(reader, payload, depth)
    if not prefix:
        raise ProtocolError("empty header line")
    raise ProtocolError(f"invalid message type byte {prefix!r}")


def _decode_text(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocolError(f"simple string is not valid UTF-8: {payload!r}") from e


def _parse_length(payload: bytes, kind: str) -> int:
    # Leading zeros are tolerated on input; output is always canonical.
    if len(payload) > MAX_LENGTH_DIGITS:
        raise ProtocolError(f"{kind} length has more than {MAX_LENGTH_DIGITS} digits")
    if not payload.isdigit():
        raise ProtocolError(f"invalid {kind} length {payload!r}")
    return int(payload)


async def _parse_bulk_string(reader: asyncio.StreamReader, payload: bytes) -> BulkString:
    if payload == b"-1":
        return BulkString(None)
    length = _parse_length(payload, "bulk string")
    if length > MAX_BULK_LENGTH:
        raise ProtocolError(f"bulk string length {length} exceeds {MAX_BULK_LENGTH}")

    try:
        data = await reader.readexactly(length + 2)
    except asyncio.IncompleteReadError as e:
        raise ProtocolError(f"truncated bulk string: expected {length} bytes") from e
    if data[-2:] != CRLF:
        raise ProtocolError("bulk string must be terminated by CRLF")
    return BulkString(data[:-2])


async def _parse_array(reader: asyncio.StreamReader, payload: bytes, depth: int) -> Array:
    length = _parse_length(payload, "array")
    if depth >= MAX_ARRAY_DEPTH:
        raise ProtocolError(f"arrays nested deeper than {MAX_ARRAY_DEPTH}")

    items = []
    for i in range(length):
        line = await _read_line(reader)
        if line is None:
            raise ProtocolError(f"truncated array element {i}")
        items.append(await _parse_frame(reader, line, depth + 1))
    return Array(items)
