from typing import Union

from resplite.utils.constants import MAX_BULK_LENGTH

BytesLike = Union[bytes, bytearray, memoryview]


class RedisString:
    """
    Binary-safe string used for keys and values.

    Equality and hashing are byte-wise. ``str()`` and ``repr()`` are only
    diagnostic renderings: they show the bytes as UTF-8 where valid and fall
    back to replacement characters otherwise, without touching the stored data.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Union[BytesLike, str, "RedisString"] = b""):
        if isinstance(data, RedisString):
            data = data._data
        elif isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if len(data) > MAX_BULK_LENGTH:
            raise ValueError(f"string exceeds maximum length of {MAX_BULK_LENGTH} bytes")
        self._data = data

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def as_bytes(self) -> bytes:
        return self._data

    def to_str(self) -> str:
        """Strict UTF-8 decoding. Raises UnicodeDecodeError on invalid data."""
        return self._data.decode("utf-8")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RedisString):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return repr(str(self))
