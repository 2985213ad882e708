import pytest

from resplite.utils.redis_string import RedisString


def test_construction_from_text_and_bytes():
    assert RedisString("hello") == RedisString(b"hello")
    assert RedisString(bytearray(b"hello")) == RedisString(b"hello")
    assert RedisString(memoryview(b"hello")) == RedisString(b"hello")
    assert RedisString(RedisString(b"hello")) == RedisString(b"hello")
    assert RedisString() == RedisString(b"")


def test_length_and_bytes():
    s = RedisString("héllo")
    assert len(s) == 6
    assert bytes(s) == "héllo".encode("utf-8")
    assert s.as_bytes() == bytes(s)
    assert len(RedisString(b"")) == 0


def test_equality_and_hash_are_bytewise():
    a = RedisString(b"a\r\nb\x00")
    b = RedisString(bytearray(b"a\r\nb\x00"))
    assert a == b
    assert hash(a) == hash(b)
    assert {a: 1}[b] == 1
    assert RedisString(b"a") != RedisString(b"A")
    # A RedisString is not interchangeable with raw bytes.
    assert RedisString(b"a") != b"a"


def test_diagnostic_rendering():
    assert str(RedisString("hello")) == "hello"
    assert repr(RedisString("hello")) == "'hello'"

    s = RedisString(bytes([ord("h"), ord("i"), 0xFF, 0x00]))
    assert str(s) == "hi�\x00"
    assert repr(s) == "'hi�\\x00'"
    # Rendering never changes the stored content.
    assert bytes(s) == b"hi\xff\x00"


def test_to_str_is_strict():
    assert RedisString(b"ok").to_str() == "ok"
    with pytest.raises(UnicodeDecodeError):
        RedisString(b"\xff").to_str()
