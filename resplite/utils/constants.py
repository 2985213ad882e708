CRLF = b"\r\n"

SIMPLE_STRING_PREFIX = b"+"
ERROR_PREFIX = b"-"
BULK_STRING_PREFIX = b"$"
ARRAY_PREFIX = b"*"

NULL_BULK_STRING = b"$-1\r\n"
EMPTY_ARRAY = b"*0\r\n"

MAX_BULK_LENGTH = 512 * 1024 * 1024  # 512 MiB
MAX_ARRAY_DEPTH = 128
MAX_LENGTH_DIGITS = len(str(MAX_BULK_LENGTH))

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6379

PONG = "PONG"
OK = "OK"

UNKNOWN_COMMAND_ERROR = "ERR unknown command: {name}"
WRONG_ARITY_ERROR = "ERR wrong number of arguments for '{name}' command"
WRONG_ARGUMENT_ERROR = "ERR invalid {field} for '{name}' command: expected a bulk string"
PROTOCOL_ERROR = "ERR Protocol error: {reason}"
