import argparse
import asyncio
import os
import shlex
import sys

from resplite.client.resplite_client import RespClient
from resplite.commands.responses import (
    BulkStringResponse,
    CommandResponse,
    ErrorResponse,
    OkResponse,
    PongResponse,
)
from resplite.utils.constants import DEFAULT_HOST, DEFAULT_PORT


def format_response(response: CommandResponse) -> str:
    if isinstance(response, PongResponse):
        return "PONG"
    if isinstance(response, OkResponse):
        return "OK"
    if isinstance(response, ErrorResponse):
        return f"(error) {response.message}"
    if isinstance(response, BulkStringResponse):
        return "(nil)" if response.value is None else repr(response.value)
    return repr(response)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='resplite CLI')
    parser.add_argument('command', nargs='*', help='Command and its arguments')
    parser.add_argument('--host', help='Server host')
    parser.add_argument('--port', type=int, help='Server port')

    args = parser.parse_args(argv)
    args.host = args.host or os.environ.get('RESPLITE_HOST') or DEFAULT_HOST
    port = args.port or os.environ.get('RESPLITE_PORT') or DEFAULT_PORT
    try:
        args.port = int(port)
    except ValueError:
        parser.error(f'invalid port: {port!r}')
    return args


async def repl_shell(client: RespClient) -> None:
    loop = asyncio.get_running_loop()
    while True:
        try:
            line = await loop.run_in_executor(None, input, 'resplite> ')
        except EOFError:
            break
        if line.strip().lower() == 'quit':
            break
        try:
            words = shlex.split(line)
        except ValueError as e:
            print(f'(error) {e}')
            continue
        if not words:
            continue
        response = await client.execute(*words)
        print(format_response(response))


async def run(args: argparse.Namespace) -> None:
    async with await RespClient.connect(args.host, args.port) as client:
        if not args.command:
            await repl_shell(client)
        else:
            response = await client.execute(*args.command)
            print(format_response(response))


def main(argv=None) -> None:
    args = parse_args(argv)
    try:
        asyncio.run(run(args))
    except OSError as e:
        print(f'Error: could not talk to {args.host}:{args.port}: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
