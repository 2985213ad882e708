import argparse
import asyncio
import logging

from resplite.AsyncServer import start
from resplite.utils.constants import DEFAULT_HOST, DEFAULT_PORT


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the RESP key/value server.")
    parser.add_argument('--host', type=str, default=DEFAULT_HOST, help='Address to bind')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT, help='Port to run the server on')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        asyncio.run(start(f"{args.host}:{args.port}"))
    except KeyboardInterrupt:
        logging.info("Server interrupted")


if __name__ == "__main__":
    main()
