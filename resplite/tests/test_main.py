import logging
from unittest.mock import MagicMock, patch

from resplite.main import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert (args.host, args.port, args.log_level) == ("127.0.0.1", 6379, "INFO")


def test_main_starts_server_on_requested_address():
    with patch("resplite.main.asyncio.run") as run, patch("resplite.main.start", new_callable=MagicMock) as start, \
            patch("resplite.main.logging.basicConfig") as basic_config:
        main(["--host", "0.0.0.0", "--port", "7000", "--log-level", "DEBUG"])
    start.assert_called_once_with("0.0.0.0:7000")
    run.assert_called_once_with(start.return_value)
    basic_config.assert_called_once_with(level=logging.DEBUG)
