import pytest_asyncio

from resplite.AsyncServer import AsyncServer


@pytest_asyncio.fixture
async def running_server():
    """A server bound to an ephemeral port on localhost."""
    server = AsyncServer("127.0.0.1", 0)
    await server.start()
    yield server
    await server.stop()
