"""
Pytest Fixtures for alpacalink Testing.

Usage:
    # In test files, fixtures are automatically available:
    @pytest.mark.asyncio
    async def test_connected(client, simulator):
        assert await client.get_connected("camera", 0) is True
        assert simulator.last_request.action == "connected"
"""

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer

from alpacalink.client import AlpacaClient
from tests.fixtures.alpaca_simulator import SIMULATOR_KEY, AlpacaSimulator, create_app


TEST_CLIENT_ID = 65535


@pytest_asyncio.fixture
async def alpaca_server():
    """
    Provide a running in-process Alpaca server.

    The server listens on 127.0.0.1 with a random free port.
    """
    server = TestServer(create_app(AlpacaSimulator()))
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def simulator(alpaca_server) -> AlpacaSimulator:
    """Provide the simulator state behind alpaca_server."""
    return alpaca_server.app[SIMULATOR_KEY]


@pytest_asyncio.fixture
async def client(alpaca_server):
    """Provide an AlpacaClient pointed at the simulator."""
    client = AlpacaClient(
        TEST_CLIENT_ID,
        secure=False,
        ip=alpaca_server.host,
        port=alpaca_server.port,
    )
    yield client
    await client.close()


@pytest_asyncio.fixture
async def strict_client(alpaca_server):
    """Provide an AlpacaClient that raises REST and device errors."""
    client = AlpacaClient(
        TEST_CLIENT_ID,
        ip=alpaca_server.host,
        port=alpaca_server.port,
        raise_on_error=True,
    )
    yield client
    await client.close()
