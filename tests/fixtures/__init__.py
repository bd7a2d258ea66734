"""
alpacalink Test Fixtures Package.

Provides an in-process Alpaca server so client and device tests run
without hardware or network access.

Available fixtures:
- AlpacaSimulator: device state, request log and failure injection
- create_app: aiohttp.web application serving the Alpaca device API

Usage:
    from tests.fixtures import AlpacaSimulator, create_app

    server = TestServer(create_app(AlpacaSimulator()))
    await server.start_server()
"""

from tests.fixtures.alpaca_simulator import (
    AlpacaSimulator,
    RecordedRequest,
    SIMULATOR_KEY,
    create_app,
    default_values,
)

__all__ = [
    "AlpacaSimulator",
    "RecordedRequest",
    "SIMULATOR_KEY",
    "create_app",
    "default_values",
]
