"""
alpacalink - ASCOM Alpaca client library

Typed asyncio access to Alpaca devices (cameras, domes, switches,
observing conditions, telescopes) over the Alpaca REST API.

Architecture:
    - alpacalink.client: shared low-level client (URLs, identifiers,
      dispatch, envelope decoding, error capture)
    - alpacalink.devices: one declarative module per device type
    - alpacalink.config / logging_config: optional application glue
"""

__version__ = "0.1.0"

VERSION_INFO = (0, 1, 0)

from alpacalink.exceptions import (
    AlpacaError,
    AlpacaTransportError,
    MalformedResponseError,
    AlpacaRestError,
    AlpacaDeviceError,
    AscomErrorCode,
    ConfigurationError,
)

from alpacalink.client import (
    AlpacaClient,
    AlpacaResponse,
    resolve_url_base,
)

from alpacalink.devices import (
    AlpacaDevice,
    Camera,
    CameraState,
    Dome,
    ShutterState,
    ObservingConditions,
    Switch,
    Telescope,
    PierSide,
)
