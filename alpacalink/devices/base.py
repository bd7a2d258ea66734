"""
Base class for Alpaca device modules.

A device module binds one AlpacaClient to a device type and number and
exposes each Alpaca endpoint as a one-line method built on the typed
helpers below. Nothing here knows about HTTP; all of that lives in
alpacalink.client.
"""

import logging
from enum import IntEnum
from typing import Any, Optional, TypeVar, Union

from alpacalink.client import AlpacaClient, AlpacaResponse, UNUSED_PORT

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=IntEnum)


class AlpacaDevice:
    """
    Common behaviour of every Alpaca device.

    Subclasses set DEVICE_TYPE. The client is borrowed, not owned: several
    devices on the same server share one client and its transaction
    counter.

    Example:
        >>> client = AlpacaClient(65535, ip="192.168.1.100", port=11111)
        >>> dome = Dome(client, device_number=0)
        >>> await dome.set_connected(True)
        >>> print(await dome.get_description())
    """

    DEVICE_TYPE = ""

    def __init__(self, client: AlpacaClient, device_number: int = 0):
        if device_number < 0:
            raise ValueError(f"device_number must be non-negative, got {device_number}")
        self.client = client
        self.device_number = device_number

    @classmethod
    def create(
        cls,
        client_id: int,
        secure: bool = False,
        domain: str = "",
        ip: str = "",
        port: int = UNUSED_PORT,
        device_number: int = 0,
    ):
        """Build the device together with a dedicated client."""
        client = AlpacaClient(client_id, secure=secure, domain=domain, ip=ip, port=port)
        return cls(client, device_number)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(url_base={self.client.url_base!r}, "
            f"device_number={self.device_number})"
        )

    @property
    def url(self) -> str:
        """Endpoint prefix of this device, without an action."""
        return self.client.build_url(self.DEVICE_TYPE, self.device_number, "").rstrip("/")

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    async def _get_bool(self, action: str, **params: Any) -> bool:
        return await self.client.get_bool_response(
            self.DEVICE_TYPE, self.device_number, action, params or None
        )

    async def _get_int(self, action: str, **params: Any) -> int:
        return await self.client.get_int32_response(
            self.DEVICE_TYPE, self.device_number, action, params or None
        )

    async def _get_float(self, action: str, **params: Any) -> float:
        return await self.client.get_float64_response(
            self.DEVICE_TYPE, self.device_number, action, params or None
        )

    async def _get_string(self, action: str, **params: Any) -> str:
        return await self.client.get_string_response(
            self.DEVICE_TYPE, self.device_number, action, params or None
        )

    async def _get_enum(self, action: str, enum_class: type[E]) -> Union[E, int]:
        """int32 GET mapped onto enum_class; values it does not define come back as int."""
        value = await self._get_int(action)
        try:
            return enum_class(value)
        except ValueError:
            logger.debug(
                f"{self.DEVICE_TYPE}/{action} returned {value}, "
                f"not a {enum_class.__name__}"
            )
            return value

    async def _put(self, action: str, **form: Any) -> AlpacaResponse:
        return await self.client.put(
            self.DEVICE_TYPE, self.device_number, action, form or None
        )

    # ------------------------------------------------------------------
    # Methods common to all devices
    # ------------------------------------------------------------------

    async def is_connected(self) -> bool:
        """Connected state of the device."""
        return await self._get_bool("connected")

    async def set_connected(self, connected: bool) -> AlpacaResponse:
        """Connect to (True) or disconnect from (False) the device hardware."""
        response = await self._put("connected", Connected=connected)
        if response.ok:
            logger.info(
                f"{self.DEVICE_TYPE}/{self.device_number} "
                f"{'connected' if connected else 'disconnected'}"
            )
        return response

    async def get_description(self) -> str:
        return await self._get_string("description")

    async def get_name(self) -> str:
        return await self._get_string("name")

    async def get_driver_info(self) -> str:
        return await self._get_string("driverinfo")

    async def get_driver_version(self) -> str:
        return await self._get_string("driverversion")

    async def get_interface_version(self) -> int:
        return await self._get_int("interfaceversion")

    def last_error(self) -> Optional[tuple[int, str]]:
        """(error_number, error_message) of the shared client, or None."""
        if self.client.error_number == 0:
            return None
        return self.client.error_number, self.client.error_message
