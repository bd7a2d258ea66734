"""
ASCOM Alpaca Dome device.

Shutter, azimuth/altitude positioning, homing, parking and slaving to
the telescope.
"""

import logging
from enum import IntEnum
from typing import Union

from alpacalink.client import AlpacaResponse
from alpacalink.devices.base import AlpacaDevice

logger = logging.getLogger(__name__)


class ShutterState(IntEnum):
    """Shutter status as reported by shutterstatus."""
    OPEN = 0
    CLOSED = 1
    OPENING = 2
    CLOSING = 3
    ERROR = 4


class Dome(AlpacaDevice):
    """Dome adapter."""

    DEVICE_TYPE = "dome"

    # Position

    async def get_altitude(self) -> float:
        """Shutter altitude in degrees."""
        return await self._get_float("altitude")

    async def get_azimuth(self) -> float:
        """Dome azimuth in degrees, North=0, East=90."""
        return await self._get_float("azimuth")

    async def is_at_home(self) -> bool:
        return await self._get_bool("athome")

    async def is_at_park(self) -> bool:
        return await self._get_bool("atpark")

    async def is_slewing(self) -> bool:
        return await self._get_bool("slewing")

    async def is_slaved(self) -> bool:
        return await self._get_bool("slaved")

    async def get_shutter_status(self) -> Union[ShutterState, int]:
        return await self._get_enum("shutterstatus", ShutterState)

    # Capabilities

    async def can_find_home(self) -> bool:
        return await self._get_bool("canfindhome")

    async def can_park(self) -> bool:
        return await self._get_bool("canpark")

    async def can_set_altitude(self) -> bool:
        return await self._get_bool("cansetaltitude")

    async def can_set_azimuth(self) -> bool:
        return await self._get_bool("cansetazimuth")

    async def can_set_park(self) -> bool:
        return await self._get_bool("cansetpark")

    async def can_set_shutter(self) -> bool:
        return await self._get_bool("cansetshutter")

    async def can_slave(self) -> bool:
        return await self._get_bool("canslave")

    async def can_sync_azimuth(self) -> bool:
        return await self._get_bool("cansyncazimuth")

    # Commands

    async def set_slaved(self, slaved: bool) -> AlpacaResponse:
        return await self._put("slaved", Slaved=slaved)

    async def open_shutter(self) -> AlpacaResponse:
        response = await self._put("openshutter")
        if response.ok:
            logger.info("Opening dome shutter")
        return response

    async def close_shutter(self) -> AlpacaResponse:
        response = await self._put("closeshutter")
        if response.ok:
            logger.info("Closing dome shutter")
        return response

    async def abort_slew(self) -> AlpacaResponse:
        """Stop any dome movement, including the shutter."""
        return await self._put("abortslew")

    async def find_home(self) -> AlpacaResponse:
        return await self._put("findhome")

    async def park(self) -> AlpacaResponse:
        return await self._put("park")

    async def set_park(self) -> AlpacaResponse:
        """Make the current position the park position."""
        return await self._put("setpark")

    async def slew_to_altitude(self, altitude: float) -> AlpacaResponse:
        return await self._put("slewtoaltitude", Altitude=altitude)

    async def slew_to_azimuth(self, azimuth: float) -> AlpacaResponse:
        return await self._put("slewtoazimuth", Azimuth=azimuth)

    async def sync_to_azimuth(self, azimuth: float) -> AlpacaResponse:
        return await self._put("synctoazimuth", Azimuth=azimuth)
