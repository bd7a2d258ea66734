"""
ASCOM Alpaca Telescope device.

Mount position readout, tracking, slewing, syncing and parking. Only the
asynchronous slew endpoints are exposed; poll is_slewing() for completion.
"""

import logging
from enum import IntEnum
from typing import Union

from alpacalink.client import AlpacaResponse
from alpacalink.devices.base import AlpacaDevice

logger = logging.getLogger(__name__)


class PierSide(IntEnum):
    """Pointing state of a German equatorial mount."""
    UNKNOWN = -1
    EAST = 0
    WEST = 1


class Telescope(AlpacaDevice):
    """
    Telescope adapter.

    Example:
        >>> telescope = Telescope(client, device_number=0)
        >>> await telescope.slew_to_coordinates(12.5, 45.0)
        >>> while await telescope.is_slewing():
        ...     await asyncio.sleep(0.5)
    """

    DEVICE_TYPE = "telescope"

    # Position

    async def get_altitude(self) -> float:
        return await self._get_float("altitude")

    async def get_azimuth(self) -> float:
        return await self._get_float("azimuth")

    async def get_right_ascension(self) -> float:
        """Right ascension in hours."""
        return await self._get_float("rightascension")

    async def get_declination(self) -> float:
        """Declination in degrees."""
        return await self._get_float("declination")

    async def get_sidereal_time(self) -> float:
        """Local apparent sidereal time in hours."""
        return await self._get_float("siderealtime")

    async def get_side_of_pier(self) -> Union[PierSide, int]:
        return await self._get_enum("sideofpier", PierSide)

    # State

    async def is_at_home(self) -> bool:
        return await self._get_bool("athome")

    async def is_at_park(self) -> bool:
        return await self._get_bool("atpark")

    async def is_slewing(self) -> bool:
        return await self._get_bool("slewing")

    async def is_tracking(self) -> bool:
        return await self._get_bool("tracking")

    async def set_tracking(self, enabled: bool) -> AlpacaResponse:
        return await self._put("tracking", Tracking=enabled)

    # Capabilities

    async def can_park(self) -> bool:
        return await self._get_bool("canpark")

    async def can_slew(self) -> bool:
        return await self._get_bool("canslew")

    async def can_slew_async(self) -> bool:
        return await self._get_bool("canslewasync")

    async def can_sync(self) -> bool:
        return await self._get_bool("cansync")

    # Motion

    async def slew_to_coordinates(self, ra: float, dec: float) -> AlpacaResponse:
        """Start a slew to RA (hours) / Dec (degrees) and return immediately."""
        response = await self._put(
            "slewtocoordinatesasync", RightAscension=ra, Declination=dec
        )
        if response.ok:
            logger.info(f"Slewing to RA={ra:.4f}h, Dec={dec:.4f}°")
        return response

    async def slew_to_altaz(self, alt: float, az: float) -> AlpacaResponse:
        response = await self._put("slewtoaltazasync", Azimuth=az, Altitude=alt)
        if response.ok:
            logger.info(f"Slewing to Alt={alt:.2f}°, Az={az:.2f}°")
        return response

    async def sync_to_coordinates(self, ra: float, dec: float) -> AlpacaResponse:
        return await self._put("synctocoordinates", RightAscension=ra, Declination=dec)

    async def abort_slew(self) -> AlpacaResponse:
        return await self._put("abortslew")

    async def find_home(self) -> AlpacaResponse:
        return await self._put("findhome")

    async def park(self) -> AlpacaResponse:
        response = await self._put("park")
        if response.ok:
            logger.info("Parking telescope")
        return response

    async def unpark(self) -> AlpacaResponse:
        return await self._put("unpark")
