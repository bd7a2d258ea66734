"""
ASCOM Alpaca ObservingConditions device.

Weather and sky-quality sensors. Values are returned exactly as the server
reports them; range checks are left to the caller.

See https://ascom-standards.org/api/#/ObservingConditions%20Specific%20Methods
"""

from alpacalink.client import AlpacaResponse
from alpacalink.devices.base import AlpacaDevice


class ObservingConditions(AlpacaDevice):
    """
    Observing conditions adapter.

    Example:
        >>> conditions = ObservingConditions.create(65535, secure=True,
        ...                                         domain="alpaca.observerly.com")
        >>> cloud = await conditions.get_cloud_cover()
        >>> age = await conditions.get_time_since_last_update("CloudCover")
    """

    DEVICE_TYPE = "observingconditions"

    async def get_average_period(self) -> float:
        """Time period (hours) over which observations are averaged."""
        return await self._get_float("averageperiod")

    async def set_average_period(self, hours: float) -> AlpacaResponse:
        return await self._put("averageperiod", AveragePeriod=hours)

    async def get_cloud_cover(self) -> float:
        """Percentage of the sky obscured by cloud."""
        return await self._get_float("cloudcover")

    async def get_dew_point(self) -> float:
        """Atmospheric dew point in °C."""
        return await self._get_float("dewpoint")

    async def get_humidity(self) -> float:
        """Atmospheric humidity in percent."""
        return await self._get_float("humidity")

    async def get_pressure(self) -> float:
        """Pressure in hPa at the observatory altitude, not reduced to sea level."""
        return await self._get_float("pressure")

    async def get_rain_rate(self) -> float:
        """Rain rate in mm/hour."""
        return await self._get_float("rainrate")

    async def get_sky_brightness(self) -> float:
        """Sky brightness in Lux."""
        return await self._get_float("skybrightness")

    async def get_sky_quality(self) -> float:
        """Sky quality in magnitudes per square arc second."""
        return await self._get_float("skyquality")

    async def get_sky_temperature(self) -> float:
        """Sky temperature in °C."""
        return await self._get_float("skytemperature")

    async def get_seeing_star_fwhm(self) -> float:
        """Seeing as star full width half maximum, in arc seconds."""
        return await self._get_float("starfwhm")

    async def get_temperature(self) -> float:
        """Ambient temperature in °C."""
        return await self._get_float("temperature")

    async def get_wind_direction(self) -> float:
        """
        Wind direction in degrees.

        Measured clockwise from north (East=90, South=180, West=270,
        North=360); 0.0 is reserved for zero wind speed.
        """
        return await self._get_float("winddirection")

    async def get_wind_gust(self) -> float:
        """Peak 3 second gust in m/s over the last 2 minutes."""
        return await self._get_float("windgust")

    async def get_wind_speed(self) -> float:
        """Wind speed in m/s."""
        return await self._get_float("windspeed")

    async def refresh(self) -> AlpacaResponse:
        """Force the driver to re-read its sensors immediately."""
        return await self._put("refresh")

    async def get_sensor_description(self, sensor_name: str) -> str:
        return await self._get_string("sensordescription", SensorName=sensor_name)

    async def get_time_since_last_update(self, sensor_name: str) -> float:
        """Seconds since the named sensor was last updated."""
        return await self._get_float("timesincelastupdate", SensorName=sensor_name)
