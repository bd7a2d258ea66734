"""
ASCOM Alpaca Camera device.

Covers capability flags, sensor geometry, cooling, gain and exposure
control. Image download (imagearray) is not a primitive envelope value
and is not exposed here.
"""

import logging
from enum import IntEnum
from typing import Union

from alpacalink.client import AlpacaResponse
from alpacalink.devices.base import AlpacaDevice

logger = logging.getLogger(__name__)


class CameraState(IntEnum):
    """Camera operational state as reported by camerastate."""
    IDLE = 0
    WAITING = 1
    EXPOSING = 2
    READING = 3
    DOWNLOAD = 4
    ERROR = 5


class Camera(AlpacaDevice):
    """
    Camera adapter.

    Example:
        >>> camera = Camera(client, device_number=0)
        >>> await camera.set_connected(True)
        >>> await camera.start_exposure(30.0, light=True)
        >>> while not await camera.is_image_ready():
        ...     await asyncio.sleep(1.0)
    """

    DEVICE_TYPE = "camera"

    # Capabilities

    async def can_abort_exposure(self) -> bool:
        return await self._get_bool("canabortexposure")

    async def can_asymmetric_bin(self) -> bool:
        return await self._get_bool("canasymmetricbin")

    async def can_fast_readout(self) -> bool:
        return await self._get_bool("canfastreadout")

    async def can_get_cooler_power(self) -> bool:
        return await self._get_bool("cangetcoolerpower")

    async def can_pulse_guide(self) -> bool:
        return await self._get_bool("canpulseguide")

    async def can_set_ccd_temperature(self) -> bool:
        return await self._get_bool("cansetccdtemperature")

    async def can_stop_exposure(self) -> bool:
        return await self._get_bool("canstopexposure")

    # Sensor geometry

    async def get_bayer_offset_x(self) -> int:
        return await self._get_int("bayeroffsetx")

    async def get_bayer_offset_y(self) -> int:
        return await self._get_int("bayeroffsety")

    async def get_ccd_size_x(self) -> int:
        """Width of the sensor in unbinned pixels."""
        return await self._get_int("cameraxsize")

    async def get_ccd_size_y(self) -> int:
        """Height of the sensor in unbinned pixels."""
        return await self._get_int("cameraysize")

    async def get_pixel_size_x(self) -> float:
        """Pixel width in microns."""
        return await self._get_float("pixelsizex")

    async def get_pixel_size_y(self) -> float:
        return await self._get_float("pixelsizey")

    async def get_sensor_name(self) -> str:
        return await self._get_string("sensorname")

    # Binning

    async def get_bin_x(self) -> int:
        return await self._get_int("binx")

    async def set_bin_x(self, bin_x: int) -> AlpacaResponse:
        return await self._put("binx", BinX=bin_x)

    async def get_bin_y(self) -> int:
        return await self._get_int("biny")

    async def set_bin_y(self, bin_y: int) -> AlpacaResponse:
        return await self._put("biny", BinY=bin_y)

    async def get_max_bin_x(self) -> int:
        return await self._get_int("maxbinx")

    async def get_max_bin_y(self) -> int:
        return await self._get_int("maxbiny")

    # Cooling

    async def get_ccd_temperature(self) -> float:
        """Current sensor temperature in °C."""
        return await self._get_float("ccdtemperature")

    async def get_set_ccd_temperature(self) -> float:
        """Cooler setpoint in °C."""
        return await self._get_float("setccdtemperature")

    async def set_ccd_temperature(self, celsius: float) -> AlpacaResponse:
        return await self._put("setccdtemperature", SetCCDTemperature=celsius)

    async def is_cooler_on(self) -> bool:
        return await self._get_bool("cooleron")

    async def set_cooler_on(self, enabled: bool) -> AlpacaResponse:
        return await self._put("cooleron", CoolerOn=enabled)

    async def get_cooler_power_level(self) -> float:
        """Cooler power in percent."""
        return await self._get_float("coolerpower")

    # Readout characteristics

    async def get_gain(self) -> int:
        return await self._get_int("gain")

    async def set_gain(self, gain: int) -> AlpacaResponse:
        return await self._put("gain", Gain=gain)

    async def get_gain_in_electrons_per_ad_unit(self) -> float:
        return await self._get_float("electronsperadu")

    async def get_full_well_capacity(self) -> float:
        """Full well capacity in electrons at the current binning."""
        return await self._get_float("fullwellcapacity")

    async def get_max_adu(self) -> int:
        return await self._get_int("maxadu")

    async def is_fast_readout_enabled(self) -> bool:
        return await self._get_bool("fastreadout")

    async def set_fast_readout(self, enabled: bool) -> AlpacaResponse:
        return await self._put("fastreadout", FastReadout=enabled)

    # Exposure

    async def get_exposure_max(self) -> float:
        """Maximum exposure time in seconds."""
        return await self._get_float("exposuremax")

    async def get_exposure_min(self) -> float:
        """Minimum exposure time in seconds."""
        return await self._get_float("exposuremin")

    async def get_exposure_resolution(self) -> float:
        return await self._get_float("exposureresolution")

    async def get_operational_state(self) -> Union[CameraState, int]:
        """
        Current camera state.

        A REST or device error yields the zero value, i.e. CameraState.IDLE;
        check client.error_number when the distinction matters. A state
        outside CameraState is returned as the raw int.
        """
        return await self._get_enum("camerastate", CameraState)

    async def get_percent_completed(self) -> int:
        return await self._get_int("percentcompleted")

    async def is_image_ready(self) -> bool:
        return await self._get_bool("imageready")

    async def start_exposure(self, duration: float, light: bool = True) -> AlpacaResponse:
        """
        Start an exposure.

        Args:
            duration: Exposure time in seconds
            light: True for a light frame, False for a dark frame
        """
        response = await self._put("startexposure", Duration=duration, Light=light)
        if response.ok:
            logger.info(f"Started {duration}s {'light' if light else 'dark'} exposure")
        return response

    async def abort_exposure(self) -> AlpacaResponse:
        """Abort the exposure and discard the image."""
        return await self._put("abortexposure")

    async def stop_exposure(self) -> AlpacaResponse:
        """Stop the exposure early and read out the image."""
        return await self._put("stopexposure")
