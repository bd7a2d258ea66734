"""
ASCOM Alpaca Switch device.

A switch device groups MaxSwitch individual switches, addressed by a
0-based Id. Boolean switches use getswitch/setswitch; multi-state ones
use the value range methods.
"""

from alpacalink.client import AlpacaResponse
from alpacalink.devices.base import AlpacaDevice


class Switch(AlpacaDevice):
    """
    Switch adapter.

    Example:
        >>> switch = Switch(client, device_number=0)
        >>> for switch_id in range(await switch.get_max_switch()):
        ...     print(await switch.get_switch_name(switch_id))
        >>> await switch.set_switch(0, True)
    """

    DEVICE_TYPE = "switch"

    async def get_max_switch(self) -> int:
        """Number of switch devices managed by this driver."""
        return await self._get_int("maxswitch")

    async def can_write(self, switch_id: int) -> bool:
        return await self._get_bool("canwrite", Id=switch_id)

    async def get_switch(self, switch_id: int) -> bool:
        return await self._get_bool("getswitch", Id=switch_id)

    async def get_switch_description(self, switch_id: int) -> str:
        return await self._get_string("getswitchdescription", Id=switch_id)

    async def get_switch_name(self, switch_id: int) -> str:
        return await self._get_string("getswitchname", Id=switch_id)

    async def get_switch_value(self, switch_id: int) -> float:
        return await self._get_float("getswitchvalue", Id=switch_id)

    async def get_min_switch_value(self, switch_id: int) -> float:
        return await self._get_float("minswitchvalue", Id=switch_id)

    async def get_max_switch_value(self, switch_id: int) -> float:
        return await self._get_float("maxswitchvalue", Id=switch_id)

    async def get_switch_step(self, switch_id: int) -> float:
        return await self._get_float("switchstep", Id=switch_id)

    async def set_switch(self, switch_id: int, state: bool) -> AlpacaResponse:
        return await self._put("setswitch", Id=switch_id, State=state)

    async def set_switch_name(self, switch_id: int, name: str) -> AlpacaResponse:
        return await self._put("setswitchname", Id=switch_id, Name=name)

    async def set_switch_value(self, switch_id: int, value: float) -> AlpacaResponse:
        return await self._put("setswitchvalue", Id=switch_id, Value=value)
