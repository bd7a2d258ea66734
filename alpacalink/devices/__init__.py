"""
ASCOM Alpaca device modules.

Each module binds a shared AlpacaClient to one device type and number and
maps Alpaca endpoints onto typed coroutine methods.
"""

from .base import AlpacaDevice
from .camera import Camera, CameraState
from .dome import Dome, ShutterState
from .observingconditions import ObservingConditions
from .switch import Switch
from .telescope import PierSide, Telescope

__all__ = [
    "AlpacaDevice",
    "Camera",
    "CameraState",
    "Dome",
    "ShutterState",
    "ObservingConditions",
    "Switch",
    "Telescope",
    "PierSide",
]
