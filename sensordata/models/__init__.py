from sensordata.database import Base
from .reading import Reading
from .device_info import DeviceInfo

__all__ = [
    "Base",
    "Reading",
    "DeviceInfo",
]
