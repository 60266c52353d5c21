from .reading import ReadingCreate, ReadingData, ReadingResponse, ReadingResult, ReadingsResult
from .device import (
    DeviceCreate,
    DeviceUpdate,
    DeviceResponse,
    DeviceWithReadings,
    DeviceResult,
    DevicesResult,
    DevicesWithReadingsResult,
)

__all__ = [
    "ReadingCreate",
    "ReadingData",
    "ReadingResponse",
    "ReadingResult",
    "ReadingsResult",
    "DeviceCreate",
    "DeviceUpdate",
    "DeviceResponse",
    "DeviceWithReadings",
    "DeviceResult",
    "DevicesResult",
    "DevicesWithReadingsResult",
]
