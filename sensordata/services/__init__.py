from .reading_store import (
    append_reading,
    recent_readings,
    range_readings,
    latest_per_device,
)
from .device_registry import (
    register_device,
    update_device,
    delete_device,
    list_devices,
    list_devices_with_readings,
)

__all__ = [
    "append_reading",
    "recent_readings",
    "range_readings",
    "latest_per_device",
    "register_device",
    "update_device",
    "delete_device",
    "list_devices",
    "list_devices_with_readings",
]
