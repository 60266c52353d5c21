"""
Exception hierarchy for the sensor data service.

"Not found" outcomes are never raised; they come back as
``{"success": False, "error": ...}`` results. Only conflicts and storage
errors travel as exceptions.
"""


class SensorDataError(Exception):
    """Root of the service exception hierarchy."""

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message


class DeviceAlreadyExists(SensorDataError):
    """A DeviceInfo row for the chip identifier is already registered."""

    def __init__(self, chip_id):
        super().__init__("Sensor already exists")
        self.chip_id = chip_id


class StorageFailure(SensorDataError):
    """The database rejected or failed a read or write."""
