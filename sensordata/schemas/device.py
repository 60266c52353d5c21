from pydantic import BaseModel, Field, AliasChoices
from typing import Optional, List

from sensordata.utils.validation import MIN_CHIP_ID, MAX_CHIP_ID

from .reading import ReadingData

class DeviceCreate(BaseModel):
    chip_id: int = Field(
        validation_alias=AliasChoices("chip_id", "chipid"), ge=MIN_CHIP_ID, le=MAX_CHIP_ID
    )
    name: str
    location: str

class DeviceUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None

class DeviceResponse(BaseModel):
    chip_id: int
    name: Optional[str] = None
    location: Optional[str] = None

class DeviceWithReadings(DeviceResponse):
    readings: List[ReadingData] = []

class DeviceResult(BaseModel):
    success: bool = True
    device: DeviceResponse

class DevicesResult(BaseModel):
    success: bool = True
    devices: List[DeviceResponse]

class DevicesWithReadingsResult(BaseModel):
    success: bool = True
    devices: List[DeviceWithReadings]
