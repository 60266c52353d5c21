from pydantic import BaseModel, Field, AliasChoices
from datetime import datetime
from typing import Optional, List

from sensordata.utils.validation import MIN_CHIP_ID, MAX_CHIP_ID

class ReadingCreate(BaseModel):
    chip_id: int = Field(
        validation_alias=AliasChoices("chip_id", "chipid"), ge=MIN_CHIP_ID, le=MAX_CHIP_ID
    )
    temperature: float
    humidity: float
    pressure: float

class ReadingData(BaseModel):
    id: int
    chip_id: int
    temperature: float
    humidity: float
    pressure: float
    created_at: datetime
    updated_at: datetime

class ReadingResponse(ReadingData):
    name: Optional[str] = None
    location: Optional[str] = None

class ReadingResult(BaseModel):
    success: bool = True
    reading: ReadingData

class ReadingsResult(BaseModel):
    success: bool = True
    readings: List[ReadingResponse]
