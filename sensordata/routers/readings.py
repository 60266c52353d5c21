from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sensordata.database import get_db
from sensordata.routers.responses import ChipIdPath, or_not_found
from sensordata.schemas.reading import ReadingCreate, ReadingResult, ReadingsResult
from sensordata import services

router = APIRouter(prefix="/api/v1/readings", tags=["readings"])

# ---------- Ingest: one measurement from a device ----------
@router.post("", response_model=ReadingResult, status_code=201)
def append_reading(payload: ReadingCreate, db: Session = Depends(get_db)):
    """Store a reading, registered or not"""
    return services.append_reading(
        db, payload.chip_id, payload.temperature, payload.humidity, payload.pressure
    )

# ---------- Latest reading of every registered device ----------
@router.get("/latest", response_model=ReadingsResult)
def latest_readings(db: Session = Depends(get_db)):
    return or_not_found(services.latest_per_device(db))

# ---------- Most recent readings of one chip ----------
@router.get("/{chip_id}", response_model=ReadingsResult)
def recent_readings(chip_id: ChipIdPath, limit: Optional[str] = None, db: Session = Depends(get_db)):
    """limit is taken as raw text; anything unusable falls back to 1"""
    return or_not_found(services.recent_readings(db, chip_id, limit))

# ---------- Readings of one chip between two dates ----------
@router.get("/{chip_id}/range", response_model=ReadingsResult)
def range_readings(
    chip_id: ChipIdPath,
    date_from: datetime,
    date_to: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    return or_not_found(services.range_readings(db, chip_id, date_from, date_to))
