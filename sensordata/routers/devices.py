from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sensordata.database import get_db
from sensordata.routers.responses import ChipIdPath, or_not_found
from sensordata.schemas.device import (
    DeviceCreate,
    DeviceUpdate,
    DeviceResult,
    DevicesResult,
    DevicesWithReadingsResult,
)
from sensordata import services

router = APIRouter(prefix="/api/v1/devices", tags=["devices"])

@router.get("", response_model=DevicesResult)
def list_devices(db: Session = Depends(get_db)):
    """Get all registered devices"""
    return or_not_found(services.list_devices(db))

@router.get("/readings", response_model=DevicesWithReadingsResult)
def list_devices_with_readings(
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    db: Session = Depends(get_db),
):
    """Get every device with its latest readings, optionally within a date range"""
    return services.list_devices_with_readings(db, date_from, date_to)

@router.post("", response_model=DeviceResult, status_code=201)
def register_device(device: DeviceCreate, db: Session = Depends(get_db)):
    """Register metadata for a chip"""
    return services.register_device(db, device.chip_id, device.name, device.location)

@router.put("/{chip_id}", response_model=DeviceResult)
def update_device(chip_id: ChipIdPath, device: DeviceUpdate, db: Session = Depends(get_db)):
    """Replace name and location of a device"""
    return or_not_found(services.update_device(db, chip_id, device.name, device.location))

@router.delete("/{chip_id}")
def delete_device(chip_id: ChipIdPath, db: Session = Depends(get_db)):
    """Delete a device; its readings are kept"""
    return or_not_found(services.delete_device(db, chip_id))
