"""
Device registry: metadata lifecycle for chip identifiers
"""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Dict, Any, List, Optional
import logging
from datetime import datetime

from sensordata.exceptions import DeviceAlreadyExists, StorageFailure
from sensordata.models.reading import Reading
from sensordata.models.device_info import DeviceInfo
from sensordata.services.reading_store import reading_to_dict
from sensordata.utils.timestamps import utcnow, to_naive_utc

logger = logging.getLogger(__name__)

MAX_READINGS_PER_DEVICE = 1000

def device_to_dict(device: DeviceInfo) -> Dict[str, Any]:
    return {
        "chip_id": device.chip_id,
        "name": device.name,
        "location": device.location,
    }

def _get_device(db: Session, chip_id: int) -> Optional[DeviceInfo]:
    return db.query(DeviceInfo).filter(DeviceInfo.chip_id == chip_id).first()

def register_device(db: Session, chip_id: int, name: str, location: str) -> Dict[str, Any]:
    """Create metadata for a chip, raising DeviceAlreadyExists if it is already registered"""
    if name is None or location is None:
        raise ValueError("name and location are required to register a device")

    try:
        if _get_device(db, chip_id):
            raise DeviceAlreadyExists(chip_id)

        device = DeviceInfo(chip_id=chip_id, name=name, location=location)
        db.add(device)
        db.commit()
        db.refresh(device)
    except IntegrityError as e:
        # a concurrent registration won the primary key
        db.rollback()
        logger.info(f"Registration conflict for chip {chip_id}")
        raise DeviceAlreadyExists(chip_id) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error inserting sensor info for chip {chip_id}: {str(e)}")
        raise StorageFailure("Error inserting data") from e

    logger.info(f"Registered chip {chip_id} as {name!r} at {location!r}")
    return {"success": True, "device": device_to_dict(device)}

def update_device(db: Session, chip_id: int, name: Optional[str], location: Optional[str]) -> Dict[str, Any]:
    """Replace name and location of a registered chip"""
    try:
        device = _get_device(db, chip_id)
        if not device:
            return {"success": False, "error": "Sensor not found"}

        device.name = name
        device.location = location
        db.commit()
        db.refresh(device)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating sensor info for chip {chip_id}: {str(e)}")
        raise StorageFailure("Error updating data") from e

    logger.info(f"Updated chip {chip_id}: name={name!r} location={location!r}")
    return {"success": True, "device": device_to_dict(device)}

def delete_device(db: Session, chip_id: int) -> Dict[str, Any]:
    """Remove a chip's metadata; its readings stay in place"""
    try:
        deleted = (
            db.query(DeviceInfo)
            .filter(DeviceInfo.chip_id == chip_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting sensor info for chip {chip_id}: {str(e)}")
        raise StorageFailure("Error deleting data") from e

    if not deleted:
        return {"success": False, "error": "Sensor not found"}

    logger.info(f"Deleted chip {chip_id}")
    return {"success": True}

def list_devices(db: Session) -> Dict[str, Any]:
    """All registered devices; an empty registry is reported as not found"""
    try:
        devices = db.query(DeviceInfo).order_by(DeviceInfo.chip_id).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error getting sensors info: {str(e)}")
        raise StorageFailure("Error getting data") from e

    if not devices:
        return {"success": False, "error": "Sensors not found"}
    return {"success": True, "devices": [device_to_dict(device) for device in devices]}

def list_devices_with_readings(db: Session, date_from: Optional[datetime] = None,
                               date_to: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Every registered device with its most recent readings attached.

    Each device carries up to MAX_READINGS_PER_DEVICE readings, newest first,
    restricted to [date_from, date_to] when date_from is given (date_to then
    defaults to now). Devices without matching readings get an empty list.
    """
    date_from = to_naive_utc(date_from)
    date_to = to_naive_utc(date_to)
    if date_from is not None and date_to is None:
        date_to = utcnow()

    ranked = db.query(
        Reading.id.label("reading_id"),
        func.row_number().over(
            partition_by=Reading.chip_id,
            order_by=(Reading.created_at.desc(), Reading.id.desc()),
        ).label("position"),
    )
    if date_from is not None:
        ranked = ranked.filter(Reading.created_at.between(date_from, date_to))
    elif date_to is not None:
        ranked = ranked.filter(Reading.created_at <= date_to)
    ranked = ranked.subquery()

    try:
        devices = db.query(DeviceInfo).order_by(DeviceInfo.chip_id).all()
        readings = (
            db.query(Reading)
            .join(ranked, ranked.c.reading_id == Reading.id)
            .join(DeviceInfo, DeviceInfo.chip_id == Reading.chip_id)
            .filter(ranked.c.position <= MAX_READINGS_PER_DEVICE)
            .order_by(Reading.chip_id, Reading.created_at.desc(), Reading.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error getting sensors with readings: {str(e)}")
        raise StorageFailure("Error getting data") from e

    by_chip: Dict[int, List[Dict[str, Any]]] = {}
    for reading in readings:
        by_chip.setdefault(reading.chip_id, []).append(reading_to_dict(reading, with_device=False))

    out = []
    for device in devices:
        entry = device_to_dict(device)
        entry["readings"] = by_chip.get(device.chip_id, [])
        out.append(entry)
    return {"success": True, "devices": out}
