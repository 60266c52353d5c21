"""
Reading store: append-only writes and time-ordered queries over sensor readings
"""
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
import logging
from datetime import datetime

from sensordata.exceptions import StorageFailure
from sensordata.models.reading import Reading
from sensordata.models.device_info import DeviceInfo
from sensordata.utils.timestamps import utcnow, to_naive_utc
from sensordata.utils.validation import coerce_limit

logger = logging.getLogger(__name__)

NOT_FOUND = "Sensor not found"

def reading_to_dict(reading: Reading, name: Optional[str] = None, location: Optional[str] = None,
                    with_device: bool = True) -> Dict[str, Any]:
    data = {
        "id": reading.id,
        "chip_id": reading.chip_id,
        "temperature": reading.temperature,
        "humidity": reading.humidity,
        "pressure": reading.pressure,
        "created_at": reading.created_at,
        "updated_at": reading.updated_at,
    }
    if with_device:
        data["name"] = name
        data["location"] = location
    return data

def _newest_first(query, model=Reading):
    # id breaks ties between readings sharing a timestamp
    return query.order_by(model.created_at.desc(), model.id.desc())

def _hydrated(db: Session):
    """Readings left-joined with the device display fields"""
    return (
        db.query(Reading, DeviceInfo.name, DeviceInfo.location)
        .outerjoin(DeviceInfo, DeviceInfo.chip_id == Reading.chip_id)
    )

def _readings_result(rows) -> Dict[str, Any]:
    if not rows:
        return {"success": False, "error": NOT_FOUND}
    return {
        "success": True,
        "readings": [reading_to_dict(reading, name, location) for reading, name, location in rows],
    }

def append_reading(db: Session, chip_id: int, temperature: float, humidity: float, pressure: float) -> Dict[str, Any]:
    """Store a new reading; chips without registered metadata are accepted"""
    now = utcnow()
    reading = Reading(
        chip_id=chip_id,
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(reading)
        db.commit()
        db.refresh(reading)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error inserting sensor data for chip {chip_id}: {str(e)}")
        raise StorageFailure("Error inserting data") from e

    logger.debug(f"Stored reading {reading.id} for chip {chip_id}")
    return {"success": True, "reading": reading_to_dict(reading, with_device=False)}

def recent_readings(db: Session, chip_id: int, limit: Any = None) -> Dict[str, Any]:
    """Newest readings for a chip, at most 100"""
    limit = coerce_limit(limit)
    try:
        rows = (
            _newest_first(_hydrated(db).filter(Reading.chip_id == chip_id))
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error getting sensor data for chip {chip_id}: {str(e)}")
        raise StorageFailure("Error getting data") from e

    if not rows:
        logger.debug(f"No readings for chip {chip_id}")
    return _readings_result(rows)

def range_readings(db: Session, chip_id: int, date_from: datetime, date_to: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Readings for a chip with created_at between date_from and date_to, both inclusive.

    date_to defaults to now. The result is not limited, so wide ranges on
    chatty devices return every matching row.
    """
    date_from = to_naive_utc(date_from)
    date_to = to_naive_utc(date_to) or utcnow()
    try:
        rows = _newest_first(
            _hydrated(db).filter(
                Reading.chip_id == chip_id,
                Reading.created_at.between(date_from, date_to),
            )
        ).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error getting sensor data for chip {chip_id} between {date_from} and {date_to}: {str(e)}")
        raise StorageFailure("Error getting data") from e

    return _readings_result(rows)

def latest_per_device(db: Session) -> Dict[str, Any]:
    """
    Most recent reading of every registered chip.

    One row per chip: the greatest created_at, and among readings sharing it
    the one inserted last (greatest id). Chips without DeviceInfo are left
    out. Runs as a single statement, so readings committed while it executes
    may or may not be seen.
    """
    ranked = (
        db.query(
            Reading.id.label("reading_id"),
            func.row_number().over(
                partition_by=Reading.chip_id,
                order_by=(Reading.created_at.desc(), Reading.id.desc()),
            ).label("position"),
        )
        .subquery()
    )
    try:
        rows = (
            db.query(Reading, DeviceInfo.name, DeviceInfo.location)
            .join(ranked, ranked.c.reading_id == Reading.id)
            .join(DeviceInfo, DeviceInfo.chip_id == Reading.chip_id)
            .filter(ranked.c.position == 1)
            .order_by(Reading.chip_id)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error getting latest sensor data: {str(e)}")
        raise StorageFailure("Error getting data") from e

    return _readings_result(rows)
