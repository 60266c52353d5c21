"""
Shared fixtures: an in-memory SQLite database per test and an API client
bound to it.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sensordata.database import create_db_engine, get_db
from sensordata.main import create_app
from sensordata.models import Base, Reading, DeviceInfo

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


def make_reading(db, chip_id, created_at, temperature=21.5, humidity=40.0, pressure=1013.2):
    """Insert a reading with an explicit timestamp."""
    reading = Reading(
        chip_id=chip_id,
        temperature=temperature,
        humidity=humidity,
        pressure=pressure,
        created_at=created_at,
        updated_at=created_at,
    )
    db.add(reading)
    db.commit()
    db.refresh(reading)
    return reading


def make_device(db, chip_id, name="Sensor", location="Lab"):
    device = DeviceInfo(chip_id=chip_id, name=name, location=location)
    db.add(device)
    db.commit()
    return device


def at(minutes):
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(engine, session_factory):
    app = create_app(engine)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
