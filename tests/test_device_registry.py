"""
Tests for sensordata/services/device_registry.py
"""
from datetime import timedelta

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sensordata.database import create_db_engine
from sensordata.exceptions import DeviceAlreadyExists, StorageFailure
from sensordata.models import DeviceInfo, Reading
from sensordata.services import device_registry
from sensordata.services.device_registry import (
    register_device,
    update_device,
    delete_device,
    list_devices,
    list_devices_with_readings,
    MAX_READINGS_PER_DEVICE,
)
from sensordata.services.reading_store import recent_readings
from sensordata.utils.timestamps import utcnow
from tests.conftest import make_reading, make_device, at


class TestRegisterDevice:

    def test_creates_device(self, db):
        result = register_device(db, 5, "Kitchen", "Ground floor")

        assert result == {
            "success": True,
            "device": {"chip_id": 5, "name": "Kitchen", "location": "Ground floor"},
        }
        assert db.query(DeviceInfo).count() == 1

    def test_duplicate_raises_and_keeps_original(self, db):
        register_device(db, 5, "A", "X")

        with pytest.raises(DeviceAlreadyExists) as excinfo:
            register_device(db, 5, "B", "Y")

        assert excinfo.value.chip_id == 5
        assert list_devices(db)["devices"] == [{"chip_id": 5, "name": "A", "location": "X"}]

    def test_lost_race_is_reported_as_already_exists(self, db, session_factory, monkeypatch):
        # another request registers the chip after our existence check
        other = session_factory()
        register_device(other, 5, "Winner", "X")
        other.close()
        monkeypatch.setattr(device_registry, "_get_device", lambda db, chip_id: None)

        with pytest.raises(DeviceAlreadyExists):
            register_device(db, 5, "Loser", "Y")

        db.expire_all()
        assert db.query(DeviceInfo).filter(DeviceInfo.chip_id == 5).one().name == "Winner"

    @pytest.mark.parametrize("name,location", [(None, "X"), ("A", None)])
    def test_name_and_location_are_required(self, db, name, location):
        with pytest.raises(ValueError):
            register_device(db, 5, name, location)


class TestUpdateDevice:

    def test_replaces_both_fields(self, db):
        make_device(db, 5, name="A", location="X")

        result = update_device(db, 5, "B", None)

        assert result["device"] == {"chip_id": 5, "name": "B", "location": None}

    def test_unknown_chip_is_not_found(self, db):
        assert update_device(db, 999, "A", "X") == {"success": False, "error": "Sensor not found"}


class TestDeleteDevice:

    def test_removes_device_but_keeps_readings(self, db):
        make_device(db, 5)
        make_reading(db, 5, at(0))

        assert delete_device(db, 5) == {"success": True}

        assert db.query(DeviceInfo).count() == 0
        assert db.query(Reading).count() == 1
        remaining = recent_readings(db, 5, 1)["readings"][0]
        assert remaining["name"] is None

    def test_unknown_chip_is_not_found(self, db):
        assert delete_device(db, 999) == {"success": False, "error": "Sensor not found"}


class TestListDevices:

    def test_empty_registry_is_not_found(self, db):
        assert list_devices(db) == {"success": False, "error": "Sensors not found"}

    def test_lists_metadata_only(self, db):
        make_device(db, 2, name="B", location="Y")
        make_device(db, 1, name="A", location="X")

        result = list_devices(db)

        assert result["devices"] == [
            {"chip_id": 1, "name": "A", "location": "X"},
            {"chip_id": 2, "name": "B", "location": "Y"},
        ]


class TestListDevicesWithReadings:

    def test_every_device_appears(self, db):
        make_device(db, 1)
        make_device(db, 2)
        make_reading(db, 1, at(0))
        make_reading(db, 1, at(1))

        result = list_devices_with_readings(db)

        assert result["success"] is True
        by_chip = {d["chip_id"]: d for d in result["devices"]}
        assert [r["created_at"] for r in by_chip[1]["readings"]] == [at(1), at(0)]
        assert by_chip[2]["readings"] == []

    def test_unregistered_readings_are_excluded(self, db):
        make_device(db, 1)
        make_reading(db, 42, at(0))

        result = list_devices_with_readings(db)

        assert [d["chip_id"] for d in result["devices"]] == [1]
        assert result["devices"][0]["readings"] == []

    def test_date_range_is_inclusive(self, db):
        make_device(db, 1)
        for minute in (0, 5, 10, 15):
            make_reading(db, 1, at(minute))

        result = list_devices_with_readings(db, at(5), at(10))

        stamps = [r["created_at"] for r in result["devices"][0]["readings"]]
        assert stamps == [at(10), at(5)]

    def test_lower_bound_only_ends_now(self, db):
        make_device(db, 1)
        past = make_reading(db, 1, at(0))
        make_reading(db, 1, utcnow() + timedelta(days=1))

        result = list_devices_with_readings(db, date_from=at(0))

        assert [r["id"] for r in result["devices"][0]["readings"]] == [past.id]

    def test_upper_bound_only(self, db):
        make_device(db, 1)
        for minute in (0, 5, 10):
            make_reading(db, 1, at(minute))

        result = list_devices_with_readings(db, date_to=at(5))

        stamps = [r["created_at"] for r in result["devices"][0]["readings"]]
        assert stamps == [at(5), at(0)]

    def test_readings_are_capped_per_device(self, db):
        make_device(db, 1)
        make_device(db, 2)
        db.add_all([
            Reading(chip_id=1, temperature=1.0, humidity=1.0, pressure=1.0,
                    created_at=at(i), updated_at=at(i))
            for i in range(MAX_READINGS_PER_DEVICE + 5)
        ])
        db.commit()
        make_reading(db, 2, at(0))

        result = list_devices_with_readings(db)

        first, second = result["devices"]
        assert len(first["readings"]) == MAX_READINGS_PER_DEVICE
        assert first["readings"][0]["created_at"] == at(MAX_READINGS_PER_DEVICE + 4)
        assert len(second["readings"]) == 1

    def test_empty_registry_is_an_empty_list(self, db):
        assert list_devices_with_readings(db) == {"success": True, "devices": []}


class TestStorageFailure:

    @pytest.fixture
    def broken_db(self):
        engine = create_db_engine("sqlite://", poolclass=StaticPool)
        session = sessionmaker(bind=engine)()
        yield session
        session.close()
        engine.dispose()

    def test_write_failures(self, broken_db):
        with pytest.raises(StorageFailure, match="Error inserting data"):
            register_device(broken_db, 1, "A", "X")
        with pytest.raises(StorageFailure, match="Error updating data"):
            update_device(broken_db, 1, "A", "X")
        with pytest.raises(StorageFailure, match="Error deleting data"):
            delete_device(broken_db, 1)

    def test_read_failures(self, broken_db):
        with pytest.raises(StorageFailure, match="Error getting data"):
            list_devices(broken_db)
        with pytest.raises(StorageFailure, match="Error getting data"):
            list_devices_with_readings(broken_db)
