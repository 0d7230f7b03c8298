"""
Record Store Tests.

Covers the keyed tables, bulk station deletion, and the readers-writer lock.
"""

import threading
import time
from datetime import date

import pytest

from safetynet.db.locks import ReadWriteLock
from safetynet.db.store import RecordStore
from safetynet.errors import AlreadyExistsError, NotFoundError
from safetynet.schemas.fire_station import FireStation
from safetynet.schemas.medical_record import MedicalRecord
from safetynet.schemas.person import Person


def _person(first: str, last: str = "Boyd", address: str = "1509 Culver St", **kwargs) -> Person:
    return Person(first_name=first, last_name=last, address=address, city="Culver", **kwargs)


class TestPersonTable:
    def setup_method(self):
        self.store = RecordStore()
        self.persons = self.store.persons

    def test_add_then_get(self):
        person = _person("John", phone="841-874-6512")
        self.persons.add(person)
        assert self.persons.get(("John", "Boyd")) == person

    def test_key_is_case_sensitive(self):
        self.persons.add(_person("John"))
        assert self.persons.get(("john", "boyd")) is None

    def test_add_duplicate_raises(self):
        self.persons.add(_person("John"))
        with pytest.raises(AlreadyExistsError) as exc_info:
            self.persons.add(_person("John", address="29 15th St"))
        assert exc_info.value.message == "Person already exists: John Boyd"
        assert self.persons.count() == 1

    def test_update_replaces_in_place(self):
        self.persons.add(_person("John"))
        self.persons.add(_person("Jacob"))
        self.persons.update(_person("John", address="29 15th St", email="new@email.com"))
        john = self.persons.get(("John", "Boyd"))
        assert john.address == "29 15th St"
        assert john.email == "new@email.com"
        assert [p.first_name for p in self.persons.all()] == ["John", "Jacob"]

    def test_update_unknown_raises(self):
        with pytest.raises(NotFoundError):
            self.persons.update(_person("Ghost"))

    def test_delete_then_get(self):
        self.persons.add(_person("John"))
        removed = self.persons.delete(("John", "Boyd"))
        assert removed.first_name == "John"
        assert self.persons.get(("John", "Boyd")) is None

    def test_delete_unknown_raises(self):
        with pytest.raises(NotFoundError):
            self.persons.delete(("Ghost", "Boyd"))

    def test_all_returns_copy(self):
        self.persons.add(_person("John"))
        snapshot = self.persons.all()
        snapshot.clear()
        assert self.persons.count() == 1

    def test_load_skips_duplicate_keys(self):
        loaded = self.persons.load([_person("John"), _person("John", address="elsewhere")])
        assert loaded == 1
        assert self.persons.get(("John", "Boyd")).address == "1509 Culver St"

    def test_load_replaces_contents(self):
        self.persons.add(_person("Old"))
        self.persons.load([_person("New")])
        assert [p.first_name for p in self.persons.all()] == ["New"]

    def test_by_addresses_groups_in_given_order(self):
        self.persons.load([
            _person("A", address="x"),
            _person("B", address="y"),
            _person("C", address="x"),
        ])
        grouped = self.persons.by_addresses(["y", "x", "z"])
        assert list(grouped) == ["y", "x", "z"]
        assert [p.first_name for p in grouped["x"]] == ["A", "C"]
        assert grouped["z"] == []

    def test_by_city_exact(self):
        self.persons.add(_person("John"))
        assert self.persons.by_city("Culver")
        assert self.persons.by_city("culver") == []


class TestMedicalRecordTable:
    def test_by_names_omits_absent(self):
        store = RecordStore()
        record = MedicalRecord(first_name="John", last_name="Boyd", birthdate=date(1984, 3, 6))
        store.medical_records.add(record)
        found = store.medical_records.by_names([("John", "Boyd"), ("Jane", "Doe")])
        assert found == {("John", "Boyd"): record}


class TestFireStationTable:
    def setup_method(self):
        self.store = RecordStore()
        self.mappings = self.store.fire_stations
        self.mappings.load([
            FireStation(station=1, address="A"),
            FireStation(station=2, address="B"),
            FireStation(station=1, address="C"),
        ])

    def test_address_is_key(self):
        with pytest.raises(AlreadyExistsError):
            self.mappings.add(FireStation(station=3, address="A"))

    def test_by_station(self):
        assert [m.address for m in self.mappings.by_station(1)] == ["A", "C"]

    def test_update_moves_address(self):
        self.mappings.update(FireStation(station=2, address="A"))
        assert self.mappings.by_address("A").station == 2

    def test_delete_by_station_removes_all(self):
        removed = self.mappings.delete_by_station(1)
        assert [m.address for m in removed] == ["A", "C"]
        assert [m.address for m in self.mappings.all()] == ["B"]

    def test_delete_by_unmapped_station_removes_nothing(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.mappings.delete_by_station(9)
        assert exc_info.value.message == "Fire station mapping not found: station 9"
        assert self.mappings.count() == 3


class TestRecordStore:
    def test_counts(self):
        store = RecordStore()
        store.persons.add(_person("John"))
        assert store.counts() == {"persons": 1, "medical_records": 0, "fire_stations": 0}


def _wait_until(condition, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.005)
    return condition()


class TestReadWriteLock:
    def setup_method(self):
        self.lock = ReadWriteLock()

    def test_readers_share(self):
        second_reader_in = threading.Event()

        def reader():
            with self.lock.read():
                second_reader_in.set()

        with self.lock.read():
            thread = threading.Thread(target=reader)
            thread.start()
            assert second_reader_in.wait(timeout=2.0)
        thread.join(timeout=2.0)

    def test_writer_excludes_readers(self):
        reader_in = threading.Event()

        def reader():
            with self.lock.read():
                reader_in.set()

        with self.lock.write():
            thread = threading.Thread(target=reader)
            thread.start()
            assert not reader_in.wait(timeout=0.1)
        assert reader_in.wait(timeout=2.0)
        thread.join(timeout=2.0)

    def test_waiting_writer_blocks_new_readers(self):
        order: list[str] = []

        def writer():
            with self.lock.write():
                order.append("writer")

        def reader():
            with self.lock.read():
                order.append("reader")

        with self.lock.read():
            writer_thread = threading.Thread(target=writer)
            writer_thread.start()
            assert _wait_until(lambda: self.lock._writers_waiting == 1)
            reader_thread = threading.Thread(target=reader)
            reader_thread.start()
            time.sleep(0.05)
            assert order == []

        writer_thread.join(timeout=2.0)
        reader_thread.join(timeout=2.0)
        assert order == ["writer", "reader"]

    def test_lock_released_on_error(self):
        with pytest.raises(RuntimeError):
            with self.lock.write():
                raise RuntimeError("boom")
        with self.lock.read():
            pass
