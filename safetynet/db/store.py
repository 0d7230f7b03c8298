"""
In-memory Record Store.

Owns the three base collections (persons, medical records, fire station
mappings). Each collection is a RecordTable guarded by its own
readers-writer lock; there is no cross-collection atomicity.

Records are frozen pydantic models, so reads hand out new lists holding the
stored instances and callers cannot corrupt internal state.
"""

from typing import Callable, Generic, Hashable, Iterable, Optional, TypeVar

import structlog

from safetynet.db.locks import ReadWriteLock
from safetynet.errors import AlreadyExistsError, NotFoundError
from safetynet.schemas.fire_station import FireStation
from safetynet.schemas.medical_record import MedicalRecord
from safetynet.schemas.person import Person, PersonKey

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", Person, MedicalRecord, FireStation)


class RecordTable(Generic[RecordT]):
    """
    Ordered collection of records unique by key.

    add/update/delete enforce key existence and raise the domain errors.
    Insertion order is kept; update replaces a record in place.
    """

    def __init__(self, resource: str, key: Callable[[RecordT], Hashable]):
        self.resource = resource
        self._key = key
        self._records: list[RecordT] = []
        self._lock = ReadWriteLock()

    def load(self, records: Iterable[RecordT]) -> int:
        """Replace the whole collection. Later duplicates of a key are skipped."""
        loaded: list[RecordT] = []
        seen: set = set()
        for record in records:
            key = self._key(record)
            if key in seen:
                logger.warning("duplicate_record_skipped", resource=self.resource, key=str(key))
                continue
            seen.add(key)
            loaded.append(record)
        with self._lock.write():
            self._records = loaded
        return len(loaded)

    def all(self) -> list[RecordT]:
        with self._lock.read():
            return list(self._records)

    def count(self) -> int:
        with self._lock.read():
            return len(self._records)

    def get(self, key: Hashable) -> Optional[RecordT]:
        with self._lock.read():
            return self._find(key)

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        with self._lock.read():
            return [r for r in self._records if predicate(r)]

    def add(self, record: RecordT) -> RecordT:
        key = self._key(record)
        with self._lock.write():
            if self._find(key) is not None:
                raise AlreadyExistsError(self.resource, _format_key(key))
            self._records.append(record)
        return record

    def update(self, record: RecordT) -> RecordT:
        key = self._key(record)
        with self._lock.write():
            index = self._index_of(key)
            if index is None:
                raise NotFoundError(self.resource, _format_key(key))
            self._records[index] = record
        return record

    def delete(self, key: Hashable) -> RecordT:
        with self._lock.write():
            index = self._index_of(key)
            if index is None:
                raise NotFoundError(self.resource, _format_key(key))
            return self._records.pop(index)

    def delete_where(self, predicate: Callable[[RecordT], bool], identifier: str) -> list[RecordT]:
        """
        Remove every matching record as one write.

        All-or-nothing: raises NotFoundError and removes nothing when no
        record matches.
        """
        with self._lock.write():
            removed = [r for r in self._records if predicate(r)]
            if not removed:
                raise NotFoundError(self.resource, identifier)
            self._records = [r for r in self._records if not predicate(r)]
        return removed

    # Callers must hold the lock
    def _find(self, key: Hashable) -> Optional[RecordT]:
        index = self._index_of(key)
        return None if index is None else self._records[index]

    def _index_of(self, key: Hashable) -> Optional[int]:
        for index, record in enumerate(self._records):
            if self._key(record) == key:
                return index
        return None


def _format_key(key: Hashable) -> str:
    if isinstance(key, tuple):
        return " ".join(str(part) for part in key)
    return str(key)


class PersonTable(RecordTable[Person]):
    def __init__(self):
        super().__init__("Person", lambda p: p.key)

    def by_city(self, city: str) -> list[Person]:
        return self.filter(lambda p: p.city == city)

    def by_address(self, address: str) -> list[Person]:
        return self.filter(lambda p: p.address == address)

    def by_addresses(self, addresses: Iterable[str]) -> dict[str, list[Person]]:
        """Residents grouped per address, in the given address order, from one snapshot."""
        grouped: dict[str, list[Person]] = {address: [] for address in addresses}
        with self._lock.read():
            for person in self._records:
                if person.address in grouped:
                    grouped[person.address].append(person)
        return grouped


class MedicalRecordTable(RecordTable[MedicalRecord]):
    def __init__(self):
        super().__init__("Medical record", lambda r: r.key)

    def by_names(self, keys: Iterable[PersonKey]) -> dict[PersonKey, MedicalRecord]:
        """Records of the given residents, from one snapshot. Absent names are omitted."""
        wanted = set(keys)
        with self._lock.read():
            return {r.key: r for r in self._records if r.key in wanted}


class FireStationTable(RecordTable[FireStation]):
    def __init__(self):
        super().__init__("Fire station mapping", lambda m: m.address)

    def by_station(self, station: int) -> list[FireStation]:
        return self.filter(lambda m: m.station == station)

    def by_address(self, address: str) -> Optional[FireStation]:
        return self.get(address)

    def delete_by_station(self, station: int) -> list[FireStation]:
        return self.delete_where(lambda m: m.station == station, f"station {station}")


class RecordStore:
    """
    The process-wide store. Instantiated once and handed to the engine and
    services explicitly.
    """

    def __init__(self):
        self.persons = PersonTable()
        self.medical_records = MedicalRecordTable()
        self.fire_stations = FireStationTable()

    def counts(self) -> dict[str, int]:
        return {
            "persons": self.persons.count(),
            "medical_records": self.medical_records.count(),
            "fire_stations": self.fire_stations.count(),
        }
