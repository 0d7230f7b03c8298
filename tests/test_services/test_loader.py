"""
Data Loader Tests.
"""

import json
from datetime import date
from pathlib import Path

import pytest

from safetynet.db.store import RecordStore
from safetynet.errors import DataLoadError
from safetynet.services.loader import load_data, load_document

BUNDLED_DATA = Path(__file__).resolve().parents[2] / "data" / "data.json"


class TestLoadDocument:
    def setup_method(self):
        self.store = RecordStore()

    def test_loads_all_collections(self, sample_document):
        counts = load_document(self.store, sample_document)
        assert counts == {"persons": 6, "medical_records": 5, "fire_stations": 5}

    def test_station_numbers_coerced(self, sample_document):
        load_document(self.store, sample_document)
        assert self.store.fire_stations.by_address("1509 Culver St").station == 3

    def test_birthdates_parsed(self, sample_document):
        load_document(self.store, sample_document)
        assert self.store.medical_records.get(("John", "Boyd")).birthdate == date(1984, 3, 6)

    def test_firestations_optional(self, sample_document):
        del sample_document["firestations"]
        counts = load_document(self.store, sample_document)
        assert counts["fire_stations"] == 0

    def test_invalid_entry_leaves_store_untouched(self, sample_document):
        sample_document["medicalrecords"][0]["birthdate"] = "1984-03-06"
        with pytest.raises(DataLoadError):
            load_document(self.store, sample_document)
        assert self.store.counts() == {"persons": 0, "medical_records": 0, "fire_stations": 0}

    def test_blank_name_rejected(self, sample_document):
        sample_document["persons"][0]["firstName"] = "  "
        with pytest.raises(DataLoadError):
            load_document(self.store, sample_document)

    def test_station_zero_rejected(self, sample_document):
        sample_document["firestations"][0]["station"] = "0"
        with pytest.raises(DataLoadError):
            load_document(self.store, sample_document)

    def test_collection_must_be_list(self):
        with pytest.raises(DataLoadError):
            load_document(self.store, {"persons": {"firstName": "John"}})

    def test_top_level_must_be_object(self):
        with pytest.raises(DataLoadError):
            load_document(self.store, [])


class TestLoadData:
    def test_reads_file(self, tmp_path, sample_document):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(sample_document), encoding="utf-8")
        store = RecordStore()
        counts = load_data(store, path)
        assert counts["persons"] == 6
        assert store.persons.get(("Lily", "Cooper")).city == "Springfield"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError) as exc_info:
            load_data(RecordStore(), tmp_path / "absent.json")
        assert "absent.json" in exc_info.value.message

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"persons": [', encoding="utf-8")
        with pytest.raises(DataLoadError):
            load_data(RecordStore(), path)

    def test_bundled_data_set(self):
        store = RecordStore()
        counts = load_data(store, BUNDLED_DATA)
        assert counts == {"persons": 23, "medical_records": 23, "fire_stations": 11}
