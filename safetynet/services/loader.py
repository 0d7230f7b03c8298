"""
JSON data loader.

Populates a RecordStore from a document shaped like:

    {
      "persons":        [{"firstName": ..., "lastName": ..., "address": ...}],
      "firestations":   [{"address": ..., "station": "3"}],
      "medicalrecords": [{"firstName": ..., "birthdate": "03/06/1984", ...}]
    }

"firestations" is optional. Any entry failing validation aborts the load
before the store is touched.
"""

import json
from pathlib import Path
from typing import Any, Union

import structlog
from pydantic import BaseModel, ValidationError

from safetynet.db.store import RecordStore
from safetynet.errors import DataLoadError
from safetynet.schemas.fire_station import FireStation
from safetynet.schemas.medical_record import MedicalRecord
from safetynet.schemas.person import Person

logger = structlog.get_logger(__name__)


def _parse(source: str, document: dict, key: str, model: type[BaseModel]) -> list:
    entries = document.get(key) or []
    if not isinstance(entries, list):
        raise DataLoadError(source, f"'{key}' must be a list")
    try:
        return [model.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise DataLoadError(source, f"invalid '{key}' entry: {exc.errors()[0]['msg']}") from exc


def load_document(store: RecordStore, document: Any, source: str = "<document>") -> dict[str, int]:
    """Validate every collection of an already-parsed document, then load the store."""
    if not isinstance(document, dict):
        raise DataLoadError(source, "top-level JSON value must be an object")

    persons = _parse(source, document, "persons", Person)
    records = _parse(source, document, "medicalrecords", MedicalRecord)
    mappings = _parse(source, document, "firestations", FireStation)

    counts = {
        "persons": store.persons.load(persons),
        "medical_records": store.medical_records.load(records),
        "fire_stations": store.fire_stations.load(mappings),
    }
    logger.info("data_loaded", source=source, **counts)
    return counts


def load_data(store: RecordStore, path: Union[str, Path]) -> dict[str, int]:
    """Read the JSON file at path into the store. Raises DataLoadError."""
    source = str(path)
    logger.info("data_load_started", source=source)
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise DataLoadError(source, exc.strerror or str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(source, f"malformed JSON at line {exc.lineno}") from exc
    return load_document(store, document, source)
