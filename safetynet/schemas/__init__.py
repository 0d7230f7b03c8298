"""Pydantic request/response models."""

from safetynet.schemas.alerts import (
    MISSING_INFORMATION,
    ChildAlert,
    FireAlert,
    PersonView,
    StationCoverage,
)
from safetynet.schemas.fire_station import FireStation
from safetynet.schemas.medical_record import MedicalRecord, MedicalRecordCreate
from safetynet.schemas.person import Person, PersonKey

__all__ = [
    "MISSING_INFORMATION",
    "ChildAlert",
    "FireAlert",
    "FireStation",
    "MedicalRecord",
    "MedicalRecordCreate",
    "Person",
    "PersonKey",
    "PersonView",
    "StationCoverage",
]
