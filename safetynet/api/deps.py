"""
FastAPI dependencies for API routes.

The store and query engine live on app.state (set by create_app); services
are cheap wrappers built per request.
"""

from fastapi import Request

from safetynet.db.store import RecordStore
from safetynet.engine.alerts import AlertQueryEngine
from safetynet.services.fire_station_service import FireStationService
from safetynet.services.medical_record_service import MedicalRecordService
from safetynet.services.person_service import PersonService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_alert_engine(request: Request) -> AlertQueryEngine:
    return request.app.state.alert_engine


def get_person_service(request: Request) -> PersonService:
    return PersonService(get_store(request))


def get_medical_record_service(request: Request) -> MedicalRecordService:
    return MedicalRecordService(get_store(request), clock=get_alert_engine(request).clock)


def get_fire_station_service(request: Request) -> FireStationService:
    return FireStationService(get_store(request))


# Query-string constraint: at least one non-whitespace character
NON_BLANK = r"^.*\S.*$"
