"""Medical record CRUD endpoints."""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Response

from safetynet.api.deps import NON_BLANK, get_medical_record_service
from safetynet.schemas.medical_record import MedicalRecord, MedicalRecordCreate
from safetynet.services.medical_record_service import MedicalRecordService

router = APIRouter(tags=["medical-records"])


@router.get("/medicalRecords", response_model=list[MedicalRecord])
def list_medical_records(service: MedicalRecordService = Depends(get_medical_record_service)):
    """List every medical record."""
    return service.get_all()


@router.get("/medicalRecords/medicalRecord", response_model=MedicalRecord)
def get_medical_record(
    first_name: str = Query(alias="firstName", min_length=1, pattern=NON_BLANK),
    last_name: str = Query(alias="lastName", min_length=1, pattern=NON_BLANK),
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Get the medical record of a resident."""
    return service.get(first_name, last_name)


@router.post("/medicalRecord", response_model=MedicalRecord, status_code=201)
def create_medical_record(
    body: MedicalRecordCreate,
    response: Response,
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Create a medical record. 409 when the resident already has one."""
    created = service.add(body.to_record())
    query = urlencode({"firstName": created.first_name, "lastName": created.last_name})
    response.headers["Location"] = f"/medicalRecords/medicalRecord?{query}"
    return created


@router.put("/medicalRecord", response_model=MedicalRecord)
def update_medical_record(
    body: MedicalRecordCreate,
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Replace the birthdate and medical data of a resident's record."""
    return service.update(body.to_record())


@router.delete("/medicalRecord", status_code=204)
def delete_medical_record(
    first_name: str = Query(alias="firstName", min_length=1, pattern=NON_BLANK),
    last_name: str = Query(alias="lastName", min_length=1, pattern=NON_BLANK),
    service: MedicalRecordService = Depends(get_medical_record_service),
):
    """Delete a medical record."""
    service.delete(first_name, last_name)
