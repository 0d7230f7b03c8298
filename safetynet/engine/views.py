"""
Person-View Builder.

A view kind selects field groups; each field group has exactly one
populator in _POPULATORS. The table is checked against FieldGroup when the
module is imported, so a group without a populator fails at startup rather
than in the middle of a request.
"""

from datetime import date
from enum import Enum
from typing import Any, Callable, Optional

from safetynet.engine.age import compute_age
from safetynet.errors import InternalFaultError
from safetynet.schemas.alerts import MISSING_INFORMATION, PersonView
from safetynet.schemas.medical_record import MedicalRecord
from safetynet.schemas.person import Person


class FieldGroup(str, Enum):
    NAME = "name"
    ADDRESS = "address"
    PHONE = "phone"
    EMAIL = "email"
    AGE = "age"
    MEDICAL = "medical"


class ViewKind(str, Enum):
    NAME = "name"
    AGE = "age"
    STATION_COVERAGE = "station_coverage"
    ALERT = "alert"
    PERSON_INFO = "person_info"


VIEW_FIELDS: dict[ViewKind, tuple[FieldGroup, ...]] = {
    ViewKind.NAME: (FieldGroup.NAME,),
    ViewKind.AGE: (FieldGroup.NAME, FieldGroup.AGE),
    ViewKind.STATION_COVERAGE: (FieldGroup.NAME, FieldGroup.ADDRESS, FieldGroup.PHONE),
    ViewKind.ALERT: (FieldGroup.NAME, FieldGroup.PHONE, FieldGroup.AGE, FieldGroup.MEDICAL),
    ViewKind.PERSON_INFO: (
        FieldGroup.NAME,
        FieldGroup.ADDRESS,
        FieldGroup.EMAIL,
        FieldGroup.AGE,
        FieldGroup.MEDICAL,
    ),
}

Fields = dict[str, Any]
Populator = Callable[[Fields, Person, Optional[MedicalRecord], date], None]


def _name(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    fields["first_name"] = person.first_name
    fields["last_name"] = person.last_name


def _address(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    fields["address"] = person.address


def _phone(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    fields["phone"] = person.phone


def _email(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    fields["email"] = person.email


def _age(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    if record is None:
        fields["age"] = MISSING_INFORMATION
    else:
        fields["age"] = str(compute_age(record.birthdate, today))


def _medical(fields: Fields, person: Person, record: Optional[MedicalRecord], today: date) -> None:
    if record is None:
        fields["medications"] = [MISSING_INFORMATION]
        fields["allergies"] = [MISSING_INFORMATION]
    else:
        fields["medications"] = list(record.medications)
        fields["allergies"] = list(record.allergies)


_POPULATORS: dict[FieldGroup, Populator] = {
    FieldGroup.NAME: _name,
    FieldGroup.ADDRESS: _address,
    FieldGroup.PHONE: _phone,
    FieldGroup.EMAIL: _email,
    FieldGroup.AGE: _age,
    FieldGroup.MEDICAL: _medical,
}

_unmapped = (set(FieldGroup) - set(_POPULATORS)) | (set(ViewKind) - set(VIEW_FIELDS))
if _unmapped:
    raise InternalFaultError(f"View tables incomplete: {sorted(_unmapped)}")


def build_view(
    person: Person,
    record: Optional[MedicalRecord],
    kind: ViewKind,
    reference_date: Optional[date] = None,
) -> PersonView:
    """
    Project a resident (and its medical record, if any) for the given kind.

    Raises InvalidDateError when the age group is selected and the record's
    birthdate lies after reference_date.
    """
    if reference_date is None:
        reference_date = date.today()

    fields: Fields = {}
    for group in VIEW_FIELDS[kind]:
        _POPULATORS[group](fields, person, record, reference_date)
    return PersonView(**fields)
