"""Pydantic schemas for the MedicalRecord resource."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from safetynet.schemas.person import PersonKey

BIRTHDATE_FORMAT = "%m/%d/%Y"  # MM/dd/yyyy on the wire


class MedicalRecord(BaseModel):
    """
    Medical metadata of a resident, joined to Person by exact name.

    Medications and allergies keep their input order. An empty sequence means
    "none", which is different from having no record at all.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    birthdate: date
    medications: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_mandatory(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("birthdate", mode="before")
    @classmethod
    def parse_birthdate(cls, v):
        """Accept MM/dd/yyyy strings as well as date objects."""
        if isinstance(v, str):
            try:
                return datetime.strptime(v.strip(), BIRTHDATE_FORMAT).date()
            except ValueError:
                raise ValueError(f"Birthdate must use MM/dd/yyyy format, got: {v}") from None
        return v

    @field_serializer("birthdate")
    def serialize_birthdate(self, v: date) -> str:
        return v.strftime(BIRTHDATE_FORMAT)

    @property
    def key(self) -> PersonKey:
        return (self.first_name, self.last_name)


class MedicalRecordCreate(MedicalRecord):
    """
    Request body for POST/PUT: the birthdate must lie in the past.

    This checks the wall clock; MedicalRecordService repeats the check against
    the application clock used by the alert queries.
    """

    @field_validator("birthdate")
    @classmethod
    def validate_past(cls, v: date) -> date:
        if v >= date.today():
            raise ValueError("Birthdate must be in the past")
        return v

    def to_record(self) -> MedicalRecord:
        return MedicalRecord(**self.model_dump())
