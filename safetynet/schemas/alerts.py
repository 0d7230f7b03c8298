"""
Alert Query Schemas.

PersonView is the field-subset projection of a resident; the other models
are the responses of the alert queries. Unset fields are None and are
dropped on serialization (routes use response_model_exclude_none).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MISSING_INFORMATION = "Information not specified"


class PersonView(BaseModel):
    """
    Projection of a resident for one view kind.

    age is either the computed age in years (rendered as a string) or
    MISSING_INFORMATION when the resident has no medical record.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    address: Optional[str] = None
    age: Optional[str] = None
    medications: Optional[list[str]] = None
    allergies: Optional[list[str]] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class StationCoverage(BaseModel):
    """Residents covered by a station with minor/adult head counts."""

    model_config = ConfigDict(populate_by_name=True)

    residents: list[PersonView]
    children_count: int = Field(alias="childrenCount")
    adult_count: int = Field(alias="adultCount")
    # Only reported when at least one resident lacks a medical record
    undetermined_age_count: Optional[int] = Field(default=None, alias="undeterminedAgeCount")


class ChildAlert(BaseModel):
    """Minors at an address and the rest of their household."""

    model_config = ConfigDict(populate_by_name=True)

    children: list[PersonView]
    household_members: list[PersonView] = Field(alias="householdMembers")


class FireAlert(BaseModel):
    """Residents at an address and the station covering it."""

    residents: list[PersonView]
    station: int
