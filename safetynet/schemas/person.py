"""Pydantic schemas for the Person (resident) resource."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PersonKey = tuple[str, str]


class Person(BaseModel):
    """
    A resident with contact and address data.

    (first_name, last_name) is the identity key, compared case-sensitively.
    Instances are frozen: the store hands them out without copying.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    address: str
    city: str
    zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("first_name", "last_name", "address", "city")
    @classmethod
    def validate_mandatory(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def key(self) -> PersonKey:
        return (self.first_name, self.last_name)
