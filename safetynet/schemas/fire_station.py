"""Pydantic schemas for the fire station mapping resource."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FireStation(BaseModel):
    """Maps a covered address to a station. The address is the mutation key."""

    model_config = ConfigDict(frozen=True)

    station: int = Field(ge=1, description="Station ID, must be greater than 0")
    address: str

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Address is mandatory")
        return v

    @property
    def key(self) -> str:
        return self.address
