"""
Car Model Module

This module defines the Car table model and the schemas used to create and
read cars through the API.

The `client` attribute only exists on the read schema: it is filled in at
response time from the remote client service and is never persisted.
"""
from typing import Optional
from sqlmodel import SQLModel, Field
from pydantic import field_validator

from service_car.schemas.client import Client

# Ids are stored as signed 64-bit integers
MAX_ID = 2**63 - 1


class CarBase(SQLModel):
    """
    Base properties shared by every Car representation.

    Attributes:
        make: Manufacturer name, e.g. "Renault" (required)
        model: Model name, e.g. "Clio" (required)
        registration: License plate / registration number
        year: Model year
        clientId: Identifier of the owning client in the client service
    """
    make: str = Field(nullable=False)
    model: str = Field(nullable=False)
    registration: Optional[str] = None
    year: Optional[int] = None

    # Foreign reference into the client service, not a local foreign key.
    # camelCase keeps the JSON contract shared with the client service.
    clientId: Optional[int] = Field(default=None, index=True)


class Car(CarBase, table=True):
    """
    Car table model.
    """
    __tablename__ = "cars"

    # Primary key - assigned by the store on insert
    id: Optional[int] = Field(default=None, primary_key=True)


class CarCreate(CarBase):
    """
    Schema for creating a car.

    Any `client` or `id` field sent by the caller is ignored.
    """
    year: Optional[int] = Field(default=None, ge=1886, le=2100)
    clientId: Optional[int] = Field(default=None, gt=0, le=MAX_ID)

    @field_validator("make", "model")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("registration")
    @classmethod
    def normalize_registration(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class CarRead(CarBase):
    """Schema for reading a car, optionally enriched with its client."""
    id: int
    client: Optional[Client] = None
