"""Employee models shared by the API, the service layer and the client adapter."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Position(str, Enum):
    STAFF = "Staff"
    MANAGER = "Manager"


class Employee(BaseModel):
    """A persisted employee record, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    position: Position
    department: str
    salary: float
    gender: Gender
    age: int | None = None
    date_of_birth: date
    phone: str
    created_at: datetime
    updated_at: datetime


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating a candidate record.

    ``record`` holds the normalized values of every field that passed; it is
    only meaningful when ``ok`` is true.
    """

    record: dict[str, Any] = {}
    errors: list[FieldError] = []

    @property
    def ok(self) -> bool:
        return not self.errors


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(MessageResponse):
    errors: list[FieldError] = []
