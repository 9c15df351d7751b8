"""Error taxonomy shared by the service, storage and HTTP layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from employee_api.models.employee import FieldError


class EmployeeError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class RecordValidationError(EmployeeError):
    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        details = ", ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(f"Employee validation failed: {details}")


class QueryParameterError(EmployeeError):
    status_code = 400


class DuplicateEmailError(EmployeeError):
    status_code = 400
    message = "Duplicate email address"


class EmployeeNotFoundError(EmployeeError):
    status_code = 404
    message = "Employee not found"


class StorageError(EmployeeError):
    """Unexpected storage backend failure. The message is logged, never returned."""
