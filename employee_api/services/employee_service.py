"""Employee operations: validation, age derivation and storage calls."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from typing import Any

from employee_api.core.errors import EmployeeNotFoundError, RecordValidationError
from employee_api.models.employee import Employee
from employee_api.repositories.base import EmployeeRepository
from employee_api.services.age import derive_age
from employee_api.services.query_builder import (
    Predicate,
    build_date_of_birth_query,
    build_department_query,
    build_name_query,
    build_position_query,
)
from employee_api.services.validator import validate_employee

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Characters Cosmos DB refuses in item ids; such ids can never exist.
_FORBIDDEN_ID_CHARS = frozenset("/\\?#")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_well_formed_id(employee_id: str) -> bool:
    return bool(employee_id) and not _FORBIDDEN_ID_CHARS.intersection(employee_id)


def _to_document(record: Mapping[str, Any]) -> dict[str, Any]:
    document = dict(record)
    date_of_birth = document.get("dateOfBirth")
    if isinstance(date_of_birth, date):
        document["dateOfBirth"] = date_of_birth.isoformat()
    return document


class EmployeeService:
    def __init__(self, repository: EmployeeRepository, clock: Clock | None = None) -> None:
        self.repository = repository
        self.clock = clock or utcnow

    def _today(self) -> date:
        return self.clock().date()

    async def list_employees(self) -> list[Employee]:
        return [Employee.model_validate(doc) for doc in await self.repository.list_all()]

    async def get_employee(self, employee_id: str) -> Employee:
        if not _is_well_formed_id(employee_id):
            raise EmployeeNotFoundError()
        doc = await self.repository.get(employee_id)
        if doc is None:
            raise EmployeeNotFoundError()
        return Employee.model_validate(doc)

    async def create_employee(self, candidate: Mapping[str, Any]) -> Employee:
        today = self._today()
        result = validate_employee(candidate, today=today)
        if not result.ok:
            raise RecordValidationError(result.errors)

        now = self.clock().isoformat()
        document = _to_document(result.record)
        document["id"] = uuid.uuid4().hex
        document["age"] = derive_age(result.record["dateOfBirth"], today)
        document["createdAt"] = now
        document["updatedAt"] = now

        # A record the response model rejects must never reach storage.
        Employee.model_validate(document)
        saved = await self.repository.insert(document)
        logger.info("Created employee %s", saved["id"])
        return Employee.model_validate(saved)

    async def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        if not _is_well_formed_id(employee_id):
            raise EmployeeNotFoundError()

        today = self._today()
        result = validate_employee(changes, partial=True, today=today)
        if not result.ok:
            raise RecordValidationError(result.errors)

        existing = await self.repository.get(employee_id)
        if existing is None:
            raise EmployeeNotFoundError()

        document = {**existing, **_to_document(result.record)}
        if "dateOfBirth" in result.record:
            document["age"] = derive_age(result.record["dateOfBirth"], today)
        document["updatedAt"] = self.clock().isoformat()

        Employee.model_validate(document)
        saved = await self.repository.replace(document)
        if saved is None:
            raise EmployeeNotFoundError()
        logger.info("Updated employee %s (fields=%s)", employee_id, sorted(result.record))
        return Employee.model_validate(saved)

    async def delete_employee(self, employee_id: str) -> None:
        if not _is_well_formed_id(employee_id) or not await self.repository.delete(employee_id):
            raise EmployeeNotFoundError()
        logger.info("Deleted employee %s", employee_id)

    async def search_by_name(self, name: str | None) -> list[Employee]:
        return await self._find(build_name_query(name))

    async def search_by_date_of_birth(self, month: str | None, year: str | None) -> list[Employee]:
        return await self._find(build_date_of_birth_query(month, year, today=self._today()))

    async def filter_by_position(self, position: str | None) -> list[Employee]:
        return await self._find(build_position_query(position))

    async def filter_by_department(self, department: str | None) -> list[Employee]:
        return await self._find(build_department_query(department))

    async def _find(self, predicate: Predicate) -> list[Employee]:
        return [Employee.model_validate(doc) for doc in await self.repository.find(predicate)]
