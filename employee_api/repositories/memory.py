"""In-process employee store for local development and tests."""

from __future__ import annotations

import copy
import logging
from typing import Any

from employee_api.core.config import Settings
from employee_api.core.errors import DuplicateEmailError
from employee_api.repositories.base import EmployeeRepository
from employee_api.services.query_builder import Predicate

logger = logging.getLogger(__name__)


class InMemoryEmployeeRepository(EmployeeRepository):
    name = "memory"

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self.initialized = False

    async def initialize(self, settings: Settings) -> None:
        self.initialized = True
        logger.info("InMemoryEmployeeRepository initialized")

    async def close(self) -> None:
        self.initialized = False

    async def check_connection(self) -> bool:
        return True

    async def list_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._documents.values()]

    async def get(self, employee_id: str) -> dict[str, Any] | None:
        doc = self._documents.get(employee_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(self, predicate: Predicate) -> list[dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self._documents.values() if predicate.matches(doc)]

    # No await between the uniqueness check and the write, so each of these is
    # atomic with respect to other requests on the event loop.
    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        self._ensure_unique_email(document["email"], exclude_id=None)
        self._documents[document["id"]] = copy.deepcopy(document)
        return copy.deepcopy(document)

    async def replace(self, document: dict[str, Any]) -> dict[str, Any] | None:
        employee_id = document["id"]
        if employee_id not in self._documents:
            return None
        self._ensure_unique_email(document["email"], exclude_id=employee_id)
        self._documents[employee_id] = copy.deepcopy(document)
        return copy.deepcopy(document)

    async def delete(self, employee_id: str) -> bool:
        return self._documents.pop(employee_id, None) is not None

    def _ensure_unique_email(self, email: str, exclude_id: str | None) -> None:
        for employee_id, doc in self._documents.items():
            if employee_id != exclude_id and doc.get("email") == email:
                raise DuplicateEmailError()
