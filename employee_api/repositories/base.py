"""Storage contract for employee documents.

Documents are plain dicts in API shape (camelCase keys, JSON-compatible
values). Backends enforce email uniqueness themselves and raise
``DuplicateEmailError``; any other backend failure surfaces as
``StorageError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from employee_api.core.config import Settings
from employee_api.services.query_builder import Predicate


class EmployeeRepository(ABC):
    name: str = "unknown"
    initialized: bool = False

    @abstractmethod
    async def initialize(self, settings: Settings) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def check_connection(self) -> bool: ...

    @abstractmethod
    async def list_all(self) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def get(self, employee_id: str) -> dict[str, Any] | None: ...

    @abstractmethod
    async def find(self, predicate: Predicate) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def insert(self, document: dict[str, Any]) -> dict[str, Any]: ...

    @abstractmethod
    async def replace(self, document: dict[str, Any]) -> dict[str, Any] | None:
        """Replace the stored document with the same id; ``None`` if it does not exist."""

    @abstractmethod
    async def delete(self, employee_id: str) -> bool:
        """Hard delete; ``False`` if no such document exists."""
