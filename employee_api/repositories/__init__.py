from __future__ import annotations

from employee_api.core.config import Settings
from employee_api.repositories.base import EmployeeRepository
from employee_api.repositories.cosmos import CosmosEmployeeRepository
from employee_api.repositories.memory import InMemoryEmployeeRepository


def build_repository(settings: Settings) -> EmployeeRepository:
    if settings.STORAGE_BACKEND == "cosmos":
        return CosmosEmployeeRepository()
    return InMemoryEmployeeRepository()


__all__ = [
    "CosmosEmployeeRepository",
    "EmployeeRepository",
    "InMemoryEmployeeRepository",
    "build_repository",
]
