from __future__ import annotations

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from employee_api.core.config import Settings
from employee_api.main import create_app
from employee_api.repositories.memory import InMemoryEmployeeRepository
from employee_api.services.employee_service import EmployeeService

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

JANE_DOE: dict = {
    "name": "Jane Doe",
    "email": "jane@x.com",
    "position": "Staff",
    "department": "Eng",
    "salary": 50000,
    "gender": "Female",
    "dateOfBirth": "1995-06-01",
    "phone": "0912345678",
}

JOHN_SMITH: dict = {
    "name": "John Smith",
    "email": "john.smith@example.com",
    "position": "Manager",
    "department": "Sales",
    "salary": 72000.5,
    "gender": "Male",
    "dateOfBirth": "1988-11-23",
    "phone": "0987654321",
}


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def jane() -> dict:
    return dict(JANE_DOE)


@pytest.fixture
def john() -> dict:
    return dict(JOHN_SMITH)


@pytest.fixture
def repository() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@pytest.fixture
def service(repository) -> EmployeeService:
    return EmployeeService(repository, clock=fixed_clock)


@pytest.fixture
def app(repository):
    return create_app(settings=Settings(), repository=repository, clock=fixed_clock)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
