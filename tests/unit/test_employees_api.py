from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient

from employee_api.core.config import Settings
from employee_api.core.errors import StorageError
from employee_api.main import create_app
from employee_api.repositories.memory import InMemoryEmployeeRepository

BASE = "/api/employees"


def _create(client, payload) -> dict:
    response = client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_201_with_derived_fields(client, jane):
    response = client.post(BASE, json=jane)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["name"] == "Jane Doe"
    assert data["dateOfBirth"] == "1995-06-01"
    assert data["age"] == 30
    assert data["createdAt"] == data["updatedAt"]
    assert data["createdAt"].startswith("2025-06-15T12:00:00")


def test_create_then_search_by_name_is_case_insensitive(client, jane, john):
    created = _create(client, jane)
    _create(client, john)

    response = client.get(f"{BASE}/search/name", params={"name": "jane"})

    assert response.status_code == 200
    assert response.json() == [created]


def test_create_then_get_by_id(client, jane):
    created = _create(client, jane)

    response = client.get(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_list_all(client, jane, john):
    assert client.get(BASE).json() == []

    _create(client, jane)
    _create(client, john)

    data = client.get(BASE).json()
    assert sorted(e["email"] for e in data) == ["jane@x.com", "john.smith@example.com"]


def test_create_validation_failure_lists_every_field(client):
    response = client.post(BASE, json={"name": "Only Name", "email": "nope"})

    assert response.status_code == 400
    data = response.json()
    assert data["message"].startswith("Employee validation failed: ")
    fields = {e["field"] for e in data["errors"]}
    assert fields == {"email", "position", "department", "salary", "gender", "dateOfBirth", "phone"}


def test_create_duplicate_email_returns_distinct_message(client, jane, john):
    _create(client, jane)

    response = client.post(BASE, json=dict(john, email="jane@x.com"))

    assert response.status_code == 400
    assert response.json() == {"message": "Duplicate email address"}
    assert len(client.get(BASE).json()) == 1


def test_create_with_non_object_body_returns_400(client):
    response = client.post(BASE, json=["not", "an", "object"])

    assert response.status_code == 400
    assert "message" in response.json()


def test_get_unknown_id_returns_404(client):
    response = client.get(f"{BASE}/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Employee not found"}


def test_update_recomputes_age_when_date_of_birth_changes(client, jane):
    created = _create(client, jane)

    response = client.put(f"{BASE}/{created['id']}", json={"dateOfBirth": "2000-06-16"})

    assert response.status_code == 200
    data = response.json()
    assert data["dateOfBirth"] == "2000-06-16"
    assert data["age"] == 24
    assert data["name"] == "Jane Doe"


def test_update_without_date_of_birth_keeps_age(client, jane):
    created = _create(client, jane)

    response = client.put(f"{BASE}/{created['id']}", json={"department": "  Research "})

    assert response.status_code == 200
    assert response.json()["department"] == "Research"
    assert response.json()["age"] == created["age"]


def test_update_validation_failure_returns_400(client, jane):
    created = _create(client, jane)

    response = client.put(f"{BASE}/{created['id']}", json={"phone": "12345"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "phone", "message": "Phone number must be 10 digits and start with 0"},
    ]


def test_update_unknown_id_returns_404(client):
    response = client.put(f"{BASE}/missing", json={"salary": 10})
    assert response.status_code == 404


def test_delete_then_get_returns_404(client, jane):
    created = _create(client, jane)

    response = client.delete(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"message": "Employee deleted"}

    assert client.get(f"{BASE}/{created['id']}").status_code == 404
    assert client.delete(f"{BASE}/{created['id']}").status_code == 404


def test_search_by_name_requires_parameter(client):
    response = client.get(f"{BASE}/search/name")

    assert response.status_code == 400
    assert response.json() == {"message": "Name query parameter is required"}

    assert client.get(f"{BASE}/search/name", params={"name": ""}).status_code == 400


def test_search_by_dob(client, jane, john):
    jane_record = _create(client, jane)
    john_record = _create(client, john)

    assert client.get(f"{BASE}/search/dob", params={"month": 6}).json() == [jane_record]
    assert client.get(f"{BASE}/search/dob", params={"year": 1988}).json() == [john_record]
    assert client.get(f"{BASE}/search/dob", params={"month": 11, "year": 1988}).json() == [john_record]
    assert client.get(f"{BASE}/search/dob", params={"month": 6, "year": 1988}).json() == []


@pytest.mark.parametrize(
    ("params", "message"),
    [
        ({}, "At least one of month or year is required"),
        ({"month": 13}, "Month must be between 1 and 12"),
        ({"month": "june"}, "Month must be between 1 and 12"),
        ({"year": 1899}, "Year must be between 1900 and current year"),
        ({"year": 2026}, "Year must be between 1900 and current year"),
    ],
)
def test_search_by_dob_rejects_bad_parameters(client, params, message):
    response = client.get(f"{BASE}/search/dob", params=params)

    assert response.status_code == 400
    assert response.json() == {"message": message}


def test_filter_by_position(client, jane, john):
    _create(client, jane)
    john_record = _create(client, john)

    assert client.get(f"{BASE}/filter/position", params={"position": "Manager"}).json() == [john_record]

    response = client.get(f"{BASE}/filter/position", params={"position": "Intern"})
    assert response.status_code == 400
    assert response.json() == {"message": "Position must be Staff or Manager"}

    response = client.get(f"{BASE}/filter/position")
    assert response.status_code == 400
    assert response.json() == {"message": "Position query parameter is required"}


def test_filter_by_department(client, jane, john):
    jane_record = _create(client, jane)
    _create(client, john)

    assert client.get(f"{BASE}/filter/department", params={"department": "Eng"}).json() == [jane_record]
    assert client.get(f"{BASE}/filter/department", params={"department": "eng"}).json() == []

    response = client.get(f"{BASE}/filter/department")
    assert response.status_code == 400
    assert response.json() == {"message": "Department query parameter is required"}


def test_storage_failure_returns_generic_500():
    class BrokenRepository(InMemoryEmployeeRepository):
        async def list_all(self):
            raise StorageError("connection reset by peer")

    app = create_app(settings=Settings(), repository=BrokenRepository())
    with TestClient(app) as client:
        response = client.get(BASE)

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}


@pytest.mark.anyio
async def test_async_create_and_list(async_client, jane):
    response = await async_client.post(BASE, json=jane)
    assert response.status_code == 201

    response = await async_client.get(BASE)
    assert response.status_code == 200
    assert [e["email"] for e in response.json()] == ["jane@x.com"]


def test_create_with_oversized_salary_is_rejected_and_store_stays_readable(client, jane):
    body = json.dumps(dict(jane, salary=10**400))

    response = client.post(BASE, content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "salary", "message": "Salary must be a number"}]

    response = client.get(BASE)
    assert response.status_code == 200
    assert response.json() == []
    assert client.get(f"{BASE}/search/name", params={"name": "jane"}).json() == []


def test_update_with_oversized_salary_keeps_record_intact(client, jane):
    created = _create(client, jane)
    body = json.dumps({"salary": 10**400})

    response = client.put(f"{BASE}/{created['id']}", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert client.get(f"{BASE}/{created['id']}").json() == created


def test_collection_routes_accept_trailing_slash(client, jane):
    response = client.post(f"{BASE}/", json=jane)
    assert response.status_code == 201

    response = client.get(f"{BASE}/")
    assert response.status_code == 200
    assert [e["email"] for e in response.json()] == ["jane@x.com"]
