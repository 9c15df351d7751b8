"""HTTP client for the employee REST API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class EmployeeApiError(Exception):
    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


class EmployeeApiClient:
    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def employees_url(self) -> str:
        return f"{self.base_url}/api/employees"

    async def _request(
        self,
        method: str,
        path: str = "",
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.employees_url}{path}"
        if params:
            params = {k: str(v) for k, v in params.items() if v is not None}

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(method, url, params=params, json=json) as response:
                if 200 <= response.status < 300:
                    return await response.json()

                message = await self._error_message(response)
                logger.warning("%s %s failed: %s - %s", method, url, response.status, message)
                raise EmployeeApiError(response.status, message)

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return await response.text()
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return str(data)

    async def list_employees(self) -> list[dict[str, Any]]:
        return await self._request("GET")

    async def get_employee(self, employee_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/{employee_id}")

    async def create_employee(self, employee: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", json=employee)

    async def update_employee(self, employee_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/{employee_id}", json=changes)

    async def delete_employee(self, employee_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/{employee_id}")

    async def search_by_name(self, name: str) -> list[dict[str, Any]]:
        return await self._request("GET", "/search/name", params={"name": name})

    async def search_by_date_of_birth(
        self,
        month: int | None = None,
        year: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self._request("GET", "/search/dob", params={"month": month, "year": year})

    async def filter_by_position(self, position: str) -> list[dict[str, Any]]:
        return await self._request("GET", "/filter/position", params={"position": position})

    async def filter_by_department(self, department: str) -> list[dict[str, Any]]:
        return await self._request("GET", "/filter/department", params={"department": department})
