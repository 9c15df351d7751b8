from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from employee_api.core.dependencies import get_employee_service
from employee_api.models.employee import Employee, MessageResponse
from employee_api.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])

# Search and filter routes are declared before "/{employee_id}" so they are not
# captured as ids.


@router.get("/search/name", response_model=list[Employee])
async def search_employees_by_name(
    name: str | None = None,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.search_by_name(name)


@router.get("/search/dob", response_model=list[Employee])
async def search_employees_by_dob(
    month: str | None = None,
    year: str | None = None,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.search_by_date_of_birth(month, year)


@router.get("/filter/position", response_model=list[Employee])
async def filter_employees_by_position(
    position: str | None = None,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.filter_by_position(position)


@router.get("/filter/department", response_model=list[Employee])
async def filter_employees_by_department(
    department: str | None = None,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.filter_by_department(department)


@router.get("", response_model=list[Employee])
@router.get("/", response_model=list[Employee], include_in_schema=False)
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.list_employees()


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=Employee, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_employee(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.create_employee(payload)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.get_employee(employee_id)


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    payload: dict[str, Any] = Body(...),  # noqa: B008
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    return await service.update_employee(employee_id, payload)


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),  # noqa: B008
):
    await service.delete_employee(employee_id)
    return MessageResponse(message="Employee deleted")
