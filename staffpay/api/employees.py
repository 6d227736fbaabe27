# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from staffpay.api.deps import AdminDep, AuthDep, validate_company_scope
from staffpay.exceptions import NotFoundError
from staffpay.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from staffpay.services.employee import EmployeeInfo, get_employee_service
from staffpay.services.remuneration import resolve_remuneration

employees_router = APIRouter(
    prefix="/companies/{company_id}/employees",
    tags=["employees"],
    dependencies=[Depends(validate_company_scope)],
)


def _to_response(employee: EmployeeInfo) -> EmployeeResponse:
    cadence, rate = resolve_remuneration(employee)
    return EmployeeResponse(
        id=employee.id,
        company_id=employee.company_id,
        name=employee.name,
        is_active=employee.is_active,
        remuneration_cadence=employee.remuneration_cadence,
        remuneration_rate=employee.remuneration_rate,
        base_salary=employee.base_salary,
        effective_cadence=cadence,
        effective_rate=rate,
    )


@employees_router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def upsert_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create or update an employee in the stub directory (admin only)."""
    svc = get_employee_service()
    employee = EmployeeInfo(
        id=employee_id,
        company_id=company_id,
        name=payload.name,
        is_active=payload.is_active,
        remuneration_cadence=payload.remuneration_cadence.value if payload.remuneration_cadence else None,
        remuneration_rate=payload.remuneration_rate,
        base_salary=payload.base_salary,
    )
    svc.seed(employee)  # ty: ignore[unresolved-attribute]
    return _to_response(employee)


@employees_router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
)
async def get_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeResponse:
    """Get an employee from the directory."""
    employee = await get_employee_service().get_employee(company_id, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return _to_response(employee)


@employees_router.get(
    "",
    response_model=EmployeeListResponse,
)
async def list_employees(
    company_id: uuid.UUID,
    auth: AuthDep,
    active_only: bool = Query(default=False),
) -> EmployeeListResponse:
    """List the employees of a company."""
    employees = await get_employee_service().list_employees(company_id, active_only=active_only)
    items = [_to_response(e) for e in sorted(employees, key=lambda e: e.name)]
    return EmployeeListResponse(items=items, total=len(items))
