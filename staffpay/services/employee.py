# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class EmployeeInfo(BaseModel):
    """Employee record from the employee directory (read-only here)."""

    id: uuid.UUID
    company_id: uuid.UUID
    name: str
    is_active: bool = True
    remuneration_cadence: str | None = None  # "monthly", "biweekly" or "daily"
    remuneration_rate: Decimal | None = None
    base_salary: Decimal | None = None  # legacy field, fallback rate


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the employee directory."""

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        ...

    async def list_employees(self, company_id: uuid.UUID, *, active_only: bool = False) -> list[EmployeeInfo]:
        """List employees of a company, optionally only the active ones."""
        ...


class InMemoryEmployeeService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[tuple[uuid.UUID, uuid.UUID], EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Create or replace an employee."""
        self._employees[(employee.company_id, employee.id)] = employee

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        return self._employees.get((company_id, employee_id))

    async def list_employees(self, company_id: uuid.UUID, *, active_only: bool = False) -> list[EmployeeInfo]:
        return [
            e
            for e in self._employees.values()
            if e.company_id == company_id and (e.is_active or not active_only)
        ]


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """FastAPI dependency for the employee directory."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the service (for testing or production wiring)."""
    global _employee_service
    _employee_service = service
