# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from staffpay.models.enums import RemunerationCadence


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee in the stub directory."""

    name: str = Field(min_length=1, max_length=200)
    is_active: bool = True
    remuneration_cadence: RemunerationCadence | None = None
    remuneration_rate: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    base_salary: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class EmployeeResponse(BaseModel):
    """Response schema for an employee."""

    id: uuid.UUID
    company_id: uuid.UUID
    name: str
    is_active: bool
    remuneration_cadence: str | None
    remuneration_rate: Decimal | None
    base_salary: Decimal | None
    # Resolved values used by the payment engine.
    effective_cadence: RemunerationCadence
    effective_rate: Decimal | None


class EmployeeListResponse(BaseModel):
    """List of employees."""

    items: list[EmployeeResponse]
    total: int
