# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

from staffpay.models.enums import PaymentOutcomeStatus
from staffpay.schemas.competency import Competency, Fortnight


class RegisterPaymentRequest(BaseModel):
    """Request body for POST /companies/{company_id}/employees/{employee_id}/payments.

    Every field is optional: by default the engine pays the current competency
    at the rate registered for the employee.
    """

    competency_year: int | None = Field(default=None, ge=2000, le=2100)
    competency_month: int | None = Field(default=None, ge=1, le=12)
    fortnight: Fortnight | None = None
    quantity_days: int | None = Field(default=None, ge=1, le=31)
    rate_override: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    payment_date: date | None = None

    @model_validator(mode="after")
    def _validate_competency(self) -> Self:
        if self.competency_year is not None and self.competency_month is None:
            msg = "competency_month is required when competency_year is given"
            raise ValueError(msg)
        return self


class LedgerEntryResponse(BaseModel):
    """Response schema for a ledger entry."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID | None
    amount: Decimal
    description: str
    category: str
    subcategory: str | None
    transaction_type: str
    entry_date: date
    is_paid: bool
    tags: list[str]
    metadata_json: dict[str, Any] | None
    created_by: uuid.UUID | None
    created_at: datetime


class LedgerListResponse(BaseModel):
    """Paginated list of ledger entries."""

    items: list[LedgerEntryResponse]
    total: int


class EmployeePaymentResponse(BaseModel):
    """Response schema for a recorded employee payment."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID
    amount: Decimal
    payment_date: date
    reference: str
    cadence: str
    competency: Competency
    quantity_days: int | None
    ledger_entry_id: uuid.UUID
    status: str
    created_at: datetime


class PaymentResultData(BaseModel):
    """Records produced by a successful registration."""

    ledger_entry: LedgerEntryResponse
    payment: EmployeePaymentResponse
    competency: Competency
    amount: Decimal


class PaymentOutcomeResponse(BaseModel):
    """Outcome of a payment registration.

    ``ok`` is true for CREATED, ALREADY_PAID and NOT_YET_DUE.
    """

    status: PaymentOutcomeStatus
    ok: bool
    already_paid: bool
    message: str
    data: PaymentResultData | None = None
