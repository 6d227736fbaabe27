# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel

from staffpay.models.enums import RemunerationCadence
from staffpay.schemas.competency import Competency
from staffpay.schemas.payment import EmployeePaymentResponse

# ---------------------------------------------------------------------------
# Pending report
# ---------------------------------------------------------------------------


class PendingItem(BaseModel):
    """One due-but-unpaid period. ``amount`` is None when the rate is unknown."""

    competency: Competency
    amount: Decimal | None
    label: str


class EmployeePending(BaseModel):
    """Outstanding periods for one employee."""

    employee_id: uuid.UUID
    name: str
    cadence: RemunerationCadence
    items: list[PendingItem]


class PendingReport(BaseModel):
    """Outstanding liability of a company for a competency."""

    competency: Competency
    employees: list[EmployeePending]
    total_amount: Decimal
    total_pending_unknown: int


# ---------------------------------------------------------------------------
# Paid report
# ---------------------------------------------------------------------------


class EmployeePaid(BaseModel):
    """Payments recorded for one employee in a competency."""

    employee_id: uuid.UUID
    name: str
    total: Decimal
    count: int
    payments: list[EmployeePaymentResponse]


class PaidReport(BaseModel):
    """Payments recorded in a competency grouped by employee."""

    competency: Competency
    employees: list[EmployeePaid]
    total_amount: Decimal
