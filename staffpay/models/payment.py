# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from staffpay.models.base import TimestampMixin, UUIDBase, money_field
from staffpay.models.enums import PaymentStatus


class EmployeePayment(UUIDBase, TimestampMixin, table=True):
    """Immutable record that an employee was paid for a competency.

    ``idempotency_key`` is unique per (company, employee, competency, cadence
    [, fortnight]) and NULL for daily payments, which are never deduplicated.
    """

    __tablename__ = "employee_payment"
    __table_args__ = (
        sa.Index("ix_employee_payment_competency", "company_id", "competency_year", "competency_month"),
        sa.UniqueConstraint("idempotency_key", name="uq_employee_payment_idempotency"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    amount: Decimal = money_field()
    payment_date: date
    reference: str = Field(max_length=7)
    cadence: str = Field(max_length=20)
    competency_year: int
    competency_month: int
    competency_fortnight: int | None = Field(default=None)
    quantity_days: int | None = Field(default=None)
    ledger_entry_id: uuid.UUID = Field(
        sa_column=sa.Column(sa.Uuid, sa.ForeignKey("ledger_entry.id", ondelete="RESTRICT"), nullable=False),
    )
    status: str = Field(default=PaymentStatus.PAID.value, max_length=20)
    idempotency_key: str | None = Field(default=None, max_length=255)
