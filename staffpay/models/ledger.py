# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from staffpay.models.base import TimestampMixin, UUIDBase, money_field
from staffpay.models.enums import TransactionType

EMPLOYEE_PAYMENT_CATEGORY = "Funcionários"
EMPLOYEE_PAYMENT_SUBCATEGORY = "salário"


class LedgerEntry(UUIDBase, TimestampMixin, table=True):
    """Company expense/income entry. Employee disbursements are always paid expenses."""

    __tablename__ = "ledger_entry"
    __table_args__ = (sa.Index("ix_ledger_entry_company_employee", "company_id", "employee_id"),)

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID | None = Field(default=None, index=True)
    amount: Decimal = money_field()
    description: str = Field(max_length=500)
    category: str = Field(max_length=100)
    subcategory: str | None = Field(default=None, max_length=100)
    transaction_type: str = Field(default=TransactionType.EXPENSE.value, max_length=20)
    entry_date: date
    is_paid: bool = Field(default=True)
    tags: list[str] = Field(default_factory=list, sa_type=sa.JSON)
    metadata_json: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    created_by: uuid.UUID | None = Field(default=None)
