from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import IntegrityError

from staffpay.models import EmployeePayment, LedgerEntry, SQLModel
from staffpay.models.enums import PaymentStatus, TransactionType

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

EXPECTED_TABLES = {
    "employee_payment",
    "ledger_entry",
}


def test_all_tables_registered() -> None:
    table_names = set(SQLModel.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(table_names)


def test_employee_payment_has_unique_idempotency_key() -> None:
    table = SQLModel.metadata.tables["employee_payment"]
    names = {c.name for c in table.constraints}
    assert "uq_employee_payment_idempotency" in names


def test_ledger_entry_defaults() -> None:
    entry = LedgerEntry(
        company_id=uuid.uuid4(),
        amount=Decimal("100.00"),
        description="Salário (mensal) - Ana - 03/2025",
        category="Funcionários",
        entry_date=date(2025, 3, 5),
    )
    assert entry.id is not None
    assert entry.created_at is not None
    assert entry.transaction_type == TransactionType.EXPENSE.value
    assert entry.is_paid is True
    assert entry.tags == []
    assert entry.employee_id is None


def test_employee_payment_defaults() -> None:
    payment = EmployeePayment(
        company_id=uuid.uuid4(),
        employee_id=uuid.uuid4(),
        amount=Decimal("1000.00"),
        payment_date=date(2025, 3, 20),
        reference="03/2025",
        cadence="biweekly",
        competency_year=2025,
        competency_month=3,
        competency_fortnight=1,
        ledger_entry_id=uuid.uuid4(),
    )
    assert payment.status == PaymentStatus.PAID.value
    assert payment.idempotency_key is None
    assert payment.quantity_days is None


async def test_null_idempotency_keys_do_not_conflict(db_session: AsyncSession) -> None:
    """Daily payments store no key and may repeat freely."""
    company_id = uuid.uuid4()
    employee_id = uuid.uuid4()
    for _ in range(2):
        entry = LedgerEntry(
            company_id=company_id,
            employee_id=employee_id,
            amount=Decimal("100.00"),
            description="Diária (1 dia) - Ana - 03/2025",
            category="Funcionários",
            entry_date=date(2025, 3, 5),
        )
        db_session.add(entry)
        await db_session.flush()
        db_session.add(
            EmployeePayment(
                company_id=company_id,
                employee_id=employee_id,
                amount=Decimal("100.00"),
                payment_date=date(2025, 3, 5),
                reference="03/2025",
                cadence="daily",
                competency_year=2025,
                competency_month=3,
                quantity_days=1,
                ledger_entry_id=entry.id,
            )
        )
    await db_session.commit()


async def test_duplicate_idempotency_key_is_rejected(db_session: AsyncSession) -> None:
    company_id = uuid.uuid4()
    employee_id = uuid.uuid4()
    entry = LedgerEntry(
        company_id=company_id,
        amount=Decimal("3000.00"),
        description="Salário (mensal) - Ana - 03/2025",
        category="Funcionários",
        entry_date=date(2025, 3, 5),
    )
    db_session.add(entry)
    await db_session.flush()

    key = f"payment:{company_id}:{employee_id}:2025-03:monthly"
    for _ in range(2):
        db_session.add(
            EmployeePayment(
                company_id=company_id,
                employee_id=employee_id,
                amount=Decimal("3000.00"),
                payment_date=date(2025, 3, 5),
                reference="03/2025",
                cadence="monthly",
                competency_year=2025,
                competency_month=3,
                ledger_entry_id=entry.id,
                idempotency_key=key,
            )
        )
    with pytest.raises(IntegrityError):
        await db_session.flush()
    await db_session.rollback()
