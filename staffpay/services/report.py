"""Reporting service: pending and paid payroll per competency, employee ledger listing."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from staffpay.config import get_settings
from staffpay.models.enums import RemunerationCadence
from staffpay.models.ledger import LedgerEntry
from staffpay.schemas.competency import Competency, fortnight_label
from staffpay.schemas.payment import LedgerListResponse
from staffpay.schemas.report import EmployeePaid, EmployeePending, PaidReport, PendingItem, PendingReport
from staffpay.services.employee import get_employee_service
from staffpay.services.payment import (
    _paid_fortnights,
    get_payments_for_competency,
    ledger_entry_to_response,
    payment_to_response,
)
from staffpay.services.period import due_fortnights, resolve_local_day
from staffpay.services.remuneration import resolve_remuneration

if TYPE_CHECKING:
    import uuid
    from datetime import date, datetime

    from sqlalchemy.ext.asyncio import AsyncSession

    from staffpay.models.payment import EmployeePayment

UNKNOWN_EMPLOYEE_NAME = "Funcionário"


async def compute_pending(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    month: int,
    *,
    now: datetime,
    timezone: str | None = None,
) -> PendingReport:
    """Due-but-unpaid periods of every active employee for a competency.

    Daily employees never appear. Items whose amount is unknown (no rate
    configured) are counted in ``total_pending_unknown`` and left out of
    ``total_amount``.
    """
    tz = timezone or get_settings().business_timezone
    today = resolve_local_day(now, tz)
    competency = Competency(year=year, month=month)

    employees = await get_employee_service().list_employees(company_id, active_only=True)
    payments = await get_payments_for_competency(session, company_id, year, month)

    by_employee: dict[uuid.UUID, list[EmployeePayment]] = defaultdict(list)
    for payment in payments:
        by_employee[payment.employee_id].append(payment)

    total_amount = Decimal("0")
    total_unknown = 0
    pending: list[EmployeePending] = []

    for employee in employees:
        cadence, rate = resolve_remuneration(employee)
        if cadence == RemunerationCadence.DAILY:
            continue

        recorded = by_employee.get(employee.id, [])
        items: list[PendingItem] = []

        if cadence == RemunerationCadence.MONTHLY:
            if not any(p.cadence == RemunerationCadence.MONTHLY.value for p in recorded):
                items.append(PendingItem(competency=competency, amount=rate, label=f"Mensal ({competency.reference})"))
        else:
            paid = _paid_fortnights(recorded)
            for fortnight in due_fortnights(year, month, today):
                if fortnight in paid:
                    continue
                items.append(
                    PendingItem(
                        competency=competency.with_fortnight(fortnight),
                        amount=rate,
                        label=f"{fortnight_label(fortnight)} ({competency.reference})",
                    )
                )

        if not items:
            continue

        for item in items:
            if item.amount is None:
                total_unknown += 1
            else:
                total_amount += item.amount

        pending.append(
            EmployeePending(
                employee_id=employee.id,
                name=employee.name,
                cadence=cadence,
                items=items,
            )
        )

    return PendingReport(
        competency=competency,
        employees=pending,
        total_amount=total_amount,
        total_pending_unknown=total_unknown,
    )


async def compute_paid(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    month: int,
) -> PaidReport:
    """Payments recorded for a competency, grouped by employee, largest total first."""
    payments = await get_payments_for_competency(session, company_id, year, month)
    employees = await get_employee_service().list_employees(company_id)
    names = {e.id: e.name for e in employees}

    grouped: dict[uuid.UUID, list[EmployeePayment]] = defaultdict(list)
    for payment in payments:
        grouped[payment.employee_id].append(payment)

    items = [
        EmployeePaid(
            employee_id=employee_id,
            name=names.get(employee_id, UNKNOWN_EMPLOYEE_NAME),
            total=sum((p.amount for p in recorded), Decimal("0")),
            count=len(recorded),
            payments=[payment_to_response(p) for p in recorded],
        )
        for employee_id, recorded in grouped.items()
    ]
    items.sort(key=lambda e: e.total, reverse=True)

    return PaidReport(
        competency=Competency(year=year, month=month),
        employees=items,
        total_amount=sum((e.total for e in items), Decimal("0")),
    )


async def list_employee_ledger(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    offset: int = 0,
    limit: int = 50,
) -> LedgerListResponse:
    """Ledger entries linked to an employee, newest first."""
    filters = [
        col(LedgerEntry.company_id) == company_id,
        col(LedgerEntry.employee_id) == employee_id,
    ]
    if start_date is not None:
        filters.append(col(LedgerEntry.entry_date) >= start_date)
    if end_date is not None:
        filters.append(col(LedgerEntry.entry_date) <= end_date)

    count_result = await session.execute(select(func.count()).select_from(LedgerEntry).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LedgerEntry)
        .where(*filters)
        .order_by(col(LedgerEntry.entry_date).desc(), col(LedgerEntry.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    entries = list(result.scalars().all())

    return LedgerListResponse(items=[ledger_entry_to_response(e) for e in entries], total=total)
