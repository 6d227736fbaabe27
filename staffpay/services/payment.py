"""Payment rule engine: decides whether an employee payment is due and records it.

Monthly employees are paid once per competency, biweekly employees once per
fortnight and daily employees once per call. Read-before-write idempotency is
backed by the unique ``employee_payment.idempotency_key`` column, so a
concurrent duplicate surfaces as ALREADY_PAID instead of a second payment.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import col

from staffpay.config import get_settings
from staffpay.models.enums import PaymentOutcomeStatus, PaymentStatus, RemunerationCadence, TransactionType
from staffpay.models.ledger import EMPLOYEE_PAYMENT_CATEGORY, EMPLOYEE_PAYMENT_SUBCATEGORY, LedgerEntry
from staffpay.models.payment import EmployeePayment
from staffpay.schemas.competency import Competency, Fortnight, format_reference
from staffpay.schemas.payment import (
    EmployeePaymentResponse,
    LedgerEntryResponse,
    PaymentOutcomeResponse,
    PaymentResultData,
)
from staffpay.services.period import due_fortnights, next_unpaid_fortnight, resolve_local_day
from staffpay.services.remuneration import resolve_remuneration

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from staffpay.services.employee import EmployeeInfo

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

CADENCE_LABELS: dict[RemunerationCadence, str] = {
    RemunerationCadence.MONTHLY: "mensal",
    RemunerationCadence.BIWEEKLY: "quinzenal",
    RemunerationCadence.DAILY: "diária",
}

_OK_STATUSES = frozenset(
    {PaymentOutcomeStatus.CREATED, PaymentOutcomeStatus.ALREADY_PAID, PaymentOutcomeStatus.NOT_YET_DUE}
)

# ---------------------------------------------------------------------------
# Options and outcome
# ---------------------------------------------------------------------------


@dataclass
class PaymentOptions:
    """Caller-supplied parameters for a payment registration."""

    competency_year: int | None = None
    competency_month: int | None = None
    fortnight: Fortnight | None = None
    quantity_days: int | None = None
    rate_override: Decimal | None = None
    payment_date: date | None = None
    actor_id: uuid.UUID | None = None


@dataclass
class PaymentOutcome:
    """Tagged result of ``register_payment``."""

    status: PaymentOutcomeStatus
    message: str
    competency: Competency | None = None
    amount: Decimal | None = None
    ledger_entry: LedgerEntry | None = None
    payment: EmployeePayment | None = None

    @property
    def ok(self) -> bool:
        return self.status in _OK_STATUSES

    @property
    def already_paid(self) -> bool:
        return self.status == PaymentOutcomeStatus.ALREADY_PAID


# ---------------------------------------------------------------------------
# Pure helpers (no DB)
# ---------------------------------------------------------------------------


def _build_idempotency_key(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    cadence: RemunerationCadence,
    competency: Competency,
) -> str | None:
    """Build the unique key for a payment; daily payments have none."""
    if cadence == RemunerationCadence.DAILY:
        return None
    key = f"payment:{company_id}:{employee_id}:{competency.year:04d}-{competency.month:02d}:{cadence.value}"
    if competency.fortnight is not None:
        key = f"{key}:{competency.fortnight}"
    return key


def _build_description(
    cadence: RemunerationCadence,
    employee_name: str,
    competency: Competency,
    quantity_days: int | None,
) -> str:
    if cadence == RemunerationCadence.MONTHLY:
        kind = "Salário (mensal)"
    elif cadence == RemunerationCadence.BIWEEKLY:
        kind = f"Salário (quinzenal {competency.fortnight}ª)"
    else:
        days = quantity_days or 1
        kind = f"Diária ({days} dia{'' if days == 1 else 's'})"
    return f"{kind} - {employee_name} - {competency.reference}"


def _effective_rate(override: Decimal | None, registered: Decimal | None) -> Decimal | None:
    if override is not None and override > 0:
        return Decimal(override)
    return registered


def _daily_amount(rate: Decimal, quantity_days: int) -> Decimal:
    return (rate * quantity_days).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _paid_fortnights(payments: list[EmployeePayment]) -> set[int]:
    return {
        p.competency_fortnight
        for p in payments
        if p.cadence == RemunerationCadence.BIWEEKLY.value and p.competency_fortnight in (1, 2)
    }


def payment_competency(payment: EmployeePayment) -> Competency:
    fortnight = payment.competency_fortnight if payment.competency_fortnight in (1, 2) else None
    return Competency(
        year=payment.competency_year,
        month=payment.competency_month,
        fortnight=fortnight,  # type: ignore[arg-type]
    )


def ledger_entry_to_response(entry: LedgerEntry) -> LedgerEntryResponse:
    return LedgerEntryResponse(
        id=entry.id,
        company_id=entry.company_id,
        employee_id=entry.employee_id,
        amount=entry.amount,
        description=entry.description,
        category=entry.category,
        subcategory=entry.subcategory,
        transaction_type=entry.transaction_type,
        entry_date=entry.entry_date,
        is_paid=entry.is_paid,
        tags=list(entry.tags or []),
        metadata_json=entry.metadata_json,
        created_by=entry.created_by,
        created_at=entry.created_at,
    )


def payment_to_response(payment: EmployeePayment) -> EmployeePaymentResponse:
    return EmployeePaymentResponse(
        id=payment.id,
        company_id=payment.company_id,
        employee_id=payment.employee_id,
        amount=payment.amount,
        payment_date=payment.payment_date,
        reference=payment.reference,
        cadence=payment.cadence,
        competency=payment_competency(payment),
        quantity_days=payment.quantity_days,
        ledger_entry_id=payment.ledger_entry_id,
        status=payment.status,
        created_at=payment.created_at,
    )


def outcome_to_response(outcome: PaymentOutcome) -> PaymentOutcomeResponse:
    data: PaymentResultData | None = None
    if outcome.ledger_entry is not None and outcome.payment is not None:
        data = PaymentResultData(
            ledger_entry=ledger_entry_to_response(outcome.ledger_entry),
            payment=payment_to_response(outcome.payment),
            competency=outcome.competency or payment_competency(outcome.payment),
            amount=outcome.amount if outcome.amount is not None else outcome.payment.amount,
        )
    return PaymentOutcomeResponse(
        status=outcome.status,
        ok=outcome.ok,
        already_paid=outcome.already_paid,
        message=outcome.message,
        data=data,
    )


# ---------------------------------------------------------------------------
# Payment-event store
# ---------------------------------------------------------------------------


async def get_payments_for_competency(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int,
    month: int,
    *,
    employee_id: uuid.UUID | None = None,
) -> list[EmployeePayment]:
    """Payments recorded for a competency, oldest first."""
    filters = [
        col(EmployeePayment.company_id) == company_id,
        col(EmployeePayment.competency_year) == year,
        col(EmployeePayment.competency_month) == month,
    ]
    if employee_id is not None:
        filters.append(col(EmployeePayment.employee_id) == employee_id)

    result = await session.execute(
        select(EmployeePayment).where(*filters).order_by(col(EmployeePayment.created_at), col(EmployeePayment.id))
    )
    return list(result.scalars().all())


async def _write_payment_records(
    session: AsyncSession,
    employee: EmployeeInfo,
    *,
    cadence: RemunerationCadence,
    competency: Competency,
    amount: Decimal,
    quantity_days: int | None,
    payment_date: date,
    actor_id: uuid.UUID | None,
) -> PaymentOutcome:
    """Insert the ledger entry and its payment event in one transaction.

    Either both rows are committed or neither is. A unique-key violation on the
    payment event means a concurrent call paid this competency first.
    """
    cadence_label = CADENCE_LABELS[cadence]
    entry = LedgerEntry(
        company_id=employee.company_id,
        employee_id=employee.id,
        amount=amount,
        description=_build_description(cadence, employee.name, competency, quantity_days),
        category=EMPLOYEE_PAYMENT_CATEGORY,
        subcategory=EMPLOYEE_PAYMENT_SUBCATEGORY,
        transaction_type=TransactionType.EXPENSE.value,
        entry_date=payment_date,
        is_paid=True,
        tags=["funcionário", "pagamento", cadence.value],
        metadata_json={
            "employee": {"id": str(employee.id), "name": employee.name},
            "cadence": cadence.value,
            "competency": competency.model_dump(),
            "quantity_days": quantity_days,
        },
        created_by=actor_id,
    )

    try:
        session.add(entry)
        await session.flush()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to write ledger entry for employee=%s competency=%s", employee.id, competency.label)
        return PaymentOutcome(
            status=PaymentOutcomeStatus.WRITE_FAILED,
            message="Não consegui registrar o gasto do pagamento. Tente novamente.",
            competency=competency,
        )

    payment = EmployeePayment(
        company_id=employee.company_id,
        employee_id=employee.id,
        amount=amount,
        payment_date=payment_date,
        reference=competency.reference,
        cadence=cadence.value,
        competency_year=competency.year,
        competency_month=competency.month,
        competency_fortnight=competency.fortnight,
        quantity_days=quantity_days,
        ledger_entry_id=entry.id,
        status=PaymentStatus.PAID.value,
        idempotency_key=_build_idempotency_key(employee.company_id, employee.id, cadence, competency),
    )

    try:
        session.add(payment)
        await session.flush()
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning(
            "Duplicate payment rejected by store for employee=%s competency=%s",
            employee.id,
            competency.label,
        )
        return PaymentOutcome(
            status=PaymentOutcomeStatus.ALREADY_PAID,
            message=f"*{employee.name}* já tem pagamento registrado para {competency.label}.",
            competency=competency,
        )
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Failed to write payment for employee=%s competency=%s", employee.id, competency.label)
        return PaymentOutcome(
            status=PaymentOutcomeStatus.WRITE_FAILED,
            message="Não consegui registrar o pagamento. Tente novamente.",
            competency=competency,
        )

    logger.info(
        "Recorded %s payment employee=%s competency=%s amount=%s",
        cadence.value,
        employee.id,
        competency.label,
        amount,
    )
    return PaymentOutcome(
        status=PaymentOutcomeStatus.CREATED,
        message=(
            f"Pronto! Registrei o pagamento de *{employee.name}* ({cadence_label}) "
            f"referente a {competency.label}."
        ),
        competency=competency,
        amount=amount,
        ledger_entry=entry,
        payment=payment,
    )


# ---------------------------------------------------------------------------
# Rule engine
# ---------------------------------------------------------------------------


async def register_payment(
    session: AsyncSession,
    employee: EmployeeInfo,
    options: PaymentOptions | None = None,
    *,
    now: datetime,
    timezone: str | None = None,
) -> PaymentOutcome:
    """Record a payment for ``employee`` if one is warranted.

    Args:
        session: Database session. Committed on success, rolled back on a
            failed write; untouched when nothing is written.
        employee: Directory record of the employee being paid.
        options: Competency, fortnight, day count, rate and date overrides.
        now: The trigger's current instant.
        timezone: Business timezone; defaults to the configured one.
    """
    options = options or PaymentOptions()
    tz = timezone or get_settings().business_timezone
    today = resolve_local_day(now, tz)

    year = options.competency_year or today.year
    month = options.competency_month or today.month
    competency = Competency(year=year, month=month)
    reference = format_reference(year, month)

    cadence, registered_rate = resolve_remuneration(employee)
    existing = await get_payments_for_competency(session, employee.company_id, year, month, employee_id=employee.id)

    quantity_days: int | None = None

    if cadence == RemunerationCadence.MONTHLY:
        if any(p.cadence == RemunerationCadence.MONTHLY.value for p in existing):
            logger.info("Monthly payment already recorded employee=%s competency=%s", employee.id, reference)
            return PaymentOutcome(
                status=PaymentOutcomeStatus.ALREADY_PAID,
                message=f"*{employee.name}* já tem pagamento mensal registrado em {reference}.",
                competency=competency,
            )

    elif cadence == RemunerationCadence.BIWEEKLY:
        paid = _paid_fortnights(existing)
        target: Fortnight | None = options.fortnight
        if target is None:
            due = due_fortnights(year, month, today)
            target = next_unpaid_fortnight(due, paid)
            if target is None:
                if not due:
                    return PaymentOutcome(
                        status=PaymentOutcomeStatus.NOT_YET_DUE,
                        message=(
                            f"Nenhuma quinzena de {reference} venceu ainda para *{employee.name}*. "
                            "Informe a quinzena para registrar um pagamento adiantado."
                        ),
                        competency=competency,
                    )
                if paid >= {1, 2}:
                    message = f"*{employee.name}* já tem as duas quinzenas pagas em {reference}."
                else:
                    message = (
                        f"*{employee.name}* já tem as quinzenas devidas pagas em {reference}; "
                        "a 2ª quinzena ainda não venceu."
                    )
                return PaymentOutcome(
                    status=PaymentOutcomeStatus.ALREADY_PAID,
                    message=message,
                    competency=competency,
                )

        competency = competency.with_fortnight(target)
        if target in paid:
            return PaymentOutcome(
                status=PaymentOutcomeStatus.ALREADY_PAID,
                message=f"*{employee.name}* já tem pagamento registrado para a {competency.label}.",
                competency=competency,
            )

    else:
        quantity_days = options.quantity_days if options.quantity_days and options.quantity_days > 0 else 1

    rate = _effective_rate(options.rate_override, registered_rate)
    if rate is None:
        logger.info("No remuneration rate configured for employee=%s", employee.id)
        return PaymentOutcome(
            status=PaymentOutcomeStatus.MISSING_RATE,
            message=(
                f"O funcionário *{employee.name}* não tem valor de remuneração cadastrado. "
                "Cadastre o valor no funcionário para registrar o pagamento automaticamente."
            ),
            competency=competency,
        )

    if quantity_days is not None:
        amount = _daily_amount(rate, quantity_days)
    else:
        amount = rate.quantize(_CENTS, rounding=ROUND_HALF_UP)

    return await _write_payment_records(
        session,
        employee,
        cadence=cadence,
        competency=competency,
        amount=amount,
        quantity_days=quantity_days,
        payment_date=options.payment_date or today.as_date(),
        actor_id=options.actor_id,
    )
