# ruff: noqa: B008, TC001, TC003
"""API endpoints for registering and listing employee payments."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from staffpay.api.deps import AdminDep, AuthDep, NowDep, TimezoneDep, validate_company_scope
from staffpay.db import SessionDep
from staffpay.exceptions import NotFoundError
from staffpay.models.enums import PaymentOutcomeStatus
from staffpay.schemas.payment import LedgerListResponse, PaymentOutcomeResponse, RegisterPaymentRequest
from staffpay.services import report as report_service
from staffpay.services.employee import get_employee_service
from staffpay.services.payment import PaymentOptions, outcome_to_response, register_payment

_STATUS_CODES: dict[PaymentOutcomeStatus, int] = {
    PaymentOutcomeStatus.CREATED: status.HTTP_201_CREATED,
    PaymentOutcomeStatus.ALREADY_PAID: status.HTTP_200_OK,
    PaymentOutcomeStatus.NOT_YET_DUE: status.HTTP_200_OK,
    PaymentOutcomeStatus.MISSING_RATE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    PaymentOutcomeStatus.WRITE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}

employee_payments_router = APIRouter(
    prefix="/companies/{company_id}/employees/{employee_id}/payments",
    tags=["payments"],
    dependencies=[Depends(validate_company_scope)],
)


@employee_payments_router.post("", response_model=PaymentOutcomeResponse)
async def create_payment(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: RegisterPaymentRequest,
    response: Response,
    session: SessionDep,
    auth: AdminDep,
    now: NowDep,
    timezone: TimezoneDep,
) -> PaymentOutcomeResponse:
    """Register a payment for an employee following their remuneration rules (admin only).

    Safe to retry: a competency that is already paid returns ALREADY_PAID
    instead of recording a second payment.
    """
    employee = await get_employee_service().get_employee(company_id, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")

    outcome = await register_payment(
        session,
        employee,
        PaymentOptions(
            competency_year=payload.competency_year,
            competency_month=payload.competency_month,
            fortnight=payload.fortnight,
            quantity_days=payload.quantity_days,
            rate_override=payload.rate_override,
            payment_date=payload.payment_date,
            actor_id=auth.user_id,
        ),
        now=now,
        timezone=timezone,
    )
    response.status_code = _STATUS_CODES[outcome.status]
    return outcome_to_response(outcome)


@employee_payments_router.get("", response_model=LedgerListResponse)
async def list_payments(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LedgerListResponse:
    """List ledger entries linked to an employee, newest first."""
    return await report_service.list_employee_ledger(
        session,
        company_id,
        employee_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )
