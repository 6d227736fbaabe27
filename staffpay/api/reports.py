# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from staffpay.api.deps import AuthDep, NowDep, TimezoneDep, validate_company_scope
from staffpay.db import SessionDep
from staffpay.schemas.report import PaidReport, PendingReport
from staffpay.services import report as report_service
from staffpay.services.period import current_competency

reports_router = APIRouter(
    prefix="/companies/{company_id}/payroll",
    tags=["reports"],
    dependencies=[Depends(validate_company_scope)],
)


@reports_router.get(
    "/pending",
    response_model=PendingReport,
)
async def get_pending(
    company_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
    timezone: TimezoneDep,
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
) -> PendingReport:
    """Due-but-unpaid employee payments for a competency (default: current month)."""
    current = current_competency(now, timezone)
    return await report_service.compute_pending(
        session,
        company_id,
        year or current.year,
        month or current.month,
        now=now,
        timezone=timezone,
    )


@reports_router.get(
    "/paid",
    response_model=PaidReport,
)
async def get_paid(
    company_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
    timezone: TimezoneDep,
    year: int | None = Query(default=None, ge=2000, le=2100),
    month: int | None = Query(default=None, ge=1, le=12),
) -> PaidReport:
    """Employee payments recorded in a competency (default: current month)."""
    current = current_competency(now, timezone)
    return await report_service.compute_paid(
        session,
        company_id,
        year or current.year,
        month or current.month,
    )
