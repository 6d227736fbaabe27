"""Resolve an employee's pay cadence and rate from the directory record."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from staffpay.models.enums import RemunerationCadence

if TYPE_CHECKING:
    from staffpay.services.employee import EmployeeInfo


def resolve_cadence(employee: EmployeeInfo) -> RemunerationCadence:
    """Explicit cadence when recognized, MONTHLY otherwise."""
    raw = (employee.remuneration_cadence or "").strip().lower()
    try:
        return RemunerationCadence(raw)
    except ValueError:
        return RemunerationCadence.MONTHLY


def resolve_rate(employee: EmployeeInfo) -> Decimal | None:
    """Remuneration rate, then legacy base salary, then None (unknown).

    Zero or negative values count as absent.
    """
    for candidate in (employee.remuneration_rate, employee.base_salary):
        if candidate is not None and candidate > 0:
            return Decimal(candidate)
    return None


def resolve_remuneration(employee: EmployeeInfo) -> tuple[RemunerationCadence, Decimal | None]:
    return resolve_cadence(employee), resolve_rate(employee)
