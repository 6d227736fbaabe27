"""Calendar math for competencies: local business date and due fortnights.

Every function here takes "now" explicitly; none of them reads the clock.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo

from staffpay.schemas.competency import Competency, Fortnight

# Last day (inclusive) of the first fortnight.
FIRST_FORTNIGHT_LAST_DAY = 15


class LocalDay(NamedTuple):
    """Calendar date in the business timezone."""

    year: int
    month: int
    day: int

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)


def resolve_local_day(now: datetime, timezone: str) -> LocalDay:
    """Return the calendar date of ``now`` in ``timezone``.

    A naive ``now`` is interpreted as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    local = now.astimezone(ZoneInfo(timezone))
    return LocalDay(local.year, local.month, local.day)


def fortnight_for_day(day: int) -> Fortnight:
    """Fortnight a day of the month falls in."""
    return 1 if day <= FIRST_FORTNIGHT_LAST_DAY else 2


def current_competency(now: datetime, timezone: str) -> Competency:
    """Whole-month competency containing ``now``."""
    today = resolve_local_day(now, timezone)
    return Competency(year=today.year, month=today.month)


def due_fortnights(year: int, month: int, today: LocalDay) -> tuple[Fortnight, ...]:
    """Fortnights of ``(year, month)`` that are payable as of ``today``.

    Future months owe nothing, past months owe both halves and the current
    month owes the second half only after the 15th.
    """
    target = (year, month)
    current = (today.year, today.month)
    if target > current:
        return ()
    if target < current:
        return (1, 2)
    if today.day <= FIRST_FORTNIGHT_LAST_DAY:
        return (1,)
    return (1, 2)


def next_unpaid_fortnight(due: tuple[Fortnight, ...], paid: set[int] | frozenset[int]) -> Fortnight | None:
    """Smallest due fortnight without a recorded payment, or None."""
    remaining = [f for f in due if f not in paid]
    if not remaining:
        return None
    return min(remaining)
