"""Tests for local business date resolution and the due-fortnight calculator."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from staffpay.schemas.competency import Competency
from staffpay.services.period import (
    LocalDay,
    current_competency,
    due_fortnights,
    fortnight_for_day,
    next_unpaid_fortnight,
    resolve_local_day,
)

SAO_PAULO = "America/Sao_Paulo"


class TestResolveLocalDay:
    """Tests for resolve_local_day."""

    def test_same_day_in_business_timezone(self) -> None:
        assert resolve_local_day(datetime(2025, 3, 20, 15, 0, tzinfo=UTC), SAO_PAULO) == LocalDay(2025, 3, 20)

    def test_utc_after_midnight_is_previous_local_day(self) -> None:
        """02:00 UTC on the 16th is still 23:00 on the 15th in Sao Paulo (UTC-3)."""
        assert resolve_local_day(datetime(2025, 3, 16, 2, 0, tzinfo=UTC), SAO_PAULO) == LocalDay(2025, 3, 15)

    def test_month_boundary(self) -> None:
        """01:00 UTC on 1 April is still 31 March locally."""
        assert resolve_local_day(datetime(2025, 4, 1, 1, 0, tzinfo=UTC), SAO_PAULO) == LocalDay(2025, 3, 31)

    def test_year_boundary(self) -> None:
        assert resolve_local_day(datetime(2026, 1, 1, 2, 59, tzinfo=UTC), SAO_PAULO) == LocalDay(2025, 12, 31)

    def test_naive_datetime_is_utc(self) -> None:
        assert resolve_local_day(datetime(2025, 3, 16, 2, 0), SAO_PAULO) == LocalDay(2025, 3, 15)

    def test_other_offsets_are_converted(self) -> None:
        tokyo_morning = datetime(2025, 3, 16, 8, 0, tzinfo=timezone(timedelta(hours=9)))
        assert resolve_local_day(tokyo_morning, SAO_PAULO) == LocalDay(2025, 3, 15)

    def test_as_date(self) -> None:
        assert LocalDay(2025, 3, 15).as_date().isoformat() == "2025-03-15"


class TestFortnightForDay:
    """Tests for fortnight_for_day."""

    @pytest.mark.parametrize("day", [1, 10, 15])
    def test_first_half(self, day: int) -> None:
        assert fortnight_for_day(day) == 1

    @pytest.mark.parametrize("day", [16, 28, 31])
    def test_second_half(self, day: int) -> None:
        assert fortnight_for_day(day) == 2


class TestCurrentCompetency:
    """Tests for current_competency."""

    def test_whole_month(self) -> None:
        competency = current_competency(datetime(2025, 3, 20, 15, 0, tzinfo=UTC), SAO_PAULO)
        assert competency == Competency(year=2025, month=3)
        assert competency.fortnight is None

    def test_uses_business_calendar(self) -> None:
        competency = current_competency(datetime(2025, 4, 1, 1, 0, tzinfo=UTC), SAO_PAULO)
        assert competency == Competency(year=2025, month=3)


class TestDueFortnights:
    """Tests for due_fortnights across past, current and future months."""

    def test_future_month_owes_nothing(self) -> None:
        assert due_fortnights(2025, 4, LocalDay(2025, 3, 31)) == ()

    def test_future_year_owes_nothing(self) -> None:
        assert due_fortnights(2026, 1, LocalDay(2025, 12, 31)) == ()

    def test_past_month_owes_both(self) -> None:
        assert due_fortnights(2025, 2, LocalDay(2025, 3, 1)) == (1, 2)

    def test_past_year_owes_both_even_for_later_month(self) -> None:
        assert due_fortnights(2024, 12, LocalDay(2025, 1, 2)) == (1, 2)

    def test_current_month_first_half(self) -> None:
        assert due_fortnights(2025, 3, LocalDay(2025, 3, 1)) == (1,)

    def test_current_month_on_the_fifteenth(self) -> None:
        assert due_fortnights(2025, 3, LocalDay(2025, 3, 15)) == (1,)

    def test_current_month_after_the_fifteenth(self) -> None:
        assert due_fortnights(2025, 3, LocalDay(2025, 3, 16)) == (1, 2)

    def test_monotonic_as_now_advances(self) -> None:
        """The due set only grows as "now" moves forward through the calendar."""
        days = [
            LocalDay(2025, 2, 28),
            LocalDay(2025, 3, 1),
            LocalDay(2025, 3, 15),
            LocalDay(2025, 3, 16),
            LocalDay(2025, 3, 31),
            LocalDay(2025, 4, 1),
        ]
        sizes = [len(due_fortnights(2025, 3, d)) for d in days]
        assert sizes == [0, 1, 1, 2, 2, 2]


class TestNextUnpaidFortnight:
    """Tests for next_unpaid_fortnight."""

    def test_nothing_due(self) -> None:
        assert next_unpaid_fortnight((), set()) is None

    def test_first_open(self) -> None:
        assert next_unpaid_fortnight((1, 2), set()) == 1

    def test_second_after_first_paid(self) -> None:
        assert next_unpaid_fortnight((1, 2), {1}) == 2

    def test_first_when_only_second_paid(self) -> None:
        """An advance payment of the 2nd fortnight leaves the 1st open."""
        assert next_unpaid_fortnight((1, 2), {2}) == 1

    def test_all_paid(self) -> None:
        assert next_unpaid_fortnight((1, 2), {1, 2}) is None

    def test_only_first_due_and_paid(self) -> None:
        assert next_unpaid_fortnight((1,), {1}) is None
