"""Unit tests for the competency value type and API request schemas."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from staffpay.models.enums import RemunerationCadence
from staffpay.schemas.competency import Competency, format_reference
from staffpay.schemas.employee import UpsertEmployeeRequest
from staffpay.schemas.payment import RegisterPaymentRequest

# ---------------------------------------------------------------------------
# Competency
# ---------------------------------------------------------------------------


def test_competency_equality_requires_all_fields() -> None:
    assert Competency(year=2025, month=3) == Competency(year=2025, month=3, fortnight=None)
    assert Competency(year=2025, month=3, fortnight=1) != Competency(year=2025, month=3, fortnight=2)
    assert Competency(year=2025, month=3, fortnight=1) != Competency(year=2025, month=3)
    assert Competency(year=2025, month=3) != Competency(year=2024, month=3)


def test_competency_is_hashable_and_immutable() -> None:
    competency = Competency(year=2025, month=3, fortnight=2)
    assert len({competency, Competency(year=2025, month=3, fortnight=2)}) == 1
    with pytest.raises(ValidationError):
        competency.month = 4  # type: ignore[misc]


def test_competency_labels() -> None:
    assert Competency(year=2025, month=3).label == "03/2025"
    assert Competency(year=2025, month=3, fortnight=1).label == "1ª quinzena de 03/2025"
    assert Competency(year=2025, month=11, fortnight=2).label == "2ª quinzena de 11/2025"


def test_competency_with_fortnight_returns_new_value() -> None:
    base = Competency(year=2025, month=3)
    second = base.with_fortnight(2)
    assert second.fortnight == 2
    assert base.fortnight is None


@pytest.mark.parametrize("month", [0, 13])
def test_competency_rejects_invalid_month(month: int) -> None:
    with pytest.raises(ValidationError):
        Competency(year=2025, month=month)


def test_competency_rejects_invalid_fortnight() -> None:
    with pytest.raises(ValidationError):
        Competency(year=2025, month=3, fortnight=3)  # type: ignore[arg-type]


def test_format_reference_pads_month() -> None:
    assert format_reference(2025, 1) == "01/2025"


# ---------------------------------------------------------------------------
# RegisterPaymentRequest
# ---------------------------------------------------------------------------


def test_register_payment_request_all_defaults() -> None:
    req = RegisterPaymentRequest()
    assert req.competency_year is None
    assert req.fortnight is None
    assert req.rate_override is None


def test_register_payment_request_full() -> None:
    req = RegisterPaymentRequest(
        competency_year=2025,
        competency_month=3,
        fortnight=2,
        quantity_days=3,
        rate_override=Decimal("150.00"),
        payment_date=date(2025, 3, 31),
    )
    assert req.fortnight == 2
    assert req.rate_override == Decimal("150.00")


def test_register_payment_request_year_requires_month() -> None:
    with pytest.raises(ValidationError, match="competency_month is required"):
        RegisterPaymentRequest(competency_year=2025)


def test_register_payment_request_month_alone_is_allowed() -> None:
    assert RegisterPaymentRequest(competency_month=2).competency_month == 2


@pytest.mark.parametrize(
    "payload",
    [
        {"fortnight": 3},
        {"quantity_days": 0},
        {"rate_override": "0"},
        {"rate_override": "-5"},
        {"competency_month": 13},
    ],
)
def test_register_payment_request_rejects_invalid(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        RegisterPaymentRequest.model_validate(payload)


# ---------------------------------------------------------------------------
# UpsertEmployeeRequest
# ---------------------------------------------------------------------------


def test_upsert_employee_request_defaults() -> None:
    req = UpsertEmployeeRequest(name="Ana")
    assert req.is_active is True
    assert req.remuneration_cadence is None


def test_upsert_employee_request_parses_cadence() -> None:
    req = UpsertEmployeeRequest.model_validate({"name": "Ana", "remuneration_cadence": "biweekly"})
    assert req.remuneration_cadence == RemunerationCadence.BIWEEKLY


def test_upsert_employee_request_rejects_unknown_cadence() -> None:
    with pytest.raises(ValidationError):
        UpsertEmployeeRequest.model_validate({"name": "Ana", "remuneration_cadence": "weekly"})
