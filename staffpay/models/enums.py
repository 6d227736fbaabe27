from __future__ import annotations

import enum


class RemunerationCadence(enum.StrEnum):
    """How often an employee is paid."""

    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    DAILY = "daily"


class PaymentStatus(enum.StrEnum):
    """Status of a recorded employee payment. Only PAID is ever written."""

    PAID = "pago"


class TransactionType(enum.StrEnum):
    """Direction of a ledger entry."""

    EXPENSE = "expense"
    INCOME = "income"


class PaymentOutcomeStatus(enum.StrEnum):
    """Result of a payment registration attempt."""

    CREATED = "CREATED"
    ALREADY_PAID = "ALREADY_PAID"
    NOT_YET_DUE = "NOT_YET_DUE"
    MISSING_RATE = "MISSING_RATE"
    WRITE_FAILED = "WRITE_FAILED"
