from sqlmodel import SQLModel

from staffpay.models.base import TimestampMixin, UUIDBase
from staffpay.models.enums import PaymentOutcomeStatus, PaymentStatus, RemunerationCadence, TransactionType
from staffpay.models.ledger import LedgerEntry
from staffpay.models.payment import EmployeePayment

__all__ = [
    "EmployeePayment",
    "LedgerEntry",
    "PaymentOutcomeStatus",
    "PaymentStatus",
    "RemunerationCadence",
    "SQLModel",
    "TimestampMixin",
    "TransactionType",
    "UUIDBase",
]
