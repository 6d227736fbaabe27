from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

# Two decimal places; amounts are quantized to cents before they are stored.
MONEY_TYPE = sa.Numeric(12, 2)


def _now_utc() -> datetime:
    return datetime.now(UTC)


def money_field(**kwargs: Any) -> Any:
    """Field for a monetary amount stored as NUMERIC(12, 2) and read back as Decimal."""
    return Field(sa_type=MONEY_TYPE, **kwargs)


class UUIDBase(SQLModel):
    """Base model with a client-generated UUID primary key."""

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_type=sa.Uuid,
    )


class TimestampMixin(SQLModel):
    """Insert timestamp. Ledger and payment rows are never updated, so there is no updated_at."""

    created_at: datetime = Field(
        default_factory=_now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
