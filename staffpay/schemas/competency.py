"""Competency: the accounting period a payment refers to."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Fortnight = Literal[1, 2]


def format_reference(year: int, month: int) -> str:
    """Return the ``MM/YYYY`` label used in descriptions and reports."""
    return f"{month:02d}/{year}"


def fortnight_label(fortnight: int) -> str:
    return f"{fortnight}ª quinzena"


class Competency(BaseModel):
    """Year, month and optional half-month of a payment.

    ``fortnight=None`` means the whole month (monthly and daily cadences).
    Instances are immutable and compare equal when all three fields match.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)
    fortnight: Fortnight | None = None

    @property
    def reference(self) -> str:
        return format_reference(self.year, self.month)

    @property
    def label(self) -> str:
        """Human label, e.g. ``2ª quinzena de 03/2025`` or ``03/2025``."""
        if self.fortnight is None:
            return self.reference
        return f"{fortnight_label(self.fortnight)} de {self.reference}"

    def with_fortnight(self, fortnight: Fortnight | None) -> Competency:
        return Competency(year=self.year, month=self.month, fortnight=fortnight)
