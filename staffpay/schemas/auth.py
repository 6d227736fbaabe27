# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, field_validator

ADMIN_ROLE = "admin"


class AuthContext(BaseModel):
    """Caller identity taken from the dev auth headers.

    ``user_id`` is recorded as ``created_by`` on the ledger entries the caller writes.
    """

    company_id: uuid.UUID
    user_id: uuid.UUID
    role: str = "employee"

    @field_validator("role")
    @classmethod
    def _normalize_role(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def belongs_to(self, company_id: uuid.UUID) -> bool:
        return self.company_id == company_id
