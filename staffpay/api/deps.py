# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, Header, Path, status

from staffpay.config import get_settings
from staffpay.exceptions import AppError
from staffpay.schemas.auth import AuthContext


async def get_auth_context(
    x_company_id: uuid.UUID = Header(),
    x_user_id: uuid.UUID = Header(),
    x_role: str = Header(default="employee"),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(company_id=x_company_id, user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(
    auth: AuthDep,
) -> AuthContext:
    """Only admins may change the directory or record payments."""
    if not auth.is_admin:
        raise AppError("Admin access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


async def validate_company_scope(
    company_id: uuid.UUID = Path(),
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Ensure the path company_id matches the auth header company_id."""
    if not auth.belongs_to(company_id):
        raise AppError("Company ID mismatch", status_code=status.HTTP_403_FORBIDDEN)
    return auth


def get_now() -> datetime:
    """Current instant for competency math. Overridden in tests."""
    return datetime.now(UTC)


NowDep = Annotated[datetime, Depends(get_now)]


def get_business_timezone() -> str:
    """IANA timezone whose calendar decides competencies and due dates."""
    return get_settings().business_timezone


TimezoneDep = Annotated[str, Depends(get_business_timezone)]
