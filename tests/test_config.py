from __future__ import annotations

import pytest
from pydantic import ValidationError

from staffpay.config import Settings
from staffpay.db import _engine_options


def test_defaults() -> None:
    settings = Settings(_env_file=None)  # ty: ignore[unknown-argument]
    assert settings.business_timezone == "America/Sao_Paulo"
    assert settings.log_level == "INFO"


def test_unknown_timezone_is_rejected() -> None:
    with pytest.raises(ValidationError, match="unknown IANA timezone"):
        Settings(_env_file=None, business_timezone="Nowhere/Atlantis")  # ty: ignore[unknown-argument]


def test_log_level_is_case_insensitive() -> None:
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"  # ty: ignore[unknown-argument]


def test_engine_options_skip_pool_sizing_for_sqlite() -> None:
    sqlite = Settings(_env_file=None, database_url="sqlite+aiosqlite://")  # ty: ignore[unknown-argument]
    postgres = Settings(_env_file=None, database_pool_size=20)  # ty: ignore[unknown-argument]

    assert "pool_size" not in _engine_options(sqlite)
    assert _engine_options(postgres)["pool_size"] == 20
