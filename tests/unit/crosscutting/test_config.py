"""
Name: Settings Tests

Responsibilities:
  - Defaults for the reset-token and pool settings
  - Production hardening rules
  - Field validators and pool bounds
"""

import pytest
from pydantic import ValidationError

from catait.crosscutting.config import Settings, get_settings

pytestmark = pytest.mark.unit

DB_URL = "postgresql://u:p@localhost:5432/catait"


def test_defaults():
    s = Settings(database_url=DB_URL)

    assert s.reset_token_ttl_minutes == 30
    assert s.reset_token_bytes == 32
    assert s.password_min_length == 6
    assert s.db_pool_max_size == 10
    assert s.expose_error_details is False
    assert s.error_details_enabled() is False


def test_allowed_origins_are_split_and_trimmed():
    s = Settings(database_url=DB_URL, allowed_origins=" http://a.test , ,http://b.test")

    assert s.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


def test_production_requires_hardening():
    with pytest.raises(ValidationError):
        Settings(database_url=DB_URL, app_env="production")


def test_production_rejects_error_details():
    with pytest.raises(ValidationError):
        Settings(
            database_url=DB_URL,
            app_env="production",
            metrics_require_auth=True,
            api_keys_config='{"k": ["cards:admin"]}',
            expose_error_details=True,
        )


def test_production_with_hardening_is_accepted():
    s = Settings(
        database_url=DB_URL,
        app_env="Production",
        metrics_require_auth=True,
        api_keys_config='{"k": ["cards:admin"]}',
    )

    assert s.is_production()
    assert s.error_details_enabled() is False


def test_error_details_enabled_outside_production():
    s = Settings(database_url=DB_URL, expose_error_details=True)

    assert s.error_details_enabled() is True


@pytest.mark.parametrize(
    "field,value",
    [
        ("reset_token_ttl_minutes", 0),
        ("reset_token_bytes", 8),
        ("password_min_length", 0),
    ],
)
def test_field_validators(field, value):
    with pytest.raises(ValidationError):
        Settings(database_url=DB_URL, **{field: value})


def test_pool_bounds_are_checked():
    s = Settings(database_url=DB_URL, db_pool_min_size=5, db_pool_max_size=2)

    with pytest.raises(ValueError, match="db_pool_max_size"):
        s.validate_pool_params()


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("RESET_TOKEN_TTL_MINUTES", "15")

    assert get_settings().reset_token_ttl_minutes == 15


def test_missing_database_url_fails(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(ValidationError):
        Settings()
