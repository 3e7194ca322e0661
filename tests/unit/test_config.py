from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from foh.config import ConfigurationError, load_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DATABASE_URL",
        "REDIS_URL",
        "JWT_SECRET",
        "APP_ENV",
        "CORS_ALLOW_ORIGINS",
        "CURRENCY",
        "SEED_ON_STARTUP",
        "RELEASE_TABLE_ON_CANCEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_database_url_is_required() -> None:
    with pytest.raises(ConfigurationError):
        load_settings()


def test_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    settings = load_settings()

    assert settings.redis_url is None
    assert settings.currency == "INR"
    assert settings.session_ttl_minutes == 60
    assert settings.release_table_on_cancel is False
    assert settings.secure_cookies is False


def test_production_requires_jwt_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://foh@db/foh")
    monkeypatch.setenv("APP_ENV", "prod")

    with pytest.raises(ConfigurationError):
        load_settings()

    monkeypatch.setenv("JWT_SECRET", "s3cret")
    settings = load_settings()
    assert settings.secure_cookies is True


def test_flags_and_lists(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example ,")
    monkeypatch.setenv("SEED_ON_STARTUP", "yes")
    monkeypatch.setenv("RELEASE_TABLE_ON_CANCEL", "true")
    monkeypatch.setenv("CURRENCY", "usd")

    settings = load_settings()

    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")
    assert settings.seed_on_startup is True
    assert settings.release_table_on_cancel is True
    assert settings.currency == "USD"
