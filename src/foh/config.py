from __future__ import annotations

import os
from dataclasses import dataclass

_DEV_ENVIRONMENTS = {"dev", "test"}
_DEV_JWT_SECRET = "dev-only-session-secret"


class ConfigurationError(RuntimeError):
    pass


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _csv(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str
    redis_url: str | None = None
    jwt_secret: str = _DEV_JWT_SECRET
    app_env: str = "dev"
    log_level: str = "INFO"
    cors_allow_origins: tuple[str, ...] = ("http://localhost:3000",)
    currency: str = "INR"
    session_ttl_minutes: int = 60
    session_refresh_minutes: int = 15
    seed_on_startup: bool = False
    db_create_schema: bool = False
    release_table_on_cancel: bool = False
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "foh_menu"
    otel_service_name: str = "foh-backend"
    otel_exporter_otlp_endpoint: str | None = None

    @property
    def secure_cookies(self) -> bool:
        return self.app_env not in _DEV_ENVIRONMENTS


def load_settings() -> Settings:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ConfigurationError("DATABASE_URL is not set")

    app_env = os.getenv("APP_ENV", "dev").lower()
    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        if app_env not in _DEV_ENVIRONMENTS:
            raise ConfigurationError("JWT_SECRET is not set")
        jwt_secret = _DEV_JWT_SECRET

    return Settings(
        database_url=database_url,
        redis_url=os.getenv("REDIS_URL") or None,
        jwt_secret=jwt_secret,
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "http://localhost:3000"),
        currency=os.getenv("CURRENCY", "INR").upper(),
        session_ttl_minutes=int(os.getenv("SESSION_TTL_MINUTES", "60")),
        seed_on_startup=_flag("SEED_ON_STARTUP"),
        db_create_schema=_flag("DB_CREATE_SCHEMA"),
        release_table_on_cancel=_flag("RELEASE_TABLE_ON_CANCEL"),
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME") or None,
        cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY") or None,
        cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET") or None,
        cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", "foh_menu"),
        otel_service_name=os.getenv("OTEL_SERVICE_NAME", "foh-backend"),
        otel_exporter_otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
    )
