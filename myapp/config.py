"""
Configuration loading for MyApp.

Every setting is resolved from the process environment using a single rule:
a variable that is set to a non-empty value wins, otherwise the built-in
default applies. Absent values never raise; only the entrypoints that
genuinely need a value (e.g. `DATABASE_URL`) enforce it via
`require_database_url`.

The returned `Settings` object is immutable and is meant to be constructed
once at process start and handed to the components that need it.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "require_database_url",
]


DEFAULT_CORS_ALLOWED_ORIGINS = "http://localhost:3000"


class ConfigError(RuntimeError):
    """Raised when a required configuration value is missing."""


class Settings(BaseModel):
    """Immutable snapshot of environment-derived settings."""

    app_env: str = Field("development", description="Deployment environment name")
    app_name: str = Field("MyApp", description="Service display name")
    app_port: str = Field("8080", description="HTTP listen port")
    app_host: str = Field("0.0.0.0", description="HTTP listen host")

    db_host: str = "localhost"
    db_port: str = "5432"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "myapp_dev"
    db_ssl_mode: str = "disable"

    jwt_secret: str = "your-secret-key"
    jwt_expiration: str = "24h"
    jwt_refresh_secret: str = "your-refresh-secret"
    jwt_refresh_expiration: str = "168h"

    smtp_host: str = ""
    smtp_port: str = "587"
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_from_email: str = "noreply@example.com"
    smtp_from_name: str = "MyApp"

    sms_provider: str = "twilio"
    sms_account_sid: str = ""
    sms_auth_token: str = ""
    sms_from_number: str = ""

    qris_merchant_id: str = ""
    qris_merchant_name: str = ""
    qris_api_key: str = ""
    qris_api_secret: str = ""
    qris_environment: str = "sandbox"

    cors_allowed_origins: Tuple[str, ...] = Field(
        (DEFAULT_CORS_ALLOWED_ORIGINS,),
        description="Origins allowed by the CORS middleware",
    )

    log_level: str = Field("info", description="Log level name")
    log_format: str = Field("json", description="Log output format (json or console)")

    database_url: str = Field(
        "", description="Full database connection string (required by entrypoints)"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def is_production(self) -> bool:
        """Whether the service runs in release (terse) mode."""

        return self.app_env == "production"

    @property
    def listen_port(self) -> int:
        """Return `app_port` as an integer for the HTTP server."""

        return int(self.app_port)


def _field_env_key(field_name: str) -> str:
    return field_name.upper()


# Every field except the CORS list is a plain string resolved from the
# upper-cased field name.
_STRING_FIELDS = [
    name for name in Settings.model_fields if name != "cors_allowed_origins"
]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build `Settings` from an environment mapping.

    Args:
        environ: Mapping to read from. Defaults to `os.environ`.

    Returns:
        Settings populated with environment values, falling back to defaults.
    """

    env = os.environ if environ is None else environ
    defaults = Settings()

    values = {
        name: _env_or_default(env, _field_env_key(name), getattr(defaults, name))
        for name in _STRING_FIELDS
    }
    values["cors_allowed_origins"] = _split_origins(
        _env_or_default(env, "CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ALLOWED_ORIGINS)
    )

    return Settings(**values)


def require_database_url(settings: Settings) -> str:
    """
    Return the configured database URL.

    Raises:
        ConfigError: if `DATABASE_URL` was not provided.
    """

    if not settings.database_url:
        raise ConfigError("DATABASE_URL is required")
    return settings.database_url


def _env_or_default(env: Mapping[str, str], key: str, default: str) -> str:
    """Return the environment value if set and non-empty, else the default."""

    value = env.get(key)
    if value:
        return value
    return default


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or (DEFAULT_CORS_ALLOWED_ORIGINS,)
