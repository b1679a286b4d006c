from __future__ import annotations

from functools import lru_cache
from urllib.parse import quote

from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "League Tee Sheet API"
    app_env: str = "development"
    app_debug: bool = False
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    app_log_level: str = "INFO"
    app_log_json: bool = True
    app_log_requests: bool = True
    app_docs_enabled: bool = True
    app_cors_origins: list[str] = []
    app_cors_allow_credentials: bool = True
    app_cors_allow_methods: list[str] = ["*"]
    app_cors_allow_headers: list[str] = ["*"]

    # If set, this value has priority over component-based database settings.
    database_url: str = ""

    # PostgreSQL components
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "league_tee_sheet"
    db_user: str = "postgres"
    db_password: str = ""
    db_timezone: str = "UTC"

    # SQLAlchemy/asyncpg runtime tuning
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_timeout_s: int = 30
    db_pool_recycle_s: int = 1800

    # Auth/JWT
    auth_jwt_secret: str = ""
    auth_jwt_algorithm: str = "HS256"
    auth_access_token_ttl_minutes: int = 60

    # League defaults used for manual tee times and omitted template fields
    league_default_timezone: str = "America/New_York"
    league_default_max_slots: int = 4
    league_booking_opens_days_before: int = 7
    league_booking_opens_time: str = "21:00"
    league_booking_closes_days_before: int = 2
    league_booking_closes_time: str = "18:00"
    league_max_strokes_given: int = 20

    @model_validator(mode="after")
    def validate_auth_security(self) -> Settings:
        env = self.app_env.strip().lower()
        if env not in {"production", "prod"}:
            return self

        secret = self.auth_jwt_secret.strip()
        weak_values = {
            "",
            "changeme",
            "change-me",
            "dev-change-me",
            "secret",
            "jwt-secret",
        }
        if secret.lower() in weak_values:
            raise ValueError(
                "auth_jwt_secret is required in production and cannot be empty/weak."
            )
        if len(secret) < 32:
            raise ValueError(
                "auth_jwt_secret must be at least 32 characters in production."
            )
        return self

    @computed_field
    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url.strip():
            return self.database_url
        return (
            f"postgresql+asyncpg://{quote(self.db_user, safe='')}:{quote(self.db_password, safe='')}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @computed_field
    @property
    def docs_url(self) -> str | None:
        return "/docs" if self.app_docs_enabled else None

    @computed_field
    @property
    def redoc_url(self) -> str | None:
        return "/redoc" if self.app_docs_enabled else None

    @property
    def uses_sqlite(self) -> bool:
        return self.sqlalchemy_database_url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
