"""
Application settings.

All values are read from environment variables (or a local .env file) via
pydantic-settings. Import ``settings`` for the process-wide instance.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "cnebl-api"
    environment: str = "development"
    version: str = "0.2.0"
    log_level: str = "INFO"
    log_format: str = Field("console", description="'json' or 'console'")

    # Database
    database_url: Optional[str] = Field(None, description="peewee db_url, e.g. sqlite:///cnebl.db")
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "cnebl"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_max_connections: int = 20

    # Auth
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 30
    session_cookie_name: str = "cnebl_session"
    session_cookie_secure: bool = False
    password_reset_expire_minutes: int = 60
    email_verification_expire_hours: int = 24

    # Email
    app_url: str = "http://localhost:3000"
    development_mode: bool = True
    resend_api_key: Optional[str] = None
    email_from: str = "CNEBL <noreply@cnebl.com>"

    # HTTP
    cors_origins: list[str] = ["http://localhost:3000"]
    rate_limit_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
