"""
invest_portal.settings

Service configuration (Pydantic Settings).

Responsibilities:
- Read typed settings from `INVEST_*` environment variables.
- Keep the JWT secret out of repr/log output.
- Provide one cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration shared by the API, auth and persistence layers.
    Defaults target local development.
    """

    model_config = SettingsConfigDict(env_prefix="INVEST_", case_sensitive=False)

    # dev/test auto-create tables and seed baseline roles on startup.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "invest-portal"
    app_name: str = "Invest Portal"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "invest-portal"
    jwt_audience: str = "invest-portal-web"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./invest.db"

    # Seeded superadmin account (dev/test only)
    bootstrap_admin_email: str = "admin@invest.kz"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
