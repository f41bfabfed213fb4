"""
config.py — pydantic-settings Settings class.

All environment variables for the Akwaaba Homes backend are declared here.
Both the API and the admin CLI import `settings` from this module.

Usage:
    from akwaaba_shared.config import settings
    print(settings.supabase_url)
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_dotenv() -> Path | None:
    """Walk up from CWD to find the nearest .env file."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        candidate = parent / ".env"
        if candidate.is_file():
            return candidate
    return None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_find_dotenv() or ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    supabase_url: str = Field(default="http://localhost:54321")
    supabase_anon_key: str = Field(default="")
    supabase_service_key: str = Field(default="")
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_audience: str = Field(default="authenticated")
    session_cookie_name: str = Field(default="sb-access-token")
    session_cookie_secure: bool = Field(default=True)

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    property_images_bucket: str = Field(default="property-images")
    avatars_bucket: str = Field(default="avatars")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024)

    # -------------------------------------------------------------------------
    # API server
    # -------------------------------------------------------------------------
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:3001")

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Rate limits: requests per window, per client IP
    rate_limit_requests: int = Field(default=300)
    rate_limit_window_seconds: int = Field(default=60)
    auth_rate_limit_requests: int = Field(default=5)
    auth_rate_limit_window_seconds: int = Field(default=900)

    # Cache TTLs (seconds)
    featured_cache_ttl: int = Field(default=300)
    agent_search_cache_ttl: int = Field(default=60)
    admin_stats_cache_ttl: int = Field(default=60)

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "console"] = Field(default="console")

    # -------------------------------------------------------------------------
    # Derived / computed
    # -------------------------------------------------------------------------
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @field_validator("supabase_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Module-level singleton: import this everywhere
# ---------------------------------------------------------------------------
settings = Settings()
