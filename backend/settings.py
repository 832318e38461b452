"""
FitGuide configuration.

Every knob is a field on Settings, read from the environment (or .env) by
pydantic-settings. Routes take it through Depends(get_settings); other code
calls get_settings() directly. Both share one cached instance:

    from backend.settings import get_settings

    timeout = get_settings().remote_read_timeout_seconds
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """FitGuide settings; field names map to upper-case environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    # -------------------------------------------------------------------------
    # Workout log sync
    # -------------------------------------------------------------------------
    local_cache_path: Path = Field(
        default=Path(".fitguide/cache.json"),
        description="JSON file holding the device-local cache",
    )
    remote_read_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Deadline for remote reads before falling back to the local cache",
    )
    remote_write_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Deadline for remote writes (sync, migration, clear)",
    )

    # -------------------------------------------------------------------------
    # Exercise catalog
    # -------------------------------------------------------------------------
    exercises_page_size: int = Field(
        default=8,
        ge=1,
        description="Exercises per page in the workout view",
    )

    # -------------------------------------------------------------------------
    # External Services - OpenAI (coaching copy, chat, equipment scan)
    # -------------------------------------------------------------------------
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key; coaching falls back to static copy when unset",
    )
    ai_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for text generation",
    )
    ai_vision_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for equipment photo recognition",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings; tests reset it with get_settings.cache_clear()."""
    return Settings()
