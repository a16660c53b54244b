"""Application configuration."""

import os
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    allowed_user_ids: str | None = None
    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_temperature: float | None = 0.3
    openai_store: bool = False
    default_timezone: str = "America/New_York"
    default_calorie_deficit: int = 500
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_user_ids(raw: str | None) -> set[UUID] | None:
    """Parse allowed user UUIDs from env."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    ids: set[UUID] = set()
    for chunk in cleaned.split(","):
        value = chunk.strip()
        if not value:
            continue
        try:
            ids.add(UUID(value))
        except ValueError:
            continue
    return ids or None
