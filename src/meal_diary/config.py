"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    response_language: str = "简体中文"
    timezone: str = "Asia/Shanghai"
    login_username: str = "001"
    login_password: str = "001"
    state_dir: Path = Path(".meal_diary")
    state_key: str = "appState"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def assistant_enabled(self) -> bool:
        """Return True when a remote assistant credential is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())

    @property
    def supabase_enabled(self) -> bool:
        """Return True when Supabase persistence is configured."""
        return bool(self.supabase_url and self.supabase_service_key)
