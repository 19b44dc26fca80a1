"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    supabase_service_key: str
    site_url: str = "http://localhost:8000"
    timezone: str = "Europe/Madrid"
    free_food_limit: int = 10
    free_photo_limit: int = 3
    ocr_provider: str = "mock"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    access_token_cookie: str = "fg-access-token"
    refresh_token_cookie: str = "fg-refresh-token"
    oauth_verifier_cookie: str = "fg-oauth-verifier"
    secure_cookies: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_production(settings: Settings) -> bool:
    """Return true when running with production settings."""
    return settings.environment.strip().lower() == PRODUCTION
