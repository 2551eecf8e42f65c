"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from globetrotter.adapters.pexels_client import (
    DEFAULT_FALLBACK_IMAGE_URL,
    DEFAULT_PEXELS_BASE_URL,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    pexels_api_key: str | None = None
    pexels_base_url: str = DEFAULT_PEXELS_BASE_URL
    fallback_image_url: str = DEFAULT_FALLBACK_IMAGE_URL
    image_timeout_seconds: float = 5.0
    catalog_path: Path | None = None
    random_seed: int | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
