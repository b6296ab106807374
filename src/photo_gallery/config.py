"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    secret_key: str
    token_ttl_minutes: int = 12 * 60
    upload_dir: str = "uploads"
    max_image_bytes: int = 2 * 1024 * 1024
    max_photos_per_category: int = 20
    seed_admin_username: str = "admin"
    seed_admin_password: str | None = None
    seed_admin_email: str | None = None
    cors_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse a comma separated list of allowed CORS origins."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if not cleaned:
        return []
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
