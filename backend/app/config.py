"""Configuration settings for the Gigboard backend."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Supabase
    supabase_url: str
    supabase_secret_key: str | None = None  # Backend data access
    supabase_publishable_key: str | None = None  # Auth calls made on a user's behalf
    supabase_jwt_secret: str  # Required - verifies Supabase access tokens

    # JWT
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"

    # App
    debug: bool = False
    log_level: str = "INFO"
    log_to_file: bool = False
    # CORS: Allowed origins for cross-origin requests
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars not in model


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
