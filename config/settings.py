"""
Application Settings - Centralized configuration using pydantic-settings.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "https://ridezone-ui.vercel.app",
    ]
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "ridezone"
    USERS_COLLECTION: str = "users"
    PRODUCTS_COLLECTION: str = "products"

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # Startup data fixes
    RUN_STARTUP_MIGRATIONS: bool = True
    BACKFILL_CATEGORIES: bool = False
    PLACEHOLDER_IMAGE_URLS: list[str] = ["https://via.placeholder.com/300"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        if v < 10 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 10 and 31")
        return v


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


# Convenience export
settings = get_settings()
