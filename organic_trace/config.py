from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Organic Food Traceability"
    ENVIRONMENT: str = "local"
    CORS_ORIGINS: Optional[str] = None

    # ==============================
    # Table backend
    # ==============================
    TABLE_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite:///./organic_trace.db"
    REST_URL: Optional[str] = None
    REST_API_KEY: Optional[str] = None
    REST_TIMEOUT_SECONDS: int = 15

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None

    # ==============================
    # Supply chain
    # ==============================
    RECORD_SUPPLY_CHAIN_EVENTS: bool = True

    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
