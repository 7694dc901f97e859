"""Kanban Configuration Settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False

    # JWT
    JWT_SECRET_KEY: str = Field(default="dev-secret-key-change-me")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    JWT_ISSUER: str = "simple-kanban"

    # Application
    APP_NAME: str = "Simple Kanban"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
