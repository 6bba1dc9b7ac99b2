"""
Application configuration using Pydantic Settings.

This module manages all configuration from environment variables.
"""

import os
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Competition Participants API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Upload participant spreadsheets and serve them as JSON"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False
    RELOAD: bool = False

    # File Storage Configuration
    UPLOAD_DIR: str = "uploads/"
    PUBLIC_DIR: str = "public/"
    MAX_FILE_SIZE_MB: int = 20
    ALLOWED_EXTENSIONS: List[str] = [".xlsx", ".xlsm"]

    # Admin Session Configuration
    ADMIN_PASSWORD: str = "changeme"  # Override in .env
    SESSION_BACKEND: str = "memory"  # memory | redis
    SESSION_HEADER: str = "X-Session-Id"
    SESSION_TTL_SECONDS: Optional[int] = Field(None, gt=0)  # None = sessions last until logout
    REDIS_URL: str = "redis://localhost:6379/0"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "api.log"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Create global settings instance
settings = get_settings()


def ensure_upload_dir():
    """Ensure upload directory exists."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
