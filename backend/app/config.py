# backend/app/config.py
"""
Configuration management for the School Admin CSV service.
Uses Pydantic for settings validation and environment variable management.
"""

import os
import logging
import logging.handlers
from typing import Annotated, Optional, List, Any
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Application settings
    APP_NAME: str = "School Admin CSV Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", alias="ENV")

    # CORS settings
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost:5173",  # Vite frontend
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
        alias="CORS_ORIGINS",
    )

    # Upload settings
    MAX_UPLOAD_SIZE: int = Field(
        default=5 * 1024 * 1024, alias="MAX_UPLOAD_SIZE"
    )  # 5MB
    CSV_FALLBACK_ENCODING: str = Field(
        default="utf-8", alias="CSV_FALLBACK_ENCODING"
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    LOG_FILE: Optional[str] = Field(default=None, alias="LOG_FILE")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("CORS_ORIGINS", mode="before")
    def parse_comma_separated(cls, v: Any) -> Any:
        """Parse comma-separated strings from env vars into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return (self.ENVIRONMENT or "").lower() == "production"


class DevelopmentSettings(Settings):
    """Development environment specific settings."""

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


class ProductionSettings(Settings):
    """Production environment specific settings."""

    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="production", alias="ENV")
    LOG_LEVEL: str = "INFO"


class TestingSettings(Settings):
    """Testing environment specific settings."""

    DEBUG: bool = True
    ENVIRONMENT: str = Field(default="testing", alias="ENV")
    LOG_LEVEL: str = "DEBUG"
    MAX_UPLOAD_SIZE: int = 64 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Load and return the appropriate settings based on the ENVIRONMENT variable.
    Caches the result to prevent reading the .env file on every call.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "production":
        return ProductionSettings()
    if environment in ("test", "testing"):
        return TestingSettings()
    return DevelopmentSettings()


def validate_settings(settings: Settings) -> List[str]:
    """Validate settings and return list of issues."""
    issues: List[str] = []

    if settings.MAX_UPLOAD_SIZE < 1024:
        issues.append("MAX_UPLOAD_SIZE should be at least 1KB")

    if not isinstance(logging.getLevelName(settings.LOG_LEVEL.upper()), int):
        issues.append(f"LOG_LEVEL '{settings.LOG_LEVEL}' is not a logging level")

    try:
        "".encode(settings.CSV_FALLBACK_ENCODING)
    except LookupError:
        issues.append(
            f"CSV_FALLBACK_ENCODING '{settings.CSV_FALLBACK_ENCODING}' is unknown"
        )

    if settings.is_production and "*" in settings.CORS_ORIGINS:
        issues.append("CORS_ORIGINS must not contain '*' in production")

    return issues


def setup_logging(settings: Settings) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(settings.LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_file = Path(settings.LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            str(log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("chardet").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


__all__ = [
    "Settings",
    "get_settings",
    "validate_settings",
    "setup_logging",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
