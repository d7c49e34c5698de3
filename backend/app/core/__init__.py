# backend/app/core/__init__.py

from ..config import get_settings
from .exceptions import (
    AppError,
    TemplateNotFoundError,
    CSVFileError,
)


__all__ = [
    "get_settings",  # Export the function, not a settings instance
    "AppError",
    "TemplateNotFoundError",
    "CSVFileError",
]
