# backend/app/__init__.py

"""Main application package for the School Admin CSV service."""

# Core
from .core import (
    AppError,
    CSVFileError,
    TemplateNotFoundError,
)

# Services
from .services import csv_io

__all__ = [
    "AppError",
    "CSVFileError",
    "TemplateNotFoundError",
    "csv_io",
]
