# backend/__init__.py

"""
Backend package for the School Admin CSV service.
"""

from .app import (
    AppError,
    CSVFileError,
    TemplateNotFoundError,
    csv_io,
)

__all__ = [
    "AppError",
    "CSVFileError",
    "TemplateNotFoundError",
    "csv_io",
]
