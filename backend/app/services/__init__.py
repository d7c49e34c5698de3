# backend/app/services/__init__.py
"""
Services package for the application.

Business logic behind the API endpoints: CSV parsing, validation, generation
and the import/export workflow built on them.
"""

from . import csv_io
from .csv_io import CSVImportService

__all__ = [
    "csv_io",
    "CSVImportService",
]
