# backend/app/schemas/__init__.py
"""Expose schema modules and primary Pydantic models for convenient imports."""

from . import csv_io
from .csv_io import (
    GenericResponse,
    ParseResult,
    ValidationResult,
    ImportPreview,
    TemplateRead,
    RecordsExportRequest,
    UsersExportRequest,
)

__all__ = [
    "csv_io",
    "GenericResponse",
    "ParseResult",
    "ValidationResult",
    "ImportPreview",
    "TemplateRead",
    "RecordsExportRequest",
    "UsersExportRequest",
]
