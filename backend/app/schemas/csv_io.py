# backend/app/schemas/csv_io.py
from __future__ import annotations

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, computed_field, model_validator


class GenericResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Dict[str, Any] | List[Any]] = None
    error: Optional[str] = None


class ParseResult(BaseModel):
    """Headers, keyed rows and structural errors produced by one parse call."""

    headers: List[str] = Field(default_factory=list)
    data: List[Dict[str, str]] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of checking parsed rows against a CSV template.

    ``valid`` always mirrors ``errors``; warnings never affect it.
    """

    valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def sync_valid(self) -> "ValidationResult":
        self.valid = not self.errors
        return self


class ImportPreview(BaseModel):
    template: str
    headers: List[str] = Field(default_factory=list)
    data: List[Dict[str, str]] = Field(default_factory=list)
    count: int = 0
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.errors


class TemplateRead(BaseModel):
    name: str
    headers: List[str]
    required: List[str]


class RecordsExportRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filename: Optional[str] = None


class UsersExportRequest(BaseModel):
    users: List[Dict[str, Any]] = Field(default_factory=list)
    filename: Optional[str] = None
