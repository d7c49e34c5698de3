# backend/app/core/exceptions.py
"""Application-level exceptions used by the CSV services and routers.

Only programmer-style misuse is raised as an exception (asking for a template
that does not exist, handing over an upload that is not a readable CSV file).
Data-quality problems inside a CSV are never raised; they are reported in the
``errors`` / ``warnings`` lists of the parse and validation results.

Every exception carries a ``code`` and ``status_code`` so the API layer can
translate it into a JSON body without knowing the concrete type.
"""
from __future__ import annotations

from typing import Optional, Any, Dict
from datetime import datetime, timezone


class AppError(Exception):
    """Base application exception with structured metadata.

    Attributes
    ----------
    message
        Human readable message.
    code
        Machine friendly error code (snake_case).
    status_code
        Suggested HTTP status code for API responses.
    details
        Arbitrary extra data useful for debugging or UX.
    timestamp
        UTC ISO timestamp when the exception was created.
    cause
        Optional underlying exception instance.
    context
        Optional lightweight context dict (template names, file names).
    """

    code: str = "app_error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An application error occurred",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Verbose single-line description for log records."""
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        if self.details is not None:
            base += f" | details={self.details}"
        if self.cause is not None:
            base += f" | cause={repr(self.cause)}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation suitable for API responses."""
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "details": self.details,
                "context": self.context,
                "timestamp": self.timestamp,
            }
        }

    def with_context(self, **ctx: Any) -> "AppError":
        """Return self after extending the context dict.

        Example:
        raise err.with_context(template="student")
        """
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self

    @classmethod
    def from_exception(
        cls, exc: BaseException, message: Optional[str] = None, **kwargs: Any
    ) -> "AppError":
        """Wrap a generic exception into an AppError preserving the cause.

        Extra keyword arguments go to the subclass constructor.
        """
        return cls(message or str(exc), cause=exc, **kwargs)


class TemplateNotFoundError(AppError):
    """Raised when a CSV template is requested by a name the registry lacks."""

    code = "template_not_found"
    status_code = 404

    def __init__(
        self,
        template_name: Optional[str] = None,
        message: Optional[str] = None,
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        msg = message or f"No template available for role: {template_name}"
        super().__init__(msg, details=details, cause=cause, context=context)
        self.template_name = template_name
        if template_name is not None:
            self.context.setdefault("template", template_name)


class CSVFileError(AppError):
    """Raised when an uploaded file cannot be accepted or read as CSV text.

    Covers a missing upload, a file name without the ``.csv`` suffix, an
    oversized upload, and I/O or decoding failures while reading it.
    """

    code = "csv_file_error"
    status_code = 400

    def __init__(
        self,
        message: str = "Failed to read file",
        *,
        filename: Optional[str] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        self.filename = filename
        if filename:
            self.context.setdefault("filename", filename)


__all__ = [
    "AppError",
    "TemplateNotFoundError",
    "CSVFileError",
]
