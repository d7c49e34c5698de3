# backend/app/services/csv_io/validators.py
"""Template-driven validation of parsed CSV rows."""

import logging
import re
from typing import Any, Dict, List, Mapping, Sequence

from ...schemas.csv_io import ValidationResult
from .csv_processor import parse_date
from .validation_schemas import FIELD_CHOICES, get_template

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
DATE_FIELDS = ("dateofbirth", "joiningdate", "admissiondate")
GENDERS = ("male", "female", "other")


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_valid_date(value: str) -> bool:
    return parse_date(value) is not None


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def validate_csv_format(
    headers: Sequence[str],
    data: Sequence[Mapping[str, Any]],
    template_name: str,
) -> ValidationResult:
    """
    Check parsed CSV headers and rows against a named template.

    Every check runs on every row; a row may contribute several errors.
    Row numbers are ``index + 2`` (the header is row 1) and do not account
    for blank lines the parser skipped. Unknown columns only produce a
    warning, which never makes the result invalid.
    """
    template = get_template(template_name)
    if template is None:
        logger.warning(f"Validation requested for unknown template '{template_name}'")
        return ValidationResult(
            valid=False, errors=[f"Invalid role: {template_name}"], warnings=[]
        )

    errors: List[str] = []
    warnings: List[str] = []

    missing_required = [req for req in template.required if req.lower() not in headers]
    if missing_required:
        errors.append(f"Missing required columns: {', '.join(missing_required)}")

    valid_headers = template.lowered_headers
    unknown_headers = [h for h in headers if h not in valid_headers]
    if unknown_headers:
        warnings.append(
            f"Unknown columns will be ignored: {', '.join(unknown_headers)}"
        )

    # Columns already reported as missing are not repeated for every row.
    present_required = [req for req in template.required if req not in missing_required]

    for index, row in enumerate(data):
        row_number = index + 2

        for field in present_required:
            if _is_blank(row.get(field.lower())):
                errors.append(f"Row {row_number}: Missing required field '{field}'")

        email = row.get("email")
        if email and not is_valid_email(email):
            errors.append(f"Row {row_number}: Invalid email format '{email}'")

        for field in DATE_FIELDS:
            value = row.get(field)
            if value and not is_valid_date(value):
                errors.append(
                    f"Row {row_number}: Invalid date format for '{field}'. Use YYYY-MM-DD"
                )

        gender = row.get("gender")
        if gender and gender.lower() not in GENDERS:
            errors.append(
                f"Row {row_number}: Invalid gender '{gender}'. Use male, female, or other"
            )

    result = ValidationResult(errors=errors, warnings=warnings)
    logger.debug(
        f"Validated {len(data)} rows against '{template_name}': "
        f"{len(errors)} errors, {len(warnings)} warnings"
    )
    return result


def validate_field_choices(
    headers: Sequence[str],
    data: Sequence[Mapping[str, Any]],
    template_name: str,
) -> List[str]:
    """Return one error per closed-choice column that holds an unlisted value."""
    errors: List[str] = []
    choices: Dict[str, Sequence[str]] = dict(FIELD_CHOICES.get(template_name, {}))
    for column, allowed in choices.items():
        if column not in headers:
            continue
        if any(str(row.get(column) or "").lower() not in allowed for row in data):
            errors.append(f"Invalid {column} values found. Use: {', '.join(allowed)}")
    return errors


__all__ = [
    "EMAIL_PATTERN",
    "DATE_FIELDS",
    "GENDERS",
    "is_valid_email",
    "is_valid_date",
    "validate_csv_format",
    "validate_field_choices",
]
