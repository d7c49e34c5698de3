# backend/app/services/csv_io/transformers.py
"""
Mapping between flat CSV rows and the nested user records of the users API.

Parsed rows use lower-cased column names (``firstname``). API records keep
shared fields under ``profile`` and role-specific ones under ``studentData``,
``teacherData``, ``parentData`` or ``staffData``. Exported rows use the
template's header names (``firstName``) so they can go straight to
``generate_csv`` with the template headers.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .csv_processor import parse_date
from .validation_schemas import CSV_TEMPLATES, get_template

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Read the leading integer of ``value`` ("10 years" -> 10)."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _lower_or_none(value: Optional[str]) -> Optional[str]:
    return value.lower() if value else None


def _date_or_none(value: Optional[str]) -> Optional[date]:
    return parse_date(value) if value else None


def format_iso_date(value: Any) -> str:
    """Format a date-like value as ``YYYY-MM-DD``; empty input gives ``""``.

    Aware datetimes and ISO strings with an offset are converted to UTC first.
    """
    if not value:
        return ""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    try:
        return format_iso_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        parsed = parse_date(text)
        if parsed is None:
            logger.warning(f"Dropping unparseable date value '{text}' from export")
            return ""
        return parsed.isoformat()


# CSV -> API


def _student_data(row: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "admissionNumber": row.get("admissionnumber") or "",
        "rollNumber": row.get("rollnumber") or "",
        "bloodGroup": row.get("bloodgroup") or "",
    }


def _teacher_data(row: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "employeeId": row.get("employeeid") or "",
        "qualification": row.get("qualification") or "",
        "experience": _parse_int(row.get("experience")),
        "joiningDate": _date_or_none(row.get("joiningdate")),
    }


def _parent_data(row: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "occupation": row.get("occupation") or "",
        "relation": _lower_or_none(row.get("relation")),
    }


def _staff_data(row: Mapping[str, str]) -> Dict[str, Any]:
    return {
        "employeeId": row.get("employeeid") or "",
        "department": row.get("department") or "",
        "designation": row.get("designation") or "",
        "joiningDate": _date_or_none(row.get("joiningdate")),
    }


ROLE_DATA_KEYS: Dict[str, str] = {
    "student": "studentData",
    "teacher": "teacherData",
    "parent": "parentData",
    "staff": "staffData",
}

_ROLE_BUILDERS: Dict[str, Callable[[Mapping[str, str]], Dict[str, Any]]] = {
    "student": _student_data,
    "teacher": _teacher_data,
    "parent": _parent_data,
    "staff": _staff_data,
}


def transform_csv_to_user_data(
    data: Sequence[Mapping[str, str]], role: str
) -> List[Dict[str, Any]]:
    """Build nested user records ready for the bulk-import API from parsed rows."""
    users: List[Dict[str, Any]] = []
    for row in data:
        user: Dict[str, Any] = {
            "email": row.get("email"),
            "role": role,
            "profile": {
                "firstName": row.get("firstname"),
                "lastName": row.get("lastname"),
                "phone": row.get("phone") or "",
                "gender": _lower_or_none(row.get("gender")),
                "dateOfBirth": _date_or_none(row.get("dateofbirth")),
                "address": {
                    "street": row.get("street") or "",
                    "city": row.get("city") or "",
                    "state": row.get("state") or "",
                    "country": row.get("country") or "",
                    "zipCode": row.get("zipcode") or "",
                },
            },
        }
        builder = _ROLE_BUILDERS.get(role)
        if builder is not None:
            user[ROLE_DATA_KEYS[role]] = builder(row)
        users.append(user)
    return users


# API -> CSV


def _flatten_role_data(role: str, role_data: Mapping[str, Any]) -> Dict[str, Any]:
    if role == "student":
        return {
            "admissionNumber": role_data.get("admissionNumber") or "",
            "rollNumber": role_data.get("rollNumber") or "",
            "bloodGroup": role_data.get("bloodGroup") or "",
        }
    if role == "teacher":
        return {
            "employeeId": role_data.get("employeeId") or "",
            "qualification": role_data.get("qualification") or "",
            "experience": role_data.get("experience") or "",
            "joiningDate": format_iso_date(role_data.get("joiningDate")),
        }
    if role == "parent":
        return {
            "occupation": role_data.get("occupation") or "",
            "relation": role_data.get("relation") or "",
        }
    if role == "staff":
        return {
            "employeeId": role_data.get("employeeId") or "",
            "department": role_data.get("department") or "",
            "designation": role_data.get("designation") or "",
            "joiningDate": format_iso_date(role_data.get("joiningDate")),
        }
    return {}


def transform_user_data_to_csv(
    users: Sequence[Mapping[str, Any]], role: str
) -> Dict[str, Any]:
    """
    Flatten API user records into rows keyed by the role template's headers.

    Returns ``{"data": rows, "headers": headers}``. Roles without a template
    are exported with the student columns.
    """
    template = get_template(role) or CSV_TEMPLATES["student"]

    rows: List[Dict[str, Any]] = []
    for user in users:
        profile = user.get("profile") or {}
        address = profile.get("address") or {}
        row: Dict[str, Any] = {
            "firstName": profile.get("firstName") or "",
            "lastName": profile.get("lastName") or "",
            "email": user.get("email") or "",
            "phone": profile.get("phone") or "",
            "gender": profile.get("gender") or "",
            "dateOfBirth": format_iso_date(profile.get("dateOfBirth")),
            "street": address.get("street") or "",
            "city": address.get("city") or "",
            "state": address.get("state") or "",
            "country": address.get("country") or "",
            "zipCode": address.get("zipCode") or "",
        }
        data_key = ROLE_DATA_KEYS.get(role)
        role_data = user.get(data_key) if data_key else None
        if role_data:
            row.update(_flatten_role_data(role, role_data))
        rows.append(row)

    return {"data": rows, "headers": list(template.headers)}


__all__ = [
    "ROLE_DATA_KEYS",
    "format_iso_date",
    "transform_csv_to_user_data",
    "transform_user_data_to_csv",
]
