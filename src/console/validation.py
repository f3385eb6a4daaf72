"""Client-side validation for console form submissions.

Forms submit their values as dictionaries. These validators make sure the
important fields are present and well-formed before anything is sent to the
backend.

On validation failure, raise `FormValidationError`; the form controller keeps
the `field_errors` for display and the request is never issued.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional

from src.integrations.contracts.interfaces import PolicyStatus, PolicyType


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def optional_str(payload: Dict[str, Any], field: str) -> str:
    return _strip(payload.get(field))


def parse_amount(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None, min_value: float = 0.0) -> Optional[float]:
    raw = _strip(payload.get(field))
    if not raw:
        add_error(errors, field, f"{label or field} is required")
        return None
    try:
        val = float(raw)
    except ValueError:
        add_error(errors, field, f"{label or field} must be a number")
        return None
    if val < min_value:
        add_error(errors, field, f"{label or field} must be at least {min_value:g}")
    return val


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: str, errors: Dict[str, str], field: str = "email") -> str:
    value = _strip(value)
    if not value:
        add_error(errors, field, "Email is required")
        return value
    if not _EMAIL_RE.match(value):
        add_error(errors, field, "Email is not valid")
    return value


def parse_iso_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    s = _strip(value)
    if not s:
        return None
    try:
        return date.fromisoformat(s.split("T", 1)[0])
    except ValueError:
        return None


def validate_date_iso(value: Any, errors: Dict[str, str], field: str, *, label: Optional[str] = None, required: bool = True, not_future: bool = False, today: Optional[date] = None) -> Optional[date]:
    raw = _strip(value)
    if not raw:
        if required:
            add_error(errors, field, f"{label or field} is required")
        return None
    d = parse_iso_date(value)
    if d is None:
        add_error(errors, field, f"{label or field} must be a valid date (YYYY-MM-DD)")
        return None
    if not_future and d > (today or date.today()):
        add_error(errors, field, f"{label or field} cannot be in the future")
    return d


def validate_in(value: Any, allowed: Iterable[str], errors: Dict[str, str], field: str, *, required: bool = True) -> str:
    raw = _strip(getattr(value, "value", value))
    if not raw:
        if required:
            add_error(errors, field, f"{field} is required")
        return raw
    if raw not in set(allowed):
        add_error(errors, field, f"{field} has an invalid value")
    return raw


def validate_coverage_dates(
    payload: Dict[str, Any],
    errors: Dict[str, str],
    *,
    today: Optional[date] = None,
    original: Optional[Dict[str, Any]] = None,
    start_field: str = "start_date",
    end_field: str = "end_date",
) -> None:
    """Coverage may not start before today and may not end before it starts.

    Equal start and end dates are accepted. When editing, ``original`` holds
    the stored values; a start date left as stored is not re-checked against
    today, so policies already in force stay editable.
    """
    today = today or date.today()
    stored_start = parse_iso_date((original or {}).get(start_field))
    start = validate_date_iso(payload.get(start_field), errors, start_field, label="Start date")
    end = validate_date_iso(payload.get(end_field), errors, end_field, label="End date")
    if start and start < today and start != stored_start:
        add_error(errors, start_field, "Start date cannot be in the past")
    if start and end and end < start:
        add_error(errors, end_field, "End date cannot be before start date")


def validate_client_form(payload: Dict[str, Any], *, today: Optional[date] = None, original: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    require_str(payload, "first_name", errors, label="First name")
    require_str(payload, "last_name", errors, label="Last name")
    validate_email(payload.get("email", ""), errors, field="email")
    if optional_str(payload, "date_of_birth"):
        validate_date_iso(payload.get("date_of_birth"), errors, "date_of_birth", label="Date of birth", not_future=True, today=today)
    return errors


def validate_policy_form(payload: Dict[str, Any], *, today: Optional[date] = None, original: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    require_str(payload, "policy_number", errors, label="Policy number")
    validate_in(payload.get("policy_type"), [t.value for t in PolicyType], errors, "policy_type")
    validate_in(payload.get("status"), [s.value for s in PolicyStatus], errors, "status")
    parse_amount(payload, "premium_amount", errors, label="Premium amount")
    parse_amount(payload, "coverage_amount", errors, label="Coverage amount")
    validate_coverage_dates(payload, errors, today=today, original=original)
    return errors


FormValidator = Callable[..., Dict[str, str]]


def raise_if_errors(errors: Dict[str, str], message: str = "Please correct the highlighted fields") -> None:
    if errors:
        raise FormValidationError(field_errors=errors, message=message)
