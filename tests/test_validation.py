from datetime import date

import pytest

from src.console.validation import (
    FormValidationError,
    parse_iso_date,
    raise_if_errors,
    validate_client_form,
    validate_coverage_dates,
    validate_policy_form,
)

TODAY = date(2030, 1, 15)


def _policy(**overrides):
    payload = {
        "policy_number": "POL-1",
        "policy_type": "HOME",
        "status": "PENDING",
        "start_date": "2030-01-15",
        "end_date": "2031-01-15",
        "premium_amount": "12.50",
        "coverage_amount": "1000",
    }
    payload.update(overrides)
    return payload


def test_valid_policy_has_no_errors():
    assert validate_policy_form(_policy(), today=TODAY) == {}


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("2030-01-14", "2030-02-01", {"start_date": "Start date cannot be in the past"}),
        ("2030-01-20", "2030-01-19", {"end_date": "End date cannot be before start date"}),
        ("2030-01-20", "2030-01-20", {}),
        ("2030-01-15T00:00:00", "2030-01-16T23:59:00", {}),
    ],
)
def test_coverage_date_rules(start, end, expected):
    errors = {}
    validate_coverage_dates({"start_date": start, "end_date": end}, errors, today=TODAY)

    assert errors == expected


def test_missing_and_malformed_dates_reported():
    errors = validate_policy_form(_policy(start_date="", end_date="15/01/2031"), today=TODAY)

    assert errors["start_date"] == "Start date is required"
    assert errors["end_date"] == "End date must be a valid date (YYYY-MM-DD)"


def test_policy_enums_and_amounts_checked():
    errors = validate_policy_form(
        _policy(policy_type="BOAT", status="", premium_amount="-1", coverage_amount="lots"), today=TODAY
    )

    assert errors == {
        "policy_type": "policy_type has an invalid value",
        "status": "status is required",
        "premium_amount": "Premium amount must be at least 0",
        "coverage_amount": "Coverage amount must be a number",
    }


def test_client_form_rules():
    errors = validate_client_form(
        {"first_name": " ", "last_name": "Doe", "email": "jane@example", "date_of_birth": "2030-01-16"},
        today=TODAY,
    )

    assert errors == {
        "first_name": "First name is required",
        "email": "Email is not valid",
        "date_of_birth": "Date of birth cannot be in the future",
    }


def test_parse_iso_date_accepts_dates_and_date_times():
    assert parse_iso_date("2030-04-01T08:00:00Z") == date(2030, 4, 1)
    assert parse_iso_date(date(2030, 4, 1)) == date(2030, 4, 1)
    assert parse_iso_date("not a date") is None
    assert parse_iso_date(None) is None


def test_raise_if_errors():
    raise_if_errors({})
    with pytest.raises(FormValidationError) as exc_info:
        raise_if_errors({"email": "Email is required"})

    assert exc_info.value.field_errors == {"email": "Email is required"}


def test_stored_start_date_not_rechecked_on_edit():
    stored = {"start_date": "2030-01-02"}

    assert validate_policy_form(_policy(start_date="2030-01-02"), today=TODAY, original=stored) == {}
    assert validate_policy_form(_policy(start_date="2030-01-03"), today=TODAY, original=stored) == {
        "start_date": "Start date cannot be in the past"
    }
