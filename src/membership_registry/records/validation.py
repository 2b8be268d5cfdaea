"""Field validation for registration forms.

Every rule is evaluated and all violations are returned together, keyed by
wire field name, so a form can show them side by side.
"""

from __future__ import annotations

import re
from datetime import date

from membership_registry.exceptions import RegistrationValidationError
from membership_registry.records.models import (
    GENDERS,
    MARITAL_STATUSES,
    RegistrationRecord,
)
from membership_registry.records.phone import is_valid_phone

_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MESSAGES = {
    "fullName": "Full name is required",
    "phone_required": "Phone number is required",
    "phone_format": "Please enter a valid 11-digit phone number or 13-digit number with +234",
    "homeAddress": "Home address is required",
    "email": "Please enter a valid email address",
    "dateOfBirth": "Date of birth is required",
    "dateOfBirth_format": "Please enter a valid date of birth (YYYY-MM-DD)",
    "society": "Please select a society interest",
    "gender": "Please select a gender",
    "maritalStatus": "Please select a marital status",
}


def validate_email(email: str | None) -> bool:
    """Email is optional; when present it must look like local@domain.tld."""
    if not email:
        return True
    return bool(_EMAIL.fullmatch(email))


def _valid_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def collect_errors(record: RegistrationRecord, strict: bool = False) -> dict[str, str]:
    """Return field -> message for every violated rule (empty dict if valid).

    Args:
        record: The record to check.
        strict: Also check enum fields and the ISO date shape. The browser form
            can only produce allowed values for these, so only the server
            boundary needs it.
    """
    errors: dict[str, str] = {}

    if not record.full_name.strip():
        errors["fullName"] = MESSAGES["fullName"]

    if not record.phone.strip():
        errors["phone"] = MESSAGES["phone_required"]
    elif not is_valid_phone(record.phone):
        errors["phone"] = MESSAGES["phone_format"]

    if not record.home_address.strip():
        errors["homeAddress"] = MESSAGES["homeAddress"]

    if record.email and not validate_email(record.email):
        errors["email"] = MESSAGES["email"]

    if not record.date_of_birth:
        errors["dateOfBirth"] = MESSAGES["dateOfBirth"]
    elif strict and not _valid_iso_date(record.date_of_birth):
        errors["dateOfBirth"] = MESSAGES["dateOfBirth_format"]

    if not record.society:
        errors["society"] = MESSAGES["society"]

    if strict:
        if record.gender not in GENDERS:
            errors["gender"] = MESSAGES["gender"]
        if record.marital_status not in MARITAL_STATUSES:
            errors["maritalStatus"] = MESSAGES["maritalStatus"]

    return errors


def validate_registration(record: RegistrationRecord, strict: bool = False) -> None:
    """Raise RegistrationValidationError carrying all violations, if any."""
    errors = collect_errors(record, strict=strict)
    if errors:
        raise RegistrationValidationError(errors)
