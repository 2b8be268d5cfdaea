"""Registration record models, phone normalization and field validation."""

from membership_registry.records.models import (
    HEADERS,
    FORM_FIELDS,
    GENDERS,
    MARITAL_STATUSES,
    SOCIETY_OPTIONS,
    RegistrationRecord,
    ExistingMember,
    DuplicateCheckResult,
    SubmissionResult,
)
from membership_registry.records.phone import normalize_phone, is_valid_phone, phones_match
from membership_registry.records.validation import (
    collect_errors,
    validate_email,
    validate_registration,
)

__all__ = [
    "HEADERS",
    "FORM_FIELDS",
    "GENDERS",
    "MARITAL_STATUSES",
    "SOCIETY_OPTIONS",
    "RegistrationRecord",
    "ExistingMember",
    "DuplicateCheckResult",
    "SubmissionResult",
    "normalize_phone",
    "is_valid_phone",
    "phones_match",
    "collect_errors",
    "validate_email",
    "validate_registration",
]
