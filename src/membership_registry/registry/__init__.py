"""Registration use cases: duplicate checking, submission, statistics."""

from membership_registry.registry.duplicates import DuplicateChecker, format_registration_date
from membership_registry.registry.submission import SubmissionHandler
from membership_registry.registry.stats import RegistrationStats, registration_stats

__all__ = [
    "DuplicateChecker",
    "format_registration_date",
    "SubmissionHandler",
    "RegistrationStats",
    "registration_stats",
]
