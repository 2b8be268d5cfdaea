"""Validate and append new registrations."""

from __future__ import annotations

import logging

from membership_registry.exceptions import RecordStoreError, RegistrationValidationError
from membership_registry.records.models import RegistrationRecord, SubmissionResult
from membership_registry.records.validation import validate_registration
from membership_registry.store.base import BaseRecordStore

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Registration submitted successfully!"
INVALID_MESSAGE = "Invalid registration details. Please correct the highlighted fields."


class SubmissionHandler:
    """Writes one registration row per accepted submission.

    No lock is taken between a duplicate check and the write: two near
    simultaneous submissions for the same phone may both succeed.

    Args:
        store: Record store to append to.
    """

    def __init__(self, store: BaseRecordStore):
        self.store = store

    def submit(self, fields: dict | RegistrationRecord) -> SubmissionResult:
        """Revalidate, then append. Failures come back as results, never raised."""
        record = (
            fields if isinstance(fields, RegistrationRecord)
            else RegistrationRecord.from_form(fields)
        )

        try:
            validate_registration(record, strict=True)
        except RegistrationValidationError as e:
            logger.warning(f"Rejected registration: {e}")
            return SubmissionResult(success=False, message=INVALID_MESSAGE, errors=e.errors)

        try:
            self.store.append(record)
        except RecordStoreError as e:
            logger.error(f"Error submitting registration: {e}")
            return SubmissionResult(
                success=False,
                message=f"Failed to submit registration: {e}",
            )

        logger.info(f"New registration added: {record.full_name}")
        return SubmissionResult(success=True, message=SUCCESS_MESSAGE)
