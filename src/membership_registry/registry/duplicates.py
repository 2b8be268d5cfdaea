"""Advisory duplicate detection by normalized phone number."""

from __future__ import annotations

import logging
from datetime import datetime

from membership_registry.records.models import (
    COL_EMAIL,
    COL_NAME,
    COL_TIMESTAMP,
    DuplicateCheckResult,
    ExistingMember,
)
from membership_registry.records.phone import normalize_phone
from membership_registry.store.base import BaseRecordStore

logger = logging.getLogger(__name__)


def format_registration_date(value: str | None) -> str:
    """Render a stored ISO timestamp for display, e.g. ``Jan 5, 2026, 09:30 AM``.

    Unparseable values are returned unchanged.
    """
    if not value:
        return ""
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{moment:%b} {moment.day}, {moment.year}, {moment:%I:%M %p}"


class DuplicateChecker:
    """Warns when a phone number is already registered. Never blocks.

    Args:
        store: Record store to scan.
    """

    def __init__(self, store: BaseRecordStore):
        self.store = store

    def check(self, phone: str | None) -> DuplicateCheckResult:
        """Return the first existing registration with the same normalized phone.

        Any store failure degrades to ``is_duplicate=False`` with an error detail.
        """
        normalized = normalize_phone(phone)
        if not normalized:
            return DuplicateCheckResult(is_duplicate=False)

        try:
            row = self.store.find_by_normalized_phone(normalized)
        except Exception as e:
            logger.warning(f"Duplicate check failed, treating as not duplicate: {e}")
            return DuplicateCheckResult(
                is_duplicate=False,
                error=f"Failed to check duplicates: {e}",
            )

        if row is None:
            return DuplicateCheckResult(is_duplicate=False)

        logger.debug(f"Phone {normalized} already registered")
        return DuplicateCheckResult(
            is_duplicate=True,
            existing_member=ExistingMember(
                name=row[COL_NAME] or "Unknown",
                email=row[COL_EMAIL] or "",
                registration_date=format_registration_date(row[COL_TIMESTAMP]) or "Unknown",
            ),
        )
