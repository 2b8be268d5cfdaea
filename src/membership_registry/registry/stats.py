"""Registration summary counts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from membership_registry.records.models import COL_GENDER, COL_SOCIETY
from membership_registry.store.base import BaseRecordStore


@dataclass
class RegistrationStats:
    """Totals over all stored registrations."""

    total: int
    by_society: dict[str, int] = field(default_factory=dict)
    by_gender: dict[str, int] = field(default_factory=dict)


def registration_stats(store: BaseRecordStore) -> RegistrationStats:
    """Count registrations by society and gender; blanks count as 'Unknown'."""
    rows = store.read_all()
    societies = Counter(row[COL_SOCIETY] or "Unknown" for row in rows)
    genders = Counter(row[COL_GENDER] or "Unknown" for row in rows)
    return RegistrationStats(
        total=len(rows),
        by_society=dict(societies),
        by_gender=dict(genders),
    )
