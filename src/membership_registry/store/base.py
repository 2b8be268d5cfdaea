"""Abstract base class for registration record stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable

from membership_registry.records.models import COL_PHONE, HEADERS, RegistrationRecord
from membership_registry.records.phone import normalize_phone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO 8601 in UTC with millisecond precision, e.g. 2026-01-05T09:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def pad_row(row: list) -> list[str]:
    """Stringify cells and pad/truncate to the canonical column count."""
    cells = ["" if cell is None else str(cell) for cell in row[: len(HEADERS)]]
    return cells + [""] * (len(HEADERS) - len(cells))


class BaseRecordStore(ABC):
    """Append-only tabular store of registration rows.

    Rows are lists of strings in ``HEADERS`` order. The header row itself is
    never returned by ``read_all``.

    Args:
        clock: Returns the current time; the registration timestamp is taken
            from it at append time and never from the client.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._clock = clock or utc_now

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the store and its header row if absent. Idempotent."""
        ...

    @abstractmethod
    def read_all(self) -> list[list[str]]:
        """All data rows in insertion order, header excluded."""
        ...

    @abstractmethod
    def _append_row(self, row: list[str]) -> None:
        """Write one fully built row at the end of the store."""
        ...

    def append(self, record: RegistrationRecord) -> list[str]:
        """Append a record stamped with the store's clock. Returns the written row."""
        row = record.to_row(format_timestamp(self._clock()))
        self._append_row(row)
        return row

    def find_by_normalized_phone(self, normalized: str) -> list[str] | None:
        """First row whose normalized phone equals ``normalized``, or None.

        Linear scan in storage order; subclasses with an index may override.
        An empty phone never matches.
        """
        if not normalized:
            return None
        for row in self.read_all():
            if normalize_phone(row[COL_PHONE]) == normalized:
                return row
        return None

    def count(self) -> int:
        """Number of data rows."""
        return len(self.read_all())
