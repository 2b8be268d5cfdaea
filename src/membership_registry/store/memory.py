"""In-memory record store (tests and local development)."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from membership_registry.records.models import HEADERS
from membership_registry.store.base import BaseRecordStore, pad_row

logger = logging.getLogger(__name__)


class InMemoryRecordStore(BaseRecordStore):
    """Keeps the sheet as a list of rows, header first. Order preserved by insertion.

    Args:
        rows: Optional initial grid, header row included if present.
        clock: See BaseRecordStore.
    """

    def __init__(
        self,
        rows: list[list[str]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        super().__init__(clock=clock)
        self._grid: list[list[str]] = [list(r) for r in rows or []]
        self._lock = threading.Lock()

    @property
    def grid(self) -> list[list[str]]:
        """Copy of the raw grid including the header row."""
        with self._lock:
            return [list(r) for r in self._grid]

    def ensure_schema(self) -> None:
        with self._lock:
            self._ensure_schema_locked()

    def _ensure_schema_locked(self) -> None:
        if not self._grid or pad_row(self._grid[0]) != HEADERS:
            self._grid.insert(0, list(HEADERS))
            logger.info("Initialized in-memory registration sheet")

    def read_all(self) -> list[list[str]]:
        with self._lock:
            self._ensure_schema_locked()
            return [pad_row(r) for r in self._grid[1:]]

    def _append_row(self, row: list[str]) -> None:
        with self._lock:
            self._ensure_schema_locked()
            self._grid.append(list(row))
