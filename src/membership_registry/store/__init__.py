"""Record store backends with abstract base."""

from membership_registry.store.base import BaseRecordStore, format_timestamp
from membership_registry.store.memory import InMemoryRecordStore
from membership_registry.store.sheets import SheetsRecordStore

__all__ = [
    "BaseRecordStore",
    "format_timestamp",
    "InMemoryRecordStore",
    "SheetsRecordStore",
]
