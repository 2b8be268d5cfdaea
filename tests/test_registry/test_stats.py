"""Tests for registration statistics."""

from membership_registry.records.models import HEADERS
from membership_registry.registry.stats import registration_stats
from membership_registry.store.memory import InMemoryRecordStore


def test_empty_store():
    stats = registration_stats(InMemoryRecordStore())
    assert stats.total == 0
    assert stats.by_society == {}


def test_counts_by_society_and_gender():
    store = InMemoryRecordStore([
        HEADERS,
        ["A", "", "1", "", "Male", "", "", "Choir", ""],
        ["B", "", "2", "", "Female", "", "", "Choir", ""],
        ["C", "", "3", "", "", "", "", "", ""],
    ])
    stats = registration_stats(store)
    assert stats.total == 3
    assert stats.by_society == {"Choir": 2, "Unknown": 1}
    assert stats.by_gender == {"Male": 1, "Female": 1, "Unknown": 1}
