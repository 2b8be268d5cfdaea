"""Tests for the registration HTTP endpoint."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from membership_registry.exceptions import StoreReadError, StoreWriteError
from membership_registry.server.app import (
    ENDPOINT_PATH,
    INVALID_GET_ACTION,
    INVALID_POST_ACTION,
    create_app,
)
from membership_registry.store.memory import InMemoryRecordStore

FORM = {
    "action": "submit",
    "fullName": "Grace Okafor",
    "email": "grace@example.com",
    "phone": "08011112222",
    "homeAddress": "12 Yandoka Road, Bauchi",
    "gender": "Female",
    "dateOfBirth": "1990-04-12",
    "maritalStatus": "Married",
    "society": "Choir",
}


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


def test_health(client):
    assert client.get("/health").json() == {"status": "running"}


def test_check_duplicate_none(client):
    response = client.get(ENDPOINT_PATH, params={"action": "checkDuplicate", "phone": "08011112222"})
    assert response.status_code == 200
    assert response.json() == {"isDuplicate": False}


def test_invalid_get_action(client):
    response = client.get(ENDPOINT_PATH, params={"action": "nope"})
    assert response.status_code == 200
    assert response.json() == {"error": INVALID_GET_ACTION}


def test_invalid_post_action(client):
    response = client.post(ENDPOINT_PATH, data={**FORM, "action": "delete"})
    assert response.json() == {"success": False, "error": INVALID_POST_ACTION}


def test_submit_then_duplicate_in_international_form(client, store):
    response = client.post(ENDPOINT_PATH, data=FORM)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Registration submitted successfully!"}

    rows = store.read_all()
    assert len(rows) == 1
    assert rows[0][2] == "08011112222"
    assert rows[0][8] != ""

    check = client.get(ENDPOINT_PATH, params={"action": "checkDuplicate", "phone": "+2348011112222"})
    body = check.json()
    assert body["isDuplicate"] is True
    assert body["existingMember"]["name"] == "Grace Okafor"
    assert body["existingMember"]["email"] == "grace@example.com"


def test_client_timestamp_ignored(client, store):
    client.post(ENDPOINT_PATH, data={**FORM, "timestamp": "1999-01-01T00:00:00.000Z"})
    assert store.read_all()[0][8] != "1999-01-01T00:00:00.000Z"


def test_malformed_submission_rejected_at_boundary(client, store):
    response = client.post(ENDPOINT_PATH, data={**FORM, "fullName": "", "phone": "12"})
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is False
    assert set(body["errors"]) == {"fullName", "phone"}
    assert store.count() == 0


def test_store_write_failure_is_payload_not_fault():
    store = MagicMock()
    store.append.side_effect = StoreWriteError("sheet unreachable")
    client = TestClient(create_app(store))
    response = client.post(ENDPOINT_PATH, data=FORM)
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert "sheet unreachable" in response.json()["error"]


def test_store_read_failure_degrades():
    store = MagicMock()
    store.find_by_normalized_phone.side_effect = StoreReadError("quota exceeded")
    client = TestClient(create_app(store))
    response = client.get(ENDPOINT_PATH, params={"action": "checkDuplicate", "phone": "08011112222"})
    assert response.status_code == 200
    body = response.json()
    assert body["isDuplicate"] is False
    assert "quota exceeded" in body["error"]


def test_unexpected_error_caught_at_boundary():
    store = MagicMock()
    store.append.side_effect = RuntimeError("boom")
    client = TestClient(create_app(store))
    response = client.post(ENDPOINT_PATH, data=FORM)
    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Failed to submit registration: boom"}
