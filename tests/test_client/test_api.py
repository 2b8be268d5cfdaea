"""Tests for the registration endpoint client."""

import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from membership_registry.client.api import RETRY_MESSAGE, RegistryAPIClient
from membership_registry.exceptions import ConfigError
from membership_registry.records.models import RegistrationRecord

URL = "https://registry.example.org/exec"


def _record():
    return RegistrationRecord(
        full_name="Grace Okafor", phone="08011112222", home_address="Bauchi",
        date_of_birth="1990-04-12", society="Choir", gender="Female",
    )


def _client(handler):
    return RegistryAPIClient(URL, timeout=1.0, transport=httpx.MockTransport(handler))


def test_init_requires_endpoint():
    with pytest.raises(ConfigError, match="Endpoint URL is required"):
        RegistryAPIClient("")


def test_check_duplicate_sync_sends_action():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={
            "isDuplicate": True,
            "existingMember": {"name": "Ada", "email": "", "registrationDate": "Jan 5, 2026, 09:30 AM"},
        })

    result = _client(handler).check_duplicate_sync("+2348011112222")
    assert seen == {"action": "checkDuplicate", "phone": "+2348011112222"}
    assert result.is_duplicate is True
    assert result.existing_member.name == "Ada"


def test_check_duplicate_http_error_degrades():
    result = _client(lambda request: httpx.Response(500)).check_duplicate_sync("08011112222")
    assert result.is_duplicate is False
    assert "HTTP 500" in result.error


def test_check_duplicate_transport_error_degrades():
    def handler(request):
        raise httpx.ConnectTimeout("timed out")

    result = asyncio.run(_client(handler).check_duplicate("08011112222"))
    assert result.is_duplicate is False
    assert result.error


def test_check_duplicate_garbage_degrades():
    result = _client(lambda request: httpx.Response(200, text="<html>")).check_duplicate_sync("0801")
    assert result.is_duplicate is False


def test_submit_sync_form_encoded():
    seen = {}

    def handler(request):
        seen.update({k: v[0] for k, v in parse_qs(request.content.decode()).items()})
        return httpx.Response(200, json={"success": True, "message": "Registration submitted successfully!"})

    result = _client(handler).submit_sync(_record())
    assert result.success is True
    assert seen["action"] == "submit"
    assert seen["fullName"] == "Grace Okafor"
    assert seen["phone"] == "08011112222"
    assert "timestamp" in seen


def test_submit_payload_failure_message():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "Failed to submit registration: x"})

    result = asyncio.run(_client(handler).submit(_record()))
    assert result.success is False
    assert result.message == "Failed to submit registration: x"


def test_submit_transport_failure_is_retryable_message():
    def handler(request):
        raise httpx.ConnectError("refused")

    result = _client(handler).submit_sync(_record())
    assert result.success is False
    assert result.message == RETRY_MESSAGE


def test_submit_follows_redirect_to_result():
    # Script-style endpoints answer a POST with a 302 to the stored result.
    def handler(request):
        if request.url.path == "/exec":
            return httpx.Response(302, headers={"Location": "https://results.example.org/echo?id=1"})
        return httpx.Response(200, json={"success": True, "message": "Registration submitted successfully!"})

    result = _client(handler).submit_sync(_record())
    assert result.success is True
    assert result.message == "Registration submitted successfully!"


def test_check_duplicate_follows_redirect():
    def handler(request):
        if request.url.host == "registry.example.org":
            return httpx.Response(302, headers={"Location": "https://results.example.org/echo"})
        return httpx.Response(200, json={
            "isDuplicate": True,
            "existingMember": {"name": "Ada", "email": "", "registrationDate": ""},
        })

    result = asyncio.run(_client(handler).check_duplicate("08011112222"))
    assert result.is_duplicate is True
    assert result.error is None
