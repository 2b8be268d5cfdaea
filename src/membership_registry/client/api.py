"""HTTP client for the registration endpoint with sync and async interfaces."""

from __future__ import annotations

import logging

from membership_registry.exceptions import ConfigError, DuplicateCheckError, SubmissionError
from membership_registry.records.models import (
    DuplicateCheckResult,
    RegistrationRecord,
    SubmissionResult,
)
from membership_registry.store.base import format_timestamp, utc_now

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Failed to submit registration. Please try again."


class RegistryAPIClient:
    """Talks to the registration endpoint. One attempt per call, no retries.

    Duplicate checks never raise: any failure degrades to "not a duplicate".
    Submissions never raise: any failure becomes an unsuccessful result.

    Args:
        endpoint_url: Full URL of the endpoint (e.g. ``https://host/exec``).
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (used in tests).
    """

    def __init__(self, endpoint_url: str, timeout: float = 10.0, transport=None):
        if not endpoint_url:
            raise ConfigError(
                "Endpoint URL is required. "
                "Pass it directly or set REGISTRY_ENDPOINT_URL in your environment."
            )
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for RegistryAPIClient. "
                "Install with: pip install membership-registry[client]"
            )
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport

    def _client_kwargs(self) -> dict:
        kwargs: dict = {"timeout": self.timeout, "follow_redirects": True}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    @staticmethod
    def _form_data(record: RegistrationRecord) -> dict[str, str]:
        data = {"action": "submit", **record.to_form()}
        # Informational only; the endpoint stamps rows with its own clock.
        data["timestamp"] = format_timestamp(utc_now())
        return data

    @staticmethod
    def _parse_duplicate(response) -> DuplicateCheckResult:
        if response.status_code != 200:
            raise DuplicateCheckError(f"Endpoint returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as e:
            raise DuplicateCheckError(f"Malformed duplicate check response: {e}") from e
        if not isinstance(payload, dict):
            raise DuplicateCheckError("Malformed duplicate check response")
        return DuplicateCheckResult.from_payload(payload)

    @staticmethod
    def _parse_submission(response) -> SubmissionResult:
        if response.status_code != 200:
            raise SubmissionError(f"Endpoint returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as e:
            raise SubmissionError(f"Malformed submission response: {e}") from e
        if not isinstance(payload, dict):
            raise SubmissionError("Malformed submission response")
        result = SubmissionResult.from_payload(payload)
        if not result.success and not result.message:
            result.message = RETRY_MESSAGE
        return result

    # ---- Async ----

    async def check_duplicate(self, phone: str) -> DuplicateCheckResult:
        """Async duplicate lookup for a phone number."""
        import httpx

        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.get(
                    self.endpoint_url,
                    params={"action": "checkDuplicate", "phone": phone},
                )
            return self._parse_duplicate(response)
        except Exception as e:
            logger.warning(f"Duplicate check failed, proceeding with registration: {e}")
            return DuplicateCheckResult(is_duplicate=False, error=str(e))

    async def submit(self, record: RegistrationRecord) -> SubmissionResult:
        """Async form-encoded submission of one registration."""
        import httpx

        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(self.endpoint_url, data=self._form_data(record))
            return self._parse_submission(response)
        except Exception as e:
            logger.error(f"Error submitting registration: {e}")
            return SubmissionResult(success=False, message=RETRY_MESSAGE)

    # ---- Sync ----

    def check_duplicate_sync(self, phone: str) -> DuplicateCheckResult:
        """Synchronous duplicate lookup for a phone number."""
        import httpx

        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.get(
                    self.endpoint_url,
                    params={"action": "checkDuplicate", "phone": phone},
                )
            return self._parse_duplicate(response)
        except Exception as e:
            logger.warning(f"Duplicate check failed, proceeding with registration: {e}")
            return DuplicateCheckResult(is_duplicate=False, error=str(e))

    def submit_sync(self, record: RegistrationRecord) -> SubmissionResult:
        """Synchronous form-encoded submission of one registration."""
        import httpx

        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.post(self.endpoint_url, data=self._form_data(record))
            return self._parse_submission(response)
        except Exception as e:
            logger.error(f"Error submitting registration: {e}")
            return SubmissionResult(success=False, message=RETRY_MESSAGE)
