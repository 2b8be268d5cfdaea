"""Environment-backed settings for the registration endpoint and its clients."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from membership_registry.exceptions import ConfigError

DEFAULT_SHEET_NAME = "Registrations"
DEFAULT_ENDPOINT_URL = "http://localhost:8000/exec"
DEFAULT_TIMEOUT = 10.0


@dataclass
class Settings:
    """Runtime settings. Only this class and the server entry point read the environment."""

    spreadsheet_id: str | None = None
    service_account_file: Path | None = None
    sheet_name: str = DEFAULT_SHEET_NAME
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    request_timeout: float = DEFAULT_TIMEOUT
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> Settings:
        """Build settings from ``REGISTRY_*`` variables, loading a .env file first."""
        try:
            from dotenv import load_dotenv
        except ImportError:
            raise ImportError(
                "python-dotenv is required for Settings.from_env. "
                "Install with: pip install membership-registry[client]"
            )

        load_dotenv(env_file)

        key_file = os.environ.get("REGISTRY_SERVICE_ACCOUNT_FILE")
        timeout_raw = os.environ.get("REGISTRY_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigError(
                f"REGISTRY_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}"
            ) from e
        if timeout <= 0:
            raise ConfigError("REGISTRY_REQUEST_TIMEOUT must be positive")

        origins = os.environ.get("REGISTRY_ALLOWED_ORIGINS", "*")

        return cls(
            spreadsheet_id=os.environ.get("REGISTRY_SPREADSHEET_ID") or None,
            service_account_file=Path(key_file) if key_file else None,
            sheet_name=os.environ.get("REGISTRY_SHEET_NAME", DEFAULT_SHEET_NAME),
            endpoint_url=os.environ.get("REGISTRY_ENDPOINT_URL", DEFAULT_ENDPOINT_URL),
            request_timeout=timeout,
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.environ.get("REGISTRY_LOG_LEVEL", "INFO").upper(),
        )

    def require_sheets(self) -> tuple[str, Path]:
        """Return (spreadsheet_id, key file) or raise if the Sheets store is not configured."""
        if not self.spreadsheet_id:
            raise ConfigError(
                "Spreadsheet ID is required. Set REGISTRY_SPREADSHEET_ID in your environment."
            )
        if not self.service_account_file:
            raise ConfigError(
                "Service account key is required. "
                "Set REGISTRY_SERVICE_ACCOUNT_FILE in your environment."
            )
        return self.spreadsheet_id, self.service_account_file
