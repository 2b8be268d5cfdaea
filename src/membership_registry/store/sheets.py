"""Google Sheets record store with sync and async interfaces."""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from membership_registry.exceptions import (
    ConfigError,
    StoreReadError,
    StoreSchemaError,
    StoreWriteError,
)
from membership_registry.records.models import HEADERS, RegistrationRecord
from membership_registry.store.base import BaseRecordStore, pad_row

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

_LAST_COLUMN = chr(ord("A") + len(HEADERS) - 1)

# Presentation only.
_HEADER_BACKGROUND = {"red": 0x1E / 255, "green": 0x40 / 255, "blue": 0xAF / 255}
_HEADER_FOREGROUND = {"red": 1.0, "green": 1.0, "blue": 1.0}
_COLUMN_WIDTHS = [200, 250, 150, 300, 100, 120, 120, 200, 180]


def _quote_sheet(name: str) -> str:
    """Quote a sheet title for A1 notation."""
    return "'" + name.replace("'", "''") + "'"


def load_service_account_credentials(key_file: Path, scopes: list[str] | None = None):
    """Load service account credentials from a JSON key file."""
    try:
        from google.oauth2.service_account import Credentials
    except ImportError:
        raise ImportError(
            "google-auth is required for SheetsRecordStore. "
            "Install with: pip install membership-registry[sheets]"
        )
    if not key_file.exists():
        raise ConfigError(
            f"Service account key not found at {key_file}. "
            "Download it from Google Cloud Console and place it there."
        )
    return Credentials.from_service_account_file(str(key_file), scopes=scopes or SCOPES)


class SheetsRecordStore(BaseRecordStore):
    """Registration rows kept in one sheet of a Google spreadsheet.

    The sheet and its header row are created lazily on first access.

    Args:
        credentials: A google.auth credentials object with the spreadsheets scope.
        spreadsheet_id: ID of the target spreadsheet.
        sheet_name: Title of the sheet holding registrations.
        clock: See BaseRecordStore.
    """

    def __init__(
        self,
        credentials,
        spreadsheet_id: str,
        sheet_name: str = "Registrations",
        clock: Callable[[], datetime] | None = None,
    ):
        super().__init__(clock=clock)
        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "google-api-python-client is required for SheetsRecordStore. "
                "Install with: pip install membership-registry[sheets]"
            )
        self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._schema_ready = False
        self._schema_lock = threading.Lock()

    @classmethod
    def from_service_account_file(
        cls,
        key_file: Path,
        spreadsheet_id: str,
        sheet_name: str = "Registrations",
    ) -> SheetsRecordStore:
        """Build a store authenticated as a service account."""
        creds = load_service_account_credentials(key_file)
        return cls(creds, spreadsheet_id, sheet_name=sheet_name)

    def _range(self, cells: str) -> str:
        return f"{_quote_sheet(self.sheet_name)}!{cells}"

    # ---- Schema ----

    def _find_sheet_id(self) -> int | None:
        meta = (
            self._service.spreadsheets()
            .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties")
            .execute()
        )
        for sheet in meta.get("sheets", []):
            props = sheet.get("properties", {})
            if props.get("title") == self.sheet_name:
                return props.get("sheetId")
        return None

    def _add_sheet(self) -> int:
        response = (
            self._service.spreadsheets()
            .batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"requests": [{"addSheet": {"properties": {"title": self.sheet_name}}}]},
            )
            .execute()
        )
        return response["replies"][0]["addSheet"]["properties"]["sheetId"]

    def _has_header(self) -> bool:
        result = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=self._range(f"A1:{_LAST_COLUMN}1"))
            .execute()
        )
        return bool(result.get("values"))

    def _format_requests(self, sheet_id: int) -> list[dict[str, Any]]:
        requests: list[dict[str, Any]] = [
            {
                "repeatCell": {
                    "range": {
                        "sheetId": sheet_id,
                        "startRowIndex": 0,
                        "endRowIndex": 1,
                        "startColumnIndex": 0,
                        "endColumnIndex": len(HEADERS),
                    },
                    "cell": {
                        "userEnteredFormat": {
                            "backgroundColor": _HEADER_BACKGROUND,
                            "horizontalAlignment": "CENTER",
                            "textFormat": {
                                "bold": True,
                                "foregroundColor": _HEADER_FOREGROUND,
                            },
                        }
                    },
                    "fields": "userEnteredFormat(backgroundColor,horizontalAlignment,textFormat)",
                }
            },
            {
                "updateSheetProperties": {
                    "properties": {
                        "sheetId": sheet_id,
                        "gridProperties": {"frozenRowCount": 1},
                    },
                    "fields": "gridProperties.frozenRowCount",
                }
            },
        ]
        for index, width in enumerate(_COLUMN_WIDTHS):
            requests.append({
                "updateDimensionProperties": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": "COLUMNS",
                        "startIndex": index,
                        "endIndex": index + 1,
                    },
                    "properties": {"pixelSize": width},
                    "fields": "pixelSize",
                }
            })
        return requests

    def _initialize(self, sheet_id: int) -> None:
        self._service.spreadsheets().values().update(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(f"A1:{_LAST_COLUMN}1"),
            valueInputOption="RAW",
            body={"values": [HEADERS]},
        ).execute()
        self._service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": self._format_requests(sheet_id)},
        ).execute()
        logger.info(f"Initialized sheet '{self.sheet_name}' with headers and formatting")

    def ensure_schema(self) -> None:
        """Create the sheet and header row if missing. Later calls are no-ops."""
        if self._schema_ready:
            return
        with self._schema_lock:
            if self._schema_ready:
                return
            try:
                sheet_id = self._find_sheet_id()
                if sheet_id is None:
                    sheet_id = self._add_sheet()
                    logger.info(f"Created sheet '{self.sheet_name}'")
                    self._initialize(sheet_id)
                elif not self._has_header():
                    self._initialize(sheet_id)
            except Exception as e:
                raise StoreSchemaError(
                    f"Failed to prepare sheet '{self.sheet_name}': {e}"
                ) from e
            self._schema_ready = True

    # ---- Rows ----

    def read_all(self) -> list[list[str]]:
        self.ensure_schema()
        try:
            result = (
                self._service.spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=self._range(f"A2:{_LAST_COLUMN}"))
                .execute()
            )
        except Exception as e:
            raise StoreReadError(f"Failed to read registrations: {e}") from e
        return [pad_row(row) for row in result.get("values", [])]

    def _append_row(self, row: list[str]) -> None:
        self.ensure_schema()
        try:
            self._service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self._range(f"A:{_LAST_COLUMN}"),
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": [row]},
            ).execute()
        except Exception as e:
            raise StoreWriteError(f"Failed to append registration: {e}") from e
        logger.info(f"Appended registration row to '{self.sheet_name}'")

    # ---- Async wrappers (asyncio.to_thread) ----

    async def aensure_schema(self) -> None:
        """Async version of ensure_schema."""
        return await asyncio.to_thread(self.ensure_schema)

    async def aread_all(self) -> list[list[str]]:
        """Async version of read_all."""
        return await asyncio.to_thread(self.read_all)

    async def aappend(self, record: RegistrationRecord) -> list[str]:
        """Async version of append."""
        return await asyncio.to_thread(self.append, record)
