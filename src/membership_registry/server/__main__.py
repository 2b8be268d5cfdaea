"""Run the registration endpoint backed by Google Sheets.

    python -m membership_registry.server [--host 0.0.0.0] [--port 8000]
"""

from __future__ import annotations

import argparse
import logging

from membership_registry.config import Settings
from membership_registry.server.app import create_app
from membership_registry.store.sheets import SheetsRecordStore

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Membership registration endpoint")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    args = parser.parse_args()

    import uvicorn

    settings = Settings.from_env(args.env_file)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    spreadsheet_id, key_file = settings.require_sheets()
    store = SheetsRecordStore.from_service_account_file(
        key_file, spreadsheet_id, sheet_name=settings.sheet_name,
    )
    app = create_app(store, allowed_origins=settings.allowed_origins)

    logger.info(f"Serving registrations from sheet '{settings.sheet_name}'")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
