"""HTTP endpoint for the registration form.

One path serves both operations, selected by the ``action`` parameter:

    GET  /exec?action=checkDuplicate&phone=...
    POST /exec  (form-encoded, action=submit)

Failures are reported with HTTP 200 and a payload-level flag so existing
form clients keep working.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from membership_registry.records.models import FORM_FIELDS
from membership_registry.registry.duplicates import DuplicateChecker
from membership_registry.registry.submission import SubmissionHandler
from membership_registry.store.base import BaseRecordStore

logger = logging.getLogger(__name__)

ENDPOINT_PATH = "/exec"

INVALID_GET_ACTION = "Invalid action. Use action=checkDuplicate with phone parameter."
INVALID_POST_ACTION = "Invalid action. Use action=submit for form submissions."


def create_app(
    store: BaseRecordStore,
    allowed_origins: list[str] | None = None,
) -> FastAPI:
    """Build the FastAPI app bound to an explicit record store."""
    app = FastAPI(
        title="Membership Registration",
        version="1.0.0",
        description="Duplicate checking and submission for the membership form",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.state.store = store
    checker = DuplicateChecker(store)
    handler = SubmissionHandler(store)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "running"}

    @app.get(ENDPOINT_PATH)
    def check_duplicate(action: str | None = None, phone: str = "") -> dict:
        if action != "checkDuplicate":
            return {"error": INVALID_GET_ACTION}
        try:
            return checker.check(phone).to_payload()
        except Exception as e:
            logger.exception("Unexpected error checking for duplicates")
            return {"isDuplicate": False, "error": f"Failed to check duplicates: {e}"}

    @app.post(ENDPOINT_PATH)
    async def submit(request: Request) -> dict:
        try:
            form = await request.form()
        except Exception as e:
            logger.warning(f"Unreadable submission body: {e}")
            return {"success": False, "error": f"Failed to read submission: {e}"}

        action = form.get("action") or request.query_params.get("action")
        if action != "submit":
            return {"success": False, "error": INVALID_POST_ACTION}

        # Only known fields; a client-sent timestamp is ignored.
        fields = {name: str(form.get(name) or "") for name in FORM_FIELDS}
        try:
            result = await asyncio.to_thread(handler.submit, fields)
        except Exception as e:
            logger.exception("Unexpected error submitting registration")
            return {"success": False, "error": f"Failed to submit registration: {e}"}
        return result.to_payload()

    return app
