"""Registration form workflow as an explicit state machine.

    Editing --blur(phone)--> CheckingDuplicate --> Editing (+/- warning)
    Editing --submit--> Validating --> Submitting --> Submitted
                               +-> Editing (field errors)

The form is always in exactly one state, so e.g. "checking a duplicate while
submitting" cannot be represented. A duplicate check never gates submission;
only an active warning does, via the confirmation callback.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Union

from membership_registry.exceptions import WorkflowError
from membership_registry.records.models import FORM_FIELDS, RegistrationRecord
from membership_registry.records.phone import is_valid_phone
from membership_registry.records.validation import collect_errors

logger = logging.getLogger(__name__)

CONFIRM_DUPLICATE_PROMPT = (
    "This phone number appears to be already registered. Do you want to proceed anyway? "
    "This may create a duplicate record."
)
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."


def duplicate_warning(name: str) -> str:
    return (
        f"This phone number is already registered for {name}. "
        "Please contact the church office if you need to update your information."
    )


@dataclass(frozen=True)
class Editing:
    errors: dict[str, str] = field(default_factory=dict)
    warning: str = ""
    submit_error: str = ""


@dataclass(frozen=True)
class CheckingDuplicate:
    phone: str
    errors: dict[str, str] = field(default_factory=dict)
    submit_error: str = ""


@dataclass(frozen=True)
class Validating:
    pass


@dataclass(frozen=True)
class Submitting:
    pass


@dataclass(frozen=True)
class Submitted:
    message: str


FormState = Union[Editing, CheckingDuplicate, Validating, Submitting, Submitted]


def default_values() -> dict[str, str]:
    values = {name: "" for name in FORM_FIELDS}
    values["gender"] = "Male"
    values["maritalStatus"] = "Single"
    return values


class RegistrationForm:
    """Drives one registration form against the endpoint client.

    Args:
        api: Object with async ``check_duplicate(phone)`` and ``submit(record)``
            (normally a RegistryAPIClient).
        confirm: Called with a prompt when submitting over a duplicate warning;
            returns True to proceed. Without it, flagged submissions are held.
        check_timeout: Upper bound in seconds for a duplicate check.
        submit_timeout: Upper bound in seconds for a submission.
    """

    def __init__(
        self,
        api,
        confirm: Callable[[str], bool] | None = None,
        check_timeout: float = 15.0,
        submit_timeout: float = 30.0,
    ):
        self.api = api
        self.confirm = confirm
        self.check_timeout = check_timeout
        self.submit_timeout = submit_timeout
        self.values = default_values()
        self.state: FormState = Editing()

    @property
    def checking_phone(self) -> bool:
        """Whether the phone field should show its busy indicator."""
        return isinstance(self.state, CheckingDuplicate)

    @property
    def warning(self) -> str:
        return self.state.warning if isinstance(self.state, Editing) else ""

    @property
    def errors(self) -> dict[str, str]:
        if isinstance(self.state, (Editing, CheckingDuplicate)):
            return dict(self.state.errors)
        return {}

    def record(self) -> RegistrationRecord:
        return RegistrationRecord.from_form(self.values)

    def set_field(self, name: str, value: str) -> None:
        """Update a field; clears its error, and a stale duplicate warning on phone edits."""
        if name not in self.values:
            raise KeyError(name)
        state = self.state
        if not isinstance(state, (Editing, CheckingDuplicate)):
            raise WorkflowError(f"Cannot edit the form while {type(state).__name__}")

        changed = self.values[name] != value
        self.values[name] = value
        errors = {k: v for k, v in state.errors.items() if k != name}

        if isinstance(state, CheckingDuplicate):
            if name == "phone" and changed:
                # The in-flight result now refers to an old number.
                self.state = Editing(errors=errors, submit_error=state.submit_error)
            else:
                self.state = CheckingDuplicate(state.phone, errors, state.submit_error)
            return

        warning = "" if name == "phone" and changed else state.warning
        self.state = Editing(errors=errors, warning=warning, submit_error=state.submit_error)

    async def blur_phone(self) -> FormState:
        """Run one advisory duplicate check for a well-formed phone."""
        state = self.state
        phone = self.values["phone"]
        if not isinstance(state, Editing) or not is_valid_phone(phone):
            return self.state

        self.state = CheckingDuplicate(phone, state.errors, state.submit_error)
        try:
            result = await asyncio.wait_for(self.api.check_duplicate(phone), self.check_timeout)
        except Exception as e:
            logger.info(f"Duplicate check failed, proceeding with registration: {e}")
            result = None

        current = self.state
        if not (isinstance(current, CheckingDuplicate) and current.phone == phone):
            # Phone edited or form submitted meanwhile; drop the result.
            return current

        warning = ""
        if result is not None and result.is_duplicate and result.existing_member:
            warning = duplicate_warning(result.existing_member.name)
        self.state = Editing(errors=current.errors, warning=warning,
                             submit_error=current.submit_error)
        return self.state

    async def submit(self) -> FormState:
        """Validate, confirm over a duplicate warning, then submit once."""
        state = self.state
        if not isinstance(state, (Editing, CheckingDuplicate)):
            raise WorkflowError(f"Cannot submit while {type(state).__name__}")
        warning = state.warning if isinstance(state, Editing) else ""
        # A check abandoned by this submit is re-run if the form returns to editing.
        recheck = isinstance(state, CheckingDuplicate)

        self.state = Validating()
        record = self.record()
        errors = collect_errors(record)
        if errors:
            self.state = Editing(errors=errors, warning=warning)
            return await self._after_failure(recheck)

        if warning and not (self.confirm and self.confirm(CONFIRM_DUPLICATE_PROMPT)):
            self.state = Editing(warning=warning)
            return self.state

        self.state = Submitting()
        try:
            result = await asyncio.wait_for(self.api.submit(record), self.submit_timeout)
        except Exception as e:
            logger.error(f"Submission failed: {e}")
            self.state = Editing(warning=warning, submit_error=UNEXPECTED_ERROR)
            return await self._after_failure(recheck)

        if result.success:
            self.state = Submitted(result.message)
        else:
            self.state = Editing(
                errors=dict(result.errors),
                warning=warning,
                submit_error=result.message or UNEXPECTED_ERROR,
            )
            return await self._after_failure(recheck)
        return self.state

    async def _after_failure(self, recheck: bool) -> FormState:
        if recheck:
            return await self.blur_phone()
        return self.state

    def reset(self) -> None:
        """Start a new registration with cleared fields."""
        if isinstance(self.state, (Validating, Submitting)):
            raise WorkflowError("Cannot reset while a submission is in progress")
        self.values = default_values()
        self.state = Editing()
