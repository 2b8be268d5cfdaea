"""Data models for registration records and use-case results."""

from __future__ import annotations

from dataclasses import dataclass, field

# Canonical column order. Downstream readers index columns positionally,
# so this must never change once rows exist.
HEADERS = [
    "Full Name",
    "Email",
    "Phone Number",
    "Home Address",
    "Gender",
    "Date of Birth",
    "Marital Status",
    "Society",
    "Registration Date",
]

COL_NAME = 0
COL_EMAIL = 1
COL_PHONE = 2
COL_ADDRESS = 3
COL_GENDER = 4
COL_DATE_OF_BIRTH = 5
COL_MARITAL_STATUS = 6
COL_SOCIETY = 7
COL_TIMESTAMP = 8

# Form field names as sent over the wire, in column order (timestamp excluded).
FORM_FIELDS = [
    "fullName",
    "email",
    "phone",
    "homeAddress",
    "gender",
    "dateOfBirth",
    "maritalStatus",
    "society",
]

GENDERS = ("Male", "Female")
MARITAL_STATUSES = ("Single", "Married", "Other")

SOCIETY_OPTIONS = [
    "Choir",
    "Ushering",
    "Technical/Sound",
    "Children's Society",
    "Youth Society",
    "Liturgy Committee",
    "Evangelization",
    "Social Services",
    "Finance Committee",
    "Maintenance",
    "Catholic Women Organization (CWO)",
    "Catholic Men Organization (CMO)",
    "Legion of Mary",
    "Sacred Heart Society",
    "Other",
]


@dataclass
class RegistrationRecord:
    """One person's registration, as entered on the form."""

    full_name: str
    phone: str
    home_address: str
    date_of_birth: str  # ISO 8601 date
    society: str
    gender: str = "Male"
    marital_status: str = "Single"
    email: str = ""

    @classmethod
    def from_form(cls, fields: dict) -> RegistrationRecord:
        """Build a record from wire field names, defaulting missing fields to ''."""

        def get(name: str) -> str:
            value = fields.get(name)
            return "" if value is None else str(value)

        return cls(
            full_name=get("fullName"),
            email=get("email"),
            phone=get("phone"),
            home_address=get("homeAddress"),
            gender=get("gender"),
            date_of_birth=get("dateOfBirth"),
            marital_status=get("maritalStatus"),
            society=get("society"),
        )

    def to_form(self) -> dict[str, str]:
        """Wire field names -> values, in column order."""
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "homeAddress": self.home_address,
            "gender": self.gender,
            "dateOfBirth": self.date_of_birth,
            "maritalStatus": self.marital_status,
            "society": self.society,
        }

    def to_row(self, timestamp: str) -> list[str]:
        """Canonical row with the store-assigned timestamp in the last column."""
        return [*self.to_form().values(), timestamp]


@dataclass
class ExistingMember:
    """Summary of a previously registered member, shown in duplicate warnings."""

    name: str
    email: str
    registration_date: str

    def to_payload(self) -> dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "registrationDate": self.registration_date,
        }


@dataclass
class DuplicateCheckResult:
    """Outcome of an advisory duplicate lookup."""

    is_duplicate: bool
    existing_member: ExistingMember | None = None
    error: str | None = None

    def to_payload(self) -> dict:
        payload: dict = {"isDuplicate": self.is_duplicate}
        if self.existing_member is not None:
            payload["existingMember"] = self.existing_member.to_payload()
        if self.error:
            payload["error"] = self.error
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> DuplicateCheckResult:
        member = payload.get("existingMember")
        existing = None
        if isinstance(member, dict):
            existing = ExistingMember(
                name=str(member.get("name", "")),
                email=str(member.get("email", "")),
                registration_date=str(member.get("registrationDate", "")),
            )
        return cls(
            is_duplicate=bool(payload.get("isDuplicate")),
            existing_member=existing,
            error=payload.get("error"),
        )


@dataclass
class SubmissionResult:
    """Outcome of a registration write."""

    success: bool
    message: str
    errors: dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict:
        if self.success:
            return {"success": True, "message": self.message}
        payload: dict = {"success": False, "error": self.message}
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> SubmissionResult:
        if payload.get("success") is True:
            return cls(success=True, message=str(payload.get("message", "")))
        errors = payload.get("errors")
        return cls(
            success=False,
            message=str(payload.get("error") or payload.get("message") or ""),
            errors=dict(errors) if isinstance(errors, dict) else {},
        )
