"""Phone number normalization and format checks (Nigerian numbering plan)."""

from __future__ import annotations

import re

COUNTRY_PREFIX = "+234"

_NOT_PHONE_CHARS = re.compile(r"[^0-9+]")
_SEPARATORS = re.compile(r"[\s\-().]")
_LOCAL_FORMAT = re.compile(r"[0-9]{11}")
_INTERNATIONAL_FORMAT = re.compile(r"\+234[0-9]{10}")


def _strip(raw: str) -> str:
    return _NOT_PHONE_CHARS.sub("", raw)


def normalize_phone(raw: str | None) -> str:
    """Canonicalize a phone number for equality comparison.

    Keeps ASCII digits and ``+``, rewrites a leading ``+234`` to ``0``,
    then drops any remaining ``+``.

        +234 801 234 5678 -> 08012345678
        0801-234-5678     -> 08012345678
    """
    if not raw:
        return ""
    cleaned = _strip(str(raw))
    if cleaned.startswith(COUNTRY_PREFIX):
        cleaned = "0" + cleaned[len(COUNTRY_PREFIX):]
    return cleaned.replace("+", "")


def phones_match(a: str | None, b: str | None) -> bool:
    """True if both normalize to the same non-empty number."""
    na = normalize_phone(a)
    return na != "" and na == normalize_phone(b)


def is_valid_phone(raw: str | None) -> bool:
    """Either 11 local digits or +234 followed by 10 digits.

    Whitespace and ``-().`` separators are ignored; any other stray
    character (e.g. a letter) makes the number malformed.
    """
    if not raw:
        return False
    cleaned = _SEPARATORS.sub("", str(raw))
    return bool(_LOCAL_FORMAT.fullmatch(cleaned) or _INTERNATIONAL_FORMAT.fullmatch(cleaned))
