"""Normalization of juror and judge registration data."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from controle_jurados.db.models.judge import DEFAULT_COURT_DIVISION, DEFAULT_DISTRICT
from controle_jurados.domain.errors import ValidationError, compose_error_message

STATE_PATTERN = re.compile(r"^[A-Z]{2}$")

JUROR_UPPERCASE_FIELDS = frozenset(
    {
        "street",
        "street_number",
        "complement",
        "neighborhood",
        "city",
        "occupation",
        "notes",
    }
)
JUROR_VERBATIM_FIELDS = frozenset({"rg", "phone", "postal_code"})
JUROR_REGISTRATION_FIELDS = JUROR_UPPERCASE_FIELDS | JUROR_VERBATIM_FIELDS | {
    "sex",
    "state",
    "email",
}

JUDGE_REGISTRATION_FIELDS = frozenset(
    {"registration_number", "email", "phone", "court_division", "district", "notes"}
)


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank text becomes ``None``."""

    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_email(value: str | None) -> str | None:
    email = clean_text(value)
    if email is None or email == "@":
        return None
    return email.lower()


def normalize_state(value: str | None) -> str | None:
    state = clean_text(value)
    if state is None:
        return None
    state = state.upper()
    if not STATE_PATTERN.match(state):
        raise ValidationError(
            message=compose_error_message(
                cause=f"State '{value}' must be a two-letter code.",
                action="Send the state abbreviation, for example SC.",
            ),
            details={"state": value},
        )
    return state


def _upper(value: str | None) -> str | None:
    text = clean_text(value)
    return text.upper() if text is not None else None


def normalize_juror_registration(values: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize the juror registration fields present in ``values``.

    Free text is upper-cased, document numbers, phone and postal code keep
    their spelling, and email is lower-cased. Keys not in ``values`` are left
    out of the result so partial updates keep stored data.
    """

    normalized: dict[str, Any] = {}
    for name, value in values.items():
        if name in JUROR_UPPERCASE_FIELDS:
            normalized[name] = _upper(value)
        elif name in JUROR_VERBATIM_FIELDS:
            normalized[name] = clean_text(value)
        elif name == "email":
            normalized[name] = normalize_email(value)
        elif name == "state":
            normalized[name] = normalize_state(value)
        elif name == "sex":
            normalized[name] = value
    return normalized


def normalize_judge_registration(values: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize judge registration fields; blanks reset division and district."""

    normalized: dict[str, Any] = {}
    for name, value in values.items():
        if name in ("registration_number", "phone"):
            normalized[name] = clean_text(value)
        elif name == "email":
            normalized[name] = normalize_email(value)
        elif name == "notes":
            normalized[name] = _upper(value)
        elif name == "court_division":
            normalized[name] = _upper(value) or DEFAULT_COURT_DIVISION
        elif name == "district":
            normalized[name] = _upper(value) or DEFAULT_DISTRICT
    return normalized
