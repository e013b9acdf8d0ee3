"""Time-zone-free calendar helpers for ISO dates."""

from __future__ import annotations

import re
from datetime import date

from controle_jurados.domain.errors import ValidationError, compose_error_message

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")


def calendar_year(value: date | str | None) -> int | None:
    """Return the calendar year of an ISO date without shifting time zones.

    ``YYYY-MM-DD`` strings (optionally followed by a time part) are sliced,
    never parsed into a datetime. ``date`` values expose their year directly.
    """

    if value is None:
        return None
    if isinstance(value, date):
        return value.year
    match = ISO_DATE_PATTERN.match(value)
    if match is None:
        raise ValidationError(
            message=compose_error_message(
                cause=f"'{value}' is not an ISO date.",
                action="Send dates in YYYY-MM-DD format.",
            ),
            details={"value": value},
        )
    return int(match.group(1))


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a calendar date."""

    match = ISO_DATE_PATTERN.fullmatch(value.strip())
    if match is None:
        raise ValidationError(
            message=compose_error_message(
                cause=f"'{value}' is not in YYYY-MM-DD format.",
                action="Send dates in YYYY-MM-DD format.",
            ),
            details={"value": value},
        )
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValidationError(
            message=compose_error_message(
                cause=f"'{value}' is not a valid calendar date.",
                action="Check day and month values.",
            ),
            details={"value": value},
        ) from exc
