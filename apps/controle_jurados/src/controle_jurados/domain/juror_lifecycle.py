"""Write-time status normalization for juror records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from controle_jurados.db.models.juror import (
    PERMANENT_EXCLUSION_REASONS,
    InactivityReason,
    JurorStatus,
)
from controle_jurados.domain.calendar_year import calendar_year
from controle_jurados.domain.errors import ValidationError, compose_error_message

STATUS_FIELD_NAMES = frozenset(
    {"status", "reason", "suspended_until", "last_service_date"}
)


@dataclass(slots=True, frozen=True)
class StatusFields:
    """Juror fields governed by lifecycle rules."""

    status: JurorStatus = JurorStatus.ACTIVE
    reason: InactivityReason | None = None
    suspended_until: date | None = None
    last_service_date: date | None = None


def requires_twelve_month_rest(
    *,
    last_service_date: date | str | None,
    reason: InactivityReason | None,
    current_year: int,
) -> bool:
    """Return whether serving last year forces the mandatory rest status."""

    service_year = calendar_year(last_service_date)
    if service_year is None or service_year != current_year - 1:
        return False
    return reason not in PERMANENT_EXCLUSION_REASONS


def normalize_status_fields(
    current: StatusFields,
    changes: Mapping[str, Any],
    *,
    current_year: int,
) -> StatusFields:
    """Merge requested changes over stored values applying lifecycle rules."""

    unknown = set(changes) - STATUS_FIELD_NAMES
    if unknown:
        msg = f"Unsupported status fields: {sorted(unknown)}"
        raise ValueError(msg)

    merged = replace(current, **dict(changes))

    if "status" in changes and merged.status == JurorStatus.ACTIVE:
        merged = replace(merged, reason=None, suspended_until=None)
    elif merged.status == JurorStatus.ACTIVE and merged.reason is not None:
        raise ValidationError(
            message=compose_error_message(
                cause="An inactivity reason was sent for an active juror.",
                action="Set status to Inativo together with the reason.",
            ),
            details={"reason": merged.reason.value},
        )

    if merged.reason != InactivityReason.TEMPORARY_SUSPENSION:
        if changes.get("suspended_until") is not None:
            raise ValidationError(
                message=compose_error_message(
                    cause="suspended_until is only allowed for temporary suspensions.",
                    action="Use reason Temporário or omit suspended_until.",
                ),
                details={"suspended_until": str(changes["suspended_until"])},
            )
        merged = replace(merged, suspended_until=None)

    if changes.get("last_service_date") is not None and requires_twelve_month_rest(
        last_service_date=merged.last_service_date,
        reason=merged.reason,
        current_year=current_year,
    ):
        merged = replace(
            merged,
            status=JurorStatus.INACTIVE,
            reason=InactivityReason.TWELVE_MONTH_REST,
            suspended_until=None,
        )

    return merged
