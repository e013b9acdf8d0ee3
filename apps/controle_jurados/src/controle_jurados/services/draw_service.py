"""Business service for draws, juror assignments and panel marking."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Protocol
from uuid import UUID

from controle_jurados.core.clock import Clock
from controle_jurados.db.models.draw import Draw, DrawStatus
from controle_jurados.db.models.draw_assignment import AssignmentRole, DrawAssignment
from controle_jurados.db.models.judge import Judge
from controle_jurados.db.models.juror import Juror
from controle_jurados.domain.eligibility import evaluate_eligibility, is_eligible
from controle_jurados.domain.errors import (
    AssignmentNotFoundError,
    DrawNotFoundError,
    DuplicateAssignmentError,
    JudgeNotFoundError,
    JurorNotFoundError,
    ValidationError,
    compose_error_message,
)
from controle_jurados.domain.juror_lifecycle import normalize_status_fields
from controle_jurados.services.juror_service import (
    apply_status_fields,
    status_fields_of,
)

logger = logging.getLogger(__name__)

MIN_REFERENCE_YEAR = 1900
MAX_REFERENCE_YEAR = 9999


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by draw service."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def refresh(self, instance: object) -> None: ...

    def flush(self) -> None: ...


class DrawRepositoryProtocol(Protocol):
    """Draw repository contract consumed by service."""

    def get(self, draw_id: UUID) -> Draw | None: ...

    def get_for_update(self, draw_id: UUID) -> Draw | None: ...

    def list_draws(self, reference_year: int | None = None) -> list[Draw]: ...

    def add(self, draw: Draw) -> Draw: ...

    def delete(self, draw: Draw) -> None: ...

    def get_assignment(
        self, *, draw_id: UUID, juror_id: UUID
    ) -> DrawAssignment | None: ...

    def get_assignment_for_update(
        self, *, draw_id: UUID, juror_id: UUID
    ) -> DrawAssignment | None: ...

    def add_assignment(
        self, *, draw_id: UUID, juror_id: UUID, role: AssignmentRole
    ) -> DrawAssignment: ...

    def delete_assignment(self, assignment: DrawAssignment) -> None: ...

    def list_assignments_with_jurors(
        self, draw_id: UUID
    ) -> list[tuple[DrawAssignment, Juror]]: ...

    def delete_marks(self, draw_id: UUID) -> None: ...

    def add_marks(self, *, draw_id: UUID, juror_ids: Collection[UUID]) -> None: ...

    def list_marked_juror_ids(self, draw_id: UUID) -> list[UUID]: ...


class JurorLookupProtocol(Protocol):
    """Juror repository subset consumed by draw service."""

    def get(self, juror_id: UUID) -> Juror | None: ...

    def list_for_update(self, juror_ids: Collection[UUID]) -> list[Juror]: ...

    def list_active_ordered_by_name(self) -> list[Juror]: ...


class JudgeLookupProtocol(Protocol):
    """Judge repository subset consumed by draw service."""

    def get(self, judge_id: UUID) -> Judge | None: ...


@dataclass(slots=True, frozen=True)
class CreateDrawInput:
    """Input model for draw creation."""

    reference_year: int
    draw_date: date
    sitting_date: date
    sitting_time: time | None = None
    judge_id: UUID | None = None
    status: DrawStatus = DrawStatus.SCHEDULED
    case_number: str | None = None
    location: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateDrawInput:
    """Input model for partial draw updates; keys present in ``changes`` win."""

    draw_id: UUID
    changes: dict[str, Any]


UPDATABLE_DRAW_FIELDS = frozenset(
    {
        "reference_year",
        "draw_date",
        "sitting_date",
        "sitting_time",
        "judge_id",
        "status",
        "case_number",
        "location",
    }
)


@dataclass(slots=True, frozen=True)
class AssignedJurorView:
    """One assignment of a draw with its juror."""

    assignment: DrawAssignment
    juror: Juror


def _ensure_reference_year(reference_year: int) -> None:
    if not MIN_REFERENCE_YEAR <= reference_year <= MAX_REFERENCE_YEAR:
        raise ValidationError(
            message=compose_error_message(
                cause=f"reference_year {reference_year} is out of range.",
                action=(
                    f"Use a year between {MIN_REFERENCE_YEAR} "
                    f"and {MAX_REFERENCE_YEAR}."
                ),
            ),
            details={"reference_year": reference_year},
        )


class DrawService:
    """Coordinates draw configuration and juror assignment use cases."""

    def __init__(
        self,
        *,
        draw_repository: DrawRepositoryProtocol,
        juror_repository: JurorLookupProtocol,
        judge_repository: JudgeLookupProtocol,
        session: SessionProtocol,
        clock: Clock,
        last_service_panel_limit: int = 7,
    ) -> None:
        self._draw_repository = draw_repository
        self._juror_repository = juror_repository
        self._judge_repository = judge_repository
        self._session = session
        self._clock = clock
        self._last_service_panel_limit = last_service_panel_limit

    def create_draw(self, payload: CreateDrawInput) -> Draw:
        _ensure_reference_year(payload.reference_year)
        self._ensure_judge(payload.judge_id)
        try:
            draw = self._draw_repository.add(
                Draw(
                    reference_year=payload.reference_year,
                    draw_date=payload.draw_date,
                    sitting_date=payload.sitting_date,
                    sitting_time=payload.sitting_time,
                    judge_id=payload.judge_id,
                    status=payload.status,
                    case_number=payload.case_number,
                    location=payload.location,
                )
            )
            self._session.commit()
            self._session.refresh(draw)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "draw_created",
            extra={
                "draw_id": str(draw.id),
                "reference_year": draw.reference_year,
            },
        )
        return draw

    def update_draw(self, payload: UpdateDrawInput) -> Draw:
        unknown = set(payload.changes) - UPDATABLE_DRAW_FIELDS
        if unknown:
            raise ValidationError(
                message=compose_error_message(
                    cause=f"Fields {sorted(unknown)} cannot be updated.",
                    action="Remove read-only fields from the request.",
                ),
                details={"fields": sorted(unknown)},
            )
        for required in ("reference_year", "draw_date", "sitting_date", "status"):
            if required in payload.changes and payload.changes[required] is None:
                raise ValidationError(
                    message=compose_error_message(
                        cause=f"{required} cannot be cleared.",
                        action=f"Send a value for {required} or omit it.",
                    ),
                    details={"field": required},
                )
        if "reference_year" in payload.changes:
            _ensure_reference_year(payload.changes["reference_year"])
        if "judge_id" in payload.changes:
            self._ensure_judge(payload.changes["judge_id"])

        try:
            draw = self._draw_repository.get_for_update(payload.draw_id)
            if draw is None:
                raise DrawNotFoundError(details={"draw_id": str(payload.draw_id)})
            for field_name, value in payload.changes.items():
                setattr(draw, field_name, value)
            self._session.flush()
            self._session.commit()
            self._session.refresh(draw)
        except Exception:
            self._session.rollback()
            raise
        return draw

    def delete_draw(self, draw_id: UUID) -> None:
        """Delete a draw together with its assignments, ballots and marks."""

        try:
            draw = self._draw_repository.get_for_update(draw_id)
            if draw is None:
                raise DrawNotFoundError(details={"draw_id": str(draw_id)})
            self._draw_repository.delete(draw)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("draw_deleted", extra={"draw_id": str(draw_id)})

    def get_draw(self, draw_id: UUID) -> Draw:
        draw = self._draw_repository.get(draw_id)
        if draw is None:
            raise DrawNotFoundError(details={"draw_id": str(draw_id)})
        return draw

    def list_draws(self, reference_year: int | None = None) -> list[Draw]:
        return self._draw_repository.list_draws(reference_year)

    def list_eligible_pool(self, draw_id: UUID) -> list[Juror]:
        """List jurors eligible for the draw reference year, by name."""

        draw = self.get_draw(draw_id)
        return [
            juror
            for juror in self._juror_repository.list_active_ordered_by_name()
            if is_eligible(juror, draw.reference_year)
        ]

    def assign_juror(
        self,
        *,
        draw_id: UUID,
        juror_id: UUID,
        role: AssignmentRole,
    ) -> DrawAssignment:
        """Attach a juror to a draw.

        Eligibility is advisory here: manual assignments of ineligible jurors
        are accepted and logged.
        """

        try:
            draw = self._draw_repository.get_for_update(draw_id)
            if draw is None:
                raise DrawNotFoundError(details={"draw_id": str(draw_id)})
            juror = self._juror_repository.get(juror_id)
            if juror is None:
                raise JurorNotFoundError(details={"juror_id": str(juror_id)})
            if (
                self._draw_repository.get_assignment(
                    draw_id=draw_id, juror_id=juror_id
                )
                is not None
            ):
                raise DuplicateAssignmentError(
                    details={"draw_id": str(draw_id), "juror_id": str(juror_id)}
                )

            eligibility = evaluate_eligibility(juror, draw.reference_year)
            if not eligibility.eligible:
                logger.warning(
                    "ineligible_juror_assigned",
                    extra={
                        "draw_id": str(draw_id),
                        "juror_id": str(juror_id),
                        "failed_rules": [
                            rule.value for rule in eligibility.failed_rules
                        ],
                    },
                )

            assignment = self._draw_repository.add_assignment(
                draw_id=draw_id,
                juror_id=juror_id,
                role=role,
            )
            self._session.commit()
            self._session.refresh(assignment)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "juror_assigned",
            extra={
                "draw_id": str(draw_id),
                "juror_id": str(juror_id),
                "role": role.value,
            },
        )
        return assignment

    def toggle_assignment_role(self, *, draw_id: UUID, juror_id: UUID) -> DrawAssignment:
        """Swap an assignment between titular and suplente."""

        try:
            assignment = self._get_assignment_for_update(
                draw_id=draw_id, juror_id=juror_id
            )
            assignment.role = assignment.role.toggled()
            self._session.flush()
            self._session.commit()
            self._session.refresh(assignment)
        except Exception:
            self._session.rollback()
            raise
        return assignment

    def remove_assignment(self, *, draw_id: UUID, juror_id: UUID) -> None:
        """Detach a juror from a draw; existing ballots are left untouched."""

        try:
            assignment = self._get_assignment_for_update(
                draw_id=draw_id, juror_id=juror_id
            )
            self._draw_repository.delete_assignment(assignment)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def list_assignments(self, draw_id: UUID) -> list[AssignedJurorView]:
        """List a draw's assignments, titulars first and then by juror name."""

        self.get_draw(draw_id)
        return [
            AssignedJurorView(assignment=assignment, juror=juror)
            for assignment, juror in self._draw_repository.list_assignments_with_jurors(
                draw_id
            )
        ]

    def mark_last_service(
        self,
        *,
        draw_id: UUID,
        juror_ids: Sequence[UUID],
    ) -> list[Juror]:
        """Replace the jurors who served on the draw's deliberation panel.

        Each marked juror gets the draw sitting date as last service date.
        Jurors dropped from a previous marking keep the date they received.
        An empty list clears the marking without touching any juror.
        """

        distinct_ids = list(dict.fromkeys(juror_ids))
        if len(distinct_ids) != len(juror_ids):
            raise ValidationError(
                message=compose_error_message(
                    cause="juror_ids contains duplicated identifiers.",
                    action="Send each juror only once.",
                ),
            )
        if len(distinct_ids) > self._last_service_panel_limit:
            raise ValidationError(
                message=compose_error_message(
                    cause=(
                        "A deliberation panel has at most "
                        f"{self._last_service_panel_limit} jurors."
                    ),
                    action="Review the selected jurors and retry.",
                ),
                details={"count": len(distinct_ids)},
            )

        current_year = self._clock.current_year()
        try:
            draw = self._draw_repository.get_for_update(draw_id)
            if draw is None:
                raise DrawNotFoundError(details={"draw_id": str(draw_id)})
            jurors = self._juror_repository.list_for_update(distinct_ids)
            found = {juror.id for juror in jurors}
            missing = [str(juror_id) for juror_id in distinct_ids if juror_id not in found]
            if missing:
                raise JurorNotFoundError(details={"juror_ids": missing})

            self._draw_repository.delete_marks(draw_id)
            self._draw_repository.add_marks(draw_id=draw_id, juror_ids=distinct_ids)

            for juror in jurors:
                fields = normalize_status_fields(
                    status_fields_of(juror),
                    {"last_service_date": draw.sitting_date},
                    current_year=current_year,
                )
                apply_status_fields(juror, fields)
            self._session.flush()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "last_service_marked",
            extra={
                "draw_id": str(draw_id),
                "juror_ids": [str(juror_id) for juror_id in distinct_ids],
                "sitting_date": draw.sitting_date.isoformat(),
            },
        )
        by_id = {juror.id: juror for juror in jurors}
        return [by_id[juror_id] for juror_id in distinct_ids]

    def list_marked_juror_ids(self, draw_id: UUID) -> list[UUID]:
        self.get_draw(draw_id)
        return self._draw_repository.list_marked_juror_ids(draw_id)

    def _get_assignment_for_update(
        self,
        *,
        draw_id: UUID,
        juror_id: UUID,
    ) -> DrawAssignment:
        assignment = self._draw_repository.get_assignment_for_update(
            draw_id=draw_id, juror_id=juror_id
        )
        if assignment is None:
            raise AssignmentNotFoundError(
                details={"draw_id": str(draw_id), "juror_id": str(juror_id)}
            )
        return assignment

    def _ensure_judge(self, judge_id: UUID | None) -> None:
        if judge_id is None:
            return
        if self._judge_repository.get(judge_id) is None:
            raise JudgeNotFoundError(details={"judge_id": str(judge_id)})
