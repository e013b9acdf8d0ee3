"""Business service for draw ballot generation and print tracking."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from controle_jurados.db.models.ballot import Ballot, BallotStatus
from controle_jurados.db.models.draw import Draw
from controle_jurados.db.models.draw_assignment import DrawAssignment
from controle_jurados.db.models.juror import Juror
from controle_jurados.domain.ballot_numbering import (
    AssignedJuror,
    build_barcode,
    number_ballots,
)
from controle_jurados.domain.errors import (
    BallotNotFoundError,
    DrawNotFoundError,
    InvalidBallotTransitionError,
    compose_error_message,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[BallotStatus, frozenset[BallotStatus]] = {
    BallotStatus.GENERATED: frozenset({BallotStatus.PRINTED, BallotStatus.USED}),
    BallotStatus.PRINTED: frozenset({BallotStatus.USED}),
    BallotStatus.USED: frozenset(),
}


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by ballot service."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def flush(self) -> None: ...


class BallotRepositoryProtocol(Protocol):
    """Ballot repository contract consumed by service."""

    def get_for_update(self, ballot_id: UUID) -> Ballot | None: ...

    def list_for_draw(self, draw_id: UUID) -> list[Ballot]: ...

    def delete_for_draw(self, draw_id: UUID) -> int: ...

    def add_ballots(self, ballots: Sequence[Ballot]) -> list[Ballot]: ...


class DrawAssignmentsProtocol(Protocol):
    """Draw repository subset consumed by ballot service."""

    def get(self, draw_id: UUID) -> Draw | None: ...

    def get_for_update(self, draw_id: UUID) -> Draw | None: ...

    def list_assignments_with_jurors(
        self, draw_id: UUID
    ) -> list[tuple[DrawAssignment, Juror]]: ...


class BallotService:
    """Numbers ballots for drawn jurors and tracks their print status."""

    def __init__(
        self,
        *,
        ballot_repository: BallotRepositoryProtocol,
        draw_repository: DrawAssignmentsProtocol,
        session: SessionProtocol,
    ) -> None:
        self._ballot_repository = ballot_repository
        self._draw_repository = draw_repository
        self._session = session

    def generate_ballots(self, draw_id: UUID) -> list[Ballot]:
        """Replace the draw's ballots with a fresh 1..n numbering.

        Regenerating without assignment changes yields the same
        juror-to-number mapping.
        """

        try:
            draw = self._draw_repository.get_for_update(draw_id)
            if draw is None:
                raise DrawNotFoundError(details={"draw_id": str(draw_id)})

            removed = self._ballot_repository.delete_for_draw(draw_id)
            assigned = [
                AssignedJuror(
                    juror_id=juror.id,
                    juror_name=juror.full_name,
                    role=assignment.role,
                )
                for assignment, juror in self._draw_repository.list_assignments_with_jurors(
                    draw_id
                )
            ]
            ballots = self._ballot_repository.add_ballots(
                [
                    Ballot(
                        draw_id=draw_id,
                        juror_id=numbered.juror_id,
                        sequence_number=numbered.sequence_number,
                        barcode=build_barcode(
                            draw_id=draw_id,
                            juror_id=numbered.juror_id,
                            reference_year=draw.reference_year,
                        ),
                        status=BallotStatus.GENERATED,
                    )
                    for numbered in number_ballots(assigned)
                ]
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "ballots_generated",
            extra={
                "draw_id": str(draw_id),
                "count": len(ballots),
                "replaced": removed,
            },
        )
        return ballots

    def list_ballots(self, draw_id: UUID) -> list[Ballot]:
        if self._draw_repository.get(draw_id) is None:
            raise DrawNotFoundError(details={"draw_id": str(draw_id)})
        return self._ballot_repository.list_for_draw(draw_id)

    def mark_printed(self, ballot_id: UUID) -> Ballot:
        return self._transition(ballot_id, BallotStatus.PRINTED)

    def mark_used(self, ballot_id: UUID) -> Ballot:
        return self._transition(ballot_id, BallotStatus.USED)

    def _transition(self, ballot_id: UUID, target: BallotStatus) -> Ballot:
        try:
            ballot = self._ballot_repository.get_for_update(ballot_id)
            if ballot is None:
                raise BallotNotFoundError(details={"ballot_id": str(ballot_id)})
            if target not in ALLOWED_TRANSITIONS[ballot.status]:
                raise InvalidBallotTransitionError(
                    message=compose_error_message(
                        cause=(
                            f"Ballot in status {ballot.status.value} cannot "
                            f"move to {target.value}."
                        ),
                        action="Regenerate ballots or choose a valid transition.",
                    ),
                    details={
                        "ballot_id": str(ballot_id),
                        "status": ballot.status.value,
                        "target": target.value,
                    },
                )

            now = datetime.now(UTC)
            ballot.status = target
            if target == BallotStatus.PRINTED:
                ballot.printed_at = now
            else:
                ballot.used_at = now
            self._session.flush()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "ballot_status_changed",
            extra={"ballot_id": str(ballot_id), "status": target.value},
        )
        return ballot
