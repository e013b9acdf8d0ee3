"""Gap-free ballot numbering for draw assignments."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from controle_jurados.db.models.draw_assignment import AssignmentRole

ROLE_PRINT_ORDER = {AssignmentRole.TITULAR: 0, AssignmentRole.SUPLENTE: 1}


@dataclass(slots=True, frozen=True)
class AssignedJuror:
    """Assignment data needed to number ballots."""

    juror_id: UUID
    juror_name: str
    role: AssignmentRole


@dataclass(slots=True, frozen=True)
class NumberedBallot:
    """Sequence number allocated to one drawn juror."""

    sequence_number: int
    juror_id: UUID
    role: AssignmentRole


def ballot_sort_key(item: AssignedJuror) -> tuple[int, str, str]:
    """Titulars first, then by juror name, then by juror id."""

    return ROLE_PRINT_ORDER[item.role], item.juror_name, str(item.juror_id)


def number_ballots(assignments: Iterable[AssignedJuror]) -> list[NumberedBallot]:
    """Allocate sequence numbers starting at 1 with no gaps."""

    ordered = sorted(assignments, key=ballot_sort_key)
    return [
        NumberedBallot(
            sequence_number=position,
            juror_id=item.juror_id,
            role=item.role,
        )
        for position, item in enumerate(ordered, start=1)
    ]


def build_barcode(*, draw_id: UUID, juror_id: UUID, reference_year: int) -> str:
    """Return the printable barcode payload of one ballot."""

    return f"{draw_id}|{juror_id}|{reference_year}"
