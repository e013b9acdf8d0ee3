"""Ballot API schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from controle_jurados.db.models.ballot import Ballot, BallotStatus


class BallotResponse(BaseModel):
    """Serialized ballot returned by API."""

    id: UUID
    draw_id: UUID
    juror_id: UUID
    sequence_number: int = Field(ge=1)
    barcode: str
    status: BallotStatus
    printed_at: datetime | None
    used_at: datetime | None

    @classmethod
    def from_model(cls, ballot: Ballot) -> BallotResponse:
        return cls(
            id=ballot.id,
            draw_id=ballot.draw_id,
            juror_id=ballot.juror_id,
            sequence_number=ballot.sequence_number,
            barcode=ballot.barcode,
            status=ballot.status,
            printed_at=ballot.printed_at,
            used_at=ballot.used_at,
        )


class BallotListResponse(BaseModel):
    """Ballots of one draw in sequence order."""

    draw_id: UUID
    items: list[BallotResponse]

    @classmethod
    def from_models(cls, *, draw_id: UUID, items: list[Ballot]) -> BallotListResponse:
        return cls(
            draw_id=draw_id,
            items=[BallotResponse.from_model(item) for item in items],
        )
