"""Persistence operations for ballots."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from controle_jurados.db.models.ballot import Ballot


class BallotRepository:
    """Repository for numbered draw ballots."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_for_update(self, ballot_id: UUID) -> Ballot | None:
        statement = select(Ballot).where(Ballot.id == ballot_id).with_for_update()
        return self._session.scalar(statement)

    def list_for_draw(self, draw_id: UUID) -> list[Ballot]:
        statement = (
            select(Ballot)
            .where(Ballot.draw_id == draw_id)
            .order_by(Ballot.sequence_number)
        )
        return list(self._session.scalars(statement))

    def delete_for_draw(self, draw_id: UUID) -> int:
        """Delete every ballot of a draw and return how many were removed."""

        statement = (
            delete(Ballot)
            .where(Ballot.draw_id == draw_id)
            .execution_options(synchronize_session="fetch")
        )
        result = self._session.execute(statement)
        return int(result.rowcount or 0)

    def add_ballots(self, ballots: Sequence[Ballot]) -> list[Ballot]:
        """Insert a batch of ballots in one flush."""

        self._session.add_all(ballots)
        self._session.flush()
        return list(ballots)
