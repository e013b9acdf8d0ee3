"""Persistence operations for draws, assignments and last service marks."""

from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import case, delete, select
from sqlalchemy.orm import Session

from controle_jurados.db.models.draw import Draw
from controle_jurados.db.models.draw_assignment import AssignmentRole, DrawAssignment
from controle_jurados.db.models.juror import Juror
from controle_jurados.db.models.last_service_mark import LastServiceMark


class DrawRepository:
    """Repository for draws and the jurors attached to them."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, draw_id: UUID) -> Draw | None:
        return self._session.get(Draw, draw_id)

    def get_for_update(self, draw_id: UUID) -> Draw | None:
        statement = select(Draw).where(Draw.id == draw_id).with_for_update()
        return self._session.scalar(statement)

    def list_draws(self, reference_year: int | None = None) -> list[Draw]:
        statement = select(Draw).order_by(Draw.sitting_date.desc(), Draw.id)
        if reference_year is not None:
            statement = statement.where(Draw.reference_year == reference_year)
        return list(self._session.scalars(statement))

    def add(self, draw: Draw) -> Draw:
        self._session.add(draw)
        self._session.flush()
        return draw

    def delete(self, draw: Draw) -> None:
        self._session.delete(draw)
        self._session.flush()

    def get_assignment(self, *, draw_id: UUID, juror_id: UUID) -> DrawAssignment | None:
        statement = select(DrawAssignment).where(
            DrawAssignment.draw_id == draw_id,
            DrawAssignment.juror_id == juror_id,
        )
        return self._session.scalar(statement)

    def get_assignment_for_update(
        self,
        *,
        draw_id: UUID,
        juror_id: UUID,
    ) -> DrawAssignment | None:
        statement = (
            select(DrawAssignment)
            .where(
                DrawAssignment.draw_id == draw_id,
                DrawAssignment.juror_id == juror_id,
            )
            .with_for_update()
        )
        return self._session.scalar(statement)

    def add_assignment(
        self,
        *,
        draw_id: UUID,
        juror_id: UUID,
        role: AssignmentRole,
    ) -> DrawAssignment:
        assignment = DrawAssignment(draw_id=draw_id, juror_id=juror_id, role=role)
        self._session.add(assignment)
        self._session.flush()
        return assignment

    def delete_assignment(self, assignment: DrawAssignment) -> None:
        self._session.delete(assignment)
        self._session.flush()

    def list_assignments_with_jurors(
        self,
        draw_id: UUID,
    ) -> list[tuple[DrawAssignment, Juror]]:
        """List assignments of a draw joined with their jurors."""

        statement = (
            select(DrawAssignment, Juror)
            .join(Juror, Juror.id == DrawAssignment.juror_id)
            .where(DrawAssignment.draw_id == draw_id)
            .order_by(
                case((DrawAssignment.role == AssignmentRole.TITULAR, 0), else_=1),
                Juror.full_name,
                Juror.id,
            )
        )
        return [(row[0], row[1]) for row in self._session.execute(statement).all()]

    def delete_marks(self, draw_id: UUID) -> None:
        statement = (
            delete(LastServiceMark)
            .where(LastServiceMark.draw_id == draw_id)
            .execution_options(synchronize_session="fetch")
        )
        self._session.execute(statement)

    def add_marks(self, *, draw_id: UUID, juror_ids: Collection[UUID]) -> None:
        self._session.add_all(
            [LastServiceMark(draw_id=draw_id, juror_id=juror_id) for juror_id in juror_ids]
        )
        self._session.flush()

    def list_marked_juror_ids(self, draw_id: UUID) -> list[UUID]:
        statement = (
            select(LastServiceMark.juror_id)
            .where(LastServiceMark.draw_id == draw_id)
            .order_by(LastServiceMark.juror_id)
        )
        return list(self._session.scalars(statement))
