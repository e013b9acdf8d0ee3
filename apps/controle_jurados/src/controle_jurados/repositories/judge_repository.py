"""Persistence operations for judges."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from controle_jurados.db.models.draw import Draw
from controle_jurados.db.models.judge import Judge, JudgeStatus


class JudgeRepository:
    """Repository for district judges."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, judge_id: UUID) -> Judge | None:
        return self._session.get(Judge, judge_id)

    def get_for_update(self, judge_id: UUID) -> Judge | None:
        statement = select(Judge).where(Judge.id == judge_id).with_for_update()
        return self._session.scalar(statement)

    def list_judges(self, status: JudgeStatus | None = None) -> list[Judge]:
        statement = select(Judge).order_by(Judge.name, Judge.id)
        if status is not None:
            statement = statement.where(Judge.status == status)
        return list(self._session.scalars(statement))

    def list_all_for_update(self) -> list[Judge]:
        """Fetch and lock every judge row of the district."""

        statement = select(Judge).order_by(Judge.name, Judge.id).with_for_update()
        return list(self._session.scalars(statement))

    def get_titular(self) -> Judge | None:
        statement = (
            select(Judge)
            .where(Judge.is_titular.is_(True))
            .order_by(Judge.name, Judge.id)
            .limit(1)
        )
        return self._session.scalar(statement)

    def count_titulars_excluding(self, judge_id: UUID) -> int:
        statement = (
            select(func.count())
            .select_from(Judge)
            .where(Judge.is_titular.is_(True), Judge.id != judge_id)
        )
        return int(self._session.scalar(statement) or 0)

    def count_active_excluding(self, judge_id: UUID | None) -> int:
        statement = (
            select(func.count())
            .select_from(Judge)
            .where(Judge.status == JudgeStatus.ACTIVE)
        )
        if judge_id is not None:
            statement = statement.where(Judge.id != judge_id)
        return int(self._session.scalar(statement) or 0)

    def add(self, judge: Judge) -> Judge:
        self._session.add(judge)
        self._session.flush()
        return judge

    def delete(self, judge: Judge) -> None:
        self._session.delete(judge)
        self._session.flush()

    def clear_titular_except(self, judge_id: UUID) -> None:
        """Unset the titular flag on every judge other than ``judge_id``."""

        statement = (
            update(Judge)
            .where(Judge.id != judge_id, Judge.is_titular.is_(True))
            .values(is_titular=False)
            .execution_options(synchronize_session="fetch")
        )
        self._session.execute(statement)

    def clear_judge_from_draws(self, judge_id: UUID) -> None:
        """Detach a judge from the draws it presided over."""

        statement = (
            update(Draw)
            .where(Draw.judge_id == judge_id)
            .values(judge_id=None)
            .execution_options(synchronize_session="fetch")
        )
        self._session.execute(statement)
