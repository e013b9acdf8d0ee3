"""Persistence operations for jurors."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, or_, select, update
from sqlalchemy.orm import Session

from controle_jurados.db.models.ballot import Ballot
from controle_jurados.db.models.draw_assignment import DrawAssignment
from controle_jurados.db.models.institution import Institution
from controle_jurados.db.models.juror import InactivityReason, Juror, JurorStatus
from controle_jurados.db.models.last_service_mark import LastServiceMark


@dataclass(slots=True, frozen=True)
class JurorListFilters:
    """Filters for listing jurors."""

    status: JurorStatus | None = None
    search: str | None = None
    institution_id: UUID | None = None
    limit: int = 50
    offset: int = 0


class JurorRepository:
    """Repository for juror records and their lifecycle batch updates."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, juror_id: UUID) -> Juror | None:
        return self._session.get(Juror, juror_id)

    def get_for_update(self, juror_id: UUID) -> Juror | None:
        statement = select(Juror).where(Juror.id == juror_id).with_for_update()
        return self._session.scalar(statement)

    def get_by_cpf(self, cpf: str) -> Juror | None:
        return self._session.scalar(select(Juror).where(Juror.cpf == cpf))

    def list_for_update(self, juror_ids: Collection[UUID]) -> list[Juror]:
        """Fetch and lock jurors by id."""

        if not juror_ids:
            return []
        statement = (
            select(Juror)
            .where(Juror.id.in_(list(juror_ids)))
            .order_by(Juror.id)
            .with_for_update()
        )
        return list(self._session.scalars(statement))

    def list_by_cpfs_for_update(self, cpfs: Collection[str]) -> list[Juror]:
        """Fetch and lock jurors by CPF."""

        if not cpfs:
            return []
        statement = (
            select(Juror)
            .where(Juror.cpf.in_(list(cpfs)))
            .order_by(Juror.id)
            .with_for_update()
        )
        return list(self._session.scalars(statement))

    def list_jurors(self, filters: JurorListFilters) -> tuple[list[Juror], int]:
        """List jurors ordered by name with optional filters."""

        statement = self._apply_list_filters(select(Juror), filters)
        total_statement = select(func.count()).select_from(statement.subquery())
        total = int(self._session.scalar(total_statement) or 0)

        page_statement = (
            statement.order_by(Juror.full_name, Juror.id)
            .limit(filters.limit)
            .offset(filters.offset)
        )
        return list(self._session.scalars(page_statement).all()), total

    def list_active_ordered_by_name(self) -> list[Juror]:
        statement = (
            select(Juror)
            .where(Juror.status == JurorStatus.ACTIVE)
            .order_by(Juror.full_name, Juror.id)
        )
        return list(self._session.scalars(statement))

    def add(self, juror: Juror) -> Juror:
        self._session.add(juror)
        self._session.flush()
        return juror

    def delete(self, juror: Juror) -> None:
        self._session.delete(juror)
        self._session.flush()

    def count_references(self, juror_id: UUID) -> int:
        """Count draw assignments, ballots and marks that point to the juror."""

        total = 0
        for model in (DrawAssignment, Ballot, LastServiceMark):
            statement = (
                select(func.count()).select_from(model).where(model.juror_id == juror_id)
            )
            total += int(self._session.scalar(statement) or 0)
        return total

    def list_expired_suspension_ids(self, today: date) -> list[UUID]:
        """Return ids of temporarily suspended jurors whose suspension ended."""

        statement = select(Juror.id).where(*self._expired_suspension_filter(today))
        return list(self._session.scalars(statement))

    def reactivate(self, juror_ids: Collection[UUID], today: date) -> int:
        """Reactivate the given jurors in one batch update."""

        if not juror_ids:
            return 0
        statement = (
            update(Juror)
            .where(
                Juror.id.in_(list(juror_ids)),
                *self._expired_suspension_filter(today),
            )
            .values(
                status=JurorStatus.ACTIVE,
                reason=None,
                suspended_until=None,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = self._session.execute(statement)
        return int(result.rowcount or 0)

    def institution_exists(self, institution_id: UUID) -> bool:
        statement = select(Institution.id).where(Institution.id == institution_id)
        return self._session.scalar(statement) is not None

    @staticmethod
    def _expired_suspension_filter(today: date) -> tuple[ColumnElement[bool], ...]:
        return (
            Juror.status == JurorStatus.INACTIVE,
            Juror.reason == InactivityReason.TEMPORARY_SUSPENSION,
            Juror.suspended_until.is_not(None),
            Juror.suspended_until <= today,
        )

    @staticmethod
    def _apply_list_filters(
        statement: Select[tuple[Juror]],
        filters: JurorListFilters,
    ) -> Select[tuple[Juror]]:
        typed_statement = statement

        if filters.status is not None:
            typed_statement = typed_statement.where(Juror.status == filters.status)

        if filters.institution_id is not None:
            typed_statement = typed_statement.where(
                Juror.institution_id == filters.institution_id
            )

        if filters.search:
            term = f"%{filters.search.strip()}%"
            typed_statement = typed_statement.where(
                or_(Juror.full_name.ilike(term), Juror.cpf.like(term))
            )

        return typed_statement
