from __future__ import annotations

from collections.abc import Collection
from datetime import date
from uuid import UUID, uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from controle_jurados.core.clock import FixedClock
from controle_jurados.db.models.draw import Draw
from controle_jurados.db.models.draw_assignment import AssignmentRole
from controle_jurados.db.models.juror import InactivityReason, Juror, JurorStatus
from controle_jurados.db.models.last_service_mark import LastServiceMark
from controle_jurados.domain.errors import (
    AssignmentNotFoundError,
    DuplicateAssignmentError,
    JudgeNotFoundError,
    JurorNotFoundError,
    ValidationError,
)
from controle_jurados.repositories.draw_repository import DrawRepository
from controle_jurados.repositories.judge_repository import JudgeRepository
from controle_jurados.repositories.juror_repository import JurorRepository
from controle_jurados.services.draw_service import CreateDrawInput, DrawService


class UnavailableMarksRepository(DrawRepository):
    def add_marks(self, *, draw_id: UUID, juror_ids: Collection[UUID]) -> None:
        raise RuntimeError("last service marks table unavailable")


def _service(session: Session) -> DrawService:
    return DrawService(
        draw_repository=DrawRepository(session),
        juror_repository=JurorRepository(session),
        judge_repository=JudgeRepository(session),
        session=session,
        clock=FixedClock(date(2025, 3, 10)),
    )


def _juror(number: int, name: str, **kwargs: object) -> Juror:
    digits = f"{number:011d}"
    kwargs.setdefault("status", JurorStatus.ACTIVE)
    return Juror(
        cpf=f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}",
        full_name=name,
        **kwargs,
    )


def _create_draw(service: DrawService, *, sitting_date: date = date(2024, 11, 5)) -> Draw:
    return service.create_draw(
        CreateDrawInput(
            reference_year=2024,
            draw_date=date(2024, 10, 1),
            sitting_date=sitting_date,
        )
    )


def test_create_draw_requires_existing_judge(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        with pytest.raises(JudgeNotFoundError):
            _service(session).create_draw(
                CreateDrawInput(
                    reference_year=2025,
                    draw_date=date(2025, 2, 1),
                    sitting_date=date(2025, 3, 1),
                    judge_id=uuid4(),
                )
            )


def test_eligible_pool_applies_every_rule(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        session.add_all(
            [
                _juror(1, "CARLA", birth_date=date(1990, 1, 1)),
                _juror(2, "ANA", birth_date=date(2006, 3, 1)),
                _juror(3, "BETO", birth_date=date(2007, 1, 1)),
                _juror(4, "DANI", last_service_date=date(2023, 6, 10)),
                _juror(
                    5,
                    "EDU",
                    status=JurorStatus.INACTIVE,
                    reason=InactivityReason.IMPEDIMENT,
                ),
            ]
        )
        session.commit()
        service = _service(session)
        draw = _create_draw(service)

        pool = service.list_eligible_pool(draw.id)

        assert [juror.full_name for juror in pool] == ["ANA", "CARLA"]


def test_assignment_duplicate_toggle_and_remove(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        juror = _juror(1, "ANA")
        session.add(juror)
        session.commit()
        service = _service(session)
        draw = _create_draw(service)

        assignment = service.assign_juror(
            draw_id=draw.id, juror_id=juror.id, role=AssignmentRole.TITULAR
        )
        assert assignment.role == AssignmentRole.TITULAR

        with pytest.raises(DuplicateAssignmentError):
            service.assign_juror(
                draw_id=draw.id, juror_id=juror.id, role=AssignmentRole.SUPLENTE
            )

        toggled = service.toggle_assignment_role(draw_id=draw.id, juror_id=juror.id)
        assert toggled.role == AssignmentRole.SUPLENTE

        service.remove_assignment(draw_id=draw.id, juror_id=juror.id)
        assert service.list_assignments(draw.id) == []

        with pytest.raises(AssignmentNotFoundError):
            service.toggle_assignment_role(draw_id=draw.id, juror_id=juror.id)


def test_ineligible_juror_can_be_assigned_with_warning(
    sqlite_session_factory: sessionmaker[Session],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with sqlite_session_factory() as session:
        juror = _juror(1, "BETO", birth_date=date(2010, 1, 1))
        session.add(juror)
        session.commit()
        service = _service(session)
        draw = _create_draw(service)

        with caplog.at_level("WARNING"):
            service.assign_juror(
                draw_id=draw.id, juror_id=juror.id, role=AssignmentRole.TITULAR
            )

        assert "ineligible_juror_assigned" in caplog.messages
        assert len(service.list_assignments(draw.id)) == 1


def test_list_assignments_orders_titulars_first(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        ana = _juror(1, "ANA")
        bia = _juror(2, "BIA")
        caio = _juror(3, "CAIO")
        session.add_all([ana, bia, caio])
        session.commit()
        service = _service(session)
        draw = _create_draw(service)
        service.assign_juror(draw_id=draw.id, juror_id=ana.id, role=AssignmentRole.SUPLENTE)
        service.assign_juror(draw_id=draw.id, juror_id=caio.id, role=AssignmentRole.TITULAR)
        service.assign_juror(draw_id=draw.id, juror_id=bia.id, role=AssignmentRole.TITULAR)

        views = service.list_assignments(draw.id)

        assert [view.juror.full_name for view in views] == ["BIA", "CAIO", "ANA"]


def test_mark_last_service_replaces_panel_without_reverting_dates(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        jurors = [_juror(number, name) for number, name in enumerate("ABCD", start=1)]
        session.add_all(jurors)
        session.commit()
        service = _service(session)
        draw = _create_draw(service, sitting_date=date(2024, 11, 5))
        first, second, third, fourth = jurors

        service.mark_last_service(draw_id=draw.id, juror_ids=[first.id, second.id])

        assert first.last_service_date == date(2024, 11, 5)
        assert second.last_service_date == date(2024, 11, 5)
        assert first.status == JurorStatus.INACTIVE
        assert first.reason == InactivityReason.TWELVE_MONTH_REST

        service.mark_last_service(draw_id=draw.id, juror_ids=[third.id, fourth.id])

        marked = set(
            session.scalars(
                select(LastServiceMark.juror_id).where(LastServiceMark.draw_id == draw.id)
            ).all()
        )
        assert marked == {third.id, fourth.id}
        assert first.last_service_date == date(2024, 11, 5)
        assert third.last_service_date == date(2024, 11, 5)


def test_mark_last_service_validates_panel(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        jurors = [_juror(number, f"JUROR {number}") for number in range(1, 9)]
        session.add_all(jurors)
        session.commit()
        service = _service(session)
        draw = _create_draw(service)

        with pytest.raises(ValidationError):
            service.mark_last_service(
                draw_id=draw.id, juror_ids=[juror.id for juror in jurors]
            )
        with pytest.raises(JurorNotFoundError):
            service.mark_last_service(draw_id=draw.id, juror_ids=[jurors[0].id, uuid4()])

        assert service.list_marked_juror_ids(draw.id) == []
        assert jurors[0].last_service_date is None


def test_mark_last_service_with_no_jurors_clears_marking(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        juror = _juror(1, "ANA")
        session.add(juror)
        session.commit()
        service = _service(session)
        draw = _create_draw(service, sitting_date=date(2024, 11, 5))
        service.mark_last_service(draw_id=draw.id, juror_ids=[juror.id])

        marked = service.mark_last_service(draw_id=draw.id, juror_ids=[])

        assert marked == []
        assert service.list_marked_juror_ids(draw.id) == []
        assert juror.last_service_date == date(2024, 11, 5)


def test_mark_last_service_leaves_jurors_untouched_when_marks_fail(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        first = _juror(1, "ANA")
        second = _juror(2, "BIA")
        session.add_all([first, second])
        session.commit()
        draw = _create_draw(_service(session), sitting_date=date(2024, 11, 5))
        _service(session).mark_last_service(draw_id=draw.id, juror_ids=[first.id])
        failing = DrawService(
            draw_repository=UnavailableMarksRepository(session),
            juror_repository=JurorRepository(session),
            judge_repository=JudgeRepository(session),
            session=session,
            clock=FixedClock(date(2025, 3, 10)),
        )
        with pytest.raises(RuntimeError):
            failing.mark_last_service(draw_id=draw.id, juror_ids=[second.id])

        session.expire_all()
        assert session.get(Juror, second.id).last_service_date is None
        assert session.get(Juror, first.id).last_service_date == date(2024, 11, 5)
        assert _service(session).list_marked_juror_ids(draw.id) == [first.id]
