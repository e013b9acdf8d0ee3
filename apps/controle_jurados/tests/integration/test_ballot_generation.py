from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session, sessionmaker

from controle_jurados.core.clock import FixedClock
from controle_jurados.db.models.ballot import BallotStatus
from controle_jurados.db.models.draw import Draw
from controle_jurados.db.models.draw_assignment import AssignmentRole
from controle_jurados.db.models.juror import Juror, JurorStatus
from controle_jurados.domain.errors import (
    DrawNotFoundError,
    InvalidBallotTransitionError,
)
from controle_jurados.repositories.ballot_repository import BallotRepository
from controle_jurados.repositories.draw_repository import DrawRepository
from controle_jurados.repositories.judge_repository import JudgeRepository
from controle_jurados.repositories.juror_repository import JurorRepository
from controle_jurados.services.ballot_service import BallotService
from controle_jurados.services.draw_service import CreateDrawInput, DrawService


def _draw_service(session: Session) -> DrawService:
    return DrawService(
        draw_repository=DrawRepository(session),
        juror_repository=JurorRepository(session),
        judge_repository=JudgeRepository(session),
        session=session,
        clock=FixedClock(date(2025, 3, 10)),
    )


def _ballot_service(session: Session) -> BallotService:
    return BallotService(
        ballot_repository=BallotRepository(session),
        draw_repository=DrawRepository(session),
        session=session,
    )


def _seed_draw_with_jurors(
    session: Session,
    names_and_roles: list[tuple[str, AssignmentRole]],
) -> tuple[Draw, dict[str, Juror]]:
    jurors = {
        name: Juror(
            cpf=f"{index:03d}.000.000-00",
            full_name=name,
            status=JurorStatus.ACTIVE,
        )
        for index, (name, _) in enumerate(names_and_roles, start=1)
    }
    session.add_all(jurors.values())
    session.commit()

    draw_service = _draw_service(session)
    draw = draw_service.create_draw(
        CreateDrawInput(
            reference_year=2025,
            draw_date=date(2025, 2, 1),
            sitting_date=date(2025, 3, 20),
        )
    )
    for name, role in names_and_roles:
        draw_service.assign_juror(draw_id=draw.id, juror_id=jurors[name].id, role=role)
    return draw, jurors


def test_ballots_number_titulars_first_and_renumber_without_gaps(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        draw, jurors = _seed_draw_with_jurors(
            session,
            [
                ("CARLOS", AssignmentRole.SUPLENTE),
                ("BEATRIZ", AssignmentRole.TITULAR),
                ("ANTONIO", AssignmentRole.TITULAR),
            ],
        )
        service = _ballot_service(session)

        ballots = service.generate_ballots(draw.id)

        assert [(ballot.sequence_number, ballot.juror_id) for ballot in ballots] == [
            (1, jurors["ANTONIO"].id),
            (2, jurors["BEATRIZ"].id),
            (3, jurors["CARLOS"].id),
        ]
        assert ballots[0].barcode == f"{draw.id}|{jurors['ANTONIO'].id}|2025"
        assert all(ballot.status == BallotStatus.GENERATED for ballot in ballots)

        _draw_service(session).remove_assignment(
            draw_id=draw.id, juror_id=jurors["ANTONIO"].id
        )
        regenerated = service.generate_ballots(draw.id)

        assert [(ballot.sequence_number, ballot.juror_id) for ballot in regenerated] == [
            (1, jurors["BEATRIZ"].id),
            (2, jurors["CARLOS"].id),
        ]
        assert len(service.list_ballots(draw.id)) == 2


def test_regenerating_without_changes_keeps_the_mapping(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        draw, _ = _seed_draw_with_jurors(
            session,
            [("ANA", AssignmentRole.TITULAR), ("BIA", AssignmentRole.SUPLENTE)],
        )
        service = _ballot_service(session)

        first = [(b.sequence_number, b.juror_id) for b in service.generate_ballots(draw.id)]
        second = [(b.sequence_number, b.juror_id) for b in service.generate_ballots(draw.id)]

        assert first == second


def test_draw_without_assignments_has_no_ballots(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        draw, _ = _seed_draw_with_jurors(session, [])

        assert _ballot_service(session).generate_ballots(draw.id) == []


def test_generate_ballots_for_unknown_draw(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        with pytest.raises(DrawNotFoundError):
            _ballot_service(session).generate_ballots(uuid4())


def test_ballot_print_lifecycle(
    sqlite_session_factory: sessionmaker[Session],
) -> None:
    with sqlite_session_factory() as session:
        draw, _ = _seed_draw_with_jurors(
            session,
            [("ANA", AssignmentRole.TITULAR), ("BIA", AssignmentRole.TITULAR)],
        )
        service = _ballot_service(session)
        printed, unprinted = service.generate_ballots(draw.id)

        printed = service.mark_printed(printed.id)
        assert printed.status == BallotStatus.PRINTED
        assert printed.printed_at is not None

        used = service.mark_used(printed.id)
        assert used.status == BallotStatus.USED
        assert used.used_at is not None

        with pytest.raises(InvalidBallotTransitionError):
            service.mark_printed(used.id)

        assert service.mark_used(unprinted.id).status == BallotStatus.USED
