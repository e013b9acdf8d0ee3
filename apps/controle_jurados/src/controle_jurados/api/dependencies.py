"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from controle_jurados.core.clock import Clock, SystemClock
from controle_jurados.core.settings import get_settings
from controle_jurados.db.session import get_db_session
from controle_jurados.repositories.ballot_repository import BallotRepository
from controle_jurados.repositories.draw_repository import DrawRepository
from controle_jurados.repositories.judge_repository import JudgeRepository
from controle_jurados.repositories.juror_repository import JurorRepository
from controle_jurados.services.ballot_service import BallotService
from controle_jurados.services.draw_service import DrawService
from controle_jurados.services.judge_service import JudgeService
from controle_jurados.services.juror_service import JurorService


def get_clock() -> Clock:
    """Build the wall clock in the configured district time zone."""

    return SystemClock(get_settings().app_timezone)


def get_juror_service(
    session: Annotated[Session, Depends(get_db_session)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> JurorService:
    """Build juror service with per-request session."""

    return JurorService(
        juror_repository=JurorRepository(session),
        session=session,
        clock=clock,
        last_service_panel_limit=get_settings().last_service_panel_limit,
    )


def get_judge_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> JudgeService:
    """Build judge service with per-request session."""

    return JudgeService(judge_repository=JudgeRepository(session), session=session)


def get_draw_service(
    session: Annotated[Session, Depends(get_db_session)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> DrawService:
    """Build draw service with per-request session."""

    return DrawService(
        draw_repository=DrawRepository(session),
        juror_repository=JurorRepository(session),
        judge_repository=JudgeRepository(session),
        session=session,
        clock=clock,
        last_service_panel_limit=get_settings().last_service_panel_limit,
    )


def get_ballot_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> BallotService:
    """Build ballot service with per-request session."""

    return BallotService(
        ballot_repository=BallotRepository(session),
        draw_repository=DrawRepository(session),
        session=session,
    )
