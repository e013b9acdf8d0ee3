"""Ballot print status routes."""

from __future__ import annotations

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends

from controle_jurados.api.dependencies import get_ballot_service
from controle_jurados.api.schemas.ballots import BallotResponse
from controle_jurados.services.ballot_service import BallotService

router = APIRouter(prefix="/ballots", tags=["Ballots"])

_TRANSITION_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"description": "Ballot not found"},
    422: {"description": "Invalid status transition"},
}


@router.post(
    "/{ballot_id}/print",
    response_model=BallotResponse,
    responses=_TRANSITION_RESPONSES,
)
def mark_ballot_printed(
    ballot_id: UUID,
    service: Annotated[BallotService, Depends(get_ballot_service)],
) -> BallotResponse:
    return BallotResponse.from_model(service.mark_printed(ballot_id))


@router.post(
    "/{ballot_id}/use",
    response_model=BallotResponse,
    responses=_TRANSITION_RESPONSES,
)
def mark_ballot_used(
    ballot_id: UUID,
    service: Annotated[BallotService, Depends(get_ballot_service)],
) -> BallotResponse:
    return BallotResponse.from_model(service.mark_used(ballot_id))
