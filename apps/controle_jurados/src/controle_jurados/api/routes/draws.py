"""Draw routes: configuration, assignments, ballots and panel marking."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from controle_jurados.api.dependencies import get_ballot_service, get_draw_service
from controle_jurados.api.schemas.ballots import BallotListResponse
from controle_jurados.api.schemas.draws import (
    AssignJurorRequest,
    AssignmentResponse,
    CreateDrawRequest,
    DrawResponse,
    LastServiceResponse,
    MarkLastServiceRequest,
    UpdateDrawRequest,
)
from controle_jurados.api.schemas.jurors import JurorResponse
from controle_jurados.services.ballot_service import BallotService
from controle_jurados.services.draw_service import (
    AssignedJurorView,
    CreateDrawInput,
    DrawService,
    UpdateDrawInput,
)

router = APIRouter(prefix="/draws", tags=["Draws"])


@router.post(
    "",
    response_model=DrawResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Judge not found"},
    },
)
def create_draw(
    payload: CreateDrawRequest,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> DrawResponse:
    draw = service.create_draw(
        CreateDrawInput(
            reference_year=payload.reference_year,
            draw_date=payload.draw_date,
            sitting_date=payload.sitting_date,
            sitting_time=payload.sitting_time,
            judge_id=payload.judge_id,
            status=payload.status,
            case_number=payload.case_number,
            location=payload.location,
        )
    )
    return DrawResponse.from_model(draw)


@router.get("", response_model=list[DrawResponse])
def list_draws(
    service: Annotated[DrawService, Depends(get_draw_service)],
    reference_year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
) -> list[DrawResponse]:
    """List draws, newest sitting first."""

    return [DrawResponse.from_model(draw) for draw in service.list_draws(reference_year)]


@router.get(
    "/{draw_id}",
    response_model=DrawResponse,
    responses={404: {"description": "Draw not found"}},
)
def get_draw(
    draw_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> DrawResponse:
    return DrawResponse.from_model(service.get_draw(draw_id))


@router.patch(
    "/{draw_id}",
    response_model=DrawResponse,
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Draw or judge not found"},
    },
)
def update_draw(
    draw_id: UUID,
    payload: UpdateDrawRequest,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> DrawResponse:
    draw = service.update_draw(UpdateDrawInput(draw_id=draw_id, changes=payload.changes()))
    return DrawResponse.from_model(draw)


@router.delete(
    "/{draw_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Draw not found"}},
)
def delete_draw(
    draw_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> Response:
    """Delete a draw with its assignments, ballots and panel marks."""

    service.delete_draw(draw_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{draw_id}/eligible-jurors",
    response_model=list[JurorResponse],
    responses={404: {"description": "Draw not found"}},
)
def list_eligible_jurors(
    draw_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> list[JurorResponse]:
    """List jurors that may be drawn for the draw reference year."""

    return [JurorResponse.from_model(juror) for juror in service.list_eligible_pool(draw_id)]


@router.get(
    "/{draw_id}/assignments",
    response_model=list[AssignmentResponse],
    responses={404: {"description": "Draw not found"}},
)
def list_assignments(
    draw_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> list[AssignmentResponse]:
    return [AssignmentResponse.from_view(view) for view in service.list_assignments(draw_id)]


@router.post(
    "/{draw_id}/assignments",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Draw or juror not found"},
        409: {"description": "Juror already assigned"},
    },
)
def assign_juror(
    draw_id: UUID,
    payload: AssignJurorRequest,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> AssignmentResponse:
    """Attach a juror to the draw as titular or suplente."""

    assignment = service.assign_juror(
        draw_id=draw_id,
        juror_id=payload.juror_id,
        role=payload.role,
    )
    return AssignmentResponse.from_view(
        AssignedJurorView(assignment=assignment, juror=assignment.juror)
    )


@router.post(
    "/{draw_id}/assignments/{juror_id}/toggle-role",
    response_model=AssignmentResponse,
    responses={404: {"description": "Assignment not found"}},
)
def toggle_assignment_role(
    draw_id: UUID,
    juror_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> AssignmentResponse:
    assignment = service.toggle_assignment_role(draw_id=draw_id, juror_id=juror_id)
    return AssignmentResponse.from_view(
        AssignedJurorView(assignment=assignment, juror=assignment.juror)
    )


@router.delete(
    "/{draw_id}/assignments/{juror_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Assignment not found"}},
)
def remove_assignment(
    draw_id: UUID,
    juror_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> Response:
    service.remove_assignment(draw_id=draw_id, juror_id=juror_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{draw_id}/ballots",
    response_model=BallotListResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Draw not found"}},
)
def generate_ballots(
    draw_id: UUID,
    service: Annotated[BallotService, Depends(get_ballot_service)],
) -> BallotListResponse:
    """Regenerate the draw ballots numbered 1..n."""

    return BallotListResponse.from_models(
        draw_id=draw_id,
        items=service.generate_ballots(draw_id),
    )


@router.get(
    "/{draw_id}/ballots",
    response_model=BallotListResponse,
    responses={404: {"description": "Draw not found"}},
)
def list_ballots(
    draw_id: UUID,
    service: Annotated[BallotService, Depends(get_ballot_service)],
) -> BallotListResponse:
    return BallotListResponse.from_models(
        draw_id=draw_id,
        items=service.list_ballots(draw_id),
    )


@router.put(
    "/{draw_id}/last-service",
    response_model=LastServiceResponse,
    responses={
        400: {"description": "Invalid panel size"},
        404: {"description": "Draw or juror not found"},
    },
)
def mark_last_service(
    draw_id: UUID,
    payload: MarkLastServiceRequest,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> LastServiceResponse:
    """Replace the deliberation panel of the draw."""

    jurors = service.mark_last_service(draw_id=draw_id, juror_ids=payload.juror_ids)
    return LastServiceResponse(
        draw_id=draw_id,
        juror_ids=[juror.id for juror in jurors],
    )


@router.get(
    "/{draw_id}/last-service",
    response_model=LastServiceResponse,
    responses={404: {"description": "Draw not found"}},
)
def get_last_service(
    draw_id: UUID,
    service: Annotated[DrawService, Depends(get_draw_service)],
) -> LastServiceResponse:
    return LastServiceResponse(
        draw_id=draw_id,
        juror_ids=service.list_marked_juror_ids(draw_id),
    )
