"""Judge routes."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from controle_jurados.api.dependencies import get_judge_service
from controle_jurados.api.schemas.judges import (
    CreateJudgeRequest,
    JudgeResponse,
    UpdateJudgeRequest,
)
from controle_jurados.db.models.judge import JudgeStatus
from controle_jurados.services.judge_service import (
    CreateJudgeInput,
    JudgeService,
    UpdateJudgeInput,
)

router = APIRouter(prefix="/judges", tags=["Judges"])


@router.post(
    "",
    response_model=JudgeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload"},
        422: {"description": "Inactive judge requested as titular"},
    },
)
def create_judge(
    payload: CreateJudgeRequest,
    service: Annotated[JudgeService, Depends(get_judge_service)],
) -> JudgeResponse:
    """Register a judge; a titular judge replaces the current one."""

    judge = service.create_judge(
        CreateJudgeInput(
            name=payload.name,
            is_titular=payload.is_titular,
            status=payload.status,
            registration_number=payload.registration_number,
            email=payload.email,
            phone=payload.phone,
            court_division=payload.court_division,
            district=payload.district,
            notes=payload.notes,
        )
    )
    return JudgeResponse.from_model(judge)


@router.get("", response_model=list[JudgeResponse])
def list_judges(
    service: Annotated[JudgeService, Depends(get_judge_service)],
    status_filter: Annotated[JudgeStatus | None, Query(alias="status")] = None,
) -> list[JudgeResponse]:
    return [JudgeResponse.from_model(judge) for judge in service.list_judges(status_filter)]


@router.get(
    "/titular",
    response_model=JudgeResponse,
    responses={404: {"description": "No judge registered"}},
)
def get_titular_judge(
    service: Annotated[JudgeService, Depends(get_judge_service)],
) -> JudgeResponse:
    return JudgeResponse.from_model(service.get_titular_judge())


@router.get(
    "/{judge_id}",
    response_model=JudgeResponse,
    responses={404: {"description": "Judge not found"}},
)
def get_judge(
    judge_id: UUID,
    service: Annotated[JudgeService, Depends(get_judge_service)],
) -> JudgeResponse:
    return JudgeResponse.from_model(service.get_judge(judge_id))


@router.patch(
    "/{judge_id}",
    response_model=JudgeResponse,
    responses={
        404: {"description": "Judge not found"},
        422: {"description": "Judge is the only titular or is inactive"},
    },
)
def update_judge(
    judge_id: UUID,
    payload: UpdateJudgeRequest,
    service: Annotated[JudgeService, Depends(get_judge_service)],
) -> JudgeResponse:
    judge = service.update_judge(
        UpdateJudgeInput(
            judge_id=judge_id,
            name=payload.name,
            is_titular=payload.is_titular,
            status=payload.status,
            registration=payload.registration_changes(),
        )
    )
    return JudgeResponse.from_model(judge)


@router.delete(
    "/{judge_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Judge not found"}},
)
def delete_judge(
    judge_id: UUID,
    service: Annotated[JudgeService, Depends(get_judge_service)],
) -> Response:
    """Delete a judge; draws keep running without a presiding judge."""

    service.delete_judge(judge_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
