"""Juror routes."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from controle_jurados.api.dependencies import get_juror_service
from controle_jurados.api.schemas.jurors import (
    CreateJurorRequest,
    EligibilityResponse,
    JurorListResponse,
    JurorResponse,
    ReactivationResponse,
    RecordLastServiceRequest,
    UpdateJurorRequest,
)
from controle_jurados.db.models.juror import JurorStatus
from controle_jurados.repositories.juror_repository import JurorListFilters
from controle_jurados.services.juror_service import (
    CreateJurorInput,
    JurorService,
    UpdateJurorInput,
)

router = APIRouter(prefix="/jurors", tags=["Jurors"])


@router.post(
    "",
    response_model=JurorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Institution not found"},
        409: {"description": "CPF already registered"},
    },
)
def create_juror(
    payload: CreateJurorRequest,
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> JurorResponse:
    """Register one juror."""

    juror = service.create_juror(CreateJurorInput(**payload.model_dump()))
    return JurorResponse.from_model(juror)


@router.get("", response_model=JurorListResponse)
def list_jurors(
    service: Annotated[JurorService, Depends(get_juror_service)],
    status_filter: Annotated[JurorStatus | None, Query(alias="status")] = None,
    search: Annotated[str | None, Query(max_length=120)] = None,
    institution_id: Annotated[UUID | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> JurorListResponse:
    """List jurors ordered by name."""

    items, total = service.list_jurors(
        JurorListFilters(
            status=status_filter,
            search=search,
            institution_id=institution_id,
            limit=limit,
            offset=offset,
        )
    )
    return JurorListResponse.from_models(
        items=items,
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("/reactivations", response_model=ReactivationResponse)
def reactivate_expired_suspensions(
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> ReactivationResponse:
    """Reactivate jurors whose temporary suspension has ended."""

    return ReactivationResponse(reactivated=service.reactivate_expired_suspensions())


@router.post(
    "/last-service",
    response_model=list[JurorResponse],
    responses={
        400: {"description": "Invalid date or panel size"},
        404: {"description": "Some CPF does not belong to a juror"},
    },
)
def record_last_service(
    payload: RecordLastServiceRequest,
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> list[JurorResponse]:
    """Record the jurors of a deliberation panel by CPF."""

    jurors = service.record_last_service_by_cpf(
        sitting_date=payload.parsed_sitting_date(),
        cpfs=payload.cpfs,
    )
    return [JurorResponse.from_model(juror) for juror in jurors]


@router.get(
    "/{juror_id}",
    response_model=JurorResponse,
    responses={404: {"description": "Juror not found"}},
)
def get_juror(
    juror_id: UUID,
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> JurorResponse:
    return JurorResponse.from_model(service.get_juror(juror_id))


@router.patch(
    "/{juror_id}",
    response_model=JurorResponse,
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Juror not found"},
    },
)
def update_juror(
    juror_id: UUID,
    payload: UpdateJurorRequest,
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> JurorResponse:
    """Update sent fields; status fields are normalized on write."""

    juror = service.update_juror(
        UpdateJurorInput(juror_id=juror_id, changes=payload.changes())
    )
    return JurorResponse.from_model(juror)


@router.delete(
    "/{juror_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Juror not found"},
        409: {"description": "Juror referenced by draws"},
    },
)
def delete_juror(
    juror_id: UUID,
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> Response:
    service.delete_juror(juror_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{juror_id}/eligibility",
    response_model=EligibilityResponse,
    responses={404: {"description": "Juror not found"}},
)
def get_juror_eligibility(
    juror_id: UUID,
    reference_year: Annotated[int, Query(ge=1900, le=9999)],
    service: Annotated[JurorService, Depends(get_juror_service)],
) -> EligibilityResponse:
    """Explain which draw eligibility rules the juror fails."""

    result = service.evaluate_juror_eligibility(juror_id, reference_year)
    return EligibilityResponse.from_result(juror_id=juror_id, result=result)
