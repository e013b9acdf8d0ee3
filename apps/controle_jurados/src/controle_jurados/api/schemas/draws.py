"""Draw, assignment and deliberation panel API schemas."""

from __future__ import annotations

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from controle_jurados.db.models.draw import Draw, DrawStatus
from controle_jurados.db.models.draw_assignment import AssignmentRole
from controle_jurados.services.draw_service import AssignedJurorView


class CreateDrawRequest(BaseModel):
    """Payload for draw creation."""

    reference_year: int = Field(ge=1900, le=9999)
    draw_date: date
    sitting_date: date
    sitting_time: time | None = None
    judge_id: UUID | None = None
    status: DrawStatus = DrawStatus.SCHEDULED
    case_number: str | None = Field(default=None, max_length=40)
    location: str | None = Field(default=None, max_length=120)


class UpdateDrawRequest(BaseModel):
    """Partial update payload; only sent fields are applied."""

    reference_year: int | None = Field(default=None, ge=1900, le=9999)
    draw_date: date | None = None
    sitting_date: date | None = None
    sitting_time: time | None = None
    judge_id: UUID | None = None
    status: DrawStatus | None = None
    case_number: str | None = Field(default=None, max_length=40)
    location: str | None = Field(default=None, max_length=120)

    def changes(self) -> dict[str, object]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class DrawResponse(BaseModel):
    """Serialized draw returned by API."""

    id: UUID
    reference_year: int
    draw_date: date
    sitting_date: date
    sitting_time: time | None
    judge_id: UUID | None
    status: DrawStatus
    case_number: str | None
    location: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, draw: Draw) -> DrawResponse:
        return cls(
            id=draw.id,
            reference_year=draw.reference_year,
            draw_date=draw.draw_date,
            sitting_date=draw.sitting_date,
            sitting_time=draw.sitting_time,
            judge_id=draw.judge_id,
            status=draw.status,
            case_number=draw.case_number,
            location=draw.location,
            created_at=draw.created_at,
            updated_at=draw.updated_at,
        )


class AssignJurorRequest(BaseModel):
    """Payload for attaching a juror to a draw."""

    juror_id: UUID
    role: AssignmentRole = AssignmentRole.TITULAR


class AssignmentResponse(BaseModel):
    """Serialized draw assignment."""

    draw_id: UUID
    juror_id: UUID
    role: AssignmentRole
    juror_name: str | None = None

    @classmethod
    def from_view(cls, view: AssignedJurorView) -> AssignmentResponse:
        return cls(
            draw_id=view.assignment.draw_id,
            juror_id=view.assignment.juror_id,
            role=view.assignment.role,
            juror_name=view.juror.full_name,
        )


class MarkLastServiceRequest(BaseModel):
    """Jurors who served on the draw's deliberation panel."""

    juror_ids: list[UUID] = Field(default_factory=list)

    @field_validator("juror_ids")
    @classmethod
    def reject_duplicates(cls, value: list[UUID]) -> list[UUID]:
        if len(set(value)) != len(value):
            raise ValueError("juror_ids must not contain duplicates.")
        return value


class LastServiceResponse(BaseModel):
    """Jurors currently marked on the draw's deliberation panel."""

    draw_id: UUID
    juror_ids: list[UUID]
