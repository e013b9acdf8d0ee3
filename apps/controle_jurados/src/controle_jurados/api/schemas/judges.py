"""Judge API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from controle_jurados.db.models.judge import Judge, JudgeStatus

REGISTRATION_FIELDS = (
    "registration_number",
    "email",
    "phone",
    "court_division",
    "district",
    "notes",
)


class JudgeRegistrationFields(BaseModel):
    """Registration and contact data of a judge."""

    registration_number: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=120)
    phone: str | None = Field(default=None, max_length=20)
    court_division: str | None = Field(default=None, max_length=60)
    district: str | None = Field(default=None, max_length=60)
    notes: str | None = None


class CreateJudgeRequest(JudgeRegistrationFields):
    """Payload for judge registration."""

    name: str = Field(min_length=1, max_length=120)
    is_titular: bool = False
    status: JudgeStatus = JudgeStatus.ACTIVE


class UpdateJudgeRequest(JudgeRegistrationFields):
    """Payload for judge updates; omitted fields keep stored values."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    is_titular: bool | None = None
    status: JudgeStatus | None = None

    def registration_changes(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in REGISTRATION_FIELDS
            if name in self.model_fields_set
        }


class JudgeResponse(BaseModel):
    """Serialized judge returned by API."""

    id: UUID
    name: str
    registration_number: str | None
    email: str | None
    phone: str | None
    court_division: str
    district: str
    notes: str | None
    is_titular: bool
    status: JudgeStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, judge: Judge) -> JudgeResponse:
        return cls(
            id=judge.id,
            name=judge.name,
            registration_number=judge.registration_number,
            email=judge.email,
            phone=judge.phone,
            court_division=judge.court_division,
            district=judge.district,
            notes=judge.notes,
            is_titular=judge.is_titular,
            status=judge.status,
            created_at=judge.created_at,
            updated_at=judge.updated_at,
        )
