"""Juror API schemas."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from controle_jurados.db.models.juror import (
    InactivityReason,
    Juror,
    JurorSex,
    JurorStatus,
)
from controle_jurados.domain.calendar_year import parse_iso_date
from controle_jurados.domain.eligibility import EligibilityResult, EligibilityRule


class JurorRegistrationFields(BaseModel):
    """Identity, address and contact data kept on the juror registration."""

    rg: str | None = Field(default=None, max_length=15)
    sex: JurorSex | None = None
    street: str | None = Field(default=None, max_length=120)
    street_number: str | None = Field(default=None, max_length=10)
    complement: str | None = Field(default=None, max_length=40)
    neighborhood: str | None = Field(default=None, max_length=60)
    city: str | None = Field(default=None, max_length=60)
    state: str | None = Field(default=None, max_length=2)
    postal_code: str | None = Field(default=None, max_length=9)
    email: str | None = Field(default=None, max_length=120)
    phone: str | None = Field(default=None, max_length=20)
    occupation: str | None = Field(default=None, max_length=60)
    notes: str | None = Field(default=None, max_length=255)


class CreateJurorRequest(JurorRegistrationFields):
    """Payload for juror registration."""

    cpf: str = Field(min_length=11, max_length=14)
    full_name: str = Field(min_length=1, max_length=120)
    birth_date: date | None = None
    status: JurorStatus = JurorStatus.ACTIVE
    reason: InactivityReason | None = None
    suspended_until: date | None = None
    last_service_date: date | None = None
    institution_id: UUID | None = None


class UpdateJurorRequest(JurorRegistrationFields):
    """Partial update payload; only sent fields are applied."""

    full_name: str | None = Field(default=None, min_length=1, max_length=120)
    birth_date: date | None = None
    status: JurorStatus | None = None
    reason: InactivityReason | None = None
    suspended_until: date | None = None
    last_service_date: date | None = None
    institution_id: UUID | None = None

    @field_validator("full_name", "status")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("Field cannot be null.")
        return value

    def changes(self) -> dict[str, object]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class JurorResponse(BaseModel):
    """Serialized juror returned by API."""

    id: UUID
    cpf: str
    full_name: str
    birth_date: date | None
    status: JurorStatus
    reason: InactivityReason | None
    suspended_until: date | None
    last_service_date: date | None
    institution_id: UUID | None
    rg: str | None
    sex: JurorSex | None
    street: str | None
    street_number: str | None
    complement: str | None
    neighborhood: str | None
    city: str | None
    state: str | None
    postal_code: str | None
    email: str | None
    phone: str | None
    occupation: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, juror: Juror) -> JurorResponse:
        return cls(
            id=juror.id,
            cpf=juror.cpf,
            full_name=juror.full_name,
            birth_date=juror.birth_date,
            status=juror.status,
            reason=juror.reason,
            suspended_until=juror.suspended_until,
            last_service_date=juror.last_service_date,
            institution_id=juror.institution_id,
            rg=juror.rg,
            sex=juror.sex,
            street=juror.street,
            street_number=juror.street_number,
            complement=juror.complement,
            neighborhood=juror.neighborhood,
            city=juror.city,
            state=juror.state,
            postal_code=juror.postal_code,
            email=juror.email,
            phone=juror.phone,
            occupation=juror.occupation,
            notes=juror.notes,
            created_at=juror.created_at,
            updated_at=juror.updated_at,
        )


class JurorListResponse(BaseModel):
    """Paginated juror list."""

    items: list[JurorResponse]
    total: int = Field(ge=0)
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)

    @classmethod
    def from_models(
        cls,
        *,
        items: list[Juror],
        total: int,
        limit: int,
        offset: int,
    ) -> JurorListResponse:
        return cls(
            items=[JurorResponse.from_model(item) for item in items],
            total=total,
            limit=limit,
            offset=offset,
        )


class EligibilityResponse(BaseModel):
    """Eligibility diagnostics of one juror for a reference year."""

    juror_id: UUID
    reference_year: int
    eligible: bool
    failed_rules: list[EligibilityRule]

    @classmethod
    def from_result(
        cls,
        *,
        juror_id: UUID,
        result: EligibilityResult,
    ) -> EligibilityResponse:
        return cls(
            juror_id=juror_id,
            reference_year=result.reference_year,
            eligible=result.eligible,
            failed_rules=list(result.failed_rules),
        )


class ReactivationResponse(BaseModel):
    """Outcome of the suspension expiry sweep."""

    reactivated: int = Field(ge=0)


class RecordLastServiceRequest(BaseModel):
    """Deliberation panel identified by juror CPFs."""

    sitting_date: str = Field(description="Sitting date in YYYY-MM-DD format.")
    cpfs: list[str] = Field(min_length=1)

    def parsed_sitting_date(self) -> date:
        return parse_iso_date(self.sitting_date)
