"""Business service for juror registration and lifecycle updates."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol
from uuid import UUID

from controle_jurados.core.clock import Clock
from controle_jurados.db.models.juror import (
    InactivityReason,
    Juror,
    JurorSex,
    JurorStatus,
)
from controle_jurados.domain.cpf import normalize_cpf
from controle_jurados.domain.eligibility import EligibilityResult, evaluate_eligibility
from controle_jurados.domain.errors import (
    DuplicateCpfError,
    InstitutionNotFoundError,
    JurorInUseError,
    JurorNotFoundError,
    ValidationError,
    compose_error_message,
)
from controle_jurados.domain.juror_lifecycle import (
    StatusFields,
    normalize_status_fields,
)
from controle_jurados.domain.registration import (
    JUROR_REGISTRATION_FIELDS,
    normalize_juror_registration,
)
from controle_jurados.repositories.juror_repository import JurorListFilters

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by juror service."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def refresh(self, instance: object) -> None: ...

    def flush(self) -> None: ...


class JurorRepositoryProtocol(Protocol):
    """Juror repository contract consumed by service."""

    def get(self, juror_id: UUID) -> Juror | None: ...

    def get_for_update(self, juror_id: UUID) -> Juror | None: ...

    def get_by_cpf(self, cpf: str) -> Juror | None: ...

    def list_by_cpfs_for_update(self, cpfs: Collection[str]) -> list[Juror]: ...

    def list_jurors(self, filters: JurorListFilters) -> tuple[list[Juror], int]: ...

    def add(self, juror: Juror) -> Juror: ...

    def delete(self, juror: Juror) -> None: ...

    def count_references(self, juror_id: UUID) -> int: ...

    def list_expired_suspension_ids(self, today: date) -> list[UUID]: ...

    def reactivate(self, juror_ids: Collection[UUID], today: date) -> int: ...

    def institution_exists(self, institution_id: UUID) -> bool: ...


@dataclass(slots=True, frozen=True)
class CreateJurorInput:
    """Input model for juror registration."""

    cpf: str
    full_name: str
    birth_date: date | None = None
    status: JurorStatus = JurorStatus.ACTIVE
    reason: InactivityReason | None = None
    suspended_until: date | None = None
    last_service_date: date | None = None
    institution_id: UUID | None = None
    rg: str | None = None
    sex: JurorSex | None = None
    street: str | None = None
    street_number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    email: str | None = None
    phone: str | None = None
    occupation: str | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateJurorInput:
    """Input model for partial juror updates.

    ``changes`` holds only the fields sent by the caller, so an explicit
    ``None`` clears a field while a missing key keeps the stored value.
    """

    juror_id: UUID
    changes: dict[str, Any]


UPDATABLE_FIELDS = JUROR_REGISTRATION_FIELDS | {
    "full_name",
    "birth_date",
    "status",
    "reason",
    "suspended_until",
    "last_service_date",
    "institution_id",
}


def status_fields_of(juror: Juror) -> StatusFields:
    """Snapshot the lifecycle-governed fields of a stored juror."""

    return StatusFields(
        status=juror.status,
        reason=juror.reason,
        suspended_until=juror.suspended_until,
        last_service_date=juror.last_service_date,
    )


def apply_status_fields(juror: Juror, fields: StatusFields) -> None:
    juror.status = fields.status
    juror.reason = fields.reason
    juror.suspended_until = fields.suspended_until
    juror.last_service_date = fields.last_service_date


def normalize_full_name(value: str) -> str:
    full_name = " ".join(value.split()).upper()
    if not full_name:
        raise ValidationError(
            message=compose_error_message(
                cause="full_name must not be blank.",
                action="Send the juror full name and retry.",
            )
        )
    return full_name


class JurorService:
    """Coordinates juror use cases and lifecycle normalization."""

    def __init__(
        self,
        *,
        juror_repository: JurorRepositoryProtocol,
        session: SessionProtocol,
        clock: Clock,
        last_service_panel_limit: int = 7,
    ) -> None:
        self._juror_repository = juror_repository
        self._session = session
        self._clock = clock
        self._last_service_panel_limit = last_service_panel_limit

    def create_juror(self, payload: CreateJurorInput) -> Juror:
        """Register one juror after CPF and lifecycle validation."""

        cpf = normalize_cpf(payload.cpf)
        full_name = normalize_full_name(payload.full_name)
        if self._juror_repository.get_by_cpf(cpf) is not None:
            raise DuplicateCpfError(details={"cpf": cpf})
        self._ensure_institution(payload.institution_id)

        registration = normalize_juror_registration(
            {
                field_name: getattr(payload, field_name)
                for field_name in JUROR_REGISTRATION_FIELDS
            }
        )
        fields = normalize_status_fields(
            StatusFields(),
            {
                "status": payload.status,
                "reason": payload.reason,
                "suspended_until": payload.suspended_until,
                "last_service_date": payload.last_service_date,
            },
            current_year=self._clock.current_year(),
        )

        try:
            juror = Juror(
                cpf=cpf,
                full_name=full_name,
                birth_date=payload.birth_date,
                institution_id=payload.institution_id,
                **registration,
            )
            apply_status_fields(juror, fields)
            created = self._juror_repository.add(juror)
            self._session.commit()
            self._session.refresh(created)
            logger.info(
                "juror_created",
                extra={
                    "juror_id": str(created.id),
                    "status": created.status.value,
                },
            )
            return created
        except Exception:
            self._session.rollback()
            raise

    def update_juror(self, payload: UpdateJurorInput) -> Juror:
        """Apply a partial update, normalizing status fields on write."""

        unknown = set(payload.changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                message=compose_error_message(
                    cause=f"Fields {sorted(unknown)} cannot be updated.",
                    action="Remove read-only fields from the request.",
                ),
                details={"fields": sorted(unknown)},
            )

        try:
            juror = self._juror_repository.get_for_update(payload.juror_id)
            if juror is None:
                raise JurorNotFoundError(details={"juror_id": str(payload.juror_id)})

            changes = dict(payload.changes)
            if "full_name" in changes:
                juror.full_name = normalize_full_name(changes.pop("full_name"))
            if "birth_date" in changes:
                juror.birth_date = changes.pop("birth_date")
            if "institution_id" in changes:
                institution_id = changes.pop("institution_id")
                self._ensure_institution(institution_id)
                juror.institution_id = institution_id
            registration = normalize_juror_registration(
                {
                    name: changes.pop(name)
                    for name in list(changes)
                    if name in JUROR_REGISTRATION_FIELDS
                }
            )
            for field_name, value in registration.items():
                setattr(juror, field_name, value)

            fields = normalize_status_fields(
                status_fields_of(juror),
                changes,
                current_year=self._clock.current_year(),
            )
            apply_status_fields(juror, fields)
            self._session.flush()
            self._session.commit()
            self._session.refresh(juror)
            logger.info(
                "juror_updated",
                extra={"juror_id": str(juror.id), "status": juror.status.value},
            )
            return juror
        except Exception:
            self._session.rollback()
            raise

    def delete_juror(self, juror_id: UUID) -> None:
        """Delete a juror that no draw references."""

        try:
            juror = self._juror_repository.get_for_update(juror_id)
            if juror is None:
                raise JurorNotFoundError(details={"juror_id": str(juror_id)})
            references = self._juror_repository.count_references(juror_id)
            if references:
                raise JurorInUseError(
                    details={"juror_id": str(juror_id), "references": references}
                )
            self._juror_repository.delete(juror)
            self._session.commit()
            logger.info("juror_deleted", extra={"juror_id": str(juror_id)})
        except Exception:
            self._session.rollback()
            raise

    def get_juror(self, juror_id: UUID) -> Juror:
        juror = self._juror_repository.get(juror_id)
        if juror is None:
            raise JurorNotFoundError(details={"juror_id": str(juror_id)})
        return juror

    def list_jurors(self, filters: JurorListFilters) -> tuple[list[Juror], int]:
        return self._juror_repository.list_jurors(filters)

    def evaluate_juror_eligibility(
        self,
        juror_id: UUID,
        reference_year: int,
    ) -> EligibilityResult:
        return evaluate_eligibility(self.get_juror(juror_id), reference_year)

    def reactivate_expired_suspensions(self) -> int:
        """Reactivate every temporary suspension that ended by today.

        Safe to run repeatedly: a second run on the same day returns 0.
        """

        today = self._clock.today()
        try:
            juror_ids = self._juror_repository.list_expired_suspension_ids(today)
            reactivated = self._juror_repository.reactivate(juror_ids, today)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "jurors_reactivated",
            extra={"count": reactivated, "today": today.isoformat()},
        )
        return reactivated

    def record_last_service_by_cpf(
        self,
        *,
        sitting_date: date,
        cpfs: Sequence[str],
    ) -> list[Juror]:
        """Record a deliberation panel by CPF, all jurors or none."""

        normalized = list(dict.fromkeys(normalize_cpf(cpf) for cpf in cpfs))
        if not normalized or len(normalized) > self._last_service_panel_limit:
            raise ValidationError(
                message=compose_error_message(
                    cause=(
                        "A deliberation panel needs between 1 and "
                        f"{self._last_service_panel_limit} distinct CPFs."
                    ),
                    action="Review the list of CPFs and retry.",
                ),
                details={"count": len(normalized)},
            )

        current_year = self._clock.current_year()
        try:
            jurors = self._juror_repository.list_by_cpfs_for_update(normalized)
            found = {juror.cpf for juror in jurors}
            missing = [cpf for cpf in normalized if cpf not in found]
            if missing:
                raise JurorNotFoundError(details={"cpfs": missing})

            for juror in jurors:
                fields = normalize_status_fields(
                    status_fields_of(juror),
                    {"last_service_date": sitting_date},
                    current_year=current_year,
                )
                apply_status_fields(juror, fields)
            self._session.flush()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "last_service_recorded",
            extra={"count": len(jurors), "sitting_date": sitting_date.isoformat()},
        )
        by_cpf = {juror.cpf: juror for juror in jurors}
        return [by_cpf[cpf] for cpf in normalized]

    def _ensure_institution(self, institution_id: UUID | None) -> None:
        if institution_id is None:
            return
        if not self._juror_repository.institution_exists(institution_id):
            raise InstitutionNotFoundError(
                details={"institution_id": str(institution_id)}
            )
