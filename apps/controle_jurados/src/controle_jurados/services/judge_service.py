"""Business service for district judges."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import UUID

from controle_jurados.db.models.judge import Judge, JudgeStatus
from controle_jurados.domain.errors import (
    InactiveTitularJudgeError,
    JudgeNotFoundError,
    SoleTitularJudgeError,
    ValidationError,
    compose_error_message,
)
from controle_jurados.domain.registration import (
    JUDGE_REGISTRATION_FIELDS,
    normalize_judge_registration,
)
from controle_jurados.services.judge_titular_invariant import JudgeTitularInvariant

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by judge service."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def refresh(self, instance: object) -> None: ...

    def flush(self) -> None: ...


class JudgeRepositoryProtocol(Protocol):
    """Judge repository contract consumed by service."""

    def get(self, judge_id: UUID) -> Judge | None: ...

    def get_for_update(self, judge_id: UUID) -> Judge | None: ...

    def list_judges(self, status: JudgeStatus | None = None) -> list[Judge]: ...

    def list_all_for_update(self) -> list[Judge]: ...

    def get_titular(self) -> Judge | None: ...

    def count_titulars_excluding(self, judge_id: UUID) -> int: ...

    def count_active_excluding(self, judge_id: UUID | None) -> int: ...

    def add(self, judge: Judge) -> Judge: ...

    def delete(self, judge: Judge) -> None: ...

    def clear_titular_except(self, judge_id: UUID) -> None: ...

    def clear_judge_from_draws(self, judge_id: UUID) -> None: ...


@dataclass(slots=True, frozen=True)
class CreateJudgeInput:
    """Input model for judge registration."""

    name: str
    is_titular: bool = False
    status: JudgeStatus = JudgeStatus.ACTIVE
    registration_number: str | None = None
    email: str | None = None
    phone: str | None = None
    court_division: str | None = None
    district: str | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateJudgeInput:
    """Input model for judge updates; ``None`` keeps the stored value.

    ``registration`` carries only the registration fields sent by the caller,
    so an explicit ``None`` there clears the field.
    """

    judge_id: UUID
    name: str | None = None
    is_titular: bool | None = None
    status: JudgeStatus | None = None
    registration: dict[str, Any] = field(default_factory=dict)


def normalize_judge_name(value: str) -> str:
    name = " ".join(value.split()).upper()
    if not name:
        raise ValidationError(
            message=compose_error_message(
                cause="Judge name must not be blank.",
                action="Send the judge name and retry.",
            )
        )
    return name


class JudgeService:
    """Judge use cases that keep exactly one titular judge."""

    def __init__(
        self,
        *,
        judge_repository: JudgeRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._judge_repository = judge_repository
        self._session = session
        self._titular_invariant = JudgeTitularInvariant(
            judge_repository=judge_repository,
            session=session,
        )

    def create_judge(self, payload: CreateJudgeInput) -> Judge:
        name = normalize_judge_name(payload.name)
        registration = normalize_judge_registration(
            {
                field_name: getattr(payload, field_name)
                for field_name in JUDGE_REGISTRATION_FIELDS
            }
        )
        try:
            if payload.is_titular:
                self._ensure_titular_candidate(None, payload.status)
            judge = self._judge_repository.add(
                Judge(
                    name=name,
                    is_titular=payload.is_titular,
                    status=payload.status,
                    **registration,
                )
            )
            if judge.is_titular:
                self._judge_repository.clear_titular_except(judge.id)
            self._titular_invariant.restore()
            self._session.commit()
            self._session.refresh(judge)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "judge_created",
            extra={"judge_id": str(judge.id), "is_titular": judge.is_titular},
        )
        return judge

    def update_judge(self, payload: UpdateJudgeInput) -> Judge:
        unknown = set(payload.registration) - JUDGE_REGISTRATION_FIELDS
        if unknown:
            raise ValidationError(
                message=compose_error_message(
                    cause=f"Fields {sorted(unknown)} cannot be updated.",
                    action="Remove unknown fields from the request.",
                ),
                details={"fields": sorted(unknown)},
            )

        try:
            judge = self._judge_repository.get_for_update(payload.judge_id)
            if judge is None:
                raise JudgeNotFoundError(details={"judge_id": str(payload.judge_id)})

            status = payload.status if payload.status is not None else judge.status
            if payload.is_titular is True:
                self._ensure_titular_candidate(judge.id, status)

            if payload.name is not None:
                judge.name = normalize_judge_name(payload.name)
            judge.status = status
            registration = normalize_judge_registration(payload.registration)
            for field_name, value in registration.items():
                setattr(judge, field_name, value)

            if payload.is_titular is True:
                judge.is_titular = True
                self._session.flush()
                self._judge_repository.clear_titular_except(judge.id)
            elif payload.is_titular is False and judge.is_titular:
                if self._judge_repository.count_titulars_excluding(judge.id) == 0:
                    raise SoleTitularJudgeError(details={"judge_id": str(judge.id)})
                judge.is_titular = False

            self._session.flush()
            self._titular_invariant.restore()
            self._session.commit()
            self._session.refresh(judge)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "judge_updated",
            extra={"judge_id": str(judge.id), "is_titular": judge.is_titular},
        )
        return judge

    def delete_judge(self, judge_id: UUID) -> None:
        """Delete a judge, detaching its draws and re-electing the titular."""

        try:
            judge = self._judge_repository.get_for_update(judge_id)
            if judge is None:
                raise JudgeNotFoundError(details={"judge_id": str(judge_id)})
            self._judge_repository.clear_judge_from_draws(judge_id)
            self._judge_repository.delete(judge)
            self._titular_invariant.restore()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info("judge_deleted", extra={"judge_id": str(judge_id)})

    def ensure_titular(self) -> Judge | None:
        """Run the titular repair on demand and return the titular judge."""

        try:
            plan = self._titular_invariant.restore()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        if plan.titular_id is None:
            return None
        return self._judge_repository.get(plan.titular_id)

    def get_judge(self, judge_id: UUID) -> Judge:
        judge = self._judge_repository.get(judge_id)
        if judge is None:
            raise JudgeNotFoundError(details={"judge_id": str(judge_id)})
        return judge

    def list_judges(self, status: JudgeStatus | None = None) -> list[Judge]:
        return self._judge_repository.list_judges(status)

    def get_titular_judge(self) -> Judge:
        judge = self._judge_repository.get_titular()
        if judge is None:
            raise JudgeNotFoundError(
                message=compose_error_message(
                    cause="No judge is registered in the district.",
                    action="Register a judge before querying the titular judge.",
                )
            )
        return judge

    def _ensure_titular_candidate(
        self,
        judge_id: UUID | None,
        status: JudgeStatus,
    ) -> None:
        """Reject an inactive titular unless no active judge could hold the role."""

        if status == JudgeStatus.ACTIVE:
            return
        if self._judge_repository.count_active_excluding(judge_id) > 0:
            raise InactiveTitularJudgeError(
                details={
                    "judge_id": str(judge_id) if judge_id is not None else None,
                    "status": status.value,
                }
            )
