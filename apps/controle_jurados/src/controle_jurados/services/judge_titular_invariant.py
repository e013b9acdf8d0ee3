"""Applies the single titular judge invariant inside a session transaction."""

from __future__ import annotations

import logging
from typing import Protocol

from controle_jurados.db.models.judge import Judge
from controle_jurados.domain.errors import (
    InvariantViolationError,
    compose_error_message,
)
from controle_jurados.domain.titular_invariant import (
    TitularPlan,
    plan_titular_fixup,
    satisfies_titular_invariant,
)

logger = logging.getLogger(__name__)


class FlushingSessionProtocol(Protocol):
    def flush(self) -> None: ...


class TitularJudgeRepositoryProtocol(Protocol):
    def list_all_for_update(self) -> list[Judge]: ...


class JudgeTitularInvariant:
    """Restores exactly one titular judge without committing.

    The caller owns the transaction and must roll back when ``restore`` raises.
    """

    def __init__(
        self,
        *,
        judge_repository: TitularJudgeRepositoryProtocol,
        session: FlushingSessionProtocol,
    ) -> None:
        self._judge_repository = judge_repository
        self._session = session

    def restore(self) -> TitularPlan:
        judges = self._judge_repository.list_all_for_update()
        plan = plan_titular_fixup(judges)

        if plan.changed:
            for judge in judges:
                judge.is_titular = judge.id == plan.titular_id
            self._session.flush()
            logger.info(
                "titular_judge_reassigned",
                extra={
                    "titular_id": str(plan.titular_id),
                    "promoted": [str(judge_id) for judge_id in plan.promote_ids],
                    "demoted": [str(judge_id) for judge_id in plan.demote_ids],
                },
            )

        if not satisfies_titular_invariant(judges):
            logger.error(
                "titular_invariant_violated",
                extra={
                    "titular_ids": [
                        str(judge.id) for judge in judges if judge.is_titular
                    ],
                },
            )
            raise InvariantViolationError(
                message=compose_error_message(
                    cause="The district does not have exactly one titular judge.",
                    action="Retry the operation and report the problem if it persists.",
                )
            )
        return plan
