"""Planning for the "exactly one titular judge" district invariant."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from controle_jurados.db.models.judge import JudgeStatus


class JudgeSnapshot(Protocol):
    """Judge attributes read by the titular invariant."""

    id: UUID
    name: str
    is_titular: bool
    status: JudgeStatus


@dataclass(slots=True, frozen=True)
class TitularPlan:
    """Flag changes that restore a single titular judge."""

    titular_id: UUID | None
    promote_ids: tuple[UUID, ...] = ()
    demote_ids: tuple[UUID, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.promote_ids or self.demote_ids)


def _by_name(judge: JudgeSnapshot) -> tuple[str, str]:
    return judge.name, str(judge.id)


def _pick_titular(judges: Sequence[JudgeSnapshot]) -> JudgeSnapshot:
    if len(judges) == 1:
        return judges[0]

    active = [judge for judge in judges if judge.status == JudgeStatus.ACTIVE]
    active_titulars = [judge for judge in active if judge.is_titular]
    if active_titulars:
        return min(active_titulars, key=_by_name)
    if active:
        return min(active, key=_by_name)
    titulars = [judge for judge in judges if judge.is_titular]
    if titulars:
        return min(titulars, key=_by_name)
    return min(judges, key=_by_name)


def plan_titular_fixup(judges: Sequence[JudgeSnapshot]) -> TitularPlan:
    """Compute which judge keeps the titular flag and which lose it.

    Ties on name are broken by id so repeated runs converge.
    """

    if not judges:
        return TitularPlan(titular_id=None)

    titular = _pick_titular(judges)
    promote = () if titular.is_titular else (titular.id,)
    demote = tuple(
        judge.id
        for judge in sorted(judges, key=_by_name)
        if judge.is_titular and judge.id != titular.id
    )
    return TitularPlan(titular_id=titular.id, promote_ids=promote, demote_ids=demote)


def satisfies_titular_invariant(judges: Sequence[JudgeSnapshot]) -> bool:
    """Return whether the judges hold exactly one titular, active when possible."""

    if not judges:
        return True
    titulars = [judge for judge in judges if judge.is_titular]
    if len(titulars) != 1:
        return False
    has_active = any(judge.status == JudgeStatus.ACTIVE for judge in judges)
    return not has_active or titulars[0].status == JudgeStatus.ACTIVE
