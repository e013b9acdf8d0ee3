from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from controle_jurados.db.models.judge import Judge, JudgeStatus
from controle_jurados.domain.errors import (
    InactiveTitularJudgeError,
    JudgeNotFoundError,
    SoleTitularJudgeError,
)
from controle_jurados.services.judge_service import (
    CreateJudgeInput,
    JudgeService,
    UpdateJudgeInput,
)


class FakeSession:
    def __init__(self) -> None:
        self.commits = 0
        self.rolled_back = False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rolled_back = True

    def refresh(self, instance: object) -> None:
        _ = instance

    def flush(self) -> None:
        return None


@dataclass
class FakeJudgeRepository:
    judges: list[Judge] = field(default_factory=list)
    cleared_draws_for: list[UUID] = field(default_factory=list)

    def get(self, judge_id: UUID) -> Judge | None:
        return next((judge for judge in self.judges if judge.id == judge_id), None)

    def get_for_update(self, judge_id: UUID) -> Judge | None:
        return self.get(judge_id)

    def list_judges(self, status: JudgeStatus | None = None) -> list[Judge]:
        return [
            judge for judge in self.judges if status is None or judge.status == status
        ]

    def list_all_for_update(self) -> list[Judge]:
        return sorted(self.judges, key=lambda judge: (judge.name, str(judge.id)))

    def get_titular(self) -> Judge | None:
        return next((judge for judge in self.judges if judge.is_titular), None)

    def count_titulars_excluding(self, judge_id: UUID) -> int:
        return sum(
            1 for judge in self.judges if judge.is_titular and judge.id != judge_id
        )

    def count_active_excluding(self, judge_id: UUID | None) -> int:
        return sum(
            1
            for judge in self.judges
            if judge.status == JudgeStatus.ACTIVE and judge.id != judge_id
        )

    def add(self, judge: Judge) -> Judge:
        judge.id = judge.id or uuid4()
        self.judges.append(judge)
        return judge

    def delete(self, judge: Judge) -> None:
        self.judges.remove(judge)

    def clear_titular_except(self, judge_id: UUID) -> None:
        for judge in self.judges:
            if judge.id != judge_id:
                judge.is_titular = False

    def clear_judge_from_draws(self, judge_id: UUID) -> None:
        self.cleared_draws_for.append(judge_id)


def _judge(
    name: str,
    *,
    is_titular: bool = False,
    status: JudgeStatus = JudgeStatus.ACTIVE,
) -> Judge:
    return Judge(id=uuid4(), name=name, is_titular=is_titular, status=status)


def _service(repository: FakeJudgeRepository, session: FakeSession) -> JudgeService:
    return JudgeService(judge_repository=repository, session=session)


def test_first_judge_becomes_titular() -> None:
    repository = FakeJudgeRepository()
    service = _service(repository, FakeSession())

    judge = service.create_judge(CreateJudgeInput(name="  ana   souza "))

    assert judge.name == "ANA SOUZA"
    assert judge.is_titular


def test_new_titular_replaces_previous_one() -> None:
    previous = _judge("ANA", is_titular=True)
    repository = FakeJudgeRepository(judges=[previous])
    service = _service(repository, FakeSession())

    created = service.create_judge(CreateJudgeInput(name="BIA", is_titular=True))

    assert created.is_titular
    assert not previous.is_titular


def test_unsetting_sole_titular_is_rejected_and_rolled_back() -> None:
    titular = _judge("ANA", is_titular=True)
    repository = FakeJudgeRepository(judges=[titular, _judge("BIA")])
    session = FakeSession()
    service = _service(repository, session)

    with pytest.raises(SoleTitularJudgeError):
        service.update_judge(UpdateJudgeInput(judge_id=titular.id, is_titular=False))

    assert session.rolled_back
    assert session.commits == 0
    assert titular.is_titular


def test_deleting_titular_promotes_remaining_judge() -> None:
    titular = _judge("ANA", is_titular=True)
    other = _judge("BIA")
    repository = FakeJudgeRepository(judges=[titular, other])
    service = _service(repository, FakeSession())

    service.delete_judge(titular.id)

    assert other.is_titular
    assert repository.cleared_draws_for == [titular.id]


def test_inactivating_titular_moves_flag_to_active_judge() -> None:
    titular = _judge("ANA", is_titular=True)
    other = _judge("BIA")
    repository = FakeJudgeRepository(judges=[titular, other])
    service = _service(repository, FakeSession())

    service.update_judge(
        UpdateJudgeInput(judge_id=titular.id, status=JudgeStatus.INACTIVE)
    )

    assert not titular.is_titular
    assert other.is_titular


def test_update_unknown_judge_raises_not_found() -> None:
    service = _service(FakeJudgeRepository(), FakeSession())

    with pytest.raises(JudgeNotFoundError):
        service.update_judge(UpdateJudgeInput(judge_id=uuid4(), name="X"))


def test_inactive_judge_cannot_be_made_titular_while_active_judges_exist() -> None:
    titular = _judge("ZULU", is_titular=True)
    inactive = _judge("MIKE", status=JudgeStatus.INACTIVE)
    repository = FakeJudgeRepository(judges=[titular, _judge("ALFA"), inactive])
    session = FakeSession()
    service = _service(repository, session)

    with pytest.raises(InactiveTitularJudgeError):
        service.update_judge(UpdateJudgeInput(judge_id=inactive.id, is_titular=True))

    assert session.rolled_back
    assert session.commits == 0
    assert titular.is_titular
    assert not inactive.is_titular


def test_judge_inactivated_in_same_edit_cannot_be_made_titular() -> None:
    titular = _judge("ZULU", is_titular=True)
    other = _judge("ALFA")
    repository = FakeJudgeRepository(judges=[titular, other])
    service = _service(repository, FakeSession())

    with pytest.raises(InactiveTitularJudgeError):
        service.update_judge(
            UpdateJudgeInput(
                judge_id=other.id,
                is_titular=True,
                status=JudgeStatus.INACTIVE,
            )
        )

    assert titular.is_titular


def test_creating_inactive_titular_is_rejected_when_active_judge_exists() -> None:
    repository = FakeJudgeRepository(judges=[_judge("ANA", is_titular=True)])
    service = _service(repository, FakeSession())

    with pytest.raises(InactiveTitularJudgeError):
        service.create_judge(
            CreateJudgeInput(
                name="BIA",
                is_titular=True,
                status=JudgeStatus.INACTIVE,
            )
        )

    assert [judge.name for judge in repository.judges] == ["ANA"]


def test_inactive_judge_can_be_titular_when_no_judge_is_active() -> None:
    only = _judge("ANA", status=JudgeStatus.INACTIVE)
    repository = FakeJudgeRepository(judges=[only])
    service = _service(repository, FakeSession())

    updated = service.update_judge(UpdateJudgeInput(judge_id=only.id, is_titular=True))

    assert updated.is_titular


def test_registration_fields_are_normalized_with_defaults() -> None:
    repository = FakeJudgeRepository()
    service = _service(repository, FakeSession())

    judge = service.create_judge(
        CreateJudgeInput(
            name="Ana",
            registration_number=" 1234567 ",
            email=" Ana.Souza@TJSC.jus.br ",
            phone="   ",
            notes="plantao aos sabados",
        )
    )

    assert judge.registration_number == "1234567"
    assert judge.email == "ana.souza@tjsc.jus.br"
    assert judge.phone is None
    assert judge.notes == "PLANTAO AOS SABADOS"
    assert judge.court_division == "Vara Única"
    assert judge.district == "Capivari de Baixo"
