from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from controle_jurados.db.models.juror import JurorStatus
from controle_jurados.domain.eligibility import (
    EligibilityRule,
    evaluate_eligibility,
    is_eligible,
)
from controle_jurados.domain.errors import ValidationError


@dataclass
class JurorStub:
    status: JurorStatus = JurorStatus.ACTIVE
    birth_date: date | None = None
    last_service_date: date | None = None


def test_juror_turning_eighteen_in_reference_year_is_eligible() -> None:
    juror = JurorStub(birth_date=date(2006, 3, 1))

    assert is_eligible(juror, 2024)


def test_juror_born_after_age_boundary_is_not_eligible() -> None:
    juror = JurorStub(birth_date=date(2007, 1, 1))

    result = evaluate_eligibility(juror, 2024)

    assert not result.eligible
    assert result.failed_rules == (EligibilityRule.AGE,)


def test_juror_served_last_year_rests_one_full_year() -> None:
    juror = JurorStub(last_service_date=date(2023, 6, 10))

    assert not is_eligible(juror, 2024)
    assert is_eligible(juror, 2025)


def test_juror_served_in_reference_year_is_not_eligible() -> None:
    juror = JurorStub(last_service_date=date(2024, 2, 1))

    assert not is_eligible(juror, 2024)


def test_unknown_dates_never_disqualify() -> None:
    assert is_eligible(JurorStub(), 2024)


def test_inactive_juror_reports_every_failed_rule() -> None:
    juror = JurorStub(
        status=JurorStatus.INACTIVE,
        birth_date=date(2010, 5, 5),
        last_service_date=date(2024, 1, 1),
    )

    result = evaluate_eligibility(juror, 2024)

    assert result.failed_rules == (
        EligibilityRule.STATUS,
        EligibilityRule.AGE,
        EligibilityRule.REST,
    )


@pytest.mark.parametrize("reference_year", ["2024", 2024.0, True, None])
def test_reference_year_must_be_an_integer(reference_year: object) -> None:
    with pytest.raises(ValidationError):
        evaluate_eligibility(JurorStub(), reference_year)  # type: ignore[arg-type]
