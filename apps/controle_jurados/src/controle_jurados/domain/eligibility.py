"""Draw eligibility rules for jurors in a reference year.

A juror can be drawn for reference year ``Y`` when all rules hold:

* status: the juror is active;
* age: the birth year is ``Y - 18`` or earlier, so the juror turns 18 on or
  before the reference year;
* rest: the last service happened before ``Y - 1``, granting one full calendar
  year of rest after serving.

Missing birth or last-service dates never disqualify a juror.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from controle_jurados.db.models.juror import JurorStatus
from controle_jurados.domain.calendar_year import calendar_year
from controle_jurados.domain.errors import ValidationError, compose_error_message

MINIMUM_AGE = 18


class JurorSnapshot(Protocol):
    """Juror attributes read by eligibility rules."""

    status: JurorStatus
    birth_date: date | None
    last_service_date: date | None


class EligibilityRule(enum.StrEnum):
    """Rules that can disqualify a juror from a draw."""

    STATUS = "status"
    AGE = "age"
    REST = "rest"


@dataclass(slots=True, frozen=True)
class EligibilityResult:
    """Eligibility outcome with the rules that failed."""

    reference_year: int
    failed_rules: tuple[EligibilityRule, ...] = ()

    @property
    def eligible(self) -> bool:
        return not self.failed_rules


def _ensure_reference_year(reference_year: object) -> int:
    if isinstance(reference_year, bool) or not isinstance(reference_year, int):
        raise ValidationError(
            message=compose_error_message(
                cause="reference_year must be an integer year.",
                action="Send the reference year as a four digit number.",
            ),
            details={"reference_year": repr(reference_year)},
        )
    return reference_year


def meets_age_rule(birth_date: date | str | None, reference_year: int) -> bool:
    birth_year = calendar_year(birth_date)
    if birth_year is None:
        return True
    return birth_year <= reference_year - MINIMUM_AGE


def meets_rest_rule(last_service_date: date | str | None, reference_year: int) -> bool:
    service_year = calendar_year(last_service_date)
    if service_year is None:
        return True
    return service_year < reference_year - 1


def evaluate_eligibility(juror: JurorSnapshot, reference_year: int) -> EligibilityResult:
    """Evaluate every eligibility rule for one juror."""

    year = _ensure_reference_year(reference_year)
    failed: list[EligibilityRule] = []
    if juror.status != JurorStatus.ACTIVE:
        failed.append(EligibilityRule.STATUS)
    if not meets_age_rule(juror.birth_date, year):
        failed.append(EligibilityRule.AGE)
    if not meets_rest_rule(juror.last_service_date, year):
        failed.append(EligibilityRule.REST)
    return EligibilityResult(reference_year=year, failed_rules=tuple(failed))


def is_eligible(juror: JurorSnapshot, reference_year: int) -> bool:
    """Return whether the juror may be drawn for the reference year."""

    return evaluate_eligibility(juror, reference_year).eligible
