from __future__ import annotations

import pytest

from controle_jurados.db.models.juror import JurorSex
from controle_jurados.domain.errors import ValidationError
from controle_jurados.domain.registration import (
    normalize_judge_registration,
    normalize_juror_registration,
)


def test_juror_registration_upper_cases_free_text_only() -> None:
    normalized = normalize_juror_registration(
        {
            "street": " rua xv de novembro ",
            "rg": "12.345.678-x",
            "postal_code": "88745-000",
            "state": "sc",
            "sex": JurorSex.MALE,
        }
    )

    assert normalized == {
        "street": "RUA XV DE NOVEMBRO",
        "rg": "12.345.678-x",
        "postal_code": "88745-000",
        "state": "SC",
        "sex": JurorSex.MALE,
    }


def test_juror_registration_omits_fields_not_sent() -> None:
    assert normalize_juror_registration({"email": "A@B.COM"}) == {"email": "a@b.com"}


@pytest.mark.parametrize("email", ["", "   ", "@"])
def test_placeholder_email_becomes_none(email: str) -> None:
    assert normalize_judge_registration({"email": email}) == {"email": None}


def test_invalid_state_is_rejected() -> None:
    with pytest.raises(ValidationError):
        normalize_juror_registration({"state": "S1"})


def test_blank_judge_division_and_district_fall_back_to_defaults() -> None:
    normalized = normalize_judge_registration(
        {"court_division": " ", "district": None, "notes": ""}
    )

    assert normalized == {
        "court_division": "Vara Única",
        "district": "Capivari de Baixo",
        "notes": None,
    }
