"""CPF normalization helpers."""

from __future__ import annotations

import re

from controle_jurados.domain.errors import ValidationError, compose_error_message

NON_DIGITS = re.compile(r"\D")


def normalize_cpf(value: str) -> str:
    """Return CPF formatted as ``000.000.000-00`` from any punctuation."""

    digits = NON_DIGITS.sub("", value)
    if len(digits) != 11:
        raise ValidationError(
            message=compose_error_message(
                cause=f"CPF '{value}' must contain exactly 11 digits.",
                action="Send the CPF with or without punctuation and retry.",
            ),
            details={"cpf": value},
        )
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
