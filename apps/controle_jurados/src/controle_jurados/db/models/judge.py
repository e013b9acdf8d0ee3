"""Judge ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Enum, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from controle_jurados.db.base import Base


class JudgeStatus(enum.StrEnum):
    """Judge availability states."""

    ACTIVE = "Ativo"
    INACTIVE = "Inativo"


DEFAULT_COURT_DIVISION = "Vara Única"
DEFAULT_DISTRICT = "Capivari de Baixo"


class Judge(Base):
    """Presiding judge of the district court."""

    __tablename__ = "judges"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    registration_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    court_division: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
        default=DEFAULT_COURT_DIVISION,
        server_default=DEFAULT_COURT_DIVISION,
    )
    district: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
        default=DEFAULT_DISTRICT,
        server_default=DEFAULT_DISTRICT,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_titular: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    status: Mapped[JudgeStatus] = mapped_column(
        Enum(
            JudgeStatus,
            name="judge_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=JudgeStatus.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
