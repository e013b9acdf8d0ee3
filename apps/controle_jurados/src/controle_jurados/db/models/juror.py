"""Juror ORM model."""

from __future__ import annotations

import enum
from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from controle_jurados.db.base import Base


class JurorStatus(enum.StrEnum):
    """Juror availability states."""

    ACTIVE = "Ativo"
    INACTIVE = "Inativo"


class JurorSex(enum.StrEnum):
    """Sex recorded on the juror registration."""

    MALE = "Masculino"
    FEMALE = "Feminino"


class InactivityReason(enum.StrEnum):
    """Reasons a juror is kept out of draws."""

    NO_OTHER_DISTRICT = "Outra Comarca"
    DECEASED = "Falecido"
    INCAPACITATED = "Incapacitado"
    TWELVE_MONTH_REST = "12 meses"
    IMPEDIMENT = "Impedimento"
    AGE_EXEMPTION = "Idade"
    TEMPORARY_SUSPENSION = "Temporário"


PERMANENT_EXCLUSION_REASONS = frozenset(
    {
        InactivityReason.NO_OTHER_DISTRICT,
        InactivityReason.DECEASED,
        InactivityReason.INCAPACITATED,
        InactivityReason.IMPEDIMENT,
        InactivityReason.AGE_EXEMPTION,
    }
)


class Juror(Base):
    """Citizen registered for jury duty in the district."""

    __tablename__ = "jurors"
    __table_args__ = (
        UniqueConstraint("cpf", name="uq_jurors_cpf"),
        CheckConstraint(
            "reason IS NULL OR status = 'Inativo'",
            name="ck_jurors_reason_requires_inactive",
        ),
        CheckConstraint(
            "suspended_until IS NULL OR reason = 'Temporário'",
            name="ck_jurors_suspension_requires_temporary_reason",
        ),
        Index(
            "ix_jurors_status_reason_suspended_until",
            "status",
            "reason",
            "suspended_until",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    cpf: Mapped[str] = mapped_column(String(14), nullable=False)
    full_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    rg: Mapped[str | None] = mapped_column(String(15), nullable=True)
    sex: Mapped[JurorSex | None] = mapped_column(
        Enum(
            JurorSex,
            name="juror_sex",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=True,
    )
    street: Mapped[str | None] = mapped_column(String(120), nullable=True)
    street_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    complement: Mapped[str | None] = mapped_column(String(40), nullable=True)
    neighborhood: Mapped[str | None] = mapped_column(String(60), nullable=True)
    city: Mapped[str | None] = mapped_column(String(60), nullable=True)
    state: Mapped[str | None] = mapped_column(String(2), nullable=True)
    postal_code: Mapped[str | None] = mapped_column(String(9), nullable=True)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    occupation: Mapped[str | None] = mapped_column(String(60), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[JurorStatus] = mapped_column(
        Enum(
            JurorStatus,
            name="juror_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=JurorStatus.ACTIVE,
    )
    reason: Mapped[InactivityReason | None] = mapped_column(
        Enum(
            InactivityReason,
            name="juror_inactivity_reason",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=True,
    )
    suspended_until: Mapped[date | None] = mapped_column(Date, nullable=True)
    last_service_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    institution_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("institutions.id", ondelete="SET NULL"),
        nullable=True,
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
