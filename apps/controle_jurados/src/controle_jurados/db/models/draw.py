"""Draw (sorteio) ORM model."""

from __future__ import annotations

import enum
from datetime import date, datetime, time
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controle_jurados.db.base import Base


class DrawStatus(enum.StrEnum):
    """Draw lifecycle states."""

    SCHEDULED = "Agendado"
    HELD = "Realizado"
    CANCELLED = "Cancelado"


class Draw(Base):
    """One jury-selection event for a reference year."""

    __tablename__ = "draws"
    __table_args__ = (
        CheckConstraint(
            "reference_year BETWEEN 1900 AND 9999",
            name="ck_draws_reference_year_range",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    reference_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)
    sitting_date: Mapped[date] = mapped_column(Date, nullable=False)
    sitting_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    judge_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("judges.id", ondelete="SET NULL"),
        nullable=True,
    )
    status: Mapped[DrawStatus] = mapped_column(
        Enum(
            DrawStatus,
            name="draw_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=DrawStatus.SCHEDULED,
    )
    case_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
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

    assignments: Mapped[list[Any]] = relationship(
        "DrawAssignment",
        back_populates="draw",
        cascade="all, delete-orphan",
    )
    ballots: Mapped[list[Any]] = relationship(
        "Ballot",
        back_populates="draw",
        cascade="all, delete-orphan",
    )
    last_service_marks: Mapped[list[Any]] = relationship(
        "LastServiceMark",
        back_populates="draw",
        cascade="all, delete-orphan",
    )
