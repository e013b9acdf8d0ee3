"""Ballot (cedula) ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controle_jurados.db.base import Base


class BallotStatus(enum.StrEnum):
    """Printable ballot states."""

    GENERATED = "Gerada"
    PRINTED = "Impressa"
    USED = "Utilizada"


class Ballot(Base):
    """Numbered printable ballot for one drawn juror within one draw."""

    __tablename__ = "ballots"
    __table_args__ = (
        UniqueConstraint(
            "draw_id",
            "sequence_number",
            name="uq_ballots_draw_sequence_number",
        ),
        UniqueConstraint("draw_id", "juror_id", name="uq_ballots_draw_juror"),
        CheckConstraint(
            "sequence_number > 0",
            name="ck_ballots_sequence_number_positive",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    draw_id: Mapped[UUID] = mapped_column(
        ForeignKey("draws.id", ondelete="CASCADE"),
        nullable=False,
    )
    juror_id: Mapped[UUID] = mapped_column(
        ForeignKey("jurors.id"),
        nullable=False,
    )
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)
    barcode: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[BallotStatus] = mapped_column(
        Enum(
            BallotStatus,
            name="ballot_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=BallotStatus.GENERATED,
    )
    printed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    draw: Mapped[Any] = relationship("Draw", back_populates="ballots")
    juror: Mapped[Any] = relationship("Juror")
