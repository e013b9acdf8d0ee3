"""Last service ("ultimo conselho") mark ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controle_jurados.db.base import Base


class LastServiceMark(Base):
    """Juror who actually served on the deliberation panel of a draw."""

    __tablename__ = "last_service_marks"
    __table_args__ = (
        UniqueConstraint(
            "draw_id",
            "juror_id",
            name="uq_last_service_marks_draw_juror",
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
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    draw: Mapped[Any] = relationship("Draw", back_populates="last_service_marks")
