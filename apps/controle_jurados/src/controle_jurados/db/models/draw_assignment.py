"""Draw assignment ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controle_jurados.db.base import Base


class AssignmentRole(enum.StrEnum):
    """Role of a drawn juror within one draw."""

    TITULAR = "titular"
    SUPLENTE = "suplente"

    def toggled(self) -> AssignmentRole:
        if self is AssignmentRole.TITULAR:
            return AssignmentRole.SUPLENTE
        return AssignmentRole.TITULAR


class DrawAssignment(Base):
    """Juror drawn for one draw with a titular or suplente role."""

    __tablename__ = "draw_assignments"
    __table_args__ = (
        UniqueConstraint(
            "draw_id",
            "juror_id",
            name="uq_draw_assignments_draw_juror",
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
    role: Mapped[AssignmentRole] = mapped_column(
        Enum(
            AssignmentRole,
            name="assignment_role",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    draw: Mapped[Any] = relationship("Draw", back_populates="assignments")
    juror: Mapped[Any] = relationship("Juror")
