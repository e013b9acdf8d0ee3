"""Create juror, judge, draw and ballot tables."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001_initial_tables"
down_revision = None
branch_labels = None
depends_on = None


juror_status_enum = sa.Enum("Ativo", "Inativo", name="juror_status")
juror_sex_enum = sa.Enum("Masculino", "Feminino", name="juror_sex")
juror_inactivity_reason_enum = sa.Enum(
    "Outra Comarca",
    "Falecido",
    "Incapacitado",
    "12 meses",
    "Impedimento",
    "Idade",
    "Temporário",
    name="juror_inactivity_reason",
)
judge_status_enum = sa.Enum("Ativo", "Inativo", name="judge_status")
draw_status_enum = sa.Enum("Agendado", "Realizado", "Cancelado", name="draw_status")
assignment_role_enum = sa.Enum("titular", "suplente", name="assignment_role")
ballot_status_enum = sa.Enum("Gerada", "Impressa", "Utilizada", name="ballot_status")

ENUMS = (
    juror_status_enum,
    juror_sex_enum,
    juror_inactivity_reason_enum,
    judge_status_enum,
    draw_status_enum,
    assignment_role_enum,
    ballot_status_enum,
)


def _uuid_column(name: str, **kwargs: object) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), **kwargs)


def _timestamps(*, with_updated_at: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        )
    ]
    if with_updated_at:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now(),
            )
        )
    return columns


def upgrade() -> None:
    """Apply schema upgrades."""
    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.create(bind, checkfirst=True)

    op.create_table(
        "institutions",
        _uuid_column("id", primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(with_updated_at=False),
    )

    op.create_table(
        "jurors",
        _uuid_column("id", primary_key=True, nullable=False),
        sa.Column("cpf", sa.String(length=14), nullable=False),
        sa.Column("full_name", sa.String(length=120), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("rg", sa.String(length=15), nullable=True),
        sa.Column(
            "sex",
            postgresql.ENUM(name="juror_sex", create_type=False),
            nullable=True,
        ),
        sa.Column("street", sa.String(length=120), nullable=True),
        sa.Column("street_number", sa.String(length=10), nullable=True),
        sa.Column("complement", sa.String(length=40), nullable=True),
        sa.Column("neighborhood", sa.String(length=60), nullable=True),
        sa.Column("city", sa.String(length=60), nullable=True),
        sa.Column("state", sa.String(length=2), nullable=True),
        sa.Column("postal_code", sa.String(length=9), nullable=True),
        sa.Column("email", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("occupation", sa.String(length=60), nullable=True),
        sa.Column("notes", sa.String(length=255), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="juror_status", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "reason",
            postgresql.ENUM(name="juror_inactivity_reason", create_type=False),
            nullable=True,
        ),
        sa.Column("suspended_until", sa.Date(), nullable=True),
        sa.Column("last_service_date", sa.Date(), nullable=True),
        _uuid_column("institution_id", nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["institution_id"],
            ["institutions.id"],
            name="fk_jurors_institution_id",
            ondelete="SET NULL",
        ),
        sa.UniqueConstraint("cpf", name="uq_jurors_cpf"),
        sa.CheckConstraint(
            "reason IS NULL OR status = 'Inativo'",
            name="ck_jurors_reason_requires_inactive",
        ),
        sa.CheckConstraint(
            "suspended_until IS NULL OR reason = 'Temporário'",
            name="ck_jurors_suspension_requires_temporary_reason",
        ),
    )
    op.create_index(
        "ix_jurors_status_reason_suspended_until",
        "jurors",
        ["status", "reason", "suspended_until"],
        unique=False,
    )
    op.create_index("ix_jurors_full_name", "jurors", ["full_name"], unique=False)

    op.create_table(
        "judges",
        _uuid_column("id", primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("registration_number", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column(
            "court_division",
            sa.String(length=60),
            nullable=False,
            server_default="Vara Única",
        ),
        sa.Column(
            "district",
            sa.String(length=60),
            nullable=False,
            server_default="Capivari de Baixo",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "is_titular", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="judge_status", create_type=False),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "draws",
        _uuid_column("id", primary_key=True, nullable=False),
        sa.Column("reference_year", sa.Integer(), nullable=False),
        sa.Column("draw_date", sa.Date(), nullable=False),
        sa.Column("sitting_date", sa.Date(), nullable=False),
        sa.Column("sitting_time", sa.Time(), nullable=True),
        _uuid_column("judge_id", nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="draw_status", create_type=False),
            nullable=False,
        ),
        sa.Column("case_number", sa.String(length=40), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["judge_id"],
            ["judges.id"],
            name="fk_draws_judge_id",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "reference_year BETWEEN 1900 AND 9999",
            name="ck_draws_reference_year_range",
        ),
    )
    op.create_index(
        "ix_draws_reference_year", "draws", ["reference_year"], unique=False
    )

    op.create_table(
        "draw_assignments",
        _uuid_column("id", primary_key=True, nullable=False),
        _uuid_column("draw_id", nullable=False),
        _uuid_column("juror_id", nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(name="assignment_role", create_type=False),
            nullable=False,
        ),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ["draw_id"],
            ["draws.id"],
            name="fk_draw_assignments_draw_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["juror_id"], ["jurors.id"], name="fk_draw_assignments_juror_id"
        ),
        sa.UniqueConstraint(
            "draw_id", "juror_id", name="uq_draw_assignments_draw_juror"
        ),
    )

    op.create_table(
        "ballots",
        _uuid_column("id", primary_key=True, nullable=False),
        _uuid_column("draw_id", nullable=False),
        _uuid_column("juror_id", nullable=False),
        sa.Column("sequence_number", sa.Integer(), nullable=False),
        sa.Column("barcode", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="ballot_status", create_type=False),
            nullable=False,
        ),
        sa.Column("printed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ["draw_id"],
            ["draws.id"],
            name="fk_ballots_draw_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(["juror_id"], ["jurors.id"], name="fk_ballots_juror_id"),
        sa.UniqueConstraint(
            "draw_id", "sequence_number", name="uq_ballots_draw_sequence_number"
        ),
        sa.UniqueConstraint("draw_id", "juror_id", name="uq_ballots_draw_juror"),
        sa.CheckConstraint(
            "sequence_number > 0",
            name="ck_ballots_sequence_number_positive",
        ),
    )

    op.create_table(
        "last_service_marks",
        _uuid_column("id", primary_key=True, nullable=False),
        _uuid_column("draw_id", nullable=False),
        _uuid_column("juror_id", nullable=False),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ["draw_id"],
            ["draws.id"],
            name="fk_last_service_marks_draw_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["juror_id"], ["jurors.id"], name="fk_last_service_marks_juror_id"
        ),
        sa.UniqueConstraint(
            "draw_id", "juror_id", name="uq_last_service_marks_draw_juror"
        ),
    )


def downgrade() -> None:
    """Revert schema upgrades."""
    op.drop_table("last_service_marks")
    op.drop_table("ballots")
    op.drop_table("draw_assignments")
    op.drop_index("ix_draws_reference_year", table_name="draws")
    op.drop_table("draws")
    op.drop_table("judges")
    op.drop_index("ix_jurors_full_name", table_name="jurors")
    op.drop_index("ix_jurors_status_reason_suspended_until", table_name="jurors")
    op.drop_table("jurors")
    op.drop_table("institutions")

    bind = op.get_bind()
    for enum_type in reversed(ENUMS):
        enum_type.drop(bind, checkfirst=True)
