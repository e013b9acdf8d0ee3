"""ORM models for the controle_jurados domain."""

from controle_jurados.db.models.ballot import Ballot, BallotStatus
from controle_jurados.db.models.draw import Draw, DrawStatus
from controle_jurados.db.models.draw_assignment import AssignmentRole, DrawAssignment
from controle_jurados.db.models.institution import Institution
from controle_jurados.db.models.judge import Judge, JudgeStatus
from controle_jurados.db.models.juror import (
    PERMANENT_EXCLUSION_REASONS,
    InactivityReason,
    Juror,
    JurorSex,
    JurorStatus,
)
from controle_jurados.db.models.last_service_mark import LastServiceMark

__all__ = [
    "PERMANENT_EXCLUSION_REASONS",
    "AssignmentRole",
    "Ballot",
    "BallotStatus",
    "Draw",
    "DrawAssignment",
    "DrawStatus",
    "InactivityReason",
    "Institution",
    "Judge",
    "JudgeStatus",
    "Juror",
    "JurorSex",
    "JurorStatus",
    "LastServiceMark",
]
