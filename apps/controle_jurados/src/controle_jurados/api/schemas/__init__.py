"""API request and response schemas."""

from controle_jurados.api.schemas.ballots import BallotListResponse, BallotResponse
from controle_jurados.api.schemas.draws import (
    AssignmentResponse,
    DrawResponse,
)
from controle_jurados.api.schemas.judges import JudgeResponse
from controle_jurados.api.schemas.jurors import JurorListResponse, JurorResponse

__all__ = [
    "AssignmentResponse",
    "BallotListResponse",
    "BallotResponse",
    "DrawResponse",
    "JudgeResponse",
    "JurorListResponse",
    "JurorResponse",
]
