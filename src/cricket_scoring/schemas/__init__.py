"""Pydantic schemas for data validation."""

from .ball_events import BallEventResponse
from .commands import (
    CompleteMatch,
    EndInnings,
    RebuildInnings,
    RecordBall,
    ScoringCommand,
    StartInnings,
    UndoBall,
    UpdateInnings,
    UpdateMatchStatus,
    parse_command,
)
from .innings import InningsResponse
from .matches import MatchCreate, MatchDetail, MatchResponse, PasscodeRequest
from .players import PlayerResponse

__all__ = [
    "BallEventResponse",
    "CompleteMatch",
    "EndInnings",
    "RebuildInnings",
    "RecordBall",
    "ScoringCommand",
    "StartInnings",
    "UndoBall",
    "UpdateInnings",
    "UpdateMatchStatus",
    "parse_command",
    "InningsResponse",
    "MatchCreate",
    "MatchDetail",
    "MatchResponse",
    "PasscodeRequest",
    "PlayerResponse",
]
