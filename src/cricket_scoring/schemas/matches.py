"""Pydantic schemas for match data validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..config import settings
from ..exceptions import ValidationError
from ..scoring.types import MatchStatus, Side, TossDecision
from ..security import validate_passcode
from .ball_events import BallEventResponse
from .innings import InningsResponse
from .players import PlayerResponse


class MatchCreate(BaseModel):
    """Schema for creating a new match with both squads.

    Accepts snake_case or the camelCase keys used by the scoring front end
    (``teamAName``, ``playersA``...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    team_a_name: str = Field(..., max_length=100, description="Name of side A")
    team_b_name: str = Field(..., max_length=100, description="Name of side B")
    total_overs: int = Field(
        default_factory=lambda: settings.scoring.default_total_overs,
        ge=1,
        description="Legal overs per innings",
    )
    location: Optional[str] = Field(None, max_length=200, description="Venue")
    passcode: str = Field(..., description="4-6 digit scorer passcode")
    players_a: List[str] = Field(..., description="Side A players in batting order")
    players_b: List[str] = Field(..., description="Side B players in batting order")
    toss_winner: Optional[Side] = Field(None, description="Side that won the toss")
    toss_decision: Optional[TossDecision] = Field(None, description="Toss decision")

    @field_validator("team_a_name", "team_b_name")
    @classmethod
    def validate_team_name(cls, v: str) -> str:
        """Validate that team names are not blank."""
        v = v.strip()
        if not v:
            raise ValueError("Team name must not be empty")
        return v

    @field_validator("total_overs")
    @classmethod
    def validate_total_overs(cls, v: int) -> int:
        if v > settings.scoring.max_total_overs:
            raise ValueError(f"Total overs cannot exceed {settings.scoring.max_total_overs}")
        return v

    @field_validator("passcode")
    @classmethod
    def validate_passcode_format(cls, v: str) -> str:
        try:
            return validate_passcode(v)
        except ValidationError as e:
            raise ValueError(e.message)

    @field_validator("players_a", "players_b")
    @classmethod
    def validate_squad(cls, v: List[str]) -> List[str]:
        """Drop blank names and require a minimum squad size."""
        names = [name.strip() for name in v if name and name.strip()]
        minimum = settings.scoring.min_players_per_side
        if len(names) < minimum:
            raise ValueError(f"Each team needs at least {minimum} players")
        return names

    @model_validator(mode="after")
    def validate_toss(self) -> "MatchCreate":
        if (self.toss_winner is None) != (self.toss_decision is None):
            raise ValueError("Toss winner and toss decision must be given together")
        return self


class PasscodeRequest(BaseModel):
    """Body for passcode verification and match deletion."""

    passcode: str = Field(..., description="Scorer passcode")


class MatchResponse(BaseModel):
    """Schema for match response data. Never exposes the passcode hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Match ID")
    team_a_name: str
    team_b_name: str
    total_overs: int
    location: Optional[str] = None
    status: MatchStatus
    toss_winner: Optional[Side] = None
    toss_decision: Optional[TossDecision] = None
    winner: Optional[Side] = None
    result_summary: Optional[str] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MatchDetail(BaseModel):
    """Full match snapshot: everything a viewer needs to render the scorecard."""

    match: MatchResponse
    players: List[PlayerResponse] = Field(default_factory=list)
    innings: List[InningsResponse] = Field(default_factory=list)
    ball_events: List[BallEventResponse] = Field(default_factory=list)
