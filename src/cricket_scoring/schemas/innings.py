"""Pydantic schemas for innings data."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..scoring.types import Side


class InningsResponse(BaseModel):
    """Schema for innings response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Innings ID")
    match_id: int
    innings_number: int = Field(..., ge=1, le=2)
    batting_team: Side
    bowling_team: Side
    total_runs: int = 0
    total_wickets: int = Field(0, ge=0, le=10)
    total_balls: int = 0
    total_overs_bowled: float = 0.0
    total_extras: int = 0
    is_completed: bool = False
    striker_id: Optional[int] = None
    non_striker_id: Optional[int] = None
    current_bowler_id: Optional[int] = None
    overs: str = Field(..., description="Overs bowled as o.b")
    run_rate: str = Field(..., description="Current run rate")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
