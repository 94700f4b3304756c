"""Pydantic schemas for ball event data."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BallEventResponse(BaseModel):
    """Schema for ball event response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Ball event ID")
    match_id: int
    innings_id: int
    over_number: int
    ball_number: int
    batsman_id: int
    non_striker_id: Optional[int] = None
    bowler_id: int
    runs_scored: int
    is_extra: bool
    extra_type: Optional[str] = None
    extra_runs: int
    is_wicket: bool
    wicket_type: Optional[str] = None
    dismissed_player_id: Optional[int] = None
    is_boundary: bool
    total_runs: int
    commentary: Optional[str] = None
    is_undone: bool
    created_at: Optional[datetime] = None
