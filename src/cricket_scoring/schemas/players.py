"""Pydantic schemas for player data."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..scoring.types import Side


class PlayerResponse(BaseModel):
    """Schema for player response data."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Player ID")
    match_id: int
    name: str
    team: Side
    batting_order: Optional[int] = None
