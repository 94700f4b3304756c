"""Scoring commands accepted from the scorer.

Every write to a match goes through exactly one of these variants; the
``action`` field tags the variant so a request body parses straight into the
right class.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from ..scoring.types import ExtraType, MatchStatus, Side, WicketType


class CommandBase(BaseModel):
    """Common configuration for scoring commands."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class StartInnings(CommandBase):
    action: Literal["start_innings"] = "start_innings"
    innings_number: int = Field(..., ge=1, le=2, description="1 or 2")
    batting_team: Side = Field(..., description="Side batting in this innings")


class UpdateInnings(CommandBase):
    """Select the players on the field. Omitted slots are left unchanged."""

    action: Literal["update_innings"] = "update_innings"
    innings_id: Optional[int] = Field(None, description="Innings ID, defaults to the current innings")
    striker_id: Optional[int] = Field(None, description="Striker player ID")
    non_striker_id: Optional[int] = Field(None, description="Non-striker player ID")
    current_bowler_id: Optional[int] = Field(None, description="Bowler player ID")

    @model_validator(mode="after")
    def validate_selection(self) -> "UpdateInnings":
        if not {"striker_id", "non_striker_id", "current_bowler_id"} & self.model_fields_set:
            raise ValueError("Select at least one of striker, non-striker or bowler")
        if (
            self.striker_id is not None
            and self.striker_id == self.non_striker_id
        ):
            raise ValueError("Striker and non-striker must be different players")
        return self


class RecordBall(CommandBase):
    action: Literal["record_ball"] = "record_ball"
    innings_id: Optional[int] = Field(None, description="Innings ID, defaults to the current innings")
    runs: int = Field(0, ge=0, le=6, description="Runs off the bat, or byes run")
    extra_type: Optional[ExtraType] = Field(None, description="wide, no_ball, bye or leg_bye")
    extra_runs: int = Field(0, ge=0, le=6, description="Extra runs on top of the penalty")
    is_wicket: bool = Field(False, description="Whether a wicket fell")
    wicket_type: Optional[WicketType] = Field(None, description="How the batter was dismissed")
    dismissed_player_id: Optional[int] = Field(None, description="Defaults to the striker")

    @model_validator(mode="after")
    def validate_wicket(self) -> "RecordBall":
        if self.is_wicket and self.wicket_type is None:
            raise ValueError("Wicket type is required when a wicket falls")
        if not self.is_wicket and (self.wicket_type is not None or self.dismissed_player_id is not None):
            raise ValueError("Wicket details given for a ball without a wicket")
        return self


class UndoBall(CommandBase):
    action: Literal["undo_ball"] = "undo_ball"
    innings_id: Optional[int] = Field(None, description="Innings ID, defaults to the current innings")


class EndInnings(CommandBase):
    action: Literal["end_innings"] = "end_innings"
    innings_id: Optional[int] = Field(None, description="Innings ID, defaults to the current innings")


class CompleteMatch(CommandBase):
    """Close the match by hand, e.g. an abandoned game."""

    action: Literal["complete_match"] = "complete_match"
    winner: Optional[Side] = Field(None, description="Winning side, none for a tie or no result")
    result_summary: str = Field(..., min_length=1, max_length=500)


class UpdateMatchStatus(CommandBase):
    action: Literal["update_match_status"] = "update_match_status"
    status: MatchStatus


class RebuildInnings(CommandBase):
    """Re-derive an innings' totals from its active ball events."""

    action: Literal["rebuild_innings"] = "rebuild_innings"
    innings_id: int


ScoringCommand = Annotated[
    Union[
        StartInnings,
        UpdateInnings,
        RecordBall,
        UndoBall,
        EndInnings,
        CompleteMatch,
        UpdateMatchStatus,
        RebuildInnings,
    ],
    Field(discriminator="action"),
]

scoring_command_adapter = TypeAdapter(ScoringCommand)


def parse_command(data: dict) -> ScoringCommand:
    """Parse a raw command payload into its variant."""
    return scoring_command_adapter.validate_python(data)
