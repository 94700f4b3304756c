"""Pure scoring core: state machine, statistics, formatting and lifecycle rules."""

from .commentary import generate_commentary
from .formatting import (
    current_over_number,
    current_run_rate,
    format_ball_display,
    format_overs,
    required_run_rate,
    this_over_balls,
)
from .lifecycle import (
    MatchResult,
    chase_completed,
    chase_result,
    compute_result,
    ensure_can_start_innings,
    ensure_transition,
    innings_end_reached,
    target_for,
)
from .stats import compute_batsman_stats, compute_bowler_stats
from .state import (
    BallRecord,
    Delivery,
    InningsDelta,
    InningsState,
    derive_innings_state,
    record_ball,
    undo_last_ball,
)
from .types import (
    Assigned,
    ExtraType,
    Highlight,
    MatchStatus,
    Side,
    TossDecision,
    Unassigned,
    WicketType,
)

__all__ = [
    "generate_commentary",
    "current_over_number",
    "current_run_rate",
    "format_ball_display",
    "format_overs",
    "required_run_rate",
    "this_over_balls",
    "MatchResult",
    "chase_completed",
    "chase_result",
    "compute_result",
    "ensure_can_start_innings",
    "ensure_transition",
    "innings_end_reached",
    "target_for",
    "compute_batsman_stats",
    "compute_bowler_stats",
    "BallRecord",
    "Delivery",
    "InningsDelta",
    "InningsState",
    "derive_innings_state",
    "record_ball",
    "undo_last_ball",
    "Assigned",
    "ExtraType",
    "Highlight",
    "MatchStatus",
    "Side",
    "TossDecision",
    "Unassigned",
    "WicketType",
]
