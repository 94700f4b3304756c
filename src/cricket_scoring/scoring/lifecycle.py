"""Match lifecycle rules: status transitions, innings end and result summaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..exceptions import IllegalTransitionError
from .types import BALLS_PER_OVER, MAX_WICKETS, MatchStatus, Side, enum_value


# Forward-only status graph; a match goes live at most twice (once per innings)
STATUS_TRANSITIONS: Dict[MatchStatus, frozenset] = {
    MatchStatus.UPCOMING: frozenset({MatchStatus.LIVE}),
    MatchStatus.LIVE: frozenset({MatchStatus.INNINGS_BREAK, MatchStatus.COMPLETED}),
    MatchStatus.INNINGS_BREAK: frozenset({MatchStatus.LIVE, MatchStatus.COMPLETED}),
    MatchStatus.COMPLETED: frozenset(),
}

MAX_INNINGS = 2


@dataclass(frozen=True)
class MatchResult:
    winner: Optional[Side]
    summary: str


def can_transition(current: Union[str, MatchStatus], target: Union[str, MatchStatus]) -> bool:
    return MatchStatus(target) in STATUS_TRANSITIONS[MatchStatus(current)]


def ensure_transition(current: Union[str, MatchStatus], target: Union[str, MatchStatus]) -> None:
    if not can_transition(current, target):
        raise IllegalTransitionError(
            f"Cannot move match from '{enum_value(current)}' to '{enum_value(target)}'"
        )


def ensure_can_start_innings(innings_number: int, existing: Iterable[Any]) -> None:
    """Check that ``innings_number`` is the next innings and nothing is in progress."""
    existing = list(existing)
    if innings_number < 1 or innings_number > MAX_INNINGS:
        raise IllegalTransitionError(f"A match has at most {MAX_INNINGS} innings")
    if any(not innings.is_completed for innings in existing):
        raise IllegalTransitionError("Current innings must be completed first")
    if innings_number != len(existing) + 1:
        raise IllegalTransitionError(
            f"Innings {innings_number} cannot start; next innings is {len(existing) + 1}"
        )


def innings_end_reached(state: Any, total_overs: int) -> bool:
    """Overs exhausted or side all out."""
    return state.total_balls >= total_overs * BALLS_PER_OVER or state.total_wickets >= MAX_WICKETS


def target_for(first_innings_runs: int) -> int:
    return first_innings_runs + 1


def chase_completed(state: Any, first_innings_runs: Optional[int]) -> bool:
    return (
        state.innings_number == 2
        and first_innings_runs is not None
        and state.total_runs > first_innings_runs
    )


def team_name(side: Union[str, Side], team_names: Mapping[Side, str]) -> str:
    return team_names[Side(side)]


def chase_result(batting_team: Union[str, Side], wickets: int, team_names: Mapping[Side, str]) -> MatchResult:
    """Result when the side batting second passes the target."""
    side = Side(batting_team)
    return MatchResult(
        winner=side,
        summary=f"{team_name(side, team_names)} won by {MAX_WICKETS - wickets} wicket(s)",
    )


def compute_result(first: Any, second: Any, team_names: Mapping[Side, str]) -> MatchResult:
    """Final result once the second innings has ended.

    ``first`` and ``second`` are innings rows or snapshots carrying
    ``total_runs``, ``total_wickets``, ``batting_team`` and ``bowling_team``.
    """
    first_runs = first.total_runs if first is not None else 0
    if second.total_runs > first_runs:
        return chase_result(second.batting_team, second.total_wickets, team_names)
    if first_runs > second.total_runs:
        side = Side(enum_value(second.bowling_team))
        return MatchResult(
            winner=side,
            summary=f"{team_name(side, team_names)} won by {first_runs - second.total_runs} run(s)",
        )
    return MatchResult(winner=None, summary="Match Tied!")
