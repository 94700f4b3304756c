"""Assemble a full scorecard view from a match snapshot."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

from .formatting import (
    current_over_number,
    current_run_rate,
    format_ball_display,
    format_overs,
    required_run_rate,
    this_over_balls,
)
from .lifecycle import target_for
from .stats import (
    available_batters,
    compute_batsman_stats,
    compute_bowler_stats,
    current_partnership,
    extras_breakdown,
    fall_of_wickets,
)
from .types import BALLS_PER_OVER, Side, active_events, enum_value, find_player

COMMENTARY_FEED_LENGTH = 20


def _name(roster: List[Any], player_id: Optional[int]) -> Optional[str]:
    player = find_player(roster, player_id)
    return player.name if player else None


def innings_scorecard(
    innings: Any,
    events: Iterable[Any],
    roster: Iterable[Any],
    total_overs: int,
    first_innings_runs: Optional[int] = None,
) -> Dict[str, Any]:
    """Scorecard for one innings as plain data."""
    roster = list(roster)
    events = [e for e in events if e.innings_id == innings.id]
    active = active_events(events)
    batting = Side(enum_value(innings.batting_team))
    bowling = Side(enum_value(innings.bowling_team))

    target = None
    rrr = None
    if innings.innings_number == 2 and first_innings_runs is not None:
        target = target_for(first_innings_runs)
        remaining = total_overs * BALLS_PER_OVER - innings.total_balls
        rrr = required_run_rate(target, innings.total_runs, remaining)

    over = current_over_number(active)
    extras = extras_breakdown(active)

    return {
        "innings_id": innings.id,
        "innings_number": innings.innings_number,
        "batting_team": batting.value,
        "bowling_team": bowling.value,
        "score": f"{innings.total_runs}/{innings.total_wickets}",
        "overs": format_overs(innings.total_balls),
        "is_completed": bool(innings.is_completed),
        "run_rate": current_run_rate(innings.total_runs, innings.total_balls),
        "target": target,
        "required_run_rate": rrr,
        "striker": _name(roster, innings.striker_id),
        "non_striker": _name(roster, innings.non_striker_id),
        "bowler": _name(roster, innings.current_bowler_id),
        "batting": [asdict(s) for s in compute_batsman_stats(active, roster, batting)],
        "bowling": [asdict(s) for s in compute_bowler_stats(active, roster, bowling)],
        "extras": {**asdict(extras), "total": extras.total},
        "fall_of_wickets": [asdict(f) for f in fall_of_wickets(active, roster)],
        "partnership": asdict(current_partnership(active)),
        "this_over": [format_ball_display(e) for e in this_over_balls(active, over)],
        "available_batters": [
            p.name for p in available_batters(
                roster, batting, active, (innings.striker_id, innings.non_striker_id)
            )
        ],
        "commentary": [e.commentary for e in reversed(active) if e.commentary][:COMMENTARY_FEED_LENGTH],
    }


def match_scorecard(match: Any, players: Iterable[Any], innings: Iterable[Any], events: Iterable[Any]) -> Dict[str, Any]:
    players = list(players)
    innings = sorted(innings, key=lambda i: i.innings_number)
    events = list(events)

    first_runs = innings[0].total_runs if innings and innings[0].is_completed else None
    return {
        "match_id": match.id,
        "team_a_name": match.team_a_name,
        "team_b_name": match.team_b_name,
        "status": enum_value(match.status),
        "result_summary": match.result_summary,
        "innings": [
            innings_scorecard(inn, events, players, match.total_overs, first_runs)
            for inn in innings
        ],
    }
