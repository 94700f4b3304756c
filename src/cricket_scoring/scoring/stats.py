"""Batting, bowling and innings statistics derived from ball events.

Every function here accepts the full event list for an innings (undone events
included) and only ever looks at the active subset.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Set

from .formatting import format_overs
from .types import (
    BALLS_PER_OVER,
    ExtraType,
    WicketType,
    Side,
    active_events,
    enum_value,
    find_player,
    legal_ball_count,
    players_on_side,
)


@dataclass
class BatsmanStats:
    player_id: int
    name: str
    runs: int
    balls: int
    fours: int
    sixes: int
    strike_rate: float
    is_out: bool
    dismissal_text: str


@dataclass
class BowlerStats:
    player_id: int
    name: str
    overs: str
    balls: int
    maidens: int
    runs: int
    wickets: int
    economy: float


@dataclass
class FallOfWicket:
    wicket_number: int
    score: int
    player_id: Optional[int]
    player_name: str
    over: str


@dataclass
class Partnership:
    runs: int
    balls: int


@dataclass
class ExtrasBreakdown:
    wides: int = 0
    no_balls: int = 0
    byes: int = 0
    leg_byes: int = 0

    @property
    def total(self) -> int:
        return self.wides + self.no_balls + self.byes + self.leg_byes


def compute_batsman_stats(
    ball_events: Iterable[Any], roster: Iterable[Any], side: Side
) -> List[BatsmanStats]:
    """Batting figures for every player on ``side``.

    Wides are not balls faced. A player is out when an active wicket event names
    them as the dismissed player.
    """
    roster = list(roster)
    active = active_events(ball_events)
    results = []

    for player in players_on_side(roster, side):
        faced = [
            e for e in active
            if e.batsman_id == player.id and enum_value(e.extra_type) != ExtraType.WIDE.value
        ]
        runs = sum(e.runs_scored for e in faced)
        balls = len(faced)
        fours = sum(1 for e in faced if e.runs_scored == 4 and e.is_boundary)
        sixes = sum(1 for e in faced if e.runs_scored == 6 and e.is_boundary)

        dismissal = next(
            (e for e in active if e.is_wicket and e.dismissed_player_id == player.id), None
        )
        dismissal_text = ""
        if dismissal is not None:
            bowler = find_player(roster, dismissal.bowler_id)
            bowler_name = bowler.name if bowler else ""
            dismissal_text = f"{enum_value(dismissal.wicket_type)} b {bowler_name}"

        results.append(BatsmanStats(
            player_id=player.id,
            name=player.name,
            runs=runs,
            balls=balls,
            fours=fours,
            sixes=sixes,
            strike_rate=(runs / balls) * 100 if balls > 0 else 0.0,
            is_out=dismissal is not None,
            dismissal_text=dismissal_text,
        ))

    return results


def _count_maidens(bowled: List[Any]) -> int:
    overs: "OrderedDict[int, List[Any]]" = OrderedDict()
    for event in bowled:
        overs.setdefault(event.over_number, []).append(event)

    maidens = 0
    for events in overs.values():
        if legal_ball_count(events) != BALLS_PER_OVER:
            continue
        if sum(e.total_runs for e in events) == 0:
            maidens += 1
    return maidens


def compute_bowler_stats(
    ball_events: Iterable[Any], roster: Iterable[Any], side: Side
) -> List[BowlerStats]:
    """Bowling figures for every player on ``side`` who has bowled or taken a wicket.

    Run-outs are not credited to the bowler. Runs conceded include every extra
    bowled, byes and leg-byes included.
    """
    active = active_events(ball_events)
    results = []

    for player in players_on_side(roster, side):
        bowled = [e for e in active if e.bowler_id == player.id]
        legal_balls = legal_ball_count(bowled)
        runs = sum(e.total_runs for e in bowled)
        wickets = sum(
            1 for e in bowled
            if e.is_wicket and enum_value(e.wicket_type) != WicketType.RUN_OUT.value
        )
        if legal_balls == 0 and wickets == 0:
            continue

        results.append(BowlerStats(
            player_id=player.id,
            name=player.name,
            overs=format_overs(legal_balls),
            balls=legal_balls,
            maidens=_count_maidens(bowled),
            runs=runs,
            wickets=wickets,
            economy=runs / (legal_balls / BALLS_PER_OVER) if legal_balls > 0 else 0.0,
        ))

    return results


def fall_of_wickets(ball_events: Iterable[Any], roster: Iterable[Any]) -> List[FallOfWicket]:
    """Score and over at which each wicket fell, in order."""
    roster = list(roster)
    falls = []
    score = 0
    for event in active_events(ball_events):
        score += event.total_runs
        if not event.is_wicket:
            continue
        dismissed = find_player(roster, event.dismissed_player_id)
        falls.append(FallOfWicket(
            wicket_number=len(falls) + 1,
            score=score,
            player_id=event.dismissed_player_id,
            player_name=dismissed.name if dismissed else "Unknown",
            over=f"{event.over_number}.{event.ball_number}",
        ))
    return falls


def current_partnership(ball_events: Iterable[Any]) -> Partnership:
    """Runs and legal balls since the most recent wicket."""
    active = active_events(ball_events)
    last_wicket = max((i for i, e in enumerate(active) if e.is_wicket), default=-1)
    since = active[last_wicket + 1:]
    return Partnership(
        runs=sum(e.total_runs for e in since),
        balls=legal_ball_count(since),
    )


def extras_breakdown(ball_events: Iterable[Any]) -> ExtrasBreakdown:
    extras = ExtrasBreakdown()
    for event in active_events(ball_events):
        extra_type = enum_value(event.extra_type)
        if extra_type == ExtraType.WIDE.value:
            extras.wides += event.extra_runs
        elif extra_type == ExtraType.NO_BALL.value:
            extras.no_balls += event.extra_runs
        elif extra_type == ExtraType.BYE.value:
            extras.byes += event.runs_scored
        elif extra_type == ExtraType.LEG_BYE.value:
            extras.leg_byes += event.runs_scored
    return extras


def dismissed_player_ids(ball_events: Iterable[Any]) -> Set[int]:
    return {
        e.dismissed_player_id
        for e in active_events(ball_events)
        if e.is_wicket and e.dismissed_player_id is not None
    }


def available_batters(
    roster: Iterable[Any], side: Side, ball_events: Iterable[Any], occupied: Iterable[Optional[int]] = ()
) -> List[Any]:
    """Batters on ``side`` who are neither out nor already at the crease."""
    excluded = dismissed_player_ids(ball_events) | {pid for pid in occupied if pid is not None}
    return [p for p in players_on_side(roster, side) if p.id not in excluded]


__all__ = [
    "BatsmanStats",
    "BowlerStats",
    "FallOfWicket",
    "Partnership",
    "ExtrasBreakdown",
    "compute_batsman_stats",
    "compute_bowler_stats",
    "fall_of_wickets",
    "current_partnership",
    "extras_breakdown",
    "dismissed_player_ids",
    "available_batters",
]
