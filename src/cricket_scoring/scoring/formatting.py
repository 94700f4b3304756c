"""Overs notation, run rates and compact ball labels."""

from __future__ import annotations

from typing import Any, Iterable, List

from .types import BALLS_PER_OVER, ExtraType, active_events, enum_value, legal_ball_count


def format_overs(balls: int) -> str:
    """Render a legal-ball count as ``overs.balls`` (e.g. 20 -> "3.2")."""
    return f"{balls // BALLS_PER_OVER}.{balls % BALLS_PER_OVER}"


def overs_as_float(balls: int) -> float:
    """Overs in the stored decimal-looking form, e.g. 3.4 for 3 overs 4 balls."""
    return float(format_overs(balls))


def current_run_rate(runs: int, balls: int) -> str:
    if balls == 0:
        return "0.00"
    return f"{runs / balls * BALLS_PER_OVER:.2f}"


def required_run_rate(target: int, current_runs: int, balls_remaining: int) -> str:
    if balls_remaining <= 0:
        return "0.00"
    needed = target - current_runs
    return f"{needed / balls_remaining * BALLS_PER_OVER:.2f}"


def format_ball_display(event: Any) -> str:
    """Short label for one delivery as shown in the over strip."""
    extra_type = enum_value(event.extra_type)
    if event.is_wicket:
        return "W"
    if extra_type == ExtraType.WIDE.value:
        return f"{event.total_runs}Wd"
    if extra_type == ExtraType.NO_BALL.value:
        return f"{event.total_runs}Nb"
    if extra_type == ExtraType.BYE.value:
        return f"{event.runs_scored}B"
    if extra_type == ExtraType.LEG_BYE.value:
        return f"{event.runs_scored}Lb"
    return str(event.runs_scored)


def this_over_balls(events: Iterable[Any], over_number: int) -> List[Any]:
    """Active deliveries stamped with ``over_number``, in creation order."""
    return [event for event in active_events(events) if event.over_number == over_number]


def current_over_number(events: Iterable[Any]) -> int:
    """Over containing the latest legal delivery (0 before the first ball)."""
    legal = legal_ball_count(active_events(events))
    if legal == 0:
        return 0
    return (legal - 1) // BALLS_PER_OVER
