"""Human-readable commentary for a single delivery."""

from __future__ import annotations

from typing import Any

from .types import ExtraType, enum_value


def generate_commentary(event: Any, batsman: Any, bowler: Any) -> str:
    """Describe ``event`` using the striker and bowler names.

    ``batsman`` and ``bowler`` only need a ``name`` attribute.
    """
    over = f"{event.over_number}.{event.ball_number}"
    extra_type = enum_value(event.extra_type)

    if event.is_wicket:
        kind = enum_value(event.wicket_type) or "out"
        return f"{over} - OUT! {batsman.name} {kind}. {bowler.name} strikes!"
    if extra_type == ExtraType.WIDE.value:
        return f"{over} - Wide ball, {event.extra_runs} extra run(s)"
    if extra_type == ExtraType.NO_BALL.value:
        return f"{over} - No ball! {event.runs_scored} run(s) scored"
    if extra_type == ExtraType.BYE.value:
        return f"{over} - {event.runs_scored} bye(s) to {batsman.name}"
    if extra_type == ExtraType.LEG_BYE.value:
        return f"{over} - {event.runs_scored} leg bye(s) off {batsman.name}"
    if event.runs_scored == 6:
        return f"{over} - SIX! {batsman.name} smashes {bowler.name} for a maximum!"
    if event.runs_scored == 4:
        return f"{over} - FOUR! {batsman.name} finds the boundary off {bowler.name}"
    if event.runs_scored == 0:
        return f"{over} - Dot ball. {bowler.name} to {batsman.name}, no run"
    return f"{over} - {batsman.name} takes {event.runs_scored} run(s) off {bowler.name}"
