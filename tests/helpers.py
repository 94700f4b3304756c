"""Builders shared by the pure scoring tests."""

from __future__ import annotations

from cricket_scoring.scoring.state import BallRecord


def make_event(**overrides) -> BallRecord:
    """A dot ball by Xena (11) to Alice (1) unless overridden."""
    fields = dict(
        over_number=0,
        ball_number=1,
        batsman_id=1,
        non_striker_id=2,
        bowler_id=11,
        runs_scored=0,
        is_extra=False,
        extra_type=None,
        extra_runs=0,
        is_wicket=False,
        wicket_type=None,
        dismissed_player_id=None,
        is_boundary=False,
        total_runs=0,
    )
    fields.update(overrides)
    if fields["is_wicket"] and fields["dismissed_player_id"] is None:
        fields["dismissed_player_id"] = fields["batsman_id"]
    return BallRecord(**fields)


def over_of(bowler_id: int, over_number: int, runs=(0, 0, 0, 0, 0, 0), batsman_id: int = 1) -> list:
    """Six legal deliveries from one bowler with the given bat runs."""
    return [
        make_event(
            over_number=over_number,
            ball_number=i + 1,
            batsman_id=batsman_id,
            bowler_id=bowler_id,
            runs_scored=r,
            total_runs=r,
            is_boundary=r in (4, 6),
        )
        for i, r in enumerate(runs)
    ]
