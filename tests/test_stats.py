"""Tests for batting, bowling and innings statistics."""

from __future__ import annotations

from cricket_scoring.scoring.stats import (
    available_batters,
    compute_batsman_stats,
    compute_bowler_stats,
    current_partnership,
    extras_breakdown,
    fall_of_wickets,
)
from cricket_scoring.scoring.types import Side
from tests.helpers import make_event, over_of


def by_id(stats):
    return {s.player_id: s for s in stats}


class TestBattingStats:
    def test_runs_balls_and_boundaries(self, roster):
        events = [
            make_event(runs_scored=4, total_runs=4, is_boundary=True),
            make_event(runs_scored=6, total_runs=6, is_boundary=True),
            make_event(runs_scored=1, total_runs=1),
            make_event(runs_scored=0, total_runs=0),
        ]
        alice = by_id(compute_batsman_stats(events, roster, Side.A))[1]
        assert (alice.runs, alice.balls, alice.fours, alice.sixes) == (11, 4, 1, 1)
        assert alice.strike_rate == 275.0
        assert not alice.is_out

    def test_wides_are_not_faced(self, roster):
        events = [
            make_event(extra_type="wide", is_extra=True, extra_runs=1, total_runs=1),
            make_event(runs_scored=2, total_runs=2),
        ]
        alice = by_id(compute_batsman_stats(events, roster, Side.A))[1]
        assert alice.balls == 1
        assert alice.runs == 2

    def test_byes_count_as_runs_faced(self, roster):
        events = [make_event(extra_type="bye", is_extra=True, runs_scored=4, total_runs=4)]
        alice = by_id(compute_batsman_stats(events, roster, Side.A))[1]
        assert alice.runs == 4
        assert alice.fours == 0
        assert alice.balls == 1

    def test_dismissal(self, roster):
        events = [make_event(is_wicket=True, wicket_type="bowled")]
        alice = by_id(compute_batsman_stats(events, roster, Side.A))[1]
        assert alice.is_out
        assert alice.dismissal_text == "bowled b Xena"

    def test_undone_events_ignored(self, roster):
        events = [make_event(runs_scored=6, total_runs=6, is_boundary=True, is_undone=True)]
        alice = by_id(compute_batsman_stats(events, roster, Side.A))[1]
        assert alice.runs == 0
        assert alice.balls == 0
        assert alice.strike_rate == 0.0


class TestBowlingStats:
    def test_figures_and_economy(self, roster):
        events = over_of(11, 0, runs=(1, 0, 4, 0, 0, 1))
        xena = by_id(compute_bowler_stats(events, roster, Side.B))[11]
        assert (xena.overs, xena.balls, xena.runs, xena.maidens) == ("1.0", 6, 6, 0)
        assert xena.economy == 6.0

    def test_run_out_not_credited(self, roster):
        events = [
            make_event(is_wicket=True, wicket_type="run_out"),
            make_event(ball_number=2, batsman_id=2, is_wicket=True, wicket_type="caught"),
        ]
        xena = by_id(compute_bowler_stats(events, roster, Side.B))[11]
        assert xena.wickets == 1

    def test_maiden(self, roster):
        events = over_of(11, 0) + over_of(12, 1, runs=(0, 0, 1, 0, 0, 0))
        stats = by_id(compute_bowler_stats(events, roster, Side.B))
        assert stats[11].maidens == 1
        assert stats[12].maidens == 0

    def test_wide_spoils_maiden(self, roster):
        wide = make_event(over_number=0, bowler_id=11, extra_type="wide", is_extra=True, extra_runs=1, total_runs=1)
        xena = by_id(compute_bowler_stats(over_of(11, 0) + [wide], roster, Side.B))[11]
        assert xena.maidens == 0
        assert xena.runs == 1
        assert xena.balls == 6

    def test_incomplete_over_is_not_a_maiden(self, roster):
        events = over_of(11, 0)[:5]
        xena = by_id(compute_bowler_stats(events, roster, Side.B))[11]
        assert xena.maidens == 0

    def test_byes_count_against_bowler(self, roster):
        events = over_of(11, 0)[:5] + [
            make_event(ball_number=6, extra_type="leg_bye", is_extra=True, runs_scored=2, total_runs=2)
        ]
        xena = by_id(compute_bowler_stats(events, roster, Side.B))[11]
        assert xena.runs == 2
        assert xena.maidens == 0

    def test_bowlers_without_deliveries_omitted(self, roster):
        stats = compute_bowler_stats(over_of(11, 0), roster, Side.B)
        assert [s.player_id for s in stats] == [11]


class TestInningsStats:
    def test_fall_of_wickets(self, roster):
        events = [
            make_event(runs_scored=4, total_runs=4, is_boundary=True),
            make_event(ball_number=2, is_wicket=True, wicket_type="bowled"),
            make_event(ball_number=3, batsman_id=3, runs_scored=2, total_runs=2),
            make_event(ball_number=4, batsman_id=3, is_wicket=True, wicket_type="lbw"),
        ]
        falls = fall_of_wickets(events, roster)
        assert [(f.wicket_number, f.score, f.player_name, f.over) for f in falls] == [
            (1, 4, "Alice", "0.2"),
            (2, 6, "Cara", "0.4"),
        ]

    def test_partnership_since_last_wicket(self):
        events = [
            make_event(runs_scored=4, total_runs=4),
            make_event(is_wicket=True, wicket_type="bowled"),
            make_event(batsman_id=3, runs_scored=1, total_runs=1),
            make_event(batsman_id=2, extra_type="wide", is_extra=True, extra_runs=1, total_runs=1),
        ]
        partnership = current_partnership(events)
        assert partnership.runs == 2
        assert partnership.balls == 1

    def test_extras_breakdown(self):
        events = [
            make_event(extra_type="wide", is_extra=True, extra_runs=2, total_runs=2),
            make_event(extra_type="no_ball", is_extra=True, runs_scored=1, extra_runs=1, total_runs=2),
            make_event(extra_type="bye", is_extra=True, runs_scored=1, total_runs=1),
            make_event(extra_type="leg_bye", is_extra=True, runs_scored=3, total_runs=3),
        ]
        extras = extras_breakdown(events)
        assert (extras.wides, extras.no_balls, extras.byes, extras.leg_byes) == (2, 1, 1, 3)
        assert extras.total == 7

    def test_available_batters(self, roster):
        events = [make_event(is_wicket=True, wicket_type="bowled")]
        available = available_batters(roster, Side.A, events, occupied=(2, None))
        assert [p.name for p in available] == ["Cara"]
