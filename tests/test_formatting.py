"""Tests for overs notation, run rates and ball labels."""

from __future__ import annotations

import pytest

from cricket_scoring.scoring.formatting import (
    current_over_number,
    current_run_rate,
    format_ball_display,
    format_overs,
    overs_as_float,
    required_run_rate,
    this_over_balls,
)
from tests.helpers import make_event


class TestOvers:
    @pytest.mark.parametrize("balls,expected", [(0, "0.0"), (5, "0.5"), (6, "1.0"), (20, "3.2"), (120, "20.0")])
    def test_format_overs(self, balls, expected):
        assert format_overs(balls) == expected

    def test_overs_as_float(self):
        assert overs_as_float(22) == 3.4


class TestRunRates:
    def test_run_rate_before_first_ball(self):
        assert current_run_rate(0, 0) == "0.00"

    def test_run_rate(self):
        assert current_run_rate(12, 12) == "6.00"
        assert current_run_rate(25, 20) == "7.50"

    def test_required_run_rate(self):
        assert required_run_rate(121, 100, 30) == "4.20"

    def test_required_run_rate_no_balls_left(self):
        assert required_run_rate(121, 100, 0) == "0.00"


class TestBallDisplay:
    def test_labels(self):
        assert format_ball_display(make_event(runs_scored=4, total_runs=4)) == "4"
        assert format_ball_display(make_event(runs_scored=0, total_runs=0)) == "0"
        assert format_ball_display(make_event(is_wicket=True, wicket_type="bowled")) == "W"

    def test_extra_labels(self):
        wide = make_event(extra_type="wide", is_extra=True, extra_runs=1, total_runs=1)
        no_ball = make_event(extra_type="no_ball", is_extra=True, runs_scored=2, extra_runs=1, total_runs=3)
        bye = make_event(extra_type="bye", is_extra=True, runs_scored=2, total_runs=2)
        leg_bye = make_event(extra_type="leg_bye", is_extra=True, runs_scored=1, total_runs=1)
        assert format_ball_display(wide) == "1Wd"
        assert format_ball_display(no_ball) == "3Nb"
        assert format_ball_display(bye) == "2B"
        assert format_ball_display(leg_bye) == "1Lb"


class TestOverTracking:
    def test_current_over_before_first_ball(self):
        assert current_over_number([]) == 0

    def test_current_over_after_complete_over(self):
        events = [make_event(over_number=0, ball_number=i) for i in range(1, 7)]
        assert current_over_number(events) == 0
        events.append(make_event(over_number=1, ball_number=1))
        assert current_over_number(events) == 1

    def test_this_over_skips_undone(self):
        events = [
            make_event(over_number=1, ball_number=1, runs_scored=1, total_runs=1),
            make_event(over_number=1, ball_number=2, runs_scored=6, total_runs=6, is_undone=True),
            make_event(over_number=0, ball_number=6),
        ]
        assert [format_ball_display(e) for e in this_over_balls(events, 1)] == ["1"]
