"""Tests for delivery commentary."""

from __future__ import annotations

from cricket_scoring.scoring.commentary import generate_commentary
from cricket_scoring.scoring.types import RosterPlayer
from tests.helpers import make_event

ALICE = RosterPlayer(1, "Alice", "a")
XENA = RosterPlayer(11, "Xena", "b")


def describe(**overrides) -> str:
    return generate_commentary(make_event(**overrides), ALICE, XENA)


class TestCommentary:
    def test_wicket(self):
        text = describe(over_number=3, ball_number=4, is_wicket=True, wicket_type="caught")
        assert text == "3.4 - OUT! Alice caught. Xena strikes!"

    def test_wide(self):
        assert describe(extra_type="wide", extra_runs=1, total_runs=1) == "0.1 - Wide ball, 1 extra run(s)"

    def test_no_ball(self):
        text = describe(extra_type="no_ball", runs_scored=2, extra_runs=1, total_runs=3)
        assert text == "0.1 - No ball! 2 run(s) scored"

    def test_six_and_four(self):
        assert describe(runs_scored=6, total_runs=6) == "0.1 - SIX! Alice smashes Xena for a maximum!"
        assert describe(runs_scored=4, total_runs=4) == "0.1 - FOUR! Alice finds the boundary off Xena"

    def test_dot_and_runs(self):
        assert describe() == "0.1 - Dot ball. Xena to Alice, no run"
        assert describe(runs_scored=2, total_runs=2) == "0.1 - Alice takes 2 run(s) off Xena"

    def test_byes(self):
        assert describe(extra_type="bye", runs_scored=2, total_runs=2) == "0.1 - 2 bye(s) to Alice"
