"""Tests for the operator CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cricket_scoring.cli.main import app
from tests.conftest import PASSCODE

runner = CliRunner()


def invoke(*args):
    return runner.invoke(app, list(args))


@pytest.fixture
def created_match(db):
    result = invoke(
        "create-match",
        "--team-a", "Thunder",
        "--team-b", "Strikers",
        "--players-a", "A1,A2,A3",
        "--players-b", "B1,B2,B3",
        "--overs", "5",
        "--passcode", PASSCODE,
    )
    assert result.exit_code == 0, result.output
    assert "Match 1 created" in result.output
    return 1


class TestCli:
    def test_list_matches(self, created_match):
        result = invoke("list-matches")
        assert result.exit_code == 0
        assert "Thunder vs Strikers" in result.output

    def test_scoring_session(self, created_match):
        # Side A players are ids 1-3, side B players 4-6
        assert invoke("start-innings", "1", "1", "a", "--passcode", PASSCODE).exit_code == 0
        result = invoke("select", "1", "--striker", "1", "--non-striker", "2", "--bowler", "4", "--passcode", PASSCODE)
        assert result.exit_code == 0, result.output

        result = invoke("ball", "1", "4", "--passcode", PASSCODE)
        assert result.exit_code == 0, result.output
        assert "4/0" in result.output

        result = invoke("ball", "1", "--extra", "wide", "--passcode", PASSCODE)
        assert result.exit_code == 0
        assert "5/0" in result.output

        assert invoke("undo", "1", "--passcode", PASSCODE).exit_code == 0
        result = invoke("show", "1")
        assert result.exit_code == 0
        assert "4/0" in result.output

    def test_wrong_passcode_fails(self, created_match):
        result = invoke("start-innings", "1", "1", "a", "--passcode", "9999")
        assert result.exit_code == 1
        assert "Invalid passcode" in result.output

    def test_ball_without_players_fails(self, created_match):
        invoke("start-innings", "1", "1", "a", "--passcode", PASSCODE)
        result = invoke("ball", "1", "1", "--passcode", PASSCODE)
        assert result.exit_code == 1
        assert "select striker and bowler" in result.output

    def test_repair(self, created_match):
        invoke("start-innings", "1", "1", "a", "--passcode", PASSCODE)
        result = invoke("repair", "1", "--passcode", PASSCODE)
        assert result.exit_code == 0
        assert "Repair of match 1" in result.output

    def test_delete_match(self, created_match):
        assert invoke("delete-match", "1", "--passcode", PASSCODE).exit_code == 0
        assert invoke("show", "1").exit_code == 1
