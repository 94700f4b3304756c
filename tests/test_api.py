"""Tests for the HTTP surface."""

from __future__ import annotations

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from cricket_scoring.api import create_app
from cricket_scoring.notifications import notifier
from tests.conftest import PASSCODE

SCORER = {"X-Passcode": PASSCODE}


@pytest.fixture
def client(db):
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def match(client) -> dict:
    """A created match plus a name -> id lookup of its players."""
    response = client.post("/api/matches", json={
        "teamAName": "Thunder",
        "teamBName": "Strikers",
        "totalOvers": 2,
        "passcode": PASSCODE,
        "playersA": ["A1", "A2", "A3"],
        "playersB": ["B1", "B2", "B3"],
    })
    assert response.status_code == 201
    body = response.json()
    detail = client.get(f"/api/matches/{body['id']}").json()
    body["players"] = {p["name"]: p["id"] for p in detail["players"]}
    return body


def score(client, match, payload, headers=SCORER):
    return client.post(f"/api/matches/{match['id']}/score", json=payload, headers=headers)


def start_live(client, match):
    assert score(client, match, {"action": "start_innings", "inningsNumber": 1, "battingTeam": "a"}).status_code == 200
    players = match["players"]
    response = score(client, match, {
        "action": "update_innings",
        "strikerId": players["A1"],
        "nonStrikerId": players["A2"],
        "currentBowlerId": players["B1"],
    })
    assert response.status_code == 200


class TestMatches:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_create_and_fetch(self, client, match):
        assert match["status"] == "upcoming"
        assert "passcode_hash" not in match
        assert "passcode" not in match

        listing = client.get("/api/matches").json()
        assert [m["id"] for m in listing] == [match["id"]]

        detail = client.get(f"/api/matches/{match['id']}").json()
        assert detail["match"]["team_a_name"] == "Thunder"
        assert len(detail["players"]) == 6
        assert detail["innings"] == []

    def test_invalid_match_request(self, client):
        response = client.post("/api/matches", json={
            "teamAName": "Thunder",
            "teamBName": "Strikers",
            "passcode": "12",
            "playersA": ["A1", "A2"],
            "playersB": ["B1", "B2"],
        })
        assert response.status_code == 400
        assert "4-6 digits" in response.json()["error"]

    def test_unknown_match(self, client):
        response = client.get("/api/matches/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Match 999 not found"}

    def test_verify_passcode(self, client, match):
        ok = client.post(f"/api/matches/{match['id']}/verify", json={"passcode": PASSCODE})
        assert ok.status_code == 200
        assert ok.json() == {"valid": True}

        bad = client.post(f"/api/matches/{match['id']}/verify", json={"passcode": "0000"})
        assert bad.status_code == 200
        assert bad.json() == {"valid": False}

        missing = client.post("/api/matches/999/verify", json={"passcode": PASSCODE})
        assert missing.status_code == 404

    def test_delete_match(self, client, match):
        assert client.delete(f"/api/matches/{match['id']}", headers={"X-Passcode": "0000"}).status_code == 401
        assert client.delete(f"/api/matches/{match['id']}", headers=SCORER).status_code == 200
        assert client.get(f"/api/matches/{match['id']}").status_code == 404
        assert client.get("/api/matches").json() == []


class TestScoring:
    def test_score_requires_passcode(self, client, match):
        response = score(client, match, {"action": "start_innings", "inningsNumber": 1, "battingTeam": "a"}, headers={})
        assert response.status_code == 401

    def test_unknown_action(self, client, match):
        response = score(client, match, {"action": "declare"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_ball_before_selection(self, client, match):
        score(client, match, {"action": "start_innings", "inningsNumber": 1, "battingTeam": "a"})
        response = score(client, match, {"action": "record_ball", "runs": 1})
        assert response.status_code == 409
        assert response.json() == {"error": "Please select striker and bowler first"}

    def test_record_and_undo(self, client, match):
        start_live(client, match)
        response = score(client, match, {"action": "record_ball", "runs": 4})
        assert response.status_code == 200
        detail = response.json()
        assert detail["match"]["status"] == "live"
        assert detail["innings"][0]["total_runs"] == 4
        assert detail["innings"][0]["overs"] == "0.1"
        assert [e["runs_scored"] for e in detail["ball_events"]] == [4]

        card = client.get(f"/api/matches/{match['id']}/scorecard").json()
        assert card["innings"][0]["this_over"] == ["4"]
        assert card["innings"][0]["striker"] == "A1"

        undone = score(client, match, {"action": "undo_ball"}).json()
        assert undone["innings"][0]["total_runs"] == 0
        assert undone["ball_events"][0]["is_undone"] is True

        nothing = score(client, match, {"action": "undo_ball"})
        assert nothing.status_code == 409

    def test_wicket_validation(self, client, match):
        start_live(client, match)
        response = score(client, match, {"action": "record_ball", "isWicket": True})
        assert response.status_code == 400
        assert "Wicket type is required" in response.json()["error"]

    def test_illegal_transition(self, client, match):
        response = score(client, match, {"action": "update_match_status", "status": "completed"})
        assert response.status_code == 409

    def test_notifications_published_after_commit(self, client, match):
        start_live(client, match)
        seen = []
        unsubscribe = notifier.subscribe(match["id"], seen.append)
        try:
            score(client, match, {"action": "record_ball", "runs": 6})
        finally:
            unsubscribe()
        assert ("ball_events", "insert", "six") in [(e.table, e.kind, e.highlight.value) for e in seen]


class TestLiveUpdates:
    def test_boundary_forwarded_to_spectators(self, client, match):
        start_live(client, match)
        with client.websocket_connect(f"/api/matches/{match['id']}/live") as websocket:
            assert score(client, match, {"action": "record_ball", "runs": 4}).status_code == 200
            first = websocket.receive_json()
            second = websocket.receive_json()

        assert first == {"match_id": match["id"], "table": "ball_events", "kind": "insert", "highlight": "four"}
        assert (second["table"], second["highlight"]) == ("innings", "none")
        assert notifier.subscriber_count(match["id"]) == 0

    def test_unknown_match_closes_socket(self, client):
        with pytest.raises(WebSocketDisconnect) as excinfo:
            with client.websocket_connect("/api/matches/999/live"):
                pass
        assert excinfo.value.code == 4404
