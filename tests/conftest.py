"""Shared test fixtures for the live scoring tests."""

from __future__ import annotations

import pytest

from cricket_scoring.config import settings
from cricket_scoring.database import configure_database, create_tables, drop_tables, get_session
from cricket_scoring.schemas import MatchCreate
from cricket_scoring.scoring.types import Assigned, RosterPlayer, Side
from cricket_scoring.scoring.state import InningsState
from cricket_scoring.services import MatchService

PASSCODE = "1234"


@pytest.fixture(autouse=True)
def fast_passcode_hashing(monkeypatch):
    """Keep PBKDF2 cheap in tests."""
    monkeypatch.setattr(settings.scoring, "passcode_hash_iterations", 1000)


@pytest.fixture
def roster() -> list:
    """Two small sides: 1-3 bat for side A, 11-13 bowl for side B."""
    return [
        RosterPlayer(1, "Alice", Side.A.value, 1),
        RosterPlayer(2, "Bella", Side.A.value, 2),
        RosterPlayer(3, "Cara", Side.A.value, 3),
        RosterPlayer(11, "Xena", Side.B.value, 1),
        RosterPlayer(12, "Yara", Side.B.value, 2),
        RosterPlayer(13, "Zoe", Side.B.value, 3),
    ]


@pytest.fixture
def opening_state() -> InningsState:
    """Innings 1 with Alice on strike, Bella at the other end and Xena bowling."""
    return InningsState(
        innings_number=1,
        striker=Assigned(1),
        non_striker=Assigned(2),
        bowler=Assigned(11),
    )


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    configure_database("sqlite://")
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def session(db):
    with get_session() as session:
        yield session


def match_payload(**overrides) -> dict:
    payload = {
        "team_a_name": "Thunder",
        "team_b_name": "Strikers",
        "total_overs": 20,
        "location": "Test Ground",
        "passcode": PASSCODE,
        "players_a": ["A1", "A2", "A3", "A4", "A5"],
        "players_b": ["B1", "B2", "B3", "B4", "B5"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_match(session):
    """Factory creating a match in the test session; returns its id."""

    def _make(**overrides) -> int:
        match = MatchService(session).create_match(MatchCreate(**match_payload(**overrides)))
        return match.id

    return _make
