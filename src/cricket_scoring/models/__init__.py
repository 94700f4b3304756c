"""Database models for the live scoring system."""

from .base import Base
from .matches import Match
from .players import Player
from .innings import Innings
from .ball_events import BallEvent

__all__ = [
    "Base",
    "Match",
    "Player",
    "Innings",
    "BallEvent",
]
