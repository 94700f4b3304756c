"""Services that apply match management and scoring commands to the database."""

from .matches import MatchService
from .scoring import ScoringService

__all__ = ["MatchService", "ScoringService"]
