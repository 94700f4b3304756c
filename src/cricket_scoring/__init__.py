"""Live Cricket Scorer - Core package."""

from .config import settings
from .database import configure_database, get_database_engine, get_session

__all__ = ["settings", "configure_database", "get_database_engine", "get_session"]
