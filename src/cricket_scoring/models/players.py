"""Player model for the scoring database."""

from sqlalchemy import Column, Enum as SQLEnum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from ..scoring.types import Side
from .base import Base


class Player(Base):
    """A named player on one side of one match."""

    __tablename__ = "players"

    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    team = Column(SQLEnum(Side), nullable=False)
    batting_order = Column(Integer, nullable=True)

    match = relationship("Match", back_populates="players")

    __table_args__ = (
        Index("idx_player_match_team", "match_id", "team"),
    )

    def __repr__(self) -> str:
        return f"<Player(name='{self.name}', team='{self.team}')>"
