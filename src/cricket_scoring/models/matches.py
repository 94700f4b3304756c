"""Match model for the scoring database."""

from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from ..scoring.types import MatchStatus, Side, TossDecision
from .base import Base


class Match(Base):
    """Match model: the aggregate root for players, innings and ball events."""

    __tablename__ = "matches"

    # Teams and format
    team_a_name = Column(String(100), nullable=False)
    team_b_name = Column(String(100), nullable=False)
    total_overs = Column(Integer, nullable=False, default=20)
    location = Column(String(200), nullable=True)

    # Scorer access
    passcode_hash = Column(String(255), nullable=False)

    # Lifecycle
    status = Column(SQLEnum(MatchStatus), nullable=False, default=MatchStatus.UPCOMING, index=True)
    toss_winner = Column(SQLEnum(Side), nullable=True)
    toss_decision = Column(SQLEnum(TossDecision), nullable=True)

    # Result
    winner = Column(SQLEnum(Side), nullable=True)
    result_summary = Column(Text, nullable=True)

    # Soft delete
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    players = relationship("Player", back_populates="match", order_by="Player.batting_order")
    innings = relationship("Innings", back_populates="match", order_by="Innings.innings_number")

    __table_args__ = (
        Index("idx_match_deleted_created", "is_deleted", "created_at"),
    )

    @property
    def is_completed(self) -> bool:
        """Check if match is completed."""
        return self.status == MatchStatus.COMPLETED

    @property
    def team_names(self) -> dict:
        return {Side.A: self.team_a_name, Side.B: self.team_b_name}

    def __repr__(self) -> str:
        return f"<Match({self.team_a_name} vs {self.team_b_name}, {self.total_overs} ov, {self.status})>"
