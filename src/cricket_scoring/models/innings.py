"""Innings model for the scoring database."""

from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Float, ForeignKey, Index, Integer, func
from sqlalchemy.orm import relationship

from ..scoring.formatting import current_run_rate, format_overs
from ..scoring.types import Side
from .base import Base


class Innings(Base):
    """Innings model holding the running aggregate and the players on the field."""

    __tablename__ = "innings"

    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False, index=True)
    innings_number = Column(Integer, nullable=False)  # 1 or 2
    batting_team = Column(SQLEnum(Side), nullable=False)
    bowling_team = Column(SQLEnum(Side), nullable=False)

    # Running aggregate
    total_runs = Column(Integer, default=0, nullable=False)
    total_wickets = Column(Integer, default=0, nullable=False)
    total_balls = Column(Integer, default=0, nullable=False)  # legal deliveries only
    total_overs_bowled = Column(Float, default=0.0, nullable=False)
    total_extras = Column(Integer, default=0, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)

    # Players on the field (null until the scorer selects them)
    striker_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    non_striker_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    current_bowler_id = Column(Integer, ForeignKey("players.id"), nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    match = relationship("Match", back_populates="innings")
    ball_events = relationship("BallEvent", back_populates="innings", order_by="BallEvent.id")

    __table_args__ = (
        Index("idx_innings_match_number", "match_id", "innings_number", unique=True),
    )

    @property
    def overs(self) -> str:
        return format_overs(self.total_balls or 0)

    @property
    def run_rate(self) -> str:
        return current_run_rate(self.total_runs or 0, self.total_balls or 0)

    def __repr__(self) -> str:
        return f"<Innings({self.innings_number}, {self.total_runs}/{self.total_wickets} in {self.overs})>"
