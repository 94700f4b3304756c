"""Ball event model for the scoring database."""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class BallEvent(Base):
    """One delivery. Append-only: the only mutation ever made is setting ``is_undone``."""

    __tablename__ = "ball_events"

    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False, index=True)
    innings_id = Column(Integer, ForeignKey("innings.id"), nullable=False, index=True)
    over_number = Column(Integer, nullable=False)  # 0-based
    ball_number = Column(Integer, nullable=False)  # 1-6 for legal balls, display index for extras

    # Players involved
    batsman_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    non_striker_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    bowler_id = Column(Integer, ForeignKey("players.id"), nullable=False)

    # Outcome
    runs_scored = Column(Integer, default=0, nullable=False)
    is_extra = Column(Boolean, default=False, nullable=False)
    extra_type = Column(String(10), nullable=True)  # wide, no_ball, bye, leg_bye
    extra_runs = Column(Integer, default=0, nullable=False)
    is_wicket = Column(Boolean, default=False, nullable=False)
    wicket_type = Column(String(20), nullable=True)  # bowled, caught, lbw, run_out, etc.
    dismissed_player_id = Column(Integer, ForeignKey("players.id"), nullable=True)
    is_boundary = Column(Boolean, default=False, nullable=False)
    total_runs = Column(Integer, default=0, nullable=False)

    commentary = Column(Text, nullable=True)
    is_undone = Column(Boolean, default=False, nullable=False)

    innings = relationship("Innings", back_populates="ball_events")

    __table_args__ = (
        Index("idx_ball_innings_active", "innings_id", "is_undone"),
        Index("idx_ball_match_created", "match_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<BallEvent(Over {self.over_number}.{self.ball_number}, {self.total_runs} runs{', W' if self.is_wicket else ''})>"
