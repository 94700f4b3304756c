"""Match management: creation, lookup, passcode checks and soft deletion."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import InvalidCredentialError, NotFoundError
from ..models import BallEvent, Innings, Match, Player
from ..notifications import ChangeEvent
from ..schemas import (
    BallEventResponse,
    InningsResponse,
    MatchCreate,
    MatchDetail,
    MatchResponse,
    PlayerResponse,
)
from ..scoring.scorecard import match_scorecard
from ..scoring.types import MatchStatus, Side
from ..security import hash_passcode, verify_passcode


class MatchService:
    """Read and manage matches within one database session."""

    def __init__(self, session: Session):
        self.session = session
        self.changes: List[ChangeEvent] = []

    def create_match(self, data: MatchCreate) -> Match:
        """Create a match with both squads; batting order follows the given order."""
        match = Match(
            team_a_name=data.team_a_name,
            team_b_name=data.team_b_name,
            total_overs=data.total_overs,
            location=data.location,
            passcode_hash=hash_passcode(data.passcode),
            status=MatchStatus.UPCOMING,
            toss_winner=data.toss_winner,
            toss_decision=data.toss_decision,
        )
        self.session.add(match)
        self.session.flush()

        for side, names in ((Side.A, data.players_a), (Side.B, data.players_b)):
            for order, name in enumerate(names, start=1):
                self.session.add(Player(match_id=match.id, name=name, team=side, batting_order=order))
        self.session.flush()

        logger.info(
            f"Created match {match.id}: {match.team_a_name} vs {match.team_b_name} "
            f"({match.total_overs} overs, {len(data.players_a)}+{len(data.players_b)} players)"
        )
        self.changes.append(ChangeEvent(match.id, "matches", "insert"))
        return match

    def list_matches(self, include_deleted: bool = False) -> List[Match]:
        """Matches newest first; soft-deleted matches are hidden by default."""
        query = select(Match).order_by(Match.created_at.desc(), Match.id.desc())
        if not include_deleted:
            query = query.where(Match.is_deleted.is_(False))
        return list(self.session.execute(query).scalars())

    def get_match(self, match_id: int, include_deleted: bool = False) -> Match:
        match = self.session.get(Match, match_id)
        if match is None or (match.is_deleted and not include_deleted):
            raise NotFoundError(f"Match {match_id} not found")
        return match

    def get_players(self, match_id: int) -> List[Player]:
        query = (
            select(Player)
            .where(Player.match_id == match_id)
            .order_by(Player.team, Player.batting_order, Player.id)
        )
        return list(self.session.execute(query).scalars())

    def get_innings(self, match_id: int) -> List[Innings]:
        query = select(Innings).where(Innings.match_id == match_id).order_by(Innings.innings_number)
        return list(self.session.execute(query).scalars())

    def get_ball_events(self, match_id: int) -> List[BallEvent]:
        """Every ball event of the match, undone ones included, in creation order."""
        query = (
            select(BallEvent)
            .where(BallEvent.match_id == match_id)
            .order_by(BallEvent.created_at, BallEvent.id)
        )
        return list(self.session.execute(query).scalars())

    def get_match_detail(self, match_id: int) -> MatchDetail:
        """Full snapshot used by viewers to re-render after a change notification."""
        match = self.get_match(match_id)
        return MatchDetail(
            match=MatchResponse.model_validate(match),
            players=[PlayerResponse.model_validate(p) for p in self.get_players(match_id)],
            innings=[InningsResponse.model_validate(i) for i in self.get_innings(match_id)],
            ball_events=[BallEventResponse.model_validate(e) for e in self.get_ball_events(match_id)],
        )

    def scorecard(self, match_id: int) -> Dict[str, Any]:
        match = self.get_match(match_id)
        return match_scorecard(
            match,
            self.get_players(match_id),
            self.get_innings(match_id),
            self.get_ball_events(match_id),
        )

    def verify_passcode(self, match_id: int, passcode: Optional[str]) -> bool:
        match = self.get_match(match_id)
        return verify_passcode(passcode, match.passcode_hash)

    def require_passcode(self, match_id: int, passcode: Optional[str]) -> Match:
        """Return the match if ``passcode`` unlocks it, else raise InvalidCredentialError."""
        match = self.get_match(match_id)
        if not verify_passcode(passcode, match.passcode_hash):
            logger.warning(f"Invalid passcode for match {match_id}")
            raise InvalidCredentialError("Invalid passcode")
        return match

    def delete_match(self, match_id: int, passcode: Optional[str]) -> Match:
        """Soft-delete a match. Its rows are kept but it disappears from listings."""
        match = self.require_passcode(match_id, passcode)
        match.is_deleted = True
        match.deleted_at = datetime.now(timezone.utc)
        self.session.flush()

        logger.info(f"Deleted match {match_id}")
        self.changes.append(ChangeEvent(match.id, "matches", "update"))
        return match
