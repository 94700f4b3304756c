"""Match lifecycle orchestration: applies scoring commands to the record store.

``ScoringService.execute`` runs one command inside the caller's session.
Rules live in the pure ``scoring`` package; this module loads rows, calls
into it, writes the results back and collects the change notifications to
publish once the transaction has committed.
"""

from functools import singledispatchmethod
from typing import Any, List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import IllegalTransitionError, NotFoundError, ScoringError, ValidationError
from ..models import BallEvent, Innings, Match, Player
from ..notifications import ChangeEvent, classify_highlight
from ..schemas.commands import (
    CompleteMatch,
    EndInnings,
    RebuildInnings,
    RecordBall,
    StartInnings,
    UndoBall,
    UpdateInnings,
    UpdateMatchStatus,
)
from ..scoring.lifecycle import (
    MatchResult,
    chase_completed,
    chase_result,
    compute_result,
    ensure_can_start_innings,
    ensure_transition,
    innings_end_reached,
)
from ..scoring.state import (
    Delivery,
    InningsState,
    derive_innings_state,
    record_ball,
    undo_last_ball,
)
from ..scoring.stats import dismissed_player_ids
from ..scoring.types import MatchStatus, Side, enum_value, find_player


class ScoringService:
    """Apply scoring commands to one match."""

    def __init__(self, session: Session):
        self.session = session
        self.changes: List[ChangeEvent] = []

    def execute(self, match_id: int, command: Any) -> Any:
        """Run ``command`` against ``match_id`` and return the row it produced or changed."""
        match = self._load_match(match_id)
        try:
            return self.handle(command, match)
        except ScoringError as e:
            logger.warning(f"Rejected {enum_value(getattr(command, 'action', command))} for match {match_id}: {e.message}")
            raise

    # Handlers, one per command variant

    @singledispatchmethod
    def handle(self, command: Any, match: Match) -> Any:
        raise ValidationError(f"Unsupported command: {type(command).__name__}")

    @handle.register
    def _start_innings(self, command: StartInnings, match: Match) -> Innings:
        existing = self._innings_list(match)
        ensure_can_start_innings(command.innings_number, existing)
        if existing and command.batting_team != existing[0].bowling_team:
            raise ValidationError("The side that bowled first must bat in the second innings")
        ensure_transition(match.status, MatchStatus.LIVE)

        batting = Side(command.batting_team)
        innings = Innings(
            match_id=match.id,
            innings_number=command.innings_number,
            batting_team=batting,
            bowling_team=batting.opponent,
            total_runs=0,
            total_wickets=0,
            total_balls=0,
            total_overs_bowled=0.0,
            total_extras=0,
            is_completed=False,
        )
        self.session.add(innings)
        self._set_status(match, MatchStatus.LIVE)
        self.session.flush()

        logger.info(f"Match {match.id}: innings {innings.innings_number} started, {match.team_names[batting]} batting")
        self._changed(match, "innings", "insert")
        return innings

    @handle.register
    def _update_innings(self, command: UpdateInnings, match: Match) -> Innings:
        innings = self._open_innings(match, command.innings_id)
        roster = self._roster(match)
        dismissed = dismissed_player_ids(self._events(innings))
        selected = command.model_fields_set

        for slot in ("striker_id", "non_striker_id"):
            player_id = getattr(command, slot)
            if slot in selected and player_id is not None:
                player = self._player(roster, player_id)
                if player.team != innings.batting_team:
                    raise ValidationError(f"{player.name} is not in the batting side")
                if player.id in dismissed:
                    raise ValidationError(f"{player.name} is already out")

        if "current_bowler_id" in selected and command.current_bowler_id is not None:
            bowler = self._player(roster, command.current_bowler_id)
            if bowler.team != innings.bowling_team:
                raise ValidationError(f"{bowler.name} is not in the bowling side")

        striker_id = command.striker_id if "striker_id" in selected else innings.striker_id
        non_striker_id = command.non_striker_id if "non_striker_id" in selected else innings.non_striker_id
        if striker_id is not None and striker_id == non_striker_id:
            raise ValidationError("Striker and non-striker must be different players")

        innings.striker_id = striker_id
        innings.non_striker_id = non_striker_id
        if "current_bowler_id" in selected:
            innings.current_bowler_id = command.current_bowler_id
        self.session.flush()

        logger.info(
            f"Match {match.id}: innings {innings.innings_number} players set "
            f"(striker={innings.striker_id}, non_striker={innings.non_striker_id}, bowler={innings.current_bowler_id})"
        )
        self._changed(match, "innings", "update")
        return innings

    @handle.register
    def _record_ball(self, command: RecordBall, match: Match) -> BallEvent:
        if match.status != MatchStatus.LIVE:
            raise IllegalTransitionError("Match is not live")
        innings = self._open_innings(match, command.innings_id)
        if command.dismissed_player_id is not None:
            self._player(self._roster(match), command.dismissed_player_id)

        delivery = Delivery(
            runs=command.runs,
            extra_type=command.extra_type,
            extra_runs=command.extra_runs,
            is_wicket=command.is_wicket,
            wicket_type=command.wicket_type,
            dismissed_player_id=command.dismissed_player_id,
        )
        record, state = record_ball(
            InningsState.from_row(innings),
            delivery,
            self._events(innings),
            self._roster(match),
        )

        event = BallEvent(match_id=match.id, innings_id=innings.id, **record.as_row())
        self.session.add(event)
        self._save_state(innings, state)
        self.session.flush()

        logger.info(f"Match {match.id}: {record.commentary} ({state.total_runs}/{state.total_wickets} in {state.overs})")
        self.changes.append(ChangeEvent(match.id, "ball_events", "insert", classify_highlight(event)))
        self._changed(match, "innings", "update")

        first_runs = self._first_innings_runs(match)
        if chase_completed(state, first_runs):
            innings.is_completed = True
            self._complete(match, chase_result(innings.batting_team, state.total_wickets, match.team_names))
        elif innings_end_reached(state, match.total_overs):
            self._close_innings(match, innings)
        return event

    @handle.register
    def _undo_ball(self, command: UndoBall, match: Match) -> BallEvent:
        innings = self._open_innings(match, command.innings_id)
        events = self._events(innings)
        event_id, state = undo_last_ball(InningsState.from_row(innings), events)

        event = next(e for e in events if e.id == event_id)
        event.is_undone = True
        self._save_state(innings, state)
        self.session.flush()

        logger.info(
            f"Match {match.id}: undid ball {event.over_number}.{event.ball_number} "
            f"({state.total_runs}/{state.total_wickets} in {state.overs})"
        )
        self._changed(match, "ball_events", "update")
        self._changed(match, "innings", "update")
        return event

    @handle.register
    def _end_innings(self, command: EndInnings, match: Match) -> Innings:
        innings = self._open_innings(match, command.innings_id)
        return self._close_innings(match, innings)

    @handle.register
    def _complete_match(self, command: CompleteMatch, match: Match) -> Match:
        for innings in self._innings_list(match):
            if not innings.is_completed:
                innings.is_completed = True
                self._changed(match, "innings", "update")
        self._complete(match, MatchResult(winner=command.winner, summary=command.result_summary))
        return match

    @handle.register
    def _update_match_status(self, command: UpdateMatchStatus, match: Match) -> Match:
        if command.status in (MatchStatus.INNINGS_BREAK, MatchStatus.COMPLETED):
            open_innings = next((i for i in self._innings_list(match) if not i.is_completed), None)
            if open_innings is not None:
                raise IllegalTransitionError(
                    f"Innings {open_innings.innings_number} is still in progress, end it first"
                )
        self._set_status(match, command.status)
        self.session.flush()
        logger.info(f"Match {match.id}: status set to {enum_value(match.status)}")
        return match

    @handle.register
    def _rebuild_innings(self, command: RebuildInnings, match: Match) -> Innings:
        innings = self._get_innings(match, command.innings_id)
        before = InningsState.from_row(innings)
        after = derive_innings_state(self._events(innings), before)
        if after != before:
            logger.warning(
                f"Match {match.id}: innings {innings.innings_number} totals drifted "
                f"({before.total_runs}/{before.total_wickets} in {before.overs} -> "
                f"{after.total_runs}/{after.total_wickets} in {after.overs})"
            )
            self._save_state(innings, after)
            self.session.flush()
            self._changed(match, "innings", "update")
        return innings

    # Lifecycle steps shared by several commands

    def _close_innings(self, match: Match, innings: Innings) -> Innings:
        innings.is_completed = True
        self._changed(match, "innings", "update")
        logger.info(
            f"Match {match.id}: innings {innings.innings_number} ended at "
            f"{innings.total_runs}/{innings.total_wickets} in {innings.overs}"
        )

        if innings.innings_number == 1:
            self._set_status(match, MatchStatus.INNINGS_BREAK)
        else:
            innings_list = self._innings_list(match)
            first = next((i for i in innings_list if i.innings_number == 1), None)
            self._complete(match, compute_result(first, innings, match.team_names))
        self.session.flush()
        return innings

    def _complete(self, match: Match, result: MatchResult) -> None:
        self._set_status(match, MatchStatus.COMPLETED)
        match.winner = result.winner
        match.result_summary = result.summary
        self.session.flush()
        logger.info(f"Match {match.id} completed: {result.summary}")

    def _set_status(self, match: Match, status: MatchStatus) -> None:
        ensure_transition(match.status, status)
        match.status = status
        self._changed(match, "matches", "update")

    def _save_state(self, innings: Innings, state: InningsState) -> None:
        for column, value in state.updates().items():
            setattr(innings, column, value)

    def _changed(self, match: Match, table: str, kind: str) -> None:
        self.changes.append(ChangeEvent(match.id, table, kind))

    # Loading

    def _load_match(self, match_id: int) -> Match:
        match = self.session.get(Match, match_id)
        if match is None or match.is_deleted:
            raise NotFoundError(f"Match {match_id} not found")
        return match

    def _innings_list(self, match: Match) -> List[Innings]:
        query = select(Innings).where(Innings.match_id == match.id).order_by(Innings.innings_number)
        return list(self.session.execute(query).scalars())

    def _get_innings(self, match: Match, innings_id: int) -> Innings:
        innings = self.session.get(Innings, innings_id)
        if innings is None or innings.match_id != match.id:
            raise NotFoundError(f"Innings {innings_id} not found")
        return innings

    def _open_innings(self, match: Match, innings_id: Optional[int]) -> Innings:
        """The innings a command addresses, which must still be in progress."""
        if innings_id is not None:
            innings = self._get_innings(match, innings_id)
        else:
            innings = next((i for i in self._innings_list(match) if not i.is_completed), None)
            if innings is None:
                raise IllegalTransitionError("No innings in progress")
        if innings.is_completed:
            raise IllegalTransitionError(f"Innings {innings.innings_number} is already completed")
        return innings

    def _first_innings_runs(self, match: Match) -> Optional[int]:
        first = next((i for i in self._innings_list(match) if i.innings_number == 1), None)
        if first is None or not first.is_completed:
            return None
        return first.total_runs

    def _events(self, innings: Innings) -> List[BallEvent]:
        query = (
            select(BallEvent)
            .where(BallEvent.innings_id == innings.id)
            .order_by(BallEvent.created_at, BallEvent.id)
        )
        return list(self.session.execute(query).scalars())

    def _roster(self, match: Match) -> List[Player]:
        query = select(Player).where(Player.match_id == match.id).order_by(Player.batting_order, Player.id)
        return list(self.session.execute(query).scalars())

    def _player(self, roster: List[Player], player_id: int) -> Player:
        player = find_player(roster, player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} is not part of this match")
        return player

