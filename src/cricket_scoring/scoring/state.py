"""Ball-event state machine.

``record_ball`` turns a proposed delivery into a ball-event record plus the new
innings aggregate, and ``undo_last_ball`` reverses the most recent active
delivery. Both are pure: the caller owns persistence. ``derive_innings_state``
recomputes the same totals by folding over the active events, so stored
aggregates can always be rebuilt from the event log.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from ..exceptions import MissingParticipantsError, NotFoundError, NothingToUndoError
from .commentary import generate_commentary
from .formatting import format_overs, overs_as_float
from .types import (
    BALLS_PER_OVER,
    PENALTY_EXTRAS,
    UNASSIGNED,
    Assigned,
    ExtraType,
    Participant,
    WicketType,
    active_events,
    enum_value,
    find_player,
    is_legal,
    legal_ball_count,
    participant,
)


@dataclass(frozen=True)
class Delivery:
    """A scoring action as entered by the scorer."""

    runs: int = 0
    extra_type: Optional[ExtraType] = None
    extra_runs: int = 0
    is_wicket: bool = False
    wicket_type: Optional[WicketType] = None
    dismissed_player_id: Optional[int] = None

    @property
    def is_legal(self) -> bool:
        return is_legal(self.extra_type)

    @property
    def carries_penalty(self) -> bool:
        return enum_value(self.extra_type) in PENALTY_EXTRAS


@dataclass
class BallRecord:
    """Fields of a new ball event, ready to be persisted."""

    over_number: int
    ball_number: int
    batsman_id: int
    non_striker_id: Optional[int]
    bowler_id: int
    runs_scored: int
    is_extra: bool
    extra_type: Optional[str]
    extra_runs: int
    is_wicket: bool
    wicket_type: Optional[str]
    dismissed_player_id: Optional[int]
    is_boundary: bool
    total_runs: int
    commentary: str = ""
    is_undone: bool = False

    @property
    def is_legal(self) -> bool:
        return is_legal(self.extra_type)

    def as_row(self) -> Dict[str, Any]:
        return {
            "over_number": self.over_number,
            "ball_number": self.ball_number,
            "batsman_id": self.batsman_id,
            "non_striker_id": self.non_striker_id,
            "bowler_id": self.bowler_id,
            "runs_scored": self.runs_scored,
            "is_extra": self.is_extra,
            "extra_type": self.extra_type,
            "extra_runs": self.extra_runs,
            "is_wicket": self.is_wicket,
            "wicket_type": self.wicket_type,
            "dismissed_player_id": self.dismissed_player_id,
            "is_boundary": self.is_boundary,
            "total_runs": self.total_runs,
            "commentary": self.commentary,
            "is_undone": self.is_undone,
        }


@dataclass(frozen=True)
class InningsState:
    """Immutable snapshot of an innings' running aggregate."""

    innings_number: int = 1
    total_runs: int = 0
    total_wickets: int = 0
    total_balls: int = 0
    total_extras: int = 0
    striker: Participant = field(default=UNASSIGNED)
    non_striker: Participant = field(default=UNASSIGNED)
    bowler: Participant = field(default=UNASSIGNED)

    @classmethod
    def from_row(cls, row: Any) -> "InningsState":
        """Build a snapshot from any object shaped like the ``innings`` table."""
        return cls(
            innings_number=row.innings_number,
            total_runs=row.total_runs or 0,
            total_wickets=row.total_wickets or 0,
            total_balls=row.total_balls or 0,
            total_extras=row.total_extras or 0,
            striker=participant(row.striker_id),
            non_striker=participant(row.non_striker_id),
            bowler=participant(row.current_bowler_id),
        )

    @property
    def overs(self) -> str:
        return format_overs(self.total_balls)

    @property
    def needs_batters(self) -> bool:
        return not (self.striker and self.non_striker)

    def updates(self) -> Dict[str, Any]:
        """Column values for persisting this snapshot onto an innings row."""
        return {
            "total_runs": self.total_runs,
            "total_wickets": self.total_wickets,
            "total_balls": self.total_balls,
            "total_overs_bowled": overs_as_float(self.total_balls),
            "total_extras": self.total_extras,
            "striker_id": self.striker.player_id,
            "non_striker_id": self.non_striker.player_id,
            "current_bowler_id": self.bowler.player_id,
        }


@dataclass(frozen=True)
class InningsDelta:
    """Change one ball event applies to the innings totals."""

    runs: int = 0
    wickets: int = 0
    balls: int = 0
    extras: int = 0

    @classmethod
    def for_ball(cls, event: Any) -> "InningsDelta":
        return cls(
            runs=event.total_runs,
            wickets=1 if event.is_wicket else 0,
            balls=1 if is_legal(event.extra_type) else 0,
            extras=event.extra_runs,
        )

    def inverse(self) -> "InningsDelta":
        return InningsDelta(-self.runs, -self.wickets, -self.balls, -self.extras)

    def apply(self, state: InningsState) -> InningsState:
        return replace(
            state,
            total_runs=state.total_runs + self.runs,
            total_wickets=state.total_wickets + self.wickets,
            total_balls=state.total_balls + self.balls,
            total_extras=state.total_extras + self.extras,
        )


def _stamp(delivery: Delivery, active: Sequence[Any]) -> Tuple[int, int]:
    legal_count = legal_ball_count(active)
    over_number = legal_count // BALLS_PER_OVER
    if delivery.is_legal:
        return over_number, legal_count % BALLS_PER_OVER + 1
    # Illegal deliveries share the over and take the next display index in it
    in_over = sum(1 for event in active if event.over_number == over_number)
    return over_number, in_over + 1


def _rotate_strike(state: InningsState, delivery: Delivery, balls_after: int) -> Tuple[Participant, Participant]:
    striker, non_striker = state.striker, state.non_striker
    if delivery.is_wicket:
        return UNASSIGNED, non_striker
    if not delivery.is_legal:
        return striker, non_striker

    if delivery.runs % 2 == 1:
        striker, non_striker = non_striker, striker
    if balls_after > 0 and balls_after % BALLS_PER_OVER == 0:
        striker, non_striker = non_striker, striker
    return striker, non_striker


def record_ball(
    state: InningsState,
    delivery: Delivery,
    events: Iterable[Any],
    roster: Iterable[Any],
) -> Tuple[BallRecord, InningsState]:
    """Apply ``delivery`` to ``state``.

    ``events`` are the innings' ball events in creation order (undone ones are
    ignored) and ``roster`` resolves player names for the commentary.

    Raises MissingParticipantsError when no striker or bowler is selected.
    """
    if not state.striker or not state.bowler:
        raise MissingParticipantsError("Please select striker and bowler first")

    roster = list(roster)
    batsman = find_player(roster, state.striker.player_id)
    bowler = find_player(roster, state.bowler.player_id)
    if batsman is None or bowler is None:
        raise NotFoundError("Striker or bowler is not part of this match")

    active = active_events(events)
    over_number, ball_number = _stamp(delivery, active)

    penalty = 1 if delivery.carries_penalty else 0
    extra_type = enum_value(delivery.extra_type)
    extra_runs = delivery.extra_runs + penalty
    dismissed_id = None
    if delivery.is_wicket:
        dismissed_id = delivery.dismissed_player_id
        if dismissed_id is None:
            dismissed_id = batsman.id

    record = BallRecord(
        over_number=over_number,
        ball_number=ball_number,
        batsman_id=batsman.id,
        non_striker_id=state.non_striker.player_id,
        bowler_id=bowler.id,
        runs_scored=delivery.runs,
        is_extra=extra_type is not None,
        extra_type=extra_type,
        extra_runs=extra_runs,
        is_wicket=delivery.is_wicket,
        wicket_type=enum_value(delivery.wicket_type) if delivery.is_wicket else None,
        dismissed_player_id=dismissed_id,
        is_boundary=delivery.runs in (4, 6) and extra_type is None,
        total_runs=delivery.runs + extra_runs,
    )
    record.commentary = generate_commentary(record, batsman, bowler)

    new_state = InningsDelta.for_ball(record).apply(state)
    striker, non_striker = _rotate_strike(state, delivery, new_state.total_balls)
    new_state = replace(new_state, striker=striker, non_striker=non_striker)

    return record, new_state


def undo_last_ball(state: InningsState, events: Iterable[Any]) -> Tuple[Any, InningsState]:
    """Reverse the most recent active ball event.

    Returns the event to flag as undone (its ``id`` when it has one) and the
    restored state. Striker, non-striker and bowler go back to the players on
    the field for that delivery; events stored without a non-striker leave the
    current non-striker in place.

    Raises NothingToUndoError when the innings has no active events.
    """
    active = active_events(events)
    if not active:
        raise NothingToUndoError("No balls to undo in this innings")

    last = active[-1]
    restored = InningsDelta.for_ball(last).inverse().apply(state)

    non_striker = state.non_striker
    if getattr(last, "non_striker_id", None) is not None:
        non_striker = Assigned(last.non_striker_id)

    restored = replace(
        restored,
        striker=Assigned(last.batsman_id),
        non_striker=non_striker,
        bowler=Assigned(last.bowler_id),
    )
    return getattr(last, "id", last), restored


def derive_innings_state(events: Iterable[Any], base: InningsState) -> InningsState:
    """Recompute the totals of ``base`` by folding over the active events.

    Participant slots are carried over from ``base`` unchanged.
    """
    state = replace(base, total_runs=0, total_wickets=0, total_balls=0, total_extras=0)
    for event in active_events(events):
        state = InningsDelta.for_ball(event).apply(state)
    return state
