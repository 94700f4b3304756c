"""Domain vocabulary shared by the scoring core, the ORM models and the schemas."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Union


BALLS_PER_OVER = 6
MAX_WICKETS = 10


class Side(str, Enum):
    """Enumeration of the two sides in a match."""
    A = "a"
    B = "b"

    @property
    def opponent(self) -> "Side":
        return Side.B if self is Side.A else Side.A


class MatchStatus(str, Enum):
    """Enumeration of match lifecycle statuses."""
    UPCOMING = "upcoming"
    LIVE = "live"
    INNINGS_BREAK = "innings_break"
    COMPLETED = "completed"


class TossDecision(str, Enum):
    """Enumeration of toss decisions."""
    BAT = "bat"
    BOWL = "bowl"


class ExtraType(str, Enum):
    """Enumeration of extra classifications."""
    WIDE = "wide"
    NO_BALL = "no_ball"
    BYE = "bye"
    LEG_BYE = "leg_bye"


class WicketType(str, Enum):
    """Enumeration of dismissal kinds."""
    BOWLED = "bowled"
    CAUGHT = "caught"
    LBW = "lbw"
    RUN_OUT = "run_out"
    STUMPED = "stumped"
    HIT_WICKET = "hit_wicket"
    RETIRED = "retired"


class Highlight(str, Enum):
    """Visual highlight attached to a freshly inserted ball event."""
    WICKET = "wicket"
    SIX = "six"
    FOUR = "four"
    NONE = "none"


# Deliveries that carry a one-run penalty and do not count toward the over
PENALTY_EXTRAS = (ExtraType.WIDE.value, ExtraType.NO_BALL.value)


def enum_value(value: Any) -> Any:
    """Return the raw value of an enum member, or the value unchanged."""
    if isinstance(value, Enum):
        return value.value
    return value


def is_legal(extra_type: Optional[Union[str, ExtraType]]) -> bool:
    """A delivery is legal unless it is a wide or a no-ball."""
    return enum_value(extra_type) not in PENALTY_EXTRAS


def active_events(events: Iterable[Any]) -> List[Any]:
    """Filter a ball-event sequence down to its non-undone members, keeping order."""
    return [event for event in events if not event.is_undone]


def legal_ball_count(events: Iterable[Any]) -> int:
    return sum(1 for event in events if is_legal(event.extra_type))


@dataclass(frozen=True)
class Unassigned:
    """A participant slot with nobody selected."""

    @property
    def player_id(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Assigned:
    """A participant slot holding a selected player."""

    player_id: int

    def __bool__(self) -> bool:
        return True


Participant = Union[Unassigned, Assigned]

UNASSIGNED = Unassigned()


def participant(player_id: Optional[int]) -> Participant:
    """Lift a nullable player id into a participant slot."""
    if player_id is None:
        return UNASSIGNED
    return Assigned(player_id)


@dataclass(frozen=True)
class RosterPlayer:
    """Lightweight player record usable wherever an ORM ``Player`` is accepted."""

    id: int
    name: str
    team: str
    batting_order: Optional[int] = None


def find_player(roster: Iterable[Any], player_id: Optional[int]) -> Optional[Any]:
    if player_id is None:
        return None
    for player in roster:
        if player.id == player_id:
            return player
    return None


def players_on_side(roster: Iterable[Any], side: Union[str, Side]) -> List[Any]:
    side_value = enum_value(side)
    return [player for player in roster if enum_value(player.team) == side_value]
