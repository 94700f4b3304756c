"""In-process change notifications for spectator views.

Subscribers are told *that* a match changed and re-fetch the full match state;
only ball-event inserts carry extra payload, the highlight to flash.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from .scoring.types import Highlight

logger = logging.getLogger(__name__)

Subscriber = Callable[["ChangeEvent"], None]


@dataclass(frozen=True)
class ChangeEvent:
    match_id: int
    table: str  # matches, innings or ball_events
    kind: str  # insert or update
    highlight: Highlight = Highlight.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "table": self.table,
            "kind": self.kind,
            "highlight": self.highlight.value,
        }


def classify_highlight(event: Any) -> Highlight:
    """Highlight for a freshly inserted ball event."""
    if event.is_wicket:
        return Highlight.WICKET
    if event.runs_scored == 6 and event.is_boundary:
        return Highlight.SIX
    if event.runs_scored == 4 and event.is_boundary:
        return Highlight.FOUR
    return Highlight.NONE


class ChangeNotifier:
    """Per-match publish/subscribe channel."""

    def __init__(self) -> None:
        self._subscribers: Dict[int, List[Subscriber]] = {}
        self._lock = threading.Lock()

    def subscribe(self, match_id: int, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for ``match_id``; returns an unsubscribe function."""
        with self._lock:
            self._subscribers.setdefault(match_id, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(match_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(match_id, None)

        return unsubscribe

    def subscriber_count(self, match_id: int) -> int:
        with self._lock:
            return len(self._subscribers.get(match_id, []))

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(event.match_id, []))
        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber failed for match {event.match_id}")

    def publish_all(self, events: Iterable[ChangeEvent]) -> None:
        for event in events:
            self.publish(event)


# Global notifier instance
notifier = ChangeNotifier()
