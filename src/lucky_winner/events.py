"""Notifications emitted by the raffle and the randomness coordinator."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class RaffleEnter:
    player: str
    amount: int


@dataclass(frozen=True)
class RequestedRaffleWinner:
    request_id: int


@dataclass(frozen=True)
class WinnerPicked:
    winner: str


@dataclass(frozen=True)
class RandomWordsRequested:
    request_id: int
    subscription_id: int
    num_words: int
    sender: str


@dataclass(frozen=True)
class RandomWordsFulfilled:
    request_id: int
    consumer: str


class EventLog:
    """Ordered record of emitted events with per-type listeners."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[Any] = []
        self._listeners: Dict[type, List[Callable[[Any], None]]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Listener management
    # ------------------------------------------------------------------
    def add_listener(self, event_type: Type[E], callback: Callable[[E], None]) -> None:
        with self._lock:
            self._listeners[event_type].append(callback)
        logger.debug("Added listener for %s: %s", event_type.__name__, callback)

    def remove_listener(self, event_type: type, callback: Callable[[Any], None]) -> None:
        with self._lock:
            listeners = self._listeners.get(event_type, [])
            if callback in listeners:
                listeners.remove(callback)

    def once(self, event_type: Type[E], callback: Callable[[E], None]) -> None:
        """Register ``callback`` for the next ``event_type`` event only."""

        def _wrapper(event: E) -> None:
            self.remove_listener(event_type, _wrapper)
            callback(event)

        self.add_listener(event_type, _wrapper)

    def emit(self, event: Any) -> None:
        with self._lock:
            self._events.append(event)
            listeners = list(self._listeners.get(type(event), []))
        for callback in listeners:
            try:
                callback(event)
            except Exception:
                logger.exception("Listener for %s failed", type(event).__name__)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def history(self) -> List[Any]:
        with self._lock:
            return list(self._events)

    def filter(self, event_type: Type[E]) -> List[E]:
        with self._lock:
            return [event for event in self._events if isinstance(event, event_type)]

    def last(self, event_type: Type[E]) -> Optional[E]:
        matches = self.filter(event_type)
        return matches[-1] if matches else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
