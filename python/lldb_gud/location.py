"""Current source location side channel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

LOGGER = logging.getLogger("lldb_gud.location")


@dataclass(frozen=True)
class Location:
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


LocationHandler = Callable[[Location], None]


class LocationTracker:
    """Holds the last resolved (file, line) and fans updates out to listeners."""

    def __init__(self) -> None:
        self._current: Optional[Location] = None
        self._handlers: Dict[int, LocationHandler] = {}
        self._next_token = 1
        self.updates = 0

    @property
    def current(self) -> Optional[Location]:
        return self._current

    def subscribe(self, handler: LocationHandler) -> int:
        token = self._next_token
        self._next_token += 1
        self._handlers[token] = handler
        return token

    def unsubscribe(self, token: int) -> None:
        self._handlers.pop(token, None)

    def update(self, location: Location) -> None:
        # Listeners are told even when the location did not change: a step
        # that lands on the same line still has to re-highlight it.
        self._current = location
        self.updates += 1
        for handler in list(self._handlers.values()):
            try:
                handler(location)
            except Exception as exc:
                LOGGER.warning("location handler failed for %s: %s", location, exc)

    def clear(self) -> None:
        self._current = None
        self.updates = 0


__all__ = ["Location", "LocationHandler", "LocationTracker"]
