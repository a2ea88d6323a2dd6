"""Simulation time tracking."""

from typing import Callable

TickCallback = Callable[[], object]


class SimulationClock:
    """Logical clock shared by every actor in the network.

    Time only moves through ``advance()``, one tick at a time. After each
    advance every subscriber is called once, in subscription order, and all of
    them have returned before ``advance()`` does.
    """

    def __init__(self):
        self._current_tick = 0
        self._subscribers: list[TickCallback] = []
        self._started = False

    @property
    def current_tick(self) -> int:
        """The tick actors are currently reacting to."""
        return self._current_tick

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_started(self) -> bool:
        """Whether a reaction round has run yet."""
        return self._started

    def subscribe(self, callback: TickCallback) -> None:
        """Register a zero-argument callback for every future tick."""
        self._subscribers.append(callback)

    def start(self) -> None:
        """Run the reaction round for the initial tick without advancing.

        Does nothing once any round has run.
        """
        if self._started:
            return
        self._started = True
        self._notify()

    def advance(self) -> int:
        """Move forward one tick and notify subscribers. Returns the new tick."""
        self._started = True
        self._current_tick += 1
        self._notify()
        return self._current_tick

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback()

    def status(self) -> dict:
        """Get clock status as dictionary."""
        return {
            "current_tick": self._current_tick,
            "subscribers": len(self._subscribers),
            "is_started": self._started,
        }
