"""Cursor blink state machine driven by the editor's blink timings."""

from __future__ import annotations

import copy
import enum
import time
from typing import Any, Callable


class BlinkState(enum.Enum):
    """Phase of the cursor blink cycle."""

    WAITING = "waiting"
    ON = "on"
    OFF = "off"


_NEXT_STATE = {
    BlinkState.WAITING: BlinkState.ON,
    BlinkState.ON: BlinkState.OFF,
    BlinkState.OFF: BlinkState.ON,
}


class BlinkStatus:
    """Tracks whether a blinking cursor is currently visible.

    A cursor is any object with ``blinkwait``, ``blinkon`` and ``blinkoff``
    attributes holding milliseconds or None, and supporting equality.
    ``clock`` returns seconds; ``schedule`` is called with the clock time at
    which the next blink transition falls due.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        schedule: Callable[[float], None] | None = None,
    ) -> None:
        self._clock = clock
        self._schedule = schedule
        self.state = BlinkState.WAITING
        self.last_transition = clock()
        self._previous_cursor: Any = None

    def _delay_for_state(self, cursor: Any) -> int | None:
        if self.state is BlinkState.WAITING:
            return cursor.blinkwait
        if self.state is BlinkState.OFF:
            return cursor.blinkoff
        return cursor.blinkon

    def update_status(self, cursor: Any) -> bool:
        """Advance the blink cycle and return whether the cursor should be drawn."""
        if self._previous_cursor is None or cursor != self._previous_cursor:
            self._previous_cursor = copy.deepcopy(cursor)
            self.last_transition = self._clock()
            if cursor.blinkwait is not None and cursor.blinkwait != 0:
                self.state = BlinkState.WAITING
            else:
                self.state = BlinkState.ON

        if cursor.blinkwait == 0 or cursor.blinkoff == 0 or cursor.blinkon == 0:
            return True

        delay = self._delay_for_state(cursor)
        if delay is not None and delay > 0:
            if self.last_transition + delay / 1000.0 < self._clock():
                self.state = _NEXT_STATE[self.state]
                self.last_transition = self._clock()

        scheduled = self._delay_for_state(cursor)
        if scheduled is not None and self._schedule is not None:
            self._schedule(self.last_transition + scheduled / 1000.0)

        return self.state is not BlinkState.OFF