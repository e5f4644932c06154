"""Countdown clock — a single-use Idle/Running/Paused state machine.

Transitions:
- Idle    → Running  when the execution loop begins   (StateChanged)
- Running → Paused   on ``pause()``                   (StateChanged)
- Paused  → Running  on ``start()``                   (StateChanged)
- Running → Idle     when remaining reaches zero      (Finished)
- any     → (loop exits, no mutation) on ``cancel()``

INVARIANT: A cancelled clock never emits Finished.
INVARIANT: 0 <= remaining <= total.
"""

from __future__ import annotations

import itertools
import logging
import threading
from enum import StrEnum
from typing import TYPE_CHECKING

from pomoctl.domain.events import Finished, StateChanged, Tick
from pomoctl.domain.progress import minutes_to_seconds

if TYPE_CHECKING:
    from pomoctl.domain.events import ClockEvent, EventSink

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0
PAUSE_POLL_INTERVAL = 0.1

_serial = itertools.count(1)


class ClockState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class Clock:
    """Counts a fixed duration down in one-second ticks on its own thread.

    Parameters:
        duration_minutes: Whole minutes to count down.
        sink: Receives every :mod:`~pomoctl.domain.events` message.
        tick_interval: Seconds per tick while running.
        poll_interval: Wake-up interval while paused.

    ``state`` and ``remaining`` are guarded by a private lock so the loop
    and the ``pause``/``start`` callers never race.  Cancellation is a
    :class:`threading.Event` waited on at every suspension point.
    """

    def __init__(
        self,
        duration_minutes: int,
        sink: EventSink,
        *,
        tick_interval: float = TICK_INTERVAL,
        poll_interval: float = PAUSE_POLL_INTERVAL,
    ) -> None:
        total = minutes_to_seconds(duration_minutes)
        if total < 0:
            msg = f"Clock duration must not be negative: {duration_minutes}"
            raise ValueError(msg)
        self._total = total
        self._remaining = total
        self._state = ClockState.IDLE
        self._sink = sink
        self._tick_interval = tick_interval
        self._poll_interval = poll_interval
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._started = False
        self._thread: threading.Thread | None = None
        self.name = f"clock-{next(_serial)}"

    def __repr__(self) -> str:
        return f"<Clock {self.name} {self.state} {self.remaining}/{self._total}s>"

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def total(self) -> int:
        return self._total

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    @property
    def state(self) -> ClockState:
        with self._lock:
            return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin(self) -> threading.Thread:
        """Run the countdown loop on a daemon thread.

        A clock runs at most once; later calls return the existing thread.
        """
        if self._thread is None:
            self._thread = threading.Thread(target=self.run, name=self.name, daemon=True)
            self._thread.start()
        return self._thread

    def run(self) -> None:
        """The countdown loop. Blocks until finished or cancelled."""
        with self._lock:
            if self._started:
                return
            self._started = True
        # Running is announced before it takes effect; pause() is a no-op until then.
        self._emit(StateChanged(self, ClockState.RUNNING))
        with self._lock:
            self._state = ClockState.RUNNING

        while True:
            with self._lock:
                if self._remaining <= 0:
                    break
                running = self._state is ClockState.RUNNING
            interval = self._tick_interval if running else self._poll_interval
            if self._cancelled.wait(interval):
                logger.debug("%s cancelled with %ds remaining", self.name, self.remaining)
                return
            with self._lock:
                if self._state is not ClockState.RUNNING:
                    continue
                self._remaining -= 1
                remaining = self._remaining
            self._emit(Tick(self, remaining, self._total))

        if self._cancelled.is_set():
            return
        with self._lock:
            self._state = ClockState.IDLE
        logger.debug("%s finished", self.name)
        self._emit(Finished(self))

    def pause(self) -> None:
        """Running → Paused. No-op in any other state."""
        if self._transition(ClockState.RUNNING, ClockState.PAUSED):
            self._emit(StateChanged(self, ClockState.PAUSED))

    def start(self) -> None:
        """Resume: Paused → Running. No-op in any other state."""
        if self._transition(ClockState.PAUSED, ClockState.RUNNING):
            self._emit(StateChanged(self, ClockState.RUNNING))

    def cancel(self) -> None:
        """Signal the loop to exit at its next suspension point. Never waits."""
        self._cancelled.set()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _transition(self, expected: ClockState, target: ClockState) -> bool:
        with self._lock:
            if self._state is not expected:
                return False
            self._state = target
            return True

    def _emit(self, event: ClockEvent) -> None:
        try:
            self._sink(event)
        except Exception:
            logger.warning("%s: event sink failed on %s", self.name, type(event).__name__, exc_info=True)
