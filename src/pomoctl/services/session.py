"""TimerSession — owns the active clock and serializes everything touching it.

Three actors interleave here: the command reader thread, the active
clock's own thread, and the main thread waiting for exit.  Every command
and every clock event runs under one re-entrant lock, so a tick delivered
mid-reset can never race the reset's cancellation.

Cancellation is signal-then-release: the session cancels a clock while
holding the lock but never waits for that clock's thread, which may itself
be blocked on the lock to deliver a last event.  Such stale events are
dropped because the clock is no longer the session's active clock.

INVARIANT: At most one clock per session is ever active.
INVARIANT: Once exit is requested, commands and events are no-ops.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from typing import IO, TYPE_CHECKING, Any

from pomoctl.config.models import TimerConfig
from pomoctl.domain.clock import Clock, ClockState
from pomoctl.domain.commands import Command, CommandKind, parse_command
from pomoctl.domain.events import Finished, StateChanged
from pomoctl.domain.phases import Cue, Phase
from pomoctl.output.screen import TimerView
from pomoctl.services.reader import CommandReader

if TYPE_CHECKING:
    from pomoctl.domain.events import ClockEvent, EventSink
    from pomoctl.output.screen import Screen
    from pomoctl.plugins.cues import CuePlayer
    from pomoctl.services.cycle import CycleDriver

logger = logging.getLogger(__name__)

ClockFactory = Callable[[int, "EventSink"], Clock]


class TimerSession:
    """Interactive countdown session driven by typed commands.

    Parameters:
        screen: Render target for menus, timer rows, and notices.
        timer: Phase durations (``[timer]`` settings).
        cues: Audio cue dispatcher; None disables sound.
        cycle: Work/break auto-advance driver; None returns to the menu
            after every countdown.
        clock_factory: Builds a clock from ``(minutes, sink)``.
    """

    def __init__(
        self,
        screen: Screen,
        *,
        timer: TimerConfig | None = None,
        cues: CuePlayer | None = None,
        cycle: CycleDriver | None = None,
        clock_factory: ClockFactory = Clock,
    ) -> None:
        self._screen = screen
        self._timer = timer or TimerConfig()
        self._cues = cues
        self._cycle = cycle
        self._clock_factory = clock_factory
        self._lock = threading.RLock()
        self._exit = threading.Event()
        self._active = False
        self._clock: Clock | None = None
        self._phase = Phase.WORK
        self._torn_down = False
        self._handlers: dict[CommandKind, Callable[[Command], None]] = {
            CommandKind.START: self._on_start,
            CommandKind.STOP: self._on_stop,
            CommandKind.RESET: self._on_reset,
            CommandKind.END: self._on_end,
            CommandKind.UNKNOWN: self._on_unknown,
        }

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    @property
    def exit_requested(self) -> bool:
        return self._exit.is_set()

    @property
    def clock(self) -> Clock | None:
        return self._clock

    @property
    def phase(self) -> Phase:
        return self._phase

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def handle_command(self, raw: str) -> None:
        """Normalize *raw* and apply it. Never raises on bad input."""
        command = parse_command(raw)
        if command is None:
            return
        with self._lock:
            if self._exit.is_set():
                return
            logger.debug("Command: %s", command.raw)
            self._handlers[command.kind](command)
            if not self._exit.is_set():
                self._render(self._screen.clear_prompt)

    def _on_start(self, _command: Command) -> None:
        if not self._active:
            if self._cycle is not None:
                self._cycle.reset()
            self._begin(Phase.WORK)
        elif self._clock is not None and self._clock.state is ClockState.PAUSED:
            self._clock.start()

    def _on_stop(self, _command: Command) -> None:
        if self._active and self._clock is not None and self._clock.state is ClockState.RUNNING:
            self._clock.pause()

    def _on_reset(self, _command: Command) -> None:
        if not self._active:
            return
        self._discard_clock()
        self._render(self._screen.show_reset_message)
        self._render(self._screen.show_main_menu)

    def _on_end(self, _command: Command) -> None:
        logger.debug("Exit requested")
        self._exit.set()

    def _on_unknown(self, command: Command) -> None:
        if self._active:
            self._render(self._screen.show_invalid_command, command.raw)
        else:
            self._render(self._screen.show_main_menu)

    # ------------------------------------------------------------------
    # Clock events
    # ------------------------------------------------------------------

    def dispatch(self, event: ClockEvent) -> None:
        """Single entry point for events pushed by the active clock."""
        with self._lock:
            if self._exit.is_set() or event.clock is not self._clock:
                return
            if isinstance(event, Finished):
                self._on_finish(event.clock)
            elif self._active:
                state = event.state if isinstance(event, StateChanged) else None
                self._render(self._screen.update_timer, self._view(event.clock, state))

    def _on_finish(self, clock: Clock) -> None:
        finished = self._phase
        logger.debug("%s phase finished on %s", finished, clock.name)
        self._active = False
        self._clock = None
        self._play(finished.complete_cue)
        self._render(self._screen.show_completion, finished)

        following = self._cycle.next_phase(finished) if self._cycle is not None else None
        if following is not None:
            self._begin(following)
        else:
            self._render(self._screen.show_main_menu)

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def run(self, stream: IO[str] | None = None) -> None:
        """Read commands from *stream* (default stdin) until ``end``.

        Blocks on the exit signal rather than polling.  The reader thread is
        a daemon and is abandoned, not joined, at exit.
        """
        reader = CommandReader(stream or sys.stdin, self.handle_command, self._exit)
        with self._lock:
            self._render(self._screen.show_main_menu)
        reader.start()
        try:
            self._exit.wait()
        except KeyboardInterrupt:
            logger.debug("Interrupted; shutting down")
            self._exit.set()
        finally:
            self.teardown()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until exit is requested. Returns False on timeout."""
        return self._exit.wait(timeout)

    def teardown(self) -> None:
        """Cancel any countdown and print the shutdown message. Idempotent."""
        with self._lock:
            if self._torn_down:
                return
            self._torn_down = True
            self._exit.set()
            self._discard_clock()
            if self._cues is not None:
                try:
                    self._cues.shutdown()
                except Exception:
                    logger.warning("Cue player shutdown failed", exc_info=True)
            self._render(self._screen.show_shutdown)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _begin(self, phase: Phase) -> None:
        clock = self._clock_factory(self._duration(phase), self.dispatch)
        self._clock = clock
        self._phase = phase
        self._active = True
        logger.debug("Starting %s phase on %s", phase, clock.name)
        self._play(phase.start_cue)
        self._render(self._screen.show_timer_screen, self._view(clock))
        clock.begin()

    def _discard_clock(self) -> None:
        clock = self._clock
        self._clock = None
        self._active = False
        if clock is not None:
            clock.cancel()

    def _duration(self, phase: Phase) -> int:
        if phase is Phase.WORK:
            return self._timer.work_minutes
        return self._timer.break_minutes

    def _view(self, clock: Clock, state: ClockState | None = None) -> TimerView:
        set_number = total_sets = None
        if self._cycle is not None:
            set_number = self._cycle.current_set
            total_sets = self._cycle.sets
        return TimerView(
            phase=self._phase,
            remaining=clock.remaining,
            total=clock.total,
            state=state or clock.state,
            set_number=set_number,
            total_sets=total_sets,
        )

    def _play(self, cue: Cue) -> None:
        if self._cues is None:
            return
        try:
            self._cues.play(cue)
        except Exception:
            logger.warning("Cue %s failed", cue, exc_info=True)

    def _render(self, fn: Callable[..., None], *args: Any) -> None:
        try:
            fn(*args)
        except Exception:
            logger.warning(
                "Screen update %s failed", getattr(fn, "__name__", fn), exc_info=True
            )
