"""Fixed-layout timer screen.

Layout (0-based rows)::

    0  banner
    2  phase line
    3  timer line      Remaining 24:59 [#-----...] 0%
    4  action menu     (depends on Running / Paused / menu)
    5  notice line     transient messages
    7  prompt          "> "

Full redraws (``show_main_menu``, ``show_timer_screen``) clear the screen
but repaint the most recent notice once, so a notice followed by a redraw
(reset, completion) stays visible until the next full redraw.
Everything else rewrites only its own rows and then parks the cursor after
the prompt, so the prompt row is never repainted mid-session.
``clear_prompt`` only erases the echoed input to the right of the prompt.
"""

from __future__ import annotations

from dataclasses import dataclass

from pomoctl.domain.clock import ClockState
from pomoctl.domain.phases import Phase
from pomoctl.domain.progress import elapsed_fraction, format_time, generate, percentage
from pomoctl.output.terminal import Terminal

BANNER_ROW = 0
PHASE_ROW = 2
TIMER_ROW = 3
MENU_ROW = 4
NOTICE_ROW = 5
PROMPT_ROW = 7

PROMPT = "> "
BANNER = "=== Pomodoro Timer ==="

MAIN_MENU = "Commands: start (begin work)  end (quit)"
RUNNING_MENU = "Commands: stop (pause)  reset (back to menu)  end (quit)"
PAUSED_MENU = "Commands: start (resume)  reset (back to menu)  end (quit)"

RESET_MESSAGE = "Timer reset."
SHUTDOWN_MESSAGE = "Pomodoro timer stopped. Good work!"


@dataclass(frozen=True)
class TimerView:
    """Snapshot of everything the timer rows display."""

    phase: Phase
    remaining: int
    total: int
    state: ClockState
    set_number: int | None = None
    total_sets: int | None = None

    @property
    def time_text(self) -> str:
        return format_time(self.remaining)

    @property
    def bar(self) -> str:
        return generate(elapsed_fraction(self.remaining, self.total))

    @property
    def percent(self) -> int:
        return percentage(self.remaining, self.total)


def timer_line(view: TimerView) -> str:
    return f"Remaining {view.time_text} {view.bar} {view.percent}%"


def phase_line(view: TimerView) -> str:
    minutes = view.total // 60
    text = f"Phase: {view.phase.label} ({minutes} min)"
    if view.set_number is not None:
        of = f"/{view.total_sets}" if view.total_sets else ""
        text += f"  Set {view.set_number}{of}"
    if view.state is ClockState.PAUSED:
        text += "  [paused]"
    return text


def menu_line(view: TimerView) -> str:
    return PAUSED_MENU if view.state is ClockState.PAUSED else RUNNING_MENU


class Screen:
    """Draws the menu and timer layouts onto a :class:`Terminal`."""

    def __init__(
        self,
        terminal: Terminal,
        *,
        work_minutes: int = 25,
        break_minutes: int = 5,
    ) -> None:
        self._term = terminal
        self._work_minutes = work_minutes
        self._break_minutes = break_minutes
        # Last notice, repainted once by the next full redraw.
        self._carried: tuple[str, str] | None = None

    # ------------------------------------------------------------------
    # Full redraws
    # ------------------------------------------------------------------

    def show_main_menu(self) -> None:
        self._redraw()
        self._row(
            PHASE_ROW,
            f"Work {self._work_minutes} min / Break {self._break_minutes} min",
        )
        self._row(MENU_ROW, MAIN_MENU, "pomo.menu")
        self._park()

    def show_timer_screen(self, view: TimerView) -> None:
        self._redraw()
        self._timer_rows(view)
        self._park()

    # ------------------------------------------------------------------
    # Partial updates
    # ------------------------------------------------------------------

    def update_timer(self, view: TimerView) -> None:
        self._term.show_cursor(False)
        self._timer_rows(view)
        self._park()

    def show_notice(self, text: str, style: str = "pomo.notice") -> None:
        self._carried = (text, style)
        self._term.show_cursor(False)
        self._row(NOTICE_ROW, text, style)
        self._park()

    def show_reset_message(self) -> None:
        self.show_notice(RESET_MESSAGE)

    def show_invalid_command(self, raw: str) -> None:
        self.show_notice(f"Invalid command: {raw}", "pomo.error")

    def show_completion(self, phase: Phase) -> None:
        self.show_notice(f"{phase.label} finished!", "pomo.ok")

    def clear_prompt(self) -> None:
        """Erase echoed input after the prompt, leaving the cursor there."""
        self._term.move_to_row(PROMPT_ROW, len(PROMPT))
        self._term.clear_to_end_of_line()
        self._term.show_cursor(True)
        self._term.flush()

    def show_shutdown(self) -> None:
        self._term.move_to_row(PROMPT_ROW + 1)
        self._term.clear_line()
        self._term.write(SHUTDOWN_MESSAGE, "pomo.banner")
        self._term.newline()
        self._term.show_cursor(True)
        self._term.flush()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _redraw(self) -> None:
        self._term.show_cursor(False)
        self._term.clear_screen()
        self._row(BANNER_ROW, BANNER, "pomo.banner")
        if self._carried is not None:
            self._row(NOTICE_ROW, *self._carried)
            self._carried = None
        self._row(PROMPT_ROW, PROMPT, "pomo.prompt")

    def _timer_rows(self, view: TimerView) -> None:
        self._row(PHASE_ROW, phase_line(view), f"pomo.phase.{view.phase.value}")
        self._row(TIMER_ROW, timer_line(view), "pomo.time")
        self._row(MENU_ROW, menu_line(view), "pomo.menu")

    def _row(self, row: int, text: str, style: str | None = None) -> None:
        self._term.move_to_row(row)
        self._term.clear_line()
        self._term.write(text, style)

    def _park(self) -> None:
        self._term.move_to_row(PROMPT_ROW, len(PROMPT))
        self._term.show_cursor(True)
        self._term.flush()
