"""Pomodoro phases and the audio cues bound to them.

A phase is only a label and a duration.  The clock itself knows nothing
about phases; the session picks the duration and the cues.
"""

from __future__ import annotations

from enum import StrEnum


class Cue(StrEnum):
    """Named audio cues dispatched through the ``play_cue`` hook."""

    WORK_START = "work_start"
    WORK_COMPLETE = "work_complete"
    BREAK_START = "break_start"
    BREAK_COMPLETE = "break_complete"


class Phase(StrEnum):
    """Countdown phase of the work/break cycle."""

    WORK = "work"
    BREAK = "break"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def start_cue(self) -> Cue:
        return Cue.WORK_START if self is Phase.WORK else Cue.BREAK_START

    @property
    def complete_cue(self) -> Cue:
        return Cue.WORK_COMPLETE if self is Phase.WORK else Cue.BREAK_COMPLETE

    @property
    def following(self) -> Phase:
        return Phase.BREAK if self is Phase.WORK else Phase.WORK


_LABELS: dict[Phase, str] = {
    Phase.WORK: "Work",
    Phase.BREAK: "Break",
}
