"""Pluggy hook specifications for pomoctl audio cues.

Cues are fire-and-forget: the timer core never waits on them and never
sees their failures.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("pomoctl")


class PomoctlHookSpec:
    """Hook specifications for the pomoctl plugin system."""

    @hookspec
    def play_cue(self, cue: str) -> None:
        """Play the named cue (``work_start``, ``work_complete``, ``break_start``,
        ``break_complete``)."""

    @hookspec
    def stop_cues(self) -> None:
        """Abort playback in progress. Called once when the timer shuts down."""
