"""Built-in terminal bell plugin.

Start cues ring once, completion cues ring twice.
"""

from __future__ import annotations

import sys
import time
from typing import IO

import pluggy

hookimpl = pluggy.HookimplMarker("pomoctl")

_RINGS: dict[str, int] = {
    "work_start": 1,
    "break_start": 1,
    "work_complete": 2,
    "break_complete": 2,
}


class BellPlugin:
    """Rings the terminal bell (``\\a``) for each cue."""

    def __init__(self, stream: IO[str] | None = None, *, gap: float = 0.15) -> None:
        self._stream = stream
        self._gap = gap

    @hookimpl
    def play_cue(self, cue: str) -> None:
        stream = self._stream or sys.stdout
        rings = _RINGS.get(cue, 1)
        for i in range(rings):
            if i:
                time.sleep(self._gap)
            stream.write("\a")
            stream.flush()
