"""CycleDriver — optional work/break auto-advance.

The clock never advances phases on its own.  When a countdown finishes the
session asks the driver what to start next; ``None`` returns to the menu.
"""

from __future__ import annotations

import logging

from pomoctl.domain.phases import Phase

logger = logging.getLogger(__name__)


class CycleDriver:
    """Alternates work and break phases for a number of sets.

    Parameters:
        sets: Full work+break sets to run, or None for no limit.
    """

    def __init__(self, sets: int | None = None) -> None:
        if sets is not None and sets < 1:
            msg = f"sets must be positive, got {sets}"
            raise ValueError(msg)
        self._sets = sets
        self._completed = 0

    @property
    def sets(self) -> int | None:
        return self._sets

    @property
    def completed_sets(self) -> int:
        return self._completed

    @property
    def current_set(self) -> int:
        """1-based number of the set in progress."""
        if self._sets is not None:
            return min(self._completed + 1, self._sets)
        return self._completed + 1

    def reset(self) -> None:
        self._completed = 0

    def next_phase(self, finished: Phase) -> Phase | None:
        """Phase to start after *finished* completes, or None when done."""
        if finished is Phase.WORK:
            return Phase.BREAK
        self._completed += 1
        if self._sets is not None and self._completed >= self._sets:
            logger.debug("All %d sets complete", self._sets)
            return None
        return Phase.WORK
