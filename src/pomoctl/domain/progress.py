"""Progress bar rendering and countdown arithmetic.

All durations are whole seconds.  Minutes only appear at the configuration
boundary and are converted with :func:`minutes_to_seconds`.
"""

from __future__ import annotations

import math

BAR_LENGTH = 30
FILL_CHAR = "#"
EMPTY_CHAR = "-"


def generate(progress: float) -> str:
    """Render *progress* (0.0 to 1.0) as a fixed-width bar.

    No clamping is performed: callers must keep *progress* within range.
    """
    completed = int(progress * BAR_LENGTH)
    remaining = BAR_LENGTH - completed
    return "[" + FILL_CHAR * completed + EMPTY_CHAR * remaining + "]"


def minutes_to_seconds(minutes: int) -> int:
    return int(minutes) * 60


def format_time(seconds: int) -> str:
    """Format *seconds* as ``MM:SS``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def elapsed_fraction(remaining: int, total: int) -> float:
    """Fraction of *total* already elapsed. A zero-length countdown is complete."""
    if total <= 0:
        return 1.0
    return (total - remaining) / total


def percentage(remaining: int, total: int) -> int:
    return math.floor(elapsed_fraction(remaining, total) * 100)
