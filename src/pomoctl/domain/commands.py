"""Interactive command vocabulary.

Input lines are trimmed and matched exactly.  Anything that is not one of
the known verbs becomes an ``unknown`` command carrying the raw text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CommandKind(StrEnum):
    START = "start"
    STOP = "stop"
    RESET = "reset"
    END = "end"
    UNKNOWN = "unknown"


_KNOWN: dict[str, CommandKind] = {
    "start": CommandKind.START,
    "stop": CommandKind.STOP,
    "reset": CommandKind.RESET,
    "end": CommandKind.END,
}


@dataclass(frozen=True)
class Command:
    """A normalized command line."""

    kind: CommandKind
    raw: str

    @property
    def is_unknown(self) -> bool:
        return self.kind is CommandKind.UNKNOWN


def parse_command(raw: str) -> Command | None:
    """Normalize *raw* into a :class:`Command`. Blank input yields None."""
    text = raw.strip()
    if not text:
        return None
    return Command(kind=_KNOWN.get(text, CommandKind.UNKNOWN), raw=text)
