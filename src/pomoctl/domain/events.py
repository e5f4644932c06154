"""Clock notifications as explicit message types.

A clock pushes these into a single :class:`EventSink`.  Every event carries
the clock that produced it so a receiver can drop events from a clock it
has already discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pomoctl.domain.clock import Clock, ClockState


@dataclass(frozen=True)
class Tick:
    """One second elapsed while running."""

    clock: Clock
    remaining: int
    total: int


@dataclass(frozen=True)
class Finished:
    """Remaining time reached zero."""

    clock: Clock


@dataclass(frozen=True)
class StateChanged:
    """Lifecycle transition (Idle→Running, Running↔Paused)."""

    clock: Clock
    state: ClockState


ClockEvent = Tick | Finished | StateChanged


class EventSink(Protocol):
    """Receiver of clock events. Must not raise back into the clock."""

    def __call__(self, event: ClockEvent) -> None: ...
