"""Service layer — the timer session, its command reader, and the cycle driver."""

from pomoctl.services.cycle import CycleDriver
from pomoctl.services.reader import CommandReader
from pomoctl.services.session import TimerSession

__all__ = ["CommandReader", "CycleDriver", "TimerSession"]
