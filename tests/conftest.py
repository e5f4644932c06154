"""Shared pytest fixtures and test doubles for pomoctl tests."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from functools import partial
from io import StringIO
from typing import Any

import pytest
from click.testing import CliRunner

from pomoctl.domain.clock import Clock
from pomoctl.domain.events import ClockEvent
from pomoctl.output.screen import Screen, TimerView
from pomoctl.output.terminal import Terminal, create_terminal

FAST_TICK = 0.005
FAST_POLL = 0.005


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def terminal(buffer: StringIO, monkeypatch: pytest.MonkeyPatch) -> Terminal:
    """Terminal writing plain text and control codes into ``buffer``."""
    # Rich suppresses cursor control on TERM=dumb.
    monkeypatch.setenv("TERM", "xterm-256color")
    return create_terminal(buffer, no_color=True, width=80)


@pytest.fixture
def screen(terminal: Terminal) -> Screen:
    return Screen(terminal)


@pytest.fixture
def fast_clock() -> Callable[..., Clock]:
    """Clock factory with millisecond ticks so a 1-minute clock runs in ~0.3s."""
    return partial(Clock, tick_interval=FAST_TICK, poll_interval=FAST_POLL)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingSink:
    """Event sink that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[ClockEvent] = []
        self._lock = threading.Lock()

    def __call__(self, event: ClockEvent) -> None:
        with self._lock:
            self.events.append(event)

    def of_type(self, kind: type) -> list[Any]:
        with self._lock:
            return [e for e in self.events if isinstance(e, kind)]


class RecordingScreen:
    """Screen double that records calls by name instead of drawing."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        # Prompt housekeeping is counted apart from the content calls.
        self.prompt_clears = 0
        self._lock = threading.Lock()

    def _record(self, name: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((name, args))

    def names(self) -> list[str]:
        with self._lock:
            return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    def last_view(self) -> TimerView | None:
        with self._lock:
            for name, args in reversed(self.calls):
                if name in ("show_timer_screen", "update_timer"):
                    return args[0]
        return None

    def show_main_menu(self) -> None:
        self._record("show_main_menu")

    def show_timer_screen(self, view: TimerView) -> None:
        self._record("show_timer_screen", view)

    def update_timer(self, view: TimerView) -> None:
        self._record("update_timer", view)

    def show_reset_message(self) -> None:
        self._record("show_reset_message")

    def show_invalid_command(self, raw: str) -> None:
        self._record("show_invalid_command", raw)

    def show_completion(self, phase: Any) -> None:
        self._record("show_completion", phase)

    def show_shutdown(self) -> None:
        self._record("show_shutdown")

    def clear_prompt(self) -> None:
        with self._lock:
            self.prompt_clears += 1


class RecordingCues:
    """Cue player double."""

    def __init__(self) -> None:
        self.played: list[str] = []
        self.shut_down = False

    def play(self, cue: Any) -> None:
        self.played.append(str(cue))

    def shutdown(self) -> None:
        self.shut_down = True


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll *predicate* until it holds or *timeout* elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()
