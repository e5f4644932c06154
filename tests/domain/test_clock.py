"""Tests for the Clock state machine and its ticking loop."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import pytest

from pomoctl.domain.clock import Clock, ClockState
from pomoctl.domain.events import ClockEvent, Finished, StateChanged, Tick
from tests.conftest import RecordingSink, wait_until

JOIN_TIMEOUT = 5.0


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


class TestCreation:
    def test_starts_idle_with_full_duration(self, sink: RecordingSink) -> None:
        clock = Clock(1, sink)
        assert clock.state is ClockState.IDLE
        assert clock.total == 60
        assert clock.remaining == 60
        assert sink.events == []

    def test_negative_duration_rejected(self, sink: RecordingSink) -> None:
        with pytest.raises(ValueError, match="negative"):
            Clock(-1, sink)

    def test_start_and_pause_are_noops_when_idle(self, sink: RecordingSink) -> None:
        clock = Clock(1, sink)
        clock.start()
        clock.pause()
        assert clock.state is ClockState.IDLE
        assert sink.events == []


class TestRun:
    def test_state_change_precedes_first_tick(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        clock.begin()
        try:
            assert wait_until(lambda: len(sink.of_type(Tick)) > 0)
            assert clock.state is ClockState.RUNNING
            first = sink.events[0]
            assert isinstance(first, StateChanged)
            assert first.state is ClockState.RUNNING
            assert first.clock is clock
        finally:
            clock.cancel()

    def test_zero_duration_finishes_without_ticks(self, sink: RecordingSink) -> None:
        clock = Clock(0, sink)
        clock.run()
        assert len(sink.of_type(Finished)) == 1
        assert sink.of_type(Tick) == []
        assert clock.state is ClockState.IDLE

    def test_full_countdown(self, sink: RecordingSink, fast_clock: Callable[..., Clock]) -> None:
        clock = fast_clock(1, sink)
        clock.begin().join(JOIN_TIMEOUT)

        ticks = sink.of_type(Tick)
        assert [t.remaining for t in ticks] == list(range(59, -1, -1))
        assert all(t.total == 60 for t in ticks)
        assert len(sink.of_type(Finished)) == 1
        assert isinstance(sink.events[-1], Finished)
        assert clock.remaining == 0
        assert clock.state is ClockState.IDLE

    def test_runs_only_once(self, sink: RecordingSink) -> None:
        clock = Clock(0, sink)
        clock.run()
        count = len(sink.events)
        clock.run()
        assert len(sink.events) == count

    def test_begin_twice_returns_same_thread(self, sink: RecordingSink) -> None:
        clock = Clock(0, sink)
        first = clock.begin()
        assert clock.begin() is first
        first.join(JOIN_TIMEOUT)
        assert len(sink.of_type(Finished)) == 1

    def test_failing_sink_does_not_corrupt_state(
        self, fast_clock: Callable[..., Clock]
    ) -> None:
        seen: list[ClockEvent] = []

        def exploding(event: ClockEvent) -> None:
            seen.append(event)
            msg = "renderer exploded"
            raise RuntimeError(msg)

        clock = fast_clock(1, exploding)
        clock.begin().join(JOIN_TIMEOUT)
        assert clock.remaining == 0
        assert clock.state is ClockState.IDLE
        assert isinstance(seen[-1], Finished)


class TestPauseAndResume:
    def test_pause_notifies_once(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        clock.begin()
        try:
            assert wait_until(lambda: clock.state is ClockState.RUNNING)
            before = len(sink.of_type(StateChanged))
            clock.pause()
            assert clock.state is ClockState.PAUSED
            assert len(sink.of_type(StateChanged)) == before + 1
            assert sink.of_type(StateChanged)[-1].state is ClockState.PAUSED

            clock.pause()
            assert len(sink.of_type(StateChanged)) == before + 1
        finally:
            clock.cancel()

    def test_start_pause_start_sequence(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        clock.begin()
        try:
            assert wait_until(lambda: clock.state is ClockState.RUNNING)
            clock.pause()
            clock.start()
            states = [e.state for e in sink.of_type(StateChanged)]
            assert states == [ClockState.RUNNING, ClockState.PAUSED, ClockState.RUNNING]
            assert clock.state is ClockState.RUNNING
        finally:
            clock.cancel()

    def test_pause_during_start_notification_is_ignored(self) -> None:
        events: list[ClockEvent] = []
        delivering = threading.Event()
        release = threading.Event()

        def slow_sink(event: ClockEvent) -> None:
            events.append(event)
            if len(events) == 1:
                delivering.set()
                release.wait(JOIN_TIMEOUT)

        clock = Clock(1, slow_sink, tick_interval=0.01, poll_interval=0.01)
        clock.begin()
        try:
            assert delivering.wait(JOIN_TIMEOUT)
            clock.pause()
            assert clock.state is ClockState.IDLE

            release.set()
            assert wait_until(lambda: clock.state is ClockState.RUNNING)
            clock.pause()

            states = [e.state for e in events if isinstance(e, StateChanged)]
            assert states == [ClockState.RUNNING, ClockState.PAUSED]
        finally:
            release.set()
            clock.cancel()

    def test_paused_clock_does_not_tick(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        clock.begin()
        try:
            assert wait_until(lambda: len(sink.of_type(Tick)) >= 2)
            clock.pause()
            # A tick already past its state check may still land.
            time.sleep(0.02)
            remaining = clock.remaining
            ticks = len(sink.of_type(Tick))
            time.sleep(0.1)
            assert clock.remaining == remaining
            assert len(sink.of_type(Tick)) == ticks
        finally:
            clock.cancel()

    def test_resume_continues_countdown(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        thread = clock.begin()
        assert wait_until(lambda: clock.state is ClockState.RUNNING)
        clock.pause()
        time.sleep(0.03)
        clock.start()
        thread.join(JOIN_TIMEOUT)
        assert clock.remaining == 0
        assert len(sink.of_type(Finished)) == 1


class TestCancel:
    def test_cancel_running_clock_never_finishes(
        self, sink: RecordingSink, fast_clock: Callable[..., Clock]
    ) -> None:
        clock = fast_clock(1, sink)
        thread = clock.begin()
        assert wait_until(lambda: len(sink.of_type(Tick)) > 0)
        clock.cancel()
        thread.join(JOIN_TIMEOUT)
        assert not thread.is_alive()
        assert clock.cancelled
        assert sink.of_type(Finished) == []
        assert clock.remaining > 0

    def test_cancel_paused_clock_exits_promptly(self, sink: RecordingSink) -> None:
        clock = Clock(1, sink, tick_interval=0.01, poll_interval=0.05)
        thread = clock.begin()
        assert wait_until(lambda: clock.state is ClockState.RUNNING)
        clock.pause()
        clock.cancel()
        thread.join(1.0)
        assert not thread.is_alive()
        assert sink.of_type(Finished) == []

    def test_cancel_wakes_a_one_second_tick(self, sink: RecordingSink) -> None:
        clock = Clock(1, sink)
        thread = clock.begin()
        assert wait_until(lambda: clock.state is ClockState.RUNNING)
        started = time.monotonic()
        clock.cancel()
        thread.join(JOIN_TIMEOUT)
        assert time.monotonic() - started < 0.9
        assert sink.of_type(Tick) == []
        assert sink.of_type(Finished) == []

    def test_cancel_before_begin(self, sink: RecordingSink) -> None:
        clock = Clock(1, sink, tick_interval=0.01)
        clock.cancel()
        clock.begin().join(JOIN_TIMEOUT)
        assert sink.of_type(Finished) == []
        assert clock.remaining == 60
