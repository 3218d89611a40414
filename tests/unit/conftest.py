"""Shared fixtures: a manual scheduler for playback and the built-in registry."""

from typing import Callable

import pytest

from algotrace.line_mapping import LineMappingRegistry, build_default_registry
from algotrace.playback import Scheduler


class ManualHandle:
    """A pending callback that only runs when the test fires it."""

    def __init__(self, delay_seconds: float, callback: Callable[[], None]):
        self.delay_seconds = delay_seconds
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def live(self) -> bool:
        return not self.cancelled and not self.fired


class ManualScheduler(Scheduler):
    """Scheduler that records callbacks instead of running a clock."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def call_later(self, delay_seconds, callback):
        handle = ManualHandle(delay_seconds, callback)
        self.handles.append(handle)
        return handle

    def cancel(self, handle):
        handle.cancelled = True

    def live(self) -> list[ManualHandle]:
        return [h for h in self.handles if h.live]

    def fire_next(self) -> ManualHandle:
        handle = self.live()[0]
        handle.fired = True
        handle.callback()
        return handle

    def run_until_idle(self, limit: int = 10_000) -> int:
        fired = 0
        while self.live():
            if fired >= limit:
                raise AssertionError("scheduler did not go idle")
            self.fire_next()
            fired += 1
        return fired


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture(scope="module")
def registry() -> LineMappingRegistry:
    return build_default_registry()
