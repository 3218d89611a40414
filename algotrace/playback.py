"""Playback controller — index selection and cancelable autoplay over a trace."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .line_mapping import LineMappingRegistry
from .run_types import PlaybackConfig
from .trace_types import Step
from . import constants

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Strategy for running a callback once after a delay."""

    @abstractmethod
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Any:
        """Schedule *callback* and return a handle accepted by :meth:`cancel`."""
        ...

    @abstractmethod
    def cancel(self, handle: Any) -> None: ...


class AsyncioScheduler(Scheduler):
    """Schedules on an asyncio event loop (the running loop by default)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


@dataclass(frozen=True)
class PlaybackFrame:
    """What the renderer receives on every index change."""

    index: int
    total: int
    step: Step | None
    highlighted_lines: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "total": self.total,
            "currentStep": self.step.to_dict() if self.step is not None else None,
            "highlightedLines": list(self.highlighted_lines),
        }


class PlaybackController:
    """Owns the live trace, current index, play state and speed.

    At most one autoplay advance is pending at any time: every path that
    schedules first cancels the previous handle, and every manual index
    change, speed change, pause or reload cancels it as well.
    """

    def __init__(
        self,
        registry: LineMappingRegistry,
        algorithm_id: str,
        language: str = constants.DEFAULT_LANGUAGE,
        scheduler: Scheduler | None = None,
        config: PlaybackConfig = PlaybackConfig(),
        on_change: Callable[[PlaybackFrame], None] | None = None,
    ):
        self.registry = registry
        self.algorithm_id = algorithm_id
        self.language = language
        self.config = config
        self.on_change = on_change
        self._scheduler = scheduler or AsyncioScheduler()
        self._steps: list[Step] = []
        self._index = 0
        self._playing = False
        self._speed = config.speed
        self._pending: Any = None
        self._generation = 0

    # ── State ────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._steps)

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def has_pending_advance(self) -> bool:
        return self._pending is not None

    @property
    def at_end(self) -> bool:
        return not self._steps or self._index >= len(self._steps) - 1

    def current_frame(self) -> PlaybackFrame:
        if not self._steps:
            return PlaybackFrame(index=0, total=0, step=None)
        step = self._steps[self._index]
        lines = self.registry.resolve(
            self.algorithm_id, step.step_type, self.language, step.step_context
        )
        return PlaybackFrame(
            index=self._index, total=len(self._steps), step=step, highlighted_lines=lines
        )

    # ── Trace and navigation ─────────────────────────────────────

    def load(self, steps: Sequence[Step], algorithm_id: str | None = None) -> None:
        """Replace the trace wholesale; playback restarts paused at index 0."""
        self._cancel_pending()
        self._playing = False
        if algorithm_id is not None:
            self.algorithm_id = algorithm_id
        self._steps = list(steps)
        self._index = 0
        self._notify()

    def seek(self, index: int) -> None:
        self._cancel_pending()
        if not self._steps:
            return
        self._index = max(0, min(index, len(self._steps) - 1))
        self._notify()
        if self._playing:
            self._schedule_advance()

    def step_forward(self) -> None:
        self.seek(self._index + 1)

    def step_backward(self) -> None:
        self.pause()
        self.seek(self._index - 1)

    def reset(self) -> None:
        self.pause()
        self.seek(0)

    def set_language(self, language: str) -> None:
        self.language = language
        self._notify()

    # ── Autoplay ─────────────────────────────────────────────────

    def play(self) -> None:
        if not self._steps:
            return
        if self.at_end:
            self._index = 0
            self._notify()
        self._playing = True
        self._schedule_advance()

    def pause(self) -> None:
        self._playing = False
        self._cancel_pending()

    def toggle(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    def set_speed(self, speed: float) -> None:
        if not self.config.min_speed <= speed <= self.config.max_speed:
            raise ValueError(
                f"Speed must be between {self.config.min_speed} and "
                f"{self.config.max_speed}, got {speed}"
            )
        self._speed = speed
        self._cancel_pending()
        if self._playing:
            self._schedule_advance()

    def advance_delay_ms(self) -> float:
        """Dwell time for the current step at the current speed."""
        timing = self._steps[self._index].timing
        return self.config.advance_delay_ms(timing.duration, timing.delay, self._speed)

    def _schedule_advance(self) -> None:
        self._cancel_pending()
        if self.at_end:
            self._playing = False
            return
        delay_ms = self.advance_delay_ms()
        logger.debug("Scheduling advance from %d in %.0fms", self._index, delay_ms)
        self._generation += 1
        generation = self._generation
        self._pending = self._scheduler.call_later(
            delay_ms / 1000.0, lambda: self._on_timer(generation)
        )

    def _on_timer(self, generation: int) -> None:
        # A superseded handle that still fires must not move the index
        if generation != self._generation:
            return
        self._pending = None
        if not self._playing or self.at_end:
            self._playing = False
            return
        self._index += 1
        self._notify()
        if self.at_end:
            self._playing = False
            return
        self._schedule_advance()

    def _cancel_pending(self) -> None:
        if self._pending is None:
            return
        logger.debug("Cancelling pending advance")
        self._scheduler.cancel(self._pending)
        self._pending = None
        self._generation += 1

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.current_frame())
