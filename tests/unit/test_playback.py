"""Tests for PlaybackController — navigation, autoplay and timer cancellation."""

import asyncio

import pytest

from algotrace.generators.coin_change import generate_coin_change
from algotrace.playback import AsyncioScheduler, PlaybackController, PlaybackFrame
from algotrace.run_types import PlaybackConfig
from algotrace.step_types import StepType
from algotrace.trace_types import Step, Timing
from algotrace import constants


def _steps(n: int, duration: int = 1000, delay: int | None = None) -> list[Step]:
    return [
        Step(
            id=i,
            step_type=StepType.ASSIGNMENT,
            explanation=f"step {i}",
            timing=Timing(duration=duration, delay=delay),
        )
        for i in range(n)
    ]


def _controller(registry, scheduler, steps=None, frames=None, **kwargs):
    controller = PlaybackController(
        registry,
        constants.ALGO_COIN_CHANGE,
        scheduler=scheduler,
        on_change=frames.append if frames is not None else None,
        **kwargs,
    )
    controller.load(steps if steps is not None else _steps(5))
    return controller


class TestAdvanceDelay:
    def test_duration_scaled_by_speed(self):
        assert PlaybackConfig().advance_delay_ms(1200, None, 2.0) == 600

    def test_delay_added_and_scaled(self):
        assert PlaybackConfig().advance_delay_ms(1000, 500, 2.0) == 750

    def test_minimum_floor(self):
        assert PlaybackConfig().advance_delay_ms(200, None, 3.0) == 200

    def test_missing_duration_uses_fallback(self):
        assert PlaybackConfig().advance_delay_ms(0, None, 1.0) == 1500


class TestNavigation:
    def test_load_starts_paused_at_zero(self, registry, scheduler):
        frames = []
        controller = _controller(registry, scheduler, frames=frames)
        assert controller.index == 0
        assert controller.total == 5
        assert not controller.is_playing
        assert frames[-1].index == 0

    def test_seek_clamps(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.seek(99)
        assert controller.index == 4
        controller.seek(-3)
        assert controller.index == 0

    def test_step_forward_and_back(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.step_forward()
        controller.step_forward()
        assert controller.index == 2
        controller.step_backward()
        assert controller.index == 1

    def test_step_backward_pauses(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.seek(3)
        controller.play()
        controller.step_backward()
        assert not controller.is_playing
        assert not controller.has_pending_advance
        assert scheduler.live() == []

    def test_reset(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.seek(3)
        controller.play()
        controller.reset()
        assert controller.index == 0
        assert not controller.is_playing

    def test_frame_carries_resolved_lines(self, registry, scheduler):
        trace = generate_coin_change([1, 3, 4], 6)
        frames = []
        controller = _controller(registry, scheduler, steps=trace, frames=frames)
        controller.seek(1)
        assert frames[-1].step is trace[1]
        assert frames[-1].highlighted_lines == [5]

    def test_language_switch_re_resolves(self, registry, scheduler):
        trace = generate_coin_change([1, 3, 4], 6)
        frames = []
        controller = _controller(registry, scheduler, steps=trace, frames=frames)
        controller.seek(1)
        controller.set_language("cpp")
        assert frames[-1].highlighted_lines == [10]
        assert controller.index == 1

    def test_empty_trace_frame(self, registry, scheduler):
        controller = _controller(registry, scheduler, steps=[])
        frame = controller.current_frame()
        assert frame == PlaybackFrame(index=0, total=0, step=None)
        controller.play()
        assert not controller.is_playing

    def test_frame_to_dict(self, registry, scheduler):
        frame = _controller(registry, scheduler).current_frame().to_dict()
        assert frame["index"] == 0
        assert frame["total"] == 5
        assert frame["currentStep"]["id"] == 0
        assert frame["highlightedLines"] == [1]


class TestAutoplay:
    def test_play_schedules_one_advance(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        assert controller.is_playing
        assert len(scheduler.live()) == 1
        assert scheduler.live()[0].delay_seconds == pytest.approx(1.0)

    def test_timer_advances_and_reschedules(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        scheduler.fire_next()
        assert controller.index == 1
        assert len(scheduler.live()) == 1

    def test_runs_to_end_and_stops(self, registry, scheduler):
        frames = []
        controller = _controller(registry, scheduler, frames=frames)
        controller.play()
        fired = scheduler.run_until_idle()
        assert fired == 4
        assert controller.index == 4
        assert not controller.is_playing
        assert not controller.has_pending_advance
        assert [f.index for f in frames] == [0, 1, 2, 3, 4]

    def test_play_at_end_restarts(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.seek(4)
        controller.play()
        assert controller.index == 0
        assert controller.is_playing

    def test_pause_cancels_pending(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        pending = scheduler.live()[0]
        controller.pause()
        assert pending.cancelled
        assert scheduler.live() == []

    def test_toggle(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.toggle()
        assert controller.is_playing
        controller.toggle()
        assert not controller.is_playing

    def test_rapid_seeks_leave_one_pending(self, registry, scheduler):
        controller = _controller(registry, scheduler, steps=_steps(10))
        controller.play()
        for index in (3, 1, 7, 2, 5):
            controller.seek(index)
        assert len(scheduler.live()) == 1
        scheduler.fire_next()
        assert controller.index == 6

    def test_speed_change_reschedules_once(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        controller.set_speed(2.0)
        controller.set_speed(0.5)
        live = scheduler.live()
        assert len(live) == 1
        assert live[0].delay_seconds == pytest.approx(2.0)

    def test_speed_change_while_paused_schedules_nothing(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.set_speed(3.0)
        assert controller.speed == 3.0
        assert scheduler.live() == []

    @pytest.mark.parametrize("speed", [0.1, 3.5, 0])
    def test_speed_out_of_range(self, registry, scheduler, speed):
        controller = _controller(registry, scheduler)
        with pytest.raises(ValueError):
            controller.set_speed(speed)
        assert controller.speed == 1.0

    def test_delay_field_extends_dwell(self, registry, scheduler):
        controller = _controller(registry, scheduler, steps=_steps(3, duration=1000, delay=500))
        controller.play()
        assert scheduler.live()[0].delay_seconds == pytest.approx(1.5)

    def test_reload_cancels_pending(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        controller.load(_steps(2))
        assert scheduler.live() == []
        assert not controller.is_playing
        assert controller.total == 2

    def test_stale_timer_is_ignored(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        stale = scheduler.live()[0]
        controller.pause()
        stale.callback()
        assert controller.index == 0

    def test_superseded_timer_ignored_while_playing(self, registry, scheduler):
        controller = _controller(registry, scheduler)
        controller.play()
        stale = scheduler.live()[0]
        controller.seek(2)
        stale.callback()
        assert controller.index == 2
        assert controller.is_playing
        assert len(scheduler.live()) == 1


class TestAsyncioScheduler:
    def test_plays_through_on_event_loop(self, registry):
        config = PlaybackConfig(min_duration_ms=0)

        async def run() -> PlaybackController:
            controller = PlaybackController(
                registry,
                constants.ALGO_COIN_CHANGE,
                scheduler=AsyncioScheduler(),
                config=config,
            )
            controller.load(_steps(4, duration=1))
            controller.play()
            for _ in range(100):
                if not controller.is_playing:
                    break
                await asyncio.sleep(0.01)
            return controller

        controller = asyncio.run(run())
        assert controller.index == 3
        assert not controller.is_playing

    def test_cancel(self):
        async def run() -> list[int]:
            fired = []
            scheduler = AsyncioScheduler()
            handle = scheduler.call_later(0.01, lambda: fired.append(1))
            scheduler.cancel(handle)
            await asyncio.sleep(0.05)
            return fired

        assert asyncio.run(run()) == []
