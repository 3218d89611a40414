"""Playback configuration data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaybackConfig:
    """Groups autoplay tuning for the playback controller."""

    speed: float = 1.0
    min_speed: float = 0.25
    max_speed: float = 3.0
    min_duration_ms: int = 200
    fallback_duration_ms: int = 1500

    def advance_delay_ms(self, duration: int | None, delay: int | None, speed: float) -> float:
        """Milliseconds to wait before auto-advancing past a step."""
        base = duration if duration else self.fallback_duration_ms
        return max(self.min_duration_ms, base / speed) + (delay or 0) / speed
