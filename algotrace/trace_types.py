"""Trace data types for step-by-step algorithm replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .step_types import StepType


@dataclass(frozen=True)
class Timing:
    """Suggested on-screen dwell time for a step, in milliseconds."""

    duration: int
    delay: int | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"duration": self.duration}
        if self.delay is not None:
            d["delay"] = self.delay
        return d


@dataclass(frozen=True)
class StructureSnapshot:
    """A deep-copied view of one data structure at the moment a step was recorded."""

    kind: str
    data: Any
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"type": self.kind, "data": self.data, "metadata": self.metadata}


@dataclass(frozen=True)
class Highlight:
    """Which elements of a snapshot are called out (values) and why (style)."""

    selector: str
    values: tuple[Any, ...]
    style: str
    color: str | None = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "type": self.selector,
            "values": list(self.values),
            "style": self.style,
        }
        if self.color is not None:
            d["color"] = self.color
        return d


@dataclass(frozen=True)
class Step:
    """A single immutable step in an algorithm trace.

    Carries everything needed to render or resolve it: structure snapshots,
    highlights, the event tag and its context, narration, watch variables
    and timing. No step refers to its neighbours.
    """

    id: int
    step_type: StepType
    explanation: str
    data_structures: dict[str, StructureSnapshot] = field(default_factory=dict)
    highlights: dict[str, list[Highlight]] = field(default_factory=dict)
    step_context: Any = None  # StepContext
    variables: dict[str, Any] = field(default_factory=dict)
    timing: Timing = field(default_factory=lambda: Timing(duration=1000))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "dataStructures": {
                name: snap.to_dict() for name, snap in self.data_structures.items()
            },
            "highlights": {
                name: [h.to_dict() for h in hs] for name, hs in self.highlights.items()
            },
            "stepType": self.step_type.value,
            "stepContext": (
                self.step_context.to_dict() if self.step_context is not None else None
            ),
            "explanation": self.explanation,
            "variables": self.variables,
            "timing": self.timing.to_dict(),
        }
