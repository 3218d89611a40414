"""Shared trace-building helpers for all generators."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Highlight, Step, StructureSnapshot, Timing
from .. import constants

logger = logging.getLogger(__name__)


def structure(
    kind: str,
    data: Any,
    label: str,
    position: str | None = None,
    style: str | None = None,
) -> StructureSnapshot:
    """Build a snapshot entry; the builder deep-copies it on emit."""
    metadata: dict[str, Any] = {"label": label}
    if position is not None:
        metadata["position"] = position
    if style is not None:
        metadata["style"] = style
    return StructureSnapshot(kind=kind, data=data, metadata=metadata)


def highlight(
    selector: str, values: Iterable[Any], style: str, color: str | None = None
) -> Highlight:
    return Highlight(selector=selector, values=tuple(values), style=style, color=color)


class TraceBuilder:
    """Accumulates steps with sequential ids and independent snapshots.

    Every structure, highlight list and variable mapping passed to
    :meth:`emit` is deep-copied, so generators may keep mutating their
    working state after a step is recorded.
    """

    def __init__(self, algorithm_id: str, inputs: dict[str, Any] | None = None):
        self.algorithm_id = algorithm_id
        self.inputs = copy.deepcopy(inputs or {})
        self._steps: list[Step] = []

    def __len__(self) -> int:
        return len(self._steps)

    def emit(
        self,
        step_type: StepType,
        explanation: str,
        *,
        structures: dict[str, StructureSnapshot] | None = None,
        highlights: dict[str, list[Highlight]] | None = None,
        context: Any = None,
        variables: dict[str, Any] | None = None,
        duration: int = constants.TIMING_SHORT_MS,
        delay: int | None = None,
    ) -> Step:
        snapshots = {
            name: StructureSnapshot(
                kind=snap.kind,
                data=copy.deepcopy(snap.data),
                metadata=copy.deepcopy(snap.metadata),
            )
            for name, snap in (structures or {}).items()
        }
        step = Step(
            id=len(self._steps),
            step_type=step_type,
            explanation=explanation,
            data_structures=snapshots,
            highlights={
                name: list(hs) for name, hs in (highlights or {}).items() if hs
            },
            step_context=context,
            variables=copy.deepcopy(variables or {}),
            timing=Timing(duration=duration, delay=delay),
        )
        self._steps.append(step)
        return step

    def finish(self) -> list[Step]:
        logger.info(
            "Generated %d steps for %s from %s",
            len(self._steps),
            self.algorithm_id,
            self.inputs,
        )
        return list(self._steps)


def empty_input_trace(
    algorithm_id: str,
    reason: str,
    structures: dict[str, StructureSnapshot] | None = None,
    variables: dict[str, Any] | None = None,
) -> list[Step]:
    """One-step trace documenting a recoverable degenerate input."""
    builder = TraceBuilder(algorithm_id, {"reason": reason})
    builder.emit(
        StepType.EMPTY_INPUT,
        reason,
        structures=structures,
        variables={"reason": reason, **(variables or {})},
        duration=constants.TIMING_INTRO_MS,
    )
    return builder.finish()


def format_value(value: Any) -> str:
    """Render a DP cell for narration; the no-candidate sentinel becomes ∞."""
    if value == constants.NO_CANDIDATE:
        return constants.NO_CANDIDATE_DISPLAY
    return str(value)


def require_int(algorithm_id: str, name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(algorithm_id, f"{name} must be an integer, got {value!r}")
    return value


def require_sequence(algorithm_id: str, name: str, values: Any) -> list:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise InvalidInputError(algorithm_id, f"{name} must be a list, got {values!r}")
    return list(values)


def require_int_list(algorithm_id: str, name: str, values: Any) -> list[int]:
    if not isinstance(values, (list, tuple)):
        raise InvalidInputError(algorithm_id, f"{name} must be a list of integers")
    return [require_int(algorithm_id, f"{name}[{i}]", v) for i, v in enumerate(values)]
