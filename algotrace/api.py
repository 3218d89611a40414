"""Composable API functions for generating and resolving algorithm traces.

Each function corresponds to a CLI workflow but is callable
programmatically without argparse.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any, Sequence

from .errors import InvalidInputError
from .generators import get_generator
from .line_mapping import LineMappingRegistry, build_default_registry
from .playback import PlaybackFrame
from .trace_types import Step

logger = logging.getLogger(__name__)


def generate_trace(algorithm_id: str, **inputs: Any) -> list[Step]:
    """Run the trace generator for *algorithm_id* on *inputs*.

    Args:
        algorithm_id: A registered algorithm id (e.g. "coin-change").
        **inputs: Keyword arguments for that generator; omitted ones use defaults.

    Returns:
        The complete, immutable step sequence.

    Raises:
        ValueError: If *algorithm_id* is unknown.
        InvalidInputError: If *inputs* do not fit the generator.
    """
    generator = get_generator(algorithm_id)
    try:
        inspect.signature(generator).bind(**inputs)
    except TypeError as exc:
        raise InvalidInputError(algorithm_id, str(exc)) from exc
    logger.info("Generating trace for %s with %s", algorithm_id, sorted(inputs))
    return generator(**inputs)


def trace_to_dicts(steps: Sequence[Step]) -> list[dict]:
    return [step.to_dict() for step in steps]


def dump_trace(steps: Sequence[Step], indent: int | None = 2) -> str:
    """Serialize *steps* to JSON in the camelCase wire shape."""
    return json.dumps(trace_to_dicts(steps), indent=indent, ensure_ascii=False)


def resolve_lines(
    registry: LineMappingRegistry, algorithm_id: str, step: Step, language: str
) -> list[int]:
    """Resolve the source lines to highlight for *step* in *language*."""
    return registry.resolve(algorithm_id, step.step_type, language, step.step_context)


def build_frames(
    steps: Sequence[Step],
    algorithm_id: str,
    language: str,
    registry: LineMappingRegistry | None = None,
) -> list[PlaybackFrame]:
    """Pair every step with its highlighted lines, as a renderer would see them.

    Args:
        steps: A generated trace.
        algorithm_id: Algorithm the trace belongs to.
        language: Display language for line resolution.
        registry: Registry to resolve against; defaults to the built-in tables.

    Returns:
        One frame per step, in order.
    """
    registry = registry or build_default_registry()
    return [
        PlaybackFrame(
            index=i,
            total=len(steps),
            step=step,
            highlighted_lines=resolve_lines(registry, algorithm_id, step, language),
        )
        for i, step in enumerate(steps)
    ]
