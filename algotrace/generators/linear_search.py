"""Linear search — scan left to right until the target is found."""

from __future__ import annotations

import logging
from typing import Sequence

from ..context_types import ArrayContext
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import (
    TraceBuilder,
    empty_input_trace,
    highlight,
    require_int,
    require_int_list,
    structure,
)

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_LINEAR_SEARCH


def _snapshot(array: list[int], checked: list[int]) -> dict:
    return {
        "array": structure(
            constants.KIND_ARRAY,
            {"values": list(array), "checked": list(checked)},
            "Array",
            position="center",
        )
    }


def generate_linear_search(
    array: Sequence[int] | None = None, target: int | None = None
) -> list[Step]:
    array = list(constants.DEFAULT_SEARCH_ARRAY) if array is None else array
    target = constants.DEFAULT_SEARCH_TARGET if target is None else target
    array = require_int_list(ALGORITHM_ID, "array", array)
    target = require_int(ALGORITHM_ID, "target", target)
    if not array:
        return empty_input_trace(
            ALGORITHM_ID,
            f"The array is empty, so {target} cannot be found.",
            variables={"target": target, "foundIndex": -1, "found": False},
        )

    builder = TraceBuilder(ALGORITHM_ID, {"array": array, "target": target})
    checked: list[int] = []
    builder.emit(
        StepType.INITIALIZATION,
        f"Search for {target} by checking each of the {len(array)} elements in order.",
        structures=_snapshot(array, checked),
        context=ArrayContext(target=target),
        variables={"target": target, "length": len(array)},
        duration=constants.TIMING_INTRO_MS,
    )

    for index, value in enumerate(array):
        builder.emit(
            StepType.LOOP_START,
            f"Move to index {index}.",
            structures=_snapshot(array, checked),
            highlights={"array": [highlight(constants.SELECT_INDICES, [index], "current")]},
            context=ArrayContext(index=index, target=target),
            variables={"i": index, "target": target},
            duration=constants.TIMING_SHORT_MS,
        )
        found = value == target
        builder.emit(
            StepType.COMPARISON,
            f"Compare array[{index}] = {value} with {target}: "
            + ("they are equal." if found else "not equal."),
            structures=_snapshot(array, checked),
            highlights={
                "array": [highlight(constants.SELECT_INDICES, [index], "match" if found else "compare")]
            },
            context=ArrayContext(index=index, value=value, target=target, found=found),
            variables={"i": index, "value": value, "target": target, "isMatch": found},
            duration=constants.TIMING_NORMAL_MS,
        )
        checked.append(index)
        if found:
            logger.debug("Found %s at index %d", target, index)
            builder.emit(
                StepType.RETURN_FOUND,
                f"Found {target} at index {index} after {len(checked)} comparison(s).",
                structures=_snapshot(array, checked),
                highlights={"array": [highlight(constants.SELECT_INDICES, [index], "match")]},
                context=ArrayContext(index=index, value=value, target=target, found=True),
                variables={
                    "target": target,
                    "found": True,
                    "foundIndex": index,
                    "comparisons": len(checked),
                },
                duration=constants.TIMING_RESULT_MS,
            )
            return builder.finish()
        builder.emit(
            StepType.ASSIGNMENT,
            f"{value} is not the target; advance i to {index + 1}.",
            structures=_snapshot(array, checked),
            highlights={"array": [highlight(constants.SELECT_INDICES, checked, "visited")]},
            context=ArrayContext(index=index + 1, target=target, operation="increment"),
            variables={"i": index + 1},
            duration=constants.TIMING_SHORT_MS,
        )

    builder.emit(
        StepType.RETURN_NOT_FOUND,
        f"Every element was checked and none equals {target}; return -1.",
        structures=_snapshot(array, checked),
        highlights={"array": [highlight(constants.SELECT_INDICES, checked, "mismatch")]},
        context=ArrayContext(target=target, found=False),
        variables={
            "target": target,
            "found": False,
            "foundIndex": -1,
            "comparisons": len(checked),
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
