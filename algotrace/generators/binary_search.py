"""Binary search over a sorted copy of the input."""

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

ALGORITHM_ID = constants.ALGO_BINARY_SEARCH


def _snapshot(array: list[int], left: int, right: int, mid: int | None) -> dict:
    return {
        "array": structure(
            constants.KIND_ARRAY,
            {"values": list(array), "left": left, "right": right, "mid": mid},
            "Sorted Array",
            position="center",
        )
    }


def _window(left: int, right: int) -> list[int]:
    return list(range(left, right + 1))


def generate_binary_search(
    array: Sequence[int] | None = None, target: int | None = None
) -> list[Step]:
    """Trace binary search for *target*; the input is sorted first."""
    array = list(constants.DEFAULT_SEARCH_ARRAY) if array is None else array
    target = constants.DEFAULT_SEARCH_TARGET if target is None else target
    array = sorted(require_int_list(ALGORITHM_ID, "array", array))
    target = require_int(ALGORITHM_ID, "target", target)
    if not array:
        return empty_input_trace(
            ALGORITHM_ID,
            f"The array is empty, so {target} cannot be found.",
            variables={"target": target, "foundIndex": -1, "found": False},
        )

    builder = TraceBuilder(ALGORITHM_ID, {"array": array, "target": target})
    left, right = 0, len(array) - 1
    iterations = 0
    builder.emit(
        StepType.INITIALIZATION,
        f"Search the sorted array for {target}: left = 0, right = {right}.",
        structures=_snapshot(array, left, right, None),
        highlights={"array": [highlight(constants.SELECT_INDICES, _window(left, right), "range")]},
        context=ArrayContext(left=left, right=right, target=target),
        variables={"target": target, "left": left, "right": right},
        duration=constants.TIMING_INTRO_MS,
    )

    while True:
        in_range = left <= right
        builder.emit(
            StepType.LOOP_CONDITION,
            f"Check left ≤ right: {left} ≤ {right} is "
            + ("true, so keep searching." if in_range else "false, so the range is empty."),
            structures=_snapshot(array, left, right, None),
            highlights={"array": [highlight(constants.SELECT_INDICES, _window(left, right), "range")]},
            context=ArrayContext(left=left, right=right, target=target),
            variables={"left": left, "right": right, "continue": in_range},
            duration=constants.TIMING_SHORT_MS,
        )
        if not in_range:
            break

        iterations += 1
        mid = (left + right) // 2
        value = array[mid]
        found = value == target
        if found:
            relation = "equal to"
        elif value < target:
            relation = "less than"
        else:
            relation = "greater than"
        builder.emit(
            StepType.COMPARISON,
            f"mid = ({left} + {right}) // 2 = {mid}; array[{mid}] = {value} is "
            f"{relation} {target}.",
            structures=_snapshot(array, left, right, mid),
            highlights={
                "array": [
                    highlight(constants.SELECT_INDICES, _window(left, right), "range"),
                    highlight(constants.SELECT_INDICES, [mid], "match" if found else "compare"),
                ]
            },
            context=ArrayContext(left=left, right=right, mid=mid, value=value, target=target, found=found),
            variables={"left": left, "right": right, "mid": mid, "midValue": value},
            duration=constants.TIMING_NORMAL_MS,
        )

        if found:
            builder.emit(
                StepType.RETURN_FOUND,
                f"Found {target} at index {mid} after {iterations} iteration(s).",
                structures=_snapshot(array, left, right, mid),
                highlights={"array": [highlight(constants.SELECT_INDICES, [mid], "match")]},
                context=ArrayContext(mid=mid, value=value, target=target, found=True),
                variables={
                    "target": target,
                    "found": True,
                    "foundIndex": mid,
                    "iterations": iterations,
                    "sortedArray": array,
                },
                duration=constants.TIMING_RESULT_MS,
            )
            return builder.finish()

        if value < target:
            left = mid + 1
            direction = "right"
            message = f"{value} < {target}, so discard the left half: left = {left}."
        else:
            right = mid - 1
            direction = "left"
            message = f"{value} > {target}, so discard the right half: right = {right}."
        logger.debug("Narrowed to [%d, %d]", left, right)
        builder.emit(
            StepType.ASSIGNMENT,
            message,
            structures=_snapshot(array, left, right, mid),
            highlights={"array": [highlight(constants.SELECT_INDICES, _window(left, right), "range")]},
            context=ArrayContext(left=left, right=right, mid=mid, target=target, direction=direction),
            variables={"left": left, "right": right, "direction": direction},
            duration=constants.TIMING_NORMAL_MS,
        )

    builder.emit(
        StepType.RETURN_NOT_FOUND,
        f"{target} is not in the array; return -1 after {iterations} iteration(s).",
        structures=_snapshot(array, left, right, None),
        context=ArrayContext(left=left, right=right, target=target, found=False),
        variables={
            "target": target,
            "found": False,
            "foundIndex": -1,
            "iterations": iterations,
            "sortedArray": array,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
