"""Two sum — converging pointers over a sorted copy."""

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

ALGORITHM_ID = constants.ALGO_TWO_SUM


def _snapshot(array: list[int], left: int, right: int) -> dict:
    return {
        "array": structure(
            constants.KIND_ARRAY,
            {"values": list(array), "left": left, "right": right},
            "Sorted Array",
            position="center",
        )
    }


def generate_two_sum(
    array: Sequence[int] | None = None, target: int | None = None
) -> list[Step]:
    """Trace the two-pointer search for a pair summing to *target*.

    Indices in the result refer to the sorted copy of *array*.
    """
    array = list(constants.DEFAULT_TWO_SUM_ARRAY) if array is None else array
    target = constants.DEFAULT_TWO_SUM_TARGET if target is None else target
    array = sorted(require_int_list(ALGORITHM_ID, "array", array))
    target = require_int(ALGORITHM_ID, "target", target)
    if len(array) < 2:
        return empty_input_trace(
            ALGORITHM_ID,
            f"At least two numbers are needed to form a pair summing to {target}.",
            variables={"target": target, "found": False, "pair": []},
        )

    builder = TraceBuilder(ALGORITHM_ID, {"array": array, "target": target})
    builder.emit(
        StepType.INITIALIZATION,
        f"Sort the input to {array} and look for two numbers that add up to {target}.",
        structures=_snapshot(array, -1, -1),
        context=ArrayContext(target=target),
        variables={"target": target, "sortedArray": array},
        duration=constants.TIMING_INTRO_MS,
    )

    left, right = 0, len(array) - 1
    builder.emit(
        StepType.POINTER_INITIALIZATION,
        f"Place the left pointer at index 0 ({array[0]}) and the right pointer at "
        f"index {right} ({array[right]}).",
        structures=_snapshot(array, left, right),
        highlights={
            "array": [
                highlight(constants.SELECT_INDICES, [left], "left_pointer"),
                highlight(constants.SELECT_INDICES, [right], "right_pointer"),
            ]
        },
        context=ArrayContext(left=left, right=right, target=target),
        variables={"left": left, "right": right},
        duration=constants.TIMING_NORMAL_MS,
    )

    while left < right:
        builder.emit(
            StepType.LOOP_CONDITION,
            f"left ({left}) < right ({right}), so check this pair.",
            structures=_snapshot(array, left, right),
            context=ArrayContext(left=left, right=right, target=target),
            variables={"left": left, "right": right},
            duration=constants.TIMING_SHORT_MS,
        )
        total = array[left] + array[right]
        found = total == target
        if found:
            relation = "equals"
        elif total < target:
            relation = "is less than"
        else:
            relation = "is greater than"
        builder.emit(
            StepType.COMPARISON,
            f"{array[left]} + {array[right]} = {total}, which {relation} {target}.",
            structures=_snapshot(array, left, right),
            highlights={
                "array": [
                    highlight(constants.SELECT_INDICES, [left, right], "match" if found else "compare")
                ]
            },
            context=ArrayContext(left=left, right=right, value=total, target=target, found=found),
            variables={"left": left, "right": right, "sum": total, "target": target},
            duration=constants.TIMING_NORMAL_MS,
        )
        if found:
            logger.debug("Pair found at indices %d and %d", left, right)
            builder.emit(
                StepType.RETURN_FOUND,
                f"Return the pair ({array[left]}, {array[right]}) at sorted indices "
                f"[{left}, {right}].",
                structures=_snapshot(array, left, right),
                highlights={"array": [highlight(constants.SELECT_INDICES, [left, right], "match")]},
                context=ArrayContext(left=left, right=right, value=total, target=target, found=True),
                variables={
                    "target": target,
                    "found": True,
                    "indices": [left, right],
                    "pair": [array[left], array[right]],
                },
                duration=constants.TIMING_RESULT_MS,
            )
            return builder.finish()

        if total < target:
            left += 1
            builder.emit(
                StepType.POINTER_MOVE_LEFT,
                f"The sum is too small; move the left pointer right to index {left} ({array[left]}).",
                structures=_snapshot(array, left, right),
                highlights={"array": [highlight(constants.SELECT_INDICES, [left], "left_pointer")]},
                context=ArrayContext(left=left, right=right, target=target, direction="right"),
                variables={"left": left, "right": right},
                duration=constants.TIMING_NORMAL_MS,
            )
        else:
            right -= 1
            builder.emit(
                StepType.POINTER_MOVE_RIGHT,
                f"The sum is too large; move the right pointer left to index {right} ({array[right]}).",
                structures=_snapshot(array, left, right),
                highlights={"array": [highlight(constants.SELECT_INDICES, [right], "right_pointer")]},
                context=ArrayContext(left=left, right=right, target=target, direction="left"),
                variables={"left": left, "right": right},
                duration=constants.TIMING_NORMAL_MS,
            )

    builder.emit(
        StepType.RETURN_NOT_FOUND,
        f"The pointers met without finding a pair that sums to {target}.",
        structures=_snapshot(array, left, right),
        context=ArrayContext(left=left, right=right, target=target, found=False),
        variables={"target": target, "found": False, "indices": [], "pair": []},
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
