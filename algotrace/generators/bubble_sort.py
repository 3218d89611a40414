"""Bubble sort with early exit when a pass makes no swaps."""

from __future__ import annotations

import logging
from typing import Sequence

from ..context_types import ArrayContext
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, require_int_list, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_BUBBLE_SORT


def _snapshot(array: list[int], sorted_from: int) -> dict:
    return {
        "array": structure(
            constants.KIND_ARRAY,
            {"values": list(array), "sortedFrom": sorted_from},
            "Array",
            position="center",
        )
    }


def generate_bubble_sort(array: Sequence[int] | None = None) -> list[Step]:
    array = list(constants.DEFAULT_SORT_ARRAY) if array is None else array
    values = require_int_list(ALGORITHM_ID, "array", array)
    if not values:
        return empty_input_trace(
            ALGORITHM_ID,
            "The array is empty, so it is already sorted.",
            variables={"sortedArray": []},
        )

    n = len(values)
    builder = TraceBuilder(ALGORITHM_ID, {"array": values})
    swaps = comparisons = 0
    sorted_from = n
    builder.emit(
        StepType.INITIALIZATION,
        f"Sort {values} by repeatedly swapping adjacent out-of-order pairs.",
        structures=_snapshot(values, sorted_from),
        context=ArrayContext(),
        variables={"array": values, "n": n},
        duration=constants.TIMING_INTRO_MS,
    )

    for i in range(n - 1):
        builder.emit(
            StepType.LOOP_START_OUTER,
            f"Start pass {i + 1}: the largest unsorted value will bubble to index {n - 1 - i}.",
            structures=_snapshot(values, sorted_from),
            context=ArrayContext(index=i, operation="pass"),
            variables={"i": i, "pass": i + 1},
            duration=constants.TIMING_NORMAL_MS,
        )
        swapped = False
        for j in range(n - 1 - i):
            builder.emit(
                StepType.LOOP_START_INNER,
                f"Look at the adjacent pair at indices {j} and {j + 1}.",
                structures=_snapshot(values, sorted_from),
                highlights={"array": [highlight(constants.SELECT_INDICES, [j, j + 1], "current")]},
                context=ArrayContext(index=j, left=j, right=j + 1),
                variables={"i": i, "j": j},
                duration=constants.TIMING_SHORT_MS,
            )
            comparisons += 1
            out_of_order = values[j] > values[j + 1]
            builder.emit(
                StepType.COMPARISON,
                f"Is {values[j]} > {values[j + 1]}? " + ("Yes." if out_of_order else "No."),
                structures=_snapshot(values, sorted_from),
                highlights={"array": [highlight(constants.SELECT_INDICES, [j, j + 1], "compare")]},
                context=ArrayContext(index=j, left=j, right=j + 1, value=values[j]),
                variables={"a": values[j], "b": values[j + 1], "comparisons": comparisons},
                duration=constants.TIMING_SHORT_MS,
            )
            if out_of_order:
                values[j], values[j + 1] = values[j + 1], values[j]
                swaps += 1
                swapped = True
                logger.debug("Swapped indices %d and %d", j, j + 1)
                builder.emit(
                    StepType.SWAP,
                    f"Swap them: the array is now {values}.",
                    structures=_snapshot(values, sorted_from),
                    highlights={"array": [highlight(constants.SELECT_INDICES, [j, j + 1], "swap")]},
                    context=ArrayContext(index=j, left=j, right=j + 1, operation="swap"),
                    variables={"swaps": swaps, "array": values},
                    duration=constants.TIMING_NORMAL_MS,
                )
            else:
                builder.emit(
                    StepType.NO_SWAP,
                    f"{values[j]} and {values[j + 1]} are already in order; no swap.",
                    structures=_snapshot(values, sorted_from),
                    highlights={"array": [highlight(constants.SELECT_INDICES, [j, j + 1], "match")]},
                    context=ArrayContext(index=j, left=j, right=j + 1),
                    variables={"swaps": swaps},
                    duration=constants.TIMING_SHORT_MS,
                )
        sorted_from = n - 1 - i
        builder.emit(
            StepType.PASS_COMPLETE,
            f"Pass {i + 1} is complete; index {sorted_from} onward is sorted"
            + ("." if swapped else ", and no swaps happened so the array is sorted."),
            structures=_snapshot(values, sorted_from),
            highlights={
                "array": [highlight(constants.SELECT_INDICES, range(sorted_from, n), "sorted")]
            },
            context=ArrayContext(index=i, operation="pass"),
            variables={"pass": i + 1, "swappedThisPass": swapped},
            duration=constants.TIMING_NORMAL_MS,
        )
        if not swapped:
            break

    builder.emit(
        StepType.RETURN,
        f"Sorted result: {values} after {comparisons} comparison(s) and {swaps} swap(s).",
        structures=_snapshot(values, 0),
        highlights={"array": [highlight(constants.SELECT_INDICES, range(n), "sorted")]},
        context=ArrayContext(operation="done"),
        variables={"sortedArray": values, "totalSwaps": swaps, "totalComparisons": comparisons},
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
