"""Minimum cost to reduce an array to one element (greedy)."""

from __future__ import annotations

import logging
from typing import Sequence

from ..context_types import ArrayContext
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, require_int_list, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_MIN_COST_ARRAY


def _snapshot(array: list[int], total: int, operations: int) -> dict:
    return {
        "array": structure(constants.KIND_ARRAY, list(array), "Remaining Elements", position="center"),
        "cost": structure(
            constants.KIND_HASHMAP,
            {"totalCost": total, "operations": operations},
            "Running Cost",
            position="bottom",
        ),
    }


def generate_min_cost(array: Sequence[int] | None = None) -> list[Step]:
    """Trace the greedy strategy: pair the minimum with every other element.

    Each operation removes the larger of two elements and costs the smaller,
    so the optimum is ``(n - 1) * min(array)``.
    """
    array = list(constants.DEFAULT_MIN_COST_ARRAY) if array is None else array
    values = require_int_list(ALGORITHM_ID, "array", array)
    if len(values) <= 1:
        return empty_input_trace(
            ALGORITHM_ID,
            f"The array {values} already has at most one element, so the cost is 0.",
            variables={"totalCost": 0, "array": values},
        )

    n = len(values)
    smallest = min(values)
    min_index = values.index(smallest)
    predicted = (n - 1) * smallest
    remaining = list(values)
    total = 0
    builder = TraceBuilder(ALGORITHM_ID, {"array": values})

    builder.emit(
        StepType.INITIALIZATION,
        f"Reduce {values} to one element. Each operation picks two elements, "
        f"removes the larger and costs the smaller.",
        structures=_snapshot(remaining, total, 0),
        context=ArrayContext(),
        variables={"array": values, "n": n},
        duration=constants.TIMING_INTRO_MS,
    )
    builder.emit(
        StepType.GREEDY_INSIGHT,
        f"Any pairing costs at least the smaller element, so always pair the minimum "
        f"{smallest} (index {min_index}) with another element.",
        structures=_snapshot(remaining, total, 0),
        highlights={"array": [highlight(constants.SELECT_INDICES, [min_index], "current")]},
        context=ArrayContext(index=min_index, value=smallest, operation="insight"),
        variables={"minElement": smallest, "minIndex": min_index},
        duration=constants.TIMING_LONG_MS,
    )
    builder.emit(
        StepType.FORMULA_DERIVATION,
        f"Going from {n} elements to 1 takes {n - 1} operations at cost {smallest} "
        f"each: total = {n - 1} × {smallest} = {predicted}.",
        structures=_snapshot(remaining, total, 0),
        context=ArrayContext(value=predicted, operation="formula"),
        variables={"operationsNeeded": n - 1, "minElement": smallest, "predictedCost": predicted},
        duration=constants.TIMING_LONG_MS,
    )

    operation = 0
    while len(remaining) > 1:
        min_pos = remaining.index(smallest)
        other_pos = next(i for i in range(len(remaining)) if i != min_pos)
        other = remaining[other_pos]
        operation += 1
        builder.emit(
            StepType.DECISION_TREE,
            f"Pair the minimum {smallest} with {other}; pairing {other} with anything "
            f"else would cost at least as much.",
            structures=_snapshot(remaining, total, operation - 1),
            highlights={
                "array": [
                    highlight(constants.SELECT_INDICES, [min_pos], "current"),
                    highlight(constants.SELECT_INDICES, [other_pos], "compare"),
                ]
            },
            context=ArrayContext(left=min_pos, right=other_pos, value=smallest, operation="decide"),
            variables={"selectedPair": [smallest, other], "pairCost": smallest},
            duration=constants.TIMING_NORMAL_MS,
        )
        total += smallest
        builder.emit(
            StepType.COST_CALCULATION,
            f"Pay {smallest} for this operation; running total {total} "
            f"({operation}/{n - 1} operations).",
            structures=_snapshot(remaining, total, operation - 1),
            highlights={"cost": [highlight(constants.SELECT_KEYS, ["totalCost"], "updated")]},
            context=ArrayContext(value=smallest, operation="cost"),
            variables={"operationCost": smallest, "totalCost": total, "operation": operation},
            duration=constants.TIMING_NORMAL_MS,
        )
        remaining.pop(other_pos)
        logger.debug("Removed %s, running cost %d", other, total)
        builder.emit(
            StepType.ELEMENT_REMOVAL,
            f"Remove {other}, the larger of the pair; {remaining} remain.",
            structures=_snapshot(remaining, total, operation),
            context=ArrayContext(value=other, operation="remove"),
            variables={"removed": other, "remaining": remaining},
            duration=constants.TIMING_NORMAL_MS,
        )

    builder.emit(
        StepType.RETURN,
        f"One element remains. The minimum total cost is {total}, matching "
        f"{n - 1} × {smallest}; any other pairing would use a larger element as cost.",
        structures=_snapshot(remaining, total, operation),
        highlights={"cost": [highlight(constants.SELECT_KEYS, ["totalCost"], "match")]},
        context=ArrayContext(value=total, operation="done"),
        variables={
            "totalCost": total,
            "operations": operation,
            "minElement": smallest,
            "finalElement": remaining[0],
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
