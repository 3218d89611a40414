"""Recursive factorial — call stack plus recursion-tree simulation."""

from __future__ import annotations

import logging
from typing import Any

from ..context_types import RecursionContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, highlight, require_int, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_FACTORIAL

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"


def _snapshot(call_stack: list[dict], tree: dict[str, dict], root_id: str | None) -> dict:
    return {
        "callStack": structure(
            constants.KIND_CALL_STACK, call_stack, "Call Stack", position="left"
        ),
        "recursionTree": structure(
            constants.KIND_RECURSION_TREE,
            {"nodes": list(tree.values()), "rootId": root_id},
            "Recursion Tree",
            position="right",
        ),
    }


def generate_factorial(n: int | None = None) -> list[Step]:
    """Trace ``factorial(n)`` with genuine recursion so call steps nest correctly."""
    n = constants.DEFAULT_FACTORIAL_N if n is None else n
    n = require_int(ALGORITHM_ID, "n", n)
    if n < 0:
        raise InvalidInputError(ALGORITHM_ID, f"n must be >= 0, got {n}")
    if n > constants.MAX_RECURSION_INPUT:
        raise InvalidInputError(
            ALGORITHM_ID, f"n must be <= {constants.MAX_RECURSION_INPUT}, got {n}"
        )

    builder = TraceBuilder(ALGORITHM_ID, {"n": n})
    call_stack: list[dict] = []
    tree: dict[str, dict] = {}
    max_depth = 0
    counter = 0

    def snap() -> dict:
        return _snapshot(call_stack, tree, "call_0" if tree else None)

    def set_active(call_id: str | None) -> None:
        for frame in call_stack:
            frame["isActive"] = frame["id"] == call_id

    builder.emit(
        StepType.INITIALIZATION,
        f"Compute factorial({n}) recursively: factorial(n) = n × factorial(n - 1), "
        f"with factorial(n) = 1 when n ≤ 1.",
        structures=snap(),
        context=RecursionContext(n=n, depth=0),
        variables={"inputN": n},
        duration=constants.TIMING_INTRO_MS,
    )

    def call(value: int, level: int, parent_id: str | None) -> int:
        nonlocal counter, max_depth
        call_id = f"call_{counter}"
        index = counter
        counter += 1

        tree[call_id] = {
            "id": call_id,
            "n": value,
            "returnValue": None,
            "level": level,
            "parentId": parent_id,
            "children": [],
            "position": {"x": index * 120 + 60, "y": level * 80 + 40},
            "status": STATUS_ACTIVE,
        }
        if parent_id is not None:
            tree[parent_id]["children"].append(call_id)
            tree[parent_id]["status"] = STATUS_PENDING
        frame: dict[str, Any] = {
            "id": call_id,
            "n": value,
            "returnValue": None,
            "isActive": True,
            "level": level,
            "parentId": parent_id,
        }
        call_stack.append(frame)
        set_active(call_id)
        max_depth = max(max_depth, len(call_stack))

        builder.emit(
            StepType.RECURSIVE_CALL,
            f"Call factorial({value}) at depth {level}; it is pushed onto the call stack.",
            structures=snap(),
            highlights={"callStack": [highlight(constants.SELECT_CALLS, [call_id], "current")]},
            context=RecursionContext(call_id=call_id, n=value, depth=level),
            variables={"n": value, "depth": level, "stackSize": len(call_stack)},
            duration=constants.TIMING_NORMAL_MS,
        )

        is_base = value <= 1
        builder.emit(
            StepType.BASE_CASE_CHECK,
            f"Check the base case: is {value} ≤ 1? "
            + ("Yes." if is_base else f"No, so factorial({value}) must recurse."),
            structures=snap(),
            highlights={"recursionTree": [highlight(constants.SELECT_CALLS, [call_id], "compare")]},
            context=RecursionContext(call_id=call_id, n=value, depth=level),
            variables={"n": value, "isBaseCase": is_base},
            duration=constants.TIMING_SHORT_MS,
        )

        if is_base:
            result = 1
            frame["returnValue"] = result
            tree[call_id]["returnValue"] = result
            tree[call_id]["status"] = STATUS_COMPLETED
            builder.emit(
                StepType.BASE_CASE_REACHED,
                f"Base case reached: factorial({value}) returns 1.",
                structures=snap(),
                highlights={"recursionTree": [highlight(constants.SELECT_CALLS, [call_id], "match")]},
                context=RecursionContext(call_id=call_id, n=value, depth=level, return_value=result),
                variables={"n": value, "returnValue": result},
                duration=constants.TIMING_LONG_MS,
            )
        else:
            sub = call(value - 1, level + 1, call_id)
            result = value * sub
            frame["returnValue"] = result
            tree[call_id]["returnValue"] = result
            tree[call_id]["status"] = STATUS_COMPLETED
            set_active(call_id)
            builder.emit(
                StepType.RECURSIVE_RETURN,
                f"factorial({value - 1}) returned {sub}, so factorial({value}) = "
                f"{value} × {sub} = {result}.",
                structures=snap(),
                highlights={"recursionTree": [highlight(constants.SELECT_CALLS, [call_id], "match")]},
                context=RecursionContext(call_id=call_id, n=value, depth=level, return_value=result),
                variables={
                    "n": value,
                    "subResult": sub,
                    "calculation": f"{value} × {sub} = {result}",
                    "returnValue": result,
                },
                duration=constants.TIMING_LONG_MS,
            )

        call_stack.pop()
        set_active(parent_id)
        target = f"to factorial({value + 1})" if parent_id is not None else "to the caller"
        builder.emit(
            StepType.CALL_STACK_POP,
            f"Pop factorial({value}) off the call stack and return {result} {target}.",
            structures=snap(),
            highlights={"recursionTree": [highlight(constants.SELECT_CALLS, [call_id], "completed")]},
            context=RecursionContext(call_id=call_id, n=value, depth=level, return_value=result),
            variables={"n": value, "returnValue": result, "stackSize": len(call_stack)},
            duration=constants.TIMING_SHORT_MS,
        )
        return result

    final = call(n, 0, None)
    builder.emit(
        StepType.RETURN,
        f"factorial({n}) = {final}, computed with {counter} call(s).",
        structures=snap(),
        highlights={"recursionTree": [highlight(constants.SELECT_CALLS, list(tree), "completed")]},
        context=RecursionContext(n=n, depth=0, return_value=final),
        variables={
            "inputN": n,
            "finalResult": final,
            "totalCalls": counter,
            "maxDepth": max_depth,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
