"""Recursive in-order traversal narrated through explicit call frames."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..context_types import RecursionContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, structure
from .trees import TreeNode, example_tree, load_tree

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_IN_ORDER_TRAVERSAL

PHASE_ENTERING = "entering"
PHASE_LEFT_DONE = "left_done"
PHASE_VISITING = "visiting"
PHASE_RIGHT_DONE = "right_done"
PHASE_RETURNING = "returning"

TRAVERSE_LEFT = "traversing_left"
TRAVERSE_VISIT = "visiting"
TRAVERSE_RIGHT = "traversing_right"


def _snapshot(
    nodes: dict[str, TreeNode],
    root: str,
    frames: list[dict],
    result: list[Any],
    visited: list[str],
) -> dict:
    return {
        "tree": structure(
            constants.KIND_TREE,
            {"nodes": [n.to_dict() for n in nodes.values()], "root": root},
            "Binary Tree",
            position="top",
        ),
        "callStack": structure(
            constants.KIND_CALL_STACK, frames, "Call Stack", position="left"
        ),
        "result": structure(
            constants.KIND_ARRAY,
            {"values": list(result), "nodeIds": list(visited)},
            "In-order Result",
            position="bottom",
        ),
    }


def generate_in_order_traversal(
    nodes: Sequence[Any] | None = None,
    root: str | None = None,
    tree: str | None = None,
) -> list[Step]:
    """Trace ``inorder(node)`` = left subtree, node, right subtree.

    Recursion descends into missing children as well, so each null link
    shows its own base case.
    """
    if nodes is None:
        try:
            nodes, root = example_tree(tree or constants.DEFAULT_TREE)
        except ValueError as exc:
            raise InvalidInputError(ALGORITHM_ID, str(exc)) from exc
    by_id = load_tree(ALGORITHM_ID, nodes, root)
    if root is None or not by_id:
        return empty_input_trace(
            ALGORITHM_ID,
            "The tree is empty, so the in-order traversal is [].",
            variables={"finalResult": []},
        )
    if len(by_id) > constants.MAX_RECURSION_INPUT:
        raise InvalidInputError(
            ALGORITHM_ID, f"tree must have at most {constants.MAX_RECURSION_INPUT} nodes"
        )

    builder = TraceBuilder(ALGORITHM_ID, {"root": root, "nodeCount": len(by_id)})
    frames: list[dict] = []
    result: list[Any] = []
    visited: list[str] = []
    counter = 0

    def snap() -> dict:
        return _snapshot(by_id, root, frames, result, visited)

    def label(node_id: str | None) -> str:
        return f"node {node_id} (value {by_id[node_id].value})" if node_id else "null"

    def visit(node_id: str | None, depth: int, parent: dict | None, side: str) -> None:
        nonlocal counter
        frame = {
            "id": f"frame_{counter}",
            "nodeId": node_id,
            "phase": PHASE_ENTERING,
            "depth": depth,
        }
        counter += 1
        frames.append(frame)
        tree_hl = [highlight(constants.SELECT_TREE_NODES, [node_id], "current")] if node_id else []

        origin = f" as the {side} child of {parent['nodeId']}" if parent else ""
        builder.emit(
            StepType.RECURSIVE_CALL,
            f"Call inorder({label(node_id)}){origin} at depth {depth}.",
            structures=snap(),
            highlights={
                "tree": tree_hl,
                "callStack": [highlight(constants.SELECT_CALLS, [frame["id"]], "current")],
            },
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=PHASE_ENTERING),
            variables={"node": node_id, "depth": depth, "stackSize": len(frames)},
            duration=constants.TIMING_NORMAL_MS,
        )

        builder.emit(
            StepType.BASE_CASE_CHECK,
            "Check the base case: is the node null? "
            + ("Yes." if node_id is None else f"No, {label(node_id)} exists."),
            structures=snap(),
            highlights={"tree": tree_hl},
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=PHASE_ENTERING),
            variables={"node": node_id, "isNull": node_id is None},
            duration=constants.TIMING_SHORT_MS,
        )

        if node_id is None:
            builder.emit(
                StepType.BASE_CASE_REACHED,
                "Base case reached: a null node contributes nothing, so return immediately.",
                structures=snap(),
                context=RecursionContext(call_id=frame["id"], depth=depth, phase=PHASE_RETURNING),
                variables={"node": None},
                duration=constants.TIMING_SHORT_MS,
            )
            frame["phase"] = PHASE_RETURNING
            frames.pop()
            if parent is not None:
                parent["phase"] = PHASE_LEFT_DONE if side == "left" else PHASE_RIGHT_DONE
            builder.emit(
                StepType.CALL_STACK_POP,
                f"Pop the null call and return to inorder({label(parent['nodeId'] if parent else None)}).",
                structures=snap(),
                context=RecursionContext(call_id=frame["id"], depth=depth, phase=PHASE_RETURNING),
                variables={"stackSize": len(frames)},
                duration=constants.TIMING_SHORT_MS,
            )
            return

        node = by_id[node_id]
        builder.emit(
            StepType.TREE_TRAVERSAL,
            f"Traverse the left subtree of {label(node_id)} first.",
            structures=snap(),
            highlights={"tree": tree_hl},
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=TRAVERSE_LEFT),
            variables={"node": node_id, "operation": "access", "leftChild": node.left},
            duration=constants.TIMING_SHORT_MS,
        )
        visit(node.left, depth + 1, frame, "left")

        frame["phase"] = PHASE_VISITING
        result.append(node.value)
        visited.append(node_id)
        builder.emit(
            StepType.TREE_TRAVERSAL,
            f"The left subtree of {label(node_id)} is done; visit it and append "
            f"{node.value} to the result.",
            structures=snap(),
            highlights={
                "tree": [
                    highlight(constants.SELECT_TREE_NODES, visited[:-1], "visited"),
                    highlight(constants.SELECT_TREE_NODES, [node_id], "match"),
                ],
                "result": [highlight(constants.SELECT_INDICES, [len(result) - 1], "match")],
            },
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=TRAVERSE_VISIT),
            variables={"node": node_id, "operation": "write", "value": node.value, "result": result},
            duration=constants.TIMING_LONG_MS,
        )

        builder.emit(
            StepType.TREE_TRAVERSAL,
            f"Traverse the right subtree of {label(node_id)}.",
            structures=snap(),
            highlights={"tree": tree_hl},
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=TRAVERSE_RIGHT),
            variables={"node": node_id, "operation": "access", "rightChild": node.right},
            duration=constants.TIMING_SHORT_MS,
        )
        visit(node.right, depth + 1, frame, "right")

        frame["phase"] = PHASE_RETURNING
        frames.pop()
        if parent is not None:
            parent["phase"] = PHASE_LEFT_DONE if side == "left" else PHASE_RIGHT_DONE
        builder.emit(
            StepType.CALL_STACK_POP,
            f"Both subtrees of {label(node_id)} are done; pop its call off the stack.",
            structures=snap(),
            highlights={"tree": [highlight(constants.SELECT_TREE_NODES, [node_id], "completed")]},
            context=RecursionContext(call_id=frame["id"], node_id=node_id, depth=depth, phase=PHASE_RETURNING),
            variables={"node": node_id, "stackSize": len(frames)},
            duration=constants.TIMING_SHORT_MS,
        )
        if parent is not None:
            builder.emit(
                StepType.RECURSIVE_RETURN,
                f"Return from inorder({label(node_id)}) to inorder({label(parent['nodeId'])}).",
                structures=snap(),
                highlights={"tree": [highlight(constants.SELECT_TREE_NODES, [parent["nodeId"]], "current")]},
                context=RecursionContext(call_id=parent["id"], node_id=parent["nodeId"], depth=depth - 1, phase=parent["phase"]),
                variables={"returnedFrom": node_id, "returnTo": parent["nodeId"]},
                duration=constants.TIMING_SHORT_MS,
            )

    builder.emit(
        StepType.INITIALIZATION,
        f"Start the in-order traversal at the root, {label(root)}, with an empty "
        "result list.",
        structures=snap(),
        highlights={"tree": [highlight(constants.SELECT_TREE_NODES, [root], "current")]},
        context=RecursionContext(node_id=root, depth=0, phase=PHASE_ENTERING),
        variables={"root": root, "result": []},
        duration=constants.TIMING_INTRO_MS,
    )
    visit(root, 0, None, "root")
    builder.emit(
        StepType.RETURN,
        f"In-order traversal complete: {result}.",
        structures=snap(),
        highlights={"tree": [highlight(constants.SELECT_TREE_NODES, visited, "visited")]},
        context=RecursionContext(depth=0, phase=PHASE_RETURNING),
        variables={
            "finalResult": result,
            "totalNodes": len(result),
            "traversalOrder": visited,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
