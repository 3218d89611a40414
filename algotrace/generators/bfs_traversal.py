"""Level-order (BFS) tree traversal with an explicit FIFO queue."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..context_types import QueueContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, structure
from .trees import TreeNode, example_tree, load_tree

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_BFS_TRAVERSAL


def _snapshot(
    nodes: dict[str, TreeNode],
    root: str,
    queue: list[dict],
    result: list[Any],
    visited: list[str],
    current: str | None,
) -> dict:
    return {
        "tree": structure(
            constants.KIND_TREE,
            {
                "nodes": [n.to_dict() for n in nodes.values()],
                "root": root,
                "visitedNodes": list(visited),
                "currentNodeId": current,
            },
            "Binary Tree",
            position="top",
        ),
        "queue": structure(constants.KIND_QUEUE, list(queue), "Queue (front → back)", position="middle"),
        "result": structure(constants.KIND_ARRAY, list(result), "Traversal Result", position="bottom"),
    }


def generate_bfs_traversal(
    nodes: Sequence[Any] | None = None,
    root: str | None = None,
    tree: str | None = None,
) -> list[Step]:
    """Trace a breadth-first traversal of a binary tree.

    Args:
        nodes: Tree node dicts ``{id, value, left?, right?}``.
        root: Id of the root node; ``None`` means the tree is empty.
        tree: Name of an example tree, used when *nodes* is omitted.

    Returns:
        The full step sequence, ending in ``return`` with ``finalResult``.
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
            "The tree is empty, so the level-order traversal is [].",
            variables={"finalResult": []},
        )

    builder = TraceBuilder(ALGORITHM_ID, {"root": root, "nodeCount": len(by_id)})
    queue: list[dict] = []
    result: list[Any] = []
    visited: list[str] = []
    levels: list[list[Any]] = []
    counter = 0

    def enqueue(node_id: str, level: int) -> dict:
        nonlocal counter
        element = {
            "id": f"queue_elem_{counter}",
            "nodeId": node_id,
            "level": level,
            "addedAtStep": len(builder),
        }
        counter += 1
        queue.append(element)
        return element

    def queue_ids() -> list[str]:
        return [e["id"] for e in queue]

    builder.emit(
        StepType.INITIALIZATION,
        f"Start a level-order traversal from root {root} "
        f"(value {by_id[root].value}) with an empty queue.",
        structures=_snapshot(by_id, root, queue, result, visited, None),
        highlights={"tree": [highlight(constants.SELECT_TREE_NODES, [root], "current")]},
        context=QueueContext(node_id=root, level=0, queue_length=0),
        variables={"rootId": root, "totalNodes": len(by_id), "queueLength": 0},
        duration=constants.TIMING_INTRO_MS,
    )

    element = enqueue(root, 0)
    builder.emit(
        StepType.QUEUE_ENQUEUE,
        f"Enqueue the root {root} (value {by_id[root].value}) at level 0.",
        structures=_snapshot(by_id, root, queue, result, visited, None),
        highlights={
            "tree": [highlight(constants.SELECT_TREE_NODES, [root], "highlight")],
            "queue": [highlight(constants.SELECT_QUEUE_ELEMENTS, [element["id"]], "enqueue")],
        },
        context=QueueContext(node_id=root, level=0, queue_length=len(queue)),
        variables={"enqueued": root, "level": 0, "queueLength": len(queue)},
        duration=constants.TIMING_NORMAL_MS,
    )

    current_level = 0
    nodes_in_level = 1
    processed_in_level = 0

    while queue:
        front = queue[0]
        if front["level"] > current_level:
            finished = levels[current_level] if current_level < len(levels) else []
            builder.emit(
                StepType.LEVEL_COMPLETE,
                f"Level {current_level} is complete with values {finished}; "
                f"the front of the queue is on level {front['level']}.",
                structures=_snapshot(by_id, root, queue, result, visited, None),
                highlights={
                    "queue": [highlight(constants.SELECT_QUEUE_ELEMENTS, queue_ids(), "highlight")]
                },
                context=QueueContext(level=front["level"], queue_length=len(queue)),
                variables={
                    "completedLevel": current_level,
                    "levelValues": finished,
                    "nextLevel": front["level"],
                },
                duration=constants.TIMING_LONG_MS,
            )
            current_level = front["level"]
            nodes_in_level = sum(1 for e in queue if e["level"] == current_level)
            processed_in_level = 0

        node = by_id[front["nodeId"]]
        builder.emit(
            StepType.QUEUE_PEEK,
            f"Peek at the front of the queue: node {node.id} (value {node.value}) on level {front['level']}.",
            structures=_snapshot(by_id, root, queue, result, visited, None),
            highlights={
                "queue": [highlight(constants.SELECT_QUEUE_ELEMENTS, [front["id"]], "current")],
                "tree": [highlight(constants.SELECT_TREE_NODES, [node.id], "highlight")],
            },
            context=QueueContext(node_id=node.id, level=front["level"], queue_length=len(queue)),
            variables={"front": node.id, "frontValue": node.value, "currentLevel": current_level},
            duration=constants.TIMING_SHORT_MS,
        )

        queue.pop(0)
        result.append(node.value)
        visited.append(node.id)
        while len(levels) <= current_level:
            levels.append([])
        levels[current_level].append(node.value)
        processed_in_level += 1
        builder.emit(
            StepType.QUEUE_DEQUEUE,
            f"Dequeue node {node.id} and visit it, appending {node.value} to the result.",
            structures=_snapshot(by_id, root, queue, result, visited, node.id),
            highlights={
                "tree": [
                    highlight(constants.SELECT_TREE_NODES, visited[:-1], "visited"),
                    highlight(constants.SELECT_TREE_NODES, [node.id], "current"),
                ],
                "result": [highlight(constants.SELECT_INDICES, [len(result) - 1], "match")],
            },
            context=QueueContext(node_id=node.id, level=current_level, queue_length=len(queue)),
            variables={
                "visited": node.id,
                "value": node.value,
                "result": result,
                "levelProgress": f"{processed_in_level}/{nodes_in_level}",
            },
            duration=constants.TIMING_NORMAL_MS,
        )

        for side, child_id in (("left", node.left), ("right", node.right)):
            if child_id is None:
                continue
            element = enqueue(child_id, current_level + 1)
            child = by_id[child_id]
            builder.emit(
                StepType.QUEUE_ENQUEUE,
                f"Enqueue the {side} child of {node.id}: node {child_id} "
                f"(value {child.value}) on level {current_level + 1}.",
                structures=_snapshot(by_id, root, queue, result, visited, node.id),
                highlights={
                    "tree": [highlight(constants.SELECT_TREE_NODES, [child_id], "highlight")],
                    "queue": [highlight(constants.SELECT_QUEUE_ELEMENTS, [element["id"]], "enqueue")],
                },
                context=QueueContext(
                    node_id=child_id,
                    level=current_level + 1,
                    child_side=side,
                    queue_length=len(queue),
                ),
                variables={
                    "parent": node.id,
                    "enqueued": child_id,
                    "childSide": side,
                    "queueLength": len(queue),
                },
                duration=constants.TIMING_NORMAL_MS,
            )

    builder.emit(
        StepType.RETURN,
        f"The queue is empty. Level-order traversal: {result}.",
        structures=_snapshot(by_id, root, queue, result, visited, None),
        highlights={"tree": [highlight(constants.SELECT_TREE_NODES, visited, "visited")]},
        context=QueueContext(level=current_level, queue_length=0),
        variables={
            "finalResult": result,
            "totalNodes": len(result),
            "totalLevels": current_level + 1,
            "levels": levels,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
