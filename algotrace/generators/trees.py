"""Binary-tree input model shared by the tree traversal generators."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import InvalidInputError
from ._base import require_sequence


class TreeNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    value: int | float
    left: str | None = None
    right: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value, "left": self.left, "right": self.right}


EXAMPLE_TREES: dict[str, dict[str, Any]] = {
    "small": {
        "name": "Small Tree (3 nodes)",
        "nodes": [
            {"id": "node1", "value": 2, "left": "node2", "right": "node3"},
            {"id": "node2", "value": 1},
            {"id": "node3", "value": 3},
        ],
        "root": "node1",
    },
    "medium": {
        "name": "Medium Tree (7 nodes)",
        "nodes": [
            {"id": "node1", "value": 4, "left": "node2", "right": "node3"},
            {"id": "node2", "value": 2, "left": "node4", "right": "node5"},
            {"id": "node3", "value": 6, "left": "node6", "right": "node7"},
            {"id": "node4", "value": 1},
            {"id": "node5", "value": 3},
            {"id": "node6", "value": 5},
            {"id": "node7", "value": 7},
        ],
        "root": "node1",
    },
    "unbalanced": {
        "name": "Unbalanced Tree",
        "nodes": [
            {"id": "node1", "value": 1, "right": "node2"},
            {"id": "node2", "value": 2, "right": "node3"},
            {"id": "node3", "value": 3, "left": "node4"},
            {"id": "node4", "value": 2.5},
        ],
        "root": "node1",
    },
}


def example_tree(name: str) -> tuple[list[dict], str]:
    """Return ``(nodes, root)`` for a named example tree.

    Raises ``ValueError`` if *name* is not a known example.
    """
    tree = EXAMPLE_TREES.get(name) if isinstance(name, str) else None
    if tree is None:
        raise ValueError(f"Unknown example tree: {name}")
    return [dict(n) for n in tree["nodes"]], tree["root"]


def load_tree(
    algorithm_id: str, nodes: Sequence[Any], root: str | None
) -> dict[str, TreeNode]:
    """Validate *nodes* into an id → node map reachable from *root*.

    Every child reference must name a declared node, and no node may be
    reachable along two different paths.
    """
    nodes = require_sequence(algorithm_id, "nodes", nodes)
    if root is not None and not isinstance(root, str):
        raise InvalidInputError(algorithm_id, f"root must be a node id string, got {root!r}")
    try:
        parsed = [n if isinstance(n, TreeNode) else TreeNode.model_validate(n) for n in nodes]
    except ValidationError as exc:
        raise InvalidInputError(algorithm_id, f"malformed tree: {exc}") from exc

    by_id: dict[str, TreeNode] = {}
    for node in parsed:
        if node.id in by_id:
            raise InvalidInputError(algorithm_id, f"duplicate tree node id {node.id!r}")
        by_id[node.id] = node

    if root is None:
        return by_id
    if root not in by_id:
        raise InvalidInputError(algorithm_id, f"root {root!r} is not a declared node")

    seen: set[str] = set()
    pending = [root]
    while pending:
        node_id = pending.pop()
        if node_id in seen:
            raise InvalidInputError(
                algorithm_id, f"node {node_id!r} is reachable more than once"
            )
        seen.add(node_id)
        node = by_id[node_id]
        for child in (node.left, node.right):
            if child is None:
                continue
            if child not in by_id:
                raise InvalidInputError(
                    algorithm_id, f"node {node_id!r} references missing child {child!r}"
                )
            pending.append(child)
    return by_id
