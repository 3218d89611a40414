"""Undirected cycle detection — DFS with parent map and explicit path."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..context_types import GraphContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, require_sequence, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_CYCLE_DETECTION


class GraphNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    x: float = 0
    y: float = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label or self.id,
            "position": {"x": self.x, "y": self.y},
        }


class GraphEdge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    source: str = Field(alias="from")
    target: str = Field(alias="to")

    @property
    def edge_id(self) -> str:
        return self.id or f"{self.source}{self.target}"

    def to_dict(self) -> dict:
        return {"id": self.edge_id, "from": self.source, "to": self.target}


DEFAULT_NODES: tuple[dict, ...] = (
    {"id": "A", "x": 100, "y": 100},
    {"id": "B", "x": 300, "y": 100},
    {"id": "C", "x": 500, "y": 100},
    {"id": "D", "x": 200, "y": 250},
    {"id": "E", "x": 400, "y": 250},
)

DEFAULT_EDGES: tuple[dict, ...] = (
    {"id": "AB", "from": "A", "to": "B"},
    {"id": "BC", "from": "B", "to": "C"},
    {"id": "BD", "from": "B", "to": "D"},
    {"id": "DE", "from": "D", "to": "E"},
    {"id": "CE", "from": "C", "to": "E"},
)


def _parse_graph(
    raw_nodes: Sequence[Any], raw_edges: Sequence[Any]
) -> tuple[list[GraphNode], list[GraphEdge]]:
    raw_nodes = require_sequence(ALGORITHM_ID, "nodes", raw_nodes)
    raw_edges = require_sequence(ALGORITHM_ID, "edges", raw_edges)
    try:
        nodes = [
            n if isinstance(n, GraphNode) else GraphNode.model_validate(n)
            for n in raw_nodes
        ]
        edges = [
            e if isinstance(e, GraphEdge) else GraphEdge.model_validate(e)
            for e in raw_edges
        ]
    except ValidationError as exc:
        raise InvalidInputError(ALGORITHM_ID, f"malformed graph: {exc}") from exc

    ids = [n.id for n in nodes]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise InvalidInputError(ALGORITHM_ID, f"duplicate node ids: {duplicates}")
    known = set(ids)
    for edge in edges:
        missing = [end for end in (edge.source, edge.target) if end not in known]
        if missing:
            raise InvalidInputError(
                ALGORITHM_ID,
                f"edge {edge.edge_id} references undeclared node(s) {missing}",
            )
    return nodes, edges


def _build_adjacency(
    nodes: list[GraphNode], edges: list[GraphEdge]
) -> dict[str, list[str]]:
    adjacency: dict[str, list[str]] = {n.id: [] for n in nodes}
    for edge in edges:
        adjacency[edge.source].append(edge.target)
        adjacency[edge.target].append(edge.source)
    return adjacency


def _find_edge_id(edges: list[GraphEdge], a: str, b: str) -> str | None:
    for edge in edges:
        if (edge.source, edge.target) in ((a, b), (b, a)):
            return edge.edge_id
    return None


class _DfsState:
    """Mutable DFS working state; snapshots are taken via :meth:`snapshot`."""

    def __init__(self, nodes: list[GraphNode], edges: list[GraphEdge]):
        self.nodes = nodes
        self.edges = edges
        self.adjacency = _build_adjacency(nodes, edges)
        self.visited: list[str] = []
        self.current_path: list[str] = []
        self.cycle_edges: list[str] = []
        self.cycle_nodes: list[str] = []
        self.current_node: str | None = None
        self.parent_map: dict[str, str | None] = {}
        self.component = 0

    def snapshot(self) -> dict:
        return {
            "graph": structure(
                constants.KIND_GRAPH,
                {
                    "nodes": [n.to_dict() for n in self.nodes],
                    "edges": [e.to_dict() for e in self.edges],
                    "visited": self.visited,
                    "currentPath": self.current_path,
                    "cycleEdges": self.cycle_edges,
                    "currentNode": self.current_node,
                    "parentMap": self.parent_map,
                    "currentComponent": self.component,
                    "adjacencyList": self.adjacency,
                },
                "Undirected Graph",
                position="center",
            )
        }

    def base_highlights(self) -> list:
        hs = []
        if self.visited:
            hs.append(highlight(constants.SELECT_GRAPH_NODES, self.visited, "visited"))
        if self.current_path:
            hs.append(highlight(constants.SELECT_GRAPH_NODES, self.current_path, "path"))
        return hs


def generate_cycle_detection(
    nodes: Sequence[Any] | None = None, edges: Sequence[Any] | None = None
) -> list[Step]:
    """Trace DFS cycle detection over an undirected graph.

    Args:
        nodes: Node dicts ``{id, label?, x?, y?}``. Defaults to the A–E graph.
        edges: Edge dicts ``{id?, from, to}``. Defaults to AB, BC, BD, DE, CE.

    Returns:
        The full step sequence, ending in ``return`` with ``hasCycle``.
    """
    if nodes is None:
        nodes = DEFAULT_NODES
        edges = DEFAULT_EDGES if edges is None else edges
    parsed_nodes, parsed_edges = _parse_graph(nodes, () if edges is None else edges)
    if not parsed_nodes:
        return empty_input_trace(
            ALGORITHM_ID,
            "The graph has no nodes, so it cannot contain a cycle.",
            variables={"hasCycle": False},
        )
    if len(parsed_nodes) > constants.MAX_RECURSION_INPUT:
        raise InvalidInputError(
            ALGORITHM_ID,
            f"graph must have at most {constants.MAX_RECURSION_INPUT} nodes, "
            f"got {len(parsed_nodes)}",
        )

    state = _DfsState(parsed_nodes, parsed_edges)
    builder = TraceBuilder(
        ALGORITHM_ID,
        {"nodeCount": len(parsed_nodes), "edgeCount": len(parsed_edges)},
    )

    builder.emit(
        StepType.INITIALIZATION,
        f"Start DFS cycle detection on an undirected graph with "
        f"{len(parsed_nodes)} nodes and {len(parsed_edges)} edges.",
        structures=state.snapshot(),
        context=GraphContext(cycle_detected=False),
        variables={
            "totalNodes": len(parsed_nodes),
            "totalEdges": len(parsed_edges),
            "hasCycle": False,
        },
        duration=constants.TIMING_INTRO_MS,
    )

    def dfs(node_id: str, parent: str | None) -> bool:
        state.visited.append(node_id)
        state.current_path.append(node_id)
        state.parent_map[node_id] = parent
        state.current_node = node_id
        via = f" (reached from {parent})" if parent else ""
        builder.emit(
            StepType.GRAPH_NODE_VISIT,
            f"Visit node {node_id}{via} and add it to the current path "
            f"{' → '.join(state.current_path)}.",
            structures=state.snapshot(),
            highlights={
                "graph": state.base_highlights()
                + [highlight(constants.SELECT_GRAPH_NODES, [node_id], "current")]
            },
            context=GraphContext(
                node_id=node_id, from_node_id=parent, component=state.component
            ),
            variables={
                "currentNode": node_id,
                "parent": parent,
                "currentPath": state.current_path,
                "visitedCount": len(state.visited),
            },
            duration=constants.TIMING_NORMAL_MS,
        )

        for neighbor in state.adjacency[node_id]:
            edge_id = _find_edge_id(state.edges, node_id, neighbor)
            is_visited = neighbor in state.parent_map
            is_parent = neighbor == parent
            if not is_visited:
                verdict = f"{neighbor} is unvisited, so DFS continues into it."
            elif is_parent:
                verdict = f"{neighbor} is the parent of {node_id}, so the edge is ignored."
            else:
                verdict = f"{neighbor} is already visited and is not the parent: a back edge."
            builder.emit(
                StepType.GRAPH_EDGE_EXPLORE,
                f"Explore edge {node_id}–{neighbor}: {verdict}",
                structures=state.snapshot(),
                highlights={
                    "graph": state.base_highlights()
                    + [
                        highlight(constants.SELECT_GRAPH_NODES, [node_id], "current"),
                        highlight(constants.SELECT_GRAPH_NODES, [neighbor], "exploring"),
                        highlight(constants.SELECT_GRAPH_EDGES, [edge_id], "exploring"),
                    ]
                },
                context=GraphContext(
                    from_node_id=node_id,
                    to_node_id=neighbor,
                    edge_id=edge_id,
                    is_visited=is_visited,
                    is_parent=is_parent,
                    cycle_detected=False,
                ),
                variables={
                    "currentNode": node_id,
                    "neighbor": neighbor,
                    "edgeId": edge_id,
                    "isNeighborVisited": is_visited,
                    "isParent": is_parent,
                },
                duration=constants.TIMING_SHORT_MS,
            )

            if not is_visited:
                if dfs(neighbor, node_id):
                    return True
                continue
            if is_parent:
                continue

            start = state.current_path.index(neighbor)
            state.cycle_nodes = state.current_path[start:] + [neighbor]
            state.cycle_edges = [
                eid
                for eid in (
                    _find_edge_id(state.edges, a, b)
                    for a, b in zip(state.cycle_nodes, state.cycle_nodes[1:])
                )
                if eid is not None
            ]
            logger.debug("Back edge %s-%s closes cycle %s", node_id, neighbor, state.cycle_nodes)
            builder.emit(
                StepType.GRAPH_CYCLE_DETECTED,
                f"Cycle found: the back edge {node_id}–{neighbor} closes the cycle "
                f"{' → '.join(state.cycle_nodes)}.",
                structures=state.snapshot(),
                highlights={
                    "graph": [
                        highlight(constants.SELECT_GRAPH_NODES, state.cycle_nodes, "cycle"),
                        highlight(constants.SELECT_GRAPH_EDGES, state.cycle_edges, "cycle"),
                    ]
                },
                context=GraphContext(
                    from_node_id=node_id,
                    to_node_id=neighbor,
                    edge_id=edge_id,
                    is_visited=True,
                    is_parent=False,
                    cycle_detected=True,
                ),
                variables={
                    "cycleNodes": state.cycle_nodes,
                    "cycleLength": len(state.cycle_nodes) - 1,
                    "backEdge": edge_id,
                },
                duration=constants.TIMING_RESULT_MS,
            )
            return True

        state.current_path.pop()
        state.current_node = state.current_path[-1] if state.current_path else None
        builder.emit(
            StepType.GRAPH_BACKTRACK,
            f"All neighbors of {node_id} are explored; backtrack"
            + (f" to {state.current_node}." if state.current_node else " out of this component."),
            structures=state.snapshot(),
            highlights={
                "graph": state.base_highlights()
                + [highlight(constants.SELECT_GRAPH_NODES, [node_id], "backtrack")]
            },
            context=GraphContext(node_id=node_id, to_node_id=state.current_node),
            variables={"backtrackFrom": node_id, "currentPath": state.current_path},
            duration=constants.TIMING_SHORT_MS,
        )
        return False

    has_cycle = False
    for node in parsed_nodes:
        if node.id in state.parent_map:
            continue
        state.component += 1
        builder.emit(
            StepType.GRAPH_COMPONENT_COMPLETE,
            f"Node {node.id} is unvisited, so start a new DFS for component "
            f"{state.component}.",
            structures=state.snapshot(),
            highlights={
                "graph": state.base_highlights()
                + [highlight(constants.SELECT_GRAPH_NODES, [node.id], "highlight")]
            },
            context=GraphContext(node_id=node.id, component=state.component),
            variables={"startNode": node.id, "currentComponent": state.component},
            duration=constants.TIMING_NORMAL_MS,
        )
        if dfs(node.id, None):
            has_cycle = True
            break

    state.current_node = None
    result = "CYCLE_FOUND" if has_cycle else "NO_CYCLE"
    summary = (
        f"The graph contains a cycle: {' → '.join(state.cycle_nodes)}."
        if has_cycle
        else f"No cycle: all {len(state.visited)} nodes were visited across "
        f"{state.component} component(s) without a back edge."
    )
    builder.emit(
        StepType.RETURN,
        summary,
        structures=state.snapshot(),
        highlights={
            "graph": (
                [
                    highlight(constants.SELECT_GRAPH_NODES, state.cycle_nodes, "cycle"),
                    highlight(constants.SELECT_GRAPH_EDGES, state.cycle_edges, "cycle"),
                ]
                if has_cycle
                else [highlight(constants.SELECT_GRAPH_NODES, state.visited, "visited")]
            )
        },
        context=GraphContext(cycle_detected=has_cycle, component=state.component),
        variables={
            "hasCycle": has_cycle,
            "result": result,
            "cycleNodes": state.cycle_nodes,
            "cycleEdges": state.cycle_edges,
            "cycleEdgesCount": len(state.cycle_edges),
            "visitedNodes": state.visited,
            "totalNodesVisited": len(state.visited),
            "totalComponents": state.component,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
