"""Iterative singly linked list reversal with prev/current/next pointers."""

from __future__ import annotations

import logging
from typing import Sequence

from ..context_types import LinkedListContext
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, empty_input_trace, highlight, require_int_list, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_REVERSE_LINKED_LIST


def _snapshot(
    nodes: list[dict],
    head: str | None,
    prev: str | None,
    current: str | None,
    nxt: str | None,
    reversed_links: list[dict],
) -> dict:
    return {
        "linkedList": structure(
            constants.KIND_LINKED_LIST,
            {
                "nodes": nodes,
                "head": head,
                "pointers": {"prev": prev, "current": current, "next": nxt},
                "reversedLinks": reversed_links,
            },
            "Linked List",
            position="center",
        )
    }


def _pointer_highlights(prev: str | None, current: str | None, nxt: str | None) -> list:
    hs = []
    for node_id, style in ((prev, "prev"), (current, "current"), (nxt, "next")):
        if node_id is not None:
            hs.append(highlight(constants.SELECT_LIST_NODES, [node_id], style))
    return hs


def generate_reverse_linked_list(values: Sequence[int] | None = None) -> list[Step]:
    values = list(constants.DEFAULT_LINKED_LIST) if values is None else values
    values = require_int_list(ALGORITHM_ID, "values", values)
    if not values:
        return empty_input_trace(
            ALGORITHM_ID,
            "The list is empty, so its reversal is also empty.",
            variables={"reversedList": [], "newHead": None},
        )

    nodes = [
        {"id": f"node{i}", "value": v, "next": f"node{i + 1}" if i + 1 < len(values) else None}
        for i, v in enumerate(values)
    ]
    by_id = {n["id"]: n for n in nodes}
    head = nodes[0]["id"]
    reversed_links: list[dict] = []
    builder = TraceBuilder(ALGORITHM_ID, {"values": values})

    def snap(prev, current, nxt) -> dict:
        return _snapshot(nodes, head, prev, current, nxt, reversed_links)

    builder.emit(
        StepType.INITIALIZATION,
        f"Reverse the linked list {' → '.join(str(v) for v in values)} in place.",
        structures=snap(None, None, None),
        context=LinkedListContext(),
        variables={"values": values, "length": len(values)},
        duration=constants.TIMING_INTRO_MS,
    )

    prev: str | None = None
    current: str | None = head
    builder.emit(
        StepType.POINTER_INITIALIZATION,
        f"Set prev = null and current = head ({by_id[head]['value']}).",
        structures=snap(prev, current, None),
        highlights={"linkedList": _pointer_highlights(prev, current, None)},
        context=LinkedListContext(current_id=current, operation="init"),
        variables={"prev": None, "current": by_id[head]["value"]},
        duration=constants.TIMING_NORMAL_MS,
    )

    while current is not None:
        node = by_id[current]
        builder.emit(
            StepType.LOOP_CONDITION,
            f"current is node {node['value']}, not null, so keep reversing.",
            structures=snap(prev, current, None),
            highlights={"linkedList": _pointer_highlights(prev, current, None)},
            context=LinkedListContext(current_id=current, prev_id=prev),
            variables={"current": node["value"]},
            duration=constants.TIMING_SHORT_MS,
        )

        nxt = node["next"]
        next_label = by_id[nxt]["value"] if nxt else "null"
        builder.emit(
            StepType.POINTER_UPDATE,
            f"Save next = current.next ({next_label}) before the link is overwritten.",
            structures=snap(prev, current, nxt),
            highlights={"linkedList": _pointer_highlights(prev, current, nxt)},
            context=LinkedListContext(current_id=current, prev_id=prev, next_id=nxt, operation="save_next"),
            variables={"next": next_label},
            duration=constants.TIMING_NORMAL_MS,
        )

        node["next"] = prev
        reversed_links.append({"from": current, "to": prev})
        logger.debug("Reversed link %s -> %s", current, prev)
        prev_label = by_id[prev]["value"] if prev else "null"
        builder.emit(
            StepType.LINK_REVERSAL,
            f"Point node {node['value']} back at {prev_label} (current.next = prev).",
            structures=snap(prev, current, nxt),
            highlights={"linkedList": _pointer_highlights(prev, current, nxt)},
            context=LinkedListContext(current_id=current, prev_id=prev, next_id=nxt, operation="reverse"),
            variables={"reversingMeta": {"from": current, "to": prev}, "reversedCount": len(reversed_links)},
            duration=constants.TIMING_LONG_MS,
        )

        prev, current = current, nxt
        builder.emit(
            StepType.NODE_TRAVERSAL,
            f"Advance: prev = node {by_id[prev]['value']}, current = {next_label}.",
            structures=snap(prev, current, None),
            highlights={"linkedList": _pointer_highlights(prev, current, None)},
            context=LinkedListContext(current_id=current, prev_id=prev, operation="advance"),
            variables={"prev": by_id[prev]["value"], "current": next_label},
            duration=constants.TIMING_SHORT_MS,
        )

    reversed_values = []
    cursor = prev
    while cursor is not None:
        reversed_values.append(by_id[cursor]["value"])
        cursor = by_id[cursor]["next"]
    head = prev
    builder.emit(
        StepType.RETURN,
        f"current is null; prev is the new head. Reversed list: "
        f"{' → '.join(str(v) for v in reversed_values)}.",
        structures=snap(prev, None, None),
        highlights={"linkedList": [highlight(constants.SELECT_LIST_NODES, [prev], "head")]},
        context=LinkedListContext(prev_id=prev, operation="done"),
        variables={"reversedList": reversed_values, "newHead": by_id[prev]["value"]},
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
