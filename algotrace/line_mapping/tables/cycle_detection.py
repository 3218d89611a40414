"""Source lines for undirected DFS cycle detection."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language(14, 35, 15, 24, 31, 24, 26)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_CYCLE_DETECTION,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(
                S.GRAPH_COMPONENT_COMPLETE,
                per_language([16, 17], [37, 39], [17, 18], [26, 27], [33, 34], [26, 27], [28, 29]),
            ),
            LineRule(S.GRAPH_NODE_VISIT, per_language(25, 15, 26, 44, 52, 44, 41)),
            LineRule(
                S.GRAPH_EDGE_EXPLORE,
                per_language(
                    [30, 31], [19, 20], [30, 31], [49, 50], [57, 58], [49, 50], [45, 46]
                ),
                when=lambda ctx: ctx.is_visited is False,
                name="descend_into_unvisited",
            ),
            LineRule(
                S.GRAPH_EDGE_EXPLORE,
                per_language([27, 28], 17, 28, [46, 47], [54, 55], [46, 47], 43),
            ),
            LineRule(
                S.GRAPH_CYCLE_DETECTED,
                per_language([35, 36], [25, 26], [34, 35], [54, 55], [62, 63], [54, 55], [50, 51]),
            ),
            LineRule(S.GRAPH_BACKTRACK, per_language(39, 29, 37, 58, 67, 58, 54)),
            LineRule(S.RETURN, per_language(22, 46, 22, 35, 42, 35, 34)),
        ),
        default=ENTRY,
    )
