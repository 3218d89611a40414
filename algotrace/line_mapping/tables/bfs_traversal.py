"""Source lines for level-order traversal."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language(
    R(9, 12), R(11, 17), R(8, 12), R(11, 17), R(25, 31), R(9, 14), R(10, 16)
)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_BFS_TRAVERSAL,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(
                S.QUEUE_ENQUEUE,
                ENTRY,
                when=lambda ctx: ctx.child_side is None,
                name="enqueue_root",
            ),
            LineRule(
                S.QUEUE_ENQUEUE,
                per_language([20, 21], [26, 27, 28], [20, 21], [25, 26, 27], [40, 41, 42], [22, 23, 24], [25, 26, 27]),
                when=lambda ctx: ctx.child_side == "left",
                name="enqueue_left_child",
            ),
            LineRule(
                S.QUEUE_ENQUEUE,
                per_language([23, 24], [29, 30, 31], [22, 23], [28, 29, 30], [43, 44, 45], [25, 26, 27], [28, 29, 30]),
                when=lambda ctx: ctx.child_side == "right",
                name="enqueue_right_child",
            ),
            LineRule(
                S.QUEUE_ENQUEUE,
                per_language([20, 21, 23, 24], R(26, 31), R(20, 23), R(25, 30), R(40, 45), R(22, 27), R(25, 30)),
            ),
            LineRule(
                S.QUEUE_PEEK,
                per_language([15, 16], [20, 21, 22], [15, 16], [20, 21], [34, 35, 36], [17, 18], [19, 20, 21]),
            ),
            LineRule(
                S.QUEUE_DEQUEUE,
                per_language([16, 18], [21, 22, 24], [16, 18], [21, 23], [35, 36, 38], [18, 20], [20, 21, 23]),
            ),
            LineRule(S.TREE_TRAVERSAL, per_language(18, 24, 18, 23, 38, 20, 23)),
            LineRule(S.LEVEL_COMPLETE, per_language(15, 20, 15, 20, 34, 17, 19)),
            LineRule(S.RETURN, per_language(27, 34, 25, 33, 49, 30, 33)),
        ),
        default=ENTRY,
    )
