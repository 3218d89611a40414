"""Source lines for recursive in-order traversal."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language([9, 10], [13, 16], [8, 10], [16, 19], [22, 25], [9, 11], [9, 14])
RETURN = per_language(25, 13, 23, 15, 23, 26, 11)

TRAVERSE_LEFT = per_language(15, 21, 14, 24, 29, 16, 19)
TRAVERSE_VISIT = per_language(17, 24, 17, 27, 32, 19, 22)
TRAVERSE_RIGHT = per_language(20, 27, 20, 30, 35, 22, 25)


def _phase(name: str):
    return lambda ctx: ctx.phase == name


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_IN_ORDER_TRAVERSAL,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.RECURSIVE_CALL, per_language(9, 16, 10, 19, 25, 11, 14)),
            LineRule(
                S.BASE_CASE_CHECK,
                per_language([11, 12, 13], [17, 18, 19], [11, 12], [20, 21, 22], 26, [12, 13, 14], [15, 16, 17]),
            ),
            LineRule(S.BASE_CASE_REACHED, per_language(12, 18, 12, 21, 26, 13, 16)),
            LineRule(S.TREE_TRAVERSAL, TRAVERSE_LEFT, when=_phase("traversing_left"), name="traverse_left"),
            LineRule(S.TREE_TRAVERSAL, TRAVERSE_VISIT, when=_phase("visiting"), name="visit_node"),
            LineRule(S.TREE_TRAVERSAL, TRAVERSE_RIGHT, when=_phase("traversing_right"), name="traverse_right"),
            LineRule(
                S.TREE_TRAVERSAL,
                per_language([15, 17, 20], [21, 24, 27], [14, 17, 20], [24, 27, 30], [29, 32, 35], [16, 19, 22], [19, 22, 25]),
            ),
            LineRule(S.CALL_STACK_POP, RETURN),
            LineRule(S.RECURSIVE_RETURN, RETURN),
            LineRule(S.RETURN, RETURN),
        ),
        default=ENTRY,
    )
