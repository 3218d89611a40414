"""Source lines for iterative linked list reversal."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

POINTER_INIT = per_language([9, 10, 11], [13, 14, 15], [8, 9, 10], [11, 12, 13], [19, 20], [11, 12, 13], [11, 12, 13])


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_REVERSE_LINKED_LIST,
        rules=(
            LineRule(S.INITIALIZATION, POINTER_INIT),
            LineRule(S.POINTER_INITIALIZATION, POINTER_INIT),
            LineRule(S.LOOP_CONDITION, per_language(14, 17, 12, 15, 22, 15, 15)),
            LineRule(S.POINTER_UPDATE, per_language(16, 19, 14, 17, 24, 17, 17)),
            LineRule(S.LINK_REVERSAL, per_language(18, 21, 16, 19, 26, 19, 19)),
            LineRule(S.NODE_TRAVERSAL, per_language([20, 21], [23, 24], [18, 19], [21, 22], [28, 29], [21, 22], [21, 22])),
            LineRule(S.RETURN, per_language(25, 27, 22, 25, 32, 25, 25)),
        ),
        default=POINTER_INIT,
    )
