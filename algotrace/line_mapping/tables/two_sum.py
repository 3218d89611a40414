"""Source lines for the two-pointer pair search."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language([3, 4], R(6, 9), [2, 3], R(4, 8), R(2, 5), [3, 4], R(8, 15))


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_TWO_SUM,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.POINTER_INITIALIZATION, per_language([6, 7], [12, 13], [5, 6], [12, 13], [9, 10], [7, 8], [18, 19])),
            LineRule(S.LOOP_CONDITION, per_language(9, 14, 8, 13, 10, 9, 20)),
            LineRule(S.COMPARISON, per_language([10, 12], [16, 18], [9, 11], [16, 18], [13, 15], [11, 13], [22, 24])),
            LineRule(S.POINTER_MOVE_LEFT, per_language(15, 21, 14, 21, 18, 16, 27)),
            LineRule(S.POINTER_MOVE_RIGHT, per_language(17, 23, 16, 23, 20, 18, 29)),
            LineRule(S.RETURN_FOUND, per_language(13, 19, 12, 19, 16, 14, 25)),
            LineRule(S.RETURN_NOT_FOUND, per_language(21, 27, 18, 27, 24, 22, 33)),
        ),
        default=ENTRY,
    )
