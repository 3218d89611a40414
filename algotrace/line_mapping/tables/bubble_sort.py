"""Source lines for bubble sort."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language(2, 4, 2, 3, 2, 2, 4)
OUTER = per_language(4, 5, 4, 5, 4, 4, 6)
COMPARE = per_language(7, 8, 7, 8, 7, 7, 9)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_BUBBLE_SORT,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.LOOP_START_OUTER, OUTER),
            LineRule(S.PASS_COMPLETE, OUTER),
            LineRule(S.LOOP_START_INNER, per_language(6, 7, 6, 7, 6, 6, 8)),
            LineRule(S.COMPARISON, COMPARE),
            LineRule(S.NO_SWAP, COMPARE),
            LineRule(S.SWAP, per_language(8, [9, 10, 11], 8, [9, 10, 11], 8, 8, 10)),
            LineRule(S.RETURN, per_language(15, 16, 13, 16, 15, 15, 16)),
        ),
        default=ENTRY,
    )
