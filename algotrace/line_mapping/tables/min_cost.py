"""Source lines for the greedy minimum-cost reduction."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language(1, 4, 1, 4, 1, 1, 7)
GREEDY = per_language(7, 10, 6, 10, 7, 7, R(13, 18))
COST = per_language(11, 13, 9, 13, 10, 10, 21)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_MIN_COST_ARRAY,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.EMPTY_INPUT, per_language([2, 3, 4], [5, 6, 7], [2, 3], [5, 6, 7], [2, 3, 4], [2, 3, 4], [8, 9, 10])),
            LineRule(S.GREEDY_INSIGHT, GREEDY),
            LineRule(S.FORMULA_DERIVATION, COST),
            LineRule(S.DECISION_TREE, per_language([7, 11], [10, 13], [6, 9], [10, 13], [7, 10], [7, 10], [13, 14, 15, 16, 17, 18, 21])),
            LineRule(S.COST_CALCULATION, COST),
            LineRule(S.ELEMENT_REMOVAL, COST),
            LineRule(S.RETURN, per_language(13, 15, 11, 15, 12, 12, 23)),
        ),
        default=ENTRY,
    )
