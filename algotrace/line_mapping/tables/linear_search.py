"""Source lines for linear search."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

LOOP = per_language(2, 5, 2, 3, 2, 2, 4)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_LINEAR_SEARCH,
        rules=(
            LineRule(S.INITIALIZATION, LOOP),
            LineRule(S.LOOP_START, LOOP),
            LineRule(S.ASSIGNMENT, LOOP),
            LineRule(S.COMPARISON, per_language(3, 6, 3, 4, 3, 3, 5)),
            LineRule(S.RETURN_FOUND, per_language(4, 7, 4, 5, 4, 4, 6)),
            LineRule(S.RETURN_NOT_FOUND, per_language(7, 10, 5, 8, 7, 7, 9)),
        ),
        default=LOOP,
    )
