"""Source lines for binary search."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language([2, 3], [5, 6], [2, 3], [3, 4], [2, 3], [2, 3], [4, 5])


def _mid_equals(ctx) -> bool:
    return ctx.found is True


def _mid_below(ctx) -> bool:
    return ctx.value < ctx.target


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_BINARY_SEARCH,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.LOOP_CONDITION, per_language(5, 8, 5, 6, 5, 5, 7)),
            LineRule(S.COMPARISON, per_language(6, 9, 6, 7, 6, 6, 8), when=_mid_equals, name="mid_equals_target"),
            LineRule(S.COMPARISON, per_language(8, 11, 8, 9, 8, 8, 10), when=_mid_below, name="mid_below_target"),
            LineRule(S.COMPARISON, per_language(10, 13, 10, 11, 10, 10, 12), when=lambda ctx: ctx.value > ctx.target, name="mid_above_target"),
            LineRule(S.COMPARISON, per_language([6, 8, 10], [9, 11, 13], [6, 8, 10], [7, 9, 11], [6, 8, 10], [6, 8, 10], [8, 10, 12])),
            LineRule(S.ASSIGNMENT, per_language(9, 14, 11, 12, 11, 9, 13), when=lambda ctx: ctx.direction == "right", name="move_left_bound"),
            LineRule(S.ASSIGNMENT, per_language(11, 16, 13, 14, 14, 11, 15), when=lambda ctx: ctx.direction == "left", name="move_right_bound"),
            LineRule(S.ASSIGNMENT, per_language([9, 11], [14, 16], [11, 13], [12, 14], [11, 14], [9, 11], [13, 15])),
            LineRule(S.RETURN_FOUND, per_language(9, 12, 9, 10, 9, 9, 11)),
            LineRule(S.RETURN_NOT_FOUND, per_language(15, 19, 15, 17, 18, 15, 18)),
        ),
        default=ENTRY,
    )
