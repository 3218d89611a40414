"""Source lines for recursive factorial."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language(1, 4, 1, 2, 1, 1, 5)
RECURSE = per_language(7, 10, 7, 8, 7, 7, 11)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_FACTORIAL,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.RECURSIVE_CALL, ENTRY, when=lambda ctx: ctx.depth == 0, name="outermost_call"),
            LineRule(S.RECURSIVE_CALL, RECURSE),
            LineRule(S.BASE_CASE_CHECK, per_language(3, 6, 3, 4, 3, 3, 7)),
            LineRule(S.BASE_CASE_REACHED, per_language(4, 7, 4, 5, 4, 4, 8)),
            LineRule(S.RECURSIVE_RETURN, RECURSE),
            LineRule(
                S.CALL_STACK_POP,
                per_language([7, 8], [10, 11], 7, [8, 9], [7, 8], [7, 8], [11, 12]),
            ),
            LineRule(S.RETURN, RECURSE),
        ),
        default=ENTRY,
    )
