"""Source lines for stack-based bracket validation."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language([1, 2, 3], [7, 8, 9], [1, 2, 3], R(3, 8), R(4, 9), [1, 2, 3], [5, 6, 7])
SUCCESS = per_language(21, 26, 20, 25, 33, 21, 27)


def _error(kind: str):
    return lambda ctx: ctx.error_type == kind


def _char_type(kind: str):
    return lambda ctx: ctx.char_type == kind


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_BALANCED_PARENTHESES,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.CHARACTER_ACCESS, per_language([5, 6], [11, 12], [5, 6], [10, 11], 11, [5, 6], 9)),
            LineRule(S.CHARACTER_CHECK, per_language(8, 14, 8, 13, 13, 8, 11), when=_char_type("opening"), name="opening_bracket"),
            LineRule(S.CHARACTER_CHECK, per_language(12, 18, 12, 17, 19, 12, 15), when=_char_type("closing"), name="closing_bracket"),
            LineRule(S.CHARACTER_CHECK, per_language([8, 12], [14, 18], [8, 12], [13, 17], [13, 19], [8, 12], [11, 15])),
            LineRule(S.STACK_PUSH, per_language(9, 15, 9, 14, 14, 9, 12)),
            LineRule(S.STACK_PEEK, per_language(15, [21, 22], 16, 20, 24, 15, [19, 20])),
            LineRule(S.STACK_POP, per_language([15, 16], [21, 22, 23], [16, 17], [20, 21], R(24, 28), [15, 16], R(19, 23))),
            LineRule(
                S.VALIDATION_FAILURE,
                per_language(13, 19, [13, 14], 18, [20, 21, 22], 13, [16, 17, 18]),
                when=_error("no_opening_bracket"),
                name="empty_stack",
            ),
            LineRule(
                S.VALIDATION_FAILURE,
                per_language(16, 23, [17, 18], 21, R(25, 28), 16, [21, 22, 23]),
                when=_error("mismatched_brackets"),
                name="mismatch",
            ),
            LineRule(S.VALIDATION_FAILURE, SUCCESS, when=_error("unmatched_opening"), name="unmatched_at_end"),
            LineRule(
                S.VALIDATION_FAILURE,
                per_language([13, 16], [19, 23], [13, 14, 17, 18], [18, 21], [20, 21, 22, 25, 26, 27, 28], [13, 16], [16, 17, 18, 21, 22, 23]),
            ),
            LineRule(S.VALIDATION_SUCCESS, SUCCESS),
        ),
        default=ENTRY,
    )
