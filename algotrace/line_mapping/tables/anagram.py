"""Source lines for frequency-map anagram detection."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language([2, 3], R(6, 9), [2, 3], [4, 5], [3, 4], [2, 3], [4, 5])


def _reason(kind: str):
    return lambda ctx: ctx.reason == kind


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_ANAGRAM_DETECTION,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(S.STRING_COMPARISON, per_language([5, 6, 7], [11, 12, 13], [5, 6, 7], [7, 8, 9], [7, 8, 9], [5, 6, 7], [7, 8, 9])),
            LineRule(S.CHARACTER_ACCESS, per_language(12, 16, 10, 13, 13, 11, 13)),
            LineRule(S.FREQUENCY_COUNT, per_language(13, 17, 11, 14, 14, 12, 14)),
            LineRule(S.HASH_MAP_COMPARISON, per_language(R(17, 21), R(20, 24), R(14, 17), R(17, 21), R(17, 20), R(15, 20), R(17, 20))),
            LineRule(S.RETURN_FOUND, per_language(24, 26, 19, 24, 23, 23, 23)),
            LineRule(S.RETURN_NOT_FOUND, per_language(6, 12, 6, 8, 8, 6, 8), when=_reason("length"), name="length_mismatch"),
            LineRule(S.RETURN_NOT_FOUND, per_language(20, 23, 16, 20, 19, 19, 19), when=_reason("frequency"), name="count_mismatch"),
            LineRule(S.RETURN_NOT_FOUND, per_language([6, 20], [12, 23], [6, 16], [8, 20], [8, 19], [6, 19], [8, 19])),
        ),
        default=ENTRY,
    )
