"""Source lines for k-largest selection with a min-heap."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRule, RuleTable, per_language

ENTRY = per_language(3, 5, 5, 5, 4, 3, [30, 31])
HEAP_COMPARE = per_language(13, 15, 15, 15, 12, 13, 41)


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_K_LARGEST,
        rules=(
            LineRule(S.HEAP_INITIALIZATION, ENTRY),
            LineRule(S.COMPARISON, per_language(6, 8, 8, 8, 6, 6, 34)),
            LineRule(
                S.HEAP_PUSH,
                per_language([9, 10], [11, 12], [11, 12], [11, 12], [8, 9], [9, 10], [37, 38]),
            ),
            LineRule(S.HEAP_COMPARE, HEAP_COMPARE),
            LineRule(
                S.HEAP_MAINTAIN_SIZE,
                per_language([14, 15], [16, 17], 16, [16, 17], [13, 14], [14, 15], [42, 43]),
            ),
            LineRule(S.NO_SWAP, HEAP_COMPARE),
            LineRule(
                S.HEAP_RESULT_FOUND,
                per_language(20, [21, 27], 19, [21, 23], [21, 26], 20, [48, 55]),
            ),
        ),
        default=ENTRY,
    )
