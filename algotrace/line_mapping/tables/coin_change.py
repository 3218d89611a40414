"""Source lines for the coin change DP."""

from __future__ import annotations

from ...step_types import StepType as S
from ... import constants
from ..registry import LineRange as R, LineRule, RuleTable, per_language

ENTRY = per_language(1, 6, 1, 3, 1, 1, 6)
COMPARE_UPDATE = per_language(
    R(9, 12, 9), R(13, 16, 13), R(9, 11, 9), R(10, 13, 10), R(11, 13, 11), R(9, 12, 9), R(14, 16, 14)
)
RESULT = per_language(17, 20, 13, 17, 17, 17, 22)


def _coin_too_large(ctx) -> bool:
    return ctx.coin_value > ctx.current_amount


def build_table() -> RuleTable:
    return RuleTable(
        algorithm_id=constants.ALGO_COIN_CHANGE,
        rules=(
            LineRule(S.INITIALIZATION, ENTRY),
            LineRule(
                S.DP_TABLE_INITIALIZATION,
                per_language([2, 3], [7, 8], [2, 3], [4, 5], [4, 5], [2, 3], [7, 9]),
            ),
            LineRule(S.DP_AMOUNT_PROCESSING, per_language(5, 10, 5, 7, 7, 5, 11)),
            LineRule(
                S.DP_COIN_CONSIDERATION,
                per_language(7, 12, 7, 9, 10, 7, 13),
                when=_coin_too_large,
                name="coin_exceeds_amount",
            ),
            LineRule(S.DP_COIN_CONSIDERATION, per_language(6, 11, 6, 8, 8, 6, 12)),
            LineRule(
                S.DP_SUBPROBLEM_LOOKUP,
                per_language([7, 8], 12, [7, 8], 9, 10, [7, 8], 13),
            ),
            LineRule(S.DP_COMPARISON, COMPARE_UPDATE),
            LineRule(S.DP_TABLE_UPDATE, COMPARE_UPDATE),
            LineRule(
                S.DP_OPTIMAL_SOLUTION_FOUND,
                per_language(17, 20, 13, 17, 17, 17, [20, 21, 22]),
            ),
            LineRule(S.DP_PATH_RECONSTRUCTION, RESULT),
            LineRule(S.DP_NO_SOLUTION, per_language(17, 20, 13, 17, 17, 17, [20, 21])),
            LineRule(S.RETURN, RESULT),
        ),
        default=ENTRY,
    )
