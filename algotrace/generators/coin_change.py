"""Coin change — bottom-up DP table fill with path reconstruction."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..context_types import DpContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import (
    TraceBuilder,
    empty_input_trace,
    format_value,
    highlight,
    require_int,
    require_int_list,
    structure,
)

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_COIN_CHANGE


def _cell(value: Any) -> Any:
    return constants.NO_CANDIDATE_DISPLAY if value == constants.NO_CANDIDATE else value


def _display_table(dp: list[Any]) -> list[Any]:
    return [_cell(v) for v in dp]


def _snapshot(dp: list[Any], coins: list[int], path_table: list[int]) -> dict:
    return {
        "dpTable": structure(
            constants.KIND_ARRAY,
            _display_table(dp),
            "DP Table (min coins needed)",
            position="top",
        ),
        "coins": structure(
            constants.KIND_ARRAY, list(coins), "Available Coins", position="left"
        ),
        "pathTable": structure(
            constants.KIND_ARRAY,
            list(path_table),
            "Path Reconstruction",
            position="bottom",
        ),
    }


def generate_coin_change(
    coins: Sequence[int] | None = None, amount: int | None = None
) -> list[Step]:
    """Trace the minimum-coins DP for *amount* using *coins*.

    Args:
        coins: Positive integer denominations. Defaults to ``[1, 3, 4]``.
        amount: Non-negative target amount. Defaults to ``6``.

    Returns:
        The full step sequence, ending in ``return`` or ``dp_no_solution``.
    """
    coins = list(constants.DEFAULT_COINS) if coins is None else coins
    amount = constants.DEFAULT_AMOUNT if amount is None else amount
    coins = require_int_list(ALGORITHM_ID, "coins", coins)
    amount = require_int(ALGORITHM_ID, "amount", amount)
    if amount < 0:
        raise InvalidInputError(ALGORITHM_ID, f"amount must be >= 0, got {amount}")
    bad = [c for c in coins if c <= 0]
    if bad:
        raise InvalidInputError(
            ALGORITHM_ID, f"coin denominations must be positive, got {bad}"
        )
    if not coins:
        return empty_input_trace(
            ALGORITHM_ID,
            f"No coin denominations were provided, so amount {amount} cannot be formed.",
            variables={"targetAmount": amount},
        )

    coins = sorted(coins)
    dp: list[Any] = [0] + [constants.NO_CANDIDATE] * amount
    path_table = [-1] * (amount + 1)
    builder = TraceBuilder(ALGORITHM_ID, {"coins": coins, "amount": amount})

    builder.emit(
        StepType.DP_TABLE_INITIALIZATION,
        f"Create a DP table of size {amount + 1}. dp[0] = 0 because zero coins "
        f"make amount 0; every other amount starts at {constants.NO_CANDIDATE_DISPLAY}.",
        structures=_snapshot(dp, coins, path_table),
        highlights={"dpTable": [highlight(constants.SELECT_INDICES, [0], "base_case")]},
        context=DpContext(current_amount=0),
        variables={"coins": coins, "amount": amount, "dp[0]": 0},
        duration=constants.TIMING_INTRO_MS,
    )

    for current in range(1, amount + 1):
        builder.emit(
            StepType.DP_AMOUNT_PROCESSING,
            f"Find the fewest coins that make amount {current}.",
            structures=_snapshot(dp, coins, path_table),
            highlights={
                "dpTable": [highlight(constants.SELECT_INDICES, [current], "current")]
            },
            context=DpContext(current_amount=current),
            variables={"currentAmount": current, f"dp[{current}]": _cell(dp[current])},
            duration=constants.TIMING_SHORT_MS,
        )

        for coin_index, coin in enumerate(coins):
            fits = coin <= current
            verdict = (
                f"it fits because {coin} ≤ {current}."
                if fits
                else f"it is larger than {current}, so it is skipped."
            )
            builder.emit(
                StepType.DP_COIN_CONSIDERATION,
                f"Consider coin {coin} for amount {current}: {verdict}",
                structures=_snapshot(dp, coins, path_table),
                highlights={
                    "coins": [
                        highlight(
                            constants.SELECT_INDICES,
                            [coin_index],
                            "current" if fits else "mismatch",
                        )
                    ],
                    "dpTable": [
                        highlight(constants.SELECT_INDICES, [current], "current")
                    ],
                },
                context=DpContext(current_amount=current, coin_value=coin),
                variables={"currentAmount": current, "coin": coin, "coinFits": fits},
                duration=constants.TIMING_NORMAL_MS,
            )
            if not fits:
                continue

            sub = current - coin
            builder.emit(
                StepType.DP_SUBPROBLEM_LOOKUP,
                f"Look up dp[{sub}] = {format_value(dp[sub])}, the fewest coins for "
                f"the remaining amount {current} - {coin} = {sub}.",
                structures=_snapshot(dp, coins, path_table),
                highlights={
                    "dpTable": [
                        highlight(constants.SELECT_INDICES, [sub], "compare"),
                        highlight(constants.SELECT_INDICES, [current], "current"),
                    ]
                },
                context=DpContext(
                    current_amount=current, coin_value=coin, subproblem_amount=sub
                ),
                variables={
                    "currentAmount": current,
                    "coin": coin,
                    "subproblem": sub,
                    f"dp[{sub}]": _cell(dp[sub]),
                },
                duration=constants.TIMING_LONG_MS,
            )
            if dp[sub] == constants.NO_CANDIDATE:
                continue

            candidate = dp[sub] + 1
            will_update = candidate < dp[current]
            outcome = "a new minimum." if will_update else "no improvement."
            builder.emit(
                StepType.DP_COMPARISON,
                f"Compare dp[{current}] = {format_value(dp[current])} with "
                f"dp[{sub}] + 1 = {candidate}: {outcome}",
                structures=_snapshot(dp, coins, path_table),
                highlights={
                    "dpTable": [
                        highlight(constants.SELECT_INDICES, [current], "compare"),
                        highlight(constants.SELECT_INDICES, [sub], "source"),
                    ]
                },
                context=DpContext(
                    current_amount=current,
                    coin_value=coin,
                    subproblem_amount=sub,
                    current_value=_cell(dp[current]),
                    candidate_value=candidate,
                    will_update=will_update,
                ),
                variables={
                    "currentAmount": current,
                    "coin": coin,
                    "comparisonValues": [_cell(dp[current]), candidate],
                    "willUpdate": will_update,
                },
                duration=constants.TIMING_LONG_MS,
            )
            if not will_update:
                continue

            dp[current] = candidate
            path_table[current] = coin
            logger.debug("dp[%d] <- %d via coin %d", current, candidate, coin)
            builder.emit(
                StepType.DP_TABLE_UPDATE,
                f"Set dp[{current}] = {candidate} and record coin {coin} as the "
                f"last coin used for amount {current}.",
                structures=_snapshot(dp, coins, path_table),
                highlights={
                    "dpTable": [
                        highlight(constants.SELECT_INDICES, [current], "updated")
                    ],
                    "pathTable": [
                        highlight(constants.SELECT_INDICES, [current], "updated")
                    ],
                },
                context=DpContext(
                    current_amount=current,
                    coin_value=coin,
                    subproblem_amount=sub,
                    candidate_value=candidate,
                    will_update=True,
                ),
                variables={
                    "currentAmount": current,
                    "coin": coin,
                    f"dp[{current}]": candidate,
                },
                duration=constants.TIMING_NORMAL_MS,
            )

    if dp[amount] == constants.NO_CANDIDATE:
        builder.emit(
            StepType.DP_NO_SOLUTION,
            f"dp[{amount}] is still {constants.NO_CANDIDATE_DISPLAY}: amount {amount} "
            f"cannot be made from coins {coins}.",
            structures=_snapshot(dp, coins, path_table),
            highlights={
                "dpTable": [highlight(constants.SELECT_INDICES, [amount], "mismatch")]
            },
            context=DpContext(current_amount=amount),
            variables={
                "targetAmount": amount,
                "finalResult": "No solution",
                "canMakeAmount": False,
                "solutionFound": False,
            },
            duration=constants.TIMING_RESULT_MS,
        )
        return builder.finish()

    min_coins = dp[amount]
    builder.emit(
        StepType.DP_OPTIMAL_SOLUTION_FOUND,
        f"dp[{amount}] = {min_coins}: amount {amount} needs at least {min_coins} coin(s).",
        structures=_snapshot(dp, coins, path_table),
        highlights={"dpTable": [highlight(constants.SELECT_INDICES, [amount], "match")]},
        context=DpContext(current_amount=amount, current_value=min_coins),
        variables={"targetAmount": amount, "minCoinsNeeded": min_coins},
        duration=constants.TIMING_INTRO_MS,
    )

    optimal: list[int] = []
    remaining = amount
    while remaining > 0:
        coin = path_table[remaining]
        optimal.append(coin)
        previous = remaining
        remaining -= coin
        builder.emit(
            StepType.DP_PATH_RECONSTRUCTION,
            f"pathTable[{previous}] = {coin}: take coin {coin}, leaving amount {remaining}.",
            structures=_snapshot(dp, coins, path_table),
            highlights={
                "pathTable": [highlight(constants.SELECT_INDICES, [previous], "path")],
                "dpTable": [highlight(constants.SELECT_INDICES, [remaining], "path")],
            },
            context=DpContext(
                current_amount=previous, coin_value=coin, subproblem_amount=remaining
            ),
            variables={"pathSoFar": list(optimal), "remainingAmount": remaining},
            duration=constants.TIMING_LONG_MS,
        )

    builder.emit(
        StepType.RETURN,
        f"Return {min_coins}: amount {amount} is made with coins {optimal}.",
        structures=_snapshot(dp, coins, path_table),
        highlights={"dpTable": [highlight(constants.SELECT_INDICES, [amount], "match")]},
        context=DpContext(current_amount=amount, current_value=min_coins),
        variables={
            "targetAmount": amount,
            "minCoinsNeeded": min_coins,
            "optimalCoins": optimal,
            "totalValue": sum(optimal),
            "solutionFound": True,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
