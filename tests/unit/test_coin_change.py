"""Tests for the coin change DP trace."""

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.coin_change import generate_coin_change
from algotrace.step_types import StepType


def _types(trace):
    return [s.step_type for s in trace]


def _final(trace):
    return trace[-1]


class TestCoinChangeDefault:
    def test_fewest_coins_for_six(self):
        final = _final(generate_coin_change([1, 3, 4], 6))
        assert final.step_type == StepType.RETURN
        assert final.variables["minCoinsNeeded"] == 2
        assert final.variables["optimalCoins"] == [3, 3]
        assert final.variables["totalValue"] == 6
        assert final.variables["solutionFound"] is True

    def test_first_step_initializes_table(self):
        first = generate_coin_change([1, 3, 4], 6)[0]
        assert first.step_type == StepType.DP_TABLE_INITIALIZATION
        assert first.data_structures["dpTable"].data == [0, "∞", "∞", "∞", "∞", "∞", "∞"]

    def test_final_table(self):
        final = _final(generate_coin_change([1, 3, 4], 6))
        assert final.data_structures["dpTable"].data == [0, 1, 2, 1, 1, 2, 2]

    def test_one_amount_processing_step_per_amount(self):
        trace = generate_coin_change([1, 3, 4], 6)
        processing = [
            s.step_context.current_amount
            for s in trace
            if s.step_type == StepType.DP_AMOUNT_PROCESSING
        ]
        assert processing == [1, 2, 3, 4, 5, 6]

    def test_every_coin_considered_for_every_amount(self):
        trace = generate_coin_change([1, 3, 4], 6)
        considered = [s for s in trace if s.step_type == StepType.DP_COIN_CONSIDERATION]
        assert len(considered) == 3 * 6

    def test_unset_cells_narrated_as_infinity(self):
        trace = generate_coin_change([1, 3, 4], 6)
        comparisons = [s for s in trace if s.step_type == StepType.DP_COMPARISON]
        assert any("∞" in s.explanation for s in comparisons)
        assert not any("inf" in s.explanation for s in trace)

    def test_oversized_coin_context(self):
        trace = generate_coin_change([1, 3, 4], 6)
        skipped = [
            s
            for s in trace
            if s.step_type == StepType.DP_COIN_CONSIDERATION
            and not s.variables["coinFits"]
        ]
        assert skipped
        assert all(s.step_context.coin_value > s.step_context.current_amount for s in skipped)

    def test_updates_only_on_improvement(self):
        trace = generate_coin_change([1, 3, 4], 6)
        for prev, step in zip(trace, trace[1:]):
            if step.step_type == StepType.DP_TABLE_UPDATE:
                assert prev.step_type == StepType.DP_COMPARISON
                assert prev.step_context.will_update is True

    def test_path_reconstruction_walks_down_to_zero(self):
        trace = generate_coin_change([1, 3, 4], 6)
        remaining = [
            s.variables["remainingAmount"]
            for s in trace
            if s.step_type == StepType.DP_PATH_RECONSTRUCTION
        ]
        assert remaining == [3, 0]


class TestCoinChangeEdgeCases:
    def test_no_solution(self):
        trace = generate_coin_change([5], 3)
        final = _final(trace)
        assert final.step_type == StepType.DP_NO_SOLUTION
        assert final.variables["finalResult"] == "No solution"
        assert final.variables["canMakeAmount"] is False
        assert StepType.DP_PATH_RECONSTRUCTION not in _types(trace)

    def test_zero_amount_needs_no_coins(self):
        final = _final(generate_coin_change([1, 2], 0))
        assert final.variables["minCoinsNeeded"] == 0
        assert final.variables["optimalCoins"] == []

    def test_no_coins_is_empty_input(self):
        trace = generate_coin_change([], 7)
        assert _types(trace) == [StepType.EMPTY_INPUT]
        assert trace[0].variables["targetAmount"] == 7

    def test_unsorted_coins_are_sorted(self):
        final = _final(generate_coin_change([4, 1, 3], 6))
        assert final.variables["minCoinsNeeded"] == 2

    @pytest.mark.parametrize(
        "coins, amount",
        [([1, 2], -1), ([0, 1], 3), ([-2], 3), ([1, "2"], 3), ([1], 2.5)],
        ids=["negative_amount", "zero_coin", "negative_coin", "string_coin", "float_amount"],
    )
    def test_invalid_input(self, coins, amount):
        with pytest.raises(InvalidInputError):
            generate_coin_change(coins, amount)
