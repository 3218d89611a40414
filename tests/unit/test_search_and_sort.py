"""Tests for the array, pointer and greedy traces: searches, two-sum, bubble sort,
linked-list reversal and minimum-cost reduction."""

import json

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.binary_search import generate_binary_search
from algotrace.generators.bubble_sort import generate_bubble_sort
from algotrace.generators.linear_search import generate_linear_search
from algotrace.generators.min_cost import generate_min_cost
from algotrace.generators.reverse_linked_list import generate_reverse_linked_list
from algotrace.generators.two_sum import generate_two_sum
from algotrace.step_types import StepType

S = StepType
SEARCH_ARRAY = [2, 5, 8, 12, 16, 23, 38, 56, 72, 91]


def _types(trace):
    return [s.step_type for s in trace]


class TestLinearSearch:
    def test_found(self):
        final = generate_linear_search(SEARCH_ARRAY, 23)[-1]
        assert final.step_type == S.RETURN_FOUND
        assert final.variables["foundIndex"] == 5
        assert final.variables["comparisons"] == 6

    def test_not_found_checks_everything(self):
        final = generate_linear_search(SEARCH_ARRAY, 4)[-1]
        assert final.step_type == S.RETURN_NOT_FOUND
        assert final.variables["foundIndex"] == -1
        assert final.variables["comparisons"] == len(SEARCH_ARRAY)

    def test_first_occurrence(self):
        final = generate_linear_search([7, 3, 7], 7)[-1]
        assert final.variables["foundIndex"] == 0

    def test_empty(self):
        assert _types(generate_linear_search([], 1)) == [S.EMPTY_INPUT]


class TestBinarySearch:
    def test_found_in_three_iterations(self):
        trace = generate_binary_search(SEARCH_ARRAY, 23)
        final = trace[-1]
        assert final.step_type == S.RETURN_FOUND
        assert final.variables["foundIndex"] == 5
        assert final.variables["iterations"] == 3

    def test_narrowing_directions(self):
        trace = generate_binary_search(SEARCH_ARRAY, 23)
        directions = [s.step_context.direction for s in trace if s.step_type == S.ASSIGNMENT]
        assert directions == ["right", "left"]

    def test_not_found_ends_with_failed_condition(self):
        trace = generate_binary_search(SEARCH_ARRAY, 4)
        assert trace[-1].step_type == S.RETURN_NOT_FOUND
        assert trace[-2].step_type == S.LOOP_CONDITION
        assert trace[-2].variables["continue"] is False

    def test_unsorted_input_is_sorted(self):
        final = generate_binary_search([9, 1, 5], 9)[-1]
        assert final.variables["sortedArray"] == [1, 5, 9]
        assert final.variables["foundIndex"] == 2

    def test_window_never_inverts_while_searching(self):
        for step in generate_binary_search(SEARCH_ARRAY, 91):
            if step.step_type == S.COMPARISON:
                assert step.step_context.left <= step.step_context.mid <= step.step_context.right


class TestTwoSum:
    def test_default_pair(self):
        trace = generate_two_sum([2, 7, 11, 15], 9)
        final = trace[-1]
        assert final.step_type == S.RETURN_FOUND
        assert final.variables["indices"] == [0, 1]
        assert final.variables["pair"] == [2, 7]
        moves = [s.step_type for s in trace if s.step_type in (S.POINTER_MOVE_LEFT, S.POINTER_MOVE_RIGHT)]
        assert moves == [S.POINTER_MOVE_RIGHT, S.POINTER_MOVE_RIGHT]

    def test_no_pair(self):
        final = generate_two_sum([1, 2], 10)[-1]
        assert final.step_type == S.RETURN_NOT_FOUND
        assert final.variables["pair"] == []

    def test_single_element_is_empty_input(self):
        assert _types(generate_two_sum([5], 5)) == [S.EMPTY_INPUT]

    def test_rejects_non_integer_target(self):
        with pytest.raises(InvalidInputError):
            generate_two_sum([1, 2], "3")


class TestBubbleSort:
    def test_sorts_default(self):
        final = generate_bubble_sort([64, 34, 25, 12, 22, 11, 90])[-1]
        assert final.step_type == S.RETURN
        assert final.variables["sortedArray"] == [11, 12, 22, 25, 34, 64, 90]

    def test_sorted_input_exits_after_one_pass(self):
        trace = generate_bubble_sort([1, 2, 3])
        final = trace[-1]
        assert final.variables["totalSwaps"] == 0
        assert _types(trace).count(S.PASS_COMPLETE) == 1
        assert S.SWAP not in _types(trace)

    def test_swap_count_matches_inversions(self):
        final = generate_bubble_sort([3, 2, 1])[-1]
        assert final.variables["totalSwaps"] == 3

    def test_single_element(self):
        assert _types(generate_bubble_sort([4])) == [S.INITIALIZATION, S.RETURN]

    def test_empty(self):
        assert _types(generate_bubble_sort([])) == [S.EMPTY_INPUT]


class TestReverseLinkedList:
    def test_reverses(self):
        final = generate_reverse_linked_list([1, 2, 3])[-1]
        assert final.variables["reversedList"] == [3, 2, 1]
        assert final.variables["newHead"] == 3

    def test_one_link_reversal_per_node(self):
        trace = generate_reverse_linked_list([1, 2, 3, 4, 5])
        assert _types(trace).count(S.LINK_REVERSAL) == 5

    def test_reversed_links_are_pairs(self):
        final = generate_reverse_linked_list([1, 2, 3])[-1]
        links = final.data_structures["linkedList"].data["reversedLinks"]
        assert links == [
            {"from": "node0", "to": None},
            {"from": "node1", "to": "node0"},
            {"from": "node2", "to": "node1"},
        ]
        assert '"to": null' in json.dumps(links)

    def test_input_snapshot_untouched(self):
        first = generate_reverse_linked_list([1, 2, 3])[0]
        nodes = first.data_structures["linkedList"].data["nodes"]
        assert [n["next"] for n in nodes] == ["node1", "node2", None]

    def test_empty(self):
        trace = generate_reverse_linked_list([])
        assert _types(trace) == [S.EMPTY_INPUT]
        assert trace[0].variables["newHead"] is None


class TestMinCost:
    @pytest.mark.parametrize(
        "array, cost",
        [([4, 3, 2], 4), ([1, 5, 9, 2], 3), ([7, 7], 7)],
    )
    def test_total_cost(self, array, cost):
        final = generate_min_cost(array)[-1]
        assert final.step_type == S.RETURN
        assert final.variables["totalCost"] == cost
        assert final.variables["finalElement"] == min(array)

    def test_one_removal_per_operation(self):
        trace = generate_min_cost([4, 3, 2])
        assert _types(trace).count(S.ELEMENT_REMOVAL) == 2

    @pytest.mark.parametrize("array", [[], [5]])
    def test_trivial_input(self, array):
        trace = generate_min_cost(array)
        assert _types(trace) == [S.EMPTY_INPUT]
        assert trace[0].variables["totalCost"] == 0
