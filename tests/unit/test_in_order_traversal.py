"""Tests for the recursive in-order traversal trace."""

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.in_order_traversal import generate_in_order_traversal
from algotrace.step_types import StepType

S = StepType


def _visits(trace):
    return [
        s.step_context.node_id
        for s in trace
        if s.step_type == S.TREE_TRAVERSAL and s.step_context.phase == "visiting"
    ]


class TestInOrderResult:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("small", [1, 2, 3]),
            ("medium", [1, 2, 3, 4, 5, 6, 7]),
            ("unbalanced", [1, 2, 2.5, 3]),
        ],
    )
    def test_sorted_order_for_search_trees(self, name, expected):
        final = generate_in_order_traversal(tree=name)[-1]
        assert final.step_type == S.RETURN
        assert final.variables["finalResult"] == expected

    def test_traversal_order_ids(self):
        final = generate_in_order_traversal(tree="small")[-1]
        assert final.variables["traversalOrder"] == ["node2", "node1", "node3"]

    def test_visit_steps_follow_result(self):
        assert _visits(generate_in_order_traversal(tree="small")) == ["node2", "node1", "node3"]


class TestInOrderShape:
    def test_small_tree_step_count(self):
        # each leaf frame takes 15 steps, the root frame 36
        assert len(generate_in_order_traversal(tree="small")) == 38

    def test_null_children_show_base_case(self):
        trace = generate_in_order_traversal(tree="small")
        reached = [s for s in trace if s.step_type == S.BASE_CASE_REACHED]
        assert len(reached) == 4

    def test_left_recursion_precedes_visit(self):
        trace = generate_in_order_traversal(tree="small")
        first_visit = next(
            s.id for s in trace
            if s.step_type == S.TREE_TRAVERSAL and s.step_context.phase == "visiting"
        )
        calls_before = [
            s.step_context.node_id
            for s in trace[:first_visit]
            if s.step_type == S.RECURSIVE_CALL
        ]
        assert calls_before[:2] == ["node1", "node2"]

    def test_phases_per_node(self):
        trace = generate_in_order_traversal(tree="small")
        root_phases = [
            s.step_context.phase
            for s in trace
            if s.step_type == S.TREE_TRAVERSAL and s.step_context.node_id == "node1"
        ]
        assert root_phases == ["traversing_left", "visiting", "traversing_right"]

    def test_call_stack_empty_at_end(self):
        final = generate_in_order_traversal(tree="medium")[-1]
        assert final.data_structures["callStack"].data == []

    def test_parent_phase_updated_after_child_returns(self):
        trace = generate_in_order_traversal(tree="small")
        returns = [s for s in trace if s.step_type == S.RECURSIVE_RETURN]
        assert [r.step_context.phase for r in returns] == ["left_done", "right_done"]

    def test_max_stack_depth(self):
        trace = generate_in_order_traversal(tree="small")
        depth = max(len(s.data_structures["callStack"].data) for s in trace)
        assert depth == 3


class TestInOrderInput:
    def test_empty_tree(self):
        trace = generate_in_order_traversal([], None)
        assert [s.step_type for s in trace] == [S.EMPTY_INPUT]

    def test_duplicate_ids(self):
        nodes = [{"id": "a", "value": 1}, {"id": "a", "value": 2}]
        with pytest.raises(InvalidInputError, match="duplicate"):
            generate_in_order_traversal(nodes, "a")

    def test_too_many_nodes(self):
        nodes = [
            {"id": f"n{i}", "value": i, "right": f"n{i + 1}" if i < 100 else None}
            for i in range(101)
        ]
        with pytest.raises(InvalidInputError):
            generate_in_order_traversal(nodes, "n0")

    def test_non_list_nodes(self):
        with pytest.raises(InvalidInputError, match="must be a list"):
            generate_in_order_traversal(3, "a")
