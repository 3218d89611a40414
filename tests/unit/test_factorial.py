"""Tests for the recursive factorial trace."""

import math

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.factorial import generate_factorial
from algotrace.step_types import StepType

S = StepType


class TestFactorialTrace:
    def test_n_three_sequence(self):
        trace = generate_factorial(3)
        assert [s.step_type for s in trace] == [
            S.INITIALIZATION,
            S.RECURSIVE_CALL,
            S.BASE_CASE_CHECK,
            S.RECURSIVE_CALL,
            S.BASE_CASE_CHECK,
            S.RECURSIVE_CALL,
            S.BASE_CASE_CHECK,
            S.BASE_CASE_REACHED,
            S.CALL_STACK_POP,
            S.RECURSIVE_RETURN,
            S.CALL_STACK_POP,
            S.RECURSIVE_RETURN,
            S.CALL_STACK_POP,
            S.RETURN,
        ]

    @pytest.mark.parametrize("n", [0, 1, 2, 5, 10])
    def test_result(self, n):
        final = generate_factorial(n)[-1]
        assert final.variables["finalResult"] == math.factorial(n)

    def test_call_counts(self):
        final = generate_factorial(5)[-1]
        assert final.variables["totalCalls"] == 5
        assert final.variables["maxDepth"] == 5
        assert final.variables["inputN"] == 5

    def test_zero_hits_base_case_immediately(self):
        trace = generate_factorial(0)
        assert [s.step_type for s in trace] == [
            S.INITIALIZATION,
            S.RECURSIVE_CALL,
            S.BASE_CASE_CHECK,
            S.BASE_CASE_REACHED,
            S.CALL_STACK_POP,
            S.RETURN,
        ]

    def test_depth_in_context(self):
        trace = generate_factorial(3)
        depths = [s.step_context.depth for s in trace if s.step_type == S.RECURSIVE_CALL]
        assert depths == [0, 1, 2]

    def test_call_stack_grows_and_shrinks(self):
        trace = generate_factorial(3)
        sizes = [len(s.data_structures["callStack"].data) for s in trace]
        assert max(sizes) == 3
        assert sizes[-1] == 0

    def test_single_active_frame(self):
        for step in generate_factorial(4):
            frames = step.data_structures["callStack"].data
            if frames:
                assert sum(1 for f in frames if f["isActive"]) == 1

    def test_recursion_tree_links(self):
        tree = generate_factorial(3)[-1].data_structures["recursionTree"].data
        nodes = {n["id"]: n for n in tree["nodes"]}
        assert tree["rootId"] == "call_0"
        assert nodes["call_0"]["children"] == ["call_1"]
        assert nodes["call_1"]["parentId"] == "call_0"
        assert all(n["status"] == "completed" for n in nodes.values())
        assert [nodes[f"call_{i}"]["returnValue"] for i in range(3)] == [6, 2, 1]


class TestFactorialInput:
    @pytest.mark.parametrize("n", [-1, 101, True, 2.0, "3"])
    def test_rejected(self, n):
        with pytest.raises(InvalidInputError):
            generate_factorial(n)

    def test_upper_bound_accepted(self):
        final = generate_factorial(100)[-1]
        assert final.variables["finalResult"] == math.factorial(100)
