"""Tests for level-order (BFS) tree traversal traces."""

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.bfs_traversal import generate_bfs_traversal
from algotrace.generators.trees import EXAMPLE_TREES, example_tree
from algotrace.step_types import StepType

S = StepType


class TestBfsExampleTrees:
    def test_small_tree_step_sequence(self):
        trace = generate_bfs_traversal(tree="small")
        assert [s.step_type for s in trace] == [
            S.INITIALIZATION,
            S.QUEUE_ENQUEUE,
            S.QUEUE_PEEK,
            S.QUEUE_DEQUEUE,
            S.QUEUE_ENQUEUE,
            S.QUEUE_ENQUEUE,
            S.LEVEL_COMPLETE,
            S.QUEUE_PEEK,
            S.QUEUE_DEQUEUE,
            S.QUEUE_PEEK,
            S.QUEUE_DEQUEUE,
            S.RETURN,
        ]

    @pytest.mark.parametrize(
        "name, expected, levels",
        [
            ("small", [2, 1, 3], 2),
            ("medium", [4, 2, 6, 1, 3, 5, 7], 3),
            ("unbalanced", [1, 2, 3, 2.5], 4),
        ],
    )
    def test_level_order(self, name, expected, levels):
        final = generate_bfs_traversal(tree=name)[-1]
        assert final.variables["finalResult"] == expected
        assert final.variables["totalLevels"] == levels
        assert final.variables["totalNodes"] == len(expected)

    def test_level_complete_between_levels(self):
        trace = generate_bfs_traversal(tree="medium")
        completes = [s.variables["completedLevel"] for s in trace if s.step_type == S.LEVEL_COMPLETE]
        assert completes == [0, 1]

    def test_levels_grouped(self):
        final = generate_bfs_traversal(tree="medium")[-1]
        assert final.variables["levels"] == [[4], [2, 6], [1, 3, 5, 7]]

    def test_enqueue_context_records_child_side(self):
        trace = generate_bfs_traversal(tree="small")
        sides = [
            s.step_context.child_side for s in trace if s.step_type == S.QUEUE_ENQUEUE
        ]
        assert sides == [None, "left", "right"]

    def test_queue_elements_have_stable_ids(self):
        trace = generate_bfs_traversal(tree="small")
        after_children = trace[5].data_structures["queue"].data
        assert [e["id"] for e in after_children] == ["queue_elem_1", "queue_elem_2"]
        assert [e["nodeId"] for e in after_children] == ["node2", "node3"]
        assert all(e["level"] == 1 for e in after_children)

    def test_queue_is_fifo(self):
        trace = generate_bfs_traversal(tree="medium")
        dequeued = [s.variables["visited"] for s in trace if s.step_type == S.QUEUE_DEQUEUE]
        assert dequeued == ["node1", "node2", "node3", "node4", "node5", "node6", "node7"]

    def test_default_is_small_tree(self):
        assert generate_bfs_traversal()[-1].variables["finalResult"] == [2, 1, 3]

    def test_explicit_nodes(self):
        nodes, root = example_tree("medium")
        final = generate_bfs_traversal(nodes, root)[-1]
        assert final.variables["finalResult"] == [4, 2, 6, 1, 3, 5, 7]


class TestBfsInput:
    def test_single_node(self):
        final = generate_bfs_traversal([{"id": "r", "value": 9}], "r")[-1]
        assert final.variables["finalResult"] == [9]
        assert final.variables["totalLevels"] == 1

    def test_empty_tree(self):
        trace = generate_bfs_traversal([], None)
        assert [s.step_type for s in trace] == [S.EMPTY_INPUT]
        assert trace[0].variables["finalResult"] == []

    def test_missing_child(self):
        with pytest.raises(InvalidInputError, match="missing child"):
            generate_bfs_traversal([{"id": "a", "value": 1, "left": "ghost"}], "a")

    def test_shared_child(self):
        nodes = [
            {"id": "a", "value": 1, "left": "b", "right": "b"},
            {"id": "b", "value": 2},
        ]
        with pytest.raises(InvalidInputError, match="more than once"):
            generate_bfs_traversal(nodes, "a")

    def test_unknown_root(self):
        with pytest.raises(InvalidInputError):
            generate_bfs_traversal([{"id": "a", "value": 1}], "z")

    def test_unknown_example_name(self):
        with pytest.raises(InvalidInputError):
            generate_bfs_traversal(tree="enormous")

    def test_example_trees_are_valid(self):
        assert set(EXAMPLE_TREES) == {"small", "medium", "unbalanced"}

    @pytest.mark.parametrize(
        "nodes,root",
        [(5, "a"), ("abc", "a"), ({"id": "a", "value": 1}, "a")],
        ids=["int", "str", "dict"],
    )
    def test_non_list_nodes(self, nodes, root):
        with pytest.raises(InvalidInputError, match="must be a list"):
            generate_bfs_traversal(nodes, root)

    @pytest.mark.parametrize("root", [1, ["a"], {"id": "a"}])
    def test_non_string_root(self, root):
        with pytest.raises(InvalidInputError, match="root must be"):
            generate_bfs_traversal([{"id": "a", "value": 1}], root)

    def test_non_string_example_name(self):
        with pytest.raises(InvalidInputError, match="Unknown example tree"):
            generate_bfs_traversal(tree=["small"])
