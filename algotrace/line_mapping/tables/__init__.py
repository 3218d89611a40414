"""Declarative rule tables, one module per algorithm."""

from __future__ import annotations

from typing import Callable

from ..registry import RuleTable
from ... import constants
from . import (
    anagram,
    balanced_brackets,
    bfs_traversal,
    binary_search,
    bubble_sort,
    coin_change,
    cycle_detection,
    factorial,
    in_order_traversal,
    k_largest,
    linear_search,
    min_cost,
    reverse_linked_list,
    two_sum,
)

TABLE_FACTORIES: dict[str, Callable[[], RuleTable]] = {
    constants.ALGO_COIN_CHANGE: coin_change.build_table,
    constants.ALGO_CYCLE_DETECTION: cycle_detection.build_table,
    constants.ALGO_K_LARGEST: k_largest.build_table,
    constants.ALGO_BFS_TRAVERSAL: bfs_traversal.build_table,
    constants.ALGO_FACTORIAL: factorial.build_table,
    constants.ALGO_IN_ORDER_TRAVERSAL: in_order_traversal.build_table,
    constants.ALGO_BALANCED_PARENTHESES: balanced_brackets.build_table,
    constants.ALGO_ANAGRAM_DETECTION: anagram.build_table,
    constants.ALGO_LINEAR_SEARCH: linear_search.build_table,
    constants.ALGO_BINARY_SEARCH: binary_search.build_table,
    constants.ALGO_TWO_SUM: two_sum.build_table,
    constants.ALGO_BUBBLE_SORT: bubble_sort.build_table,
    constants.ALGO_REVERSE_LINKED_LIST: reverse_linked_list.build_table,
    constants.ALGO_MIN_COST_ARRAY: min_cost.build_table,
}
