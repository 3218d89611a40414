"""Trace generators — one pure function per algorithm."""

from __future__ import annotations

import importlib
from typing import Callable

from ..trace_types import Step
from .. import constants

# Lazy imports to avoid loading every generator at startup
_GENERATORS: dict[str, str] = {
    constants.ALGO_COIN_CHANGE: "coin_change.generate_coin_change",
    constants.ALGO_CYCLE_DETECTION: "cycle_detection.generate_cycle_detection",
    constants.ALGO_K_LARGEST: "k_largest.generate_k_largest",
    constants.ALGO_BFS_TRAVERSAL: "bfs_traversal.generate_bfs_traversal",
    constants.ALGO_FACTORIAL: "factorial.generate_factorial",
    constants.ALGO_IN_ORDER_TRAVERSAL: "in_order_traversal.generate_in_order_traversal",
    constants.ALGO_BALANCED_PARENTHESES: "balanced_brackets.generate_balanced_brackets",
    constants.ALGO_ANAGRAM_DETECTION: "anagram.generate_anagram",
    constants.ALGO_LINEAR_SEARCH: "linear_search.generate_linear_search",
    constants.ALGO_BINARY_SEARCH: "binary_search.generate_binary_search",
    constants.ALGO_TWO_SUM: "two_sum.generate_two_sum",
    constants.ALGO_BUBBLE_SORT: "bubble_sort.generate_bubble_sort",
    constants.ALGO_REVERSE_LINKED_LIST: "reverse_linked_list.generate_reverse_linked_list",
    constants.ALGO_MIN_COST_ARRAY: "min_cost.generate_min_cost",
}


def get_generator(algorithm_id: str) -> Callable[..., list[Step]]:
    """Return the trace generator for *algorithm_id*.

    Raises ``ValueError`` if *algorithm_id* has no registered generator.
    """
    spec = _GENERATORS.get(algorithm_id)
    if spec is None:
        raise ValueError(f"Unsupported algorithm: {algorithm_id}")
    module_name, func_name = spec.split(".")
    mod = importlib.import_module(f".{module_name}", package=__package__)
    return getattr(mod, func_name)


SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(_GENERATORS.keys())

__all__ = ["get_generator", "SUPPORTED_ALGORITHMS"]
