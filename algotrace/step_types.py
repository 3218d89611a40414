"""Closed set of step-type tags emitted by the trace generators."""

from __future__ import annotations

from enum import Enum


class StepType(str, Enum):
    # Shared
    INITIALIZATION = "initialization"
    COMPARISON = "comparison"
    ASSIGNMENT = "assignment"
    LOOP_START = "loop_start"
    LOOP_START_OUTER = "loop_start_outer"
    LOOP_START_INNER = "loop_start_inner"
    LOOP_CONDITION = "loop_condition"
    EMPTY_INPUT = "empty_input"
    # DP
    DP_TABLE_INITIALIZATION = "dp_table_initialization"
    DP_AMOUNT_PROCESSING = "dp_amount_processing"
    DP_COIN_CONSIDERATION = "dp_coin_consideration"
    DP_SUBPROBLEM_LOOKUP = "dp_subproblem_lookup"
    DP_COMPARISON = "dp_comparison"
    DP_TABLE_UPDATE = "dp_table_update"
    DP_NO_SOLUTION = "dp_no_solution"
    DP_OPTIMAL_SOLUTION_FOUND = "dp_optimal_solution_found"
    DP_PATH_RECONSTRUCTION = "dp_path_reconstruction"
    # Graph
    GRAPH_COMPONENT_COMPLETE = "graph_component_complete"
    GRAPH_NODE_VISIT = "graph_node_visit"
    GRAPH_EDGE_EXPLORE = "graph_edge_explore"
    GRAPH_CYCLE_DETECTED = "graph_cycle_detected"
    GRAPH_BACKTRACK = "graph_backtrack"
    # Heap
    HEAP_INITIALIZATION = "heap_initialization"
    HEAP_PUSH = "heap_push"
    HEAP_COMPARE = "heap_compare"
    HEAP_MAINTAIN_SIZE = "heap_maintain_size"
    HEAP_RESULT_FOUND = "heap_result_found"
    NO_SWAP = "no_swap"
    SWAP = "swap"
    PASS_COMPLETE = "pass_complete"
    # Queue / tree
    QUEUE_ENQUEUE = "queue_enqueue"
    QUEUE_PEEK = "queue_peek"
    QUEUE_DEQUEUE = "queue_dequeue"
    LEVEL_COMPLETE = "level_complete"
    TREE_TRAVERSAL = "tree_traversal"
    # Recursion
    RECURSIVE_CALL = "recursive_call"
    RECURSIVE_RETURN = "recursive_return"
    BASE_CASE_CHECK = "base_case_check"
    BASE_CASE_REACHED = "base_case_reached"
    CALL_STACK_POP = "call_stack_pop"
    # Stack / strings
    CHARACTER_ACCESS = "character_access"
    CHARACTER_CHECK = "character_check"
    STACK_PUSH = "stack_push"
    STACK_PEEK = "stack_peek"
    STACK_POP = "stack_pop"
    VALIDATION_SUCCESS = "validation_success"
    VALIDATION_FAILURE = "validation_failure"
    STRING_COMPARISON = "string_comparison"
    FREQUENCY_COUNT = "frequency_count"
    HASH_MAP_COMPARISON = "hash_map_comparison"
    # Pointers / linked lists
    POINTER_INITIALIZATION = "pointer_initialization"
    POINTER_MOVE_LEFT = "pointer_move_left"
    POINTER_MOVE_RIGHT = "pointer_move_right"
    POINTER_UPDATE = "pointer_update"
    LINK_REVERSAL = "link_reversal"
    NODE_TRAVERSAL = "node_traversal"
    # Greedy
    GREEDY_INSIGHT = "greedy_insight"
    FORMULA_DERIVATION = "formula_derivation"
    DECISION_TREE = "decision_tree"
    COST_CALCULATION = "cost_calculation"
    ELEMENT_REMOVAL = "element_removal"
    # Terminal
    RETURN = "return"
    RETURN_FOUND = "return_found"
    RETURN_NOT_FOUND = "return_not_found"


TERMINAL_STEP_TYPES: frozenset[StepType] = frozenset(
    {
        StepType.RETURN,
        StepType.RETURN_FOUND,
        StepType.RETURN_NOT_FOUND,
        StepType.DP_NO_SOLUTION,
        StepType.HEAP_RESULT_FOUND,
        StepType.VALIDATION_SUCCESS,
        StepType.VALIDATION_FAILURE,
        StepType.EMPTY_INPUT,
    }
)
