"""Named constants — algorithm ids, languages and default step timings."""

from __future__ import annotations

ALGO_COIN_CHANGE = "coin-change"
ALGO_CYCLE_DETECTION = "cycle-detection"
ALGO_K_LARGEST = "k-largest-elements"
ALGO_BFS_TRAVERSAL = "bfs-traversal"
ALGO_FACTORIAL = "factorial"
ALGO_IN_ORDER_TRAVERSAL = "in-order-traversal"
ALGO_BALANCED_PARENTHESES = "balanced-parentheses"
ALGO_ANAGRAM_DETECTION = "anagram-detection"
ALGO_LINEAR_SEARCH = "linear-search"
ALGO_BINARY_SEARCH = "binary-search"
ALGO_TWO_SUM = "two-sum"
ALGO_BUBBLE_SORT = "bubble-sort"
ALGO_REVERSE_LINKED_LIST = "reverse-linked-list"
ALGO_MIN_COST_ARRAY = "min-cost-array"

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "javascript",
    "cpp",
    "python",
    "java",
    "rust",
    "typescript",
    "go",
)

DEFAULT_LANGUAGE = "python"

# DP "no candidate yet" marker; compares greater than any reachable coin count
NO_CANDIDATE = float("inf")
NO_CANDIDATE_DISPLAY = "∞"

# Structure kinds
KIND_ARRAY = "array"
KIND_GRAPH = "graph"
KIND_HEAP = "heap"
KIND_TREE = "tree"
KIND_QUEUE = "queue"
KIND_STACK = "stack"
KIND_CALL_STACK = "call_stack"
KIND_RECURSION_TREE = "recursion_tree"
KIND_HASHMAP = "hashmap"
KIND_STRING = "string"
KIND_LINKED_LIST = "linked_list"

# Highlight selectors
SELECT_INDICES = "indices"
SELECT_GRAPH_NODES = "graph_nodes"
SELECT_GRAPH_EDGES = "graph_edges"
SELECT_HEAP_ELEMENTS = "heap_elements"
SELECT_TREE_NODES = "tree_nodes"
SELECT_QUEUE_ELEMENTS = "queue_elements"
SELECT_STACK_ELEMENTS = "stack_elements"
SELECT_KEYS = "keys"
SELECT_CALLS = "calls"
SELECT_LIST_NODES = "list_nodes"

# Step timings (milliseconds)
TIMING_INTRO_MS = 2000
TIMING_SHORT_MS = 1000
TIMING_NORMAL_MS = 1200
TIMING_LONG_MS = 1500
TIMING_RESULT_MS = 2500

DEFAULT_COINS: tuple[int, ...] = (1, 3, 4)
DEFAULT_AMOUNT = 6
DEFAULT_K_ARRAY: tuple[int, ...] = (3, 1, 4, 1, 5, 9, 2, 6, 5, 3)
DEFAULT_K = 4
DEFAULT_FACTORIAL_N = 5
DEFAULT_BRACKETS = "({[]})"
DEFAULT_ANAGRAM_PAIR: tuple[str, str] = ("listen", "silent")
DEFAULT_SEARCH_ARRAY: tuple[int, ...] = (2, 5, 8, 12, 16, 23, 38, 56, 72, 91)
DEFAULT_SEARCH_TARGET = 23
DEFAULT_TWO_SUM_ARRAY: tuple[int, ...] = (2, 7, 11, 15)
DEFAULT_TWO_SUM_TARGET = 9
DEFAULT_SORT_ARRAY: tuple[int, ...] = (64, 34, 25, 12, 22, 11, 90)
DEFAULT_LINKED_LIST: tuple[int, ...] = (1, 2, 3, 4, 5)
DEFAULT_MIN_COST_ARRAY: tuple[int, ...] = (4, 3, 2)
DEFAULT_TREE = "small"

# Upper bound for inputs that drive genuine Python recursion
MAX_RECURSION_INPUT = 100
