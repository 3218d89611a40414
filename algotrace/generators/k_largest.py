"""K largest elements — bounded binary min-heap of capacity k."""

from __future__ import annotations

import logging
from typing import Sequence

from ..context_types import HeapContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import (
    TraceBuilder,
    empty_input_trace,
    highlight,
    require_int,
    require_int_list,
    structure,
)

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_K_LARGEST


class MinHeap:
    """Array-backed binary min-heap with a fixed capacity."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._items: list[int] = []

    def size(self) -> int:
        return len(self._items)

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def peek(self) -> int | None:
        return self._items[0] if self._items else None

    def to_list(self) -> list[int]:
        return list(self._items)

    def push(self, value: int) -> None:
        if self.is_full():
            raise OverflowError(f"heap is at capacity {self.capacity}")
        self._items.append(value)
        self._sift_up(len(self._items) - 1)

    def pop(self) -> int | None:
        if not self._items:
            return None
        top = self._items[0]
        last = self._items.pop()
        if self._items:
            self._items[0] = last
            self._sift_down(0)
        return top

    def _sift_up(self, index: int) -> None:
        items = self._items
        while index > 0:
            parent = (index - 1) // 2
            if items[parent] <= items[index]:
                break
            items[parent], items[index] = items[index], items[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        items = self._items
        n = len(items)
        while True:
            smallest = index
            left, right = 2 * index + 1, 2 * index + 2
            if left < n and items[left] < items[smallest]:
                smallest = left
            if right < n and items[right] < items[smallest]:
                smallest = right
            if smallest == index:
                return
            items[smallest], items[index] = items[index], items[smallest]
            index = smallest


def _snapshot(
    heap: MinHeap, array: list[int], index: int, k: int, result: list[int]
) -> dict:
    return {
        "heap": structure(
            constants.KIND_HEAP,
            {
                "elements": heap.to_list(),
                "size": heap.size(),
                "capacity": heap.capacity,
                "inputArray": list(array),
                "currentInputIndex": index,
                "kValue": k,
                "result": list(result),
            },
            f"Min-Heap (capacity {k})",
            position="center",
        )
    }


def generate_k_largest(
    array: Sequence[int] | None = None, k: int | None = None
) -> list[Step]:
    """Trace selection of the *k* largest values with a size-bounded min-heap.

    Raises ``InvalidInputError`` when *k* is outside ``[1, len(array)]``.
    """
    array = list(constants.DEFAULT_K_ARRAY) if array is None else array
    k = constants.DEFAULT_K if k is None else k
    array = require_int_list(ALGORITHM_ID, "array", array)
    k = require_int(ALGORITHM_ID, "k", k)
    if not array:
        return empty_input_trace(
            ALGORITHM_ID,
            "The input array is empty, so there are no elements to select.",
            variables={"kValue": k, "result": []},
        )
    if k < 1 or k > len(array):
        raise InvalidInputError(
            ALGORITHM_ID, f"k must be between 1 and {len(array)}, got {k}"
        )

    heap = MinHeap(k)
    builder = TraceBuilder(ALGORITHM_ID, {"array": array, "k": k})

    builder.emit(
        StepType.HEAP_INITIALIZATION,
        f"Create an empty min-heap with capacity {k}. Its root will always hold "
        f"the smallest of the {k} largest values seen so far.",
        structures=_snapshot(heap, array, -1, k, []),
        context=HeapContext(heap_size=0, capacity=k),
        variables={"k": k, "inputArray": array, "heapSize": 0},
        duration=constants.TIMING_INTRO_MS,
    )

    for index, value in enumerate(array):
        builder.emit(
            StepType.COMPARISON,
            f"Examine element {value} at index {index}.",
            structures=_snapshot(heap, array, index, k, []),
            highlights={
                "heap": [highlight(constants.SELECT_INDICES, [index], "input_current")]
            },
            context=HeapContext(
                current_element=value, heap_size=heap.size(), capacity=k
            ),
            variables={"currentElement": value, "index": index, "heapSize": heap.size()},
            duration=constants.TIMING_SHORT_MS,
        )

        if not heap.is_full():
            heap.push(value)
            builder.emit(
                StepType.HEAP_PUSH,
                f"The heap holds fewer than {k} elements, so push {value}; "
                f"the root is now {heap.peek()}.",
                structures=_snapshot(heap, array, index, k, []),
                highlights={
                    "heap": [
                        highlight(constants.SELECT_HEAP_ELEMENTS, [value], "heap_highlight"),
                        highlight(constants.SELECT_INDICES, [index], "processing"),
                    ]
                },
                context=HeapContext(
                    current_element=value,
                    heap_top=heap.peek(),
                    heap_size=heap.size(),
                    capacity=k,
                ),
                variables={
                    "currentElement": value,
                    "heapSize": heap.size(),
                    "heapTop": heap.peek(),
                },
                duration=constants.TIMING_NORMAL_MS,
            )
            continue

        top = heap.peek()
        will_replace = value > top
        verdict = (
            f"{value} > {top}, so {top} is evicted."
            if will_replace
            else f"{value} ≤ {top}, so it cannot be among the {k} largest."
        )
        builder.emit(
            StepType.HEAP_COMPARE,
            f"The heap is full. Compare {value} with the root {top}: {verdict}",
            structures=_snapshot(heap, array, index, k, []),
            highlights={
                "heap": [
                    highlight(constants.SELECT_HEAP_ELEMENTS, [top], "heap_top"),
                    highlight(constants.SELECT_INDICES, [index], "heap_compare"),
                ]
            },
            context=HeapContext(
                current_element=value,
                heap_top=top,
                will_replace=will_replace,
                heap_size=heap.size(),
                capacity=k,
            ),
            variables={"currentElement": value, "heapTop": top, "willReplace": will_replace},
            duration=constants.TIMING_LONG_MS,
        )

        if will_replace:
            evicted = heap.pop()
            heap.push(value)
            logger.debug("Evicted %s for %s", evicted, value)
            builder.emit(
                StepType.HEAP_MAINTAIN_SIZE,
                f"Pop {evicted} and push {value}; the heap keeps exactly {k} "
                f"elements and its new root is {heap.peek()}.",
                structures=_snapshot(heap, array, index, k, []),
                highlights={
                    "heap": [
                        highlight(constants.SELECT_HEAP_ELEMENTS, [value], "heap_highlight"),
                        highlight(constants.SELECT_INDICES, [index], "processing"),
                    ]
                },
                context=HeapContext(
                    current_element=value,
                    heap_top=heap.peek(),
                    will_replace=True,
                    heap_size=heap.size(),
                    capacity=k,
                ),
                variables={
                    "evicted": evicted,
                    "inserted": value,
                    "heapTop": heap.peek(),
                    "heapSize": heap.size(),
                },
                duration=constants.TIMING_LONG_MS,
            )
        else:
            builder.emit(
                StepType.NO_SWAP,
                f"Skip {value}; the heap is unchanged.",
                structures=_snapshot(heap, array, index, k, []),
                highlights={
                    "heap": [highlight(constants.SELECT_INDICES, [index], "mismatch")]
                },
                context=HeapContext(
                    current_element=value,
                    heap_top=top,
                    will_replace=False,
                    heap_size=heap.size(),
                    capacity=k,
                ),
                variables={"skipped": value, "heapTop": top},
                duration=constants.TIMING_SHORT_MS,
            )

    result = sorted(heap.to_list(), reverse=True)
    builder.emit(
        StepType.HEAP_RESULT_FOUND,
        f"All elements processed. The {k} largest elements are {result}.",
        structures=_snapshot(heap, array, len(array), k, result),
        highlights={
            "heap": [highlight(constants.SELECT_HEAP_ELEMENTS, heap.to_list(), "heap_result")]
        },
        context=HeapContext(heap_top=heap.peek(), heap_size=heap.size(), capacity=k),
        variables={"k": k, "result": result, "heapTop": heap.peek()},
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
