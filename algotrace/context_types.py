"""Step context — tagged union of per-family event parameters.

Line-mapping predicates read these fields to pick between source branches
that share a step type (e.g. the two arms of a comparison).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _ContextBase(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DpContext(_ContextBase):
    family: Literal["dp"] = "dp"
    current_amount: int | None = None
    coin_value: int | None = None
    subproblem_amount: int | None = None
    current_value: int | str | None = None
    candidate_value: int | str | None = None
    will_update: bool | None = None


class GraphContext(_ContextBase):
    family: Literal["graph"] = "graph"
    node_id: str | None = None
    from_node_id: str | None = None
    to_node_id: str | None = None
    edge_id: str | None = None
    cycle_detected: bool | None = None
    is_parent: bool | None = None
    is_visited: bool | None = None
    component: int | None = None


class HeapContext(_ContextBase):
    family: Literal["heap"] = "heap"
    current_element: int | None = None
    heap_top: int | None = None
    will_replace: bool | None = None
    heap_size: int | None = None
    capacity: int | None = None


class QueueContext(_ContextBase):
    family: Literal["queue"] = "queue"
    node_id: str | None = None
    level: int | None = None
    child_side: Literal["left", "right"] | None = None
    queue_length: int | None = None


class RecursionContext(_ContextBase):
    family: Literal["recursion"] = "recursion"
    call_id: str | None = None
    n: int | None = None
    node_id: str | None = None
    depth: int | None = None
    phase: str | None = None
    return_value: int | None = None


class StackContext(_ContextBase):
    family: Literal["stack"] = "stack"
    index: int | None = None
    character: str | None = None
    char_type: Literal["opening", "closing", "other"] | None = None
    action: str | None = None
    expected: str | None = None
    found: str | None = None
    error_type: str | None = None


class StringContext(_ContextBase):
    family: Literal["string"] = "string"
    string_index: int | None = None
    character: str | None = None
    key: str | None = None
    reason: Literal["length", "frequency"] | None = None
    is_match: bool | None = None


class ArrayContext(_ContextBase):
    family: Literal["array"] = "array"
    index: int | None = None
    left: int | None = None
    right: int | None = None
    mid: int | None = None
    value: int | None = None
    target: int | None = None
    direction: Literal["left", "right"] | None = None
    found: bool | None = None
    operation: str | None = None


class LinkedListContext(_ContextBase):
    family: Literal["linked_list"] = "linked_list"
    current_id: str | None = None
    prev_id: str | None = None
    next_id: str | None = None
    operation: str | None = None


StepContext = Annotated[
    Union[
        DpContext,
        GraphContext,
        HeapContext,
        QueueContext,
        RecursionContext,
        StackContext,
        StringContext,
        ArrayContext,
        LinkedListContext,
    ],
    Field(discriminator="family"),
]

_STEP_CONTEXT_ADAPTER: TypeAdapter[StepContext] = TypeAdapter(StepContext)


def parse_step_context(data: dict[str, Any]) -> StepContext:
    """Rebuild a context model from its dict form (camelCase or snake_case keys)."""
    return _STEP_CONTEXT_ADAPTER.validate_python(data)
