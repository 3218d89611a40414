"""Tests for Step serialization, step contexts and the trace builder."""

import dataclasses
import logging

import pytest
from pydantic import ValidationError

from algotrace import constants
from algotrace.context_types import (
    DpContext,
    QueueContext,
    StackContext,
    parse_step_context,
)
from algotrace.generators._base import (
    TraceBuilder,
    empty_input_trace,
    format_value,
    highlight,
    require_int,
    require_int_list,
    require_sequence,
    structure,
)
from algotrace.generators.factorial import generate_factorial
from algotrace.errors import InvalidInputError
from algotrace.step_types import TERMINAL_STEP_TYPES, StepType
from algotrace.trace_types import Highlight, Step, StructureSnapshot, Timing


def _step(**overrides) -> Step:
    fields = dict(
        id=0,
        step_type=StepType.INITIALIZATION,
        explanation="start",
        data_structures={
            "array": StructureSnapshot(kind="array", data=[1, 2], metadata={"label": "A"})
        },
        highlights={"array": [Highlight(selector="indices", values=(0,), style="current")]},
        step_context=DpContext(current_amount=3, coin_value=1),
        variables={"x": 1},
        timing=Timing(duration=1000),
    )
    fields.update(overrides)
    return Step(**fields)


class TestStepToDict:
    def test_camel_case_keys(self):
        d = _step().to_dict()
        assert set(d) == {
            "id",
            "stepType",
            "explanation",
            "dataStructures",
            "highlights",
            "stepContext",
            "variables",
            "timing",
        }

    def test_type_is_wire_string(self):
        assert _step().to_dict()["stepType"] == "initialization"

    def test_snapshot_shape(self):
        snap = _step().to_dict()["dataStructures"]["array"]
        assert snap == {"type": "array", "data": [1, 2], "metadata": {"label": "A"}}

    def test_highlight_values_become_list(self):
        hl = _step().to_dict()["highlights"]["array"][0]
        assert hl["values"] == [0]
        assert hl["type"] == "indices"
        assert "color" not in hl

    def test_context_uses_camel_case_and_drops_unset(self):
        ctx = _step().to_dict()["stepContext"]
        assert ctx == {"family": "dp", "currentAmount": 3, "coinValue": 1}

    def test_missing_context_is_none(self):
        assert _step(step_context=None).to_dict()["stepContext"] is None

    def test_step_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _step().explanation = "changed"


class TestStepContext:
    def test_parse_dispatches_on_family(self):
        ctx = parse_step_context({"family": "queue", "nodeId": "n1", "childSide": "left"})
        assert isinstance(ctx, QueueContext)
        assert ctx.child_side == "left"

    def test_parse_accepts_snake_case(self):
        ctx = parse_step_context({"family": "stack", "char_type": "opening"})
        assert isinstance(ctx, StackContext)
        assert ctx.char_type == "opening"

    def test_unknown_family_rejected(self):
        with pytest.raises(ValidationError):
            parse_step_context({"family": "nope"})

    def test_contexts_are_frozen(self):
        ctx = DpContext(current_amount=1)
        with pytest.raises(ValidationError):
            ctx.current_amount = 2

    def test_round_trip_through_dict(self):
        ctx = DpContext(current_amount=4, coin_value=3, will_update=True)
        assert parse_step_context(ctx.to_dict()) == ctx


class TestTraceBuilder:
    def test_ids_are_sequential(self):
        builder = TraceBuilder("demo")
        for _ in range(3):
            builder.emit(StepType.ASSIGNMENT, "x")
        assert [s.id for s in builder.finish()] == [0, 1, 2]

    def test_snapshots_are_independent_of_later_mutation(self):
        data = [1, 2, 3]
        variables = {"items": data}
        builder = TraceBuilder("demo")
        builder.emit(
            StepType.ASSIGNMENT,
            "x",
            structures={"array": structure(constants.KIND_ARRAY, data, "Array")},
            variables=variables,
        )
        data.append(4)
        step = builder.finish()[0]
        assert step.data_structures["array"].data == [1, 2, 3]
        assert step.variables["items"] == [1, 2, 3]

    def test_empty_highlight_lists_are_dropped(self):
        builder = TraceBuilder("demo")
        step = builder.emit(
            StepType.ASSIGNMENT,
            "x",
            highlights={"a": [], "b": [highlight("indices", [1], "current")]},
        )
        assert list(step.highlights) == ["b"]

    def test_finish_logs_inputs_and_step_count(self, caplog):
        values = [3, 1]
        builder = TraceBuilder("demo", {"array": values})
        values.append(9)
        builder.emit(StepType.ASSIGNMENT, "x")
        with caplog.at_level(logging.INFO, logger="algotrace.generators._base"):
            builder.finish()
        assert "Generated 1 steps for demo from {'array': [3, 1]}" in caplog.text

    def test_generator_logs_its_input(self, caplog):
        with caplog.at_level(logging.INFO, logger="algotrace.generators._base"):
            trace = generate_factorial(3)
        assert f"Generated {len(trace)} steps for factorial from {{'n': 3}}" in caplog.text

    def test_structure_metadata(self):
        snap = structure("array", [1], "Label", position="top")
        assert snap.metadata == {"label": "Label", "position": "top"}


class TestEmptyInputTrace:
    def test_single_terminal_step(self):
        trace = empty_input_trace("demo", "nothing to do", variables={"result": []})
        assert len(trace) == 1
        assert trace[0].step_type == StepType.EMPTY_INPUT
        assert trace[0].step_type in TERMINAL_STEP_TYPES
        assert trace[0].variables == {"reason": "nothing to do", "result": []}


class TestValidationHelpers:
    def test_format_value_renders_sentinel(self):
        assert format_value(constants.NO_CANDIDATE) == "∞"
        assert format_value(3) == "3"

    def test_require_int_rejects_bool(self):
        with pytest.raises(InvalidInputError):
            require_int("demo", "n", True)

    def test_require_int_list_names_offending_index(self):
        with pytest.raises(InvalidInputError, match=r"values\[1\]"):
            require_int_list("demo", "values", [1, "2"])

    @pytest.mark.parametrize("value", [5, "abc", {"a": 1}, None])
    def test_require_sequence_rejects_non_lists(self, value):
        with pytest.raises(InvalidInputError, match="nodes must be a list"):
            require_sequence("demo", "nodes", value)

    def test_require_sequence_accepts_tuples(self):
        assert require_sequence("demo", "nodes", ({"id": "a"},)) == [{"id": "a"}]

    def test_error_message_carries_algorithm(self):
        err = InvalidInputError("coin-change", "bad amount")
        assert str(err) == "coin-change: bad amount"
        assert err.algorithm_id == "coin-change"
        assert isinstance(err, ValueError)
