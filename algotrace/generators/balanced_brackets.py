"""Balanced brackets — stack-based validation with early failure."""

from __future__ import annotations

import logging

from ..context_types import StackContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, highlight, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_BALANCED_PARENTHESES

CLOSING_TO_OPENING: dict[str, str] = {")": "(", "]": "[", "}": "{"}
OPENING_TO_CLOSING: dict[str, str] = {v: k for k, v in CLOSING_TO_OPENING.items()}

ERROR_NO_OPENING = "no_opening_bracket"
ERROR_MISMATCH = "mismatched_brackets"
ERROR_UNMATCHED = "unmatched_opening"


def _snapshot(expression: str, index: int, stack: list[dict]) -> dict:
    return {
        "input": structure(
            constants.KIND_STRING,
            {"text": expression, "characters": list(expression), "currentIndex": index},
            "Input Expression",
            position="top",
        ),
        "stack": structure(constants.KIND_STACK, stack, "Bracket Stack", position="right"),
    }


def _classify(ch: str) -> tuple[str, str]:
    if ch in OPENING_TO_CLOSING:
        return "opening", "push"
    if ch in CLOSING_TO_OPENING:
        return "closing", "pop_and_match"
    return "other", "ignore"


def generate_balanced_brackets(expression: str | None = None) -> list[Step]:
    """Trace stack validation of ``()``, ``[]`` and ``{}`` in *expression*.

    Non-bracket characters are read and ignored. The trace stops at the
    first closing bracket that has no partner or the wrong partner.
    """
    expression = constants.DEFAULT_BRACKETS if expression is None else expression
    if not isinstance(expression, str):
        raise InvalidInputError(ALGORITHM_ID, f"expression must be a string, got {expression!r}")

    builder = TraceBuilder(ALGORITHM_ID, {"expression": expression})
    stack: list[dict] = []
    pairs = 0
    counter = 0

    def stack_ids() -> list[str]:
        return [e["id"] for e in stack]

    builder.emit(
        StepType.INITIALIZATION,
        f"Validate {expression!r} with an empty stack: each closing bracket must "
        f"match the most recent unmatched opening bracket.",
        structures=_snapshot(expression, -1, stack),
        context=StackContext(),
        variables={"expression": expression, "length": len(expression), "stackSize": 0},
        duration=constants.TIMING_INTRO_MS,
    )

    def fail(index: int, message: str, error_type: str, **extra) -> list[Step]:
        logger.debug("Validation failed at %d: %s", index, error_type)
        builder.emit(
            StepType.VALIDATION_FAILURE,
            message,
            structures=_snapshot(expression, index, stack),
            highlights={
                "input": [highlight(constants.SELECT_INDICES, [index], "mismatch")] if index >= 0 else [],
                "stack": [highlight(constants.SELECT_STACK_ELEMENTS, stack_ids(), "mismatch")],
            },
            context=StackContext(
                index=index if index >= 0 else None,
                character=expression[index] if index >= 0 else None,
                error_type=error_type,
                expected=extra.get("expected"),
                found=extra.get("found"),
            ),
            variables={
                "isValid": False,
                "finalResult": "Invalid",
                "errorType": error_type,
                "errorIndex": index if index >= 0 else None,
                "totalPairs": pairs,
                "unmatchedBrackets": [e["char"] for e in stack],
                **{k: v for k, v in extra.items() if v is not None},
            },
            duration=constants.TIMING_RESULT_MS,
        )
        return builder.finish()

    for index, ch in enumerate(expression):
        builder.emit(
            StepType.CHARACTER_ACCESS,
            f"Read character {ch!r} at index {index}.",
            structures=_snapshot(expression, index, stack),
            highlights={"input": [highlight(constants.SELECT_INDICES, [index], "current")]},
            context=StackContext(index=index, character=ch),
            variables={"index": index, "char": ch},
            duration=constants.TIMING_SHORT_MS,
        )

        char_type, action = _classify(ch)
        verdict = {
            "opening": "an opening bracket, so it will be pushed",
            "closing": "a closing bracket, so it must match the top of the stack",
            "other": "not a bracket, so it is ignored",
        }[char_type]
        builder.emit(
            StepType.CHARACTER_CHECK,
            f"{ch!r} is {verdict}.",
            structures=_snapshot(expression, index, stack),
            highlights={"input": [highlight(constants.SELECT_INDICES, [index], "compare")]},
            context=StackContext(index=index, character=ch, char_type=char_type, action=action),
            variables={"char": ch, "charType": char_type, "action": action},
            duration=constants.TIMING_SHORT_MS,
        )

        if char_type == "opening":
            element = {"id": f"elem_{counter}", "char": ch, "index": index}
            counter += 1
            stack.append(element)
            builder.emit(
                StepType.STACK_PUSH,
                f"Push {ch!r} onto the stack; it waits for {OPENING_TO_CLOSING[ch]!r}.",
                structures=_snapshot(expression, index, stack),
                highlights={"stack": [highlight(constants.SELECT_STACK_ELEMENTS, [element["id"]], "current")]},
                context=StackContext(index=index, character=ch, char_type=char_type, action=action),
                variables={"pushed": ch, "stackSize": len(stack)},
                duration=constants.TIMING_NORMAL_MS,
            )
            continue
        if char_type == "other":
            continue

        if not stack:
            return fail(
                index,
                f"Closing bracket {ch!r} at index {index} has no opening bracket to "
                f"match: the stack is empty, so the expression is not balanced.",
                ERROR_NO_OPENING,
                found=ch,
            )

        top = stack[-1]
        expected = OPENING_TO_CLOSING[top["char"]]
        will_match = CLOSING_TO_OPENING[ch] == top["char"]
        builder.emit(
            StepType.STACK_PEEK,
            f"Peek at the top of the stack: {top['char']!r} needs {expected!r}, "
            f"found {ch!r}" + (", a match." if will_match else ", a mismatch."),
            structures=_snapshot(expression, index, stack),
            highlights={
                "stack": [highlight(constants.SELECT_STACK_ELEMENTS, [top["id"]], "compare")],
                "input": [highlight(constants.SELECT_INDICES, [index], "compare")],
            },
            context=StackContext(
                index=index, character=ch, char_type=char_type, action=action,
                expected=expected, found=ch,
            ),
            variables={"top": top["char"], "expected": expected, "found": ch, "willMatch": will_match},
            duration=constants.TIMING_NORMAL_MS,
        )

        if not will_match:
            return fail(
                index,
                f"Mismatch at index {index}: {top['char']!r} expects {expected!r} "
                f"but found {ch!r}, so the expression is not balanced.",
                ERROR_MISMATCH,
                expected=expected,
                found=ch,
            )

        stack.pop()
        pairs += 1
        builder.emit(
            StepType.STACK_POP,
            f"{top['char']!r} matches {ch!r}; pop it from the stack ({pairs} pair(s) matched).",
            structures=_snapshot(expression, index, stack),
            highlights={
                "input": [
                    highlight(constants.SELECT_INDICES, [top["index"], index], "match")
                ]
            },
            context=StackContext(
                index=index, character=ch, char_type=char_type, action=action,
                expected=expected, found=ch,
            ),
            variables={"popped": top["char"], "matchedWith": ch, "stackSize": len(stack)},
            duration=constants.TIMING_NORMAL_MS,
        )

    if stack:
        unmatched = [e["char"] for e in stack]
        return fail(
            -1,
            f"End of input with {len(stack)} unmatched opening bracket(s) "
            f"{unmatched} left on the stack, so the expression is not balanced.",
            ERROR_UNMATCHED,
        )

    builder.emit(
        StepType.VALIDATION_SUCCESS,
        f"End of input and the stack is empty: {expression!r} is balanced with "
        f"{pairs} matched pair(s).",
        structures=_snapshot(expression, len(expression), stack),
        context=StackContext(),
        variables={
            "isValid": True,
            "finalResult": "Valid",
            "totalPairs": pairs,
            "unmatchedBrackets": [],
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
