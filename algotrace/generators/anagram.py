"""Anagram detection — two frequency maps compared key by key."""

from __future__ import annotations

import logging

from ..context_types import StringContext
from ..errors import InvalidInputError
from ..step_types import StepType
from ..trace_types import Step
from .. import constants
from ._base import TraceBuilder, highlight, structure

logger = logging.getLogger(__name__)

ALGORITHM_ID = constants.ALGO_ANAGRAM_DETECTION


def normalize(text: str) -> str:
    """Lowercase *text* and drop all whitespace."""
    return "".join(text.lower().split())


def _snapshot(
    first: str, second: str, freq1: dict[str, int], freq2: dict[str, int]
) -> dict:
    return {
        "string1": structure(constants.KIND_STRING, list(first), "String 1", position="top-left"),
        "string2": structure(constants.KIND_STRING, list(second), "String 2", position="top-right"),
        "frequencyMap1": structure(
            constants.KIND_HASHMAP, dict(freq1), "Frequency Map 1", position="bottom-left"
        ),
        "frequencyMap2": structure(
            constants.KIND_HASHMAP, dict(freq2), "Frequency Map 2", position="bottom-right"
        ),
    }


def generate_anagram(first: str | None = None, second: str | None = None) -> list[Step]:
    """Trace whether *first* and *second* are anagrams of each other.

    Comparison is case-insensitive and ignores whitespace. A length mismatch
    ends the trace before any frequency map is built.
    """
    if first is None and second is None:
        first, second = constants.DEFAULT_ANAGRAM_PAIR
    if not isinstance(first, str) or not isinstance(second, str):
        raise InvalidInputError(ALGORITHM_ID, "both inputs must be strings")

    s1, s2 = normalize(first), normalize(second)
    freq1: dict[str, int] = {}
    freq2: dict[str, int] = {}
    builder = TraceBuilder(ALGORITHM_ID, {"first": first, "second": second})

    builder.emit(
        StepType.INITIALIZATION,
        f"Check whether {first!r} and {second!r} are anagrams, ignoring case and "
        f"whitespace ({s1!r} vs {s2!r}).",
        structures=_snapshot(s1, s2, freq1, freq2),
        context=StringContext(),
        variables={"string1": s1, "string2": s2},
        duration=constants.TIMING_INTRO_MS,
    )

    same_length = len(s1) == len(s2)
    builder.emit(
        StepType.STRING_COMPARISON,
        (
            f"Both strings have length {len(s1)}, so count their characters."
            if same_length
            else f"The lengths differ ({len(s1)} vs {len(s2)}), so they cannot be anagrams."
        ),
        structures=_snapshot(s1, s2, freq1, freq2),
        context=StringContext(
            reason=None if same_length else "length", is_match=same_length
        ),
        variables={"length1": len(s1), "length2": len(s2), "sameLength": same_length},
        duration=constants.TIMING_NORMAL_MS,
    )

    if not same_length:
        builder.emit(
            StepType.RETURN_NOT_FOUND,
            f"{first!r} and {second!r} are not anagrams: a string of length "
            f"{len(s1)} cannot rearrange into one of length {len(s2)}.",
            structures=_snapshot(s1, s2, freq1, freq2),
            context=StringContext(reason="length", is_match=False),
            variables={
                "isAnagram": False,
                "reason": "length",
                "frequencyMap1": freq1,
                "frequencyMap2": freq2,
            },
            duration=constants.TIMING_RESULT_MS,
        )
        return builder.finish()

    for which, text, freq in ((1, s1, freq1), (2, s2, freq2)):
        name = f"string{which}"
        map_name = f"frequencyMap{which}"
        for index, ch in enumerate(text):
            builder.emit(
                StepType.CHARACTER_ACCESS,
                f"Read {ch!r} at index {index} of string {which}.",
                structures=_snapshot(s1, s2, freq1, freq2),
                highlights={name: [highlight(constants.SELECT_INDICES, [index], "current")]},
                context=StringContext(string_index=which, character=ch),
                variables={"string": which, "index": index, "char": ch},
                duration=constants.TIMING_SHORT_MS,
            )
            freq[ch] = freq.get(ch, 0) + 1
            builder.emit(
                StepType.FREQUENCY_COUNT,
                f"Increment the count of {ch!r} in frequency map {which} to {freq[ch]}.",
                structures=_snapshot(s1, s2, freq1, freq2),
                highlights={map_name: [highlight(constants.SELECT_KEYS, [ch], "updated")]},
                context=StringContext(string_index=which, character=ch, key=ch),
                variables={"string": which, "char": ch, "count": freq[ch]},
                duration=constants.TIMING_SHORT_MS,
            )

    keys = list(freq1) + [k for k in freq2 if k not in freq1]
    compared: list[str] = []
    is_anagram = True
    for position, key in enumerate(keys):
        count1, count2 = freq1.get(key, 0), freq2.get(key, 0)
        is_match = count1 == count2
        compared.append(key)
        is_anagram = is_anagram and is_match
        builder.emit(
            StepType.HASH_MAP_COMPARISON,
            f"Compare counts for {key!r}: {count1} in string 1 vs {count2} in string 2"
            + (", equal." if is_match else ", different, so stop comparing."),
            structures=_snapshot(s1, s2, freq1, freq2),
            highlights={
                "frequencyMap1": [highlight(constants.SELECT_KEYS, [key], "match" if is_match else "mismatch")],
                "frequencyMap2": [highlight(constants.SELECT_KEYS, [key], "match" if is_match else "mismatch")],
            },
            context=StringContext(key=key, is_match=is_match),
            variables={
                "key": key,
                "count1": count1,
                "count2": count2,
                "comparedKeys": list(compared),
                "remainingKeys": keys[position + 1:],
                "isAnagramSoFar": is_anagram,
            },
            duration=constants.TIMING_NORMAL_MS,
        )
        if not is_match:
            logger.debug("Frequency mismatch on %r", key)
            break

    if is_anagram:
        step_type = StepType.RETURN_FOUND
        message = f"Every character count matches, so {first!r} and {second!r} are anagrams."
    else:
        step_type = StepType.RETURN_NOT_FOUND
        message = (
            f"The count of {compared[-1]!r} differs, so {first!r} and {second!r} "
            f"are not anagrams."
        )
    builder.emit(
        step_type,
        message,
        structures=_snapshot(s1, s2, freq1, freq2),
        context=StringContext(
            reason=None if is_anagram else "frequency", is_match=is_anagram
        ),
        variables={
            "isAnagram": is_anagram,
            "reason": None if is_anagram else "frequency",
            "comparedKeys": compared,
            "frequencyMap1": freq1,
            "frequencyMap2": freq2,
        },
        duration=constants.TIMING_RESULT_MS,
    )
    return builder.finish()
