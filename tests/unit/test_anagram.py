"""Tests for frequency-map anagram detection traces."""

import pytest

from algotrace.errors import InvalidInputError
from algotrace.generators.anagram import generate_anagram, normalize
from algotrace.step_types import StepType

S = StepType


class TestAnagramVerdict:
    @pytest.mark.parametrize(
        "first, second",
        [("listen", "silent"), ("Dormitory", "dirty room"), ("", ""), ("a", "A")],
    )
    def test_anagrams(self, first, second):
        final = generate_anagram(first, second)[-1]
        assert final.step_type == S.RETURN_FOUND
        assert final.variables["isAnagram"] is True

    def test_symmetric(self):
        forward = generate_anagram("aab", "abb")[-1].variables["isAnagram"]
        backward = generate_anagram("abb", "aab")[-1].variables["isAnagram"]
        assert forward is backward is False

    def test_default_pair(self):
        assert generate_anagram()[-1].variables["isAnagram"] is True

    def test_normalize(self):
        assert normalize(" Dirty Room ") == "dirtyroom"


class TestAnagramLengthShortCircuit:
    def test_no_counting_when_lengths_differ(self):
        trace = generate_anagram("abc", "abcd")
        assert [s.step_type for s in trace] == [
            S.INITIALIZATION,
            S.STRING_COMPARISON,
            S.RETURN_NOT_FOUND,
        ]
        assert trace[-1].variables["reason"] == "length"
        assert trace[-1].step_context.reason == "length"

    def test_length_check_always_emitted(self):
        trace = generate_anagram("listen", "silent")
        assert trace[1].step_type == S.STRING_COMPARISON
        assert trace[1].variables["sameLength"] is True


class TestAnagramFrequency:
    def test_counts_every_character(self):
        trace = generate_anagram("listen", "silent")
        counts = [s for s in trace if s.step_type == S.FREQUENCY_COUNT]
        assert len(counts) == 12

    def test_stops_at_first_mismatch(self):
        final = generate_anagram("aab", "abb")[-1]
        assert final.step_type == S.RETURN_NOT_FOUND
        assert final.variables["reason"] == "frequency"
        assert final.variables["comparedKeys"] == ["a"]

    def test_key_missing_from_first_map(self):
        final = generate_anagram("ab", "ac")[-1]
        assert final.variables["isAnagram"] is False
        assert final.variables["comparedKeys"] == ["a", "b"]

    def test_frequency_maps_in_result(self):
        final = generate_anagram("aab", "aba")[-1]
        assert final.variables["frequencyMap1"] == {"a": 2, "b": 1}
        assert final.variables["frequencyMap2"] == {"a": 2, "b": 1}

    def test_non_string_rejected(self):
        with pytest.raises(InvalidInputError):
            generate_anagram("abc", 123)
