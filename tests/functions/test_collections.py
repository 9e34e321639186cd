"""Tests for array and hash functions."""

from __future__ import annotations

import pytest

from cmfuncs.errors import ArgumentTypeError, ArityError, InvalidArgumentError
from cmfuncs.functions import collections as fc
from cmfuncs.registry import call_function


class TestArrayConstruction:
    """array, hash, flatten and zip."""

    def test_array_splices(self) -> None:
        assert fc.to_array(1, [2, 3], {"k": "v"}) == [1, 2, 3, "k", "v"]

    def test_hash_from_pairs(self) -> None:
        assert fc.to_hash("a", 1, "b", 2) == {"a": 1, "b": 2}
        assert fc.to_hash(["a", 1, ["b", 2]]) == {"a": 1, "b": 2}

    def test_hash_odd_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError, match="odd number"):
            fc.to_hash("a", 1, "b")

    def test_hash_unhashable_key(self) -> None:
        with pytest.raises(InvalidArgumentError):
            fc.to_hash([{"x": 1}, 2])

    def test_flatten(self) -> None:
        assert fc.flatten([1, [2, [3, [4]]], []]) == [1, 2, 3, 4]

    def test_zip_pads_second(self) -> None:
        assert fc.zip_arrays([1, 2, 3], ["a"]) == [[1, "a"], [2, None], [3, None]]

    def test_zip_flatten_flag(self) -> None:
        assert fc.zip_arrays([1, 2], ["a", "b"], "true") == [1, "a", 2, "b"]

    def test_zip_requires_arrays(self) -> None:
        with pytest.raises(ArgumentTypeError):
            fc.zip_arrays([1], "a")


class TestQueries:
    """Size, emptiness, membership and counting."""

    @pytest.mark.parametrize(
        "value,expected", [([1, 2], 2), ({"a": 1}, 1), ("abc", 3), ("", 0)]
    )
    def test_size(self, value, expected: int) -> None:
        assert fc.size_of(value) == expected

    def test_size_wrong_type(self) -> None:
        with pytest.raises(ArgumentTypeError):
            fc.size_of(5)

    def test_empty(self) -> None:
        assert fc.empty([])
        assert fc.empty({})
        assert fc.empty("")
        assert not fc.empty([None])
        with pytest.raises(ArgumentTypeError):
            fc.empty(None)

    def test_member(self) -> None:
        assert fc.member(["a", "b"], "b")
        assert not fc.member(["a", "b"], "c")
        with pytest.raises(InvalidArgumentError):
            fc.member(["a"], "")

    def test_count_without_items(self) -> None:
        assert fc.count_items([1, 2, 3]) == 3
        assert fc.count_items("hello") == 5

    def test_count_in_array(self) -> None:
        assert fc.count_items([1, 2, 1, 1], 1) == 3

    def test_count_key_in_hash(self) -> None:
        assert fc.count_items({"a": 1}, "a") == 1
        assert fc.count_items({"a": 1}, "b") == 0

    def test_count_character_sets(self) -> None:
        assert fc.count_items("hello world", "lo") == 5
        assert fc.count_items("hello world", "a-y", "^l") == 7
        assert fc.count_items("hello^world", "^") == 1

    def test_last(self) -> None:
        assert fc.last([1, 2, 3]) == 3
        assert fc.last([]) is None

    def test_keys(self) -> None:
        assert fc.keys({"a": 1, "b": 2}) == ["a", "b"]


class TestTransformations:
    """Functions that return modified copies."""

    def test_array_intersection(self) -> None:
        assert fc.array_intersection([3, 1, 2, 1], [1, 3, 5]) == [3, 1]

    def test_compact(self) -> None:
        assert fc.compact(["a", "", None, 0, False]) == ["a", 0, False]

    def test_delete_at(self) -> None:
        source = ["a", "b", "c"]
        assert fc.delete_at(source, 1) == ["a", "c"]
        assert fc.delete_at(source, "-1") == ["a", "b"]
        assert fc.delete_at(source, 1.9) == ["a", "c"]
        assert fc.delete_at(source, 7) == ["a", "b", "c"]
        assert source == ["a", "b", "c"]

    def test_deep_merge_later_wins(self) -> None:
        one = {"a": 1, "nested": {"x": 1, "y": 1}}
        two = {"b": 2, "nested": {"y": 2}}
        three = {"nested": {"z": 3}, "a": 0}
        assert fc.deep_merge(one, two, three) == {
            "a": 0,
            "b": 2,
            "nested": {"x": 1, "y": 2, "z": 3},
        }
        assert one == {"a": 1, "nested": {"x": 1, "y": 1}}

    def test_deep_merge_requires_hashes(self) -> None:
        with pytest.raises(ArgumentTypeError):
            fc.deep_merge({"a": 1}, [1])

    def test_invert(self) -> None:
        assert fc.invert({"a": "x", "b": "y"}) == {"x": "a", "y": "b"}
        with pytest.raises(InvalidArgumentError):
            fc.invert({"a": [1]})

    def test_reverse(self) -> None:
        assert fc.reverse([1, 2, 3]) == [3, 2, 1]
        assert fc.reverse("abc") == "cba"

    def test_shuffle_keeps_elements(self) -> None:
        fc.reseed(42)
        source = list(range(20))
        result = fc.shuffle(source)
        assert sorted(result) == source
        assert source == list(range(20))
        assert sorted(fc.shuffle("abcdef")) == list("abcdef")

    def test_shuffle_is_repeatable_with_seed(self) -> None:
        fc.reseed(7)
        first = fc.shuffle(list(range(10)))
        fc.reseed(7)
        assert fc.shuffle(list(range(10))) == first


class TestRegexFilters:
    """select and reject."""

    def test_select(self) -> None:
        assert fc.select_matching(["web1", "db1", 3, "web2"], "^web") == [
            "web1",
            "web2",
        ]

    def test_reject_keeps_non_strings(self) -> None:
        assert fc.reject(["web1", "db1", 3], "^web") == ["db1", 3]

    def test_invalid_regex(self) -> None:
        with pytest.raises(InvalidArgumentError, match="regular expression"):
            fc.select_matching(["a"], "(")


class TestValuesAt:
    """Selecting elements by index and index ranges."""

    source = ["a", "b", "c", "d", "e"]

    def test_single_indices(self) -> None:
        assert fc.values_at(self.source, 0, "2", 4.0) == ["a", "c", "e"]

    def test_ranges(self) -> None:
        assert fc.values_at(self.source, "1-2") == ["b", "c"]
        assert fc.values_at(self.source, "1..3") == ["b", "c", "d"]
        assert fc.values_at(self.source, "1...3") == ["b", "c"]

    def test_negative_and_missing(self) -> None:
        assert fc.values_at(self.source, -1, 10) == ["e", None]

    def test_invalid_index(self) -> None:
        with pytest.raises(InvalidArgumentError):
            fc.values_at(self.source, "x")
        with pytest.raises(ArgumentTypeError):
            fc.values_at(self.source, [1])

    def test_requires_an_index(self) -> None:
        with pytest.raises(ArityError):
            call_function("values_at", self.source)


class TestJoin:
    """join and join_with_prefix."""

    def test_join(self) -> None:
        assert fc.join_array(["a", ["b", None], True, 1], ",") == "a,b,,true,1"
        assert fc.join_array(["a", "b"]) == "ab"

    def test_join_separator_type(self) -> None:
        with pytest.raises(ArgumentTypeError):
            fc.join_array(["a"], 1)

    def test_prefix_and_suffix(self) -> None:
        assert fc.join_with_prefix(["a", "b"], "-", " ") == "-a -b"

    def test_prefix_only(self) -> None:
        assert fc.join_with_prefix(["a", "b"], "x") == ["xa", "xb"]

    def test_suffix_only(self) -> None:
        assert fc.join_with_prefix(["a", "b"], None, ",") == "a,b"

    def test_neither(self) -> None:
        assert fc.join_with_prefix(["a", "b"]) == "ab"
