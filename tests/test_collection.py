"""Tests for array builders and input parsers."""

import pytest

from algoviz import collection


class TestRandomArrays:
    def test_size_and_range(self):
        values = collection.random_array(50, 1, 10, seed=4)
        assert len(values) == 50
        assert all(1 <= v <= 10 for v in values)

    def test_seeded_arrays_repeat(self):
        assert collection.random_array(10, seed=1) == collection.random_array(10, seed=1)

    def test_sorted_array(self):
        values = collection.random_sorted_array(30, 0, 99, seed=2)
        assert collection.is_sorted(values)
        assert all(0 <= v <= 99 for v in values)


class TestParsing:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5, 3, 8, 1", [5, 3, 8, 1]),
            ("5,x,8abc", [5, 8]),
            (" -4 , +2", [-4, 2]),
            ("", []),
            ("a, b", []),
        ],
    )
    def test_parse_custom_array(self, text, expected):
        assert collection.parse_custom_array(text) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [("42", 42), (" 7 ", 7), ("12abc", 12), ("", None), ("abc", None), (None, None), (13, 13), (True, None)],
    )
    def test_parse_target(self, raw, expected):
        assert collection.parse_target(raw) == expected


class TestHelpers:
    def test_is_sorted(self):
        assert collection.is_sorted([])
        assert collection.is_sorted([1, 1, 2])
        assert not collection.is_sorted([2, 1])

    @pytest.mark.parametrize("value, expected", [(3, 5), (50, 50), (500, 100)])
    def test_clamp(self, value, expected):
        assert collection.clamp(value, 5, 100) == expected
