# Copyright (c) 2026 pyssdb contributors
# Licensed under the Apache License, Version 2.0

"""Tests for response decoders."""

import pytest

from pyssdb.decoders import _TRANSFORMS, Decoder, apply, shape
from pyssdb.types import ResponseBlock, to_bytes


def ok(*values: str) -> ResponseBlock:
    return ResponseBlock("ok", tuple(v.encode() for v in values))


NOT_FOUND = ResponseBlock("not_found")


class TestShape:
    """Tests for shaping raw blocks before decoding."""

    def test_single_value_is_unwrapped(self) -> None:
        assert shape(ok("val")) == "val"

    def test_single_value_in_multi_mode(self) -> None:
        assert shape(ok("val"), multi=True) == ["val"]

    def test_several_values_stay_a_list(self) -> None:
        assert shape(ok("a", "b")) == ["a", "b"]

    def test_empty_ok_block(self) -> None:
        assert shape(ok()) is None
        assert shape(ok(), multi=True) == []

    def test_not_found(self) -> None:
        """Test not_found is an explicit absence, or an empty list in multi mode."""
        assert shape(NOT_FOUND) is None
        assert shape(NOT_FOUND, multi=True) == []

    def test_raw_bytes(self) -> None:
        """Test values stay bytes without an encoding."""
        assert shape(ok("a", "b"), encoding=None) == [b"a", b"b"]

    def test_undecodable_bytes_survive(self) -> None:
        """Test invalid UTF-8 is kept as surrogates and encodes back unchanged."""
        block = ResponseBlock("ok", (b"\xff\xfe\x00",))
        value = shape(block)
        assert value == "\udcff\udcfe\x00"
        assert to_bytes(value) == b"\xff\xfe\x00"

    def test_undecodable_keyed_list(self) -> None:
        block = ResponseBlock("ok", (b"k\xff", b"v\xfe"))
        result = apply(Decoder.KEYED_LIST, block, multi=True, context=[b"k\xff", b"other"])
        assert to_bytes(result[0]) == b"v\xfe"
        assert result[1] is None


class TestScalarDecoders:
    """Tests for single-value decoders."""

    def test_raw(self) -> None:
        assert apply(Decoder.RAW, ok("a\nb")) == "a\nb"
        assert apply(Decoder.RAW, NOT_FOUND) is None

    def test_bool(self) -> None:
        assert apply(Decoder.BOOL, ok("1")) is True
        assert apply(Decoder.BOOL, ok("0")) is False
        assert apply(Decoder.BOOL, NOT_FOUND) is False

    def test_bool_on_bytes(self) -> None:
        assert apply(Decoder.BOOL, ok("1"), encoding=None) is True

    def test_int(self) -> None:
        assert apply(Decoder.INT, ok("42")) == 42
        assert apply(Decoder.INT, ok("-4")) == -4
        assert apply(Decoder.INT, NOT_FOUND) == 0

    def test_int_truncates_fractions(self) -> None:
        assert apply(Decoder.INT, ok("5.9")) == 5

    def test_int_is_lenient(self) -> None:
        """Test non-numeric text parses to its leading integer, or 0."""
        assert apply(Decoder.INT, ok("12abc")) == 12
        assert apply(Decoder.INT, ok("abc")) == 0
        assert apply(Decoder.INT, ok(" -3")) == -3

    def test_optional_int(self) -> None:
        """Test a missing score is None rather than zero."""
        assert apply(Decoder.OPTIONAL_INT, ok("101")) == 101
        assert apply(Decoder.OPTIONAL_INT, ok("0")) == 0
        assert apply(Decoder.OPTIONAL_INT, NOT_FOUND) is None


class TestPairDecoders:
    """Tests for decoders that group values in twos."""

    def test_vector_bool(self) -> None:
        assert apply(Decoder.VECTOR_BOOL, ok("a", "1", "b", "0"), multi=True) == [True, False]

    def test_vector_int(self) -> None:
        assert apply(Decoder.VECTOR_INT, ok("a", "1", "b", "2"), multi=True) == [1, 2]

    def test_vector_on_not_found(self) -> None:
        assert apply(Decoder.VECTOR_INT, NOT_FOUND, multi=True) == []

    def test_pairs(self) -> None:
        block = ok("bar", "val1", "foo", "val2")
        assert apply(Decoder.PAIRS, block, multi=True) == [("bar", "val1"), ("foo", "val2")]

    def test_scored_pairs(self) -> None:
        block = ok("u1", "101", "u2", "202")
        assert apply(Decoder.SCORED_PAIRS, block, multi=True) == [("u1", 101), ("u2", 202)]

    def test_keyed_map(self) -> None:
        block = ok("bar", "val1", "foo", "val2")
        assert apply(Decoder.KEYED_MAP, block, multi=True) == {"bar": "val1", "foo": "val2"}

    def test_keyed_map_int(self) -> None:
        block = ok("u1", "101", "u2", "202")
        assert apply(Decoder.KEYED_MAP_INT, block, multi=True) == {"u1": 101, "u2": 202}


class TestKeyedListDecoders:
    """Tests for decoders projecting results onto the requested keys."""

    def test_keyed_list_projects_caller_order(self) -> None:
        """Test results follow the requested order with missing keys as None."""
        block = ok("bar", "val1", "foo", "val2")
        result = apply(Decoder.KEYED_LIST, block, multi=True, context=["foo", "missing", "bar"])
        assert result == ["val2", None, "val1"]

    def test_keyed_list_with_bytes_keys(self) -> None:
        block = ok("bar", "val1")
        result = apply(Decoder.KEYED_LIST, block, multi=True, context=[b"bar", b"baz"])
        assert result == ["val1", None]

    def test_keyed_list_without_encoding(self) -> None:
        block = ok("bar", "val1")
        result = apply(Decoder.KEYED_LIST, block, multi=True, context=["bar"], encoding=None)
        assert result == [b"val1"]

    def test_keyed_list_int_fills_zero(self) -> None:
        block = ok("a", "1", "d", "3")
        result = apply(Decoder.KEYED_LIST_INT, block, multi=True, context=["a", "d", "x"])
        assert result == [1, 3, 0]

    def test_keyed_list_requires_context(self) -> None:
        with pytest.raises(ValueError, match="keyed_list"):
            apply(Decoder.KEYED_LIST, ok("a", "1"), multi=True)


class TestInfoDecoder:
    """Tests for the info decoder."""

    def test_info_block(self) -> None:
        block = ok(
            "count",
            "version",
            "1.9.2",
            "links",
            "3",
            "cmd.get",
            "calls: 3\ttime_wait: 1\ttime_proc: 2",
        )
        assert apply(Decoder.INFO, block, multi=True) == {
            "version": "1.9.2",
            "links": 3,
            "cmd.get": {"calls": 3, "time_wait": 1, "time_proc": 2},
        }

    def test_leveldb_stats(self) -> None:
        stats = (
            "                               Compactions\n"
            "Level  Files Size(MB) Time(sec) Read(MB) Write(MB)\n"
            "--------------------------------------------------\n"
            "  1        1        0         0        0         0\n"
        )
        block = ok("count", "leveldb.stats", stats)
        assert apply(Decoder.INFO, block, multi=True) == {
            "leveldb.stats": {
                "compactions": 1,
                "level": 1,
                "size": 0,
                "time": 0,
                "read": 0,
                "written": 0,
            }
        }

    def test_info_on_raw_bytes(self) -> None:
        block = ok("count", "version", "1.9.2")
        assert apply(Decoder.INFO, block, multi=True, encoding=None) == {"version": "1.9.2"}

    def test_cmd_stats_with_missing_value(self) -> None:
        """Test a stats field without a value counts as 0."""
        block = ok("count", "cmd.get", "calls: 3\ttime_wait\ttime_proc: 2")
        assert apply(Decoder.INFO, block, multi=True) == {
            "cmd.get": {"calls": 3, "time_wait": 0, "time_proc": 2},
        }

    def test_cmd_stats_with_non_numeric_value(self) -> None:
        block = ok("count", "cmd.set", "calls: n/a\ttime_wait: 7ms\ttime_proc: ")
        assert apply(Decoder.INFO, block, multi=True) == {
            "cmd.set": {"calls": 0, "time_wait": 7, "time_proc": 0},
        }

    def test_leveldb_stats_with_odd_fields(self) -> None:
        block = ok("count", "leveldb.stats", "  1  x  0.5")
        assert apply(Decoder.INFO, block, multi=True) == {
            "leveldb.stats": {"compactions": 1, "level": 0, "size": 0},
        }


def test_every_decoder_has_a_transform() -> None:
    """Test the dispatch table covers every Decoder member."""
    assert set(_TRANSFORMS) == set(Decoder)
