"""
Module 01 - Canonical JSON Unit Tests
Tests for csmt/schemas/canonical.py
"""
import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest

from csmt.schemas import (
    EMPTY,
    CanonicalizationException,
    Entry,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
    loads_canonical,
)


class SampleEnum(str, Enum):
    OPTION_A = "option_a"


class TestDumpsCanonical:
    """Tests for deterministic serialization."""

    def test_keys_sorted_no_whitespace(self):
        assert dumps_canonical({"b": 2, "a": [1, 2]}) == '{"a":[1,2],"b":2}'

    def test_none_fields_dropped_but_list_nulls_kept(self):
        assert dumps_canonical({"a": None, "b": [None, 1]}) == '{"b":[null,1]}'

    def test_empty_sentinel_renders_null(self):
        assert dumps_canonical([EMPTY, "aa"]) == '[null,"aa"]'

    def test_enum_and_bytes(self):
        assert dumps_canonical({"e": SampleEnum.OPTION_A, "b": b"\x01\xff"}) == (
            '{"b":"01ff","e":"option_a"}'
        )

    def test_pydantic_model(self):
        assert dumps_canonical(Entry(key="01")) == '{"key":"01"}'
        assert dumps_canonical(Entry(key="01", value="aa")) == '{"key":"01","value":"aa"}'

    def test_unicode_preserved(self):
        assert dumps_canonical("héllo") == '"héllo"'

    def test_round_trip(self):
        data = {"z": [1, {"y": "x"}], "a": True}
        assert loads_canonical(dumps_canonical(data)) == data


class TestCanonicalizeValue:
    """Tests for value normalization rules."""

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_float_rejected(self, value):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"x": value})
        assert exc_info.value.details["path"] == "x"

    def test_unsupported_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"s": {1, 2}})

    def test_datetime_normalized_to_utc(self):
        naive = datetime(2026, 1, 27, 21, 35, 0)
        shifted = datetime(2026, 1, 27, 22, 35, 0, tzinfo=timezone(timedelta(hours=1)))

        assert format_datetime_canonical(naive) == "2026-01-27T21:35:00Z"
        assert format_datetime_canonical(shifted) == "2026-01-27T21:35:00Z"
        assert canonicalize_value(naive) == "2026-01-27T21:35:00Z"
