"""
Module 03 - Key Path Unit Tests
Tests for csmt/tree/paths.py
"""
import pytest

from csmt.schemas.errors import ValidationException
from csmt.schemas.models import EMPTY
from csmt.tree.paths import (
    MAX_KEY_BYTES,
    PATH_LENGTH,
    common_prefix_length,
    key_to_hex,
    key_to_path,
    last_non_empty_index,
    normalize_key,
)


class TestNormalizeKey:
    """Tests for key validation and hex rendering."""

    def test_int_list_and_bytes_agree(self):
        assert key_to_hex([25, 35, 239]) == "1923ef"
        assert key_to_hex(b"\x19\x23\xef") == "1923ef"
        assert key_to_hex(bytearray(b"\x19\x23\xef")) == "1923ef"

    def test_tuple_accepted(self):
        assert normalize_key((1, 2)) == b"\x01\x02"

    def test_empty_key_allowed(self):
        assert key_to_hex([]) == ""

    def test_string_rejected(self):
        with pytest.raises(ValidationException) as exc_info:
            normalize_key("1923ef")
        assert exc_info.value.code == "VALIDATION_ERROR"

    @pytest.mark.parametrize("bad", [256, -1, "a", 1.0, True])
    def test_out_of_range_element_rejected(self, bad):
        with pytest.raises(ValidationException) as exc_info:
            normalize_key([1, bad], field_path="entries[0].id")
        assert exc_info.value.details["field_path"] == "entries[0].id[1]"

    def test_key_wider_than_path_rejected(self):
        normalize_key(bytes(MAX_KEY_BYTES))
        with pytest.raises(ValidationException, match="at most 32 bytes"):
            normalize_key(bytes(MAX_KEY_BYTES + 1))


class TestKeyToPath:
    """Tests for the path encoding."""

    def test_path_length_is_fixed(self):
        assert len(key_to_path("")) == PATH_LENGTH
        assert len(key_to_path("ff" * 32)) == PATH_LENGTH

    def test_least_significant_bit_first(self):
        # 0xef = 0b11101111
        path = key_to_path("1923ef")
        assert path[:8] == (1, 1, 1, 1, 0, 1, 1, 1)
        # 0x23 = 0b00100011
        assert path[8:16] == (1, 1, 0, 0, 0, 1, 0, 0)

    def test_high_bits_zero_padded(self):
        path = key_to_path("01")
        assert path[0] == 1
        assert not any(path[1:])

    def test_top_bit_of_full_width_key(self):
        path = key_to_path("80" + "00" * 31)
        assert path[255] == 1
        assert not any(path[:255])

    def test_leading_zero_bytes_share_a_path(self):
        assert key_to_path("0001") == key_to_path("01")

    def test_non_hex_raises(self):
        with pytest.raises(ValueError):
            key_to_path("xyz")

    def test_too_wide_raises(self):
        with pytest.raises(ValueError):
            key_to_path("01" + "00" * 32)


class TestPathHelpers:
    """Tests for common_prefix_length() and last_non_empty_index()."""

    def test_common_prefix_length(self):
        assert common_prefix_length((1, 0, 1), (1, 0, 0)) == 2
        assert common_prefix_length((0,), (1,)) == 0
        assert common_prefix_length(key_to_path("01"), key_to_path("01")) == PATH_LENGTH

    def test_common_prefix_of_sample_keys(self):
        # 0x1a12dc and 0x2307aa differ at bit 1
        assert common_prefix_length(key_to_path("1a12dc"), key_to_path("2307aa")) == 1

    def test_last_non_empty_index(self):
        assert last_non_empty_index([]) == -1
        assert last_non_empty_index([EMPTY, EMPTY]) == -1
        assert last_non_empty_index(["aa", EMPTY]) == 0
        assert last_non_empty_index([EMPTY, "aa", EMPTY, "bb", EMPTY]) == 3
