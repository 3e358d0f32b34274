"""Tests for value formatting."""

import pytest

pytestmark = [pytest.mark.unit]

from torrentmeta.core.bencode import decode
from torrentmeta.utils.formatting import format_size, format_value


class TestFormatValue:
    """Test cases for format_value()."""

    def test_scalars(self):
        """Integers are bare, strings quoted."""
        assert format_value(-42) == "-42"
        assert format_value(b"spam") == '"spam"'

    def test_invalid_utf8_is_replaced(self):
        """Binary strings render lossily."""
        assert format_value(b"a\xffb") == '"a�b"'

    def test_containers(self):
        """Lists and dictionaries keep their decoded order."""
        value, _ = decode(b"d4:wiki7:bencode7:meaningi42e4:listli1e1:xee")
        assert format_value(value) == '{"wiki": "bencode", "meaning": 42, "list": [1, "x"]}'
        assert format_value([]) == "[]"
        assert format_value({}) == "{}"

    def test_sorted_keys(self):
        """sort_keys orders dictionary keys bytewise at every level."""
        value, _ = decode(b"d1:bd1:yi1e1:xi2ee1:ali3ee")
        assert format_value(value) == '{"b": {"y": 1, "x": 2}, "a": [3]}'
        assert format_value(value, sort_keys=True) == '{"a": [3], "b": {"x": 2, "y": 1}}'


class TestFormatSize:
    """Test cases for format_size()."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.00 KiB"),
            (16384, "16.00 KiB"),
            (3 * 1024**3, "3.00 GiB"),
            (2 * 1024**4, "2.00 TiB"),
        ],
    )
    def test_units(self, size, expected):
        """Sizes use binary units."""
        assert format_size(size) == expected
