"""Tests for info hash calculation."""

import hashlib

import pytest

pytestmark = [pytest.mark.unit, pytest.mark.core]

from torrentmeta.core.bencode import decode
from torrentmeta.core.info_hash import INFO_HASH_LENGTH, compute_info_hash, info_hash_hex


class TestInfoHash:
    """Test cases for compute_info_hash()."""

    def test_hash_of_canonical_encoding(self):
        """The digest is SHA-1 over the canonical bencoding."""
        info = {b"piece length": 16384, b"name": b"a.txt", b"pieces": b"x" * 20}
        canonical = b"d4:name5:a.txt12:piece lengthi16384e6:pieces20:" + b"x" * 20 + b"e"
        assert compute_info_hash(info) == hashlib.sha1(canonical).digest()

    def test_insertion_order_does_not_matter(self):
        """Structurally equal dictionaries hash identically."""
        first, _ = decode(b"d4:name1:a6:lengthi5e12:piece lengthi1ee")
        second, _ = decode(b"d12:piece lengthi1e6:lengthi5e4:name1:ae")
        assert list(first) != list(second)
        assert compute_info_hash(first) == compute_info_hash(second)

    def test_nested_order_does_not_matter(self):
        """Key order inside nested dictionaries is normalized too."""
        first = {b"files": [{b"length": 1, b"path": [b"a"]}], b"name": b"n"}
        second = {b"name": b"n", b"files": [{b"path": [b"a"], b"length": 1}]}
        assert compute_info_hash(first) == compute_info_hash(second)

    def test_list_order_matters(self):
        """List order is significant."""
        assert compute_info_hash([b"a", b"b"]) != compute_info_hash([b"b", b"a"])

    def test_digest_length(self):
        """The info hash is 20 bytes."""
        assert len(compute_info_hash({})) == INFO_HASH_LENGTH == 20

    def test_hex(self):
        """info_hash_hex() is the lowercase hex of the digest."""
        info = {b"name": b"x"}
        assert info_hash_hex(info) == compute_info_hash(info).hex()
        assert info_hash_hex({}) == hashlib.sha1(b"de").hexdigest()
