"""Info hash calculation (BEP 3).

The info hash is the SHA-1 digest of the canonical bencoding of the decoded
``info`` dictionary. It is always computed from the decoded value, never
from the typed :class:`~torrentmeta.models.TorrentInfo` projection, so keys
the model does not know about (``private``, ``source``, ...) still count.
"""

from __future__ import annotations

import hashlib

from torrentmeta.core.bencode import BencodeValue, encode

INFO_HASH_LENGTH = 20


def compute_info_hash(info: BencodeValue) -> bytes:
    """Return the 20-byte info hash of a decoded info dictionary."""
    return hashlib.sha1(encode(info)).digest()  # nosec B324 - SHA-1 required by BitTorrent protocol (BEP 3)


def info_hash_hex(info: BencodeValue) -> str:
    """Return the info hash as lowercase hex."""
    return compute_info_hash(info).hex()
