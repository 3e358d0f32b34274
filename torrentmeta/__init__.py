"""torrentmeta - bencode codec, torrent metainfo model and info hash."""

from __future__ import annotations

__version__ = "0.1.0"

from torrentmeta.config.config import get_config, init_config
from torrentmeta.core.bencode import (
    BencodeDecoder,
    BencodeEncoder,
    decode,
    decode_all,
    encode,
)
from torrentmeta.core.info_hash import compute_info_hash, info_hash_hex
from torrentmeta.core.torrent import TorrentParser, from_value
from torrentmeta.models import Torrent, TorrentFile, TorrentInfo

__all__ = [
    "BencodeDecoder",
    "BencodeEncoder",
    "Torrent",
    "TorrentFile",
    "TorrentInfo",
    "TorrentParser",
    "__version__",
    "compute_info_hash",
    "decode",
    "decode_all",
    "encode",
    "from_value",
    "get_config",
    "info_hash_hex",
    "init_config",
]
