"""Torrent metainfo mapping for torrentmeta.

This module projects a decoded bencode tree onto the typed
:class:`~torrentmeta.models.Torrent` model and calculates the info hash
from the decoded ``info`` dictionary.
"""

from __future__ import annotations

import logging
from typing import Any

from torrentmeta.core.bencode import BencodeValue, decode_all, type_name
from torrentmeta.core.info_hash import compute_info_hash
from torrentmeta.models import DecoderConfig, Torrent, TorrentFile, TorrentInfo
from torrentmeta.utils.exceptions import (
    InvalidDictionaryError,
    InvalidStringError,
    InvalidTorrentFileError,
    MissingFieldError,
    WrongFieldTypeError,
)

logger = logging.getLogger(__name__)


def _get(mapping: dict[bytes, Any], field: str, expected: type, expected_name: str) -> Any:
    """Look up a required field and check its bencode type."""
    key = field.encode("utf-8")
    if key not in mapping:
        raise MissingFieldError(field)
    value = mapping[key]
    if not isinstance(value, expected) or isinstance(value, bool):
        raise WrongFieldTypeError(field, expected_name, type_name(value))
    return value


def _get_integer(mapping: dict[bytes, Any], field: str) -> int:
    return _get(mapping, field, int, "integer")


def _get_bytes(mapping: dict[bytes, Any], field: str) -> bytes:
    return _get(mapping, field, bytes, "byte string")


def _get_list(mapping: dict[bytes, Any], field: str) -> list[Any]:
    return _get(mapping, field, list, "list")


def _get_dict(mapping: dict[bytes, Any], field: str) -> dict[bytes, Any]:
    return _get(mapping, field, dict, "dictionary")


def _to_text(raw: bytes, field: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidStringError(field) from None


def _get_string(mapping: dict[bytes, Any], field: str) -> str:
    return _to_text(_get_bytes(mapping, field), field)


def _extract_file(entry: Any, index: int) -> TorrentFile:
    if not isinstance(entry, dict):
        msg = f"files[{index}] must be a dictionary, got {type_name(entry)}"
        raise InvalidDictionaryError(msg, {"index": index})

    length = _get_integer(entry, "length")
    segments = _get_list(entry, "path")

    path = []
    for segment in segments:
        if not isinstance(segment, bytes):
            msg = f"Path segment of files[{index}] must be a byte string, got {type_name(segment)}"
            raise InvalidStringError("path", msg)
        path.append(_to_text(segment, "path"))

    return TorrentFile(length=length, path=path)


def _extract_info(info: dict[bytes, Any]) -> TorrentInfo:
    name = _get_string(info, "name")
    piece_length = _get_integer(info, "piece length")
    files = [
        _extract_file(entry, index)
        for index, entry in enumerate(_get_list(info, "files"))
    ]
    pieces = _get_bytes(info, "pieces")

    return TorrentInfo(
        name=name,
        piece_length=piece_length,
        files=files,
        pieces=pieces,
    )


def from_value(value: BencodeValue) -> Torrent:
    """Map a decoded root value onto a :class:`Torrent`.

    Fields are read in a fixed order (``announce``, ``created by``,
    ``creation date``, ``info``, then ``name``, ``piece length``, ``files``
    and ``pieces`` inside ``info``); the first absent or mistyped field is
    reported.

    Raises:
        InvalidTorrentFileError: If the root is not a dictionary
        MissingFieldError: If a field is absent (``WrongFieldTypeError`` if
            present with the wrong type)
        InvalidDictionaryError: If a ``files`` entry is not a dictionary
        InvalidStringError: If a text field is not valid UTF-8

    """
    if not isinstance(value, dict):
        msg = f"Torrent root must be a dictionary, got {type_name(value)}"
        raise InvalidTorrentFileError(msg)

    announce = _get_string(value, "announce")
    created_by = _get_string(value, "created by")
    creation_date = _get_integer(value, "creation date")
    info = _get_dict(value, "info")

    return Torrent(
        announce=announce,
        created_by=created_by,
        creation_date=creation_date,
        info=_extract_info(info),
        info_hash=compute_info_hash(info),
    )


class TorrentParser:
    """Parser for raw torrent file contents."""

    def __init__(self, config: DecoderConfig | None = None) -> None:
        """Initialize the torrent parser.

        Args:
            config: Decoder limits; defaults are used when omitted

        """
        self.config = config or DecoderConfig()

    def decode(self, data: bytes) -> BencodeValue:
        """Decode torrent bytes into a value tree."""
        return decode_all(data, max_depth=self.config.max_depth)

    def parse(self, data: bytes) -> Torrent:
        """Decode and map torrent bytes.

        Args:
            data: Complete contents of a .torrent file

        Returns:
            Torrent with its info hash

        Raises:
            BencodeDecodeError: If the bytes are not valid bencode
            TorrentError: If the decoded tree is not valid torrent metainfo

        """
        logger.debug("Decoding %d bytes of torrent data", len(data))
        torrent = from_value(self.decode(data))
        logger.info(
            "Parsed torrent %s (%d files, info hash %s)",
            torrent.info.name,
            len(torrent.info.files),
            torrent.info_hash_hex,
        )
        return torrent
