"""Pydantic models for torrentmeta.

Provides validated data models for torrent metadata and configuration.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from torrentmeta.core.bencode import DEFAULT_MAX_DEPTH
from torrentmeta.core.info_hash import INFO_HASH_LENGTH
from torrentmeta.utils.exceptions import TorrentError

PIECE_HASH_LENGTH = 20


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class TorrentFile(BaseModel):
    """One file of a multi-file torrent."""

    length: int = Field(..., description="File length in bytes")
    path: list[str] = Field(..., description="Path components, file name last")

    @property
    def full_path(self) -> str:
        """Path components joined with '/'."""
        return "/".join(self.path)


class TorrentInfo(BaseModel):
    """Typed view of the info dictionary."""

    name: str = Field(..., description="Suggested name of the top-level directory")
    piece_length: int = Field(..., description="Piece length in bytes")
    files: list[TorrentFile] = Field(..., description="Files in torrent order")
    pieces: bytes = Field(..., description="Concatenated 20-byte SHA-1 piece hashes")

    @property
    def total_length(self) -> int:
        """Total size of all files in bytes."""
        return sum(f.length for f in self.files)

    @property
    def num_pieces(self) -> int:
        """Number of complete 20-byte hashes in ``pieces``."""
        return len(self.pieces) // PIECE_HASH_LENGTH

    def piece_hashes(self) -> list[bytes]:
        """Split ``pieces`` into individual SHA-1 digests."""
        if len(self.pieces) % PIECE_HASH_LENGTH != 0:
            msg = f"Invalid pieces data length: {len(self.pieces)} bytes (should be multiple of 20)"
            raise TorrentError(msg)
        return [
            self.pieces[i : i + PIECE_HASH_LENGTH]
            for i in range(0, len(self.pieces), PIECE_HASH_LENGTH)
        ]

    def piece_hash(self, piece_index: int) -> bytes:
        """Get the SHA-1 hash for a specific piece."""
        if piece_index < 0 or piece_index >= self.num_pieces:
            msg = f"Invalid piece index: {piece_index}"
            raise TorrentError(msg)
        start = piece_index * PIECE_HASH_LENGTH
        return self.pieces[start : start + PIECE_HASH_LENGTH]


class Torrent(BaseModel):
    """Torrent metainfo."""

    announce: str = Field(..., description="Tracker announce URL")
    created_by: str = Field(..., description="Program that created the torrent")
    creation_date: int = Field(..., description="Creation time, seconds since epoch")
    info: TorrentInfo = Field(..., description="Info dictionary")
    info_hash: bytes = Field(
        ...,
        min_length=INFO_HASH_LENGTH,
        max_length=INFO_HASH_LENGTH,
        description="SHA-1 of the canonically encoded info dictionary",
    )

    @property
    def info_hash_hex(self) -> str:
        """Info hash as lowercase hex."""
        return self.info_hash.hex()


class DecoderConfig(BaseModel):
    """Bencode decoder configuration."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=256,
        description="Maximum nesting of lists and dictionaries",
    )


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False, description="Use JSON structured logging"
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class Config(BaseModel):
    """Main configuration model."""

    decoder: DecoderConfig = Field(
        default_factory=DecoderConfig,
        description="Decoder configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
