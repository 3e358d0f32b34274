"""Exception hierarchy for torrentmeta.

Provides a single exception tree for bencode decoding/encoding, torrent
metadata mapping and configuration errors.
"""

from __future__ import annotations

from typing import Any


class TorrentMetaError(Exception):
    """Base exception for all torrentmeta errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize torrentmeta error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(TorrentMetaError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""


class BencodeDecodeError(BencodeError):
    """Malformed bencode input.

    ``position`` is the byte offset in the input buffer at which the
    problem was detected.
    """

    def __init__(self, message: str, position: int = 0):
        """Initialize decode error with the offending offset."""
        super().__init__(message, {"position": position})
        self.position = position


class InvalidInputError(BencodeDecodeError):
    """Value starts with a byte that begins no bencode type."""


class NoEndMarkerError(BencodeDecodeError):
    """Integer, list or dictionary is missing its terminating ``e``."""


class InvalidNumberError(BencodeDecodeError):
    """Integer body or string length is not a canonical decimal number."""


class InvalidSequenceError(BencodeDecodeError):
    """Numeric text is not ASCII."""


class NoStringDelimiterError(BencodeDecodeError):
    """Byte string length is not followed by ``:``."""


class StringLengthError(BencodeDecodeError):
    """Byte string length exceeds the remaining input."""


class InvalidKeyError(BencodeDecodeError):
    """Dictionary key is not a byte string."""


class NestingTooDeepError(BencodeDecodeError):
    """Lists and dictionaries are nested beyond the configured limit."""


class TrailingDataError(BencodeDecodeError):
    """Bytes remain after a complete top-level value."""


class BencodeEncodeError(BencodeError):
    """Value cannot be represented in bencode."""


class TorrentError(ValidationError):
    """Torrent metadata validation errors."""


class InvalidTorrentFileError(TorrentError):
    """Decoded root value is not a dictionary."""


class MissingFieldError(TorrentError):
    """Required field is absent."""

    def __init__(self, field: str, message: str | None = None, **details: Any):
        """Initialize with the name of the missing field."""
        super().__init__(message or f"Missing field: {field}", {"field": field, **details})
        self.field = field


class WrongFieldTypeError(MissingFieldError):
    """Required field is present but holds the wrong bencode type."""

    def __init__(self, field: str, expected: str, actual: str):
        """Initialize with the field name and the expected/actual type names."""
        super().__init__(
            field,
            f"Field {field!r} must be {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class InvalidDictionaryError(TorrentError):
    """Nested value must be a dictionary."""


class InvalidStringError(TorrentError):
    """Value required as text is not a UTF-8 byte string."""

    def __init__(self, field: str, message: str | None = None):
        """Initialize with the name of the offending field."""
        super().__init__(message or f"Field {field!r} is not valid UTF-8 text", {"field": field})
        self.field = field
