"""Bencode decoder and canonical encoder.

Values are represented with native Python types:

- integers as ``int`` (signed 64-bit range)
- byte strings as ``bytes``
- lists as ``list``
- dictionaries as ``dict`` with ``bytes`` keys, in the order they were written

Encoding always emits dictionary keys in ascending byte order, so two
dictionaries with the same items encode to the same bytes whatever order
they were built in.
"""

from __future__ import annotations

import re
from typing import Any, Union

from torrentmeta.utils.exceptions import (
    BencodeDecodeError,
    BencodeEncodeError,
    InvalidInputError,
    InvalidKeyError,
    InvalidNumberError,
    InvalidSequenceError,
    NestingTooDeepError,
    NoEndMarkerError,
    NoStringDelimiterError,
    StringLengthError,
    TrailingDataError,
)

BencodeValue = Union[int, bytes, list["BencodeValue"], dict[bytes, "BencodeValue"]]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

DEFAULT_MAX_DEPTH = 64

_INTEGER_RE = re.compile(r"-?(0|[1-9][0-9]*)")
_LENGTH_RE = re.compile(r"0|[1-9][0-9]*")

# INT64_MAX has 19 digits
_MAX_DIGITS = 19

_INT = ord("i")
_LIST = ord("l")
_DICT = ord("d")
_END = ord("e")
_DIGITS = frozenset(b"0123456789")


def type_name(value: Any) -> str:
    """Return the bencode type name of a decoded value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, (bytes, bytearray)):
        return "byte string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "dictionary"
    return type(value).__name__


class BencodeDecoder:
    """Recursive descent decoder over an in-memory buffer."""

    def __init__(self, data: bytes, max_depth: int = DEFAULT_MAX_DEPTH):
        """Initialize decoder.

        Args:
            data: Bencoded input
            max_depth: Maximum number of nested lists/dictionaries

        """
        self.data = bytes(data)
        self.max_depth = max_depth
        self.position = 0

    @property
    def remaining(self) -> bytes:
        """Bytes not consumed by the last decode."""
        return self.data[self.position :]

    def decode(self) -> BencodeValue:
        """Decode one value starting at the current position."""
        return self._decode_value(0)

    def _decode_value(self, depth: int) -> BencodeValue:
        if self.position >= len(self.data):
            msg = "Unexpected end of input"
            raise InvalidInputError(msg, self.position)

        marker = self.data[self.position]
        if marker == _INT:
            return self._decode_integer()
        if marker in _DIGITS:
            return self._decode_string()
        if marker == _LIST:
            return self._decode_list(depth + 1)
        if marker == _DICT:
            return self._decode_dict(depth + 1)

        msg = f"Invalid bencode marker {bytes([marker])!r}"
        raise InvalidInputError(msg, self.position)

    def _read_number(
        self,
        start: int,
        end: int,
        pattern: re.Pattern[str],
        overflow: type[BencodeDecodeError],
    ) -> int:
        raw = self.data[start:end]
        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError:
            msg = f"Non-ASCII number {raw!r}"
            raise InvalidSequenceError(msg, start) from None
        if not pattern.fullmatch(text) or text == "-0":
            msg = f"Invalid number {raw!r}"
            raise InvalidNumberError(msg, start)
        if len(text.lstrip("-")) > _MAX_DIGITS:
            msg = f"Number with {len(text)} characters is too long"
            raise overflow(msg, start)
        return int(text)

    def _decode_integer(self) -> int:
        start = self.position + 1
        end = self.data.find(b"e", start)
        if end == -1:
            msg = "Integer has no end marker"
            raise NoEndMarkerError(msg, self.position)

        value = self._read_number(start, end, _INTEGER_RE, InvalidNumberError)
        if not INT64_MIN <= value <= INT64_MAX:
            msg = f"Integer {value} does not fit in 64 bits"
            raise InvalidNumberError(msg, start)

        self.position = end + 1
        return value

    def _decode_string(self) -> bytes:
        colon = self.data.find(b":", self.position)
        if colon == -1:
            msg = "String length has no ':' delimiter"
            raise NoStringDelimiterError(msg, self.position)

        length = self._read_number(self.position, colon, _LENGTH_RE, StringLengthError)
        start = colon + 1
        end = start + length
        if end > len(self.data):
            msg = f"String length {length} exceeds remaining {len(self.data) - start} bytes"
            raise StringLengthError(msg, self.position)

        self.position = end
        return self.data[start:end]

    def _enter(self, depth: int) -> None:
        if depth > self.max_depth:
            msg = f"Nesting exceeds maximum depth of {self.max_depth}"
            raise NestingTooDeepError(msg, self.position)
        self.position += 1

    def _at_end(self, start: int, kind: str) -> bool:
        if self.position >= len(self.data):
            msg = f"{kind} has no end marker"
            raise NoEndMarkerError(msg, start)
        if self.data[self.position] == _END:
            self.position += 1
            return True
        return False

    def _decode_list(self, depth: int) -> list[BencodeValue]:
        start = self.position
        self._enter(depth)
        result: list[BencodeValue] = []
        while not self._at_end(start, "List"):
            result.append(self._decode_value(depth))
        return result

    def _decode_dict(self, depth: int) -> dict[bytes, BencodeValue]:
        start = self.position
        self._enter(depth)
        result: dict[bytes, BencodeValue] = {}
        while not self._at_end(start, "Dictionary"):
            if self.data[self.position] not in _DIGITS:
                msg = "Dictionary key must be a byte string"
                raise InvalidKeyError(msg, self.position)
            key = self._decode_string()
            result[key] = self._decode_value(depth)
        return result


class BencodeEncoder:
    """Canonical bencode encoder."""

    def encode(self, value: Any) -> bytes:
        """Encode a value to bencode bytes."""
        chunks: list[bytes] = []
        self._encode_value(value, chunks)
        return b"".join(chunks)

    def _encode_value(self, value: Any, chunks: list[bytes]) -> None:
        # bool is an int subclass but has no bencode form
        if isinstance(value, bool):
            msg = "Cannot encode boolean"
            raise BencodeEncodeError(msg)
        if isinstance(value, int):
            self._encode_integer(value, chunks)
        elif isinstance(value, (bytes, bytearray, memoryview, str)):
            self._encode_string(self._to_bytes(value), chunks)
        elif isinstance(value, (list, tuple)):
            chunks.append(b"l")
            for item in value:
                self._encode_value(item, chunks)
            chunks.append(b"e")
        elif isinstance(value, dict):
            self._encode_dict(value, chunks)
        else:
            msg = f"Cannot encode type {type(value).__name__}"
            raise BencodeEncodeError(msg)

    @staticmethod
    def _to_bytes(value: bytes | bytearray | memoryview | str) -> bytes:
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    @staticmethod
    def _encode_integer(value: int, chunks: list[bytes]) -> None:
        if not INT64_MIN <= value <= INT64_MAX:
            msg = f"Integer {value} does not fit in 64 bits"
            raise BencodeEncodeError(msg)
        chunks.append(b"i%de" % value)

    @staticmethod
    def _encode_string(value: bytes, chunks: list[bytes]) -> None:
        chunks.append(b"%d:" % len(value))
        chunks.append(value)

    def _encode_dict(self, value: dict[Any, Any], chunks: list[bytes]) -> None:
        items: dict[bytes, Any] = {}
        for key, item in value.items():
            if not isinstance(key, (bytes, bytearray, memoryview, str)):
                msg = f"Dictionary key must be bytes or str, got {type(key).__name__}"
                raise BencodeEncodeError(msg)
            raw_key = self._to_bytes(key)
            if raw_key in items:
                msg = f"Duplicate dictionary key {raw_key!r}"
                raise BencodeEncodeError(msg)
            items[raw_key] = item

        chunks.append(b"d")
        for raw_key in sorted(items):
            self._encode_string(raw_key, chunks)
            self._encode_value(items[raw_key], chunks)
        chunks.append(b"e")


def decode(
    data: bytes, max_depth: int = DEFAULT_MAX_DEPTH
) -> tuple[BencodeValue, bytes]:
    """Decode one value and return it with the unconsumed remainder."""
    decoder = BencodeDecoder(data, max_depth=max_depth)
    value = decoder.decode()
    return value, decoder.remaining


def decode_all(data: bytes, max_depth: int = DEFAULT_MAX_DEPTH) -> BencodeValue:
    """Decode a buffer that must hold exactly one value."""
    decoder = BencodeDecoder(data, max_depth=max_depth)
    value = decoder.decode()
    if decoder.position != len(decoder.data):
        msg = f"{len(decoder.data) - decoder.position} trailing bytes after value"
        raise TrailingDataError(msg, decoder.position)
    return value


def encode(value: Any) -> bytes:
    """Encode a value to canonical bencode bytes."""
    return BencodeEncoder().encode(value)
