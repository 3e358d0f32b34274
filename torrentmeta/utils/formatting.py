"""Human-readable rendering of decoded bencode values."""

from __future__ import annotations

from typing import Any


def _quote(raw: bytes) -> str:
    return '"' + raw.decode("utf-8", errors="replace") + '"'


def format_value(value: Any, sort_keys: bool = False) -> str:
    """Render a decoded value on one line.

    Integers are printed bare, byte strings quoted (invalid UTF-8 replaced),
    lists as ``[a, b]`` and dictionaries as ``{"key": value}``. Dictionary
    keys keep their decoded order unless ``sort_keys`` is set, in which case
    they are printed in ascending byte order at every level.
    """
    if isinstance(value, int):
        return str(value)
    if isinstance(value, bytes):
        return _quote(value)
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item, sort_keys) for item in value) + "]"
    if isinstance(value, dict):
        keys = sorted(value) if sort_keys else list(value)
        items = (f"{_quote(key)}: {format_value(value[key], sort_keys)}" for key in keys)
        return "{" + ", ".join(items) + "}"
    return repr(value)


def format_size(num_bytes: int) -> str:
    """Format a byte count with a binary unit suffix."""
    if abs(num_bytes) < 1024:
        return f"{num_bytes} B"
    size = num_bytes / 1024
    for unit in ("KiB", "MiB", "GiB"):
        if abs(size) < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TiB"
