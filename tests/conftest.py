"""Pytest configuration and shared fixtures for torrentmeta tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from torrentmeta.config import config as config_module
from torrentmeta.config.config import ENV_MAPPINGS
from torrentmeta.core.bencode import encode


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("config", "marks tests as configuration tests"),
        ("cli", "marks tests as CLI tests"),
        ("observability", "marks tests as logging/observability tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _clear_torrentmeta_env(monkeypatch):
    """Keep host environment variables out of config loading."""
    for env_name in ENV_MAPPINGS:
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture(autouse=True)
def _reset_global_config():
    """Drop the global config manager between tests."""
    yield
    config_module.reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    # setup_logging() detaches the package logger from the root logger
    package_logger = logging.getLogger("torrentmeta")
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def info_dict() -> dict[bytes, Any]:
    """Decoded info dictionary of a two-file torrent."""
    return {
        b"name": b"TestDirectory",
        b"piece length": 32768,
        b"files": [
            {b"length": 1000, b"path": [b"file1.txt"]},
            {b"length": 2000, b"path": [b"subdir", b"file2.txt"]},
        ],
        b"pieces": b"\x01" * 20 + b"\x02" * 20,
    }


@pytest.fixture
def torrent_dict(info_dict) -> dict[bytes, Any]:
    """Decoded root dictionary of a two-file torrent."""
    return {
        b"announce": b"http://tracker.example.com:6969/announce",
        b"created by": b"mktorrent 1.1",
        b"creation date": 1700000000,
        b"info": info_dict,
    }


@pytest.fixture
def torrent_bytes(torrent_dict) -> bytes:
    """Canonical bencoding of ``torrent_dict``."""
    return encode(torrent_dict)
