"""Pytest configuration and shared fixtures for btmeta tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from btmeta.config.config import reset_config
from btmeta.core.bencode import encode
from btmeta.executor.offload import shutdown_offload_executor


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("asyncio", "marks tests as async (deselect with '-m \"not asyncio\"')"),
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("cli", "marks tests as CLI tests"),
        ("config", "marks tests as configuration tests"),
        ("executor", "marks tests as offload executor tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_btmeta_env(monkeypatch, tmp_path):
    """Keep BTMETA_* variables and local config files out of tests."""
    for name in (
        "BTMETA_LOG_LEVEL",
        "BTMETA_LOG_FILE",
        "BTMETA_STRUCTURED_LOGGING",
        "BTMETA_MAX_WORKERS",
        "BTMETA_THREAD_NAME_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def cleanup_global_state():
    """Drop the global config and offload pool after each test."""
    yield
    shutdown_offload_executor()
    reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    btmeta_logger = logging.getLogger("btmeta")
    for handler in btmeta_logger.handlers[:]:
        handler.close()
        btmeta_logger.removeHandler(handler)
    btmeta_logger.propagate = True
    btmeta_logger.setLevel(logging.NOTSET)


@pytest.fixture
def single_file_meta() -> dict[bytes, Any]:
    """Decoded metainfo of a single-file torrent."""
    return {
        b"announce": b"http://tracker.example.com:6969/announce",
        b"info": {
            b"name": b"a.txt",
            b"piece length": 16384,
            b"pieces": bytes(20),
            b"length": 1000,
        },
    }


@pytest.fixture
def multi_file_meta() -> dict[bytes, Any]:
    """Decoded metainfo of a two-file torrent named ``root``."""
    return {
        b"announce": b"http://tracker.example.com:6969/announce",
        b"info": {
            b"name": b"root",
            b"piece length": 256,
            b"pieces": b"\x01" * 40,
            b"files": [
                {b"path": [b"d", b"f1"], b"length": 100},
                {b"path": [b"f2"], b"length": 200},
            ],
        },
    }


@pytest.fixture
def torrent_bytes(single_file_meta) -> bytes:
    """Bencoded single-file torrent."""
    return encode(single_file_meta)


@pytest.fixture
def torrent_path(tmp_path, torrent_bytes):
    """Single-file torrent written to disk."""
    path = tmp_path / "a.torrent"
    path.write_bytes(torrent_bytes)
    return path
