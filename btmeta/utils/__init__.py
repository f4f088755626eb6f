"""Shared utilities and infrastructure.

This module contains common utilities used throughout the package.
"""

from __future__ import annotations

from btmeta.utils.exceptions import (
    ArgumentError,
    BencodeDecodeError,
    BencodeEncodeError,
    BencodeError,
    BTMetaError,
    ConfigurationError,
    DiskError,
    FileSystemError,
    TorrentError,
    TorrentExistsError,
    TorrentValidationError,
    ValidationError,
)
from btmeta.utils.logging_config import get_logger, setup_logging

__all__ = [
    # Exceptions
    "ArgumentError",
    "BTMetaError",
    "BencodeDecodeError",
    "BencodeEncodeError",
    "BencodeError",
    "ConfigurationError",
    "DiskError",
    "FileSystemError",
    "TorrentError",
    "TorrentExistsError",
    "TorrentValidationError",
    "ValidationError",
    # Logging
    "get_logger",
    "setup_logging",
]
