"""Exception hierarchy for btmeta.

Every error raised by the package derives from :class:`BTMetaError`, so
callers can catch the whole family at once or pick out the specific
validation, codec, file-system or argument failure they care about.
"""

from __future__ import annotations

from typing import Any


class BTMetaError(Exception):
    """Base exception for all btmeta errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize btmeta error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(BTMetaError):
    """Data validation errors."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class TorrentError(ValidationError):
    """Torrent metainfo errors."""


class TorrentValidationError(TorrentError):
    """A required metainfo field is missing or unusable.

    ``field_path`` names the offending field, e.g. ``info.files[2].path``.
    """

    def __init__(self, field_path: str, details: dict[str, Any] | None = None):
        """Initialize with the path of the missing field."""
        super().__init__(
            f"Torrent is missing required field: {field_path}",
            details,
        )
        self.field_path = field_path


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""


class BencodeDecodeError(BencodeError):
    """Input bytes are not valid bencode."""


class BencodeEncodeError(BencodeError):
    """A value cannot be represented as bencode."""


class DiskError(BTMetaError):
    """Disk I/O related errors."""


class FileSystemError(DiskError):
    """File system operation errors."""


class TorrentExistsError(FileSystemError):
    """Refusing to overwrite an existing torrent file."""


class ArgumentError(BTMetaError):
    """Invalid call shape, such as an unsupported input type."""
