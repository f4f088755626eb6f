"""Structural validation of decoded metainfo dictionaries.

Validation only checks that the fields needed to build a model are present;
it never inspects values beyond the shape required to continue.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from btmeta.core.fields import get_field, has_field
from btmeta.utils.exceptions import TorrentValidationError


class TorrentValidator:
    """Validates that a metainfo dictionary carries all required fields.

    Checks run in a fixed order and stop at the first failure. The raised
    :class:`TorrentValidationError` names the missing field, e.g.
    ``info.files[2].path``.
    """

    @classmethod
    def validate(cls, torrent: Mapping[Any, Any]) -> None:
        """Validate a decoded metainfo dictionary.

        Args:
            torrent: Top-level dictionary as produced by the bencode codec

        Raises:
            TorrentValidationError: If a required field is missing

        """
        cls._validate_info(torrent)
        info = get_field(torrent, "info")
        cls._validate_name(info)
        cls._validate_piece_length(info)
        cls._validate_pieces(info)
        cls._validate_files(info)

    @staticmethod
    def _validate_info(torrent: Mapping[Any, Any]) -> None:
        if not isinstance(torrent, Mapping):
            raise TorrentValidationError("info")
        if not isinstance(get_field(torrent, "info"), Mapping):
            raise TorrentValidationError("info")

    @staticmethod
    def _validate_name(info: Mapping[Any, Any]) -> None:
        if not has_field(info, "name.utf-8") and not has_field(info, "name"):
            raise TorrentValidationError("info.name")

    @staticmethod
    def _validate_piece_length(info: Mapping[Any, Any]) -> None:
        if not has_field(info, "piece length"):
            raise TorrentValidationError("info['piece length']")

    @staticmethod
    def _validate_pieces(info: Mapping[Any, Any]) -> None:
        if not has_field(info, "pieces"):
            raise TorrentValidationError("info.pieces")

    @staticmethod
    def _validate_files(info: Mapping[Any, Any]) -> None:
        files = get_field(info, "files")
        if files is not None:
            if not isinstance(files, list):
                raise TorrentValidationError("info.files")
            for i, entry in enumerate(files):
                if not isinstance(entry, Mapping):
                    raise TorrentValidationError(f"info.files[{i}]")
                if not has_field(entry, "path.utf-8") and not has_field(entry, "path"):
                    raise TorrentValidationError(f"info.files[{i}].path")
            return

        length = get_field(info, "length")
        if isinstance(length, bool) or not isinstance(length, (int, float)):
            raise TorrentValidationError("info.length")


__all__ = ["TorrentValidator"]
