"""Torrent metainfo serializer.

The ``info`` dictionary is written back exactly as it was parsed, never
rebuilt from the typed fields, so the info-hash of the output matches the
one computed at parse time.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from btmeta.core.bencode import encode

if TYPE_CHECKING:  # pragma: no cover
    from btmeta.core.torrent import Torrent


class TorrentSerializer:
    """Serializes a Torrent model to a bencodable dictionary or bytes."""

    @classmethod
    def to_dict(cls, torrent: Torrent) -> dict[bytes, Any]:
        """Build the top-level metainfo dictionary for ``torrent``."""
        data: dict[bytes, Any] = {b"info": torrent.info}
        cls._serialize_announces(data, torrent)
        cls._serialize_url_list(data, torrent)
        cls._serialize_optional_fields(data, torrent)
        return data

    @classmethod
    def to_bytes(cls, torrent: Torrent) -> bytes:
        """Bencode ``torrent``.

        Raises:
            BencodeEncodeError: If the info dictionary cannot be encoded

        """
        return encode(cls.to_dict(torrent))

    @staticmethod
    def _serialize_announces(data: dict[bytes, Any], torrent: Torrent) -> None:
        announces = sorted(torrent.announces)
        if len(announces) == 1:
            data[b"announce"] = announces[0].encode("utf-8")
        elif announces:
            # One tracker per tier
            data[b"announce-list"] = [[url.encode("utf-8")] for url in announces]

    @staticmethod
    def _serialize_url_list(data: dict[bytes, Any], torrent: Torrent) -> None:
        if torrent.url_list:
            data[b"url-list"] = sorted(torrent.url_list)

    @staticmethod
    def _serialize_optional_fields(data: dict[bytes, Any], torrent: Torrent) -> None:
        if torrent.private is not None:
            data[b"private"] = 1 if torrent.private else 0
        if torrent.creation_date is not None:
            data[b"creation date"] = math.floor(torrent.creation_date.timestamp())
        if torrent.created_by is not None:
            data[b"created by"] = torrent.created_by
        if torrent.comment is not None:
            data[b"comment"] = torrent.comment


__all__ = ["TorrentSerializer"]
