"""Core metainfo handling.

This module contains the metainfo components:
- Bencoding (via bencodepy)
- Validation of decoded dictionaries
- Parsing into the Torrent model
- Serialization back to bytes
"""

from __future__ import annotations

from btmeta.core.bencode import decode, encode
from btmeta.core.parser import TorrentParser
from btmeta.core.serializer import TorrentSerializer
from btmeta.core.torrent import Torrent
from btmeta.core.validator import TorrentValidator

__all__ = [
    # Bencoding
    "decode",
    "encode",
    # Model
    "Torrent",
    "TorrentParser",
    "TorrentSerializer",
    "TorrentValidator",
]
