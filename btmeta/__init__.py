"""btmeta - BitTorrent metainfo parsing and serialization."""

from __future__ import annotations

__version__ = "0.1.0"

from btmeta.core.parser import TorrentParser
from btmeta.core.serializer import TorrentSerializer
from btmeta.core.torrent import Torrent
from btmeta.core.validator import TorrentValidator
from btmeta.models import DHTNode, TorrentFile

__all__ = [
    "DHTNode",
    "Torrent",
    "TorrentFile",
    "TorrentParser",
    "TorrentSerializer",
    "TorrentValidator",
    "__version__",
]
