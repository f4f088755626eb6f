"""Torrent metainfo parser.

Turns a decoded metainfo dictionary into a :class:`~btmeta.core.torrent.Torrent`.
Top-level problems (missing required fields) abort the parse; malformed
entries inside optional lists are dropped and logged at debug level.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from btmeta.core.fields import (
    decode_name,
    decode_node,
    decode_path,
    decode_text,
    decode_uri,
    get_field,
)
from btmeta.core.torrent import Torrent, compute_last_piece_length
from btmeta.core.validator import TorrentValidator
from btmeta.models import TorrentFile
from btmeta.utils.exceptions import TorrentValidationError
from btmeta.utils.logging_config import get_logger

PIECE_HASH_SIZE = 20

logger = get_logger(__name__)


class TorrentParser:
    """Parser for decoded torrent metainfo dictionaries."""

    @classmethod
    def parse(cls, torrent: Mapping[Any, Any]) -> Torrent:
        """Build a Torrent model from a decoded metainfo dictionary.

        Args:
            torrent: Top-level dictionary as produced by the bencode codec

        Returns:
            Torrent: The parsed model

        Raises:
            TorrentValidationError: If a required field is missing or unusable

        """
        TorrentValidator.validate(torrent)

        info = get_field(torrent, "info")
        name = decode_name(info)
        model = Torrent(info, name)

        cls._parse_optional_fields(torrent, info, model)
        cls._parse_announces(torrent, model)
        cls._parse_url_list(torrent, model)
        cls._parse_files(info, model)
        cls._parse_pieces(info, model)
        cls._parse_nodes(torrent, model)

        logger.debug(
            "Parsed torrent %s (%s): %d file(s), %d piece(s)",
            model.name,
            model.info_hash,
            len(model.files),
            len(model.pieces),
        )
        return model

    @staticmethod
    def _parse_optional_fields(
        torrent: Mapping[Any, Any],
        info: Mapping[Any, Any],
        model: Torrent,
    ) -> None:
        for key, attr in (
            ("encoding", "encoding"),
            ("created by", "created_by"),
            ("comment", "comment"),
        ):
            raw = get_field(torrent, key)
            if raw is None:
                continue
            value = decode_text(raw)
            if value is None:
                logger.debug("Ignoring %r with unexpected type %s", key, type(raw).__name__)
                continue
            setattr(model, attr, value)

        private = get_field(info, "private")
        if private is not None:
            model.private = private == 1

        creation_date = get_field(torrent, "creation date")
        if creation_date is not None:
            if isinstance(creation_date, bool) or not isinstance(creation_date, int):
                logger.debug("Ignoring non-integer creation date %r", creation_date)
            else:
                try:
                    model.creation_date = datetime.fromtimestamp(
                        creation_date, tz=timezone.utc
                    )
                except (OverflowError, OSError, ValueError):
                    logger.debug("Ignoring out of range creation date %r", creation_date)

    @classmethod
    def _parse_announces(cls, torrent: Mapping[Any, Any], model: Torrent) -> None:
        # BEP 12: a tier is normally a list of URLs, some encoders flatten it
        announce_list = get_field(torrent, "announce-list")
        if isinstance(announce_list, list):
            for tier in announce_list:
                if isinstance(tier, list):
                    for url in tier:
                        cls._try_add_announce(model, url)
                else:
                    cls._try_add_announce(model, tier)

        announce = get_field(torrent, "announce")
        if announce is not None:
            cls._try_add_announce(model, announce)

    @staticmethod
    def _try_add_announce(model: Torrent, url: Any) -> None:
        try:
            model.add_announce(decode_uri(url))
        except ValueError as e:
            logger.debug("Dropping tracker URL %r: %s", url, e)

    @staticmethod
    def _parse_url_list(torrent: Mapping[Any, Any], model: Torrent) -> None:
        # BEP 19
        url_list = get_field(torrent, "url-list")
        if url_list is None:
            return
        if not isinstance(url_list, list):
            url_list = [url_list]
        for url in url_list:
            try:
                model.add_url(decode_uri(url))
            except ValueError as e:
                logger.debug("Dropping web seed URL %r: %s", url, e)

    @staticmethod
    def _parse_files(info: Mapping[Any, Any], model: Torrent) -> None:
        files = get_field(info, "files")
        total_length = 0

        if files is None:
            length = int(get_field(info, "length"))
            if length < 0:
                raise TorrentValidationError("info.length")
            model.add_file(
                TorrentFile(name=model.name, path=model.name, length=length, offset=0)
            )
            total_length = length
        else:
            for i, entry in enumerate(files):
                segments = [s for s in decode_path(entry) if s is not None]
                length = get_field(entry, "length")
                if isinstance(length, bool) or not isinstance(length, int) or length < 0:
                    raise TorrentValidationError(f"info.files[{i}].length")
                model.add_file(
                    TorrentFile(
                        name=segments[-1] if segments else model.name,
                        path=os.sep.join([model.name, *segments]),
                        length=length,
                        offset=total_length,
                    )
                )
                total_length += length

        model.length = total_length

        if model.files:
            piece_length = get_field(info, "piece length")
            if (
                isinstance(piece_length, bool)
                or not isinstance(piece_length, int)
                or piece_length <= 0
            ):
                raise TorrentValidationError("info['piece length']")
            model.piece_length = piece_length
            model.last_piece_length = compute_last_piece_length(
                total_length, piece_length
            )

    @staticmethod
    def _parse_pieces(info: Mapping[Any, Any], model: Torrent) -> None:
        pieces = get_field(info, "pieces")
        if not isinstance(pieces, (bytes, bytearray)):
            raise TorrentValidationError("info.pieces")
        for piece in split_pieces(bytes(pieces)):
            model.add_piece(piece)

    @staticmethod
    def _parse_nodes(torrent: Mapping[Any, Any], model: Torrent) -> None:
        # BEP 5
        nodes = get_field(torrent, "nodes")
        if not isinstance(nodes, list):
            return
        for entry in nodes:
            try:
                model.nodes.append(decode_node(entry))
            except ValueError as e:
                logger.debug("Dropping DHT node %r: %s", entry, e)


def split_pieces(buffer: bytes) -> list[str]:
    """Split a concatenation of SHA-1 digests into hex strings.

    A trailing chunk shorter than a digest is kept as is.
    """
    return [
        buffer[i : i + PIECE_HASH_SIZE].hex()
        for i in range(0, len(buffer), PIECE_HASH_SIZE)
    ]


__all__ = ["PIECE_HASH_SIZE", "TorrentParser", "split_pieces"]
