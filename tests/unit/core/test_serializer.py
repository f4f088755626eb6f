"""Tests for writing the Torrent model back to bencode."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone

import pytest

pytestmark = [pytest.mark.unit, pytest.mark.core]

from btmeta.core.bencode import decode, encode
from btmeta.core.parser import TorrentParser
from btmeta.core.serializer import TorrentSerializer
from btmeta.models import TorrentFile


class TestTorrentSerializer:
    """Test cases for TorrentSerializer."""

    def test_info_written_verbatim(self, multi_file_meta):
        """The original info dictionary is emitted, so its hash still matches."""
        torrent = TorrentParser.parse(multi_file_meta)
        data = decode(TorrentSerializer.to_bytes(torrent))
        assert data[b"info"] == multi_file_meta[b"info"]
        assert hashlib.sha1(encode(data[b"info"])).hexdigest() == torrent.info_hash

    def test_top_level_keys_sorted(self, single_file_meta):
        torrent = TorrentParser.parse(single_file_meta)
        torrent.comment = "c"
        torrent.created_by = "tool"
        torrent.add_url("http://seed.example/")
        keys = list(decode(TorrentSerializer.to_bytes(torrent)))
        assert keys == sorted(keys)
        assert b"comment" in keys
        assert b"url-list" in keys

    def test_typed_edits_not_written_into_info(self, multi_file_meta):
        torrent = TorrentParser.parse(multi_file_meta)
        torrent.add_piece("ff" * 20)
        torrent.add_file(TorrentFile(name="x", path="x", length=1))
        torrent.piece_length = 1
        data = decode(TorrentSerializer.to_bytes(torrent))
        assert data[b"info"] == multi_file_meta[b"info"]

    def test_single_announce(self, single_file_meta):
        torrent = TorrentParser.parse(single_file_meta)
        data = TorrentSerializer.to_dict(torrent)
        assert data[b"announce"] == b"http://tracker.example.com:6969/announce"
        assert b"announce-list" not in data

    def test_many_announces_one_per_tier(self, single_file_meta):
        torrent = TorrentParser.parse(single_file_meta)
        torrent.add_announce("udp://b.example:80")
        data = TorrentSerializer.to_dict(torrent)
        assert b"announce" not in data
        assert data[b"announce-list"] == [
            [b"http://tracker.example.com:6969/announce"],
            [b"udp://b.example:80"],
        ]

    def test_no_announces(self, single_file_meta):
        del single_file_meta[b"announce"]
        data = TorrentSerializer.to_dict(TorrentParser.parse(single_file_meta))
        assert b"announce" not in data
        assert b"announce-list" not in data

    def test_url_list_as_text(self, single_file_meta):
        single_file_meta[b"url-list"] = [b"http://seed.example/b", b"http://seed.example/a"]
        data = TorrentSerializer.to_dict(TorrentParser.parse(single_file_meta))
        assert data[b"url-list"] == ["http://seed.example/a", "http://seed.example/b"]

    def test_optional_scalars(self, single_file_meta):
        single_file_meta[b"comment"] = b"note"
        single_file_meta[b"created by"] = b"maker"
        single_file_meta[b"creation date"] = 1_600_000_000
        single_file_meta[b"encoding"] = b"UTF-8"
        single_file_meta[b"info"][b"private"] = 1
        data = decode(TorrentSerializer.to_bytes(TorrentParser.parse(single_file_meta)))

        assert data[b"comment"] == b"note"
        assert data[b"created by"] == b"maker"
        assert data[b"creation date"] == 1_600_000_000
        assert data[b"private"] == 1
        assert b"encoding" not in data

    def test_absent_scalars_omitted(self, single_file_meta):
        data = TorrentSerializer.to_dict(TorrentParser.parse(single_file_meta))
        for key in (b"comment", b"created by", b"creation date", b"private", b"encoding"):
            assert key not in data

    def test_creation_date_floored(self, single_file_meta):
        torrent = TorrentParser.parse(single_file_meta)
        torrent.creation_date = datetime(2020, 9, 13, 12, 26, 40, 900000, tzinfo=timezone.utc)
        torrent.private = False
        data = TorrentSerializer.to_dict(torrent)
        assert data[b"creation date"] == 1_600_000_000
        assert data[b"private"] == 0

    def test_round_trip_preserves_identity(self, multi_file_meta):
        """parse(serialize(parse(x))) keeps hash, name, sizes and trackers."""
        multi_file_meta[b"announce-list"] = [
            [b"http://a.example/announce", b"http://b.example/announce"],
        ]
        first = TorrentParser.parse(multi_file_meta)
        second = TorrentParser.parse(decode(TorrentSerializer.to_bytes(first)))

        assert second.info_hash == first.info_hash
        assert second.name == first.name
        assert second.length == first.length
        assert second.piece_length == first.piece_length
        assert second.announces == first.announces
