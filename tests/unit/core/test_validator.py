"""Tests for structural validation of decoded metainfo."""

from __future__ import annotations

import pytest

pytestmark = [pytest.mark.unit, pytest.mark.core]

from btmeta.core.validator import TorrentValidator
from btmeta.utils.exceptions import TorrentError, TorrentValidationError


def _field_path(meta) -> str:
    with pytest.raises(TorrentValidationError) as exc_info:
        TorrentValidator.validate(meta)
    return exc_info.value.field_path


class TestTorrentValidator:
    """Test cases for TorrentValidator."""

    def test_valid_single_file(self, single_file_meta):
        """A complete single-file dictionary passes."""
        TorrentValidator.validate(single_file_meta)

    def test_valid_multi_file(self, multi_file_meta):
        """A complete multi-file dictionary passes."""
        TorrentValidator.validate(multi_file_meta)

    def test_missing_info(self):
        """Missing info is reported as ``info``."""
        assert _field_path({b"announce": b"http://t/a"}) == "info"

    def test_info_not_a_dict(self):
        """A non-dictionary info is treated as missing."""
        assert _field_path({b"info": b"nope"}) == "info"

    def test_top_level_not_a_dict(self):
        """A decoded value that is not a dictionary has no info."""
        assert _field_path([1, 2, 3]) == "info"

    def test_missing_name(self, single_file_meta):
        """Missing both name variants is reported as ``info.name``."""
        del single_file_meta[b"info"][b"name"]
        assert _field_path(single_file_meta) == "info.name"

    def test_name_utf8_variant_accepted(self, single_file_meta):
        """``name.utf-8`` alone satisfies the name requirement."""
        info = single_file_meta[b"info"]
        info[b"name.utf-8"] = info.pop(b"name")
        TorrentValidator.validate(single_file_meta)

    def test_missing_piece_length(self, single_file_meta):
        """Missing piece length is reported."""
        del single_file_meta[b"info"][b"piece length"]
        assert _field_path(single_file_meta) == "info['piece length']"

    def test_missing_pieces(self, single_file_meta):
        """Missing pieces is reported."""
        del single_file_meta[b"info"][b"pieces"]
        assert _field_path(single_file_meta) == "info.pieces"

    def test_missing_length_single_file(self, single_file_meta):
        """A single-file info without length is rejected."""
        del single_file_meta[b"info"][b"length"]
        assert _field_path(single_file_meta) == "info.length"

    def test_non_numeric_length(self, single_file_meta):
        """A byte-string length is not numeric."""
        single_file_meta[b"info"][b"length"] = b"1000"
        assert _field_path(single_file_meta) == "info.length"

    def test_missing_file_path_reports_index(self, multi_file_meta):
        """The failing files entry is named by index."""
        multi_file_meta[b"info"][b"files"].append({b"length": 5})
        assert _field_path(multi_file_meta) == "info.files[2].path"

    def test_path_utf8_variant_accepted(self, multi_file_meta):
        """``path.utf-8`` alone satisfies the path requirement."""
        entry = multi_file_meta[b"info"][b"files"][0]
        entry[b"path.utf-8"] = entry.pop(b"path")
        TorrentValidator.validate(multi_file_meta)

    def test_files_entry_not_a_dict(self, multi_file_meta):
        """A files entry that is not a dictionary is reported by index."""
        multi_file_meta[b"info"][b"files"][1] = b"f2"
        assert _field_path(multi_file_meta) == "info.files[1]"

    def test_first_failure_wins(self):
        """Checks run in order and stop at the first failure."""
        assert _field_path({b"info": {b"pieces": b""}}) == "info.name"

    def test_str_keys_accepted(self):
        """Hand-built dictionaries with str keys validate too."""
        TorrentValidator.validate(
            {
                "info": {
                    "name": "a.txt",
                    "piece length": 16384,
                    "pieces": bytes(20),
                    "length": 1000,
                }
            }
        )

    def test_error_hierarchy_and_message(self, single_file_meta):
        """Validation errors are torrent errors with a readable message."""
        del single_file_meta[b"info"][b"pieces"]
        with pytest.raises(TorrentError, match="missing required field: info.pieces"):
            TorrentValidator.validate(single_file_meta)
