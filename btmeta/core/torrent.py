"""Torrent metainfo model.

A :class:`Torrent` keeps the decoded ``info`` dictionary exactly as it was
read alongside the typed view built from it. The info-hash is computed from
that dictionary once, at construction, and the serializer writes the same
dictionary back out, so the hash stays verifiable after a round trip even
though some typed fields are not written back.

Editing the typed collections (files, pieces, trackers, ...) never touches
``info``; :meth:`Torrent.refresh_layout` re-derives the size fields after
file edits.
"""

from __future__ import annotations

import copy
import hashlib
import os
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from btmeta.core.bencode import decode, encode
from btmeta.utils.exceptions import (
    ArgumentError,
    FileSystemError,
    TorrentExistsError,
)
from btmeta.utils.logging_config import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from btmeta.executor.offload import OffloadExecutor
    from btmeta.models import DHTNode, TorrentFile

logger = get_logger(__name__)


class Torrent:
    """Parsed torrent metainfo."""

    def __init__(
        self,
        info: Mapping[Any, Any],
        name: str,
        length: int = 0,
        *,
        created_by: str | None = None,
        creation_date: datetime | None = None,
        file_path: str | Path | None = None,
    ) -> None:
        """Create a model around a decoded info dictionary.

        Args:
            info: Decoded ``info`` dictionary; a private copy is kept
            name: Display name of the torrent
            length: Total content length in bytes
            created_by: Name of the creating program
            creation_date: Creation time
            file_path: File the metainfo was read from

        """
        self._info = copy.deepcopy(dict(info))
        digest = hashlib.sha1(encode(self._info))  # nosec B324 - SHA-1 required by BEP 3
        self._info_hash = digest.hexdigest()
        self._info_hash_bytes = digest.digest()
        self._name = name

        self.length = length
        self.piece_length: int | None = None
        self.last_piece_length: int | None = None

        self.private: bool | None = None
        self.creation_date = creation_date
        self.created_by = created_by
        self.comment: str | None = None
        self.encoding: str | None = None
        self.file_path = Path(file_path) if file_path is not None else None

        self._announces: set[str] = set()
        self._url_list: set[str] = set()
        self._files: list[TorrentFile] = []
        self._pieces: list[str] = []
        self.nodes: list[DHTNode] = []

    @property
    def info(self) -> dict[Any, Any]:
        """Copy of the original info dictionary the hash was computed over."""
        return copy.deepcopy(self._info)

    @property
    def name(self) -> str:
        """Torrent display name."""
        return self._name

    @property
    def info_hash(self) -> str:
        """SHA-1 of the bencoded info dictionary, lowercase hex."""
        return self._info_hash

    @property
    def info_hash_bytes(self) -> bytes:
        """SHA-1 of the bencoded info dictionary, raw 20 bytes."""
        return self._info_hash_bytes

    @property
    def announces(self) -> set[str]:
        """Tracker URLs."""
        return self._announces

    @property
    def url_list(self) -> set[str]:
        """Web seed URLs (BEP 19)."""
        return self._url_list

    @property
    def files(self) -> list[TorrentFile]:
        """Files in content order."""
        return self._files

    @property
    def pieces(self) -> list[str]:
        """Piece hashes as hex strings."""
        return self._pieces

    def add_piece(self, piece: str) -> None:
        self._pieces.append(piece)

    def remove_piece(self, piece: str) -> bool:
        try:
            self._pieces.remove(piece)
        except ValueError:
            return False
        return True

    def add_announce(self, announce: str) -> bool:
        """Add a tracker URL; return True if it was not present yet."""
        if announce in self._announces:
            return False
        self._announces.add(announce)
        return True

    def remove_announce(self, announce: str) -> bool:
        if announce not in self._announces:
            return False
        self._announces.discard(announce)
        return True

    def add_url(self, url: str) -> bool:
        """Add a web seed URL; return True if it was not present yet."""
        if url in self._url_list:
            return False
        self._url_list.add(url)
        return True

    def remove_url(self, url: str) -> bool:
        if url not in self._url_list:
            return False
        self._url_list.discard(url)
        return True

    def add_file(self, file: TorrentFile) -> None:
        self._files.append(file)

    def remove_file(self, file: TorrentFile) -> bool:
        try:
            self._files.remove(file)
        except ValueError:
            return False
        return True

    def refresh_layout(self) -> None:
        """Re-derive offsets, ``length`` and ``last_piece_length`` from ``files``.

        The info-hash is unaffected: it only depends on ``info``.
        """
        offset = 0
        refreshed = []
        for file in self._files:
            refreshed.append(file.model_copy(update={"offset": offset}))
            offset += file.length
        self._files[:] = refreshed
        self.length = offset
        if self.piece_length:
            self.last_piece_length = compute_last_piece_length(
                self.length, self.piece_length
            )

    def __str__(self) -> str:
        """String representation of the torrent."""
        return f"Torrent Model{{name: {self.name}, info_hash: {self.info_hash}}}"

    def __repr__(self) -> str:
        """Debug representation of the torrent."""
        return f"Torrent(name={self.name!r}, info_hash={self.info_hash!r})"

    @classmethod
    def from_bytes(cls, data: bytes) -> Torrent:
        """Decode and parse metainfo bytes on the calling thread."""
        return _parse_bytes_task(bytes(data))

    def to_bytes_sync(self) -> bytes:
        """Serialize to bencoded bytes on the calling thread."""
        from btmeta.core.serializer import TorrentSerializer

        return TorrentSerializer.to_bytes(self)

    @classmethod
    async def parse_from_file(
        cls,
        file_path: str | os.PathLike[str],
        executor: OffloadExecutor | None = None,
    ) -> Torrent:
        """Read and parse a .torrent file off the event loop.

        Raises:
            FileSystemError: If the file cannot be read
            BencodeDecodeError: If the content is not bencode
            TorrentValidationError: If a required field is missing

        """
        path = os.fspath(file_path)
        torrent = await _resolve_executor(executor).submit(_parse_file_task, path)
        torrent.file_path = Path(path)
        return torrent

    @classmethod
    async def parse_from_bytes(
        cls,
        data: bytes | bytearray | memoryview,
        executor: OffloadExecutor | None = None,
    ) -> Torrent:
        """Parse bencoded metainfo bytes off the event loop."""
        return await _resolve_executor(executor).submit(_parse_bytes_task, bytes(data))

    @classmethod
    async def parse(
        cls,
        source: Any,
        executor: OffloadExecutor | None = None,
    ) -> Torrent:
        """Parse from a file path (``str``/``PathLike``) or from bytes.

        Raises:
            ArgumentError: If ``source`` is neither

        """
        if isinstance(source, (str, os.PathLike)):
            return await cls.parse_from_file(source, executor)
        if isinstance(source, (bytes, bytearray, memoryview)):
            return await cls.parse_from_bytes(source, executor)
        msg = (
            "Expected a file path (str or PathLike) or bytes, "
            f"got {type(source).__name__}"
        )
        raise ArgumentError(msg)

    async def to_bytes(self, executor: OffloadExecutor | None = None) -> bytes:
        """Serialize to bencoded bytes off the event loop."""
        from btmeta.core.serializer import TorrentSerializer

        return await _resolve_executor(executor).submit(TorrentSerializer.to_bytes, self)

    async def save_as(
        self,
        path: str | os.PathLike[str] | None,
        force: bool = False,
        executor: OffloadExecutor | None = None,
    ) -> Path:
        """Write the serialized torrent to ``path``.

        Missing parent directories are created. An existing file is only
        replaced when ``force`` is set.

        Raises:
            ArgumentError: If ``path`` is None
            TorrentExistsError: If the file exists and ``force`` is False
            FileSystemError: If the file cannot be written

        """
        if path is None:
            msg = "File path is None"
            raise ArgumentError(msg)
        target = Path(path)
        await _resolve_executor(executor).submit(
            _save_task, self, os.fspath(target), force
        )
        logger.info("Saved torrent %s to %s", self.name, target)
        return target

    async def save(self, executor: OffloadExecutor | None = None) -> Path:
        """Overwrite the file this torrent was parsed from."""
        return await self.save_as(self.file_path, force=True, executor=executor)


def compute_last_piece_length(length: int, piece_length: int) -> int:
    """Size of the final piece; a zero remainder means a full piece."""
    remainder = length % piece_length
    return piece_length if remainder == 0 else remainder


def _resolve_executor(executor: OffloadExecutor | None) -> OffloadExecutor:
    if executor is not None:
        return executor
    from btmeta.executor.offload import get_offload_executor

    return get_offload_executor()


def _parse_bytes_task(data: bytes) -> Torrent:
    from btmeta.core.parser import TorrentParser

    if not data:
        msg = "Torrent file path/contents is empty"
        raise ArgumentError(msg)
    return TorrentParser.parse(decode(data))


def _parse_file_task(path: str) -> Torrent:
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError as e:
        msg = f"Torrent file not found: {path}"
        raise FileSystemError(msg, {"path": path}) from e
    except OSError as e:
        msg = f"Cannot read torrent file {path}: {e}"
        raise FileSystemError(msg, {"path": path}) from e
    return _parse_bytes_task(data)


def _save_task(torrent: Torrent, path: str, force: bool) -> None:
    from btmeta.core.serializer import TorrentSerializer

    target = Path(path)
    if target.exists() and not force:
        msg = f"File already exists: {target}"
        raise TorrentExistsError(msg, {"path": path})
    content = TorrentSerializer.to_bytes(torrent)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as e:
        msg = f"Cannot write torrent file {path}: {e}"
        raise FileSystemError(msg, {"path": path}) from e
