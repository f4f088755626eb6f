"""Normalizing decoders for individual metainfo fields.

Metainfo in the wild mixes several encodings for the same logical value:
UTF-8 byte strings, legacy byte strings in unknown code pages, plain
strings from hand-built dictionaries, and raw byte arrays. Each helper here
turns one of those shapes into a single canonical Python value so the
parser never branches on representation itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError as PydanticValidationError

from btmeta.models import DHTNode


def get_field(mapping: Mapping[Any, Any], key: str) -> Any:
    """Look up ``key`` whether the dictionary uses ``bytes`` or ``str`` keys."""
    value = mapping.get(key.encode("utf-8"))
    if value is None:
        value = mapping.get(key)
    return value


def has_field(mapping: Mapping[Any, Any], key: str) -> bool:
    """Return True if ``key`` is present with a non-null value."""
    return get_field(mapping, key) is not None


def decode_bytes(raw: bytes | bytearray) -> str:
    """Decode UTF-8, falling back to one character per byte."""
    try:
        return bytes(raw).decode("utf-8")
    except UnicodeDecodeError:
        return bytes(raw).decode("latin-1")


def decode_text(value: Any) -> str | None:
    """Normalize a byte string or plain string field to ``str``.

    Returns None for any other type.
    """
    if isinstance(value, (bytes, bytearray)):
        return decode_bytes(value)
    if isinstance(value, str):
        return value
    return None


def decode_name(info: Mapping[Any, Any]) -> str:
    """Resolve the torrent name, preferring ``name.utf-8`` over ``name``.

    A ``name.utf-8`` value that is not text falls through to ``name``.
    """
    name = decode_text(get_field(info, "name.utf-8"))
    if name is None:
        name = decode_text(get_field(info, "name"))
    return name or ""


def decode_segment(value: Any) -> str | None:
    """Normalize one path segment.

    Segments may be byte strings, lists of byte values or plain strings.
    Anything else (including null) yields None.
    """
    if isinstance(value, list):
        try:
            return decode_bytes(bytes(value))
        except (TypeError, ValueError):
            return None
    return decode_text(value)


def decode_path(entry: Mapping[Any, Any]) -> list[str | None]:
    """Return the segment list of a files entry, ``path.utf-8`` first.

    A ``path.utf-8`` value that is not a list falls through to ``path``.
    """
    raw = get_field(entry, "path.utf-8")
    if not isinstance(raw, list):
        raw = get_field(entry, "path")
    if not isinstance(raw, list):
        return []
    return [decode_segment(segment) for segment in raw]


def decode_uri(value: Any) -> str:
    """Decode and parse a tracker or web seed URL.

    Raises:
        ValueError: If the value is not text or does not parse as a URI

    """
    text = decode_text(value)
    if not text:
        msg = f"Not a URL: {value!r}"
        raise ValueError(msg)
    parts = urlsplit(text)
    # Port is only validated on access
    _ = parts.port
    return parts.geturl()


def decode_node(entry: Any) -> DHTNode:
    """Decode a ``[host, port]`` DHT node hint.

    Raises:
        ValueError: If the entry is not a two-element list with a non-null
            host and an integer port

    """
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        msg = f"DHT node must be [host, port], got {entry!r}"
        raise ValueError(msg)
    raw_host, port = entry
    host = decode_text(raw_host)
    if host is None:
        msg = f"Invalid DHT node host: {raw_host!r}"
        raise ValueError(msg)
    if isinstance(port, bool) or not isinstance(port, int):
        msg = f"Invalid DHT node port: {port!r}"
        raise ValueError(msg)
    try:
        return DHTNode(host=host, port=port)
    except PydanticValidationError as e:
        msg = f"Invalid DHT node: {e}"
        raise ValueError(msg) from e
