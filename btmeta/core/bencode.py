"""Bencode codec adapter.

The wire grammar itself is handled by :mod:`bencodepy`; this module narrows
its failure modes onto the btmeta exception hierarchy, rejects trailing data
after the top-level value, and orders dictionary keys before encoding so the
output is canonical.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import bencodepy
from bencodepy.decoder import Decoder

from btmeta.utils.exceptions import BencodeDecodeError, BencodeEncodeError


def decode(data: bytes) -> Any:
    """Decode bencoded bytes into dict/list/int/bytes values.

    Dictionary keys and strings come back as ``bytes``.

    Raises:
        BencodeDecodeError: If ``data`` is not well-formed bencode or has
            bytes left over after the top-level value

    """
    raw = bytes(data)
    try:
        decoder = Decoder(raw)
        value = decoder.decode()
    except bencodepy.DecodingError as e:
        msg = f"Invalid bencode data: {e}"
        raise BencodeDecodeError(msg) from e
    except Exception as e:
        # bencodepy lets some malformed inputs escape as builtin errors
        msg = f"Invalid bencode data: {e}"
        raise BencodeDecodeError(msg) from e
    if decoder.idx != len(raw):
        msg = f"Invalid bencode data: {len(raw) - decoder.idx} trailing byte(s)"
        raise BencodeDecodeError(msg, {"offset": decoder.idx})
    return value


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def _canonical(value: Any) -> Any:
    """Rebuild dictionaries with keys sorted as raw byte strings."""
    if isinstance(value, Mapping):
        return {
            key: _canonical(item)
            for key, item in sorted(value.items(), key=lambda kv: _key_bytes(kv[0]))
        }
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    return value


def encode(value: Any) -> bytes:
    """Encode a value tree into canonical bencoded bytes.

    ``str`` values are written as UTF-8 byte strings and dictionary keys are
    emitted sorted by their raw bytes, whatever the insertion order.

    Raises:
        BencodeEncodeError: If the tree holds an unsupported type

    """
    try:
        return bencodepy.encode(_canonical(value))
    except Exception as e:
        msg = f"Cannot bencode value: {e}"
        raise BencodeEncodeError(msg) from e


__all__ = ["decode", "encode"]
