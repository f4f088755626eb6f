"""Offloading of blocking parse and serialize work."""

from __future__ import annotations

from btmeta.executor.offload import (
    OffloadExecutor,
    get_offload_executor,
    shutdown_offload_executor,
)

__all__ = [
    "OffloadExecutor",
    "get_offload_executor",
    "shutdown_offload_executor",
]
