"""Offload executor for blocking metainfo work.

Hashing, codec work and file I/O run on a worker thread so the caller's
event loop stays responsive. Each submission is one task with one result or
one exception; there is no batching and no cancellation.
"""

from __future__ import annotations

import asyncio
import copy
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from btmeta.config.config import get_executor_config
from btmeta.models import ExecutorConfig
from btmeta.utils.logging_config import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class OffloadExecutor:
    """Runs single tasks on a private thread pool.

    Arguments are deep-copied before they cross into the worker, so the task
    never shares mutable state with the submitting side.
    """

    def __init__(self, config: ExecutorConfig | None = None):
        """Initialize the executor.

        Args:
            config: Pool settings; defaults to the global configuration

        """
        self.config = config or get_executor_config()
        self._pool: ThreadPoolExecutor | None = None

    def _get_pool(self) -> ThreadPoolExecutor:
        if self._pool is None:
            self._pool = ThreadPoolExecutor(
                max_workers=self.config.max_workers,
                thread_name_prefix=self.config.thread_name_prefix,
            )
        return self._pool

    async def submit(self, task: Callable[..., T], *args: Any) -> T:
        """Run ``task(*args)`` on a worker thread and return its result.

        Exceptions raised by the task propagate to the caller unchanged.
        """
        payload = copy.deepcopy(args)
        loop = asyncio.get_running_loop()
        logger.debug("Submitting %s to offload pool", getattr(task, "__name__", task))
        return await loop.run_in_executor(self._get_pool(), task, *payload)

    def shutdown(self, wait: bool = True) -> None:
        """Release the worker threads."""
        if self._pool is not None:
            self._pool.shutdown(wait=wait)
            self._pool = None

    async def __aenter__(self) -> OffloadExecutor:
        """Enter async context."""
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        """Shut the pool down on context exit."""
        self.shutdown(wait=True)


_default_executor: OffloadExecutor | None = None


def get_offload_executor() -> OffloadExecutor:
    """Get the process-wide offload executor, creating it on first use."""
    global _default_executor
    if _default_executor is None:
        _default_executor = OffloadExecutor()
    return _default_executor


def shutdown_offload_executor(wait: bool = True) -> None:
    """Shut down the process-wide offload executor, if one was created."""
    global _default_executor
    if _default_executor is not None:
        _default_executor.shutdown(wait=wait)
        _default_executor = None
