"""
ppbridge - Offload Bridge

Runs blocking work on a WorkerPool and hands the single result back to the
awaiting asyncio task.

Each request owns one ``concurrent.futures.Future``: the worker completes it
exactly once and a second completion is refused by the future itself. The
event loop side suspends on an asyncio wrapper of that future, which is the
only point where the two execution domains meet.

Cancellation: when the awaiting task is cancelled the request is cancelled in
the pool as well. Work that is still queued is dropped; work that already
started runs to completion and its result is discarded.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import BrokenExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from loguru import logger

from ppbridge.offload.pool import WorkerPool

T = TypeVar("T")


class OffloadError(Exception):
    """Base class for requests that ended without a worker result."""


class OffloadCancelled(OffloadError):
    """The work item was cancelled before producing a result."""


class OffloadChannelClosed(OffloadError):
    """The pool closed the request without sending a result."""


class OffloadStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    CLOSED = "closed"


@dataclass(frozen=True)
class OffloadResult(Generic[T]):
    """
    Outcome of one offloaded request.

    ``FAILED`` means the worker ran and raised (``error`` holds the exception);
    ``CANCELLED`` and ``CLOSED`` mean no worker result exists at all.
    """

    status: OffloadStatus
    value: Optional[T] = None
    error: Optional[BaseException] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is OffloadStatus.COMPLETED

    def unwrap(self) -> T:
        """
        Return the worker's value or raise.

        Raises:
            Exception: The worker's own exception for ``FAILED``
            OffloadCancelled: For ``CANCELLED``
            OffloadChannelClosed: For ``CLOSED``
        """
        if self.status is OffloadStatus.COMPLETED:
            return self.value  # type: ignore[return-value]
        if self.status is OffloadStatus.FAILED:
            raise self.error  # type: ignore[misc]
        if self.status is OffloadStatus.CANCELLED:
            raise OffloadCancelled("work item was cancelled before it produced a result")
        raise OffloadChannelClosed(
            f"worker pool closed without a result: {self.error}"
        ) from self.error


class OffloadBridge:
    """Submit blocking callables to a WorkerPool from async code."""

    def __init__(self, pool: WorkerPool, name: str = "offload") -> None:
        self.pool = pool
        self.name = name
        self.in_flight: int = 0
        self.abandoned: int = 0
        self.counts: Dict[str, int] = {status.value: 0 for status in OffloadStatus}
        self.submitted: int = 0

    async def submit(self, fn: Callable[..., T], *args: Any) -> OffloadResult[T]:
        """
        Run ``fn(*args)`` on the pool and wait for its single result.

        Never raises for worker-side failures; inspect the returned
        :class:`OffloadResult` or call ``unwrap()``. Cancelling the awaiting
        task propagates ``asyncio.CancelledError`` as usual.
        """
        self.submitted += 1
        started = time.monotonic()

        try:
            future = self.pool.submit(fn, *args)
        except RuntimeError as exc:
            logger.warning(f"[Offload] {self.name}: pool refused work: {exc}")
            return self._finish(OffloadResult(OffloadStatus.CLOSED, error=exc))

        self.in_flight += 1
        try:
            value = await asyncio.wrap_future(future)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                self.abandoned += 1
                if not future.cancel():
                    logger.debug(
                        f"[Offload] {self.name}: caller cancelled while work was running; "
                        "result will be discarded"
                    )
                raise
            return self._finish(
                OffloadResult(OffloadStatus.CANCELLED, elapsed=time.monotonic() - started)
            )
        except BrokenExecutor as exc:
            logger.error(f"[Offload] {self.name}: worker pool broke: {exc}")
            return self._finish(
                OffloadResult(OffloadStatus.CLOSED, error=exc, elapsed=time.monotonic() - started)
            )
        except Exception as exc:  # noqa: BLE001
            return self._finish(
                OffloadResult(OffloadStatus.FAILED, error=exc, elapsed=time.monotonic() - started)
            )
        finally:
            self.in_flight -= 1

        return self._finish(
            OffloadResult(OffloadStatus.COMPLETED, value=value, elapsed=time.monotonic() - started)
        )

    async def run(self, fn: Callable[..., T], *args: Any) -> T:
        """Shorthand for ``(await submit(fn, *args)).unwrap()``."""
        result = await self.submit(fn, *args)
        return result.unwrap()

    def get_status(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "submitted": self.submitted,
            "in_flight": self.in_flight,
            "abandoned": self.abandoned,
            **self.counts,
            "pool": self.pool.get_status(),
        }

    def _finish(self, result: OffloadResult[T]) -> OffloadResult[T]:
        self.counts[result.status.value] += 1
        if result.status is OffloadStatus.FAILED:
            logger.debug(
                f"[Offload] {self.name}: work failed with {type(result.error).__name__}: {result.error}"
            )
        return result
