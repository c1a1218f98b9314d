"""Worker pool handle for CPU-bound work."""

from __future__ import annotations

import os
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from loguru import logger

POOL_KINDS = ("process", "thread")


def default_max_workers() -> int:
    return max(1, os.cpu_count() or 1)


class WorkerPool:
    """
    Explicitly constructed pool that blocking computations are sent to.

    Process workers sidestep the GIL for CPU-bound work; ``kind="thread"``
    suits work items that release the GIL themselves or cannot be pickled.
    Work submitted to a process pool must be picklable (module level
    callables and plain data).
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        kind: str = "process",
        name: str = "ppbridge",
    ) -> None:
        if kind not in POOL_KINDS:
            raise ValueError(f"unknown pool kind {kind!r}; expected one of {POOL_KINDS}")

        cpu_bound = default_max_workers()
        if max_workers is None:
            max_workers = cpu_bound
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.kind = kind
        self.name = name
        self.max_workers = min(max_workers, cpu_bound) if kind == "process" else max_workers
        self._closed = False
        self._executor: Executor
        if kind == "process":
            self._executor = ProcessPoolExecutor(max_workers=self.max_workers)
        else:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix=name
            )

        logger.debug(f"[Pool] {name}: started {self.max_workers} {kind} workers")

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        """Schedule ``fn(*args)``; raises RuntimeError once the pool is shut down."""
        return self._executor.submit(fn, *args)

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)
        logger.debug(f"[Pool] {self.name}: shut down (cancel_futures={cancel_futures})")

    def get_status(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "max_workers": self.max_workers,
            "closed": self._closed,
        }

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True, cancel_futures=exc_type is not None)
