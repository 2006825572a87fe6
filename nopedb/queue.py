from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Job = Callable[[], Awaitable[Any]]


class OperationQueue:
    """
    Runs submitted jobs one at a time, in submission order.

    A single worker task drains a FIFO of (job, future) pairs. Each job's
    outcome is delivered only through its own future, so a failing job never
    stops the jobs queued behind it.

    The worker exits once the FIFO is empty and is restarted on the next
    submit, so the queue is not tied to one event loop for its whole life.
    """

    def __init__(self) -> None:
        self._pending: deque[tuple[Job, asyncio.Future[Any]]] = deque()
        self._worker: asyncio.Task[None] | None = None

    def submit(self, job: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """
        Enqueue job and return a future for its result.

        Must be called from a running event loop. The job is registered
        immediately, so call order is execution order.
        """
        loop = asyncio.get_running_loop()
        if self._worker_is_dead():
            # entries left behind by a loop that can no longer run them
            self._pending = deque(item for item in self._pending if item[1].get_loop() is loop)
            self._worker = None

        fut: asyncio.Future[T] = loop.create_future()
        self._pending.append((job, fut))
        if self._worker is None:
            self._worker = loop.create_task(self._drain())
        return fut

    def reject(self, error: BaseException) -> asyncio.Future[Any]:
        """A future that has already failed with error, without queueing anything."""
        fut: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        fut.set_exception(error)
        return fut

    def _worker_is_dead(self) -> bool:
        if self._worker is None:
            return False
        return self._worker.done() or self._worker.get_loop().is_closed()

    async def _drain(self) -> None:
        fut: asyncio.Future[Any] | None = None
        try:
            while self._pending:
                job, fut = self._pending.popleft()
                if fut.cancelled():
                    continue
                try:
                    result = await job()
                except Exception as e:
                    logger.debug("QUEUE: job failed: %r", e)
                    if not fut.done():
                        fut.set_exception(e)
                else:
                    if not fut.done():
                        fut.set_result(result)
        finally:
            # only reached with work outstanding when the worker itself is cancelled
            if fut is not None and not fut.done():
                fut.cancel()
            while self._pending:
                _, stale = self._pending.popleft()
                if not stale.done():
                    stale.cancel()
            self._worker = None
