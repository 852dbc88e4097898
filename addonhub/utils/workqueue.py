"""Deduplicating reconcile queue drained by a pool of asyncio workers.

A key is held in the queue at most once. A key requested while a worker is
processing it is marked dirty and queued again once that run finishes, so
every request made after a sync started is observed by a later sync and no
key is ever processed by two workers at the same time.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional, Set
import kopf
from addonhub.sensors import OperatorSensor
from addonhub.types.settings import (
    RECONCILE_WORKERS,
    RETRY_BASE_DELAY_SECONDS,
    RETRY_MAX_DELAY_SECONDS,
)

logger = logging.getLogger(__name__)

SyncFunc = Callable[[str], Awaitable[None]]


class ReconcileQueue:
    def __init__(
        self,
        sync: SyncFunc,
        workers: int = RECONCILE_WORKERS,
        base_delay: float = RETRY_BASE_DELAY_SECONDS,
        max_delay: float = RETRY_MAX_DELAY_SECONDS,
        sensor: Optional[OperatorSensor] = None,
    ) -> None:
        self._sync = sync
        self.workers = workers
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.sensor = sensor
        self._queue: asyncio.Queue = None
        # key -> time it was queued
        self._queued: Dict[str, float] = {}
        self._processing: Set[str] = set()
        self._dirty: Set[str] = set()
        self._failures: Dict[str, int] = {}
        self._delayed: Dict[str, asyncio.TimerHandle] = {}
        self._tasks: List[asyncio.Task] = []

    @property
    def depth(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def __contains__(self, key: str) -> bool:
        return key in self._queued or key in self._dirty

    def add(self, key: str) -> None:
        """Request reconciliation of `key`.

        Enqueues the key only if it's not already waiting in the queue.
        """
        if key in self._processing:
            self._dirty.add(key)
            return
        if key in self._queued:
            return
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._queued[key] = time.monotonic()
        self._queue.put_nowait(key)
        if self.sensor:
            self.sensor.on_reconcile_queued(key, self._queue.qsize())

    def add_after(self, key: str, delay: float) -> None:
        """Request reconciliation of `key` once `delay` seconds have passed."""
        handle = self._delayed.pop(key, None)
        if handle is not None:
            handle.cancel()
        loop = asyncio.get_running_loop()
        self._delayed[key] = loop.call_later(delay, self._add_delayed, key)

    def _add_delayed(self, key: str) -> None:
        self._delayed.pop(key, None)
        self.add(key)

    def start(self) -> None:
        if self._queue is None:
            self._queue = asyncio.Queue()
        for i in range(self.workers):
            self._tasks.append(
                asyncio.create_task(self._worker(), name=f"reconcile-worker-{i}")
            )
        logger.info(f"Started {self.workers} reconcile workers")

    async def stop(self) -> None:
        for handle in self._delayed.values():
            handle.cancel()
        self._delayed.clear()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        logger.info("Stopped reconcile workers")

    async def join(self) -> None:
        """Wait until every queued key, including requeued dirty keys, was processed."""
        if self._queue is not None:
            await self._queue.join()

    async def _worker(self) -> None:
        while True:
            key = await self._queue.get()
            queued_at = self._queued.pop(key, time.monotonic())
            self._processing.add(key)
            if self.sensor:
                self.sensor.on_reconcile_dequeued(
                    key, time.monotonic() - queued_at, self._queue.qsize()
                )
            try:
                await self._process(key)
            finally:
                self._processing.discard(key)
                # Allow this key to be requeued after processing
                if key in self._dirty:
                    self._dirty.discard(key)
                    self.add(key)
                self._queue.task_done()

    async def _process(self, key: str) -> None:
        start_time = time.monotonic()
        try:
            await self._sync(key)
        except kopf.TemporaryError as e:
            delay = e.delay if e.delay is not None else self.base_delay
            logger.warning(f"Reconciliation of {key} will be retried in {delay}s: {e}")
            self.add_after(key, delay)
        except kopf.PermanentError as e:
            self._failures.pop(key, None)
            logger.error(f"Reconciliation of {key} failed permanently: {e}")
        except Exception as e:
            failures = self._failures.get(key, 0) + 1
            self._failures[key] = failures
            delay = min(self.base_delay * 2 ** (failures - 1), self.max_delay)
            logger.error(f"Error reconciling {key}, retry {failures} in {delay}s: {e}")
            logger.exception(e)
            self.add_after(key, delay)
        else:
            self._failures.pop(key, None)
            logger.debug(
                f"Reconciliation for {key} completed in {time.monotonic() - start_time:.2f} seconds"
            )
