"""Bulk and single-handle sync runs over the reconciler."""

from __future__ import annotations

import asyncio
from contextlib import aclosing
from logging import getLogger
from typing import TYPE_CHECKING

from .callbacks import SyncCallbacks, SyncReport
from .errors import EntityNotFoundError
from .pagination import iter_entities

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from .model import RemoteEntity
    from .ports.fetching import EntityLookup, PageFetcher
    from .reconciliation import Reconciler

log = getLogger(__name__)


class SyncOrchestrator:
    """Feed entities into a :class:`Reconciler` and report progress to the caller."""

    def __init__(self, reconciler: Reconciler, *, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._reconciler = reconciler
        self._concurrency = concurrency

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def sync_many(
        self,
        fetch_page: PageFetcher,
        callbacks: SyncCallbacks | None = None,
        *,
        label: str = "entities",
    ) -> SyncReport:
        """Page through the source and reconcile every entity.

        At most ``concurrency`` reconciliations run at once and they are
        dispatched in fetch order. The first failure stops pagination and
        dispatch, lets in-flight reconciliations finish, and is reported once
        through ``on_error``; ``on_complete`` only fires after a clean run.
        """

        callbacks = callbacks or SyncCallbacks()
        report = SyncReport()

        def on_page(entities: Sequence[RemoteEntity]) -> None:
            report.fetched += len(entities)
            callbacks.on_fetched_items(entities)

        log.info(f"Starting sync of {label} with concurrency={self._concurrency}")
        run = _BulkRun(
            reconciler=self._reconciler,
            entities=iter_entities(fetch_page, on_page=on_page),
            callbacks=callbacks,
            concurrency=self._concurrency,
            report=report,
        )
        await run.execute()

        if report.error is not None:
            log.error(
                f"Sync of {label} aborted after {report.processed} of {report.fetched} "
                f"fetched: {report.error}"
            )
            callbacks.on_error(report.error)
            return report

        log.info(
            f"Finished sync of {label}: fetched={report.fetched}, created={report.created}, "
            f"updated={report.updated}, skipped={report.skipped}"
        )
        callbacks.on_complete()
        return report

    async def sync_one(
        self,
        lookup: EntityLookup,
        handle: str,
        callbacks: SyncCallbacks | None = None,
        *,
        label: str = "entity",
    ) -> SyncReport:
        """Fetch one entity by handle and reconcile it, without pagination."""

        callbacks = callbacks or SyncCallbacks()
        report = SyncReport()
        try:
            entity = await lookup(handle)
            if entity is None:
                raise EntityNotFoundError(label, handle)
            report.fetched = 1
            result = await self._reconciler.reconcile(entity)
            report.record(result)
            callbacks.on_progress(entity, result)
        except Exception as exc:  # noqa: BLE001
            report.error = exc
            log.error(f"Sync of {label} {handle!r} failed: {exc}")
            callbacks.on_error(exc)
        else:
            log.info(f"Synced {label} {handle!r}: {result.operation}")
            callbacks.on_complete()
        return report


class _BulkRun:
    """State for one bulk invocation: a producer, a bounded queue and a worker pool."""

    def __init__(
        self,
        *,
        reconciler: Reconciler,
        entities: AsyncIterator[RemoteEntity],
        callbacks: SyncCallbacks,
        concurrency: int,
        report: SyncReport,
    ) -> None:
        self._reconciler = reconciler
        self._entities = entities
        self._callbacks = callbacks
        self._concurrency = concurrency
        self._report = report
        self._queue: asyncio.Queue[RemoteEntity] = asyncio.Queue(maxsize=concurrency)
        self._producer: asyncio.Task[None] | None = None

    async def execute(self) -> None:
        producer = asyncio.create_task(self._produce())
        self._producer = producer
        workers = [asyncio.create_task(self._work()) for _ in range(self._concurrency)]
        try:
            await asyncio.wait({producer})
            await self._queue.join()
        finally:
            for task in (producer, *workers):
                task.cancel()
            await asyncio.gather(producer, *workers, return_exceptions=True)

    async def _produce(self) -> None:
        try:
            async with aclosing(self._entities) as entities:
                async for entity in entities:
                    if self._report.error is not None:
                        return
                    await self._queue.put(entity)
        except Exception as exc:  # noqa: BLE001
            self._fail(exc)

    async def _work(self) -> None:
        while True:
            entity = await self._queue.get()
            try:
                # Entities still queued after a failure are drained, not dispatched.
                if self._report.error is None:
                    result = await self._reconciler.reconcile(entity)
                    self._report.record(result)
                    self._callbacks.on_progress(entity, result)
            except Exception as exc:  # noqa: BLE001
                self._fail(exc)
            finally:
                self._queue.task_done()

    def _fail(self, exc: Exception) -> None:
        if self._report.error is not None:
            return
        self._report.error = exc
        producer = self._producer
        if producer is not None and producer is not asyncio.current_task():
            producer.cancel()
