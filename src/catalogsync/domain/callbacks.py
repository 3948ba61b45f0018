"""Caller-facing notification hooks and run summaries."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .model import ReconcileResult, RemoteEntity, SyncOperation


def _ignore(*_args: object) -> None:
    return None


@dataclass(frozen=True, slots=True)
class SyncCallbacks:
    """Handlers invoked during one sync run. Every handler defaults to a no-op."""

    on_fetched_items: Callable[[Sequence[RemoteEntity]], None] = _ignore
    on_progress: Callable[[RemoteEntity, ReconcileResult], None] = _ignore
    on_error: Callable[[Exception], None] = _ignore
    on_complete: Callable[[], None] = _ignore


@dataclass(slots=True)
class SyncReport:
    """Outcome of a sync run."""

    fetched: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    error: Exception | None = None

    @property
    def completed(self) -> bool:
        return self.error is None

    @property
    def processed(self) -> int:
        return self.created + self.updated + self.skipped

    def record(self, result: ReconcileResult) -> None:
        if result.operation is SyncOperation.CREATED:
            self.created += 1
        elif result.operation is SyncOperation.UPDATED:
            self.updated += 1
        else:
            self.skipped += 1
