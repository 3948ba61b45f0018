"""Synchronization defaults for catalog sync runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_CONCURRENCY = 25
DEFAULT_PAGE_SIZE = 25
DEFAULT_PACING_DELAY_SECONDS = 0.1


@dataclass(frozen=True, slots=True)
class SyncConfig:
    concurrency: int = DEFAULT_CONCURRENCY
    page_size: int = DEFAULT_PAGE_SIZE
    pacing_delay_seconds: float = DEFAULT_PACING_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ConfigurationError("Sync concurrency must be at least 1")
        if not 1 <= self.page_size <= 250:
            raise ConfigurationError("Sync page size must be between 1 and 250")
        if self.pacing_delay_seconds < 0:
            raise ConfigurationError("Sync pacing delay must be non-negative")


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        concurrency=optional_env_var("CATALOGSYNC_CONCURRENCY", DEFAULT_CONCURRENCY, parse=int),
        page_size=optional_env_var("CATALOGSYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE, parse=int),
        pacing_delay_seconds=optional_env_var(
            "CATALOGSYNC_PACING_DELAY", DEFAULT_PACING_DELAY_SECONDS, parse=float
        ),
    )
