"""Cursor-following pagination over a paged remote listing."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .errors import RemoteFetchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Sequence

    from .model import RemoteEntity
    from .ports.fetching import PageFetcher

log = getLogger(__name__)

type PageCallback = Callable[[Sequence[RemoteEntity]], None]


async def iter_entities(
    fetch_page: PageFetcher,
    *,
    on_page: PageCallback | None = None,
) -> AsyncIterator[RemoteEntity]:
    """Yield every entity across all pages, in fetch order.

    Pages are requested lazily: the next page is only fetched once the consumer
    has pulled every entity of the current one, so closing the generator stops
    pagination. ``on_page`` sees each page's entities as soon as the page arrives.
    """

    cursor: str | None = None
    page_number = 0
    while True:
        page = await fetch_page(cursor)
        page_number += 1
        log.debug(
            f"Fetched page {page_number}: {len(page.entities)} entities, "
            f"has_next_page={page.has_next_page}"
        )
        if on_page is not None:
            on_page(page.entities)

        for entity in page.entities:
            yield entity

        if not page.has_next_page:
            return
        if not page.end_cursor:
            raise RemoteFetchError(
                f"Page {page_number} reported more results but carried no cursor"
            )
        cursor = page.end_cursor


async def collect_entities(
    fetch_page: PageFetcher,
    *,
    on_page: PageCallback | None = None,
) -> list[RemoteEntity]:
    """Fetch every page and return the flattened entity list."""

    return [entity async for entity in iter_entities(fetch_page, on_page=on_page)]
