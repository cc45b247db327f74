"""Lazy traversal of paginated collections.

Architecture:
    A collection endpoint answers with one page of items plus an opaque
    continuation link (``nextHref``). The traversal fetches the first page,
    hands items to the consumer one at a time and only requests the next
    page once the current one is exhausted. At most one page is buffered.

    The traversal is forward-only and single-pass: continuation links are
    single-use forward pointers, so restarting means building a new
    traversal from the query. Sharing one traversal between concurrent
    consumers is not supported.

    ``lazy_paging`` serves the cooperative model (async iterator),
    ``lazy_paging_blocking`` the thread model (plain generator); both run
    the same algorithm.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from time import perf_counter
from typing import Generic, TypeVar

from ..core.exceptions import ConfigurationError, ProtocolInconsistency
from .telemetry import log_page_fetched, log_traversal_complete

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a collection.

    Attributes:
        items: Items in server order
        next_href: Continuation link, None on the last page
    """

    items: tuple[T, ...]
    next_href: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


def _check_continuation(previous: str | None, current: str | None) -> None:
    if current is not None and current == previous:
        raise ProtocolInconsistency(f"Server returned the same continuation link twice: {current}")


async def lazy_paging(
    fetch_first: Callable[[], Awaitable[Page[T]]],
    fetch_next: Callable[[str], Awaitable[Page[T]]],
    *,
    log: logging.Logger | None = None,
) -> AsyncIterator[T]:
    """Yield every item of a paginated collection, fetching pages on demand.

    Args:
        fetch_first: Issues the initial query and decodes the first page
        fetch_next: Follows a continuation link and decodes the next page
        log: Optional diagnostics sink

    Yields:
        Items in server order, one page's tail before the next page's head
    """
    pages = 0
    items = 0
    previous_href: str | None = None

    start = perf_counter()
    page = await fetch_first()
    while True:
        log_page_fetched(
            page_index=pages,
            items=len(page.items),
            has_next=page.next_href is not None,
            latency_ms=(perf_counter() - start) * 1000.0,
            log=log,
        )
        pages += 1
        for item in page.items:
            items += 1
            yield item

        if page.next_href is None:
            break
        _check_continuation(previous_href, page.next_href)
        previous_href = page.next_href
        start = perf_counter()
        page = await fetch_next(page.next_href)

    log_traversal_complete(pages=pages, items=items, log=log)


def lazy_paging_blocking(
    fetch_first: Callable[[], Page[T]],
    fetch_next: Callable[[str], Page[T]],
    *,
    log: logging.Logger | None = None,
) -> Iterator[T]:
    """Thread-model counterpart of :func:`lazy_paging`."""
    pages = 0
    items = 0
    previous_href: str | None = None

    start = perf_counter()
    page = fetch_first()
    while True:
        log_page_fetched(
            page_index=pages,
            items=len(page.items),
            has_next=page.next_href is not None,
            latency_ms=(perf_counter() - start) * 1000.0,
            log=log,
        )
        pages += 1
        for item in page.items:
            items += 1
            yield item

        if page.next_href is None:
            break
        _check_continuation(previous_href, page.next_href)
        previous_href = page.next_href
        start = perf_counter()
        page = fetch_next(page.next_href)

    log_traversal_complete(pages=pages, items=items, log=log)


def _validate_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise ConfigurationError(f"limit must be positive, got {limit}")


async def take(source: AsyncIterator[T], limit: int | None) -> AsyncIterator[T]:
    """Truncate ``source`` after ``limit`` items.

    Once the limit is reached the source is closed without being pulled
    again, so no further page is requested.
    """
    _validate_limit(limit)
    count = 0
    try:
        async for item in source:
            yield item
            count += 1
            if limit is not None and count >= limit:
                break
    finally:
        aclose = getattr(source, "aclose", None)
        if aclose is not None:
            await aclose()


def take_blocking(source: Iterator[T], limit: int | None) -> Iterator[T]:
    """Thread-model counterpart of :func:`take`."""
    _validate_limit(limit)
    count = 0
    try:
        for item in source:
            yield item
            count += 1
            if limit is not None and count >= limit:
                break
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            close()


async def first_or_none(source: AsyncIterator[T]) -> T | None:
    """Return the first item of ``source`` or None, then close it."""
    try:
        async for item in source:
            return item
        return None
    finally:
        aclose = getattr(source, "aclose", None)
        if aclose is not None:
            await aclose()
