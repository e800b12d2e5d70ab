"""
Lazy, restartable pagination over Okta list endpoints.

A page fetcher is any callable taking the continuation URL of the page to
load (None for the first page) and returning a ``PageResponse``. The
iterator walks the pages on demand, following ``Link: <...>; rel="next"``
headers and holding at most one page of items in memory.
"""

from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog

from okta_paging.client.exceptions import NoSuchElementError
from okta_paging.client.link_parser import parse_next_link
from okta_paging.config.logging_config import LoggingContextManager
from okta_paging.models.page import PageResponse

T = TypeVar("T")

PageFetcher = Callable[[str | None], PageResponse[T]]

logger = structlog.get_logger(__name__)


class PagerState(str, Enum):
    """Lifecycle of a paged iterator."""

    NOT_STARTED = "NOT_STARTED"
    HAS_BUFFERED_ITEMS = "HAS_BUFFERED_ITEMS"
    BUFFER_EMPTY_MORE_PAGES = "BUFFER_EMPTY_MORE_PAGES"
    EXHAUSTED = "EXHAUSTED"


class PagedIterator(Generic[T]):
    """
    Single-pass cursor over the items of every page.

    ``has_next()`` may perform I/O: when the buffered page is used up and a
    next link is known, it fetches the following page. Pages that come back
    empty but still carry a next link are skipped. Once the last page has
    been drained the iterator stays exhausted and never fetches again.

    Instances are not thread-safe; obtain one iterator per traversal from
    ``PagedIterable`` instead of sharing one.
    """

    def __init__(self, page_fetcher: PageFetcher[T]) -> None:
        self._page_fetcher = page_fetcher

        self._state = PagerState.NOT_STARTED
        self._buffer: list[T] = []
        self._position = 0
        self._next_pointer: str | None = None

        # Statistics
        self._pages_fetched = 0
        self._items_yielded = 0

    @property
    def state(self) -> PagerState:
        return self._state

    @property
    def next_pointer(self) -> str | None:
        """Continuation URL of the next page to fetch, if any."""
        return self._next_pointer

    def has_next(self) -> bool:
        """
        Report whether another item is available, fetching pages as needed.

        Returns:
            True if ``take_next()`` will return an item
        """
        while True:
            if self._state is PagerState.HAS_BUFFERED_ITEMS:
                return True
            if self._state is PagerState.EXHAUSTED:
                return False
            self._fetch_page()

    def take_next(self) -> T:
        """
        Return the next item.

        Raises:
            NoSuchElementError: If every page has been consumed
        """
        if not self.has_next():
            raise NoSuchElementError("No more items in pagination")

        item = self._buffer[self._position]
        self._position += 1
        self._items_yielded += 1

        if self._position >= len(self._buffer):
            # Drop the page so only one is ever held
            self._buffer = []
            self._position = 0
            self._state = (
                PagerState.BUFFER_EMPTY_MORE_PAGES
                if self._next_pointer is not None
                else PagerState.EXHAUSTED
            )

        return item

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.take_next()

    def _fetch_page(self) -> None:
        """Fetch the page at the current pointer and buffer its items."""
        pointer = self._next_pointer

        # A failing fetch leaves the iterator exhausted
        self._state = PagerState.EXHAUSTED
        self._buffer = []
        self._position = 0

        logger.debug(
            "Fetching page",
            page=self._pages_fetched + 1,
            next_url=pointer,
        )

        response = self._page_fetcher(pointer)
        self._pages_fetched += 1

        self._buffer = response.items
        self._next_pointer = parse_next_link(response.headers)

        if self._buffer:
            self._state = PagerState.HAS_BUFFERED_ITEMS
        elif self._next_pointer is not None:
            logger.debug("Skipping empty page", page=self._pages_fetched)
            self._state = PagerState.BUFFER_EMPTY_MORE_PAGES
        else:
            self._state = PagerState.EXHAUSTED

        logger.debug(
            "Page fetched",
            page=self._pages_fetched,
            status_code=response.status_code,
            items_in_page=len(self._buffer),
            has_next_page=self._next_pointer is not None,
        )

    def get_statistics(self) -> dict[str, Any]:
        """Get iteration statistics."""
        return {
            "state": self._state.value,
            "pages_fetched": self._pages_fetched,
            "items_yielded": self._items_yielded,
            "buffered_items": len(self._buffer) - self._position,
        }


class PagedIterable(Generic[T]):
    """
    Restartable view over a paginated collection.

    Each traversal gets its own ``PagedIterator``, so independent loops
    (including loops running in different threads) never share buffers or
    cursors. Nothing is cached between traversals: every loop fetches from
    the first page again. Concurrent traversals are only as safe as the
    page fetcher they share.
    """

    def __init__(self, page_fetcher: PageFetcher[T]) -> None:
        self._page_fetcher = page_fetcher

    def __iter__(self) -> PagedIterator[T]:
        return PagedIterator(self._page_fetcher)

    def iterator(self) -> PagedIterator[T]:
        """Create a fresh iterator positioned before the first page."""
        return PagedIterator(self._page_fetcher)

    def for_each(self, consumer: Callable[[T], Any]) -> None:
        """
        Call ``consumer`` for every item across all pages.

        Args:
            consumer: Callable invoked once per item, in page order
        """
        iterator = self.iterator()
        with LoggingContextManager(logger, traversal_id=id(iterator)) as log:
            for item in iterator:
                consumer(item)

            log.debug("Traversal completed", **iterator.get_statistics())
