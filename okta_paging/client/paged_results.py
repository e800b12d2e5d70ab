"""
Page-at-a-time results for callers that drive pagination themselves.

``PagedResults`` wraps a single ``PageResponse`` and exposes the links
advertised in its ``Link`` headers. Unlike ``PagedIterable`` it never
fetches on its own: callers ask for the next page explicitly.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

import structlog

from okta_paging.client.exceptions import NoSuchElementError
from okta_paging.client.link_parser import (
    extract_after_cursor,
    find_link_values,
    parse_link_header,
)
from okta_paging.client.pagination import PageFetcher
from okta_paging.models.page import PageResponse

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class PagedResults(Generic[T]):
    """One page of results plus its navigation links."""

    def __init__(self, response: PageResponse[T]) -> None:
        self.response = response
        self._links = parse_link_header(find_link_values(response.headers))

    @property
    def result(self) -> list[T]:
        return self.response.items

    @property
    def links(self) -> dict[str, str]:
        """All advertised relations, e.g. ``{"self": ..., "next": ...}``."""
        return dict(self._links)

    @property
    def next_url(self) -> str | None:
        return self._links.get("next")

    @property
    def self_url(self) -> str | None:
        return self._links.get("self")

    @property
    def is_last_page(self) -> bool:
        return self.next_url is None

    @property
    def is_first_page(self) -> bool:
        return "prev" not in self._links

    @property
    def after(self) -> str | None:
        """The ``after`` cursor to request the next page with."""
        return extract_after_cursor(self.next_url)

    @property
    def has_more_items(self) -> bool:
        return self.after is not None

    def follow(self, page_fetcher: PageFetcher[T]) -> "PagedResults[T]":
        """
        Fetch the page after this one.

        Args:
            page_fetcher: Fetcher used to load the next URL

        Returns:
            Results for the next page

        Raises:
            NoSuchElementError: If this is the last page
        """
        if self.next_url is None:
            raise NoSuchElementError("No next page to follow")
        return PagedResults(page_fetcher(self.next_url))

    def __len__(self) -> int:
        return len(self.result)

    def __iter__(self) -> Iterator[T]:
        return iter(self.result)


def iter_pages(page_fetcher: PageFetcher[T]) -> Iterator[PagedResults[T]]:
    """
    Yield successive pages, starting from the first.

    Pages are fetched lazily, one per step of the generator.
    """
    page = PagedResults(page_fetcher(None))
    page_number = 1

    while True:
        logger.debug(
            "Yielding page",
            page=page_number,
            items_in_page=len(page),
            is_last_page=page.is_last_page,
        )
        yield page

        if page.is_last_page:
            return
        page = page.follow(page_fetcher)
        page_number += 1
