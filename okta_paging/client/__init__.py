"""Pagination engine and Okta HTTP client."""

from okta_paging.client.exceptions import (
    AuthenticationError,
    NoSuchElementError,
    OktaApiError,
    OktaPagingError,
    RateLimitExceeded,
)
from okta_paging.client.filters import FilterBuilder, Filters, get_filter
from okta_paging.client.link_parser import parse_link_header, parse_next_link
from okta_paging.client.okta_client import OktaClient
from okta_paging.client.paged_results import PagedResults, iter_pages
from okta_paging.client.pagination import (
    PagedIterable,
    PagedIterator,
    PageFetcher,
    PagerState,
)

__all__ = [
    "AuthenticationError",
    "FilterBuilder",
    "Filters",
    "NoSuchElementError",
    "OktaApiError",
    "OktaClient",
    "OktaPagingError",
    "PageFetcher",
    "PagedIterable",
    "PagedIterator",
    "PagedResults",
    "PagerState",
    "RateLimitExceeded",
    "get_filter",
    "iter_pages",
    "parse_link_header",
    "parse_next_link",
]
