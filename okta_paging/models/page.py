"""
Page response model shared by the pagination engine and page fetchers.

A page is one HTTP response from a list endpoint: a status code, the
response headers and the decoded body (a list of items, or None when the
response had no content).
"""

from collections.abc import Mapping
from typing import Generic, TypeVar

T = TypeVar("T")

Headers = Mapping[str, list[str]]


class PageResponse(Generic[T]):
    """
    One fetched page of results.

    The header and body containers are kept as given, without copying:
    changes the caller makes to them afterwards are visible here.
    """

    __slots__ = ("status_code", "headers", "body")

    def __init__(
        self,
        status_code: int,
        headers: Headers | None = None,
        body: list[T] | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers
        self.body = body

    @property
    def items(self) -> list[T]:
        """Page items; an absent body counts as an empty page."""
        return self.body if self.body is not None else []

    def __repr__(self) -> str:
        headers_count = len(self.headers) if self.headers is not None else 0
        body_type = type(self.body).__name__ if self.body is not None else "None"
        return (
            f"PageResponse(status_code={self.status_code}, "
            f"headers_count={headers_count}, body={body_type})"
        )
