"""Data models shared across the client."""

from okta_paging.models.page import PageResponse

__all__ = ["PageResponse"]
