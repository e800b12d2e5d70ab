"""
Synchronous Okta REST client producing paginated collections.

The client only knows how to fetch one page: the first request goes to the
resource URL with its query parameters, every later request goes to the
exact ``next`` URL Okta advertised. ``PagedIterable`` does the rest.
"""

from datetime import datetime, timezone
from typing import Any

import httpx
import structlog

from okta_paging import __version__
from okta_paging.client.exceptions import (
    AuthenticationError,
    OktaApiError,
    RateLimitExceeded,
)
from okta_paging.client.filters import FilterBuilder, format_datetime
from okta_paging.client.pagination import PageFetcher, PagedIterable
from okta_paging.config.settings import OktaSettings
from okta_paging.models.page import PageResponse

logger = structlog.get_logger(__name__)

JsonObject = dict[str, Any]


class OktaClient:
    """
    Okta API client returning lazily paginated collections.

    Non-2xx answers are raised as ``OktaApiError`` subclasses straight away;
    there is no retry at this layer.
    """

    def __init__(
        self,
        settings: OktaSettings,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=settings.request_timeout)
        self._headers = {
            "Authorization": f"SSWS {settings.token}",
            "Accept": "application/json",
            "User-Agent": f"okta-paging/{__version__}",
        }

        logger.info(
            "Okta client initialized",
            domain=settings.domain,
            page_size=settings.page_size,
        )

    def __enter__(self) -> "OktaClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http.close()

    def page_fetcher(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> PageFetcher[JsonObject]:
        """
        Build a page fetcher for a list endpoint.

        Args:
            path: Resource path relative to the API base, e.g. ``/users``
            params: Query parameters for the first page; None values are dropped

        Returns:
            Callable mapping a next URL (None for the first page) to a page
        """
        url = f"{self.settings.base_url}/{path.lstrip('/')}"
        first_params = {
            key: str(value) for key, value in (params or {}).items() if value is not None
        }
        first_params.setdefault("limit", str(self.settings.page_size))

        def fetch(next_url: str | None) -> PageResponse[JsonObject]:
            if next_url is None:
                return self._get_page(url, first_params)
            # Continuation URLs already carry every query parameter
            return self._get_page(next_url, None)

        return fetch

    def list_users(
        self,
        filter: FilterBuilder | str | None = None,
        search: str | None = None,
        q: str | None = None,
    ) -> PagedIterable[JsonObject]:
        """List users, optionally narrowed by ``filter``, ``search`` or ``q``."""
        return PagedIterable(
            self.page_fetcher("/users", {"filter": filter, "search": search, "q": q})
        )

    def list_groups(
        self,
        filter: FilterBuilder | str | None = None,
        q: str | None = None,
    ) -> PagedIterable[JsonObject]:
        return PagedIterable(self.page_fetcher("/groups", {"filter": filter, "q": q}))

    def list_group_users(self, group_id: str) -> PagedIterable[JsonObject]:
        return PagedIterable(self.page_fetcher(f"/groups/{group_id}/users"))

    def list_applications(
        self,
        filter: FilterBuilder | str | None = None,
        q: str | None = None,
    ) -> PagedIterable[JsonObject]:
        return PagedIterable(self.page_fetcher("/apps", {"filter": filter, "q": q}))

    def get_logs(
        self,
        since: datetime | None = None,
        until: datetime | None = None,
        filter: FilterBuilder | str | None = None,
    ) -> PagedIterable[JsonObject]:
        """
        List System Log events.

        Without ``until`` Okta treats the request as a poll and keeps
        returning empty pages with a ``next`` link, so ``until`` defaults to
        the current time to bound the stream.
        """
        if until is None:
            until = datetime.now(timezone.utc)

        return PagedIterable(
            self.page_fetcher(
                "/logs",
                {
                    "since": format_datetime(since) if since else None,
                    "until": format_datetime(until),
                    "filter": filter,
                },
            )
        )

    def _get_page(
        self, url: str, params: dict[str, str] | None
    ) -> PageResponse[JsonObject]:
        try:
            response = self._http.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error("Okta request failed", url=url, error=str(e))
            raise OktaApiError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise self._error_from_response(response)

        return self._to_page_response(response)

    def _to_page_response(self, response: httpx.Response) -> PageResponse[JsonObject]:
        headers: dict[str, list[str]] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name, []).append(value)

        body: list[JsonObject] | None = None
        if response.content:
            try:
                payload = response.json()
            except ValueError as e:
                logger.error(
                    "Okta returned a non-JSON body",
                    status_code=response.status_code,
                    content_type=response.headers.get("Content-Type"),
                )
                raise OktaApiError(
                    f"Invalid JSON from {response.request.url}",
                    response.status_code,
                ) from e
            if isinstance(payload, list):
                body = payload
            elif payload:
                body = [payload]

        return PageResponse(response.status_code, headers, body)

    def _error_from_response(self, response: httpx.Response) -> OktaApiError:
        """Map an Okta error response to an exception."""
        error_code = None
        error_summary = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            error_code = payload.get("errorCode")
            error_summary = payload.get("errorSummary")

        message = (
            f"Okta API returned {response.status_code} for {response.request.url}"
            + (f": {error_summary}" if error_summary else "")
        )

        logger.warning(
            "Okta API error",
            status_code=response.status_code,
            error_code=error_code,
            error_summary=error_summary,
        )

        if response.status_code == 429:
            return RateLimitExceeded(
                message,
                error_code=error_code,
                error_summary=error_summary,
                reset_time=_parse_reset_time(response.headers.get("X-Rate-Limit-Reset")),
            )
        if response.status_code in (401, 403):
            return AuthenticationError(
                message, response.status_code, error_code, error_summary
            )
        return OktaApiError(message, response.status_code, error_code, error_summary)


def _parse_reset_time(value: str | None) -> datetime | None:
    """Parse the epoch-seconds ``X-Rate-Limit-Reset`` header."""
    if not value:
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except ValueError:
        return None
