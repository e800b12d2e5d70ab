"""Exception types raised by the Okta pagination client."""

from datetime import datetime


class OktaPagingError(Exception):
    """Base exception for okta_paging operations."""


class NoSuchElementError(OktaPagingError, LookupError):
    """Raised when an element is requested from an exhausted iterator."""


class OktaApiError(OktaPagingError):
    """Raised when the Okta API answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        error_summary: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_summary = error_summary


class AuthenticationError(OktaApiError):
    """Raised when Okta rejects the API token (401/403)."""


class RateLimitExceeded(OktaApiError):
    """Raised when the Okta API rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 429,
        error_code: str | None = None,
        error_summary: str | None = None,
        reset_time: datetime | None = None,
    ) -> None:
        super().__init__(message, status_code, error_code, error_summary)
        self.reset_time = reset_time
