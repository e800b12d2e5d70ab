"""
okta-paging - lazy, restartable pagination for the Okta REST API

Turns a page fetcher into a single stream of items by following the
``Link: <...>; rel="next"`` headers Okta returns on list endpoints.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("okta-paging")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.1.0-dev"

__author__ = "okta-paging maintainers"
__email__ = "maintainers@okta-paging.dev"
__description__ = "Lazy, restartable pagination for the Okta REST API"

__all__ = [
    "__author__",
    "__description__",
    "__email__",
    "__version__",
]
