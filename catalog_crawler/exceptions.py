"""Error types raised by the crawl and reconciliation pipeline."""

from typing import Optional


class CatalogCrawlerError(Exception):
    """Base class for catalog crawler errors."""


class MissingInputError(CatalogCrawlerError, ValueError):
    """Raised when a crawl is started without a category URL."""


class FetchError(CatalogCrawlerError):
    """A listing or product page could not be fetched."""

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        message = f"Failed to fetch {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReconciliationError(CatalogCrawlerError):
    """A storage call failed while merging a product into the catalog."""

    def __init__(self, url: Optional[str], cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to reconcile product {url}: {cause}")
