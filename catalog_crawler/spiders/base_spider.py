"""Base spider for category crawls with Sentry integration."""

import logging
import os
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List, Dict

import scrapy
from scrapy.exceptions import CloseSpider
from scrapy.http.response import Response
from scrapy.selector import Selector, SelectorList

from catalog_crawler.exceptions import FetchError, MissingInputError
from catalog_crawler.utils.sentry import add_breadcrumb, capture_error

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 200

class BaseCatalogSpider(scrapy.Spider, ABC):
    """Common plumbing for spiders that crawl one category listing.

    Subclasses provide the site base URL and the page callbacks. This class
    owns input handling, URL normalization, error reporting and the optional
    raw page dump.
    """

    base_url: str = ''

    @property
    @abstractmethod
    def allowed_domains(self) -> List[str]:
        """List of allowed domains for this spider. Must be implemented by subclass."""
        pass

    def __init__(self, category_url=None, max_pages=None, dump_dir=None, *args, **kwargs):
        """
        Args:
            category_url (str): Category listing URL to crawl
            max_pages (int, optional): Listing page limit, 0 for no limit
            dump_dir (str, optional): Directory receiving raw listing pages
        """
        super().__init__(*args, **kwargs)
        if not category_url or not category_url.strip('"\' '):
            raise MissingInputError("A category URL is required, pass it with -a category_url=<url>")

        self.category_url = self.normalize_url(category_url.strip('"\' '))
        self.max_pages = DEFAULT_MAX_PAGES if max_pages is None else int(max_pages)
        self.dump_dir = dump_dir or None
        self.run_id = datetime.now().strftime('%Y%m%d_%H%M%S')

        self.product_urls: List[str] = []
        self.parsed_products = 0
        self.failed_products: List[Dict[str, str]] = []

        add_breadcrumb(
            message=f"Spider {self.name} initialized",
            category="spider.lifecycle",
            data={"category_url": self.category_url, "max_pages": self.max_pages}
        )

    @classmethod
    def from_crawler(cls, crawler, *args, **kwargs):
        kwargs.setdefault('max_pages', crawler.settings.getint('MAX_LISTING_PAGES', DEFAULT_MAX_PAGES))
        kwargs.setdefault('dump_dir', crawler.settings.get('PAGE_DUMP_DIR'))
        return super().from_crawler(crawler, *args, **kwargs)

    def normalize_url(self, url: str) -> str:
        """Make a site-relative link absolute by prefixing the site base."""
        if url.startswith(('http://', 'https://')):
            return url
        return f"{self.base_url}{url}"

    @staticmethod
    def parse_price(text: Optional[str]) -> Optional[float]:
        """Parse the leading number of a price such as "1 234,50 руб.". Returns None if there is none."""
        if text is None:
            return None
        cleaned = re.sub(r'[^\d,.]', '', text).replace(',', '.')
        match = re.match(r'\d+(?:\.\d+)?', cleaned)
        return float(match.group()) if match else None

    @staticmethod
    def first(selection: SelectorList) -> Optional[Selector]:
        return selection[0] if selection else None

    @staticmethod
    def node_text(node: Optional[Selector]) -> Optional[str]:
        """Text content of a node with whitespace collapsed."""
        if node is None:
            return None
        return " ".join("".join(node.xpath('.//text()').getall()).split())

    def dump_page(self, response: Response) -> None:
        """Append a fetched page to this run's dump file, when dumping is enabled."""
        if not self.dump_dir:
            return
        os.makedirs(self.dump_dir, exist_ok=True)
        path = os.path.join(self.dump_dir, f"{self.name}_{self.run_id}.html")
        with open(path, 'a', encoding='utf-8') as f:
            f.write(f"<!-- {response.url} -->\n")
            f.write(response.text)
            f.write("\n")

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers. Override in subclass if needed."""
        return {
            'User-Agent': 'Mozilla/5.0 (compatible; Bot/1.0)',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'ru-RU,ru;q=0.9,en;q=0.5',
        }

    def handle_listing_error(self, failure):
        """A listing page failed: the category cannot be crawled completely, stop."""
        url = failure.request.url
        error = FetchError(url, repr(failure.value))
        logger.error(f"Listing page request failed, aborting crawl: {error}")
        capture_error(error, {"url": url, "spider": self.name, "error_type": failure.type.__name__})
        raise CloseSpider("listing_fetch_failed")

    def handle_product_error(self, failure):
        """A product page failed: skip it and keep crawling."""
        url = failure.request.url
        error = FetchError(url, repr(failure.value))
        self._record_product_failure(url, error)
        capture_error(error, {"url": url, "spider": self.name, "error_type": failure.type.__name__})

    def _record_product_failure(self, url: str, error: Exception) -> None:
        logger.error(f"Error parsing product: {url}")
        logger.error(str(error))
        self.failed_products.append({"url": url, "error": str(error)})
        crawler = getattr(self, 'crawler', None)
        if crawler is not None and crawler.stats is not None:
            crawler.stats.inc_value('catalog/products_failed')

    def closed(self, reason):
        """Called when spider is closed."""
        logger.info(
            f"Parsing finished ({reason}): {len(self.product_urls)} product URLs, "
            f"{self.parsed_products} parsed, {len(self.failed_products)} failed"
        )
        add_breadcrumb(
            message=f"Spider {self.name} closed",
            category="spider.lifecycle",
            data={
                "reason": reason,
                "product_urls": len(self.product_urls),
                "failed_products": len(self.failed_products),
            }
        )
