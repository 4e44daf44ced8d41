# Define your item pipelines here
#
# Don't forget to add your pipeline to the ITEM_PIPELINES setting
# See: https://docs.scrapy.org/en/latest/topics/item-pipeline.html

import asyncio
import logging
from typing import Dict, List

from itemadapter import ItemAdapter
from scrapy.exceptions import DropItem

from catalog_crawler.db.config import get_supabase_client
from catalog_crawler.db.services.catalog_service import CatalogService
from catalog_crawler.exceptions import ReconciliationError
from catalog_crawler.items import ProductItem
from catalog_crawler.utils.sentry import capture_error

logger = logging.getLogger(__name__)

class ProductValidationPipeline:
    """Pipeline for validating and cleaning product data."""

    required_fields = ['url', 'name', 'category']

    def __init__(self):
        self.items_processed = 0
        self.items_dropped = 0

    def process_item(self, item: ProductItem, spider) -> ProductItem:
        adapter = ItemAdapter(item)
        for field in self.required_fields:
            if not adapter.get(field):
                self.items_dropped += 1
                raise DropItem(f"Missing required field: {field}")

        adapter['name'] = self._clean_text(adapter['name'])
        if adapter.get('brand'):
            adapter['brand'] = self._clean_text(adapter['brand']) or None
        if adapter.get('images'):
            adapter['images'] = self._validate_image_urls(adapter['images'])
        if adapter.get('attributes'):
            adapter['attributes'] = self._clean_attributes(adapter['attributes'])
        if adapter.get('description') is None:
            adapter['description'] = ''

        self.items_processed += 1
        return item

    def _clean_text(self, text: str) -> str:
        """Collapse whitespace in text fields."""
        if not text:
            return ""
        return " ".join(text.strip().split())

    def _validate_image_urls(self, urls: list) -> list:
        """Keep absolute image URLs, in their original order."""
        return [
            url.strip()
            for url in urls
            if url and isinstance(url, str) and url.startswith(('http://', 'https://'))
        ]

    def _clean_attributes(self, attributes: List[Dict]) -> List[Dict]:
        """Drop specification rows without a group or name. An empty value is kept."""
        cleaned = []
        for row in attributes:
            group = self._clean_text(row.get('group') or '')
            name = self._clean_text(row.get('name') or '')
            value = self._clean_text(row.get('value') or '')
            if group and name:
                cleaned.append({'group': group, 'name': name, 'value': value})
        return cleaned

    def close_spider(self, spider):
        """Log pipeline statistics when spider closes."""
        logger.info(f"Validation pipeline processed {self.items_processed} items")
        logger.info(f"Validation pipeline dropped {self.items_dropped} items")

class DatabasePipeline:
    """Pipeline reconciling validated products into the catalog tables.

    Items are reconciled one at a time. A storage failure stops the crawl.
    """

    def __init__(self, crawler=None, catalog_service: CatalogService = None):
        self.crawler = crawler
        self.catalog_service = catalog_service
        self.lock = asyncio.Lock()
        self._close_task = None

    @classmethod
    def from_crawler(cls, crawler):
        return cls(crawler=crawler)

    async def process_item(self, item: ProductItem, spider) -> ProductItem:
        async with self.lock:
            if not self.catalog_service:
                self.catalog_service = CatalogService(await get_supabase_client())

            url = ItemAdapter(item).get('url')
            try:
                await self.catalog_service.reconcile_product(item)
            except Exception as e:
                error = ReconciliationError(url, e)
                logger.error(str(error))
                capture_error(error, {"url": url, "spider": spider.name})
                self._stop_crawl(spider, 'reconciliation_failed')
                raise error from e

            return item

    def _stop_crawl(self, spider, reason: str) -> None:
        engine = self.crawler.engine if self.crawler is not None else None
        if engine is None:
            return
        if hasattr(engine, 'close_spider_async'):
            # Scrapy 2.14+. Not awaited: closing waits for this item to finish.
            self._close_task = asyncio.ensure_future(engine.close_spider_async(reason=reason))
        else:
            engine.close_spider(spider, reason)

    def close_spider(self, spider):
        """Log totals and release the client when spider closes"""
        if self.catalog_service:
            logger.info(
                f"Products created: {self.catalog_service.products_created}, "
                f"updated: {self.catalog_service.products_updated}"
            )
        self.catalog_service = None
