"""
Spider for 2cent.ru, a Russian electronics retailer.
Walks one category listing page by page, then parses every product found
into a ProductItem carrying prices, availability, gallery and grouped
specifications.
"""

import logging
from typing import List, Optional, Generator

from scrapy.http.request import Request
from scrapy.http.response import Response
from w3lib.url import add_or_replace_parameter

from catalog_crawler.items import AttributeItem, ProductItem
from catalog_crawler.spiders.base_spider import BaseCatalogSpider
from catalog_crawler.utils.sentry import add_breadcrumb, monitor_errors

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_TITLE = 'Без названия'
MANUFACTURER_LABEL = 'Производитель'

class TwoCentSpider(BaseCatalogSpider):
    @property
    def allowed_domains(self) -> List[str]:
        return ['2cent.ru', 'www.2cent.ru']

    name = '2cent'
    base_url = 'https://2cent.ru'
    page_param = 'p'
    custom_settings = {
        'CONCURRENT_REQUESTS': 1,
        'DOWNLOAD_TIMEOUT': 60,
    }

    def start_requests(self) -> Generator[Request, None, None]:
        logger.info(f"Starting category crawl: {self.category_url}")
        yield self._listing_request(page=1, product_urls=[], category_name=None)

    def _listing_request(self, page: int, product_urls: List[str], category_name: Optional[str]) -> Request:
        return Request(
            url=add_or_replace_parameter(self.category_url, self.page_param, str(page)),
            callback=self.parse_listing,
            errback=self.handle_listing_error,
            headers=self._get_headers(),
            cb_kwargs={
                'page': page,
                'product_urls': product_urls,
                'category_name': category_name,
            },
            dont_filter=True,
        )

    def parse_listing(
        self,
        response: Response,
        page: int,
        product_urls: List[str],
        category_name: Optional[str],
    ) -> Generator[Request, None, None]:
        """Collect product links from one listing page and follow the pagination.

        Product requests are only issued once the last page has been read, in
        the order the links were found.
        """
        self.dump_page(response)
        if category_name is None:
            category_name = self.extract_category_title(response)
            logger.info(f"Category: {category_name}")

        links = [self.normalize_url(href) for href in self.extract_product_links(response)]
        product_urls = product_urls + links
        logger.info(f"Page {page}: {len(links)} products")

        if self.has_next_page(response):
            if self.max_pages and page >= self.max_pages:
                logger.warning(f"Stopping pagination at the page limit ({self.max_pages})")
            else:
                yield self._listing_request(page + 1, product_urls, category_name)
                return

        self.product_urls = product_urls
        logger.info(f"Products found: {len(product_urls)}")
        add_breadcrumb(
            message="Category listing collected",
            category="spider.listing",
            data={"pages": page, "product_urls": len(product_urls)}
        )

        for index, url in enumerate(product_urls):
            yield Request(
                url=url,
                callback=self.parse_product,
                errback=self.handle_product_error,
                headers=self._get_headers(),
                cb_kwargs={'category_name': category_name},
                priority=len(product_urls) - index,
                dont_filter=True,
            )

    def extract_category_title(self, response: Response) -> str:
        return self.node_text(self.first(response.css('h1'))) or DEFAULT_CATEGORY_TITLE

    def extract_product_links(self, response: Response) -> List[str]:
        return [
            href.strip()
            for href in response.css('.item-card__title::attr(href)').getall()
            if href and href.strip()
        ]

    def has_next_page(self, response: Response) -> bool:
        return bool(response.css('.pagination .next'))

    def parse_product(self, response: Response, category_name: str) -> Generator[ProductItem, None, None]:
        logger.info(f"Processing product: {response.url}")
        try:
            item = self.extract_product(response, category_name)
        except Exception as e:
            self._record_product_failure(response.url, e)
            return
        self.parsed_products += 1
        yield item

    @monitor_errors
    def extract_product(self, response: Response, category_name: str) -> ProductItem:
        """Build a ProductItem from a product page.

        Raises ValueError when the page has no product title.
        """
        item = ProductItem.create_empty(url=response.url, category=category_name)

        name = self.node_text(self.first(response.css('h1.product-title')))
        if not name:
            raise ValueError(f"No product title on {response.url}")
        item['name'] = name

        item['external_id'] = self._extract_external_id(response)
        item['brand'] = self._extract_brand(response)

        item['raw_price'] = self.node_text(self.first(response.css('.rs-price-new')))
        item['price'] = self.parse_price(item['raw_price'])
        item['raw_original_price'] = self.node_text(self.first(response.css('.rs-price-old')))
        item['original_price'] = self.parse_price(item['raw_original_price'])

        item['description'] = self._extract_description(response)
        item['is_available'] = not response.css('.item-card__not-available')
        item.add_images(self._extract_images(response))

        for attribute in self._extract_attributes(response):
            item.add_attribute(attribute)

        return item

    def _extract_external_id(self, response: Response) -> Optional[str]:
        value = response.css('input[name="offer"]::attr(value)').get()
        return value.strip() if value and value.strip() else None

    def _extract_brand(self, response: Response) -> Optional[str]:
        """Bold value of the first characteristics row labelled as manufacturer."""
        for row in response.css('.product-chars li'):
            if MANUFACTURER_LABEL in (self.node_text(row) or ''):
                return self.node_text(self.first(row.css('.fw-bold'))) or None
        return None

    def _extract_description(self, response: Response) -> str:
        node = self.first(response.css('#tab-description'))
        if node is None:
            return ''
        return ''.join(node.xpath('node()').getall())

    def _extract_images(self, response: Response) -> List[str]:
        return [
            self.normalize_url(src)
            for src in response.css('.product-gallery-top img::attr(src)').getall()
            if src
        ]

    def _extract_attributes(self, response: Response) -> List[AttributeItem]:
        attributes = []
        for group_node in response.css('#tab-property > div'):
            group_name = self.node_text(self.first(group_node.css('.fw-bold')))
            if not group_name:
                continue

            for row in group_node.css('ul.product-chars li'):
                name_node = self.first(row.css('.col-sm-7, .col-6'))
                value_node = self.first(row.css('.fw-bold'))
                if name_node is None or value_node is None:
                    continue
                attributes.append(AttributeItem(
                    group=group_name,
                    name=self.node_text(name_node),
                    value=self.node_text(value_node),
                ))
        return attributes
