"""Command-line entry point: crawl one category into the catalog."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from scrapy.crawler import CrawlerProcess
from scrapy.utils.project import get_project_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Crawl a 2cent.ru category and update the catalog database"
    )
    parser.add_argument("--category-url", help="Category listing URL to crawl")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Listing page limit (default: MAX_LISTING_PAGES setting, 0 for none)",
    )
    parser.add_argument("--dump-dir", default=None, help="Append raw listing pages to this directory")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if not args.category_url:
        print("Please provide a category URL with --category-url.", file=sys.stderr)
        return EXIT_USAGE

    os.environ.setdefault("SCRAPY_SETTINGS_MODULE", "catalog_crawler.settings")
    settings = get_project_settings()

    from catalog_crawler.spiders.twocent_spider import TwoCentSpider

    spider_kwargs = {"category_url": args.category_url}
    if args.max_pages is not None:
        spider_kwargs["max_pages"] = args.max_pages
    if args.dump_dir:
        spider_kwargs["dump_dir"] = args.dump_dir

    process = CrawlerProcess(settings, install_root_handler=False)
    crawler = process.create_crawler(TwoCentSpider)
    process.crawl(crawler, **spider_kwargs)
    process.start()

    reason = crawler.stats.get_value("finish_reason") if crawler.stats else None
    if reason == "finished":
        logger.info("Crawl completed")
        return EXIT_OK
    logger.error(f"Crawl ended with reason: {reason}")
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
