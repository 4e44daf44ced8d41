# Scrapy settings for catalog_crawler project
#
# For simplicity, this file contains only settings considered important or
# commonly used. You can find more settings consulting the documentation:
#
#     https://docs.scrapy.org/en/latest/topics/settings.html
#     https://docs.scrapy.org/en/latest/topics/downloader-middleware.html
#     https://docs.scrapy.org/en/latest/topics/spider-middleware.html

import os
from dotenv import load_dotenv

from catalog_crawler.utils.logger_config import setup_logging

base_dir = os.path.dirname(__file__)
env_path = os.path.join(base_dir, ".env")
# Load environment variables
load_dotenv(env_path, encoding="utf-8")
setup_logging(log_level=os.getenv('LOG_LEVEL', 'INFO'))

# Logging goes through setup_logging above
LOG_ENABLED = False
BOT_NAME = "catalog_crawler"

SPIDER_MODULES = ["catalog_crawler.spiders"]
NEWSPIDER_MODULE = "catalog_crawler.spiders"

USER_AGENT = "Mozilla/5.0 (compatible; Bot/1.0)"

ROBOTSTXT_OBEY = False

# Listing pages and products are fetched one at a time, in discovery order
CONCURRENT_REQUESTS = 1

# A failed listing page ends the crawl, a failed product is skipped
RETRY_ENABLED = False

REDIRECT_ENABLED = True
REDIRECT_MAX_TIMES = 5

COOKIES_ENABLED = True

DEFAULT_REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ru-RU,ru;q=0.9,en;q=0.5",
}

ITEM_PIPELINES = {
   "catalog_crawler.pipelines.ProductValidationPipeline": 300,
   "catalog_crawler.pipelines.DatabasePipeline": 400,
}

# Upper bound on listing pages per category, 0 disables the bound
MAX_LISTING_PAGES = int(os.getenv('MAX_LISTING_PAGES', '200'))

# When set, every fetched listing page is appended to <dir>/<spider>_<run>.html
PAGE_DUMP_DIR = os.getenv('PAGE_DUMP_DIR')

# Set settings whose default value is deprecated to a future-proof value
TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
FEED_EXPORT_ENCODING = "utf-8"

DOWNLOAD_TIMEOUT = 60

# Sentry Configuration
SENTRY_DSN = os.getenv('SENTRY_DSN')
SENTRY_ENVIRONMENT = os.getenv('SENTRY_ENVIRONMENT', 'development')
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '1.0'))
SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv('SENTRY_PROFILES_SAMPLE_RATE', '1.0'))

# Initialize Sentry
from .utils.sentry import init_sentry
init_sentry(
    dsn=SENTRY_DSN,
    environment=SENTRY_ENVIRONMENT,
    traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
    profiles_sample_rate=SENTRY_PROFILES_SAMPLE_RATE
)
