"""Shared fixtures: an in-memory stand-in for the Supabase query builder and HTML helpers."""

import copy
from pathlib import Path
from types import SimpleNamespace

import pytest
from scrapy.http import HtmlResponse, Request

from catalog_crawler.db.services.catalog_service import CatalogService
from catalog_crawler.items import AttributeItem, ProductItem
from catalog_crawler.spiders.twocent_spider import TwoCentSpider

FIXTURES_DIR = Path(__file__).parent / "fixtures"

CATEGORY_URL = "https://2cent.ru/catalog/noutbuki/"

UNIQUE_KEYS = {
    "categories": [("name",)],
    "brands": [("name",)],
    "products": [("external_id",)],
    "attribute_groups": [("name",)],
    "attributes": [("name", "attribute_group_id")],
}


class FakeQuery:
    """Chainable query mimicking the subset of postgrest-py the repositories use."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.payload = None
        self.filters = []
        self.on_conflict = ""
        self.ignore_duplicates = False

    def select(self, *columns):
        self.action = "select"
        return self

    def insert(self, data):
        self.action, self.payload = "insert", data
        return self

    def update(self, data):
        self.action, self.payload = "update", data
        return self

    def upsert(self, data, on_conflict="", ignore_duplicates=False):
        self.action, self.payload = "upsert", data
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def is_(self, column, value):
        assert value == "null"
        self.filters.append(lambda row: row.get(column) is None)
        return self

    async def execute(self):
        if self.table_name in self.db.failing_tables and self.action != "select":
            raise RuntimeError(f"{self.table_name} is unavailable")
        rows = self.db.rows(self.table_name)
        if self.action == "select":
            return SimpleNamespace(data=[copy.deepcopy(r) for r in rows if self._matches(r)])
        if self.action == "insert":
            return SimpleNamespace(data=[copy.deepcopy(self.db.insert(self.table_name, self.payload))])
        if self.action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)
        # upsert
        keys = [key.strip() for key in self.on_conflict.split(",") if key.strip()]
        existing = [r for r in rows if all(r.get(k) == self.payload.get(k) for k in keys)]
        if existing:
            if self.ignore_duplicates:
                return SimpleNamespace(data=[])
            existing[0].update(self.payload)
            return SimpleNamespace(data=[copy.deepcopy(existing[0])])
        return SimpleNamespace(data=[copy.deepcopy(self.db.insert(self.table_name, self.payload))])

    def _matches(self, row):
        return all(check(row) for check in self.filters)


class FakeSupabase:
    """In-memory tables with serial ids and the catalog's unique constraints."""

    def __init__(self):
        self.tables = {}
        self.failing_tables = set()

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, name):
        return self.tables.setdefault(name, [])

    def insert(self, name, data):
        rows = self.rows(name)
        for keys in UNIQUE_KEYS.get(name, []):
            values = tuple(data.get(k) for k in keys)
            if None in values:
                continue
            if any(tuple(r.get(k) for k in keys) == values for r in rows):
                raise RuntimeError(f"duplicate key value violates unique constraint on {name}{keys}")
        row = dict(data)
        row["id"] = len(rows) + 1
        rows.append(row)
        return row


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def catalog_service(fake_supabase):
    return CatalogService(fake_supabase)


@pytest.fixture
def spider():
    return TwoCentSpider(category_url=CATEGORY_URL)


@pytest.fixture
def product_html():
    return (FIXTURES_DIR / "product_page.html").read_text(encoding="utf-8")


def make_response(url, body, request=None):
    return HtmlResponse(
        url=url,
        body=body.encode("utf-8"),
        encoding="utf-8",
        request=request or Request(url),
    )


def listing_html(hrefs, has_next, title="Ноутбуки"):
    cards = "\n".join(
        f'<div class="item-card"><a class="item-card__title" href="{href}">Товар</a></div>'
        for href in hrefs
    )
    next_link = '<li class="next"><a href="#">›</a></li>' if has_next else ""
    heading = f"<h1>{title}</h1>" if title else ""
    return f"""
    <html><body>
      {heading}
      <div class="catalog">{cards}</div>
      <ul class="pagination"><li class="active">1</li>{next_link}</ul>
    </body></html>
    """


def make_item(**overrides):
    """A validated-looking ProductItem for reconciliation tests."""
    item = ProductItem.create_empty(url="https://2cent.ru/product/asus-tuf-f15/", category="Ноутбуки")
    item["external_id"] = "12345"
    item["name"] = "Ноутбук ASUS TUF Gaming F15"
    item["brand"] = "ASUS"
    item["price"] = 100.0
    item["original_price"] = 120.0
    item["description"] = "<p>Игровой ноутбук</p>"
    item["is_available"] = True
    item.add_images(["https://2cent.ru/upload/1.jpg", "https://2cent.ru/upload/2.jpg"])
    item.add_attribute(AttributeItem(group="Дисплей", name="Диагональ", value='15.6"'))
    item.add_attribute(AttributeItem(group="Дисплей", name="Разрешение", value="1920x1080"))
    item.add_attribute(AttributeItem(group="Питание", name="Ёмкость", value="90 Вт·ч"))
    for key, value in overrides.items():
        item[key] = value
    return item
