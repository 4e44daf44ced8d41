"""Field extraction from 2cent product pages."""

import pytest

from conftest import make_response

PRODUCT_URL = "https://2cent.ru/product/asus-tuf-f15/"


def extract(spider, html):
    return spider.extract_product(make_response(PRODUCT_URL, html), "Ноутбуки")


class TestProductFields:

    @pytest.fixture
    def item(self, spider, product_html):
        return extract(spider, product_html)

    def test_identity_and_title(self, item):
        assert item["external_id"] == "12345"
        assert item["name"] == "Ноутбук ASUS TUF Gaming F15"
        assert item["url"] == PRODUCT_URL
        assert item["category"] == "Ноутбуки"

    def test_brand_from_manufacturer_row(self, item):
        assert item["brand"] == "ASUS"

    def test_prices(self, item):
        assert item["price"] == pytest.approx(1234.50)
        assert item["original_price"] == pytest.approx(1500.0)
        assert item["raw_price"] == "1 234,50 ₽"

    def test_description_is_inner_markup(self, item):
        assert item["description"] == "<p>Игровой ноутбук</p>"

    def test_available_without_badge(self, item):
        assert item["is_available"] is True

    def test_images_are_normalized_in_order(self, item):
        assert item["images"] == [
            "https://2cent.ru/upload/iblock/1.jpg",
            "https://cdn.2cent.ru/upload/iblock/2.jpg",
        ]

    def test_attributes_grouped_and_incomplete_rows_skipped(self, item):
        assert item["attributes"] == [
            {"group": "Дисплей", "name": "Диагональ", "value": '15.6"'},
            {"group": "Дисплей", "name": "Разрешение", "value": "1920x1080"},
            {"group": "Питание", "name": "Ёмкость аккумулятора", "value": "90 Вт·ч"},
        ]


class TestFallbacks:

    def test_missing_manufacturer_row_gives_no_brand(self, spider, product_html):
        html = product_html.replace("Производитель", "Страна")
        assert extract(spider, html)["brand"] is None

    def test_missing_price_elements(self, spider, product_html):
        html = product_html.replace('class="rs-price-new"', 'class="x"').replace('class="rs-price-old"', 'class="y"')
        item = extract(spider, html)
        assert item["price"] is None
        assert item["original_price"] is None

    def test_price_without_digits(self, spider, product_html):
        html = product_html.replace("1 234,50 ₽", "Цена по запросу")
        assert extract(spider, html)["price"] is None

    def test_missing_description_is_empty_string(self, spider, product_html):
        html = product_html.replace('id="tab-description"', 'id="tab-reviews"')
        assert extract(spider, html)["description"] == ""

    def test_not_available_badge(self, spider, product_html):
        html = product_html.replace(
            '<div class="rs-price">',
            '<div class="item-card__not-available">Нет в наличии</div><div class="rs-price">',
        )
        assert extract(spider, html)["is_available"] is False

    def test_missing_offer_field_gives_no_external_id(self, spider, product_html):
        html = product_html.replace('<input type="hidden" name="offer" value="12345">', "")
        item = extract(spider, html)
        assert item["external_id"] is None
        assert item["name"] == "Ноутбук ASUS TUF Gaming F15"

    def test_empty_offer_value_gives_no_external_id(self, spider, product_html):
        html = product_html.replace('value="12345"', 'value=""')
        assert extract(spider, html)["external_id"] is None

    def test_group_without_label_is_skipped(self, spider, product_html):
        html = product_html.replace(
            '<div id="tab-property">',
            '<div id="tab-property"><div><ul class="product-chars">'
            '<li class="row"><div class="col-sm-7">Вес</div></li></ul></div>',
        )
        attributes = extract(spider, html)["attributes"]
        assert [row["group"] for row in attributes] == ["Дисплей", "Дисплей", "Питание"]


class TestParseProduct:

    def test_yields_item(self, spider, product_html):
        items = list(spider.parse_product(make_response(PRODUCT_URL, product_html), "Ноутбуки"))
        assert len(items) == 1
        assert spider.parsed_products == 1
        assert spider.failed_products == []

    def test_page_without_title_is_skipped_and_reported(self, spider):
        html = "<html><body><p>Страница не найдена</p></body></html>"
        items = list(spider.parse_product(make_response(PRODUCT_URL, html), "Ноутбуки"))
        assert items == []
        assert spider.parsed_products == 0
        assert [failure["url"] for failure in spider.failed_products] == [PRODUCT_URL]


class TestHelpers:

    @pytest.mark.parametrize("text, expected", [
        ("1 234,50 ₽", 1234.50),
        ("99 ₽", 99.0),
        ("12.5", 12.5),
        ("Нет цены", None),
        ("", None),
        (None, None),
        ("1.234.50", 1.234),
        ("1 234,50 руб.", 1234.5),
        ("от 500 р.", 500.0),
    ])
    def test_parse_price(self, spider, text, expected):
        assert spider.parse_price(text) == expected

    @pytest.mark.parametrize("url, expected", [
        ("/catalog/item/1/", "https://2cent.ru/catalog/item/1/"),
        ("https://2cent.ru/a/", "https://2cent.ru/a/"),
        ("http://cdn.example.com/x.jpg", "http://cdn.example.com/x.jpg"),
        ("catalog/x", "https://2cent.rucatalog/x"),
    ])
    def test_normalize_url(self, spider, url, expected):
        assert spider.normalize_url(url) == expected
