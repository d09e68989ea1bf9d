from __future__ import annotations

import pytest

from magento_shopify.images import build_full_image_url
from magento_shopify.mapping import infer_published, infer_taxable, infer_vendor
from magento_shopify.normalize import (
    extract_tags_from_categories,
    format_number,
    parse_decimal,
    parse_int,
    strip_trailing_name,
)


@pytest.mark.parametrize("raw,expected", [
    ("10", 10.0),
    ("10.5", 10.5),
    ("10,5", 10.5),
    ("1.234,56", 1234.56),
    ("1,234.56", 1234.56),
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("nan", 0.0),
])
def test_parse_decimal(raw, expected):
    assert parse_decimal(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw,expected", [
    ("12", 12),
    ("100.0000", 100),
    ("-3", -3),
    ("", 0),
    ("x5", 0),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


def test_format_number_drops_trailing_zeros():
    assert format_number(10.0) == "10"
    assert format_number(21.5) == "21.5"
    assert format_number(19.99) == "19.99"
    assert format_number(0) == "0"


def test_format_number_keeps_full_precision():
    assert format_number(19.99999) == "19.99999"
    assert format_number(0.00004) == "0.00004"
    assert format_number(parse_decimal("1234567,123456")) == "1234567.123456"


def test_tags_from_category_paths():
    assert extract_tags_from_categories("Default Category/Men/Shirts, Default Category/Sale") == "Men, Shirts, Sale"


def test_tags_dedupe_in_first_seen_order():
    raw = "Default Category/Men/Shirts,Default Category/Men/Sale,DEFAULT CATEGORY//Shirts"
    assert extract_tags_from_categories(raw) == "Men, Shirts, Sale"
    assert extract_tags_from_categories("") == ""
    assert extract_tags_from_categories(None) == ""


def test_strip_trailing_name_is_case_insensitive_and_escaped():
    assert strip_trailing_name("Jan de Vries", "DE VRIES") == "Jan"
    assert strip_trailing_name("Ann (Mrs.) Smith+", "Smith+") == "Ann (Mrs.)"
    assert strip_trailing_name("", "x") == ""


class TestImageUrl:
    def test_blank_path(self):
        assert build_full_image_url("", "https://shop.example/media") == ""
        assert build_full_image_url("   ", "https://shop.example/media") == ""
        assert build_full_image_url(None, None) == ""

    def test_absolute_path_ignores_base(self):
        url = "https://cdn.example/a.jpg"
        assert build_full_image_url(url, "https://shop.example/media") == url
        assert build_full_image_url("http://cdn.example/a.jpg", None) == "http://cdn.example/a.jpg"

    def test_relative_without_base_is_returned_unchanged(self):
        assert build_full_image_url("/a/b/ab.jpg", None) == "/a/b/ab.jpg"
        assert build_full_image_url("/a/b/ab.jpg", "  ") == "/a/b/ab.jpg"

    def test_join_strips_single_slashes(self):
        assert build_full_image_url("/a/b/ab.jpg", "https://shop.example/media/") == "https://shop.example/media/a/b/ab.jpg"
        assert build_full_image_url("a/b/ab.jpg", "https://shop.example/media") == "https://shop.example/media/a/b/ab.jpg"


class TestPublication:
    def test_defaults_to_published(self):
        assert infer_published(None, None) is True

    def test_not_visible_individually(self):
        assert infer_published("Not Visible Individually", None) is False
        assert infer_published("1", None) is False
        assert infer_published("Catalog, Search", None) is True

    def test_disabled_status(self):
        assert infer_published(None, "2") is False
        assert infer_published("Catalog, Search", "Disabled") is False
        assert infer_published("Catalog, Search", "1") is True

    def test_taxable(self):
        assert infer_taxable(None) is True
        assert infer_taxable("Taxable Goods") is True
        assert infer_taxable("2") is True
        assert infer_taxable("None") is False

    def test_vendor_falls_back_to_attribute_set(self):
        assert infer_vendor("Acme", "Default") == "Acme"
        assert infer_vendor("", "Nike Shoes") == "Nike"
        assert infer_vendor(None, None) == ""
