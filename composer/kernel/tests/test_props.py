"""
Tests for typed block props.

Persisted props are an open JSON map. Coercion rules:
  - strings: empty → default, numbers → str
  - booleans: "false"/"0"/"no"/"off" → False, null → default
  - numbers: numeric strings parsed, 0/NaN/bool/garbage → default
  - arrays: non-list → [], non-object items dropped from object lists
"""

import math

import pytest

from composer.kernel.props import (
    FeatureItem,
    HeroBannerProps,
    ProductGridProps,
    default_props,
    parse_props,
    prop_kinds,
)


class TestStrings:
    def test_present(self):
        assert parse_props("hero-banner", {"title": "Hi"}).title == "Hi"

    def test_empty_uses_default(self):
        assert parse_props("hero-banner", {"title": ""}).title == "Welcome"

    def test_number_to_string(self):
        assert parse_props("hero-banner", {"title": 2024}).title == "2024"

    def test_wrong_type_uses_default(self):
        assert parse_props("hero-banner", {"title": ["x"]}).title == "Welcome"
        assert parse_props("hero-banner", {"title": {"a": 1}}).title == "Welcome"

    def test_huge_number_uses_default(self):
        assert parse_props("hero-banner", {"title": 10**400}).title == "Welcome"


class TestBooleans:
    @pytest.mark.parametrize("raw", ["false", "0", "no", "off", "", "FALSE", 0, False])
    def test_falsy(self, raw):
        assert parse_props("hero-banner", {"overlay": raw}).overlay is False

    @pytest.mark.parametrize("raw", ["true", "yes", 1, True])
    def test_truthy(self, raw):
        assert parse_props("hero-banner", {"overlay": raw}).overlay is True

    def test_null_uses_default(self):
        assert parse_props("video-embed", {"controls": None}).controls is True


class TestNumbers:
    def test_numeric_string(self):
        assert parse_props("product-grid", {"columns": "4"}).columns == 4

    def test_float_truncated_for_int(self):
        assert parse_props("product-grid", {"columns": 2.9}).columns == 2

    @pytest.mark.parametrize("raw", [0, "abc", True, None, math.nan, math.inf])
    def test_unusable_uses_default(self, raw):
        assert parse_props("product-grid", {"columns": raw}).columns == 3

    @pytest.mark.parametrize("raw", [10**400, -(10**400), "1e400", "-inf"])
    def test_out_of_range_uses_default(self, raw):
        assert parse_props("spacer", {"height": raw}).height == 60


class TestArrays:
    def test_non_list(self):
        assert parse_props("image-gallery", {"images": "https://x.example.com/a.jpg"}).images == []

    def test_string_items_filtered(self):
        props = parse_props("image-gallery", {"images": ["a", "", None, 3, {"x": 1}]})
        assert props.images == ["a", "3"]

    def test_object_items(self):
        props = parse_props("feature-list", {"features": [{"title": "Fast"}, "junk", None]})
        assert len(props.features) == 1
        assert props.features[0].title == "Fast"
        assert props.features[0].icon == "star"

    def test_nested_coercion(self):
        props = parse_props("testimonials", {"testimonials": [{"rating": "4", "name": ""}]})
        assert props.testimonials[0].rating == 4
        assert props.testimonials[0].name == "Customer"

    def test_selected_ids_stringified(self):
        assert parse_props("product-grid", {"selectedProducts": [1, "b"]}).selected_products == ["1", "b"]


class TestModels:
    def test_unknown_type(self):
        assert parse_props("mega-menu", {"title": "x"}) is None

    def test_non_dict_raw(self):
        assert parse_props("hero-banner", "oops") == HeroBannerProps()

    def test_snake_case_keys_accepted(self):
        assert parse_props("hero-banner", {"button_text": "Go"}).button_text == "Go"

    def test_extra_keys_ignored(self):
        props = parse_props("spacer", {"height": 10, "legacyField": True})
        assert props.to_props() == {"height": 10, "backgroundColor": "transparent"}

    def test_to_props_camel_case(self):
        assert "selectedProducts" in ProductGridProps().to_props()

    def test_item_defaults(self):
        assert FeatureItem().description == "Feature description"

    def test_default_props_unknown(self):
        assert default_props("mega-menu") == {}

    def test_prop_kinds_object_list(self):
        assert prop_kinds("feature-list")["features"] == "array"
        assert prop_kinds("product-showcase")["featuredProduct"] == "string"
