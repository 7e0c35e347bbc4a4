"""
Unit Tests - Product List Normalizer
"""
import json

import pytest

from src.analytics import codec
from src.analytics.errors import MalformedProductList
from src.analytics.normalizer import MalformedListPolicy, normalize_products, parse_legacy_products
from src.database.models import OrderLine
from fakes import PRODUCT_1, PRODUCT_2


class TestNormalizeProducts:
    """Tests for normalize_products"""

    def test_legacy_string(self):
        """Single-quoted legacy text parses into order lines"""
        raw = "[{'productId': 'P1', 'quantity': 2, 'priceAtPurchase': 10}]"

        lines = normalize_products(raw)

        assert lines == [OrderLine(product_id="P1", quantity=2, price_at_purchase=10)]
        assert lines[0].model_dump(by_alias=True) == {
            "productId": "P1",
            "quantity": 2,
            "priceAtPurchase": 10.0,
        }

    def test_native_list_keeps_order(self):
        raw = [
            {"productId": PRODUCT_2, "quantity": 1, "priceAtPurchase": 40},
            {"productId": PRODUCT_1, "quantity": 3, "priceAtPurchase": 20},
        ]

        lines = normalize_products(raw)

        assert [line.product_id for line in lines] == [PRODUCT_2, PRODUCT_1]
        assert [line.quantity for line in lines] == [1, 3]

    def test_native_list_with_binary_product_ids(self):
        raw = [{"productId": codec.encode(PRODUCT_1), "quantity": 1, "priceAtPurchase": 5}]

        assert normalize_products(raw)[0].product_id == PRODUCT_1

    def test_unreadable_lines_are_dropped(self):
        raw = [
            {"productId": "P1", "quantity": 1, "priceAtPurchase": 5},
            {"quantity": 2},
            "junk",
            {"productId": "P2", "quantity": "many", "priceAtPurchase": 1},
        ]

        assert [line.product_id for line in normalize_products(raw)] == ["P1"]

    def test_reparsing_own_output_is_idempotent(self):
        first = normalize_products(
            f"[{{'productId': '{PRODUCT_1}', 'quantity': 2, 'priceAtPurchase': 10.5}}, "
            f"{{'productId': '{PRODUCT_2}', 'quantity': 1, 'priceAtPurchase': 3}}]"
        )
        serialized = json.dumps([line.model_dump(by_alias=True) for line in first]).replace('"', "'")

        assert normalize_products(serialized) == first

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "not json",
            "[{'productId': 'P1', 'quantity': 2,",
            "{'productId': 'P1', 'quantity': 2, 'priceAtPurchase': 10}",
            "'just a string'",
            "42",
            "[{'productId': 'P1', 'quantity': 1, 'priceAtPurchase': None}]x",
            "[{'name': 'O'Brien'}]",
            "[" * 100000,
        ],
    )
    def test_malformed_strings_degrade_to_empty(self, raw):
        assert normalize_products(raw) == []

    @pytest.mark.parametrize("raw", [None, 17, {"productId": "P1"}])
    def test_other_types_degrade_to_empty(self, raw):
        assert normalize_products(raw) == []

    def test_raise_policy_surfaces_malformed_list(self):
        with pytest.raises(MalformedProductList):
            normalize_products("not json", policy=MalformedListPolicy.RAISE)

    def test_empty_legacy_list(self):
        assert normalize_products("[]") == []


class TestParseLegacyProducts:
    """Tests for parse_legacy_products"""

    def test_returns_raw_items(self):
        assert parse_legacy_products("[{'a': 1}]") == [{"a": 1}]

    def test_rejects_non_list(self):
        with pytest.raises(MalformedProductList):
            parse_legacy_products("{'a': 1}")

    def test_runaway_nesting_is_malformed(self):
        with pytest.raises(MalformedProductList):
            parse_legacy_products("[" * 100000)
