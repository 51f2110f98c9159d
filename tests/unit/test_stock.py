"""Unit tests for stock derivations"""

import pytest
from datetime import date

from campus_dashboard.domain.exceptions import UnknownRecordError
from campus_dashboard.domain.models import StockProduct
from campus_dashboard.domain.stock import (
    category_rows,
    is_low_stock,
    low_stock_count,
    product_rows,
    quote_order,
    stock_snapshot,
    top_valued_products,
)


def test_filter_by_science_category(products, categories):
    """Science returns exactly the lab kit and goggles, one of them low on stock"""
    rows = product_rows(products, categories, category="Science")

    assert [r.name for r in rows] == ["Chemistry Lab Kit", "Safety Goggles"]
    assert low_stock_count(rows) == 1
    assert [r.name for r in rows if r.low_stock] == ["Safety Goggles"]


def test_category_filter_accepts_id(products, categories):
    assert [r.id for r in product_rows(products, categories, category="cat-002")] == ["prod-002", "prod-005"]


def test_all_category_and_empty_search_keep_catalogue_order(products, categories):
    rows = product_rows(products, categories)
    assert [r.id for r in rows] == [p.id for p in products]


def test_search_matches_category_name(products, categories):
    rows = product_rows(products, categories, search="literature")
    assert [r.id for r in rows] == ["prod-003"]


def test_low_stock_boundary_is_inclusive():
    product = StockProduct("p", "Edge", "cat-001", 30, 30, 1, date(2025, 1, 1))
    assert is_low_stock(product) is True


def test_unknown_category_is_labelled(categories):
    orphan = StockProduct("p-x", "Orphan", "cat-999", 5, 1, 2, date(2025, 1, 1))
    rows = product_rows([orphan], categories)
    assert rows[0].category_name == "Unknown"


def test_stock_snapshot(products, categories):
    snapshot = stock_snapshot(products, categories)
    assert snapshot.total_books == 220 + 54 + 140 + 480 + 35
    assert snapshot.low_stock == 1
    assert snapshot.categories == 4


def test_stock_snapshot_empty():
    snapshot = stock_snapshot([], [])
    assert (snapshot.total_books, snapshot.low_stock, snapshot.categories) == (0, 0, 0)


def test_category_rows_count_products(products, categories):
    rows = {r.id: r for r in category_rows(categories, products)}
    assert rows["cat-002"].product_count == 2
    assert rows["cat-002"].total_quantity == 89
    assert rows["cat-004"].product_count == 1


def test_category_rows_search_description(products, categories):
    rows = category_rows(categories, products, search="pencils")
    assert [r.name for r in rows] == ["Stationery"]


def test_top_valued_products_ordering(products, categories):
    top = top_valued_products(products, categories)
    assert len(top) == 5
    # Chemistry Lab Kit: 54 * 120 = 6480 is the most valuable line
    assert top[0].name == "Chemistry Lab Kit"
    assert top[0].valuation == 6480
    assert [v.valuation for v in top] == sorted((v.valuation for v in top), reverse=True)


def test_quote_order_totals(products):
    quote = quote_order(products, [("prod-001", 2), ("prod-004", 5)], tax_rate=0.0825, discount_percent=10)

    assert quote.subtotal == 64  # 2 * 22 + 5 * 4
    assert quote.tax_amount == 5.28
    assert quote.discount_amount == 6.4
    assert quote.grand_total == 62.88
    assert quote.total_items == 7


def test_quote_order_clamps_quantity_and_discount(products):
    quote = quote_order(products, [("prod-005", 100)], tax_rate=0.0, discount_percent=250)

    assert quote.lines[0].quantity == 35
    assert quote.lines[0].clamped is True
    assert quote.discount_percent == 100
    assert quote.grand_total == 0


def test_quote_order_unknown_product(products):
    with pytest.raises(UnknownRecordError):
        quote_order(products, [("prod-404", 1)], tax_rate=0.0825)
