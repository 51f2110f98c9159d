"""Stock derivations - low-stock detection, catalogue rows, valuation and POS quotes"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from campus_dashboard.domain.derivation import (
    ALL,
    FilterPolicy,
    QueryCriteria,
    RecordIndex,
    apply_filters,
    count_where,
    group_by,
    sum_of,
)
from campus_dashboard.domain.exceptions import UnknownRecordError
from campus_dashboard.domain.models import StockCategory, StockProduct, StockSnapshot

UNKNOWN_CATEGORY = "Unknown"
TOP_VALUED_LIMIT = 5

PRODUCT_POLICY = FilterPolicy(search_fields=("id", "name", "category_name"))
CATEGORY_POLICY = FilterPolicy(search_fields=("id", "name", "description"))


@dataclass(frozen=True)
class ProductRow:
    id: str
    name: str
    category_id: str
    category_name: str
    quantity: int
    reorder_point: int
    unit_price: float
    low_stock: bool


@dataclass(frozen=True)
class CategoryRow:
    id: str
    name: str
    description: Optional[str]
    product_count: int
    total_quantity: int


@dataclass(frozen=True)
class ValuedProduct:
    id: str
    name: str
    category_name: str
    quantity: int
    valuation: float


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float
    clamped: bool


@dataclass(frozen=True)
class OrderQuote:
    lines: List[OrderLine]
    total_items: int
    subtotal: float
    tax_amount: float
    discount_percent: float
    discount_amount: float
    grand_total: float


def is_low_stock(product: StockProduct) -> bool:
    """Low stock means on-hand quantity at or below the reorder point"""
    return product.quantity <= product.reorder_point


def stock_snapshot(products: Sequence[StockProduct], categories: Sequence[StockCategory]) -> StockSnapshot:
    return StockSnapshot(
        total_books=sum_of(products, lambda p: p.quantity),
        low_stock=count_where(products, is_low_stock),
        categories=len(categories),
    )


def product_rows(
    products: Sequence[StockProduct],
    categories: Sequence[StockCategory],
    search: str = "",
    category: str = ALL,
) -> List[ProductRow]:
    """
    Catalogue rows joined with their category name.

    `category` matches either the category id or its display name, so both
    "cat-002" and "Science" select the same products.
    """
    index = RecordIndex(categories)
    rows = [
        ProductRow(
            id=p.id,
            name=p.name,
            category_id=p.category_id,
            category_name=index.resolve(p.category_id, "name", UNKNOWN_CATEGORY),
            quantity=p.quantity,
            reorder_point=p.reorder_point,
            unit_price=p.unit_price,
            low_stock=is_low_stock(p),
        )
        for p in products
    ]
    rows = apply_filters(rows, PRODUCT_POLICY, QueryCriteria(search=search))
    if category and category != ALL:
        rows = [r for r in rows if category in (r.category_id, r.category_name)]
    return rows


def low_stock_count(rows: Sequence[ProductRow]) -> int:
    return count_where(rows, lambda r: r.low_stock)


def category_rows(
    categories: Sequence[StockCategory],
    products: Sequence[StockProduct],
    search: str = "",
) -> List[CategoryRow]:
    by_category = group_by(products, lambda p: p.category_id)
    filtered = apply_filters(categories, CATEGORY_POLICY, QueryCriteria(search=search))
    return [
        CategoryRow(
            id=c.id,
            name=c.name,
            description=c.description,
            product_count=len(by_category.get(c.id, [])),
            total_quantity=sum(p.quantity for p in by_category.get(c.id, [])),
        )
        for c in filtered
    ]


def top_valued_products(
    products: Sequence[StockProduct],
    categories: Sequence[StockCategory],
    limit: int = TOP_VALUED_LIMIT,
) -> List[ValuedProduct]:
    """Products ranked by unit price x quantity, highest first"""
    index = RecordIndex(categories)
    valued = [
        ValuedProduct(
            id=p.id,
            name=p.name,
            category_name=index.resolve(p.category_id, "name", UNKNOWN_CATEGORY),
            quantity=p.quantity,
            valuation=p.unit_price * p.quantity,
        )
        for p in products
    ]
    # sorted() is stable, so equal valuations keep catalogue order
    return sorted(valued, key=lambda v: v.valuation, reverse=True)[:limit]


def clamp_discount(discount_percent: float) -> float:
    return min(max(discount_percent or 0.0, 0.0), 100.0)


def quote_order(
    products: Sequence[StockProduct],
    lines: Sequence[Tuple[str, int]],
    tax_rate: float,
    discount_percent: float = 0.0,
) -> OrderQuote:
    """
    Price a point-of-sale order.

    - Requested quantities above on-hand stock are clamped to stock
    - Lines with zero effective quantity are dropped
    - Tax applies to the subtotal, discount is a clamped percentage of it
    - Grand total never goes below zero

    Raises:
        UnknownRecordError: A line references a product not in the catalogue
    """
    index = RecordIndex(products)
    quantities: Dict[str, int] = {}
    for product_id, quantity in lines:
        if product_id not in index:
            raise UnknownRecordError(f"Unknown product '{product_id}'")
        quantities[product_id] = quantities.get(product_id, 0) + quantity

    order_lines = []
    for product_id, requested in quantities.items():
        product = index.get(product_id)
        available = max(product.quantity, 0)
        quantity = min(requested, available)
        if quantity <= 0:
            continue
        order_lines.append(
            OrderLine(
                product_id=product.id,
                name=product.name,
                quantity=quantity,
                unit_price=product.unit_price,
                line_total=quantity * product.unit_price,
                clamped=quantity < requested,
            )
        )

    subtotal = sum(line.line_total for line in order_lines)
    discount = clamp_discount(discount_percent)
    discount_amount = subtotal * (discount / 100)
    tax_amount = subtotal * tax_rate

    return OrderQuote(
        lines=order_lines,
        total_items=sum(line.quantity for line in order_lines),
        subtotal=round(subtotal, 2),
        tax_amount=round(tax_amount, 2),
        discount_percent=discount,
        discount_amount=round(discount_amount, 2),
        grand_total=round(max(subtotal + tax_amount - discount_amount, 0.0), 2),
    )
