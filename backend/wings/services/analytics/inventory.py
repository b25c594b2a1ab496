# Overview: Inventory valuation and low/out-of-stock partitions over the product collection.

from __future__ import annotations

from typing import Iterable, Sequence

from wings.models import Product


def total_inventory_value(products: Iterable[Product]):
    """Sum of price * quantity; 0 for no products."""
    return sum((p.price * p.quantity for p in products), 0)


def is_out_of_stock(product: Product) -> bool:
    return product.quantity == 0


def is_low_stock(product: Product) -> bool:
    # Disjoint from out-of-stock: an empty shelf is never "low".
    return 0 < product.quantity <= product.min_stock_level


def inventory_report(products: Sequence[Product]) -> dict:
    """
    Valuation plus stock partitions. Item lists keep input order.
    """
    low_stock_items = [p for p in products if is_low_stock(p)]
    out_of_stock_items = [p for p in products if is_out_of_stock(p)]

    return {
        "total_products": len(products),
        "total_value": total_inventory_value(products),
        "low_stock_count": len(low_stock_items),
        "out_of_stock_count": len(out_of_stock_items),
        "low_stock_items": low_stock_items,
        "out_of_stock_items": out_of_stock_items,
    }
