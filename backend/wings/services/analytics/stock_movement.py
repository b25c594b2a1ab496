# Overview: Per-product inbound/outbound quantities over a trailing window.

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from wings.models import Product, Transaction
from wings.time_utils import parse_iso_datetime, utcnow


def stock_movement_report(
    transactions: Iterable[Transaction],
    products: Sequence[Product],
    days: int = 30,
    now: Optional[datetime] = None,
) -> list[dict]:
    """
    One row per product, in product order, over transactions dated at or
    after ``now - days``. Products with no movement still get a zero row.
    """
    cutoff = (now or utcnow()) - timedelta(days=days)

    movement: dict[str, list[int]] = {}
    for t in transactions:
        occurred_at = parse_iso_datetime(t.date)
        if occurred_at is None or occurred_at < cutoff:
            continue
        totals = movement.setdefault(t.product_id, [0, 0])
        if t.is_restock:
            totals[0] += t.quantity
        elif t.is_sale:
            totals[1] += t.quantity

    rows = []
    for product in products:
        total_in, total_out = movement.get(product.id, (0, 0))
        rows.append({
            "id": product.id,
            "name": product.name,
            "quantity": product.quantity,
            "min_stock_level": product.min_stock_level,
            "total_in": total_in,
            "total_out": total_out,
            "net_movement": total_in - total_out,
        })
    return rows
