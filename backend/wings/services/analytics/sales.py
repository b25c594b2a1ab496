# Overview: Period sales totals, per-day sales series and per-product revenue ranking.

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from wings.models import Product, Transaction
from wings.time_utils import date_token, parse_iso_datetime, utcnow

UNKNOWN_PRODUCT = "Unknown Product"


def _sales(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.is_sale]


def sales_report(transactions: Iterable[Transaction], start: datetime, end: datetime) -> dict:
    """
    Totals over sales dated within [start, end], both ends inclusive.

    Bounds are instants: a date-only end bound means midnight at the
    start of that day.
    """
    in_range = []
    for t in _sales(transactions):
        occurred_at = parse_iso_datetime(t.date)
        if occurred_at is not None and start <= occurred_at <= end:
            in_range.append(t)

    total_sales = sum((t.total for t in in_range), 0)
    count = len(in_range)

    return {
        "total_sales": total_sales,
        "total_transactions": count,
        "total_items_sold": sum(t.quantity for t in in_range),
        "average_transaction": total_sales / count if count else 0,
    }


def daily_sales_series(
    transactions: Iterable[Transaction],
    days: int = 7,
    today: Optional[date] = None,
) -> list[dict]:
    """
    Exactly ``days`` entries, oldest first, ending with ``today``.

    A sale belongs to a day when the day's YYYY-MM-DD token appears in its
    date string; days without sales report 0.
    """
    today = today or utcnow().date()
    sales = _sales(transactions)

    series = []
    for offset in range(days - 1, -1, -1):
        token = date_token(today - timedelta(days=offset))
        series.append({
            "date": token,
            "sales": sum((t.total for t in sales if token in t.date), 0),
        })
    return series


def top_selling_products(
    transactions: Iterable[Transaction],
    products: Sequence[Product],
    limit: int = 10,
) -> list[dict]:
    """
    Sales grouped by product id, highest revenue first.

    Names come from the current product list, not the name captured on the
    sale; deleted products show as "Unknown Product".
    """
    totals: dict[str, dict] = {}
    for t in _sales(transactions):
        row = totals.setdefault(t.product_id, {"quantity": 0, "revenue": 0})
        row["quantity"] += t.quantity
        row["revenue"] += t.total

    names = {p.id: p.name for p in products}
    rows = [
        {
            "id": product_id,
            "name": names.get(product_id, UNKNOWN_PRODUCT),
            "quantity": row["quantity"],
            "revenue": row["revenue"],
        }
        for product_id, row in totals.items()
    ]
    rows.sort(key=lambda r: r["revenue"], reverse=True)
    return rows[:max(limit, 0)]
