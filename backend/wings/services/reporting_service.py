# Overview: Report view-models over one store snapshot, plus plain-text exports.

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from wings.models import Snapshot
from wings.services import analytics
from wings.time_utils import parse_iso_datetime, to_utc_z, utcnow

EXPORTABLE_REPORTS = ("sales", "inventory", "customers")

# Upper bound for every days-based report window (ten years).
MAX_REPORT_DAYS = 3650


class ReportError(Exception):
    """Raised when report parameters are invalid."""
    pass


def serialize(value: Any) -> Any:
    """Turn report values into JSON-ready data; records use their wire format."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def _positive(name: str, value: int, max_value: int | None = None) -> int:
    if value is None or value <= 0:
        raise ReportError(f"{name} must be a positive integer")
    if max_value is not None and value > max_value:
        raise ReportError(f"{name} cannot exceed {max_value}")
    return value


def _parse_range(
    start: str | None,
    end: str | None,
    *,
    default_days: int,
    now: datetime,
) -> tuple[datetime, datetime]:
    try:
        start_dt = parse_iso_datetime(start) if start else None
        end_dt = parse_iso_datetime(end) if end else None
    except ValueError:
        raise ReportError("start and end must be ISO-8601 dates")

    end_dt = end_dt or now
    if start_dt is None:
        days = _positive("days", default_days, MAX_REPORT_DAYS)
        try:
            start_dt = end_dt - timedelta(days=days)
        except OverflowError:
            raise ReportError("end is too early for the default window")
    if start_dt > end_dt:
        raise ReportError("start must not be after end")
    return start_dt, end_dt


def inventory_report(snapshot: Snapshot) -> dict:
    return serialize(analytics.inventory_report(snapshot.products))


def customer_report(snapshot: Snapshot) -> dict:
    return serialize(analytics.customer_report(snapshot.customers))


def sales_report(
    snapshot: Snapshot,
    *,
    start: str | None = None,
    end: str | None = None,
    default_days: int = 30,
    now: datetime | None = None,
) -> dict:
    start_dt, end_dt = _parse_range(start, end, default_days=default_days, now=now or utcnow())
    report = analytics.sales_report(snapshot.transactions, start_dt, end_dt)
    return {"start": to_utc_z(start_dt), "end": to_utc_z(end_dt), **report}


def daily_sales(snapshot: Snapshot, *, days: int = 7, today: date | None = None) -> list[dict]:
    return analytics.daily_sales_series(
        snapshot.transactions, _positive("days", days, MAX_REPORT_DAYS), today=today
    )


def top_products(snapshot: Snapshot, *, limit: int = 10) -> list[dict]:
    return analytics.top_selling_products(
        snapshot.transactions, snapshot.products, _positive("limit", limit)
    )


def stock_movement(snapshot: Snapshot, *, days: int = 30, now: datetime | None = None) -> list[dict]:
    return analytics.stock_movement_report(
        snapshot.transactions, snapshot.products, _positive("days", days, MAX_REPORT_DAYS), now=now
    )


def top_customers(snapshot: Snapshot, *, limit: int = 5) -> list[dict]:
    return serialize(analytics.top_customers(snapshot.customers, _positive("limit", limit)))


def recent_customers(snapshot: Snapshot, *, limit: int = 5) -> list[dict]:
    return serialize(analytics.recent_customers(snapshot.customers, _positive("limit", limit)))


def export_text(
    kind: str,
    snapshot: Snapshot,
    *,
    currency: str = "R",
    start: str | None = None,
    end: str | None = None,
    default_days: int = 30,
    now: datetime | None = None,
) -> str:
    """Plain-text summary of the sales, inventory or customers report."""
    if kind == "sales":
        report = sales_report(snapshot, start=start, end=end, default_days=default_days, now=now)
        lines = [
            f"Sales Report ({report['start'][:10]} to {report['end'][:10]})",
            f"Total Sales: {currency}{report['total_sales']:.2f}",
            f"Total Transactions: {report['total_transactions']}",
            f"Total Items Sold: {report['total_items_sold']}",
            f"Average Transaction: {currency}{report['average_transaction']:.2f}",
        ]
    elif kind == "inventory":
        report = analytics.inventory_report(snapshot.products)
        lines = [
            "Inventory Report",
            f"Total Products: {report['total_products']}",
            f"Total Inventory Value: {currency}{report['total_value']:.2f}",
            f"Low Stock Items: {report['low_stock_count']}",
            f"Out of Stock Items: {report['out_of_stock_count']}",
        ]
    elif kind == "customers":
        report = analytics.customer_report(snapshot.customers)
        stats = report["loyalty_stats"]
        lines = [
            "Customer Report",
            f"Total Customers: {report['total_customers']}",
            f"Total Revenue: {currency}{report['total_revenue']:.2f}",
            f"Average Spend: {currency}{report['average_spend']:.2f}",
            f"New Customers: {stats['new']}",
            f"Regular: {stats['regular']}",
            f"Silver: {stats['silver']}",
            f"Gold: {stats['gold']}",
        ]
    else:
        raise ReportError(f"report must be one of: {', '.join(EXPORTABLE_REPORTS)}")

    return "\n".join(lines) + "\n"
