# Overview: Customer rankings, loyalty distribution and lifetime-stat updates.

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable, Optional, Sequence

from wings.models import Customer, Transaction
from wings.services.analytics.loyalty import LoyaltyTier, customer_tier
from wings.time_utils import parse_iso_datetime, to_utc_z, utcnow

REPORT_TOP_CUSTOMERS = 10


def _spend(customer: Customer):
    return customer.total_spent or 0


def _visited_at(customer: Customer) -> datetime:
    # Never-visited customers sort after everyone else.
    return parse_iso_datetime(customer.last_visit) or datetime.min


def top_customers(customers: Sequence[Customer], limit: int = 5) -> list[Customer]:
    """Highest lifetime spend first; ties keep input order."""
    # sorted(reverse=True) is stable for equal keys
    return sorted(customers, key=_spend, reverse=True)[:max(limit, 0)]


def recent_customers(customers: Sequence[Customer], limit: int = 5) -> list[Customer]:
    """Most recent visit first; customers with no visit come last."""
    return sorted(customers, key=_visited_at, reverse=True)[:max(limit, 0)]


def customer_report(customers: Sequence[Customer]) -> dict:
    loyalty_stats = {tier.value.lower(): 0 for tier in LoyaltyTier}
    for customer in customers:
        loyalty_stats[customer_tier(customer).value.lower()] += 1

    total_customers = len(customers)
    total_revenue = sum((_spend(c) for c in customers), 0)

    return {
        "total_customers": total_customers,
        "total_revenue": total_revenue,
        "average_spend": total_revenue / total_customers if total_customers else 0,
        "loyalty_stats": loyalty_stats,
        "top_customers": top_customers(customers, REPORT_TOP_CUSTOMERS),
    }


def update_customer_stats(
    customer: Customer,
    transaction_total,
    now: Optional[datetime] = None,
) -> Customer:
    """Return a copy with one more visit, the sale added to spend, and lastVisit = now."""
    return dataclasses.replace(
        customer,
        visit_count=(customer.visit_count or 0) + 1,
        total_spent=round(_spend(customer) + transaction_total, 2),
        last_visit=to_utc_z(now or utcnow()),
    )


def customer_transactions(customer: Customer, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sales that reference this customer by id, in recorded order."""
    return [t for t in transactions if t.is_sale and t.customer_id == customer.id]
