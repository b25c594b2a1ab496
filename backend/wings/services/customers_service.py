# backend/wings/services/customers_service.py
"""
Customers Service

Lifetime stats (visitCount, totalSpent, lastVisit) are only changed by
recorded sales, see transactions_service.record_transaction.
"""
from __future__ import annotations

import csv
import dataclasses
import io

from wings.models import Customer, Transaction
from wings.services.analytics import customer_tier, customer_transactions
from wings.services.records import new_customer
from wings.services.storage import Store
from wings.time_utils import parse_iso_datetime
from wings.validation import RecordNotFound

CUSTOMER_MUTABLE_FIELDS = {"name", "email", "phone", "address", "notes"}

EXPORT_HEADER = [
    "Name", "Email", "Phone", "Address", "Total Spent", "Visit Count", "Last Visit", "Loyalty Tier",
]


def apply_customer_patch(c: Customer, patch: dict) -> Customer:
    return dataclasses.replace(c, **{k: v for k, v in patch.items() if k in CUSTOMER_MUTABLE_FIELDS})


def list_customers(*, store: Store) -> list[Customer]:
    return store.get("customers")


def get_customer(*, store: Store, customer_id: str) -> Customer:
    customer = store.snapshot().find_customer(customer_id)
    if customer is None:
        raise RecordNotFound("Customer", customer_id)
    return customer


def create_customer(*, store: Store, patch: dict) -> Customer:
    with store.session() as snapshot:
        customer = new_customer(patch, ids=store.ids)
        snapshot.customers.append(customer)
    return customer


def update_customer(*, store: Store, customer_id: str, patch: dict) -> Customer:
    with store.session() as snapshot:
        for index, existing in enumerate(snapshot.customers):
            if existing.id == customer_id:
                updated = apply_customer_patch(existing, patch)
                snapshot.customers[index] = updated
                break
        else:
            raise RecordNotFound("Customer", customer_id)
    return updated


def delete_customer(*, store: Store, customer_id: str) -> None:
    with store.session() as snapshot:
        remaining = [c for c in snapshot.customers if c.id != customer_id]
        if len(remaining) == len(snapshot.customers):
            raise RecordNotFound("Customer", customer_id)
        snapshot.customers = remaining


def list_customer_transactions(*, store: Store, customer_id: str) -> list[Transaction]:
    snapshot = store.snapshot()
    customer = snapshot.find_customer(customer_id)
    if customer is None:
        raise RecordNotFound("Customer", customer_id)
    return customer_transactions(customer, snapshot.transactions)


def export_customers_csv(customers: list[Customer]) -> str:
    """CSV of every customer with their derived loyalty tier."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for c in customers:
        last_visit = parse_iso_datetime(c.last_visit)
        writer.writerow([
            c.name,
            c.email or "",
            c.phone or "",
            c.address or "",
            c.total_spent or 0,
            c.visit_count or 0,
            last_visit.date().isoformat() if last_visit else "",
            customer_tier(c).value,
        ])
    return buffer.getvalue()
