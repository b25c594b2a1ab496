# backend/wings/services/transactions_service.py
"""
Transactions Service - sales and restocks

A transaction, its stock movement and the customer's lifetime stats are
written in a single store session. Every check runs before the first change,
so a rejected sale leaves products, customers and history untouched.

CUSTOMER LINK: stats are only updated through an explicit ``customer_id``.
The free-form ``customer`` contact block is stored on the sale as captured
and is never used to guess which customer record to update.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Optional

from wings.models import SALE, CustomerRef, Transaction
from wings.services.analytics import update_customer_stats
from wings.services.records import new_transaction
from wings.services.storage import Store
from wings.time_utils import to_utc_z, utcnow
from wings.validation import RecordNotFound, ValidationError


class InsufficientStockError(ValidationError):
    """Raised when a sale asks for more units than are on hand."""

    def __init__(self, product_id: str, requested: int, on_hand: int):
        super().__init__(f"Not enough stock! Only {on_hand} available.")
        self.details = {
            "product_id": product_id,
            "requested_quantity": requested,
            "on_hand": on_hand,
        }


def list_transactions(*, store: Store) -> list[Transaction]:
    return store.get("transactions")


def record_transaction(
    *,
    store: Store,
    patch: dict,
    now: Optional[datetime] = None,
) -> Transaction:
    """
    Record a validated sale or restock.

    Raises:
        RecordNotFound: product or referenced customer does not exist
        InsufficientStockError: sale quantity exceeds stock on hand
    """
    now = now or utcnow()
    quantity = patch["quantity"]
    customer_id = patch.get("customer_id")
    contact = patch.get("customer")

    with store.session() as snapshot:
        product_index = next(
            (i for i, p in enumerate(snapshot.products) if p.id == patch["product_id"]),
            None,
        )
        if product_index is None:
            raise RecordNotFound("Product", patch["product_id"])
        product = snapshot.products[product_index]

        customer_index = None
        if customer_id:
            customer_index = next(
                (i for i, c in enumerate(snapshot.customers) if c.id == customer_id),
                None,
            )
            if customer_index is None:
                raise RecordNotFound("Customer", customer_id)

        is_sale = patch["type"] == SALE
        if is_sale and quantity > product.quantity:
            raise InsufficientStockError(product.id, quantity, product.quantity)

        if customer_index is not None and not contact:
            linked = snapshot.customers[customer_index]
            contact = {"name": linked.name, "email": linked.email, "phone": linked.phone}

        transaction = new_transaction(
            type=patch["type"],
            product=product,
            quantity=quantity,
            ids=store.ids,
            now=now,
            customer_id=customer_id or None,
            customer=CustomerRef(**contact) if contact else None,
        )

        if is_sale:
            snapshot.products[product_index] = dataclasses.replace(
                product,
                quantity=product.quantity - quantity,
                last_sold=to_utc_z(now),
            )
            if customer_index is not None:
                snapshot.customers[customer_index] = update_customer_stats(
                    snapshot.customers[customer_index], transaction.total, now=now
                )
        else:
            snapshot.products[product_index] = dataclasses.replace(
                product,
                quantity=product.quantity + quantity,
                last_updated=now.date().isoformat(),
            )

        snapshot.transactions.append(transaction)

    return transaction
