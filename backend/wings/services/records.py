# Overview: Record factory; assigns identity and defaults to new products, customers and transactions.

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from wings.models import Customer, CustomerRef, Product, Transaction
from wings.services.identity_service import IdentityService
from wings.time_utils import to_utc_z, utcnow

DEFAULT_CATEGORY = "General"
DEFAULT_MIN_STOCK_LEVEL = 5


def new_product(patch: dict, *, ids: IdentityService, today: Optional[date] = None) -> Product:
    """Build a Product from a validated patch (record attribute names)."""
    today = today or utcnow().date()
    return Product(
        id=ids.next_id(),
        name=patch["name"],
        description=patch.get("description") or "",
        category=patch.get("category") or DEFAULT_CATEGORY,
        price=patch["price"],
        quantity=patch.get("quantity") or 0,
        min_stock_level=(
            patch["min_stock_level"]
            if patch.get("min_stock_level") is not None
            else DEFAULT_MIN_STOCK_LEVEL
        ),
        last_updated=today.isoformat(),
        last_sold=None,
    )


def new_customer(patch: dict, *, ids: IdentityService) -> Customer:
    """Build a Customer; lifetime stats start empty unless the patch seeds them."""
    return Customer(
        id=ids.next_id(),
        name=patch["name"],
        email=patch.get("email"),
        phone=patch.get("phone"),
        address=patch.get("address"),
        notes=patch.get("notes"),
        visit_count=patch.get("visit_count") or 0,
        total_spent=patch.get("total_spent") or 0,
        last_visit=patch.get("last_visit"),
    )


def new_transaction(
    *,
    type: str,
    product: Product,
    quantity: int,
    ids: IdentityService,
    now: Optional[datetime] = None,
    customer_id: Optional[str] = None,
    customer: Optional[CustomerRef] = None,
) -> Transaction:
    """
    Build an immutable Transaction against the product as it is right now.

    productName/productPrice are copied so later price edits never change
    what the sale was worth; total is fixed here as quantity * price,
    rounded to cents.
    """
    now = now or utcnow()
    return Transaction(
        id=ids.next_id(),
        type=type,
        product_id=product.id,
        product_name=product.name,
        product_price=product.price,
        quantity=quantity,
        total=round(quantity * product.price, 2),
        date=to_utc_z(now),
        customer_id=customer_id,
        customer=customer,
    )
