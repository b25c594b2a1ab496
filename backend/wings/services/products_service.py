# backend/wings/services/products_service.py
"""
Products Service

Every mutation runs inside one store session: the whole document is read,
changed in memory and written back once. Callers pass patches already
cleaned by ``validate_payload`` (record attribute names, coerced types).
"""
from __future__ import annotations

import dataclasses

from wings.models import Product
from wings.services.records import new_product
from wings.services.storage import Store
from wings.time_utils import utcnow
from wings.validation import RecordNotFound

PRODUCT_MUTABLE_FIELDS = {"name", "description", "category", "price", "quantity", "min_stock_level"}


def apply_product_patch(p: Product, patch: dict) -> Product:
    changes = {k: v for k, v in patch.items() if k in PRODUCT_MUTABLE_FIELDS}
    if "description" in changes and changes["description"] is None:
        changes["description"] = ""
    if "category" in changes and changes["category"] is None:
        changes["category"] = ""
    return dataclasses.replace(p, **changes, last_updated=utcnow().date().isoformat())


def list_products(*, store: Store) -> list[Product]:
    return store.get("products")


def get_product(*, store: Store, product_id: str) -> Product:
    product = store.snapshot().find_product(product_id)
    if product is None:
        raise RecordNotFound("Product", product_id)
    return product


def create_product(*, store: Store, patch: dict) -> Product:
    """Create product using a validated patch dict."""
    with store.session() as snapshot:
        product = new_product(patch, ids=store.ids)
        snapshot.products.append(product)
    return product


def update_product(*, store: Store, product_id: str, patch: dict) -> Product:
    """
    Apply a partial update. Raises RecordNotFound without writing anything
    when the id is unknown.
    """
    with store.session() as snapshot:
        for index, existing in enumerate(snapshot.products):
            if existing.id == product_id:
                updated = apply_product_patch(existing, patch)
                snapshot.products[index] = updated
                break
        else:
            raise RecordNotFound("Product", product_id)
    return updated


def delete_product(*, store: Store, product_id: str) -> None:
    """
    Remove a product. Its past transactions are kept; reports show them
    under "Unknown Product".
    """
    with store.session() as snapshot:
        remaining = [p for p in snapshot.products if p.id != product_id]
        if len(remaining) == len(snapshot.products):
            raise RecordNotFound("Product", product_id)
        snapshot.products = remaining
