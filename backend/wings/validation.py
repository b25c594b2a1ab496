from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from wings.models import TRANSACTION_TYPES
from wings.time_utils import parse_iso_datetime, to_utc_z


# Maximum price: 9,999,999.99
MAX_PRICE = 9_999_999.99

CONTACT_KEYS = frozenset({"name", "email", "phone"})


class ValidationError(ValueError):
    """400-level input problem."""


class RecordNotFound(LookupError):
    """404-level problem: the target id does not exist in its collection."""

    def __init__(self, entity: str, record_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id


@dataclass(frozen=True)
class FieldSpec:
    """
    Wire-level description of one client-settable field.

    attr: attribute name on the record dataclass
    kind: "string" | "integer" | "decimal" | "datetime" | "contact"
    """
    attr: str
    kind: str = "string"
    nullable: bool = False
    max_length: int | None = None


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - fields: every field the wire format knows about for this entity
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    """
    fields: dict[str, FieldSpec]
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()


PRODUCT_FIELDS = {
    "name": FieldSpec("name", max_length=200),
    "description": FieldSpec("description", nullable=True, max_length=2000),
    "category": FieldSpec("category", nullable=True, max_length=100),
    "price": FieldSpec("price", "decimal"),
    "quantity": FieldSpec("quantity", "integer"),
    "minStockLevel": FieldSpec("min_stock_level", "integer"),
}

CUSTOMER_FIELDS = {
    "name": FieldSpec("name", max_length=200),
    "email": FieldSpec("email", nullable=True, max_length=320),
    "phone": FieldSpec("phone", nullable=True, max_length=50),
    "address": FieldSpec("address", nullable=True, max_length=500),
    "notes": FieldSpec("notes", nullable=True, max_length=2000),
    "visitCount": FieldSpec("visit_count", "integer"),
    "totalSpent": FieldSpec("total_spent", "decimal"),
    "lastVisit": FieldSpec("last_visit", "datetime", nullable=True),
}

TRANSACTION_FIELDS = {
    "type": FieldSpec("type", max_length=20),
    "productId": FieldSpec("product_id", max_length=64),
    "quantity": FieldSpec("quantity", "integer"),
    "customerId": FieldSpec("customer_id", nullable=True, max_length=64),
    "customer": FieldSpec("customer", "contact", nullable=True),
}

PRODUCT_CREATE_POLICY = ModelValidationPolicy(
    fields=PRODUCT_FIELDS,
    writable_fields=frozenset(PRODUCT_FIELDS),
    required_on_create=frozenset({"name", "price"}),
)
PRODUCT_UPDATE_POLICY = PRODUCT_CREATE_POLICY

# Lifetime stats may be seeded on create (imports) but only sales change them afterwards.
CUSTOMER_CREATE_POLICY = ModelValidationPolicy(
    fields=CUSTOMER_FIELDS,
    writable_fields=frozenset(CUSTOMER_FIELDS),
    required_on_create=frozenset({"name"}),
)
CUSTOMER_UPDATE_POLICY = ModelValidationPolicy(
    fields=CUSTOMER_FIELDS,
    writable_fields=frozenset({"name", "email", "phone", "address", "notes"}),
)

TRANSACTION_CREATE_POLICY = ModelValidationPolicy(
    fields=TRANSACTION_FIELDS,
    writable_fields=frozenset(TRANSACTION_FIELDS),
    required_on_create=frozenset({"type", "productId", "quantity"}),
)


def _coerce_value(key: str, spec: FieldSpec, value: Any):
    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if spec.kind == "integer":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValidationError(f"{key} must be an integer")
            if "e" in stripped.lower():
                raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
            if "." in stripped:
                raise ValidationError(f"{key} must be an integer (no decimals)")
            try:
                return int(stripped)
            except ValueError:
                raise ValidationError(f"{key} must be an integer")
        if isinstance(value, float):
            if value.is_integer():
                return int(value)
            raise ValidationError(f"{key} must be an integer, not a decimal")
        raise ValidationError(f"{key} must be an integer")

    if spec.kind == "decimal":
        if isinstance(value, bool):
            raise ValidationError(f"{key} must be a number")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValidationError(f"{key} must be a finite number")
            return value
        if isinstance(value, str):
            stripped = value.strip()
            try:
                number = float(stripped)
            except ValueError:
                raise ValidationError(f"{key} must be a number")
            # float() also accepts "nan" and "inf"
            if not math.isfinite(number):
                raise ValidationError(f"{key} must be a finite number")
            return int(number) if number.is_integer() and "." not in stripped else number
        raise ValidationError(f"{key} must be a number")

    # Contact snapshot: {name, email, phone}, all optional strings
    if spec.kind == "contact":
        if not isinstance(value, dict):
            raise ValidationError(f"{key} must be an object")
        unknown = sorted(set(value) - CONTACT_KEYS)
        if unknown:
            raise ValidationError(f"{key} has unknown fields: {', '.join(unknown)}")
        return {
            k: (str(value[k]).strip() or None) if value.get(k) is not None else None
            for k in sorted(CONTACT_KEYS)
        }

    # Datetimes (accept ISO-8601 strings; stored as UTC 'Z' strings)
    if spec.kind == "datetime":
        if not isinstance(value, str):
            raise ValidationError(f"{key} must be an ISO-8601 datetime")
        try:
            dt = parse_iso_datetime(value)
        except ValueError:
            raise ValidationError(f"{key} must be an ISO-8601 datetime")
        return to_utc_z(dt)

    return str(value).strip()


def validate_payload(
    *,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against the policy's field specs.
    Returns a cleaned patch dict keyed by record attribute name.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(f for f in policy.required_on_create if payload.get(f) in (None, ""))
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    # Reject unknown / non-writable fields. "id" is tolerated on update
    # because clients echo back whole records.
    for k in payload.keys():
        if k == "id" and partial:
            continue
        if k not in policy.fields:
            raise ValidationError(f"Unknown field: {k}")
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        if k == "id":
            continue
        spec = policy.fields[k]

        if raw is None:
            if not spec.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[spec.attr] = None
            continue

        val = _coerce_value(k, spec, raw)

        if spec.kind == "string" and not spec.nullable and val == "":
            raise ValidationError(f"{k} cannot be blank")

        if spec.max_length and isinstance(val, str) and len(val) > spec.max_length:
            raise ValidationError(f"{k} exceeds max length {spec.max_length}")

        patch[spec.attr] = val

    return patch


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by field specs alone.
    Keep these small and centralized.
    """
    if "price" in patch:
        price = patch["price"]
        if price <= 0:
            raise ValidationError("price must be > 0")
        if price > MAX_PRICE:
            raise ValidationError(f"price cannot exceed {MAX_PRICE:,.2f}")

    if "quantity" in patch and patch["quantity"] < 0:
        raise ValidationError("quantity cannot be negative")

    if "min_stock_level" in patch and patch["min_stock_level"] < 0:
        raise ValidationError("minStockLevel cannot be negative")


def enforce_rules_customer(patch: dict) -> None:
    if "visit_count" in patch and patch["visit_count"] < 0:
        raise ValidationError("visitCount cannot be negative")

    if "total_spent" in patch and patch["total_spent"] < 0:
        raise ValidationError("totalSpent cannot be negative")


def enforce_rules_transaction(patch: dict) -> None:
    # Both SALE and RESTOCK move a strictly positive quantity
    if patch.get("type") not in TRANSACTION_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(TRANSACTION_TYPES)}")

    if patch.get("quantity") is None or patch["quantity"] <= 0:
        raise ValidationError("quantity must be > 0")
