# Overview: Record types for the three persisted collections (products, customers, transactions).

"""
Records are plain dataclasses. The persisted document uses camelCase keys;
attributes are snake_case. ``to_dict`` always emits every field (optional
ones as null) so a save/load/save cycle reproduces the same document.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

Number = Union[int, float]

SALE = "sale"
RESTOCK = "restock"
TRANSACTION_TYPES = (SALE, RESTOCK)


def _number(value: Any, default: Number = 0) -> Number:
    # Keep ints as ints and floats as floats so reloading does not reformat the file.
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass
class Product:
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: Number = 0
    quantity: int = 0
    min_stock_level: int = 0
    last_updated: Optional[str] = None
    last_sold: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            category=str(data.get("category") or ""),
            price=_number(data.get("price")),
            quantity=int(_number(data.get("quantity"))),
            min_stock_level=int(_number(data.get("minStockLevel"))),
            last_updated=_optional_str(data.get("lastUpdated")),
            last_sold=_optional_str(data.get("lastSold")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "minStockLevel": self.min_stock_level,
            "lastUpdated": self.last_updated,
            "lastSold": self.last_sold,
        }


@dataclass
class Customer:
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    visit_count: int = 0
    total_spent: Number = 0
    last_visit: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Customer":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            email=_optional_str(data.get("email")),
            phone=_optional_str(data.get("phone")),
            address=_optional_str(data.get("address")),
            notes=_optional_str(data.get("notes")),
            visit_count=int(_number(data.get("visitCount"))),
            total_spent=_number(data.get("totalSpent")),
            last_visit=_optional_str(data.get("lastVisit")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "notes": self.notes,
            "visitCount": self.visit_count,
            "totalSpent": self.total_spent,
            "lastVisit": self.last_visit,
        }


@dataclass(frozen=True)
class CustomerRef:
    """Contact details captured on a sale at the time it was rung up."""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "CustomerRef":
        return cls(
            name=_optional_str(data.get("name")),
            email=_optional_str(data.get("email")),
            phone=_optional_str(data.get("phone")),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass(frozen=True)
class Transaction:
    """Immutable sale/restock record. ``total`` is fixed when the record is created."""
    id: str
    type: str
    product_id: str
    product_name: str
    product_price: Number
    quantity: int
    total: Number
    date: str
    customer_id: Optional[str] = None
    customer: Optional[CustomerRef] = field(default=None)

    @property
    def is_sale(self) -> bool:
        return self.type == SALE

    @property
    def is_restock(self) -> bool:
        return self.type == RESTOCK

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        customer = data.get("customer")
        return cls(
            id=str(data["id"]),
            type=str(data.get("type") or ""),
            product_id=str(data.get("productId") or ""),
            product_name=str(data.get("productName") or ""),
            product_price=_number(data.get("productPrice")),
            quantity=int(_number(data.get("quantity"))),
            total=_number(data.get("total")),
            date=str(data.get("date") or ""),
            customer_id=_optional_str(data.get("customerId")),
            customer=CustomerRef.from_dict(customer) if isinstance(customer, dict) else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "productId": self.product_id,
            "productName": self.product_name,
            "productPrice": self.product_price,
            "quantity": self.quantity,
            "total": self.total,
            "date": self.date,
            "customerId": self.customer_id,
            "customer": self.customer.to_dict() if self.customer else None,
        }


@dataclass
class Snapshot:
    """Full in-memory copy of the three collections."""
    products: list[Product] = field(default_factory=list)
    customers: list[Customer] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    COLLECTIONS = ("products", "customers", "transactions")

    @classmethod
    def from_document(cls, document: dict) -> "Snapshot":
        return cls(
            products=[Product.from_dict(p) for p in document.get("products", [])],
            customers=[Customer.from_dict(c) for c in document.get("customers", [])],
            transactions=[Transaction.from_dict(t) for t in document.get("transactions", [])],
        )

    def to_document(self) -> dict:
        return {
            "products": [p.to_dict() for p in self.products],
            "customers": [c.to_dict() for c in self.customers],
            "transactions": [t.to_dict() for t in self.transactions],
        }

    def copy(self) -> "Snapshot":
        return Snapshot.from_document(self.to_document())

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def find_customer(self, customer_id: str) -> Optional[Customer]:
        return next((c for c in self.customers if c.id == customer_id), None)
