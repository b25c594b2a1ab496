# Overview: Pure report computations over in-memory products, customers and transactions.

"""
Analytics never touch storage and never raise on well-formed records. Every
function takes the collections it needs as arguments and returns new values.
Where a clock is involved ("today", "now") it is an explicit argument that
defaults to the current UTC time.
"""
from .loyalty import LoyaltyTier, loyalty_tier, customer_tier, SILVER_THRESHOLD, GOLD_THRESHOLD
from .inventory import total_inventory_value, inventory_report, is_low_stock, is_out_of_stock
from .customers import (
    top_customers,
    recent_customers,
    customer_report,
    update_customer_stats,
    customer_transactions,
)
from .sales import sales_report, daily_sales_series, top_selling_products, UNKNOWN_PRODUCT
from .stock_movement import stock_movement_report

__all__ = [
    "LoyaltyTier",
    "loyalty_tier",
    "customer_tier",
    "SILVER_THRESHOLD",
    "GOLD_THRESHOLD",
    "total_inventory_value",
    "inventory_report",
    "is_low_stock",
    "is_out_of_stock",
    "top_customers",
    "recent_customers",
    "customer_report",
    "update_customer_stats",
    "customer_transactions",
    "sales_report",
    "daily_sales_series",
    "top_selling_products",
    "UNKNOWN_PRODUCT",
    "stock_movement_report",
]
