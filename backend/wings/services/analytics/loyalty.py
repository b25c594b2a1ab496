# Overview: Loyalty tier classification from lifetime spend.

from __future__ import annotations

from enum import Enum

from wings.models import Customer

# Inclusive lower bounds; Gold has no upper bound.
SILVER_THRESHOLD = 200
GOLD_THRESHOLD = 500


class LoyaltyTier(str, Enum):
    NEW = "New"
    REGULAR = "Regular"
    SILVER = "Silver"
    GOLD = "Gold"


def loyalty_tier(total_spent) -> LoyaltyTier:
    """Map lifetime spend to a tier. Zero or missing spend is NEW."""
    if not total_spent:
        return LoyaltyTier.NEW
    if total_spent >= GOLD_THRESHOLD:
        return LoyaltyTier.GOLD
    if total_spent >= SILVER_THRESHOLD:
        return LoyaltyTier.SILVER
    return LoyaltyTier.REGULAR


def customer_tier(customer: Customer) -> LoyaltyTier:
    return loyalty_tier(customer.total_spent)
