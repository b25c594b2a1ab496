# Overview: Pytest coverage for loyalty tier classification.

import pytest

from wings.services.analytics import LoyaltyTier, customer_tier, loyalty_tier


class TestLoyaltyTier:
    """Tier boundaries are inclusive-lower at 200 and 500."""

    @pytest.mark.smoke
    @pytest.mark.analytics
    @pytest.mark.parametrize(
        "total_spent, expected",
        [
            (0, LoyaltyTier.NEW),
            (None, LoyaltyTier.NEW),
            (0.01, LoyaltyTier.REGULAR),
            (199.99, LoyaltyTier.REGULAR),
            (200, LoyaltyTier.SILVER),
            (499.99, LoyaltyTier.SILVER),
            (500, LoyaltyTier.GOLD),
            (12_000, LoyaltyTier.GOLD),
        ],
    )
    def test_boundaries(self, total_spent, expected):
        assert loyalty_tier(total_spent) is expected

    def test_tier_values_are_display_names(self):
        assert [t.value for t in LoyaltyTier] == ["New", "Regular", "Silver", "Gold"]

    def test_customer_tier_reads_total_spent(self, make_customer):
        assert customer_tier(make_customer(total_spent=250)) is LoyaltyTier.SILVER
        assert customer_tier(make_customer(total_spent=0)) is LoyaltyTier.NEW
