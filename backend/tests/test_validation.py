# Overview: Pytest coverage for payload validation policies and business rules.

import pytest

from wings.validation import (
    CUSTOMER_CREATE_POLICY,
    CUSTOMER_UPDATE_POLICY,
    PRODUCT_CREATE_POLICY,
    PRODUCT_UPDATE_POLICY,
    TRANSACTION_CREATE_POLICY,
    ValidationError,
    enforce_rules_customer,
    enforce_rules_product,
    enforce_rules_transaction,
    validate_payload,
)


class TestProductPayload:

    def test_create_coerces_form_strings(self):
        patch = validate_payload(
            payload={"name": "  Latte ", "price": "25.50", "quantity": "12", "minStockLevel": "4"},
            policy=PRODUCT_CREATE_POLICY,
            partial=False,
        )
        assert patch == {"name": "Latte", "price": 25.5, "quantity": 12, "min_stock_level": 4}

    def test_missing_required(self):
        with pytest.raises(ValidationError, match="price"):
            validate_payload(payload={"name": "Latte"}, policy=PRODUCT_CREATE_POLICY, partial=False)

    def test_id_rejected_on_create(self):
        with pytest.raises(ValidationError, match="Unknown field: id"):
            validate_payload(payload={"id": "1", "name": "x", "price": 1}, policy=PRODUCT_CREATE_POLICY, partial=False)

    def test_update_ignores_echoed_id(self):
        patch = validate_payload(payload={"id": "1", "price": 3}, policy=PRODUCT_UPDATE_POLICY, partial=True)
        assert patch == {"price": 3}

    @pytest.mark.parametrize("field", ["lastUpdated", "lastSold", "total", "whatever"])
    def test_server_managed_fields_rejected(self, field):
        with pytest.raises(ValidationError):
            validate_payload(payload={field: "x"}, policy=PRODUCT_UPDATE_POLICY, partial=True)

    @pytest.mark.parametrize("value", ["1.5", 1.5, "1e3", True, "abc"])
    def test_quantity_must_be_integer(self, value):
        with pytest.raises(ValidationError):
            validate_payload(payload={"quantity": value}, policy=PRODUCT_UPDATE_POLICY, partial=True)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="blank"):
            validate_payload(payload={"name": "   "}, policy=PRODUCT_UPDATE_POLICY, partial=True)

    @pytest.mark.parametrize(
        "patch",
        [{"price": 0}, {"price": -1}, {"price": 10_000_000}, {"quantity": -1}, {"min_stock_level": -2}],
    )
    def test_business_rules(self, patch):
        with pytest.raises(ValidationError):
            enforce_rules_product(patch)

    @pytest.mark.parametrize("value", [float("nan"), "nan", "NaN", "Infinity", float("-inf"), "-Infinity"])
    def test_price_must_be_finite(self, value):
        with pytest.raises(ValidationError, match="finite"):
            validate_payload(payload={"price": value}, policy=PRODUCT_UPDATE_POLICY, partial=True)


class TestCustomerPayload:

    def test_create_may_seed_stats(self):
        patch = validate_payload(
            payload={"name": "Ann", "totalSpent": 120, "visitCount": 3, "lastVisit": "2024-01-01T10:00:00+02:00"},
            policy=CUSTOMER_CREATE_POLICY,
            partial=False,
        )
        assert patch["total_spent"] == 120
        assert patch["visit_count"] == 3
        assert patch["last_visit"] == "2024-01-01T08:00:00.000Z"

    @pytest.mark.parametrize("field", ["totalSpent", "visitCount", "lastVisit"])
    def test_update_cannot_touch_stats(self, field):
        with pytest.raises(ValidationError, match="not allowed"):
            validate_payload(payload={field: 1}, policy=CUSTOMER_UPDATE_POLICY, partial=True)

    def test_optional_contact_fields_nullable(self):
        patch = validate_payload(payload={"email": None}, policy=CUSTOMER_UPDATE_POLICY, partial=True)
        assert patch == {"email": None}

    def test_negative_spend_rejected(self):
        with pytest.raises(ValidationError):
            enforce_rules_customer({"total_spent": -5})

    @pytest.mark.parametrize("value", [float("nan"), "nan", "Infinity", float("inf"), "-Infinity"])
    def test_total_spent_must_be_finite(self, value):
        with pytest.raises(ValidationError, match="finite"):
            validate_payload(
                payload={"name": "Ann", "totalSpent": value},
                policy=CUSTOMER_CREATE_POLICY,
                partial=False,
            )


class TestTransactionPayload:

    def test_sale_with_contact(self):
        patch = validate_payload(
            payload={"type": "sale", "productId": "p1", "quantity": 2, "customer": {"email": "a@b.c"}},
            policy=TRANSACTION_CREATE_POLICY,
            partial=False,
        )
        enforce_rules_transaction(patch)
        assert patch["customer"] == {"email": "a@b.c", "name": None, "phone": None}

    def test_client_total_rejected(self):
        with pytest.raises(ValidationError, match="total"):
            validate_payload(
                payload={"type": "sale", "productId": "p1", "quantity": 1, "total": 0.01},
                policy=TRANSACTION_CREATE_POLICY,
                partial=False,
            )

    @pytest.mark.parametrize("patch", [{"type": "refund", "quantity": 1}, {"type": "sale", "quantity": 0}])
    def test_rules(self, patch):
        with pytest.raises(ValidationError):
            enforce_rules_transaction(patch)

    def test_contact_unknown_keys(self):
        with pytest.raises(ValidationError, match="unknown fields"):
            validate_payload(
                payload={"type": "sale", "productId": "p1", "quantity": 1, "customer": {"vip": True}},
                policy=TRANSACTION_CREATE_POLICY,
                partial=False,
            )
