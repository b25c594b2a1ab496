# Overview: Pytest coverage for product/customer services and the reporting service.

from datetime import datetime

import pytest

from wings.models import Snapshot
from wings.services import customers_service, products_service, reporting_service
from wings.services.reporting_service import ReportError
from wings.validation import RecordNotFound


class TestProductsService:

    def test_create_assigns_id_and_defaults(self, store):
        product = products_service.create_product(store=store, patch={"name": "Muffin", "price": 15})

        assert product.id.isdigit()
        assert product.category == "General"
        assert product.min_stock_level == 5
        assert product.quantity == 0
        assert product.last_updated is not None
        assert products_service.list_products(store=store) == [product]

    def test_update_only_changes_patch_fields(self, store):
        created = products_service.create_product(
            store=store, patch={"name": "Muffin", "price": 15, "quantity": 4}
        )
        updated = products_service.update_product(
            store=store, product_id=created.id, patch={"price": 17, "id": "hijack"}
        )

        assert updated.id == created.id
        assert updated.price == 17
        assert updated.quantity == 4

    def test_update_and_delete_unknown(self, store):
        with pytest.raises(RecordNotFound):
            products_service.update_product(store=store, product_id="nope", patch={"price": 1})
        with pytest.raises(RecordNotFound):
            products_service.delete_product(store=store, product_id="nope")

    def test_delete(self, store):
        created = products_service.create_product(store=store, patch={"name": "Muffin", "price": 15})
        products_service.delete_product(store=store, product_id=created.id)
        assert products_service.list_products(store=store) == []


class TestCustomersService:

    def test_create_starts_with_empty_stats(self, store):
        customer = customers_service.create_customer(store=store, patch={"name": "Bo"})
        assert (customer.visit_count, customer.total_spent, customer.last_visit) == (0, 0, None)

    def test_update_ignores_stat_fields(self, store):
        created = customers_service.create_customer(store=store, patch={"name": "Bo", "total_spent": 50})
        updated = customers_service.update_customer(
            store=store, customer_id=created.id, patch={"phone": "123", "total_spent": 0}
        )
        assert updated.phone == "123"
        assert updated.total_spent == 50

    def test_delete_unknown(self, store):
        with pytest.raises(RecordNotFound):
            customers_service.delete_customer(store=store, customer_id="nope")

    def test_export_csv(self, make_customer):
        csv_text = customers_service.export_customers_csv([
            make_customer("c1", name="Ann", email="ann@example.com", total_spent=250, visit_count=2,
                          last_visit="2024-05-01T10:00:00.000Z"),
            make_customer("c2", name="Bo, Jr."),
        ])
        lines = csv_text.splitlines()

        assert lines[0] == "Name,Email,Phone,Address,Total Spent,Visit Count,Last Visit,Loyalty Tier"
        assert lines[1] == "Ann,ann@example.com,,,250,2,2024-05-01,Silver"
        assert lines[2] == '"Bo, Jr.",,,,0,0,,New'


class TestReportingService:

    @pytest.fixture
    def snapshot(self, make_product, make_customer, make_transaction):
        return Snapshot(
            products=[make_product("p1", price=10, quantity=5, min_stock_level=3)],
            customers=[make_customer("c1", total_spent=600)],
            transactions=[make_transaction("t1", quantity=2, total=20, date="2024-01-01T09:00:00.000Z")],
        )

    def test_inventory_report_serializes_records(self, snapshot, make_product):
        snapshot.products.append(make_product("p2", quantity=0))
        report = reporting_service.inventory_report(snapshot)

        assert report["total_value"] == 50
        assert report["out_of_stock_items"][0]["id"] == "p2"
        assert report["out_of_stock_items"][0]["minStockLevel"] == 3

    def test_sales_report_default_window(self, snapshot):
        report = reporting_service.sales_report(snapshot, now=datetime(2024, 1, 15))
        assert report["start"] == "2023-12-16T00:00:00.000Z"
        assert report["total_sales"] == 20

    def test_sales_report_bad_range(self, snapshot):
        with pytest.raises(ReportError):
            reporting_service.sales_report(snapshot, start="2024-02-01", end="2024-01-01")
        with pytest.raises(ReportError):
            reporting_service.sales_report(snapshot, start="yesterday")

    def test_out_of_range_limits_rejected(self, snapshot):
        with pytest.raises(ReportError):
            reporting_service.top_products(snapshot, limit=0)
        with pytest.raises(ReportError):
            reporting_service.daily_sales(snapshot, days=-1)
        with pytest.raises(ReportError):
            reporting_service.stock_movement(snapshot, days=1_000_000)

    def test_export_text(self, snapshot):
        text = reporting_service.export_text("customers", snapshot, currency="R")
        assert text.splitlines()[:4] == [
            "Customer Report",
            "Total Customers: 1",
            "Total Revenue: R600.00",
            "Average Spend: R600.00",
        ]
        assert "Gold: 1" in text

        sales = reporting_service.export_text(
            "sales", snapshot, start="2024-01-01", end="2024-01-31"
        )
        assert sales.splitlines()[0] == "Sales Report (2024-01-01 to 2024-01-31)"
        assert "Total Sales: R20.00" in sales

    def test_export_unknown_kind(self, snapshot):
        with pytest.raises(ReportError):
            reporting_service.export_text("payroll", snapshot)
