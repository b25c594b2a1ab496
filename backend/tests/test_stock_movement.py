# Overview: Pytest coverage for the trailing-window stock movement report.

from datetime import datetime

import pytest

from wings.services.analytics import stock_movement_report

NOW = datetime(2024, 6, 30, 12, 0)


@pytest.mark.analytics
class TestStockMovementReport:

    def test_one_row_per_product_in_order(self, make_product):
        products = [make_product("b"), make_product("a"), make_product("c")]
        rows = stock_movement_report([], products, 30, now=NOW)

        assert [r["id"] for r in rows] == ["b", "a", "c"]
        for row in rows:
            assert row["total_in"] == row["total_out"] == row["net_movement"] == 0

    def test_in_out_and_net(self, make_product, make_transaction):
        products = [
            make_product("p1", name="Coffee", quantity=12, min_stock_level=4),
            make_product("p2", name="Tea", quantity=3),
        ]
        transactions = [
            make_transaction("1", type="restock", product_id="p1", quantity=10, date="2024-06-20T09:00:00Z"),
            make_transaction("2", type="sale", product_id="p1", quantity=3, date="2024-06-21T09:00:00Z"),
            make_transaction("3", type="sale", product_id="p1", quantity=1, date="2024-06-29T09:00:00Z"),
            make_transaction("4", type="sale", product_id="p2", quantity=2, date="2024-06-29T09:00:00Z"),
            make_transaction("old", type="restock", product_id="p1", quantity=99, date="2024-05-01T00:00:00Z"),
            make_transaction("orphan", type="sale", product_id="gone", quantity=5, date="2024-06-29T09:00:00Z"),
        ]
        rows = stock_movement_report(transactions, products, 30, now=NOW)

        assert rows == [
            {
                "id": "p1", "name": "Coffee", "quantity": 12, "min_stock_level": 4,
                "total_in": 10, "total_out": 4, "net_movement": 6,
            },
            {
                "id": "p2", "name": "Tea", "quantity": 3, "min_stock_level": 3,
                "total_in": 0, "total_out": 2, "net_movement": -2,
            },
        ]
        for row in rows:
            assert row["net_movement"] == row["total_in"] - row["total_out"]

    def test_window_start_is_inclusive(self, make_product, make_transaction):
        transactions = [
            make_transaction("edge", type="restock", quantity=4, date="2024-06-23T12:00:00Z"),
            make_transaction("before", type="restock", quantity=8, date="2024-06-23T11:59:59Z"),
        ]
        rows = stock_movement_report(transactions, [make_product("p1")], 7, now=NOW)
        assert rows[0]["total_in"] == 4
