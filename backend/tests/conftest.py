"""
Pytest fixtures for the Wings backend tests.

Provides an app over a throwaway data file, a test client, the app's store,
and builders for product/customer/transaction records.
"""

from datetime import datetime

import pytest

from wings import create_app
from wings.extensions import store_ext
from wings.models import Customer, Product, Transaction
from wings.time_utils import to_utc_z


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def app(data_file):
    """Create application for testing."""
    app = create_app({
        "TESTING": True,
        "DATA_FILE": str(data_file),
        "MIRROR_URL": None,
    })
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def store(app):
    return store_ext.get(app)


@pytest.fixture
def make_product():
    def _make(id="p1", **overrides):
        fields = dict(
            id=id,
            name=f"Product {id}",
            description="",
            category="Beverages",
            price=10,
            quantity=5,
            min_stock_level=3,
            last_updated="2024-01-01",
        )
        fields.update(overrides)
        return Product(**fields)
    return _make


@pytest.fixture
def make_customer():
    def _make(id="c1", **overrides):
        fields = dict(id=id, name=f"Customer {id}", visit_count=0, total_spent=0)
        fields.update(overrides)
        return Customer(**fields)
    return _make


@pytest.fixture
def make_transaction():
    def _make(id="t1", type="sale", product_id="p1", quantity=1, price=10, date="2024-01-01T12:00:00.000Z", **overrides):
        if isinstance(date, datetime):
            date = to_utc_z(date)
        fields = dict(
            id=id,
            type=type,
            product_id=product_id,
            product_name=f"Product {product_id}",
            product_price=price,
            quantity=quantity,
            total=quantity * price,
            date=date,
        )
        fields.update(overrides)
        return Transaction(**fields)
    return _make
