"""
CLI tests for the data and reports command groups.
"""

import pytest

from wings import create_app
from wings.models import Snapshot


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


class TestDataCommands:

    def test_init_reports_file_created_at_startup(self, runner, data_file):
        result = runner.invoke(args=["data", "init"])
        assert result.exit_code == 0
        assert "Created" in result.output
        assert data_file.exists()

    def test_init_leaves_existing_file_alone(self, tmp_path):
        path = tmp_path / "existing.json"
        path.write_text('{"products": [{"id": "1", "name": "Tea"}]}', encoding="utf-8")
        before = path.read_bytes()
        app = create_app({"TESTING": True, "DATA_FILE": str(path), "MIRROR_URL": None})

        result = app.test_cli_runner().invoke(args=["data", "init"])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert path.read_bytes() == before

    def test_init_creates_missing_file(self, runner, data_file):
        data_file.unlink()
        result = runner.invoke(args=["data", "init"])
        assert result.exit_code == 0
        assert "Created" in result.output
        assert data_file.exists()

    def test_check_counts(self, runner, store, make_product):
        store.save(Snapshot(products=[make_product("p1"), make_product("p2")]))
        result = runner.invoke(args=["data", "check"])
        assert result.exit_code == 0
        assert "products: 2" in result.output
        assert "customers: 0" in result.output

    def test_check_fails_on_bad_file(self, runner, data_file):
        data_file.write_text("nope", encoding="utf-8")
        result = runner.invoke(args=["data", "check"])
        assert result.exit_code == 1


class TestReportCommands:

    def test_summary_lists_stock_alerts(self, runner, store, make_product):
        store.save(Snapshot(products=[
            make_product("p1", name="Coffee", quantity=2, min_stock_level=3),
            make_product("p2", name="Tea", quantity=0),
        ]))
        result = runner.invoke(args=["reports", "summary", "--days", "7"])

        assert result.exit_code == 0
        assert "Inventory Report" in result.output
        assert "LOW  Coffee (2 left, min 3)" in result.output
        assert "OUT  Tea" in result.output
