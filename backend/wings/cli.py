# Overview: Flask CLI command groups for data bootstrap, inspection and report summaries.

# backend/wings/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Use: flask --app wsgi <group> <command> [options]
#
# Data file:
# - flask --app wsgi data init
#   Create the data document with empty collections if it does not exist.
# - flask --app wsgi data check
#   Read the document and print collection counts (exit 1 if unreadable).
#
# Reports:
# - flask --app wsgi reports summary [--days 30]
#   Print the inventory, customer, sales and low-stock summaries.

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import get_store
from .services import analytics, reporting_service
from .services.storage import COLLECTIONS, StorageUnavailable


@click.group("data")
def data_group():
    """Data file bootstrap and inspection commands."""


@data_group.command("init")
@with_appcontext
def init_data():
    """Create the data document if missing (existing data is never touched)."""
    store = get_store()
    # create_app has already created a missing file by the time this runs.
    created = store.backend.ensure_exists() or store.created_file
    if created:
        click.echo("PASS Created new data file")
    else:
        click.echo("PASS Data file already exists")


@data_group.command("check")
@with_appcontext
def check_data():
    """Read the data document and print collection sizes."""
    store = get_store()
    try:
        document = store.backend.read_document()
    except StorageUnavailable as exc:
        click.echo(f"FAIL {exc}", err=True)
        raise SystemExit(1)

    for name in COLLECTIONS:
        click.echo(f"{name}: {len(document.get(name, []))}")


@click.group("reports")
def reports_group():
    """Report printing commands."""


@reports_group.command("summary")
@click.option(
    "--days",
    default=None,
    type=click.IntRange(1, reporting_service.MAX_REPORT_DAYS),
    help="Sales window in days (default from config)",
)
@with_appcontext
def report_summary(days):
    """Print the text exports plus the low/out-of-stock product names."""
    snapshot = get_store().snapshot()
    currency = current_app.config["CURRENCY_SYMBOL"]
    days = days or current_app.config["SALES_REPORT_DAYS"]

    for kind in reporting_service.EXPORTABLE_REPORTS:
        click.echo(reporting_service.export_text(kind, snapshot, currency=currency, default_days=days))

    report = analytics.inventory_report(snapshot.products)
    for product in report["low_stock_items"]:
        click.echo(f"LOW  {product.name} ({product.quantity} left, min {product.min_stock_level})")
    for product in report["out_of_stock_items"]:
        click.echo(f"OUT  {product.name}")


def register_commands(app):
    app.cli.add_command(data_group)
    app.cli.add_command(reports_group)
