# Overview: Flask API routes for reports; every report is computed from one fresh snapshot.

from flask import Blueprint, Response, current_app, jsonify, request

from ..extensions import get_store
from ..services import reporting_service
from ..services.reporting_service import ReportError
from ..time_utils import utcnow


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/inventory")
def inventory_report():
    return jsonify(reporting_service.inventory_report(get_store().snapshot())), 200


@reports_bp.get("/customers")
def customer_report():
    return jsonify(reporting_service.customer_report(get_store().snapshot())), 200


@reports_bp.get("/sales")
def sales_report():
    try:
        report = reporting_service.sales_report(
            get_store().snapshot(),
            start=request.args.get("start"),
            end=request.args.get("end"),
            default_days=current_app.config["SALES_REPORT_DAYS"],
        )
        return jsonify(report), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/daily-sales")
def daily_sales_report():
    days = request.args.get("days", current_app.config["DAILY_SALES_DAYS"], type=int)

    try:
        series = reporting_service.daily_sales(get_store().snapshot(), days=days)
        return jsonify(series), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/top-products")
def top_products_report():
    limit = request.args.get("limit", current_app.config["TOP_PRODUCTS_LIMIT"], type=int)

    try:
        return jsonify(reporting_service.top_products(get_store().snapshot(), limit=limit)), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/stock-movement")
def stock_movement_report():
    days = request.args.get("days", current_app.config["STOCK_MOVEMENT_DAYS"], type=int)

    try:
        rows = reporting_service.stock_movement(get_store().snapshot(), days=days)
        return jsonify(rows), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/top-customers")
def top_customers_report():
    limit = request.args.get("limit", current_app.config["TOP_CUSTOMERS_LIMIT"], type=int)

    try:
        return jsonify(reporting_service.top_customers(get_store().snapshot(), limit=limit)), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/recent-customers")
def recent_customers_report():
    limit = request.args.get("limit", current_app.config["TOP_CUSTOMERS_LIMIT"], type=int)

    try:
        return jsonify(reporting_service.recent_customers(get_store().snapshot(), limit=limit)), 200
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/<kind>/export")
def export_report(kind: str):
    """Plain-text download of the sales, inventory or customers report."""
    try:
        content = reporting_service.export_text(
            kind,
            get_store().snapshot(),
            currency=current_app.config["CURRENCY_SYMBOL"],
            start=request.args.get("start"),
            end=request.args.get("end"),
            default_days=current_app.config["SALES_REPORT_DAYS"],
        )
    except ReportError as exc:
        return jsonify({"error": str(exc)}), 400

    filename = f"{kind}_report_{utcnow().date().isoformat()}.txt"
    return Response(
        content,
        mimetype="text/plain",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
