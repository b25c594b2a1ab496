# Overview: Flask API routes for customers; parses input and returns JSON responses.

# backend/wings/routes/customers.py
"""
Customer routes.

visitCount / totalSpent / lastVisit may be seeded on create but are rejected
on update: they only move when a sale references the customer.
"""
from flask import Blueprint, Response, current_app, jsonify, request

from ..extensions import get_store
from ..services import customers_service
from ..services.storage import StorageUnavailable
from ..time_utils import utcnow
from ..validation import (
    CUSTOMER_CREATE_POLICY,
    CUSTOMER_UPDATE_POLICY,
    RecordNotFound,
    ValidationError,
    enforce_rules_customer,
    validate_payload,
)
from .products import stale_header

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers():
    customers = customers_service.list_customers(store=get_store())
    return stale_header(jsonify([c.to_dict() for c in customers]))


@customers_bp.get("/export")
def export_customers():
    """Download all customers as CSV, including their loyalty tier."""
    customers = customers_service.list_customers(store=get_store())
    filename = f"customers_export_{utcnow().date().isoformat()}.csv"
    return Response(
        customers_service.export_customers_csv(customers),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@customers_bp.get("/<customer_id>")
def get_customer_route(customer_id: str):
    try:
        customer = customers_service.get_customer(store=get_store(), customer_id=customer_id)
    except RecordNotFound:
        return jsonify({"error": "Customer not found"}), 404

    return stale_header(jsonify(customer.to_dict()))


@customers_bp.post("")
def create_customer_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(payload=payload, policy=CUSTOMER_CREATE_POLICY, partial=False)
        enforce_rules_customer(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        created = customers_service.create_customer(store=get_store(), patch=patch)
    except StorageUnavailable:
        current_app.logger.exception("Failed to create customer")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify(created.to_dict()), 201


@customers_bp.put("/<customer_id>")
def update_customer_route(customer_id: str):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(payload=payload, policy=CUSTOMER_UPDATE_POLICY, partial=True)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        updated = customers_service.update_customer(
            store=get_store(), customer_id=customer_id, patch=patch
        )
    except RecordNotFound:
        return jsonify({"error": "Customer not found"}), 404
    except StorageUnavailable:
        current_app.logger.exception("Failed to update customer")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify(updated.to_dict()), 200


@customers_bp.delete("/<customer_id>")
def delete_customer_route(customer_id: str):
    try:
        customers_service.delete_customer(store=get_store(), customer_id=customer_id)
    except RecordNotFound:
        return jsonify({"error": "Customer not found"}), 404
    except StorageUnavailable:
        current_app.logger.exception("Failed to delete customer")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify({"message": "Customer deleted successfully"}), 200


@customers_bp.get("/<customer_id>/transactions")
def customer_transactions_route(customer_id: str):
    """Sales linked to this customer by id."""
    try:
        transactions = customers_service.list_customer_transactions(
            store=get_store(), customer_id=customer_id
        )
    except RecordNotFound:
        return jsonify({"error": "Customer not found"}), 404

    return jsonify([t.to_dict() for t in transactions]), 200
