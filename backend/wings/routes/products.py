# Overview: Flask API routes for products; parses input and returns JSON responses.

# backend/wings/routes/products.py
from flask import Blueprint, current_app, jsonify, request

from ..extensions import get_store
from ..services import products_service
from ..services.storage import StorageUnavailable
from ..validation import (
    PRODUCT_CREATE_POLICY,
    PRODUCT_UPDATE_POLICY,
    RecordNotFound,
    ValidationError,
    enforce_rules_product,
    validate_payload,
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


def stale_header(response):
    """Flag list responses served from the last-known-good snapshot."""
    if get_store().last_error is not None:
        response.headers["X-Data-Stale"] = "true"
    return response


@products_bp.get("")
def list_products():
    """List every product (no pagination, no server-side filtering)."""
    products = products_service.list_products(store=get_store())
    return stale_header(jsonify([p.to_dict() for p in products]))


@products_bp.get("/<product_id>")
def get_product_route(product_id: str):
    try:
        product = products_service.get_product(store=get_store(), product_id=product_id)
    except RecordNotFound:
        return jsonify({"error": "Product not found"}), 404

    return stale_header(jsonify(product.to_dict()))


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(payload=payload, policy=PRODUCT_CREATE_POLICY, partial=False)
        enforce_rules_product(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        created = products_service.create_product(store=get_store(), patch=patch)
    except StorageUnavailable:
        current_app.logger.exception("Failed to create product")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify(created.to_dict()), 201


@products_bp.put("/<product_id>")
def update_product_route(product_id: str):
    """Partial update; only the enumerated product fields are accepted."""
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(payload=payload, policy=PRODUCT_UPDATE_POLICY, partial=True)
        enforce_rules_product(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        updated = products_service.update_product(
            store=get_store(), product_id=product_id, patch=patch
        )
    except RecordNotFound:
        return jsonify({"error": "Product not found"}), 404
    except StorageUnavailable:
        current_app.logger.exception("Failed to update product")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify(updated.to_dict()), 200


@products_bp.delete("/<product_id>")
def delete_product_route(product_id: str):
    try:
        products_service.delete_product(store=get_store(), product_id=product_id)
    except RecordNotFound:
        return jsonify({"error": "Product not found"}), 404
    except StorageUnavailable:
        current_app.logger.exception("Failed to delete product")
        return jsonify({"error": "Storage unavailable"}), 503

    return jsonify({"message": "Product deleted successfully"}), 200
