# Overview: Flask API routes for transactions; records sales and restocks (no update/delete).

# backend/wings/routes/transactions.py
from flask import Blueprint, current_app, jsonify, request

from ..extensions import get_store
from ..services import transactions_service
from ..services.storage import StorageUnavailable
from ..services.transactions_service import InsufficientStockError
from ..validation import (
    TRANSACTION_CREATE_POLICY,
    RecordNotFound,
    ValidationError,
    enforce_rules_transaction,
    validate_payload,
)
from .products import stale_header

transactions_bp = Blueprint("transactions", __name__, url_prefix="/api/transactions")


@transactions_bp.get("")
def list_transactions():
    transactions = transactions_service.list_transactions(store=get_store())
    return stale_header(jsonify([t.to_dict() for t in transactions]))


@transactions_bp.post("")
def create_transaction_route():
    """
    Record a sale or restock.

    Body: {type: "sale"|"restock", productId, quantity, customerId?, customer?}
    productName, productPrice, total and date are set by the server.
    """
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(payload=payload, policy=TRANSACTION_CREATE_POLICY, partial=False)
        enforce_rules_transaction(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        transaction = transactions_service.record_transaction(store=get_store(), patch=patch)
    except InsufficientStockError as e:
        return jsonify({"error": str(e), "details": e.details}), 400
    except RecordNotFound as e:
        return jsonify({"error": str(e)}), 404
    except StorageUnavailable:
        current_app.logger.exception("Failed to record transaction")
        return jsonify({"error": "Storage unavailable"}), 503

    current_app.logger.info(
        "Recorded %s %s: %s x%s", transaction.type, transaction.id,
        transaction.product_id, transaction.quantity,
    )
    return jsonify(transaction.to_dict()), 201
