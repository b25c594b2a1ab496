# backend/wings/routes/system.py
"""
Service index and health endpoints.
"""

import time
from flask import Blueprint, current_app, jsonify

from ..extensions import get_store
from ..services.storage import MirroredBackend, StorageUnavailable
from ..time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)


def check_storage_health() -> dict:
    """
    Read the primary document directly (no last-known-good fallback).
    """
    store = get_store()
    backend = store.backend
    primary = backend.primary if isinstance(backend, MirroredBackend) else backend
    start_time = time.time()
    try:
        document = primary.read_document()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {name: len(document.get(name, [])) for name in document},
        }
    except StorageUnavailable:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Storage health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Storage error",
        }


def check_mirror_health() -> dict:
    backend = get_store().backend
    if not isinstance(backend, MirroredBackend):
        return {"status": "disabled"}

    start_time = time.time()
    try:
        backend.mirror.read_document()
        return {"status": "healthy", "latency_ms": round((time.time() - start_time) * 1000, 2)}
    except StorageUnavailable:
        current_app.logger.exception("Mirror health check failed")
        # Primary still serves traffic; a broken mirror only degrades.
        return {
            "status": "degraded",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
            "error": "Mirror error",
        }


@system_bp.get("/")
def index():
    return jsonify({
        "message": "Backend server is running successfully!",
        "endpoints": [
            "/api/products - GET, POST, PUT, DELETE",
            "/api/customers - GET, POST, PUT, DELETE",
            "/api/transactions - GET, POST",
            "/api/reports - GET",
            "/api/health - GET",
        ],
    })


@system_bp.get("/api/health")
def health():
    """
    Returns:
    - 200: storage readable (mirror may be degraded)
    - 503: primary storage unreadable
    """
    storage_health = check_storage_health()
    mirror_health = check_mirror_health()

    if storage_health["status"] == "unhealthy":
        overall_status, http_status = "unhealthy", 503
    elif mirror_health["status"] == "degraded":
        overall_status, http_status = "degraded", 200
    else:
        overall_status, http_status = "OK", 200

    return jsonify({
        "status": overall_status,
        "timestamp": to_utc_z(utcnow()),
        "database": "Connected" if http_status == 200 else "Unavailable",
        "checks": {
            "storage": storage_health,
            "mirror": mirror_health,
        },
    }), http_status
