# backend/armory/routes/system.py
"""
System health and catalog endpoints. Public: no X-Username required.
"""

import time
from flask import Blueprint, current_app, jsonify

from armory.extensions import get_record_store
from armory.records import AssignmentStatus, EquipmentType, Role

system_bp = Blueprint("system", __name__)


def check_record_store_health() -> dict:
    """
    Check the record store answers a full scan.

    Returns dict with status and details.
    """
    start_time = time.time()
    store = get_record_store()
    try:
        counts = store.counts()
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "backend": store.backend,
            "latency_ms": round(elapsed_ms, 2),
            "details": counts,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Record store health check failed")
        return {
            "status": "unhealthy",
            "backend": store.backend,
            "latency_ms": round(elapsed_ms, 2),
            "error": "Record store error",
        }


@system_bp.get("/health")
def health():
    store_health = check_record_store_health()
    status_code = 200 if store_health["status"] == "healthy" else 503
    return jsonify({"status": store_health["status"], "record_store": store_health}), status_code


@system_bp.get("/api/catalog")
def catalog():
    """Bases, equipment types, roles and assignment statuses the forms offer."""
    return jsonify({
        "bases": list(current_app.config["BASES"]),
        "equipment_types": [t.value for t in EquipmentType],
        "roles": [r.value for r in Role],
        "assignment_statuses": [s.value for s in AssignmentStatus],
    }), 200
