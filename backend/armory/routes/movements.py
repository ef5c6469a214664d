# backend/armory/routes/movements.py
"""
Purchase, transfer and assignment API routes.

Query parameters for every listing (all optional):
    date: YYYY-MM-DD, exact match
    base: base name (transfers match either end)
    equipment_type: Weapons | Vehicles | Ammunition
"""
from flask import Blueprint, current_app, g, jsonify, request

from armory.decorators import require_permission, require_viewer
from armory.extensions import db, get_record_store
from armory.records import RecordKind, ReportFilter
from armory.services import movement_service
from armory.validation import ValidationError


movements_bp = Blueprint("movements", __name__, url_prefix="/api")


def _record(kind: RecordKind):
    data = request.get_json(silent=True)

    try:
        record = movement_service.record_movement(
            get_record_store(),
            g.viewer,
            kind,
            data,
            bases=current_app.config["BASES"],
        )
        current_app.logger.info(
            "Recorded %s id=%s by %s", kind.value, record.id, g.viewer.username
        )
        return jsonify(record.to_dict()), 201

    except ValidationError as e:
        db.session.rollback()
        current_app.logger.warning(
            "Rejected %s from %s: %s (%s)", kind.value, g.viewer.username, e.message, e.code
        )
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to record %s", kind.value)
        return jsonify({"error": "Unexpected error"}), 500


def _list(kind: RecordKind):
    try:
        report_filter = ReportFilter.from_mapping(request.args)
        records = movement_service.list_records(get_record_store(), g.viewer, kind, report_filter)
        return jsonify([record.to_dict() for record in records]), 200

    except ValidationError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        current_app.logger.exception("Failed to list %ss", kind.value)
        return jsonify({"error": "Unexpected error"}), 500


@movements_bp.route("/purchases", methods=["POST"])
@require_viewer
@require_permission("RECORD_PURCHASE")
def create_purchase():
    """
    Record a purchase.

    Request body:
    {
        "date": "YYYY-MM-DD",
        "base": str,
        "equipment_type": str,
        "quantity": int
    }

    Returns:
        201: Purchase recorded
        400: Invalid request
        401: Unknown caller
        403: Forbidden (role, or Base Commander filing for another base)
    """
    return _record(RecordKind.PURCHASE)


@movements_bp.route("/purchases", methods=["GET"])
@require_viewer
@require_permission("VIEW_PURCHASES")
def list_purchases():
    return _list(RecordKind.PURCHASE)


@movements_bp.route("/transfers", methods=["POST"])
@require_viewer
@require_permission("RECORD_TRANSFER")
def create_transfer():
    """
    Record a transfer between two bases.

    Request body:
    {
        "date": "YYYY-MM-DD",
        "from_base": str,
        "to_base": str,
        "equipment_type": str,
        "quantity": int
    }

    Returns:
        201: Transfer recorded
        400: Invalid request (including from_base == to_base)
        401: Unknown caller
        403: Forbidden (role, or Base Commander transferring from another base)
    """
    return _record(RecordKind.TRANSFER)


@movements_bp.route("/transfers", methods=["GET"])
@require_viewer
@require_permission("VIEW_TRANSFERS")
def list_transfers():
    return _list(RecordKind.TRANSFER)


@movements_bp.route("/assignments", methods=["POST"])
@require_viewer
@require_permission("RECORD_ASSIGNMENT")
def create_assignment():
    """
    Record an assignment to personnel or an expenditure.

    Request body:
    {
        "date": "YYYY-MM-DD",
        "base": str,
        "equipment_type": str,
        "quantity": int,
        "status": "Assigned" | "Expended",
        "personnel": str (required when Assigned)
    }

    Returns:
        201: Assignment recorded
        400: Invalid request
        401: Unknown caller
        403: Forbidden
    """
    return _record(RecordKind.ASSIGNMENT)


@movements_bp.route("/assignments", methods=["GET"])
@require_viewer
@require_permission("VIEW_ASSIGNMENTS")
def list_assignments():
    return _list(RecordKind.ASSIGNMENT)
