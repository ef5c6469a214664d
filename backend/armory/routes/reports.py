from flask import Blueprint, current_app, g, jsonify, request

from armory.decorators import require_permission, require_viewer
from armory.extensions import get_record_store
from armory.records import ReportFilter
from armory.services import balance_service
from armory.validation import ValidationError


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/balance")
@require_viewer
@require_permission("VIEW_BALANCE_REPORT")
def balance_report():
    """
    Balance sheet for the caller.

    Query parameters: date (cutoff, YYYY-MM-DD), base, equipment_type.
    Without a date every figure is 0.
    """
    try:
        report_filter = ReportFilter.from_mapping(request.args)
    except ValidationError as exc:
        return jsonify(exc.to_dict()), exc.status_code

    try:
        report = balance_service.compute_report(get_record_store(), g.viewer, report_filter)
    except Exception:
        current_app.logger.exception("Failed to compute balance report")
        return jsonify({"error": "Unexpected error"}), 500

    return jsonify({
        "viewer": g.viewer.to_dict(),
        "filter": report_filter.to_dict(),
        **report.to_dict(),
    }), 200
