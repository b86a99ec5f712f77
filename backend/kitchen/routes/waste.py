# Overview: Flask API routes for waste records and the weekly waste report.

from flask import Blueprint, request, jsonify, current_app, g

from ..decorators import require_auth, require_permission, require_unit_selection
from ..permissions import AppModule, PermissionLevel
from ..services import permission_service, waste_service
from ..services.unit_access_service import UnitAccessError

waste_bp = Blueprint("waste", __name__, url_prefix="/api/waste")


@waste_bp.get("")
@require_auth
@require_permission(AppModule.MERMAS, PermissionLevel.VIEW)
@require_unit_selection
def list_waste_route():
    records = waste_service.list_waste(g.current_user, g.selection)
    return jsonify({"waste_records": [r.to_dict() for r in records], "count": len(records)})


@waste_bp.post("")
@require_auth
@require_permission(AppModule.MERMAS, PermissionLevel.EDIT)
@require_unit_selection
def log_waste_route():
    """
    Log a waste record in one of the user's business units.

    Request body:
    - unit_id: str (required)
    - type: str (required) - Preparación, Porcionado, Caducidad, Sobreproducción, Otro
    - quantity: float (required, > 0)
    - unit: str (required) - measure unit
    - related_recipe_or_batch_id: str - required unless description is given
    - description: str
    """
    data = request.get_json(silent=True) or {}
    try:
        record = waste_service.log_waste(g.current_user, data)
        return jsonify({"waste_record": record.to_dict()}), 201
    except UnitAccessError as e:
        permission_service.log_security_event(
            user_id=g.current_user.id,
            event_type="UNIT_ACCESS_DENIED",
            success=False,
            resource=request.path,
            action="LOG_WASTE",
            reason=str(e),
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
            unit_id=data.get("unit_id"),
        )
        return jsonify({"error": str(e)}), 403
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to log waste")
        return jsonify({"error": "Internal server error"}), 500


@waste_bp.get("/report")
@require_auth
@require_permission(AppModule.MERMAS, PermissionLevel.VIEW)
@require_unit_selection
def waste_report_route():
    """
    Weekly waste report (weeks start on Monday).

    Query params:
    - week_offset: int (default 0) - 0 is the current week, -1 the previous one
    """
    week_offset = request.args.get("week_offset", 0, type=int)
    return jsonify(waste_service.weekly_report(g.current_user, g.selection, week_offset))
