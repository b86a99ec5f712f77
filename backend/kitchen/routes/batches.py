# Overview: Flask API routes for batches (lots); parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth, require_permission, require_unit_selection
from ..permissions import AppModule, PermissionLevel
from ..services import batch_service
from ..services.errors import NotFoundError
from kitchen.time_utils import utcnow

batches_bp = Blueprint("batches", __name__, url_prefix="/api/batches")


@batches_bp.get("")
@require_auth
@require_permission(AppModule.LOTES, PermissionLevel.VIEW)
@require_unit_selection
def list_batches_route():
    """
    List batches newest first, each with its expiry date and status.

    Query params:
    - expiry_status: ok, near_expiry or expired
    """
    expiry_filter = request.args.get("expiry_status")
    now = utcnow()

    batches = [
        batch_service.batch_to_dict(b, now)
        for b in batch_service.list_batches(g.current_user, g.selection)
    ]
    if expiry_filter:
        batches = [b for b in batches if b["expiry_status"] == expiry_filter]

    return jsonify({"batches": batches, "count": len(batches)})


@batches_bp.get("/<batch_id>")
@require_auth
@require_permission(AppModule.LOTES, PermissionLevel.VIEW)
@require_unit_selection
def get_batch_route(batch_id: str):
    """Batch detail with traceability (source task and recipe)."""
    try:
        batch = batch_service.get_batch(batch_id, g.current_user, g.selection)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"batch": batch_service.batch_detail(batch)})


@batches_bp.post("/<batch_id>/notes")
@require_auth
@require_permission(AppModule.LOTES, PermissionLevel.EDIT)
@require_unit_selection
def set_note_route(batch_id: str):
    """
    Request body:
    - notes: str - replaces the batch notes; empty clears them
    """
    data = request.get_json(silent=True) or {}
    try:
        batch = batch_service.set_note(batch_id, data.get("notes"), g.current_user, g.selection)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"batch": batch_service.batch_to_dict(batch)})
