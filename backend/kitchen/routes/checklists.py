# Overview: Flask API routes for operational checklists (production and service boards).

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth, require_unit_selection, request_audit_context
from ..permissions import PermissionLevel
from ..services import checklist_service, permission_service
from ..services.errors import NotFoundError
from ..services.permission_service import PermissionDeniedError

checklists_bp = Blueprint("checklists", __name__, url_prefix="/api/checklists")


def _denied(e: PermissionDeniedError):
    return jsonify({
        "error": "Permission denied",
        "required_module": e.module,
        "required_level": e.level,
        "message": str(e),
    }), 403


@checklists_bp.get("/<board>")
@require_auth
@require_unit_selection
def list_board_route(board: str):
    """
    List a checklist board.

    board: produccion or servicio; each is guarded by its own module.
    """
    try:
        module = checklist_service.board_module(board)
        permission_service.require_permission(g.current_user, module, PermissionLevel.VIEW, **request_audit_context())
        tasks = checklist_service.list_board(board, g.current_user, g.selection)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except PermissionDeniedError as e:
        return _denied(e)

    return jsonify({"board": board, "tasks": [t.to_dict() for t in tasks], "count": len(tasks)})


@checklists_bp.patch("/tasks/<task_id>")
@require_auth
@require_unit_selection
def update_task_status_route(task_id: str):
    """
    Request body:
    - status: Pendiente, En Progreso or Completado
    """
    data = request.get_json(silent=True) or {}
    try:
        task = checklist_service.get_task(task_id, g.current_user, g.selection)
        module = checklist_service.module_for_task(task)
        if module is None:
            return jsonify({"error": "Operational task is not on a checklist board"}), 400
        permission_service.require_permission(g.current_user, module, PermissionLevel.EDIT, **request_audit_context())
        task = checklist_service.update_status(task, data.get("status"))
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except PermissionDeniedError as e:
        return _denied(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"task": task.to_dict()})


@checklists_bp.post("/reorder")
@require_auth
@require_unit_selection
def reorder_route():
    """
    Request body:
    - board: produccion or servicio (required)
    - dragged_id: str (required)
    - target_id: str (required) - a target not on the board changes nothing
    """
    data = request.get_json(silent=True) or {}
    board = data.get("board")
    dragged_id = data.get("dragged_id")
    if not board or not dragged_id:
        return jsonify({"error": "board and dragged_id required"}), 400

    try:
        module = checklist_service.board_module(board)
        permission_service.require_permission(g.current_user, module, PermissionLevel.EDIT, **request_audit_context())
        tasks = checklist_service.reorder(board, dragged_id, data.get("target_id"), g.current_user, g.selection)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except PermissionDeniedError as e:
        return _denied(e)

    return jsonify({"board": board, "tasks": [t.to_dict() for t in tasks]})
