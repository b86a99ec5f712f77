# Overview: Flask API routes for the production plan; parses input and returns JSON responses.

# backend/kitchen/routes/production.py
"""
Production plan routes.

Every route is scoped to the session's active unit (or, in global view, to
the user's accessible units). Tasks outside that scope answer 404.
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..decorators import require_auth, require_permission, require_unit_selection
from ..models import ProductionStatus
from ..permissions import AppModule, PermissionLevel
from ..services import batch_service, production_service
from ..services.errors import NotFoundError
from kitchen.time_utils import utcnow

production_bp = Blueprint("production", __name__, url_prefix="/api/production")


def _task_response(task, status: int = 200):
    return jsonify({"task": production_service.task_to_dict(task)}), status


@production_bp.get("/tasks")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.VIEW)
@require_unit_selection
def list_tasks_route():
    """
    List production tasks ordered by priority.

    Query params:
    - status: str - pending (not completed) or completed
    - assigned_to_me: bool - only tasks assigned to the current user
    """
    status_filter = request.args.get("status")
    assigned_to_me = request.args.get("assigned_to_me", "false").lower() == "true"

    tasks = production_service.list_tasks(g.current_user, g.selection)
    if status_filter == "pending":
        tasks = [t for t in tasks if t.status != ProductionStatus.COMPLETADO]
    elif status_filter == "completed":
        tasks = [t for t in tasks if t.status == ProductionStatus.COMPLETADO]
    if assigned_to_me:
        tasks = [t for t in tasks if t.assigned_user_id == g.current_user.id]

    now = utcnow()
    return jsonify({
        "tasks": [production_service.task_to_dict(t, now) for t in tasks],
        "count": len(tasks),
    })


@production_bp.post("/tasks")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.EDIT)
@require_unit_selection
def add_task_route():
    """
    Add a recipe to the active unit's plan.

    Request body:
    - recipe_id: str (required)
    - quantity: float (required, > 0)
    """
    data = request.get_json(silent=True) or {}
    try:
        task = production_service.add_task(
            g.current_user, g.selection, data.get("recipe_id"), data.get("quantity")
        )
        return _task_response(task, 201)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to add production task")
        return jsonify({"error": "Internal server error"}), 500


@production_bp.post("/tasks/<task_id>/assign")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.EDIT)
@require_unit_selection
def assign_task_route(task_id: str):
    """
    Request body:
    - user_id: int or null (null unassigns)
    """
    data = request.get_json(silent=True) or {}
    try:
        task = production_service.assign_task(g.current_user, g.selection, task_id, data.get("user_id"))
        return _task_response(task)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@production_bp.post("/tasks/reorder")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.EDIT)
@require_unit_selection
def reorder_tasks_route():
    """
    Drag-and-drop reorder of pending tasks.

    Request body:
    - dragged_id: str (required)
    - target_id: str (optional) - drop target; missing appends at the end
    """
    data = request.get_json(silent=True) or {}
    dragged_id = data.get("dragged_id")
    if not dragged_id:
        return jsonify({"error": "dragged_id required"}), 400

    try:
        tasks = production_service.reorder_tasks(g.current_user, g.selection, dragged_id, data.get("target_id"))
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"tasks": [production_service.task_to_dict(t) for t in tasks]})


@production_bp.post("/tasks/<task_id>/timer/<action>")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.EDIT)
@require_unit_selection
def timer_route(task_id: str, action: str):
    """Timer actions: start, pause, resume."""
    actions = {
        "start": production_service.start_timer,
        "pause": production_service.pause_timer,
        "resume": production_service.resume_timer,
    }
    if action not in actions:
        return jsonify({"error": f"Unknown timer action '{action}'"}), 404

    try:
        task = actions[action](g.current_user, g.selection, task_id)
        return _task_response(task)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 409


@production_bp.post("/tasks/<task_id>/complete")
@require_auth
@require_permission(AppModule.PRODUCCION, PermissionLevel.EDIT)
@require_unit_selection
def complete_task_route(task_id: str):
    """
    Complete a task and generate its batch.

    Request body:
    - actual_yield: float (required, > 0)
    - producer_name: str (optional) - defaults to the current user's name
    """
    data = request.get_json(silent=True) or {}
    try:
        batch = production_service.complete_task(
            g.current_user, g.selection, task_id, data.get("actual_yield"), data.get("producer_name")
        )
        task = production_service.get_task(task_id, g.current_user, g.selection)
        return jsonify({
            "task": production_service.task_to_dict(task),
            "batch": batch_service.batch_to_dict(batch),
        }), 201
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to complete production task")
        return jsonify({"error": "Internal server error"}), 500


@production_bp.get("/weekly-summary")
@require_auth
@require_permission(AppModule.RESUMEN_SEMANAL, PermissionLevel.VIEW)
@require_unit_selection
def weekly_summary_route():
    """
    Batches produced this week (since Sunday) or last month.

    Query params:
    - period: this_week (default) or last_month
    """
    period = request.args.get("period", "this_week")
    try:
        return jsonify(batch_service.weekly_summary(g.current_user, g.selection, period))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
