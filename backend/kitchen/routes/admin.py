# Overview: Flask API routes for admin operations; parses input and returns JSON responses.

# backend/kitchen/routes/admin.py
"""
Admin routes.

Provides endpoints for:
- User management (list, create, update, delete)
- Master ingredients and categories
- Operational task templates
- Production reports
- Role permission table (super-admin only)
- Security event log (super-admin only)

All endpoints require authentication and the matching admin module.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..extensions import db
from ..models import SecurityEvent
from ..services import (
    auth_service,
    checklist_service,
    ingredient_service,
    permission_service,
    reporting_service,
)
from ..services.errors import NotFoundError
from ..decorators import require_auth, require_permission, require_super_admin, require_unit_selection
from ..permissions import (
    AppModule,
    NON_OVERRIDABLE_MODULES,
    PermissionLevel,
    ROLES,
    get_all_module_codes,
    get_module_definition,
    get_overridable_module_codes,
)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


# =============================================================================
# USER MANAGEMENT
# =============================================================================

@admin_bp.get("/users")
@require_auth
@require_permission(AppModule.ADMIN_USUARIOS, PermissionLevel.VIEW)
def list_users_route():
    """
    List all users.

    Query params:
    - role: str - filter by role
    """
    role = request.args.get("role")
    users = auth_service.list_users()
    if role:
        users = [u for u in users if u.role == role]
    return jsonify({"users": [u.to_dict() for u in users], "count": len(users)})


@admin_bp.get("/users/<int:user_id>")
@require_auth
@require_permission(AppModule.ADMIN_USUARIOS, PermissionLevel.VIEW)
def get_user_route(user_id: int):
    """Get a user with their effective permissions."""
    try:
        user = auth_service.get_user(user_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    user_dict = user.to_dict()
    user_dict["effective_permissions"] = permission_service.get_effective_permissions(user)
    user_dict["overridable_modules"] = get_overridable_module_codes()
    return jsonify({"user": user_dict})


@admin_bp.post("/users")
@require_auth
@require_permission(AppModule.ADMIN_USUARIOS, PermissionLevel.EDIT)
def create_user_route():
    """
    Create a new user.

    Request body:
    - name: str (required)
    - email: str (required, unique ignoring case)
    - role: str (required) - Admin, Producción, Servicio or Cocina
    - accessible_unit_ids: list[str] - unit ids or ["*"]; Admin defaults to ["*"]
    - permission_overrides: {module: level}
    """
    data = request.get_json(silent=True) or {}
    try:
        user = auth_service.create_user(
            name=data.get("name"),
            email=data.get("email"),
            role=data.get("role"),
            accessible_unit_ids=data.get("accessible_unit_ids"),
            permission_overrides=data.get("permission_overrides"),
            created_by_user_id=g.current_user.id,
        )
        return jsonify({"user": user.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create user")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.put("/users/<int:user_id>")
@require_auth
@require_permission(AppModule.ADMIN_USUARIOS, PermissionLevel.EDIT)
def update_user_route(user_id: int):
    """
    Update a user. Omitted fields keep their value.

    Live sessions of the user are re-checked against the new units.
    """
    data = request.get_json(silent=True) or {}
    try:
        user = auth_service.update_user(user_id, data, updated_by_user_id=g.current_user.id)
        return jsonify({"user": user.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update user")
        return jsonify({"error": "Internal server error"}), 500


@admin_bp.delete("/users/<int:user_id>")
@require_auth
@require_permission(AppModule.ADMIN_USUARIOS, PermissionLevel.EDIT)
def delete_user_route(user_id: int):
    """Delete a user. Deleting yourself is refused."""
    try:
        auth_service.delete_user(user_id, deleted_by_user_id=g.current_user.id)
        return jsonify({"message": "User deleted"})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


# =============================================================================
# INGREDIENTS AND CATEGORIES
# =============================================================================

@admin_bp.get("/ingredients")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.VIEW)
def list_ingredients_route():
    """
    Query params:
    - category: str - exact category
    - q: str - name substring, case-insensitive
    """
    ingredients = ingredient_service.list_ingredients(
        category=request.args.get("category"), search=request.args.get("q")
    )
    return jsonify({"ingredients": [i.to_dict() for i in ingredients], "count": len(ingredients)})


@admin_bp.post("/ingredients")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.EDIT)
def add_ingredient_route():
    try:
        ingredient = ingredient_service.add_ingredient(request.get_json(silent=True) or {})
        return jsonify({"ingredient": ingredient.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@admin_bp.put("/ingredients/<ingredient_id>")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.EDIT)
def update_ingredient_route(ingredient_id: str):
    try:
        ingredient = ingredient_service.update_ingredient(ingredient_id, request.get_json(silent=True) or {})
        return jsonify({"ingredient": ingredient.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@admin_bp.get("/categories")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.VIEW)
def list_categories_route():
    return jsonify({"categories": ingredient_service.list_categories()})


@admin_bp.put("/categories/<name>")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.EDIT)
def rename_category_route(name: str):
    """
    Request body:
    - new_name: str - blank or unchanged does nothing
    """
    data = request.get_json(silent=True) or {}
    try:
        updated = ingredient_service.rename_category(name, data.get("new_name"))
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"updated": updated})


@admin_bp.delete("/categories/<name>")
@require_auth
@require_permission(AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS, PermissionLevel.EDIT)
def delete_category_route(name: str):
    """
    Query params:
    - target: str (required) - category that receives the ingredients
    """
    try:
        moved = ingredient_service.delete_category(name, request.args.get("target"))
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"moved": moved})


# =============================================================================
# OPERATIONAL TASK TEMPLATES
# =============================================================================

@admin_bp.get("/task-templates")
@require_auth
@require_permission(AppModule.ADMIN_TAREAS_OPERATIVAS, PermissionLevel.VIEW)
def list_templates_route():
    templates = checklist_service.list_templates()
    return jsonify({"templates": [t.to_dict() for t in templates], "count": len(templates)})


@admin_bp.post("/task-templates")
@require_auth
@require_permission(AppModule.ADMIN_TAREAS_OPERATIVAS, PermissionLevel.EDIT)
def create_template_route():
    """
    Request body:
    - name: str (required)
    - description: str (required)
    - frequency: Diaria (default), Semanal or Mensual
    - assigned_role: str (default Producción)
    """
    try:
        template = checklist_service.create_template(request.get_json(silent=True) or {})
        return jsonify({"template": template.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


# =============================================================================
# REPORTS
# =============================================================================

@admin_bp.get("/reports/production")
@require_auth
@require_permission(AppModule.ADMIN_REPORTES, PermissionLevel.VIEW)
@require_unit_selection
def production_report_route():
    """Total produced quantity per recipe over the session's batches."""
    rows = reporting_service.production_by_recipe(g.current_user, g.selection)
    return jsonify({"production_by_recipe": rows})


# =============================================================================
# ROLE PERMISSIONS (super-admin)
# =============================================================================

@admin_bp.get("/permissions")
@require_auth
@require_super_admin
def get_permissions_route():
    """Role permission table with module definitions for the editor."""
    return jsonify({
        "roles": list(ROLES),
        "modules": [get_module_definition(code) for code in get_all_module_codes()],
        "non_overridable_modules": sorted(NON_OVERRIDABLE_MODULES),
        "overridable_modules": get_overridable_module_codes(),
        "role_permissions": permission_service.get_role_permissions(),
    })


@admin_bp.put("/permissions/<role>/<module>")
@require_auth
@require_super_admin
def update_permission_route(role: str, module: str):
    """
    Set one cell of the role permission table.

    Request body:
    - level: none, view or edit
    """
    data = request.get_json(silent=True) or {}
    try:
        cell = permission_service.update_role_permission(
            role, module, data.get("level"), updated_by_user_id=g.current_user.id
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"permission": cell.to_dict()})


# =============================================================================
# SECURITY EVENTS (super-admin)
# =============================================================================

@admin_bp.get("/security-events")
@require_auth
@require_super_admin
def list_security_events_route():
    """
    Most recent security events first.

    Query params:
    - event_type: str
    - user_id: int
    - limit: int (default 100, clamped to 1..500)
    """
    limit = max(1, min(request.args.get("limit", 100, type=int), 500))
    query = db.session.query(SecurityEvent)

    event_type = request.args.get("event_type")
    if event_type:
        query = query.filter(SecurityEvent.event_type == event_type)
    user_id = request.args.get("user_id", type=int)
    if user_id is not None:
        query = query.filter(SecurityEvent.user_id == user_id)

    events = query.order_by(SecurityEvent.occurred_at.desc(), SecurityEvent.id.desc()).limit(limit).all()
    return jsonify({"events": [e.to_dict() for e in events], "count": len(events)})
