# Overview: Request and permission decorators for API routes.

from functools import wraps
from flask import request, jsonify, g

from .permissions import is_super_admin
from .scopes import Unset
from .services import session_service, permission_service
from .services.permission_service import PermissionDeniedError


def _is_authenticated() -> bool:
    return hasattr(g, 'current_user') and hasattr(g, 'selection')


def request_audit_context() -> dict:
    return {
        "resource": request.path,
        "ip_address": request.remote_addr,
        "user_agent": request.headers.get("User-Agent"),
        "unit_id": session_service.active_unit_id(g.selection),
    }


def get_bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1]


def require_auth(f):
    """
    Require authentication and establish unit context.

    Sets the following Flask g attributes:
    - g.current_user: The authenticated User, freshly loaded
    - g.selection: The session's ActiveSelection (Unset, Global or Specific)
    - g.session_context: The full SessionContext object

    Returns 401 for a missing, unknown, expired or idle token, and when the
    user behind the session no longer exists.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_bearer_token()
        if not token:
            return jsonify({"error": "Authentication required"}), 401

        context = session_service.validate_session(token)
        if not context:
            return jsonify({"error": "Invalid or expired token"}), 401

        g.current_user = context.user
        g.selection = context.selection
        g.session_context = context

        return f(*args, **kwargs)

    return decorated_function


def require_unit_selection(f):
    """
    Require the session to have chosen a unit (or the global view).

    Returns 409 while the session is still awaiting a unit selection.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not _is_authenticated():
            return jsonify({"error": "Authentication required"}), 401

        if isinstance(g.selection, Unset):
            return jsonify({
                "error": "Unit selection required",
                "awaiting_unit_selection": True,
            }), 409

        return f(*args, **kwargs)

    return decorated_function


def require_permission(module: str, level: str):
    """
    Require level ("view" or "edit") on an application module.

    Denials are written to security_events with the active unit.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth was called first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            try:
                permission_service.require_permission(g.current_user, module, level, **request_audit_context())
            except PermissionDeniedError as e:
                return jsonify({
                    "error": "Permission denied",
                    "required_module": module,
                    "required_level": level,
                    "message": str(e)
                }), 403

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def require_super_admin(f):
    """Require a user with access to every business unit."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not _is_authenticated():
            return jsonify({"error": "Authentication required"}), 401

        if not is_super_admin(g.current_user):
            permission_service.log_security_event(
                user_id=g.current_user.id,
                event_type="PERMISSION_DENIED",
                success=False,
                action="SUPER_ADMIN",
                reason="Super-admin access required",
                **request_audit_context()
            )
            return jsonify({"error": "Super-admin access required"}), 403

        return f(*args, **kwargs)

    return decorated_function
