# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

# backend/kitchen/routes/auth.py
"""
Authentication and unit selection API routes

FLOW:
1. POST /login with an email -> token (+ session already Active when the
   user has exactly one unit)
2. POST /select-unit with a unit id or "all" -> Active
3. Any route, Authorization: Bearer <token>
4. POST /logout -> session discarded
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import auth_service
from ..services import session_service
from ..services import permission_service
from ..services import unit_access_service
from ..services.unit_access_service import UnitAccessError
from ..decorators import require_auth, get_bearer_token
from ..scopes import parse_selection, Unset


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(user, state) -> dict:
    all_units = unit_access_service.get_all_units()
    return {
        "user": user.to_dict(),
        "permissions": permission_service.get_effective_permissions(user),
        "session": state.to_dict(),
        "accessible_units": [unit.to_dict() for unit in unit_access_service.accessible_units(user, all_units)],
        "can_switch_units": unit_access_service.can_switch_units(user),
        "can_select_global": unit_access_service.can_select_global(user),
    }


@auth_bp.post("/login")
def login_route():
    """
    Log in by email (case-insensitive exact match).

    Returns the session token with the user's effective permissions and
    unit context. awaiting_unit_selection tells the client whether to show
    the unit selector next.
    """
    try:
        data = request.get_json(silent=True) or {}
        email = (data.get("email") or "").strip()

        if not email:
            return jsonify({"error": "email required"}), 400

        user = auth_service.authenticate(email)

        if not user:
            permission_service.log_security_event(
                user_id=None,
                event_type="LOGIN_FAILED",
                success=False,
                resource=request.path,
                reason=f"Unknown email: {email}",
                ip_address=request.remote_addr,
                user_agent=request.headers.get("User-Agent"),
            )
            return jsonify({"error": "Invalid credentials"}), 401

        state, token = session_service.create_session(user)

        permission_service.log_security_event(
            user_id=user.id,
            event_type="LOGIN",
            success=True,
            resource=request.path,
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
            unit_id=session_service.active_unit_id(state.selection),
        )

        payload = _session_payload(user, state)
        payload.update({"token": token, "message": "Login successful"})
        return jsonify(payload), 200

    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.post("/logout")
def logout_route():
    """
    Discard the session: user and unit selection go together.

    Expects Authorization header: Bearer <token>
    """
    try:
        token = get_bearer_token()
        if not token:
            return jsonify({"error": "Authorization header required"}), 401

        context = session_service.validate_session(token)
        if not context:
            return jsonify({"error": "Invalid or expired token"}), 401

        session_service.revoke_session(token)

        permission_service.log_security_event(
            user_id=context.user.id,
            event_type="LOGOUT",
            success=True,
            resource=request.path,
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
        )
        return jsonify({"message": "Logout successful"}), 200

    except Exception:
        current_app.logger.exception("Failed to logout user")
        return jsonify({"error": "Internal server error"}), 500


@auth_bp.get("/me")
@require_auth
def me_route():
    """Current user, effective permissions and unit context."""
    return jsonify(_session_payload(g.current_user, g.session_context.state))


@auth_bp.get("/units")
@require_auth
def units_route():
    """Units the user can choose from, in canonical order."""
    user = g.current_user
    units = unit_access_service.accessible_units(user, unit_access_service.get_all_units())
    return jsonify({
        "units": [unit.to_dict() for unit in units],
        "active_unit_id": g.selection.to_value(),
        "can_switch_units": unit_access_service.can_switch_units(user),
        "can_select_global": unit_access_service.can_select_global(user),
    })


@auth_bp.post("/select-unit")
@require_auth
def select_unit_route():
    """
    Switch the session's active unit.

    Request body:
    - unit_id: str (required) - a business unit id, or "all" for the global view
    """
    data = request.get_json(silent=True) or {}
    selection = parse_selection(data.get("unit_id"))

    if isinstance(selection, Unset):
        return jsonify({"error": "unit_id required"}), 400

    try:
        state = session_service.select_unit(g.session_context, selection)
    except UnitAccessError as e:
        permission_service.log_security_event(
            user_id=g.current_user.id,
            event_type="UNIT_ACCESS_DENIED",
            success=False,
            resource=request.path,
            action="SELECT_UNIT",
            reason=str(e),
            ip_address=request.remote_addr,
            user_agent=request.headers.get("User-Agent"),
            unit_id=selection.to_value(),
        )
        return jsonify({"error": str(e)}), 403
    except ValueError as e:
        return jsonify({"error": str(e)}), 401

    return jsonify({"session": state.to_dict()})
