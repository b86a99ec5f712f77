# Overview: Service-layer operations for permission; encapsulates business logic and database work.

"""
Permission Checking and Security Event Logging

WHY: Enforce role-based access control per application module and keep an
audit trail of denials and administrative changes.

RESOLUTION: The pure resolver in kitchen.permissions.resolver decides; this
module feeds it the current role permission table from the database.
Precedence is super-admin > per-user override > role default > none.

DESIGN PRINCIPLES:
- Fail closed: Deny by default, require explicit permission grant
- Log denials only: Permission grants are not logged
- Fresh reads: The table is read per check so a revoked permission applies
  on the very next request
"""

from ..extensions import db
from ..models import RolePermission, SecurityEvent
from ..permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    NON_OVERRIDABLE_MODULES,
    effective_permission,
    get_all_module_codes,
    level_satisfies,
    validate_module_code,
    validate_permission_level,
    validate_role,
)
from kitchen.time_utils import utcnow


class PermissionDeniedError(Exception):
    """Raised when user lacks required permission."""

    def __init__(self, module: str, level: str, message: str | None = None):
        self.module = module
        self.level = level
        super().__init__(message or f"Permission denied: {module}:{level}")


def log_security_event(
    user_id: int | None,
    event_type: str,
    success: bool,
    resource: str | None = None,
    action: str | None = None,
    reason: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    unit_id: str | None = None,
) -> SecurityEvent:
    """
    Log security event to audit trail with unit context.

    event_type examples:
    - LOGIN
    - LOGIN_FAILED
    - LOGOUT
    - PERMISSION_DENIED
    - UNIT_ACCESS_DENIED
    - USER_CREATED / USER_UPDATED / USER_DELETED
    - ROLE_PERMISSION_UPDATED
    """
    event = SecurityEvent(
        user_id=user_id,
        unit_id=unit_id,
        event_type=event_type,
        resource=resource,
        action=action,
        success=success,
        reason=reason,
        ip_address=ip_address,
        user_agent=user_agent,
        occurred_at=utcnow(),
    )

    db.session.add(event)
    db.session.commit()

    return event


def get_role_permissions() -> dict:
    """
    Load the role permission table as {role: {module: level}}.

    Roles or modules without rows are simply absent; the resolver treats
    them as NONE.
    """
    table: dict[str, dict[str, str]] = {}
    for row in db.session.query(RolePermission).all():
        table.setdefault(row.role, {})[row.module] = row.level
    return table


def get_effective_permission(user, module: str) -> str:
    return effective_permission(user, module, get_role_permissions())


def get_effective_permissions(user) -> dict:
    """Effective level for every module, keyed by module code."""
    role_permissions = get_role_permissions()
    return {
        module: effective_permission(user, module, role_permissions)
        for module in get_all_module_codes()
    }


def user_has_permission(user, module: str, required_level: str) -> bool:
    """
    Check if user meets required_level ("view" or "edit") on module.

    No user -> False.
    """
    if user is None:
        return False
    return level_satisfies(get_effective_permission(user, module), required_level)


def require_permission(
    user,
    module: str,
    required_level: str,
    resource: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
    unit_id: str | None = None,
) -> None:
    """
    Require user to meet required_level on module, raise PermissionDeniedError if not.

    Denials are logged to security_events.

    Usage:
        require_permission(user, AppModule.PRODUCCION, PermissionLevel.EDIT, resource=request.path)
    """
    if user_has_permission(user, module, required_level):
        return

    log_security_event(
        user_id=user.id if user is not None else None,
        event_type="PERMISSION_DENIED",
        success=False,
        resource=resource,
        action=f"{module}:{required_level}",
        reason=f"Missing permission: {module}:{required_level}",
        ip_address=ip_address,
        user_agent=user_agent,
        unit_id=unit_id,
    )
    raise PermissionDeniedError(module, required_level)


def clean_permission_overrides(overrides) -> dict | None:
    """
    Validate a per-user override map and drop empty entries.

    Returns None when nothing remains, mirroring a user without overrides.
    Raises ValueError for unknown modules, invalid levels, or an attempt to
    override the permission-management module.
    """
    if not overrides:
        return None
    if not isinstance(overrides, dict):
        raise ValueError("permission_overrides must be an object of module -> level")

    cleaned = {}
    for module, level in overrides.items():
        if not level:
            continue
        if not validate_module_code(module):
            raise ValueError(f"Unknown module '{module}'")
        if module in NON_OVERRIDABLE_MODULES:
            raise ValueError(f"Module '{module}' cannot be overridden per user")
        if not validate_permission_level(level):
            raise ValueError(f"Invalid permission level '{level}'")
        cleaned[module] = level

    return cleaned or None


def initialize_role_permissions() -> int:
    """
    Seed the role permission table from DEFAULT_ROLE_PERMISSIONS.

    Idempotent: existing cells are left untouched so admin edits survive.
    """
    created_count = 0

    for role, modules in DEFAULT_ROLE_PERMISSIONS.items():
        for module, level in modules.items():
            existing = db.session.query(RolePermission).filter_by(role=role, module=module).first()
            if existing:
                continue
            db.session.add(RolePermission(role=role, module=module, level=level))
            created_count += 1

    db.session.commit()
    return created_count


def update_role_permission(role: str, module: str, level: str, updated_by_user_id: int | None = None) -> RolePermission:
    """Set one (role, module) cell of the role permission table."""
    if not validate_role(role):
        raise ValueError(f"Role '{role}' not found")
    if not validate_module_code(module):
        raise ValueError(f"Module '{module}' not found")
    if not validate_permission_level(level):
        raise ValueError(f"Invalid permission level '{level}'")

    cell = db.session.query(RolePermission).filter_by(role=role, module=module).first()
    if cell:
        cell.level = level
    else:
        cell = RolePermission(role=role, module=module, level=level)
        db.session.add(cell)

    db.session.commit()

    log_security_event(
        user_id=updated_by_user_id,
        event_type="ROLE_PERMISSION_UPDATED",
        success=True,
        action=f"{role}:{module}",
        reason=f"Set to {level}",
    )
    return cell