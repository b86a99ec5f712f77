# Overview: Pure permission resolution for a (user, module) pair.

"""
Effective permission resolution.

Precedence, highest first:
1. Super-admin (unit scope is AllUnits): EDIT on every module.
2. Per-user override for the module, when present.
3. The role's entry in the role permission table.
4. NONE.

These functions never touch the database and never raise. Anything that
is not a recognised level falls through to a denial in has_permission.
"""

from __future__ import annotations

from ..scopes import AllUnits
from .levels import PermissionLevel


def is_super_admin(user) -> bool:
    if user is None:
        return False
    return isinstance(user.unit_scope, AllUnits)


def effective_permission(user, module: str, role_permissions: dict) -> str:
    """
    Compute the effective permission level for a user on a module.

    role_permissions maps role -> {module: level}; both levels of the
    mapping may be partial.
    """
    if user is None:
        return PermissionLevel.NONE
    if is_super_admin(user):
        return PermissionLevel.EDIT

    overrides = user.permission_overrides or {}
    override = overrides.get(module)
    if override:
        return override

    role_table = role_permissions.get(user.role) or {}
    return role_table.get(module) or PermissionLevel.NONE


def level_satisfies(effective: str, required: str) -> bool:
    """Check an effective level against a required VIEW or EDIT."""
    if required == PermissionLevel.VIEW:
        return effective in (PermissionLevel.VIEW, PermissionLevel.EDIT)
    if required == PermissionLevel.EDIT:
        return effective == PermissionLevel.EDIT
    return False


def has_permission(user, module: str, required: str, role_permissions: dict) -> bool:
    """Return True if the user's effective level on module meets required."""
    if user is None:
        return False
    return level_satisfies(effective_permission(user, module, role_permissions), required)


def resolve_all(user, role_permissions: dict, modules) -> dict:
    """Effective level for every module in modules, keyed by module code."""
    return {module: effective_permission(user, module, role_permissions) for module in modules}
