# Overview: Permission system package.
# Re-exports all public APIs for convenient imports.

from .categories import ModuleCategory
from .definitions import (
    AppModule,
    MODULE_DEFINITIONS,
    OPERATION_MODULES,
    ADMIN_MODULES,
)
from .levels import PermissionLevel, PERMISSION_LEVELS, REQUIRABLE_LEVELS, validate_permission_level
from .roles import Role, ROLES, MULTI_UNIT_ROLES, DEFAULT_ROLE_PERMISSIONS, validate_role
from .helpers import (
    NON_OVERRIDABLE_MODULES,
    get_all_module_codes,
    get_module_definition,
    get_overridable_module_codes,
    validate_module_code,
)
from .resolver import effective_permission, has_permission, is_super_admin, level_satisfies, resolve_all

__all__ = [
    "ModuleCategory",
    "AppModule",
    "MODULE_DEFINITIONS",
    "OPERATION_MODULES",
    "ADMIN_MODULES",
    "PermissionLevel",
    "PERMISSION_LEVELS",
    "REQUIRABLE_LEVELS",
    "validate_permission_level",
    "Role",
    "ROLES",
    "MULTI_UNIT_ROLES",
    "DEFAULT_ROLE_PERMISSIONS",
    "validate_role",
    "NON_OVERRIDABLE_MODULES",
    "get_all_module_codes",
    "get_module_definition",
    "get_overridable_module_codes",
    "validate_module_code",
    "effective_permission",
    "has_permission",
    "is_super_admin",
    "level_satisfies",
    "resolve_all",
]
