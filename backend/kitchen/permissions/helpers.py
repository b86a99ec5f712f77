# Overview: Utility functions for module lookups and validation.

from .definitions import AppModule, MODULE_DEFINITIONS

# The permission-management screen itself is never a per-user override target.
NON_OVERRIDABLE_MODULES = {AppModule.ADMIN_PERMISOS}


def get_all_module_codes():
    """Get list of all module codes in display order."""
    return [module[0] for module in MODULE_DEFINITIONS]


def get_module_definition(code):
    """Get full definition for a module code."""
    for module in MODULE_DEFINITIONS:
        if module[0] == code:
            return {
                "code": module[0],
                "name": module[1],
                "description": module[2],
                "category": module[3],
            }
    return None


def validate_module_code(code):
    """Check if a module code is valid."""
    return code in get_all_module_codes()


def get_overridable_module_codes():
    """Module codes that may be offered as per-user override targets."""
    return [code for code in get_all_module_codes() if code not in NON_OVERRIDABLE_MODULES]
