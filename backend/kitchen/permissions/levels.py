# Overview: Permission level constants and their ordering.


class PermissionLevel:
    """Ordered tri-state access level: NONE < VIEW < EDIT."""
    NONE = "none"
    VIEW = "view"
    EDIT = "edit"


PERMISSION_LEVELS = (PermissionLevel.NONE, PermissionLevel.VIEW, PermissionLevel.EDIT)

# Levels a caller may ask for in a check. Asking for NONE is meaningless.
REQUIRABLE_LEVELS = (PermissionLevel.VIEW, PermissionLevel.EDIT)


def validate_permission_level(level) -> bool:
    """Check if a value is one of the three stored levels."""
    return level in PERMISSION_LEVELS
