# Overview: Module category constants for grouping related modules.


class ModuleCategory:
    """Module categories for organization and UI display."""
    OPERATIONS = "OPERATIONS"
    ADMINISTRATION = "ADMINISTRATION"
