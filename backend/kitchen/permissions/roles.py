# Overview: Fixed role set and the default role permission table.

from .definitions import AppModule
from .levels import PermissionLevel


class Role:
    """Fixed set of staff roles. Values are the stored/display names."""
    ADMIN = "Admin"
    PRODUCCION = "Producción"
    SERVICIO = "Servicio"
    COCINA = "Cocina"


ROLES = (Role.ADMIN, Role.PRODUCCION, Role.SERVICIO, Role.COCINA)

# Roles whose users may be assigned to more than one business unit.
# Admin is handled separately: it defaults to access to every unit.
MULTI_UNIT_ROLES = {Role.PRODUCCION, Role.COCINA}

_EDIT = PermissionLevel.EDIT
_VIEW = PermissionLevel.VIEW
_NONE = PermissionLevel.NONE

DEFAULT_ROLE_PERMISSIONS = {
    Role.ADMIN: {
        AppModule.RECETAS: _EDIT,
        AppModule.CALCULADORA: _EDIT,
        AppModule.PRODUCCION: _EDIT,
        AppModule.RESUMEN_SEMANAL: _VIEW,
        AppModule.LOTES: _EDIT,
        AppModule.MERMAS: _EDIT,
        AppModule.CHECKLIST_PRODUCCION: _EDIT,
        AppModule.CHECKLIST_SERVICIO: _EDIT,
        AppModule.ADMIN_USUARIOS: _EDIT,
        AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS: _EDIT,
        AppModule.ADMIN_TAREAS_OPERATIVAS: _EDIT,
        AppModule.ADMIN_REPORTES: _VIEW,
        AppModule.ADMIN_PERMISOS: _EDIT,
    },
    Role.PRODUCCION: {
        AppModule.RECETAS: _VIEW,
        AppModule.CALCULADORA: _EDIT,
        AppModule.PRODUCCION: _EDIT,
        AppModule.RESUMEN_SEMANAL: _VIEW,
        AppModule.LOTES: _VIEW,
        AppModule.MERMAS: _EDIT,
        AppModule.CHECKLIST_PRODUCCION: _EDIT,
        AppModule.CHECKLIST_SERVICIO: _NONE,
        AppModule.ADMIN_USUARIOS: _NONE,
        AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS: _NONE,
        AppModule.ADMIN_TAREAS_OPERATIVAS: _NONE,
        AppModule.ADMIN_REPORTES: _NONE,
        AppModule.ADMIN_PERMISOS: _NONE,
    },
    Role.SERVICIO: {
        AppModule.RECETAS: _VIEW,
        AppModule.CALCULADORA: _NONE,
        AppModule.PRODUCCION: _NONE,
        AppModule.RESUMEN_SEMANAL: _NONE,
        AppModule.LOTES: _NONE,
        AppModule.MERMAS: _EDIT,
        AppModule.CHECKLIST_PRODUCCION: _NONE,
        AppModule.CHECKLIST_SERVICIO: _EDIT,
        AppModule.ADMIN_USUARIOS: _NONE,
        AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS: _NONE,
        AppModule.ADMIN_TAREAS_OPERATIVAS: _NONE,
        AppModule.ADMIN_REPORTES: _NONE,
        AppModule.ADMIN_PERMISOS: _NONE,
    },
    Role.COCINA: {
        AppModule.RECETAS: _EDIT,
        AppModule.CALCULADORA: _EDIT,
        AppModule.PRODUCCION: _VIEW,
        AppModule.RESUMEN_SEMANAL: _NONE,
        AppModule.LOTES: _VIEW,
        AppModule.MERMAS: _EDIT,
        AppModule.CHECKLIST_PRODUCCION: _VIEW,
        AppModule.CHECKLIST_SERVICIO: _VIEW,
        AppModule.ADMIN_USUARIOS: _NONE,
        AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS: _NONE,
        AppModule.ADMIN_TAREAS_OPERATIVAS: _NONE,
        AppModule.ADMIN_REPORTES: _NONE,
        AppModule.ADMIN_PERMISOS: _NONE,
    },
}


def validate_role(role) -> bool:
    """Check if a value is one of the fixed roles."""
    return role in ROLES
