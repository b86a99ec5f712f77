# Overview: All permissionable application modules.
# Each module is defined as: (code, name, description, category)

from .categories import ModuleCategory


class AppModule:
    """Closed set of feature areas. Each one is independently permissionable."""
    RECETAS = "recetas"
    CALCULADORA = "calculadora"
    PRODUCCION = "produccion"
    RESUMEN_SEMANAL = "resumen-semanal"
    LOTES = "lotes"
    MERMAS = "mermas"
    CHECKLIST_PRODUCCION = "checklist_produccion"
    CHECKLIST_SERVICIO = "checklist_servicio"
    ADMIN_USUARIOS = "admin_usuarios"
    ADMIN_INGREDIENTES_Y_CATEGORIAS = "admin_ingredientes_y_categorias"
    ADMIN_TAREAS_OPERATIVAS = "admin_tareas_operativas"
    ADMIN_REPORTES = "admin_reportes"
    ADMIN_PERMISOS = "admin_permisos"


# -- OPERATIONS --

OPERATION_MODULES = [
    (
        AppModule.RECETAS,
        "Recetario",
        "Browse, create and edit recipes",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.CALCULADORA,
        "Calculadora de Recetas",
        "Scale recipe ingredients to a desired yield",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.PRODUCCION,
        "Plan de Producción (Mi Día)",
        "Production plan, task timers and batch generation",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.RESUMEN_SEMANAL,
        "Resumen Semanal",
        "Summary of batches produced in a period",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.LOTES,
        "Lotes",
        "Batch list, expiry tracking and traceability",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.MERMAS,
        "Registro y Reporte de Mermas",
        "Log waste and view the weekly waste report",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.CHECKLIST_PRODUCCION,
        "Checklist (Producción)",
        "Operational checklist for production staff",
        ModuleCategory.OPERATIONS,
    ),
    (
        AppModule.CHECKLIST_SERVICIO,
        "Checklist (Servicio)",
        "Operational checklist for service staff",
        ModuleCategory.OPERATIONS,
    ),
]


# -- ADMINISTRATION --

ADMIN_MODULES = [
    (
        AppModule.ADMIN_USUARIOS,
        "Gestión de Usuarios",
        "Create, edit and delete users",
        ModuleCategory.ADMINISTRATION,
    ),
    (
        AppModule.ADMIN_INGREDIENTES_Y_CATEGORIAS,
        "Ingredientes y Categorías",
        "Manage master ingredients and their categories",
        ModuleCategory.ADMINISTRATION,
    ),
    (
        AppModule.ADMIN_TAREAS_OPERATIVAS,
        "Tareas Operativas (Admin)",
        "Manage operational task templates",
        ModuleCategory.ADMINISTRATION,
    ),
    (
        AppModule.ADMIN_REPORTES,
        "Reportes",
        "Production reports",
        ModuleCategory.ADMINISTRATION,
    ),
    (
        AppModule.ADMIN_PERMISOS,
        "Gestión de Permisos",
        "Edit the role permission table",
        ModuleCategory.ADMINISTRATION,
    ),
]


MODULE_DEFINITIONS = OPERATION_MODULES + ADMIN_MODULES
