from .tenancy import BusinessUnit, UnitKind, UNIT_KINDS
from .auth import User, RolePermission
from .security import SecurityEvent
from .recipes import MasterIngredient, Recipe, RecipeIngredient, RecipeStep, RecipeType, RECIPE_TYPES, MEASURE_UNITS
from .production import ProductionTask, Batch, ProductionStatus, PRODUCTION_STATUSES, BatchStatus
from .waste import Waste, WasteType, WASTE_TYPES
from .operations import (
    OperationalTaskTemplate, OperationalTask, TaskFrequency, TASK_FREQUENCIES,
    ChecklistStatus, CHECKLIST_STATUSES,
)

__all__ = [
    'BusinessUnit', 'UnitKind', 'UNIT_KINDS',
    'User', 'RolePermission',
    'SecurityEvent',
    'MasterIngredient', 'Recipe', 'RecipeIngredient', 'RecipeStep', 'RecipeType', 'RECIPE_TYPES', 'MEASURE_UNITS',
    'ProductionTask', 'Batch', 'ProductionStatus', 'PRODUCTION_STATUSES', 'BatchStatus',
    'Waste', 'WasteType', 'WASTE_TYPES',
    'OperationalTaskTemplate', 'OperationalTask', 'TaskFrequency', 'TASK_FREQUENCIES',
    'ChecklistStatus', 'CHECKLIST_STATUSES',
]
