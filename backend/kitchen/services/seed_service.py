# Overview: Reference data and demo dataset seeding.

"""
Seeding.

seed_reference_data() creates what every installation needs: the role
permission table and the business units. seed_demo_data() adds the demo
kitchen (users, ingredients, recipes, plan, batches, waste, checklists).
Both are idempotent: rows that already exist are left alone.
"""

from __future__ import annotations

from datetime import timedelta

from ..extensions import db
from ..models import (
    Batch,
    BatchStatus,
    BusinessUnit,
    ChecklistStatus,
    MasterIngredient,
    OperationalTask,
    OperationalTaskTemplate,
    ProductionStatus,
    ProductionTask,
    Recipe,
    RecipeIngredient,
    RecipeStep,
    RecipeType,
    TaskFrequency,
    UnitKind,
    User,
    Waste,
    WasteType,
)
from ..permissions import AppModule, PermissionLevel, Role
from . import permission_service
from kitchen.time_utils import utcnow


BUSINESS_UNITS = [
    ("prod-central", "Producción Central", UnitKind.PRODUCTION),
    ("polanco", "Sucursal Polanco", UnitKind.BRANCH),
    ("tecamachalco", "Sucursal Tecamachalco", UnitKind.BRANCH),
    ("santa-fe", "Sucursal Santa Fe", UnitKind.BRANCH),
]

DEMO_USERS = [
    (1, "Super Admin", "super@kitchen.com", Role.ADMIN, ["*"], None),
    (2, "Ulises (Jefe Prod)", "ulises@kitchen.com", Role.PRODUCCION, ["prod-central"], None),
    (3, "Servicio Polanco", "servicio.polanco@kitchen.com", Role.SERVICIO, ["polanco"], None),
    (4, "Cocina Polanco", "cocina.polanco@kitchen.com", Role.COCINA, ["polanco"], None),
    (5, "Ana (Producción)", "ana@kitchen.com", Role.PRODUCCION, ["prod-central"], None),
    (6, "Carlos (Producción)", "carlos@kitchen.com", Role.PRODUCCION, ["prod-central"], None),
    (7, "Chef Regional", "chef.regional@kitchen.com", Role.COCINA, ["polanco", "tecamachalco"], None),
    (8, "Servicio Tecamachalco", "servicio.teca@kitchen.com", Role.SERVICIO, ["tecamachalco"], None),
    (9, "Admin de Sucursales", "admin.sucursales@kitchen.com", Role.ADMIN, ["polanco", "tecamachalco", "santa-fe"], None),
    (
        10, "Admin de Marketing", "marketing@kitchen.com", Role.ADMIN,
        ["polanco", "tecamachalco", "santa-fe"],
        {AppModule.PRODUCCION: PermissionLevel.NONE, AppModule.LOTES: PermissionLevel.NONE},
    ),
]

INGREDIENTS = [
    ("ing-1", "Tomate", "Vegetales", "kg"),
    ("ing-2", "Cebolla", "Vegetales", "kg"),
    ("ing-3", "Ajo", "Vegetales", "pzas"),
    ("ing-4", "Chile Serrano", "Chiles", "pzas"),
    ("ing-5", "Sal", "Condimentos", "kg"),
    ("ing-6", "Pasta Fettuccine", "Pastas", "kg"),
    ("ing-7", "Crema para batir", "Lácteos", "L"),
    ("ing-8", "Queso Parmesano", "Lácteos", "kg"),
    ("ing-9", "Mantequilla", "Lácteos", "kg"),
    ("ing-10", "Pechuga de Pollo", "Proteínas", "kg"),
    ("ing-11", "Jugo de Limón", "Frutas", "L"),
    ("ing-12", "Aceite de Oliva", "Aceites", "L"),
    ("ing-13", "Orégano seco", "Hierbas", "kg"),
    ("ing-14", "Pimienta", "Condimentos", "kg"),
]

RECIPES = [
    {
        "id": "salsa-roja",
        "name": "Salsa Roja Clásica",
        "category": "Salsas",
        "type": RecipeType.PRODUCCION,
        "ingredients": [
            ("ing-1", "Tomate", 1, "kg"),
            ("ing-2", "Cebolla", 0.2, "kg"),
            ("ing-3", "Ajo", 2, "pzas"),
            ("ing-4", "Chile Serrano", 3, "pzas"),
            ("ing-5", "Sal", 0.01, "kg"),
        ],
        "steps": [
            "Asar los tomates, cebolla, ajo y chiles.",
            "Licuar todos los ingredientes asados con sal.",
            "Sazonar en una cacerola caliente por 10 minutos.",
        ],
        "prep_time_minutes": 30,
        "expected_yield": 1,
        "yield_unit": "L",
        "photo_url": "https://picsum.photos/seed/salsa/400/300",
        "shelf_life_days": 5,
    },
    {
        "id": "pasta-alfredo",
        "name": "Pasta Alfredo",
        "category": "Pastas",
        "type": RecipeType.SERVICIO,
        "ingredients": [
            ("ing-6", "Pasta Fettuccine", 0.5, "kg"),
            ("ing-7", "Crema para batir", 0.5, "L"),
            ("ing-8", "Queso Parmesano", 0.15, "kg"),
            ("ing-9", "Mantequilla", 0.05, "kg"),
            ("ing-3", "Ajo", 2, "pzas"),
        ],
        "steps": [
            "Cocer la pasta según las instrucciones del paquete.",
            "En un sartén, derretir la mantequilla y sofreír el ajo picado.",
            "Agregar la crema y el queso parmesano. Cocinar a fuego bajo hasta espesar.",
            "Mezclar la pasta con la salsa.",
        ],
        "prep_time_minutes": 25,
        "expected_yield": 4,
        "yield_unit": "ord",
        "photo_url": "https://picsum.photos/seed/pasta/400/300",
        "shelf_life_days": 3,
    },
    {
        "id": "pollo-parrilla",
        "name": "Pollo a la Parrilla Marinado",
        "category": "Proteínas",
        "type": RecipeType.PRODUCCION,
        "ingredients": [
            ("ing-10", "Pechuga de Pollo", 1, "kg"),
            ("ing-11", "Jugo de Limón", 0.1, "L"),
            ("ing-12", "Aceite de Oliva", 0.05, "L"),
            ("ing-13", "Orégano seco", 0.01, "kg"),
            ("ing-14", "Pimienta", 0.005, "kg"),
        ],
        "steps": [
            "Mezclar jugo de limón, aceite, orégano y pimienta para el marinado.",
            "Marinar el pollo por al menos 30 minutos.",
            "Cocinar el pollo en la parrilla caliente hasta que esté bien cocido.",
        ],
        "prep_time_minutes": 50,
        "expected_yield": 0.8,
        "yield_unit": "kg",
        "photo_url": "https://picsum.photos/seed/pollo/400/300",
        "shelf_life_days": 4,
    },
]

# (id, recipe_id, recipe_name, quantity, unit, priority, status, assigned_user_id, unit_id)
PRODUCTION_TASKS = [
    ("task1", "salsa-roja", "Salsa Roja Clásica", 20, "L", 1, ProductionStatus.PENDIENTE, 2, "prod-central"),
    ("task2", "pollo-parrilla", "Pollo a la Parrilla Marinado", 15, "kg", 2, ProductionStatus.PENDIENTE, 5, "prod-central"),
    ("task3", "pasta-alfredo", "Pasta Alfredo", 10, "ord", 3, ProductionStatus.COMPLETADO, 4, "polanco"),
    ("task4", "salsa-roja", "Salsa Roja Clásica", 5, "L", 4, ProductionStatus.PENDIENTE, None, "prod-central"),
]

# (id, recipe_id, recipe_name, days_ago, responsible, shelf_life, quantity, unit, duration, source_task_id, notes, unit_id)
BATCHES = [
    ("B1721249501", "salsa-roja", "Salsa Roja Clásica", 1, "Ulises (Jefe Prod)", 5, 10, "L", 1680, "task1", None, "prod-central"),
    (
        "B1721163101", "pollo-parrilla", "Pollo a la Parrilla Marinado", 2, "Ana (Producción)", 4, 8, "kg", 3300, "task2",
        "El pollo salió un poco seco, revisar tiempo en parrilla la próxima vez.", "prod-central",
    ),
    ("B1721076701", "pasta-alfredo", "Pasta Alfredo", 3, "Cocina Polanco", 3, 10, "ord", 1500, "task3", None, "polanco"),
]

# (id, days_ago, unit_id, type, related_id, related_name, description, quantity, unit, responsible)
WASTE_RECORDS = [
    ("W1721310001", 1, "prod-central", WasteType.SOBREPRODUCCION, "salsa-roja", "Salsa Roja Clásica", None, 1.5, "L", "Ulises (Jefe Prod)"),
    (
        "W1721310002", 2, "polanco", WasteType.CADUCIDAD, "B1721163101",
        "Pollo a la Parrilla Marinado (Lote B1721163101)", None, 0.5, "kg", "Ana (Producción)",
    ),
    ("W1721310003", 0, "tecamachalco", WasteType.PREPARACION, None, None, "Tomates magullados en recepción", 2, "kg", "Carlos (Producción)"),
]

TASK_TEMPLATES = [
    ("opt1", "Limpiar y desinfectar mesas de trabajo", "Usar solución desinfectante en todas las superficies de acero inoxidable.", TaskFrequency.DIARIA, Role.PRODUCCION),
    ("opt2", "Verificar temperaturas de refrigeradores", "Anotar temperaturas de refrigerador 1, 2 y congelador en la bitácora.", TaskFrequency.DIARIA, Role.PRODUCCION),
    ("opt3", "Limpieza profunda de horno", "Ciclo de limpieza completo y revisión de quemadores.", TaskFrequency.SEMANAL, Role.PRODUCCION),
    ("opt4", "Revisar y rotar etiquetados (FIFO)", "Asegurarse que todos los productos estén etiquetados y los más antiguos estén al frente.", TaskFrequency.DIARIA, Role.PRODUCCION),
    ("opt5", "Montar línea de servicio fría", "Rellenar todos los contenedores de la barra fría.", TaskFrequency.DIARIA, Role.SERVICIO),
    ("opt6", "Rellenar salseros y toppings", "Verificar niveles y rellenar todos los dispensadores.", TaskFrequency.DIARIA, Role.SERVICIO),
    ("opt7", "Limpieza de campana extractora", "Limpiar filtros y superficie de la campana.", TaskFrequency.SEMANAL, Role.SERVICIO),
    ("opt8", "Revisar mise en place de línea", "Verificar que toda la línea esté completa, con producto fresco y rotado.", TaskFrequency.DIARIA, Role.COCINA),
    ("opt9", "Validar registro de mermas", "Revisar bitácora de mermas y validar que los registros del turno sean correctos.", TaskFrequency.DIARIA, Role.COCINA),
]

# (id, template_id, status, unit_id); name, description and role come from the template
OPERATIONAL_TASKS = [
    ("ot1", "opt1", ChecklistStatus.PENDIENTE, "prod-central"),
    ("ot2", "opt2", ChecklistStatus.PENDIENTE, "prod-central"),
    ("ot3", "opt4", ChecklistStatus.EN_PROGRESO, "prod-central"),
    ("ot4", "opt5", ChecklistStatus.PENDIENTE, "polanco"),
    ("ot5", "opt6", ChecklistStatus.COMPLETADO, "polanco"),
    ("ot6", "opt3", ChecklistStatus.PENDIENTE, "prod-central"),
    ("ot7", "opt5", ChecklistStatus.PENDIENTE, "tecamachalco"),
    ("ot8", "opt8", ChecklistStatus.PENDIENTE, "polanco"),
    ("ot9", "opt9", ChecklistStatus.PENDIENTE, "polanco"),
    ("ot10", "opt8", ChecklistStatus.PENDIENTE, "tecamachalco"),
]


def seed_business_units() -> int:
    created = 0
    for position, (unit_id, name, kind) in enumerate(BUSINESS_UNITS):
        if db.session.get(BusinessUnit, unit_id) is not None:
            continue
        db.session.add(BusinessUnit(id=unit_id, name=name, kind=kind, position=position))
        created += 1
    db.session.commit()
    return created


def seed_reference_data() -> dict:
    """Role permission table and business units."""
    return {
        "role_permissions": permission_service.initialize_role_permissions(),
        "business_units": seed_business_units(),
    }


def _seed_users() -> int:
    created = 0
    for user_id, name, email, role, unit_ids, overrides in DEMO_USERS:
        if db.session.get(User, user_id) is not None or db.session.query(User).filter_by(email=email).first():
            continue
        db.session.add(User(
            id=user_id,
            name=name,
            email=email,
            role=role,
            accessible_unit_ids=list(unit_ids),
            permission_overrides=dict(overrides) if overrides else None,
        ))
        created += 1
    return created


def _seed_ingredients() -> int:
    created = 0
    for ingredient_id, name, category, unit in INGREDIENTS:
        if db.session.get(MasterIngredient, ingredient_id) is not None:
            continue
        db.session.add(MasterIngredient(id=ingredient_id, name=name, category=category, unit=unit))
        created += 1
    return created


def _seed_recipes(now) -> int:
    created = 0
    for offset, data in enumerate(RECIPES):
        if db.session.get(Recipe, data["id"]) is not None:
            continue
        fields = {k: v for k, v in data.items() if k not in ("ingredients", "steps")}
        # Later entries are older so the catalog lists them in seed order
        stamp = now - timedelta(seconds=offset)
        recipe = Recipe(created_at=stamp, updated_at=stamp, **fields)
        recipe.ingredients = [
            RecipeIngredient(position=i, ingredient_id=ing_id, ingredient_name=ing_name, quantity=qty, unit=unit)
            for i, (ing_id, ing_name, qty, unit) in enumerate(data["ingredients"])
        ]
        recipe.steps = [RecipeStep(position=i, description=text) for i, text in enumerate(data["steps"])]
        db.session.add(recipe)
        created += 1
    return created


def _seed_plan(now) -> int:
    created = 0
    for offset, (task_id, recipe_id, recipe_name, qty, unit, priority, status, assignee, unit_id) in enumerate(PRODUCTION_TASKS):
        if db.session.get(ProductionTask, task_id) is not None:
            continue
        db.session.add(ProductionTask(
            id=task_id,
            recipe_id=recipe_id,
            recipe_name=recipe_name,
            quantity_to_produce=qty,
            unit=unit,
            priority=priority,
            status=status,
            assigned_user_id=assignee,
            unit_id=unit_id,
            created_at=now + timedelta(seconds=offset),
        ))
        created += 1
    return created


def _seed_batches(now) -> int:
    created = 0
    for (batch_id, recipe_id, recipe_name, days_ago, responsible, shelf_life, qty, unit,
         duration, source_task_id, notes, unit_id) in BATCHES:
        if db.session.get(Batch, batch_id) is not None:
            continue
        db.session.add(Batch(
            id=batch_id,
            recipe_id=recipe_id,
            recipe_name=recipe_name,
            production_date=now - timedelta(days=days_ago),
            responsible_user=responsible,
            shelf_life_days=shelf_life,
            quantity=qty,
            unit=unit,
            status=BatchStatus.ACTIVO,
            duration_seconds=duration,
            source_task_id=source_task_id,
            notes=notes,
            unit_id=unit_id,
        ))
        created += 1
    return created


def _seed_waste(now) -> int:
    created = 0
    for (waste_id, days_ago, unit_id, waste_type, related_id, related_name,
         description, qty, unit, responsible) in WASTE_RECORDS:
        if db.session.get(Waste, waste_id) is not None:
            continue
        db.session.add(Waste(
            id=waste_id,
            date=now - timedelta(days=days_ago),
            unit_id=unit_id,
            type=waste_type,
            related_recipe_or_batch_id=related_id,
            related_recipe_or_batch_name=related_name,
            description=description,
            quantity=qty,
            unit=unit,
            responsible_user=responsible,
        ))
        created += 1
    return created


def _seed_checklists(now) -> int:
    created = 0
    templates = {}
    for template_id, name, description, frequency, role in TASK_TEMPLATES:
        template = db.session.get(OperationalTaskTemplate, template_id)
        if template is None:
            template = OperationalTaskTemplate(
                id=template_id, name=name, description=description, frequency=frequency, assigned_role=role,
            )
            db.session.add(template)
            created += 1
        templates[template_id] = template

    for position, (task_id, template_id, status, unit_id) in enumerate(OPERATIONAL_TASKS):
        if db.session.get(OperationalTask, task_id) is not None:
            continue
        template = templates[template_id]
        db.session.add(OperationalTask(
            id=task_id,
            template_id=template_id,
            name=template.name,
            description=template.description,
            date=now,
            status=status,
            assigned_role=template.assigned_role,
            unit_id=unit_id,
            position=position,
        ))
        created += 1
    return created


def seed_demo_data() -> dict:
    """
    Load the demo kitchen on top of the reference data.

    Returns created-row counts per collection.
    """
    counts = seed_reference_data()
    now = utcnow()

    counts["users"] = _seed_users()
    counts["ingredients"] = _seed_ingredients()
    counts["recipes"] = _seed_recipes(now)
    db.session.flush()
    counts["production_tasks"] = _seed_plan(now)
    db.session.flush()
    counts["batches"] = _seed_batches(now)
    counts["waste_records"] = _seed_waste(now)
    counts["checklist_items"] = _seed_checklists(now)

    db.session.commit()
    return counts
