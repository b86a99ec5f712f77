# Overview: Service-layer operations for the recipe catalog and the yield calculator.

"""
Recipe catalog.

VALIDATION (create and update):
- name, category, yield unit required; prep time and expected yield numeric
- Producción recipes need a shelf life; Servicio recipes always store 0
- at least one ingredient line (ingredient id, quantity, unit) and one
  non-blank step; incomplete lines are dropped before that check
"""

from __future__ import annotations

import math
import re
import time

from ..extensions import db
from ..models import MasterIngredient, Recipe, RecipeIngredient, RecipeStep, RecipeType, RECIPE_TYPES
from .errors import NotFoundError
from ..validation import parse_number
from kitchen.time_utils import utcnow


def _slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def _generate_recipe_id(name: str) -> str:
    return f"{_slugify(name)}-{int(time.time() * 1000)}"


def _clean_ingredient_lines(lines) -> list[dict]:
    cleaned = []
    for line in lines or []:
        if not isinstance(line, dict):
            continue
        ingredient_id = line.get("ingredient_id")
        quantity = line.get("quantity")
        unit = line.get("unit")
        if not ingredient_id or quantity is None or quantity == "" or not unit:
            continue
        cleaned.append({
            "ingredient_id": str(ingredient_id),
            "ingredient_name": line.get("ingredient_name"),
            "quantity": parse_number(quantity, "quantity"),
            "unit": unit,
        })
    return cleaned


def _clean_steps(steps) -> list[str]:
    cleaned = []
    for step in steps or []:
        description = step.get("description") if isinstance(step, dict) else step
        if isinstance(description, str) and description.strip():
            cleaned.append(description.strip())
    return cleaned


def _validate_recipe_data(data: dict) -> dict:
    name = (data.get("name") or "").strip()
    category = (data.get("category") or "").strip()
    yield_unit = (data.get("yield_unit") or "").strip()
    recipe_type = data.get("type") or RecipeType.PRODUCCION

    if not name or not category or not yield_unit:
        raise ValueError("name, category and yield_unit are required")
    if recipe_type not in RECIPE_TYPES:
        raise ValueError(f"Invalid recipe type '{recipe_type}'")

    prep_time = parse_number(data.get("prep_time_minutes"), "prep_time_minutes")
    expected_yield = parse_number(data.get("expected_yield"), "expected_yield")

    if recipe_type == RecipeType.PRODUCCION:
        shelf_life = data.get("shelf_life_days")
        if shelf_life is None or shelf_life == "":
            raise ValueError("shelf_life_days is required for production recipes")
        shelf_life_days = int(parse_number(shelf_life, "shelf_life_days"))
    else:
        shelf_life_days = 0

    ingredients = _clean_ingredient_lines(data.get("ingredients"))
    steps = _clean_steps(data.get("steps"))
    if not ingredients or not steps:
        raise ValueError("At least one valid ingredient and one step are required")

    return {
        "name": name,
        "category": category,
        "type": recipe_type,
        "prep_time_minutes": int(prep_time),
        "expected_yield": expected_yield,
        "yield_unit": yield_unit,
        "shelf_life_days": shelf_life_days,
        "photo_url": data.get("photo_url"),
        "video_url": data.get("video_url"),
        "ingredients": ingredients,
        "steps": steps,
    }


def _apply_lines(recipe: Recipe, ingredients: list[dict], steps: list[str]) -> None:
    names = {
        row.id: row.name
        for row in db.session.query(MasterIngredient)
        .filter(MasterIngredient.id.in_([line["ingredient_id"] for line in ingredients]))
        .all()
    }

    recipe.ingredients = [
        RecipeIngredient(
            position=index,
            ingredient_id=line["ingredient_id"],
            ingredient_name=line["ingredient_name"] or names.get(line["ingredient_id"], line["ingredient_id"]),
            quantity=line["quantity"],
            unit=line["unit"],
        )
        for index, line in enumerate(ingredients)
    ]
    recipe.steps = [
        RecipeStep(position=index, description=description)
        for index, description in enumerate(steps)
    ]


def list_recipes() -> list[Recipe]:
    """Newest first."""
    return db.session.query(Recipe).order_by(Recipe.created_at.desc(), Recipe.id.asc()).all()


def get_recipe(recipe_id: str) -> Recipe:
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


def create_recipe(data: dict) -> Recipe:
    fields = _validate_recipe_data(data)
    ingredients = fields.pop("ingredients")
    steps = fields.pop("steps")

    now = utcnow()
    recipe = Recipe(id=data.get("id") or _generate_recipe_id(fields["name"]), created_at=now, updated_at=now, **fields)
    if db.session.get(Recipe, recipe.id) is not None:
        raise ValueError(f"Recipe '{recipe.id}' already exists")

    _apply_lines(recipe, ingredients, steps)
    db.session.add(recipe)
    db.session.commit()
    return recipe


def update_recipe(recipe_id: str, data: dict) -> Recipe:
    """Replace a recipe's fields, ingredient lines and steps."""
    recipe = get_recipe(recipe_id)
    fields = _validate_recipe_data(data)
    ingredients = fields.pop("ingredients")
    steps = fields.pop("steps")

    # Media URLs keep their value unless sent
    if "photo_url" not in data:
        fields.pop("photo_url")
    if "video_url" not in data:
        fields.pop("video_url")

    for key, value in fields.items():
        setattr(recipe, key, value)
    _apply_lines(recipe, ingredients, steps)

    db.session.commit()
    return recipe


def scale_multiplier(expected_yield: float, desired_yield) -> float:
    """
    Factor to scale a recipe from expected_yield to desired_yield.

    Falls back to 1 when either side is missing, not finite or not positive.
    """
    if desired_yield is None or expected_yield is None:
        return 1.0
    if not (math.isfinite(desired_yield) and math.isfinite(expected_yield)):
        return 1.0
    if desired_yield <= 0 or expected_yield <= 0:
        return 1.0
    return desired_yield / expected_yield


def scale_recipe(recipe: Recipe, desired_yield) -> dict:
    multiplier = scale_multiplier(recipe.expected_yield, desired_yield)
    return {
        "recipe_id": recipe.id,
        "recipe_name": recipe.name,
        "expected_yield": recipe.expected_yield,
        "desired_yield": desired_yield,
        "yield_unit": recipe.yield_unit,
        "multiplier": multiplier,
        "ingredients": [
            {
                "ingredient_id": line.ingredient_id,
                "ingredient_name": line.ingredient_name,
                "quantity": line.quantity * multiplier,
                "unit": line.unit,
            }
            for line in recipe.ingredients
        ],
    }
