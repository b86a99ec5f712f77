# Overview: Service-layer operations for master ingredients and their categories.

"""
Master ingredients and categories.

Categories are not a table of their own: a category exists while at least
one ingredient carries it. Renaming or deleting one rewrites the category
on every ingredient in it.
"""

from __future__ import annotations

from sqlalchemy import func

from ..extensions import db
from ..models import MasterIngredient
from .errors import NotFoundError
from .identifiers import unique_millis_id


def _validate(data: dict) -> tuple[str, str, str]:
    name = (data.get("name") or "").strip()
    category = (data.get("category") or "").strip()
    unit = (data.get("unit") or "").strip()
    if not name or not category or not unit:
        raise ValueError("name, category and unit are required")
    return name, category, unit


def list_ingredients(category: str | None = None, search: str | None = None) -> list[MasterIngredient]:
    """Ingredients sorted by name, optionally filtered by category and name substring."""
    query = db.session.query(MasterIngredient)
    if category:
        query = query.filter(MasterIngredient.category == category)
    if search:
        query = query.filter(func.lower(MasterIngredient.name).contains(search.strip().lower()))
    return query.order_by(MasterIngredient.name.asc()).all()


def add_ingredient(data: dict) -> MasterIngredient:
    name, category, unit = _validate(data)
    ingredient = MasterIngredient(
        id=unique_millis_id(MasterIngredient, "ing-"),
        name=name,
        category=category,
        unit=unit,
    )
    db.session.add(ingredient)
    db.session.commit()
    return ingredient


def update_ingredient(ingredient_id: str, data: dict) -> MasterIngredient:
    ingredient = db.session.get(MasterIngredient, ingredient_id)
    if ingredient is None:
        raise NotFoundError("Ingredient not found")

    ingredient.name, ingredient.category, ingredient.unit = _validate(data)
    db.session.commit()
    return ingredient


def list_categories() -> list[dict]:
    """Distinct categories with their ingredient counts, sorted by name."""
    rows = (
        db.session.query(MasterIngredient.category, func.count(MasterIngredient.id))
        .group_by(MasterIngredient.category)
        .order_by(MasterIngredient.category.asc())
        .all()
    )
    return [{"name": name, "ingredient_count": count} for name, count in rows]


def _category_exists(name: str) -> bool:
    return db.session.query(MasterIngredient.id).filter_by(category=name).first() is not None


def rename_category(old_name: str, new_name: str | None) -> int:
    """
    Rename a category on every ingredient that carries it.

    A blank or unchanged new name does nothing. Returns the number of
    ingredients updated.
    """
    new_name = (new_name or "").strip()
    if not new_name or new_name == old_name:
        return 0
    if not _category_exists(old_name):
        raise NotFoundError("Category not found")

    updated = (
        db.session.query(MasterIngredient)
        .filter_by(category=old_name)
        .update({MasterIngredient.category: new_name}, synchronize_session=False)
    )
    db.session.commit()
    return updated


def delete_category(name: str, target: str | None) -> int:
    """
    Delete a category by moving its ingredients into target.

    target is required and must differ from the deleted category. Returns
    the number of ingredients moved.
    """
    target = (target or "").strip()
    if not target or target == name:
        raise ValueError("A different target category is required")
    if not _category_exists(name):
        raise NotFoundError("Category not found")

    moved = (
        db.session.query(MasterIngredient)
        .filter_by(category=name)
        .update({MasterIngredient.category: target}, synchronize_session=False)
    )
    db.session.commit()
    return moved
