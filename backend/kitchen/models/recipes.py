from __future__ import annotations

from ..extensions import db
from kitchen.time_utils import to_utc_z


class RecipeType:
    PRODUCCION = "Producción"
    SERVICIO = "Servicio"


RECIPE_TYPES = (RecipeType.PRODUCCION, RecipeType.SERVICIO)

# Measure units offered for ingredient quantities
MEASURE_UNITS = ("g", "kg", "L", "pzas", "ord")


class MasterIngredient(db.Model):
    """Catalog ingredient referenced by recipe lines. Category is free text."""
    __tablename__ = "master_ingredients"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(120), nullable=False, index=True)
    category = db.Column(db.String(120), nullable=False, index=True)
    unit = db.Column(db.String(16), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
        }


class Recipe(db.Model):
    """
    Recipe catalog entry.

    Production recipes carry a shelf life that is copied onto every batch
    produced from them; service recipes have shelf_life_days = 0.
    """
    __tablename__ = "recipes"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(120), nullable=False, index=True)
    type = db.Column(db.String(32), nullable=False)  # Producción, Servicio

    prep_time_minutes = db.Column(db.Integer, nullable=False, default=0)
    expected_yield = db.Column(db.Float, nullable=False)
    yield_unit = db.Column(db.String(16), nullable=False)
    photo_url = db.Column(db.String(512), nullable=True)
    video_url = db.Column(db.String(512), nullable=True)
    shelf_life_days = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    ingredients = db.relationship(
        "RecipeIngredient",
        order_by="RecipeIngredient.position",
        cascade="all, delete-orphan",
        backref=db.backref("recipe", lazy=True),
        lazy=True,
    )
    steps = db.relationship(
        "RecipeStep",
        order_by="RecipeStep.position",
        cascade="all, delete-orphan",
        backref=db.backref("recipe", lazy=True),
        lazy=True,
    )

    def to_dict(self, include_lines: bool = True) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "type": self.type,
            "prep_time_minutes": self.prep_time_minutes,
            "expected_yield": self.expected_yield,
            "yield_unit": self.yield_unit,
            "photo_url": self.photo_url,
            "video_url": self.video_url,
            "shelf_life_days": self.shelf_life_days,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if include_lines:
            data["ingredients"] = [line.to_dict() for line in self.ingredients]
            data["steps"] = [step.to_dict() for step in self.steps]
        return data


class RecipeIngredient(db.Model):
    """Ingredient line of a recipe. The ingredient name is denormalized."""
    __tablename__ = "recipe_ingredients"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.String(64), db.ForeignKey("recipes.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)

    ingredient_id = db.Column(db.String(64), nullable=False)
    ingredient_name = db.Column(db.String(120), nullable=False)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(16), nullable=False)

    def to_dict(self) -> dict:
        return {
            "ingredient_id": self.ingredient_id,
            "ingredient_name": self.ingredient_name,
            "quantity": self.quantity,
            "unit": self.unit,
        }


class RecipeStep(db.Model):
    __tablename__ = "recipe_steps"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.String(64), db.ForeignKey("recipes.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.Text, nullable=False)

    def to_dict(self) -> dict:
        return {"description": self.description}
