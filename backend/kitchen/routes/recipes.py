# Overview: Flask API routes for the recipe catalog and calculator; parses input and returns JSON responses.

import math

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_permission
from ..permissions import AppModule, PermissionLevel
from ..services import recipe_service
from ..services.errors import NotFoundError

recipes_bp = Blueprint("recipes", __name__, url_prefix="/api/recipes")


@recipes_bp.get("")
@require_auth
@require_permission(AppModule.RECETAS, PermissionLevel.VIEW)
def list_recipes_route():
    """
    List recipes, newest first.

    Query params:
    - q: str - case-insensitive match on name or category
    - type: str - Producción or Servicio
    """
    search = (request.args.get("q") or "").strip().lower()
    recipe_type = request.args.get("type")

    recipes = recipe_service.list_recipes()
    if search:
        recipes = [r for r in recipes if search in r.name.lower() or search in r.category.lower()]
    if recipe_type:
        recipes = [r for r in recipes if r.type == recipe_type]

    return jsonify({
        "recipes": [r.to_dict(include_lines=False) for r in recipes],
        "count": len(recipes),
    })


@recipes_bp.get("/<recipe_id>")
@require_auth
@require_permission(AppModule.RECETAS, PermissionLevel.VIEW)
def get_recipe_route(recipe_id: str):
    try:
        recipe = recipe_service.get_recipe(recipe_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify({"recipe": recipe.to_dict()})


@recipes_bp.post("")
@require_auth
@require_permission(AppModule.RECETAS, PermissionLevel.EDIT)
def create_recipe_route():
    """
    Create a recipe.

    Request body: name, category, type, prep_time_minutes, expected_yield,
    yield_unit, shelf_life_days (production recipes), photo_url, video_url,
    ingredients: [{ingredient_id, ingredient_name, quantity, unit}],
    steps: [{description}]
    """
    try:
        recipe = recipe_service.create_recipe(request.get_json(silent=True) or {})
        return jsonify({"recipe": recipe.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create recipe")
        return jsonify({"error": "Internal server error"}), 500


@recipes_bp.put("/<recipe_id>")
@require_auth
@require_permission(AppModule.RECETAS, PermissionLevel.EDIT)
def update_recipe_route(recipe_id: str):
    try:
        recipe = recipe_service.update_recipe(recipe_id, request.get_json(silent=True) or {})
        return jsonify({"recipe": recipe.to_dict()})
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update recipe")
        return jsonify({"error": "Internal server error"}), 500


@recipes_bp.get("/<recipe_id>/scale")
@require_auth
@require_permission(AppModule.CALCULADORA, PermissionLevel.VIEW)
def scale_recipe_route(recipe_id: str):
    """
    Scale a recipe's ingredients to a desired yield.

    Query params:
    - yield: float - desired yield; missing, non-finite or non-positive keeps the base recipe
    """
    desired_yield = request.args.get("yield", type=float)
    if desired_yield is not None and not math.isfinite(desired_yield):
        desired_yield = None
    try:
        recipe = recipe_service.get_recipe(recipe_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(recipe_service.scale_recipe(recipe, desired_yield))
