# Overview: Pytest coverage for the recipe catalog and the yield calculator.

import pytest

from kitchen.services.recipe_service import scale_multiplier


def recipe_payload(**overrides):
    payload = {
        "name": "Salsa Verde",
        "category": "Salsas",
        "type": "Producción",
        "prep_time_minutes": 20,
        "expected_yield": 2,
        "yield_unit": "L",
        "shelf_life_days": 4,
        "ingredients": [
            {"ingredient_id": "ing-4", "quantity": 6, "unit": "pzas"},
            {"ingredient_id": "ing-2", "quantity": 0.3, "unit": "kg"},
        ],
        "steps": [{"description": "Hervir los chiles."}, {"description": "Licuar con cebolla."}],
    }
    payload.update(overrides)
    return payload


class TestCatalog:

    def test_list_newest_first(self, client, production_headers):
        resp = client.get("/api/recipes", headers=production_headers)
        assert resp.status_code == 200
        ids = [r["id"] for r in resp.get_json()["recipes"]]
        assert ids == ["salsa-roja", "pasta-alfredo", "pollo-parrilla"]

    def test_filter_by_type_and_search(self, client, production_headers):
        data = client.get("/api/recipes?type=Servicio", headers=production_headers).get_json()
        assert [r["id"] for r in data["recipes"]] == ["pasta-alfredo"]

        data = client.get("/api/recipes?q=salsas", headers=production_headers).get_json()
        assert [r["id"] for r in data["recipes"]] == ["salsa-roja"]

    def test_detail_includes_lines(self, client, production_headers):
        data = client.get("/api/recipes/salsa-roja", headers=production_headers).get_json()["recipe"]
        assert len(data["ingredients"]) == 5
        assert data["steps"][0]["description"].startswith("Asar")

    def test_unknown_recipe(self, client, production_headers):
        assert client.get("/api/recipes/nope", headers=production_headers).status_code == 404


class TestCreateAndUpdate:

    def test_create_is_listed_first(self, client, kitchen_headers):
        resp = client.post("/api/recipes", json=recipe_payload(), headers=kitchen_headers)
        assert resp.status_code == 201
        recipe = resp.get_json()["recipe"]
        assert recipe["id"].startswith("salsa-verde-")
        assert recipe["shelf_life_days"] == 4
        # Names filled in from the ingredient catalog
        assert [line["ingredient_name"] for line in recipe["ingredients"]] == ["Chile Serrano", "Cebolla"]

        ids = [r["id"] for r in client.get("/api/recipes", headers=kitchen_headers).get_json()["recipes"]]
        assert ids[0] == recipe["id"]

    def test_production_recipe_requires_shelf_life(self, client, kitchen_headers):
        resp = client.post("/api/recipes", json=recipe_payload(shelf_life_days=None), headers=kitchen_headers)
        assert resp.status_code == 400

    def test_service_recipe_stores_zero_shelf_life(self, client, kitchen_headers):
        resp = client.post(
            "/api/recipes",
            json=recipe_payload(type="Servicio", shelf_life_days=9),
            headers=kitchen_headers,
        )
        assert resp.status_code == 201
        assert resp.get_json()["recipe"]["shelf_life_days"] == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"yield_unit": ""},
            {"expected_yield": "mucho"},
            {"expected_yield": "NaN"},
            {"prep_time_minutes": "inf"},
            {"type": "Postre"},
            {"ingredients": [{"ingredient_id": "ing-1", "quantity": "", "unit": "kg"}]},
            {"steps": [{"description": "   "}]},
        ],
    )
    def test_invalid_recipe(self, client, kitchen_headers, overrides):
        resp = client.post("/api/recipes", json=recipe_payload(**overrides), headers=kitchen_headers)
        assert resp.status_code == 400

    def test_duplicate_id(self, client, kitchen_headers):
        resp = client.post("/api/recipes", json=recipe_payload(id="salsa-roja"), headers=kitchen_headers)
        assert resp.status_code == 400

    def test_update_replaces_lines(self, client, kitchen_headers):
        payload = recipe_payload(name="Salsa Roja Clásica", expected_yield=1.5)
        payload["ingredients"] = [{"ingredient_id": "ing-1", "quantity": 2, "unit": "kg"}]
        resp = client.put("/api/recipes/salsa-roja", json=payload, headers=kitchen_headers)
        assert resp.status_code == 200

        recipe = resp.get_json()["recipe"]
        assert recipe["expected_yield"] == 1.5
        assert len(recipe["ingredients"]) == 1
        # Media kept when not sent
        assert recipe["photo_url"] == "https://picsum.photos/seed/salsa/400/300"

    def test_update_unknown(self, client, kitchen_headers):
        resp = client.put("/api/recipes/nope", json=recipe_payload(), headers=kitchen_headers)
        assert resp.status_code == 404


class TestCalculator:

    @pytest.mark.parametrize(
        "expected,desired,multiplier",
        [
            (2, 5, 2.5),
            (4, 2, 0.5),
            (2, None, 1.0),
            (2, 0, 1.0),
            (2, -3, 1.0),
            (0, 5, 1.0),
            (2, float("inf"), 1.0),
            (2, float("nan"), 1.0),
        ],
    )
    def test_multiplier(self, expected, desired, multiplier):
        assert scale_multiplier(expected, desired) == multiplier

    def test_scale_route(self, client, production_headers):
        resp = client.get("/api/recipes/salsa-roja/scale?yield=3", headers=production_headers)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["multiplier"] == 3
        tomato = next(line for line in data["ingredients"] if line["ingredient_id"] == "ing-1")
        assert tomato["quantity"] == 3

    def test_scale_without_yield_keeps_base(self, client, production_headers):
        data = client.get("/api/recipes/pollo-parrilla/scale", headers=production_headers).get_json()
        assert data["multiplier"] == 1.0
        assert data["ingredients"][0]["quantity"] == 1

    def test_scale_with_infinite_yield_keeps_base(self, client, production_headers):
        resp = client.get("/api/recipes/salsa-roja/scale?yield=inf", headers=production_headers)
        assert resp.status_code == 200
        assert resp.get_json()["multiplier"] == 1.0
        assert resp.get_json()["desired_yield"] is None
