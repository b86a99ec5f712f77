"""
Admin endpoint tests.

Users, master ingredients and categories, task templates, reports and the
security event log.
"""

import pytest

from kitchen.extensions import db
from kitchen.models import MasterIngredient, ProductionTask

from conftest import BRANCH_ADMIN, auth_headers, get_auth_token


def new_user(**overrides):
    payload = {
        "name": "Nuevo Usuario",
        "email": "nuevo@kitchen.com",
        "role": "Servicio",
        "accessible_unit_ids": ["santa-fe"],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# USERS
# =============================================================================


class TestUserManagement:

    def test_list_and_filter_by_role(self, client, super_headers):
        data = client.get("/api/admin/users", headers=super_headers).get_json()
        assert data["count"] == 10

        data = client.get("/api/admin/users?role=Servicio", headers=super_headers).get_json()
        assert [u["id"] for u in data["users"]] == [3, 8]

    def test_detail_has_effective_permissions(self, client, super_headers):
        data = client.get("/api/admin/users/10", headers=super_headers).get_json()["user"]
        assert data["effective_permissions"]["produccion"] == "none"
        assert data["effective_permissions"]["mermas"] == "edit"
        assert "admin_permisos" not in data["overridable_modules"]
        assert "produccion" in data["overridable_modules"]

    def test_create_user(self, client, super_headers):
        resp = client.post("/api/admin/users", json=new_user(), headers=super_headers)
        assert resp.status_code == 201
        user = resp.get_json()["user"]
        assert user["accessible_unit_ids"] == ["santa-fe"]
        assert user["permission_overrides"] is None

    def test_admin_without_units_gets_every_unit(self, client, super_headers):
        resp = client.post(
            "/api/admin/users", json=new_user(role="Admin", accessible_unit_ids=[]), headers=super_headers
        )
        assert resp.status_code == 201
        assert resp.get_json()["user"]["accessible_unit_ids"] == ["*"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"accessible_unit_ids": ["polanco", "santa-fe"]},
            {"accessible_unit_ids": []},
            {"accessible_unit_ids": ["*", "polanco"]},
            {"accessible_unit_ids": ["marte"]},
            {"email": "ULISES@kitchen.com"},
            {"name": ""},
            {"role": "Chef"},
            {"permission_overrides": {"admin_permisos": "edit"}},
            {"permission_overrides": {"mermas": "admin"}},
        ],
    )
    def test_invalid_user(self, client, super_headers, overrides):
        resp = client.post("/api/admin/users", json=new_user(**overrides), headers=super_headers)
        assert resp.status_code == 400

    def test_multi_unit_role_may_have_several_units(self, client, super_headers):
        resp = client.post(
            "/api/admin/users",
            json=new_user(role="Cocina", accessible_unit_ids=["polanco", "santa-fe"]),
            headers=super_headers,
        )
        assert resp.status_code == 201

    def test_update_keeps_omitted_fields(self, client, super_headers):
        resp = client.put("/api/admin/users/3", json={"name": "Servicio Polanco 2"}, headers=super_headers)
        assert resp.status_code == 200
        user = resp.get_json()["user"]
        assert user["name"] == "Servicio Polanco 2"
        assert user["accessible_unit_ids"] == ["polanco"]

    def test_update_unknown_user(self, client, super_headers):
        assert client.put("/api/admin/users/999", json={}, headers=super_headers).status_code == 404

    def test_cannot_delete_self(self, client, super_headers):
        resp = client.delete("/api/admin/users/1", headers=super_headers)
        assert resp.status_code == 400

    def test_delete_unassigns_tasks(self, client, super_headers):
        resp = client.delete("/api/admin/users/2", headers=super_headers)
        assert resp.status_code == 200
        assert db.session.get(ProductionTask, "task1").assigned_user_id is None


# =============================================================================
# INGREDIENTS AND CATEGORIES
# =============================================================================


class TestIngredients:

    def test_add_and_filter(self, client, super_headers):
        resp = client.post(
            "/api/admin/ingredients",
            json={"name": "Chile Guajillo", "category": "Chiles", "unit": "kg"},
            headers=super_headers,
        )
        assert resp.status_code == 201
        assert resp.get_json()["ingredient"]["id"].startswith("ing-")

        data = client.get("/api/admin/ingredients?category=Chiles", headers=super_headers).get_json()
        assert [i["name"] for i in data["ingredients"]] == ["Chile Guajillo", "Chile Serrano"]

    def test_search(self, client, super_headers):
        data = client.get("/api/admin/ingredients?q=QUESO", headers=super_headers).get_json()
        assert [i["id"] for i in data["ingredients"]] == ["ing-8"]

    def test_add_requires_fields(self, client, super_headers):
        resp = client.post("/api/admin/ingredients", json={"name": "Sin categoría"}, headers=super_headers)
        assert resp.status_code == 400

    def test_update(self, client, super_headers):
        resp = client.put(
            "/api/admin/ingredients/ing-5",
            json={"name": "Sal de grano", "category": "Condimentos", "unit": "kg"},
            headers=super_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json()["ingredient"]["name"] == "Sal de grano"

    def test_rename_category(self, client, super_headers):
        resp = client.put("/api/admin/categories/Vegetales", json={"new_name": "Verduras"}, headers=super_headers)
        assert resp.status_code == 200
        assert resp.get_json()["updated"] == 3
        assert db.session.query(MasterIngredient).filter_by(category="Vegetales").count() == 0

    def test_rename_to_blank_does_nothing(self, client, super_headers):
        resp = client.put("/api/admin/categories/Vegetales", json={"new_name": "  "}, headers=super_headers)
        assert resp.get_json()["updated"] == 0

    def test_delete_category_moves_ingredients(self, client, super_headers):
        resp = client.delete("/api/admin/categories/Hierbas?target=Condimentos", headers=super_headers)
        assert resp.status_code == 200
        assert resp.get_json()["moved"] == 1

        names = [c["name"] for c in client.get("/api/admin/categories", headers=super_headers).get_json()["categories"]]
        assert "Hierbas" not in names

    def test_delete_category_requires_target(self, client, super_headers):
        resp = client.delete("/api/admin/categories/Hierbas", headers=super_headers)
        assert resp.status_code == 400

    def test_unknown_category(self, client, super_headers):
        resp = client.put("/api/admin/categories/Postres", json={"new_name": "Dulces"}, headers=super_headers)
        assert resp.status_code == 404

    def test_role_without_module(self, client, production_headers):
        assert client.get("/api/admin/ingredients", headers=production_headers).status_code == 403


# =============================================================================
# TASK TEMPLATES
# =============================================================================


class TestTaskTemplates:

    def test_seeded_templates(self, client, super_headers):
        data = client.get("/api/admin/task-templates", headers=super_headers).get_json()
        assert data["count"] == 9

    def test_create_defaults_to_daily(self, client, super_headers):
        resp = client.post(
            "/api/admin/task-templates",
            json={"name": "Revisar gas", "description": "Verificar fugas.", "assigned_role": "Cocina"},
            headers=super_headers,
        )
        assert resp.status_code == 201
        template = resp.get_json()["template"]
        assert template["frequency"] == "Diaria"
        assert template["assigned_role"] == "Cocina"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Sin descripción"},
            {"name": "X", "description": "Y", "frequency": "Anual"},
            {"name": "X", "description": "Y", "assigned_role": "Chef"},
        ],
    )
    def test_invalid_template(self, client, super_headers, payload):
        resp = client.post("/api/admin/task-templates", json=payload, headers=super_headers)
        assert resp.status_code == 400


# =============================================================================
# REPORTS AND SECURITY EVENTS
# =============================================================================


class TestReports:

    def test_production_by_recipe(self, client, super_headers):
        resp = client.get("/api/admin/reports/production", headers=super_headers)
        assert resp.status_code == 200
        rows = resp.get_json()["production_by_recipe"]
        assert [r["name"] for r in rows] == [
            "Salsa Roja Clásica",
            "Pollo a la Parrilla Marinado",
            "Pasta Alfredo",
        ]
        assert rows[0]["quantity"] == 10
        assert rows[0]["unit"] == "L"

    def test_report_follows_active_unit(self, client):
        headers = auth_headers(get_auth_token(client, BRANCH_ADMIN, "polanco"))
        rows = client.get("/api/admin/reports/production", headers=headers).get_json()["production_by_recipe"]
        assert [r["name"] for r in rows] == ["Pasta Alfredo"]


class TestSecurityEvents:

    def test_filter_by_type(self, client, super_headers):
        client.post("/api/admin/users", json=new_user(), headers=super_headers)

        data = client.get("/api/admin/security-events?event_type=USER_CREATED", headers=super_headers).get_json()
        assert data["count"] == 1
        assert data["events"][0]["action"] == "Created user: nuevo@kitchen.com"

    def test_filter_by_user(self, client, super_headers):
        data = client.get("/api/admin/security-events?user_id=1&event_type=LOGIN", headers=super_headers).get_json()
        assert data["count"] >= 1
        assert all(e["user_id"] == 1 for e in data["events"])

    @pytest.mark.parametrize("limit", [-5, 0])
    def test_limit_is_at_least_one(self, client, super_headers, limit):
        data = client.get(f"/api/admin/security-events?limit={limit}", headers=super_headers).get_json()
        assert data["count"] == 1
        assert len(data["events"]) == 1
