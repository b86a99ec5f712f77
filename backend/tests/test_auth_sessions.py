# Overview: Pytest coverage for login, unit selection and the session lifecycle.

"""
Session lifecycle tests.

LoggedOut -> AwaitingUnitSelection -> Active, plus the edits that push a
live session back to AwaitingUnitSelection.
"""

import threading

from kitchen.extensions import db
from kitchen.models import SecurityEvent, User
from kitchen.scopes import Specific
from kitchen.services import session_service, unit_access_service

from conftest import (
    KITCHEN_POLANCO,
    PRODUCTION_CHIEF,
    REGIONAL_CHEF,
    SUPER_ADMIN,
    auth_headers,
    get_auth_token,
)


def count_events(event_type):
    return db.session.query(SecurityEvent).filter_by(event_type=event_type).count()


class TestLogin:

    def test_missing_email(self, client):
        resp = client.post("/api/auth/login", json={})
        assert resp.status_code == 400

    def test_unknown_email_is_logged(self, client):
        before = count_events("LOGIN_FAILED")
        resp = client.post("/api/auth/login", json={"email": "nobody@kitchen.com"})
        assert resp.status_code == 401
        assert count_events("LOGIN_FAILED") == before + 1

    def test_email_match_ignores_case(self, client):
        resp = client.post("/api/auth/login", json={"email": "  ULISES@Kitchen.com "})
        assert resp.status_code == 200
        assert resp.get_json()["user"]["email"] == PRODUCTION_CHIEF

    def test_single_unit_user_is_active_at_once(self, client):
        resp = client.post("/api/auth/login", json={"email": PRODUCTION_CHIEF})
        data = resp.get_json()
        assert data["session"]["awaiting_unit_selection"] is False
        assert data["session"]["active_unit_id"] == "prod-central"
        assert data["can_switch_units"] is False
        assert [u["id"] for u in data["accessible_units"]] == ["prod-central"]

    def test_multi_unit_user_awaits_selection(self, client):
        resp = client.post("/api/auth/login", json={"email": REGIONAL_CHEF})
        data = resp.get_json()
        assert data["session"]["awaiting_unit_selection"] is True
        assert data["session"]["active_unit_id"] is None
        assert data["can_switch_units"] is True
        assert data["can_select_global"] is False

    def test_login_returns_effective_permissions(self, client):
        data = client.post("/api/auth/login", json={"email": SUPER_ADMIN}).get_json()
        assert set(data["permissions"].values()) == {"edit"}
        assert data["can_select_global"] is True


class TestUnitSelection:

    def test_awaiting_session_gets_409(self, client):
        token = get_auth_token(client, SUPER_ADMIN)
        resp = client.get("/api/production/tasks", headers=auth_headers(token))
        assert resp.status_code == 409
        assert resp.get_json()["awaiting_unit_selection"] is True

    def test_select_unit_activates_session(self, client):
        token = get_auth_token(client, REGIONAL_CHEF)
        resp = client.post("/api/auth/select-unit", json={"unit_id": "tecamachalco"}, headers=auth_headers(token))
        assert resp.status_code == 200
        assert resp.get_json()["session"]["active_unit_id"] == "tecamachalco"

        resp = client.get("/api/production/tasks", headers=auth_headers(token))
        assert resp.status_code == 200

    def test_select_inaccessible_unit_is_denied_and_logged(self, client):
        token = get_auth_token(client, REGIONAL_CHEF)
        before = count_events("UNIT_ACCESS_DENIED")
        resp = client.post("/api/auth/select-unit", json={"unit_id": "prod-central"}, headers=auth_headers(token))
        assert resp.status_code == 403
        assert count_events("UNIT_ACCESS_DENIED") == before + 1

        me = client.get("/api/auth/me", headers=auth_headers(token)).get_json()
        assert me["session"]["awaiting_unit_selection"] is True

    def test_non_admin_cannot_select_global(self, client):
        token = get_auth_token(client, REGIONAL_CHEF)
        resp = client.post("/api/auth/select-unit", json={"unit_id": "all"}, headers=auth_headers(token))
        assert resp.status_code == 403

    def test_select_unit_requires_value(self, client):
        token = get_auth_token(client, REGIONAL_CHEF)
        resp = client.post("/api/auth/select-unit", json={}, headers=auth_headers(token))
        assert resp.status_code == 400

    def test_units_listing(self, client):
        token = get_auth_token(client, SUPER_ADMIN, "all")
        data = client.get("/api/auth/units", headers=auth_headers(token)).get_json()
        assert [u["id"] for u in data["units"]] == ["prod-central", "polanco", "tecamachalco", "santa-fe"]
        assert data["active_unit_id"] == "all"


class TestLogout:

    def test_logout_discards_session(self, client):
        token = get_auth_token(client, PRODUCTION_CHIEF)
        resp = client.post("/api/auth/logout", headers=auth_headers(token))
        assert resp.status_code == 200

        resp = client.get("/api/auth/me", headers=auth_headers(token))
        assert resp.status_code == 401

    def test_logout_without_token(self, client):
        resp = client.post("/api/auth/logout")
        assert resp.status_code == 401

    def test_invalid_token(self, client):
        resp = client.get("/api/auth/me", headers=auth_headers("not-a-token"))
        assert resp.status_code == 401


class TestUserEditsReachLiveSessions:

    def test_removed_unit_moves_session_to_remaining_unit(self, client, super_headers):
        token = get_auth_token(client, REGIONAL_CHEF, "tecamachalco")

        resp = client.put("/api/admin/users/7", json={"accessible_unit_ids": ["polanco"]}, headers=super_headers)
        assert resp.status_code == 200

        me = client.get("/api/auth/me", headers=auth_headers(token)).get_json()
        assert me["session"]["active_unit_id"] == "polanco"
        assert me["can_switch_units"] is False

    def test_removed_unit_with_several_left_forces_reselection(self, client, super_headers):
        token = get_auth_token(client, REGIONAL_CHEF, "tecamachalco")

        resp = client.put(
            "/api/admin/users/7",
            json={"accessible_unit_ids": ["prod-central", "polanco"]},
            headers=super_headers,
        )
        assert resp.status_code == 200

        me = client.get("/api/auth/me", headers=auth_headers(token)).get_json()
        assert me["session"]["awaiting_unit_selection"] is True
        resp = client.get("/api/waste", headers=auth_headers(token))
        assert resp.status_code == 409

    def test_promotion_to_super_admin_keeps_selection(self, client, super_headers):
        token = get_auth_token(client, KITCHEN_POLANCO)

        resp = client.put(
            "/api/admin/users/4",
            json={"role": "Admin", "accessible_unit_ids": ["*"]},
            headers=super_headers,
        )
        assert resp.status_code == 200

        me = client.get("/api/auth/me", headers=auth_headers(token)).get_json()
        assert me["session"]["active_unit_id"] == "polanco"
        assert me["permissions"]["admin_permisos"] == "edit"

    def test_deleted_user_loses_session(self, client, super_headers):
        token = get_auth_token(client, PRODUCTION_CHIEF)

        resp = client.delete("/api/admin/users/2", headers=super_headers)
        assert resp.status_code == 200

        resp = client.get("/api/auth/me", headers=auth_headers(token))
        assert resp.status_code == 401


class TestConcurrentSelection:
    """A unit selected while a session is being reconciled must not be lost."""

    def select_during_reconcile(self, monkeypatch, token_hash):
        registry = session_service.get_registry()
        original = unit_access_service.reconcile_selection
        writers = []

        def reconcile_while_selecting(user, selection):
            writer = threading.Thread(
                target=registry.update, args=(token_hash,), kwargs={"selection": Specific("polanco")}
            )
            writer.start()
            writer.join(timeout=0.2)
            writers.append(writer)
            return original(user, selection)

        monkeypatch.setattr(unit_access_service, "reconcile_selection", reconcile_while_selecting)
        return registry, writers

    def test_selection_survives_validation(self, client, monkeypatch):
        token = get_auth_token(client, REGIONAL_CHEF)
        token_hash = session_service.hash_token(token)
        registry, writers = self.select_during_reconcile(monkeypatch, token_hash)

        assert session_service.validate_session(token) is not None
        for writer in writers:
            writer.join()

        assert writers
        assert registry.get(token_hash).selection == Specific("polanco")

    def test_selection_survives_user_edit(self, client, monkeypatch):
        token = get_auth_token(client, REGIONAL_CHEF)
        token_hash = session_service.hash_token(token)
        user = db.session.get(User, 7)
        registry, writers = self.select_during_reconcile(monkeypatch, token_hash)

        session_service.reconcile_user_sessions(user)
        for writer in writers:
            writer.join()

        assert writers
        assert registry.get(token_hash).selection == Specific("polanco")
