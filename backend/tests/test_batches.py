# Overview: Pytest coverage for batches; expiry status, traceability and notes.

from datetime import timedelta

from kitchen.models import Batch
from kitchen.services.batch_service import ExpiryStatus, expiry_status
from kitchen.time_utils import utcnow


def batch_ids(resp):
    return [b["id"] for b in resp.get_json()["batches"]]


class TestExpiryStatus:

    def make_batch(self, now, days_ago, shelf_life_days):
        return Batch(production_date=now - timedelta(days=days_ago), shelf_life_days=shelf_life_days)

    def test_fresh_batch_is_ok(self):
        now = utcnow()
        assert expiry_status(self.make_batch(now, 1, 5), now, near_expiry_hours=24) == ExpiryStatus.OK

    def test_last_day_is_near_expiry(self):
        now = utcnow()
        batch = self.make_batch(now, 4, 5)
        assert expiry_status(batch, now + timedelta(hours=1), near_expiry_hours=24) == ExpiryStatus.NEAR_EXPIRY

    def test_threshold_is_configurable(self):
        now = utcnow()
        batch = self.make_batch(now, 3, 5)
        assert expiry_status(batch, now, near_expiry_hours=24) == ExpiryStatus.OK
        assert expiry_status(batch, now, near_expiry_hours=72) == ExpiryStatus.NEAR_EXPIRY

    def test_past_expiry_date(self):
        now = utcnow()
        assert expiry_status(self.make_batch(now, 6, 5), now, near_expiry_hours=24) == ExpiryStatus.EXPIRED

    def test_uses_app_config_by_default(self, app):
        now = utcnow()
        batch = self.make_batch(now, 3, 5)
        app.config["NEAR_EXPIRY_HOURS"] = 72
        assert expiry_status(batch, now) == ExpiryStatus.NEAR_EXPIRY


class TestBatchList:

    def test_scoped_to_active_unit(self, client, production_headers):
        resp = client.get("/api/batches", headers=production_headers)
        assert resp.status_code == 200
        assert batch_ids(resp) == ["B1721249501", "B1721163101"]

    def test_expired_filter(self, client, super_headers):
        resp = client.get("/api/batches?expiry_status=expired", headers=super_headers)
        assert batch_ids(resp) == ["B1721076701"]

    def test_entries_carry_expiry_date(self, client, production_headers):
        batch = client.get("/api/batches", headers=production_headers).get_json()["batches"][0]
        assert batch["expiry_date"].endswith("Z")
        assert batch["expiry_status"] == "ok"


class TestBatchDetail:

    def test_traceability(self, client, production_headers):
        resp = client.get("/api/batches/B1721163101", headers=production_headers)
        assert resp.status_code == 200
        batch = resp.get_json()["batch"]
        assert batch["source_task"]["id"] == "task2"
        assert batch["recipe"]["id"] == "pollo-parrilla"
        assert batch["notes"].startswith("El pollo")

    def test_other_unit_batch_is_not_found(self, client, production_headers):
        resp = client.get("/api/batches/B1721076701", headers=production_headers)
        assert resp.status_code == 404


class TestBatchNotes:

    def test_view_only_role_cannot_annotate(self, client, production_headers):
        resp = client.post("/api/batches/B1721249501/notes", json={"notes": "ok"}, headers=production_headers)
        assert resp.status_code == 403

    def test_set_and_clear(self, client, super_headers):
        resp = client.post(
            "/api/batches/B1721249501/notes", json={"notes": "  Color más oscuro  "}, headers=super_headers
        )
        assert resp.status_code == 200
        assert resp.get_json()["batch"]["notes"] == "Color más oscuro"

        resp = client.post("/api/batches/B1721249501/notes", json={"notes": ""}, headers=super_headers)
        assert resp.get_json()["batch"]["notes"] is None

    def test_unknown_batch(self, client, super_headers):
        resp = client.post("/api/batches/B0/notes", json={"notes": "x"}, headers=super_headers)
        assert resp.status_code == 404
