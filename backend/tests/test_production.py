# Overview: Pytest coverage for the production plan, task timers and batch generation.

from datetime import timedelta

import pytest

from kitchen.extensions import db
from kitchen.models import Batch, ProductionTask, User
from kitchen.scopes import GLOBAL, Specific
from kitchen.services import production_service
from kitchen.time_utils import utcnow


def task_ids(resp):
    return [t["id"] for t in resp.get_json()["tasks"]]


class TestPlan:

    def test_list_is_scoped_and_ordered(self, client, production_headers):
        resp = client.get("/api/production/tasks", headers=production_headers)
        assert resp.status_code == 200
        assert task_ids(resp) == ["task1", "task2", "task4"]

    def test_status_filter(self, client, super_headers):
        resp = client.get("/api/production/tasks?status=completed", headers=super_headers)
        assert task_ids(resp) == ["task3"]

    def test_assigned_to_me(self, client, production_headers):
        resp = client.get("/api/production/tasks?assigned_to_me=true", headers=production_headers)
        assert task_ids(resp) == ["task1"]

    def test_add_goes_to_end_of_unit_queue(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks",
            json={"recipe_id": "pollo-parrilla", "quantity": 4},
            headers=production_headers,
        )
        assert resp.status_code == 201
        task = resp.get_json()["task"]
        assert task["id"].startswith("task")
        assert task["priority"] == 4
        assert task["status"] == "Pendiente"
        assert task["unit"] == "kg"
        assert task["unit_id"] == "prod-central"

    def test_add_requires_concrete_unit(self, client, super_headers):
        resp = client.post(
            "/api/production/tasks",
            json={"recipe_id": "salsa-roja", "quantity": 2},
            headers=super_headers,
        )
        assert resp.status_code == 400

    @pytest.mark.parametrize("quantity", [0, -1, "diez", None, "NaN", "inf", True])
    def test_add_rejects_bad_quantity(self, client, production_headers, quantity):
        resp = client.post(
            "/api/production/tasks",
            json={"recipe_id": "salsa-roja", "quantity": quantity},
            headers=production_headers,
        )
        assert resp.status_code == 400

    def test_add_unknown_recipe(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks",
            json={"recipe_id": "nope", "quantity": 2},
            headers=production_headers,
        )
        assert resp.status_code == 404

    def test_other_unit_task_is_not_found(self, client, production_headers):
        resp = client.post("/api/production/tasks/task3/timer/start", headers=production_headers)
        assert resp.status_code == 404


class TestAssign:

    def test_assign_and_unassign(self, client, production_headers):
        resp = client.post("/api/production/tasks/task4/assign", json={"user_id": 6}, headers=production_headers)
        assert resp.status_code == 200
        assert resp.get_json()["task"]["assigned_user_id"] == 6

        resp = client.post("/api/production/tasks/task4/assign", json={"user_id": None}, headers=production_headers)
        assert resp.get_json()["task"]["assigned_user_id"] is None

    def test_assign_unknown_user(self, client, production_headers):
        resp = client.post("/api/production/tasks/task4/assign", json={"user_id": 999}, headers=production_headers)
        assert resp.status_code == 400


class TestReorder:

    def test_move_before_target(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks/reorder",
            json={"dragged_id": "task4", "target_id": "task1"},
            headers=production_headers,
        )
        assert resp.status_code == 200
        assert task_ids(resp) == ["task4", "task1", "task2"]
        assert [t["priority"] for t in resp.get_json()["tasks"]] == [1, 2, 3]

    def test_missing_target_appends(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks/reorder",
            json={"dragged_id": "task1", "target_id": "gone"},
            headers=production_headers,
        )
        assert task_ids(resp) == ["task2", "task4", "task1"]

    def test_drop_on_itself_is_noop(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks/reorder",
            json={"dragged_id": "task2", "target_id": "task2"},
            headers=production_headers,
        )
        assert task_ids(resp) == ["task1", "task2", "task4"]
        assert db.session.get(ProductionTask, "task4").priority == 4

    def test_completed_tasks_are_untouched(self, client, super_headers):
        client.post(
            "/api/production/tasks/reorder",
            json={"dragged_id": "task4", "target_id": "task1"},
            headers=super_headers,
        )
        completed = db.session.get(ProductionTask, "task3")
        assert completed.priority == 3
        assert completed.status == "Completado"

    def test_completed_task_cannot_be_dragged(self, client, super_headers):
        resp = client.post(
            "/api/production/tasks/reorder",
            json={"dragged_id": "task3", "target_id": "task1"},
            headers=super_headers,
        )
        assert resp.status_code == 400

    def test_dragged_id_required(self, client, production_headers):
        resp = client.post("/api/production/tasks/reorder", json={}, headers=production_headers)
        assert resp.status_code == 400


class TestTimersAndCompletion:

    def test_start_pause_resume(self, client, production_headers):
        resp = client.post("/api/production/tasks/task1/timer/start", headers=production_headers)
        assert resp.status_code == 200
        task = resp.get_json()["task"]
        assert task["status"] == "En progreso"
        assert task["timer"]["is_running"] is True

        resp = client.post("/api/production/tasks/task1/timer/pause", headers=production_headers)
        assert resp.get_json()["task"]["timer"]["is_running"] is False

        resp = client.post("/api/production/tasks/task1/timer/resume", headers=production_headers)
        assert resp.get_json()["task"]["timer"]["is_running"] is True

    def test_unknown_timer_action(self, client, production_headers):
        resp = client.post("/api/production/tasks/task1/timer/rewind", headers=production_headers)
        assert resp.status_code == 404

    def test_complete_generates_batch(self, client, production_headers):
        client.post("/api/production/tasks/task1/timer/start", headers=production_headers)
        resp = client.post(
            "/api/production/tasks/task1/complete",
            json={"actual_yield": 18.5},
            headers=production_headers,
        )
        assert resp.status_code == 201
        data = resp.get_json()

        assert data["task"]["status"] == "Completado"
        batch = data["batch"]
        assert batch["id"].startswith("B")
        assert batch["recipe_id"] == "salsa-roja"
        assert batch["quantity"] == 18.5
        assert batch["unit"] == "L"
        assert batch["shelf_life_days"] == 5
        assert batch["source_task_id"] == "task1"
        assert batch["unit_id"] == "prod-central"
        assert batch["responsible_user"] == "Ulises (Jefe Prod)"
        assert batch["expiry_status"] == "ok"

    def test_complete_with_producer_name(self, client, production_headers):
        resp = client.post(
            "/api/production/tasks/task2/complete",
            json={"actual_yield": 12, "producer_name": "Carlos (Producción)"},
            headers=production_headers,
        )
        assert resp.get_json()["batch"]["responsible_user"] == "Carlos (Producción)"

    def test_completed_task_rejects_timer_and_completion(self, client, production_headers):
        client.post("/api/production/tasks/task1/complete", json={"actual_yield": 1}, headers=production_headers)

        resp = client.post("/api/production/tasks/task1/timer/start", headers=production_headers)
        assert resp.status_code == 409
        resp = client.post("/api/production/tasks/task1/complete", json={"actual_yield": 1}, headers=production_headers)
        assert resp.status_code == 400

    def test_complete_requires_positive_yield(self, client, production_headers):
        resp = client.post("/api/production/tasks/task1/complete", json={"actual_yield": 0}, headers=production_headers)
        assert resp.status_code == 400

    @pytest.mark.parametrize("actual_yield", ["NaN", "Infinity", "-inf"])
    def test_complete_rejects_non_finite_yield(self, client, production_headers, actual_yield):
        resp = client.post(
            "/api/production/tasks/task1/complete", json={"actual_yield": actual_yield}, headers=production_headers
        )
        assert resp.status_code == 400
        assert db.session.get(ProductionTask, "task1").status == "Pendiente"

    def test_duration_is_rounded_elapsed_time(self, db_session):
        user = db.session.get(User, 2)
        task = db.session.get(ProductionTask, "task1")
        task.timer_started_at = utcnow() - timedelta(seconds=100)
        task.timer_accumulated_seconds = 20.0
        db.session.commit()

        batch = production_service.complete_task(user, Specific("prod-central"), "task1", 10)

        assert batch.duration_seconds in (120, 121)
        assert task.timer_started_at is None
        assert db.session.get(Batch, batch.id) is not None

    def test_global_view_cannot_see_foreign_units(self, db_session):
        chef = db.session.get(User, 7)  # polanco + tecamachalco
        visible = {t.id for t in production_service.list_tasks(chef, GLOBAL)}
        assert visible == {"task3"}


class TestWeeklySummary:

    def test_new_batch_is_in_this_week(self, client, production_headers):
        batch = client.post(
            "/api/production/tasks/task1/complete", json={"actual_yield": 5}, headers=production_headers
        ).get_json()["batch"]

        resp = client.get("/api/production/weekly-summary", headers=production_headers)
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["period"] == "this_week"
        assert data["batches"][0]["id"] == batch["id"]
        assert all(b["unit_id"] == "prod-central" for b in data["batches"])

    def test_last_month(self, client, production_headers):
        resp = client.get("/api/production/weekly-summary?period=last_month", headers=production_headers)
        assert resp.status_code == 200
        assert resp.get_json()["period"] == "last_month"

    def test_invalid_period(self, client, production_headers):
        resp = client.get("/api/production/weekly-summary?period=forever", headers=production_headers)
        assert resp.status_code == 400

    def test_kitchen_role_has_no_summary(self, client, kitchen_headers):
        resp = client.get("/api/production/weekly-summary", headers=kitchen_headers)
        assert resp.status_code == 403
