# Overview: Pytest coverage for pause/resume elapsed timers.

from datetime import timedelta

import pytest

from kitchen.models import ProductionTask
from kitchen.services import production_service
from kitchen.time_utils import utcnow
from kitchen.timers import ElapsedTimer


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestElapsedTimer:

    def test_new_timer_is_stopped(self):
        timer = ElapsedTimer(clock=FakeClock())
        assert not timer.is_running
        assert timer.elapsed() == 0.0

    def test_running_time_is_reconstructed(self):
        clock = FakeClock()
        timer = ElapsedTimer(clock=clock)
        timer.start()
        clock.advance(42)
        assert timer.is_running
        assert timer.elapsed() == 42

    def test_pause_and_resume_accumulate(self):
        clock = FakeClock()
        timer = ElapsedTimer(clock=clock)
        timer.start()
        clock.advance(30)
        timer.pause()
        clock.advance(600)  # paused time does not count
        assert timer.elapsed() == 30

        timer.resume()
        clock.advance(15)
        assert timer.elapsed() == 45

    def test_start_while_running_is_noop(self):
        clock = FakeClock()
        timer = ElapsedTimer(clock=clock)
        timer.start()
        clock.advance(10)
        timer.start()
        clock.advance(5)
        assert timer.elapsed() == 15

    def test_pause_while_paused_is_noop(self):
        clock = FakeClock()
        timer = ElapsedTimer(accumulated_seconds=12, clock=clock)
        timer.pause()
        assert timer.elapsed() == 12

    def test_clock_going_backwards_never_subtracts(self):
        clock = FakeClock()
        timer = ElapsedTimer(accumulated_seconds=5, clock=clock)
        timer.start()
        clock.advance(-100)
        assert timer.elapsed() == 5

    def test_whole_seconds_round(self):
        clock = FakeClock()
        timer = ElapsedTimer(clock=clock)
        timer.start()
        clock.advance(89.6)
        assert timer.elapsed_whole_seconds() == 90


class TestPersistedTaskTimer:

    def test_elapsed_from_stored_columns(self):
        now = utcnow()
        task = ProductionTask(timer_started_at=now - timedelta(seconds=90), timer_accumulated_seconds=30.0)
        assert production_service.elapsed_seconds(task, now) == pytest.approx(120)

    def test_paused_task_reports_accumulated(self):
        task = ProductionTask(timer_started_at=None, timer_accumulated_seconds=75.0)
        assert production_service.elapsed_seconds(task, utcnow() + timedelta(hours=3)) == 75

    def test_timer_dict_reports_running_state(self):
        now = utcnow()
        task = ProductionTask(
            id="task-x", recipe_id="salsa-roja", recipe_name="Salsa", quantity_to_produce=1, unit="L",
            priority=1, status="En progreso", unit_id="polanco",
            timer_started_at=now - timedelta(seconds=10), timer_accumulated_seconds=0.0,
        )
        data = production_service.task_to_dict(task, now)
        assert data["timer"]["is_running"] is True
        assert data["timer"]["elapsed_seconds"] == pytest.approx(10)
