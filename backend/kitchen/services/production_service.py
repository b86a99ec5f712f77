# Overview: Service-layer operations for the production plan; tasks, timers and batch generation.

"""
Production Plan Service

WHY: Plan recipe production per business unit, time each run and turn a
finished run into a traceable batch.

PRIORITY: pending tasks of a unit are ordered 1..n. A new task goes to the
end of its unit's queue; reordering renumbers the unit's pending tasks and
never touches completed ones.

TIMERS: each task persists timer_started_at (UTC) and
timer_accumulated_seconds. The arithmetic is done by ElapsedTimer with a
wall-clock reading fixed for the request, so a timer survives restarts.

VISIBILITY: every task operation goes through the session's unit scope.
A task outside it is reported as not found.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..extensions import db
from ..models import Batch, BatchStatus, ProductionStatus, ProductionTask, User
from ..scopes import Specific
from ..timers import ElapsedTimer
from ..validation import parse_positive_number
from . import recipe_service, scoping_service
from .errors import NotFoundError
from .identifiers import unique_millis_id
from kitchen.time_utils import utcnow


def _epoch_seconds(dt: datetime | None) -> float | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _from_epoch_seconds(value: float | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def task_timer(task: ProductionTask, now: datetime | None = None) -> ElapsedTimer:
    """ElapsedTimer view of a task's persisted timer, read at now."""
    reading = _epoch_seconds(now or utcnow())
    return ElapsedTimer(
        accumulated_seconds=task.timer_accumulated_seconds or 0.0,
        started_at=_epoch_seconds(task.timer_started_at),
        clock=lambda: reading,
    )


def _store_timer(task: ProductionTask, timer: ElapsedTimer) -> None:
    task.timer_accumulated_seconds = timer.accumulated_seconds
    task.timer_started_at = _from_epoch_seconds(timer.started_at)


def elapsed_seconds(task: ProductionTask, now: datetime | None = None) -> float:
    return task_timer(task, now).elapsed()


def task_to_dict(task: ProductionTask, now: datetime | None = None) -> dict:
    return task.to_dict(elapsed_seconds=elapsed_seconds(task, now))


def list_tasks(user, selection) -> list[ProductionTask]:
    return (
        scoping_service.scoped_query(ProductionTask, user, selection)
        .order_by(ProductionTask.priority.asc(), ProductionTask.created_at.asc())
        .all()
    )


def get_task(task_id: str, user, selection) -> ProductionTask:
    task = db.session.get(ProductionTask, task_id)
    if task is None or not scoping_service.is_visible(task, user, selection):
        raise NotFoundError("Production task not found")
    return task


def _require_open(task: ProductionTask) -> None:
    if task.status == ProductionStatus.COMPLETADO:
        raise ValueError("Production task is already completed")


def add_task(user, selection, recipe_id: str, quantity) -> ProductionTask:
    """
    Add a recipe to the production plan of the session's active unit.

    Requires a concrete unit; global view is rejected. The task is placed
    after the unit's other non-completed tasks.
    """
    if not isinstance(selection, Specific):
        raise ValueError("Select a specific business unit to add a production task")

    quantity = parse_positive_number(quantity, "quantity")

    recipe = recipe_service.get_recipe(recipe_id)

    open_count = (
        db.session.query(ProductionTask)
        .filter(
            ProductionTask.unit_id == selection.unit_id,
            ProductionTask.status != ProductionStatus.COMPLETADO,
        )
        .count()
    )

    now = utcnow()
    task = ProductionTask(
        id=unique_millis_id(ProductionTask, "task", now),
        recipe_id=recipe.id,
        recipe_name=recipe.name,
        quantity_to_produce=quantity,
        unit=recipe.yield_unit,
        priority=open_count + 1,
        status=ProductionStatus.PENDIENTE,
        unit_id=selection.unit_id,
        created_at=now,
    )
    db.session.add(task)
    db.session.commit()
    return task


def assign_task(user, selection, task_id: str, assignee_id: int | None) -> ProductionTask:
    """Assign a task to a user, or unassign it with assignee_id=None."""
    task = get_task(task_id, user, selection)

    if assignee_id is None:
        task.assigned_user_id = None
    else:
        assignee = db.session.get(User, assignee_id)
        if assignee is None:
            raise ValueError("User not found")
        task.assigned_user_id = assignee.id

    db.session.commit()
    return task


def reorder_tasks(user, selection, dragged_id: str, target_id: str | None) -> list[ProductionTask]:
    """
    Move dragged_id before target_id in its unit's pending queue.

    A missing target appends the task at the end. Dropping a task onto
    itself changes nothing. Returns the unit's pending tasks in new order.
    """
    dragged = get_task(dragged_id, user, selection)
    _require_open(dragged)

    pending = (
        db.session.query(ProductionTask)
        .filter(
            ProductionTask.unit_id == dragged.unit_id,
            ProductionTask.status != ProductionStatus.COMPLETADO,
        )
        .order_by(ProductionTask.priority.asc(), ProductionTask.created_at.asc())
        .all()
    )

    if dragged_id == target_id:
        return pending

    pending.remove(dragged)
    target_index = next((i for i, task in enumerate(pending) if task.id == target_id), None)
    if target_index is None:
        pending.append(dragged)
    else:
        pending.insert(target_index, dragged)

    for index, task in enumerate(pending):
        task.priority = index + 1

    db.session.commit()
    return pending


def start_timer(user, selection, task_id: str) -> ProductionTask:
    """Start (or continue) timing a task and mark it in progress."""
    task = get_task(task_id, user, selection)
    _require_open(task)

    timer = task_timer(task)
    timer.start()
    _store_timer(task, timer)
    task.status = ProductionStatus.EN_PROGRESO

    db.session.commit()
    return task


def pause_timer(user, selection, task_id: str) -> ProductionTask:
    task = get_task(task_id, user, selection)
    _require_open(task)

    timer = task_timer(task)
    timer.pause()
    _store_timer(task, timer)

    db.session.commit()
    return task


def resume_timer(user, selection, task_id: str) -> ProductionTask:
    task = get_task(task_id, user, selection)
    _require_open(task)

    timer = task_timer(task)
    timer.resume()
    _store_timer(task, timer)
    task.status = ProductionStatus.EN_PROGRESO

    db.session.commit()
    return task


def complete_task(user, selection, task_id: str, actual_yield, producer_name: str | None = None) -> Batch:
    """
    Finish a task and generate its batch.

    The batch takes the recipe's shelf life and yield unit, the task's unit,
    the producer's name and the timed duration in whole seconds.

    Returns the new Batch.
    """
    task = get_task(task_id, user, selection)
    _require_open(task)

    actual_yield = parse_positive_number(actual_yield, "actual_yield")

    producer_name = (producer_name or "").strip() or user.name
    recipe = recipe_service.get_recipe(task.recipe_id)

    now = utcnow()
    timer = task_timer(task, now)
    duration = timer.elapsed_whole_seconds()
    timer.pause()
    _store_timer(task, timer)
    task.status = ProductionStatus.COMPLETADO

    batch = Batch(
        id=unique_millis_id(Batch, "B", now),
        recipe_id=recipe.id,
        recipe_name=recipe.name,
        production_date=now,
        responsible_user=producer_name,
        shelf_life_days=recipe.shelf_life_days,
        quantity=actual_yield,
        unit=recipe.yield_unit,
        status=BatchStatus.ACTIVO,
        duration_seconds=duration,
        source_task_id=task.id,
        unit_id=task.unit_id,
    )
    db.session.add(batch)
    db.session.commit()
    return batch
