# Overview: Service-layer operations for operational checklists and task templates.

from __future__ import annotations

from ..extensions import db
from ..models import (
    CHECKLIST_STATUSES,
    OperationalTask,
    OperationalTaskTemplate,
    TASK_FREQUENCIES,
    TaskFrequency,
)
from ..permissions import AppModule, Role, validate_role
from . import scoping_service
from .errors import NotFoundError
from .identifiers import unique_millis_id


# Board name -> (role whose tasks it shows, module guarding it)
BOARDS = {
    "produccion": (Role.PRODUCCION, AppModule.CHECKLIST_PRODUCCION),
    "servicio": (Role.SERVICIO, AppModule.CHECKLIST_SERVICIO),
}

ROLE_BOARD_MODULES = {role: module for role, module in BOARDS.values()}


def board_module(board: str) -> str:
    if board not in BOARDS:
        raise NotFoundError("Checklist not found")
    return BOARDS[board][1]


def list_board(board: str, user, selection) -> list[OperationalTask]:
    """Scoped operational tasks of the board's role, in board order."""
    if board not in BOARDS:
        raise NotFoundError("Checklist not found")
    role = BOARDS[board][0]
    return (
        scoping_service.scoped_query(OperationalTask, user, selection)
        .filter(OperationalTask.assigned_role == role)
        .order_by(OperationalTask.position.asc(), OperationalTask.id.asc())
        .all()
    )


def get_task(task_id: str, user, selection) -> OperationalTask:
    task = db.session.get(OperationalTask, task_id)
    if task is None or not scoping_service.is_visible(task, user, selection):
        raise NotFoundError("Operational task not found")
    return task


def module_for_task(task: OperationalTask) -> str | None:
    """Checklist module that guards edits of task, None for roles without a board."""
    return ROLE_BOARD_MODULES.get(task.assigned_role)


def update_status(task: OperationalTask, status: str) -> OperationalTask:
    if status not in CHECKLIST_STATUSES:
        raise ValueError(f"Invalid status '{status}'. Must be one of: {', '.join(CHECKLIST_STATUSES)}")
    task.status = status
    db.session.commit()
    return task


def reorder(board: str, dragged_id: str, target_id: str | None, user, selection) -> list[OperationalTask]:
    """
    Move dragged_id before target_id on a board.

    Unlike the production queue, a target that is not on the board leaves
    the order unchanged.
    """
    tasks = list_board(board, user, selection)
    ids = [task.id for task in tasks]

    if dragged_id == target_id or dragged_id not in ids or target_id not in ids:
        return tasks

    dragged = tasks.pop(ids.index(dragged_id))
    target_index = next(i for i, task in enumerate(tasks) if task.id == target_id)
    tasks.insert(target_index, dragged)

    for index, task in enumerate(tasks):
        task.position = index
    db.session.commit()
    return tasks


def list_templates() -> list[OperationalTaskTemplate]:
    return (
        db.session.query(OperationalTaskTemplate)
        .order_by(OperationalTaskTemplate.created_at.asc(), OperationalTaskTemplate.id.asc())
        .all()
    )


def create_template(data: dict) -> OperationalTaskTemplate:
    name = (data.get("name") or "").strip()
    description = (data.get("description") or "").strip()
    frequency = data.get("frequency") or TaskFrequency.DIARIA
    assigned_role = data.get("assigned_role") or Role.PRODUCCION

    if not name or not description:
        raise ValueError("name and description are required")
    if frequency not in TASK_FREQUENCIES:
        raise ValueError(f"Invalid frequency '{frequency}'")
    if not validate_role(assigned_role):
        raise ValueError(f"Role '{assigned_role}' not found")

    template = OperationalTaskTemplate(
        id=unique_millis_id(OperationalTaskTemplate, "opt"),
        name=name,
        description=description,
        frequency=frequency,
        assigned_role=assigned_role,
    )
    db.session.add(template)
    db.session.commit()
    return template
