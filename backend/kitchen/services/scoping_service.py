"""
Unit Scoping Service: Filtering Unit-Owned Data for the Current Session

WHY: Production tasks, batches, waste records and operational tasks each
belong to one business unit. What a session sees depends on the user and
on the unit they are currently working in.

RULES (in order):
1. No user -> nothing (fail closed)
2. A concrete active unit -> only that unit's items, even when the user
   could access more
3. Global view (or no selection yet):
   - super-admin -> everything
   - otherwise -> items in the user's accessible units

USAGE:
    from kitchen.services.scoping_service import scoped_query

    batches = scoped_query(Batch, g.current_user, g.selection).all()
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import false

from ..extensions import db
from ..models import Batch, OperationalTask, ProductionTask, Waste
from ..scopes import AllUnits, Specific


def scope(items, unit_of, user, selection) -> list:
    """
    Filter an in-memory collection by the session's unit rules.

    unit_of maps an item to its unit id.
    """
    if user is None:
        return []

    if isinstance(selection, Specific):
        return [item for item in items if unit_of(item) == selection.unit_id]

    unit_scope = user.unit_scope
    if isinstance(unit_scope, AllUnits):
        return list(items)
    return [item for item in items if unit_of(item) in unit_scope.unit_ids]


def scope_criterion(model, user, selection):
    """
    SQL equivalent of scope() for models with a unit_id column.

    Returns None when no filtering applies.
    """
    if user is None:
        return false()

    if isinstance(selection, Specific):
        return model.unit_id == selection.unit_id

    unit_scope = user.unit_scope
    if isinstance(unit_scope, AllUnits):
        return None
    if not unit_scope.unit_ids:
        return false()
    return model.unit_id.in_(list(unit_scope.unit_ids))


def scoped_query(model, user, selection):
    """
    Base query over model restricted to what the session may see.

    Usage:
        tasks = scoped_query(ProductionTask, user, selection).order_by(ProductionTask.priority).all()
    """
    query = db.session.query(model)
    criterion = scope_criterion(model, user, selection)
    if criterion is not None:
        query = query.filter(criterion)
    return query


def is_visible(item, user, selection) -> bool:
    """Check a single unit-owned row against the session's scope."""
    return bool(scope([item], lambda row: row.unit_id, user, selection))


@dataclass
class FilteredData:
    tasks: list = field(default_factory=list)
    batches: list = field(default_factory=list)
    waste_records: list = field(default_factory=list)
    operational_tasks: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "batches": [b.to_dict() for b in self.batches],
            "waste_records": [w.to_dict() for w in self.waste_records],
            "operational_tasks": [o.to_dict() for o in self.operational_tasks],
        }


def filtered_data(user, selection) -> FilteredData:
    """All four unit-owned collections, scoped for the session."""
    if user is None:
        return FilteredData()

    return FilteredData(
        tasks=scoped_query(ProductionTask, user, selection).order_by(ProductionTask.priority.asc()).all(),
        batches=scoped_query(Batch, user, selection).order_by(Batch.production_date.desc()).all(),
        waste_records=scoped_query(Waste, user, selection).order_by(Waste.date.desc()).all(),
        operational_tasks=scoped_query(OperationalTask, user, selection).order_by(OperationalTask.position.asc()).all(),
    )
