# Overview: Service-layer operations for waste records and the weekly waste report.

"""
Waste log and weekly report.

A record must reference a recipe or batch, or carry a description. The
report groups one Monday-start week of the session's scoped records:

    by_type:  {type: {count, quantities: {measure_unit: total}}}
    by_unit:  {unit_id: {count, quantities: {measure_unit: total}}}
    totals:   {measure_unit: total}

Quantities are never summed across different measure units.
"""

from __future__ import annotations

from datetime import datetime

from ..extensions import db
from ..models import Batch, Recipe, Waste, WASTE_TYPES
from . import scoping_service, unit_access_service
from .identifiers import unique_millis_id
from ..validation import parse_positive_number
from kitchen.time_utils import to_utc_z, utcnow, week_range


def _related_name(related_id: str) -> str | None:
    recipe = db.session.get(Recipe, related_id)
    if recipe is not None:
        return recipe.name
    batch = db.session.get(Batch, related_id)
    if batch is not None:
        return f"{batch.recipe_name} (Lote {batch.id})"
    return None


def log_waste(user, data: dict) -> Waste:
    """
    Record waste in a business unit the user can access.

    The record is stamped with the current time and the user's name.
    """
    unit_id = data.get("unit_id")
    waste_type = data.get("type")
    measure_unit = (data.get("unit") or "").strip()
    related_id = (data.get("related_recipe_or_batch_id") or "").strip() or None
    description = (data.get("description") or "").strip() or None

    if not unit_id or not waste_type or not measure_unit:
        raise ValueError("unit_id, type, quantity and unit are required")
    quantity = parse_positive_number(data.get("quantity"), "quantity")
    if not related_id and not description:
        raise ValueError("Select a related recipe or batch, or add a description")
    if waste_type not in WASTE_TYPES:
        raise ValueError(f"Invalid waste type '{waste_type}'")

    unit_access_service.require_unit_access(user, unit_id)

    related_name = None
    if related_id:
        related_name = (data.get("related_recipe_or_batch_name") or "").strip() or _related_name(related_id)
        if related_name is None:
            raise ValueError("Related recipe or batch not found")

    now = utcnow()
    waste = Waste(
        id=unique_millis_id(Waste, "W", now),
        date=now,
        unit_id=unit_id,
        type=waste_type,
        related_recipe_or_batch_id=related_id,
        related_recipe_or_batch_name=related_name,
        description=description,
        quantity=quantity,
        unit=measure_unit,
        responsible_user=user.name,
    )
    db.session.add(waste)
    db.session.commit()
    return waste


def list_waste(user, selection) -> list[Waste]:
    return (
        scoping_service.scoped_query(Waste, user, selection)
        .order_by(Waste.date.desc())
        .all()
    )


def _add(group: dict, key: str, record: Waste) -> None:
    entry = group.setdefault(key, {"count": 0, "quantities": {}})
    entry["count"] += 1
    entry["quantities"][record.unit] = entry["quantities"].get(record.unit, 0) + record.quantity


def summarize(records) -> dict:
    by_type: dict = {}
    by_unit: dict = {}
    totals: dict = {}
    for record in records:
        _add(by_type, record.type, record)
        _add(by_unit, record.unit_id, record)
        totals[record.unit] = totals.get(record.unit, 0) + record.quantity
    return {"by_type": by_type, "by_unit": by_unit, "totals": totals}


def weekly_report(user, selection, week_offset: int = 0, now: datetime | None = None) -> dict:
    """Waste summary for the week week_offset weeks from the current one."""
    start, end = week_range(now or utcnow(), week_offset)
    records = (
        scoping_service.scoped_query(Waste, user, selection)
        .filter(Waste.date >= start, Waste.date <= end)
        .order_by(Waste.date.desc())
        .all()
    )

    report = summarize(records)
    report.update({
        "week_offset": week_offset,
        "start": to_utc_z(start),
        "end": to_utc_z(end),
        "records": [record.to_dict() for record in records],
    })
    return report
