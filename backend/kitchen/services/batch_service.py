# Overview: Service-layer operations for batches; expiry, notes, traceability and summaries.

from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app

from ..extensions import db
from ..models import Batch, ProductionTask, Recipe
from . import scoping_service
from .errors import NotFoundError
from kitchen.time_utils import current_week_since_sunday, previous_month_range, to_utc_z, utcnow


class ExpiryStatus:
    OK = "ok"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"


SUMMARY_PERIODS = ("this_week", "last_month")


def expiry_date(batch: Batch) -> datetime:
    return batch.production_date + timedelta(days=batch.shelf_life_days or 0)


def expiry_status(batch: Batch, now: datetime | None = None, near_expiry_hours: int | None = None) -> str:
    """
    Classify a batch against its expiry date.

    expired: now is past the expiry date
    near_expiry: less than near_expiry_hours remain
    ok: anything else
    """
    now = now or utcnow()
    if near_expiry_hours is None:
        near_expiry_hours = current_app.config.get("NEAR_EXPIRY_HOURS", 24)

    expires = expiry_date(batch).replace(tzinfo=None)
    if now > expires:
        return ExpiryStatus.EXPIRED
    if expires - now < timedelta(hours=near_expiry_hours):
        return ExpiryStatus.NEAR_EXPIRY
    return ExpiryStatus.OK


def batch_to_dict(batch: Batch, now: datetime | None = None) -> dict:
    data = batch.to_dict()
    data["expiry_date"] = to_utc_z(expiry_date(batch))
    data["expiry_status"] = expiry_status(batch, now)
    return data


def list_batches(user, selection) -> list[Batch]:
    """Scoped batches, newest first."""
    return (
        scoping_service.scoped_query(Batch, user, selection)
        .order_by(Batch.production_date.desc())
        .all()
    )


def get_batch(batch_id: str, user, selection) -> Batch:
    batch = db.session.get(Batch, batch_id)
    if batch is None or not scoping_service.is_visible(batch, user, selection):
        raise NotFoundError("Batch not found")
    return batch


def batch_detail(batch: Batch) -> dict:
    """
    Batch with its traceability chain: the production task it came from
    and the recipe it was made with. Either may be gone.
    """
    data = batch_to_dict(batch)

    task = db.session.get(ProductionTask, batch.source_task_id) if batch.source_task_id else None
    recipe = db.session.get(Recipe, batch.recipe_id)

    data["source_task"] = task.to_dict() if task else None
    data["recipe"] = recipe.to_dict(include_lines=False) if recipe else None
    return data


def set_note(batch_id: str, note: str | None, user, selection) -> Batch:
    """Replace a batch's notes. An empty note clears them."""
    batch = get_batch(batch_id, user, selection)
    note = (note or "").strip()
    batch.notes = note or None
    db.session.commit()
    return batch


def summary_range(period: str, now: datetime | None = None) -> tuple[datetime, datetime]:
    now = now or utcnow()
    if period == "this_week":
        return current_week_since_sunday(now)
    if period == "last_month":
        return previous_month_range(now)
    raise ValueError(f"Invalid period '{period}'. Must be one of: {', '.join(SUMMARY_PERIODS)}")


def weekly_summary(user, selection, period: str = "this_week", now: datetime | None = None) -> dict:
    """Batches produced in period, newest first."""
    start, end = summary_range(period, now)
    batches = (
        scoping_service.scoped_query(Batch, user, selection)
        .filter(Batch.production_date >= start, Batch.production_date <= end)
        .order_by(Batch.production_date.desc())
        .all()
    )
    return {
        "period": period,
        "start": to_utc_z(start),
        "end": to_utc_z(end),
        "batches": [batch_to_dict(batch, now) for batch in batches],
        "count": len(batches),
    }
