# Overview: Service-layer operations for production reports.

from __future__ import annotations

from ..models import Batch
from . import scoping_service


def production_by_recipe(user, selection) -> list[dict]:
    """
    Total produced quantity per recipe name over the session's batches.

    Recipes keep the order in which they first appear (newest batch first).
    Quantities of one recipe are assumed to share its yield unit.
    """
    batches = (
        scoping_service.scoped_query(Batch, user, selection)
        .order_by(Batch.production_date.desc())
        .all()
    )

    totals: dict[str, dict] = {}
    for batch in batches:
        entry = totals.setdefault(
            batch.recipe_name,
            {"name": batch.recipe_name, "quantity": 0.0, "unit": batch.unit, "batch_count": 0},
        )
        entry["quantity"] += batch.quantity
        entry["batch_count"] += 1
    return list(totals.values())
