# Overview: Timestamp-based record identifiers (task..., B..., W...).

from datetime import timedelta

from ..extensions import db
from kitchen.time_utils import millis_id, utcnow


def unique_millis_id(model, prefix: str, now=None) -> str:
    """
    Millisecond timestamp id for model, e.g. B1721249501000.

    Bumps the timestamp until the id is free, so two records created in the
    same millisecond never collide.
    """
    now = now or utcnow()
    candidate = millis_id(prefix, now)
    while db.session.get(model, candidate) is not None:
        now = now + timedelta(milliseconds=1)
        candidate = millis_id(prefix, now)
    return candidate
