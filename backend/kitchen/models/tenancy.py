from __future__ import annotations

from ..extensions import db
from kitchen.time_utils import to_utc_z


class UnitKind:
    BRANCH = "branch"
    PRODUCTION = "production"


UNIT_KINDS = (UnitKind.BRANCH, UnitKind.PRODUCTION)


class BusinessUnit(db.Model):
    """
    Business unit (production kitchen or branch).

    The tenant boundary for operational data: production tasks, batches,
    waste records and operational tasks each belong to exactly one unit.

    DESIGN:
    - Units are static reference data identified by a short string id
      (e.g. "prod-central", "polanco")
    - position fixes the canonical order used everywhere units are listed
    """
    __tablename__ = "business_units"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    kind = db.Column(db.String(16), nullable=False, default=UnitKind.BRANCH)  # branch, production
    position = db.Column(db.Integer, nullable=False, default=0, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<BusinessUnit id={self.id!r} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "position": self.position,
            "created_at": to_utc_z(self.created_at),
        }
