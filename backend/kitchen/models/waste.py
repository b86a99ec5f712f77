from __future__ import annotations

from ..extensions import db
from kitchen.time_utils import to_utc_z


class WasteType:
    PREPARACION = "Preparación"
    PORCIONADO = "Porcionado"
    CADUCIDAD = "Caducidad"
    SOBREPRODUCCION = "Sobreproducción"
    OTRO = "Otro"


WASTE_TYPES = (
    WasteType.PREPARACION,
    WasteType.PORCIONADO,
    WasteType.CADUCIDAD,
    WasteType.SOBREPRODUCCION,
    WasteType.OTRO,
)


class Waste(db.Model):
    """
    Waste record.

    Either points at the recipe or batch that was wasted
    (related_recipe_or_batch_*) or carries a free-text description.
    """
    __tablename__ = "waste_records"
    __table_args__ = (
        db.Index("ix_waste_records_unit_date", "unit_id", "date"),
    )

    id = db.Column(db.String(64), primary_key=True)
    date = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    unit_id = db.Column(db.String(64), db.ForeignKey("business_units.id"), nullable=False, index=True)
    type = db.Column(db.String(32), nullable=False)
    related_recipe_or_batch_id = db.Column(db.String(64), nullable=True)
    related_recipe_or_batch_name = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(16), nullable=False)
    responsible_user = db.Column(db.String(120), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": to_utc_z(self.date),
            "unit_id": self.unit_id,
            "type": self.type,
            "related_recipe_or_batch_id": self.related_recipe_or_batch_id,
            "related_recipe_or_batch_name": self.related_recipe_or_batch_name,
            "description": self.description,
            "quantity": self.quantity,
            "unit": self.unit,
            "responsible_user": self.responsible_user,
        }
