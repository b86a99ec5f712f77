from __future__ import annotations

from ..extensions import db
from kitchen.time_utils import to_utc_z


class ProductionStatus:
    PENDIENTE = "Pendiente"
    EN_PROGRESO = "En progreso"
    COMPLETADO = "Completado"


PRODUCTION_STATUSES = (ProductionStatus.PENDIENTE, ProductionStatus.EN_PROGRESO, ProductionStatus.COMPLETADO)


class BatchStatus:
    ACTIVO = "Activo"
    CADUCADO = "Caducado"


class ProductionTask(db.Model):
    """
    A planned production run of a recipe in one business unit.

    priority orders the pending tasks of the plan (1 = first).

    TIMER: elapsed production time is reconstructed from
    timer_accumulated_seconds plus (now - timer_started_at) while running,
    so it survives restarts and never needs to tick.
    """
    __tablename__ = "production_tasks"
    __table_args__ = (
        db.Index("ix_production_tasks_unit_status", "unit_id", "status"),
    )

    id = db.Column(db.String(64), primary_key=True)
    recipe_id = db.Column(db.String(64), db.ForeignKey("recipes.id"), nullable=False, index=True)
    recipe_name = db.Column(db.String(255), nullable=False)
    quantity_to_produce = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(16), nullable=False)
    priority = db.Column(db.Integer, nullable=False, default=1)
    status = db.Column(db.String(16), nullable=False, default=ProductionStatus.PENDIENTE)

    assigned_user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    unit_id = db.Column(db.String(64), db.ForeignKey("business_units.id"), nullable=False, index=True)

    timer_started_at = db.Column(db.DateTime(timezone=True), nullable=True)
    timer_accumulated_seconds = db.Column(db.Float, nullable=False, default=0.0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self, elapsed_seconds: float | None = None) -> dict:
        data = {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "recipe_name": self.recipe_name,
            "quantity_to_produce": self.quantity_to_produce,
            "unit": self.unit,
            "priority": self.priority,
            "status": self.status,
            "assigned_user_id": self.assigned_user_id,
            "unit_id": self.unit_id,
            "timer": {
                "is_running": self.timer_started_at is not None,
                "started_at": to_utc_z(self.timer_started_at),
                "accumulated_seconds": self.timer_accumulated_seconds or 0.0,
            },
        }
        if elapsed_seconds is not None:
            data["timer"]["elapsed_seconds"] = elapsed_seconds
        return data


class Batch(db.Model):
    """
    Production lot generated when a production task is completed.

    TRACEABILITY: source_task_id links back to the task (and through it
    the recipe) that produced the lot.
    """
    __tablename__ = "batches"
    __table_args__ = (
        db.Index("ix_batches_unit_date", "unit_id", "production_date"),
    )

    id = db.Column(db.String(64), primary_key=True)
    recipe_id = db.Column(db.String(64), db.ForeignKey("recipes.id"), nullable=False, index=True)
    recipe_name = db.Column(db.String(255), nullable=False)
    production_date = db.Column(db.DateTime(timezone=True), nullable=False, index=True)
    responsible_user = db.Column(db.String(120), nullable=False)
    shelf_life_days = db.Column(db.Integer, nullable=False, default=0)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(16), nullable=False)
    status = db.Column(db.String(16), nullable=False, default=BatchStatus.ACTIVO)
    duration_seconds = db.Column(db.Integer, nullable=False, default=0)
    source_task_id = db.Column(db.String(64), db.ForeignKey("production_tasks.id"), nullable=True, index=True)
    notes = db.Column(db.Text, nullable=True)
    unit_id = db.Column(db.String(64), db.ForeignKey("business_units.id"), nullable=False, index=True)

    source_task = db.relationship("ProductionTask", backref=db.backref("batches", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "recipe_id": self.recipe_id,
            "recipe_name": self.recipe_name,
            "production_date": to_utc_z(self.production_date),
            "responsible_user": self.responsible_user,
            "shelf_life_days": self.shelf_life_days,
            "quantity": self.quantity,
            "unit": self.unit,
            "status": self.status,
            "duration_seconds": self.duration_seconds,
            "source_task_id": self.source_task_id,
            "notes": self.notes,
            "unit_id": self.unit_id,
        }
